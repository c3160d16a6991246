"""Value types shared by the scheduling stages.

Everything here is a frozen dataclass: the engine only ever builds new
values from its inputs and never mutates them.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum

MINUTES_PER_DAY = 24 * 60


def as_naive_utc(ts: datetime) -> datetime:
    """Naive UTC form of ``ts``; naive values are taken to be UTC already."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


class Weekday(str, Enum):
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"
    SUN = "SUN"

    @property
    def index(self) -> int:
        """0=Monday, 6=Sunday, same as ``date.weekday()``."""
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return _WEEKDAY_ORDER[day.weekday()]


_WEEKDAY_ORDER = list(Weekday)


class ScheduleStatus(str, Enum):
    FEASIBLE = "Feasible"
    PARTIALLY_FEASIBLE = "PartiallyFeasible"
    INFEASIBLE = "Infeasible"


class InvalidDataError(ValueError):
    """An input row violates an invariant the caller should have enforced.

    Carries the stage that rejected it and, when known, the calendar date
    being processed.
    """

    def __init__(self, message: str, stage: str, day: date | None = None) -> None:
        self.stage = stage
        self.day = day
        where = f"{stage} stage" if day is None else f"{stage} stage, {day.isoformat()}"
        super().__init__(f"{message} ({where})")


@dataclass(frozen=True)
class AvailabilityWindow:
    """A recurring weekly window in which a user is willing to train."""

    team_id: int
    user_id: int
    weekday: Weekday
    start_minute: int
    end_minute: int
    priority: int = 1


@dataclass(frozen=True)
class AbsencePeriod:
    team_id: int
    user_id: int
    start: datetime
    end: datetime
    reason: str | None = None


@dataclass(frozen=True)
class TeamPreferences:
    days_per_week: int = 3
    hours_per_week: int = 6
    min_slot_minutes: int = 90
    max_slot_minutes: int = 180

    @property
    def hours_per_week_minutes(self) -> int:
        return self.hours_per_week * 60


@dataclass(frozen=True)
class DatedInterval:
    """One user's availability on a concrete calendar date."""

    user_id: int
    start: int
    end: int
    priority: int


@dataclass(frozen=True)
class Segment:
    """Maximal sub-interval of a date over which the attendee set is constant."""

    start: int
    end: int
    attendees: frozenset[int]
    weight: float

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class SlotCandidate:
    day: date
    start_minute: int
    duration_minutes: int
    attendees: tuple[int, ...]
    avg_priority: float
    feasibility: float

    @property
    def attendee_count(self) -> int:
        return len(self.attendees)


@dataclass(frozen=True)
class TrainingSlot:
    team_id: int
    date: datetime
    duration_minutes: int
    attendee_count: int
    feasibility_score: float
    attendees: tuple[int, ...] = ()


@dataclass(frozen=True)
class ScheduleRequest:
    team_id: int
    total_team_members: int
    preferences: TeamPreferences
    availabilities: tuple[AvailabilityWindow, ...]
    absences: tuple[AbsencePeriod, ...]
    horizon_start: date
    horizon_days: int = 7
    team_members: frozenset[int] | None = None


@dataclass(frozen=True)
class ScheduleResult:
    slots: tuple[TrainingSlot, ...]
    status: ScheduleStatus
    explanation: str
    candidates_considered: int = 0

    @property
    def total_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.slots)
