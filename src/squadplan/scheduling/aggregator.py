"""Turn recurring weekly availability into per-date interval sets.

Each concrete date in the planning horizon gets its own interval list, so an
absence only removes a user from the dates it actually touches, even when
two dates in the horizon share a weekday.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from squadplan.scheduling.types import (
    MINUTES_PER_DAY,
    AbsencePeriod,
    AvailabilityWindow,
    DatedInterval,
    InvalidDataError,
    Weekday,
    as_naive_utc,
)

logger = logging.getLogger(__name__)

STAGE = "aggregate"


def _check_window(window: AvailabilityWindow) -> None:
    if not 0 <= window.start_minute < window.end_minute <= MINUTES_PER_DAY:
        raise InvalidDataError(
            f"availability for user {window.user_id} on {window.weekday.value} has "
            f"invalid range {window.start_minute}-{window.end_minute}",
            stage=STAGE,
        )
    if not 1 <= window.priority <= 10:
        raise InvalidDataError(
            f"availability for user {window.user_id} on {window.weekday.value} has "
            f"priority {window.priority} outside 1-10",
            stage=STAGE,
        )


def _check_absence(absence: AbsencePeriod) -> None:
    if as_naive_utc(absence.start) >= as_naive_utc(absence.end):
        raise InvalidDataError(
            f"absence for user {absence.user_id} starts at or after its end",
            stage=STAGE,
            day=absence.start.date(),
        )


def absent_users_on(day: date, absences: Iterable[AbsencePeriod]) -> set[int]:
    """Users whose absence intersects ``[day 00:00, day+1 00:00)``."""
    day_start = datetime.combine(day, time.min)
    day_end = day_start + timedelta(days=1)
    return {
        a.user_id
        for a in absences
        if as_naive_utc(a.start) < day_end and as_naive_utc(a.end) > day_start
    }


def aggregate(
    team_members: Iterable[int] | None,
    availabilities: Iterable[AvailabilityWindow],
    absences: Iterable[AbsencePeriod],
    horizon_start: date,
    horizon_days: int,
) -> dict[date, tuple[DatedInterval, ...]]:
    """Build the interval list for every date in the horizon.

    Args:
        team_members: Member ids to keep. ``None`` keeps every user.
        availabilities: Recurring weekly windows.
        absences: Absolute absence periods.
        horizon_start: First calendar date to plan.
        horizon_days: Number of consecutive dates to plan.

    Returns:
        Dict keyed by calendar date (ascending), each value a tuple of
        intervals sorted by start, end, user and priority. Dates nobody can
        make map to an empty tuple.

    Raises:
        InvalidDataError: If a window or absence violates its range invariants,
            or the horizon is empty.
    """
    if horizon_days < 1:
        raise InvalidDataError(
            f"horizon must cover at least one day, got {horizon_days}", stage=STAGE
        )

    members = set(team_members) if team_members is not None else None
    windows = list(availabilities)
    absence_list = list(absences)
    for window in windows:
        _check_window(window)
    for absence in absence_list:
        _check_absence(absence)

    by_weekday: dict[Weekday, list[AvailabilityWindow]] = {}
    for window in windows:
        if members is not None and window.user_id not in members:
            continue
        by_weekday.setdefault(window.weekday, []).append(window)

    result: dict[date, tuple[DatedInterval, ...]] = {}
    for offset in range(horizon_days):
        day = horizon_start + timedelta(days=offset)
        absent = absent_users_on(day, absence_list)
        intervals = [
            DatedInterval(w.user_id, w.start_minute, w.end_minute, w.priority)
            for w in by_weekday.get(Weekday.of(day), [])
            if w.user_id not in absent
        ]
        intervals.sort(key=lambda i: (i.start, i.end, i.user_id, i.priority))
        result[day] = tuple(intervals)
        if absent:
            logger.debug("%s: excluded absent users %s", day, sorted(absent))

    return result
