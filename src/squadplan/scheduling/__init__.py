from squadplan.scheduling.engine import compute_schedule
from squadplan.scheduling.types import (
    AbsencePeriod,
    AvailabilityWindow,
    InvalidDataError,
    ScheduleRequest,
    ScheduleResult,
    ScheduleStatus,
    TeamPreferences,
    TrainingSlot,
    Weekday,
)

__all__ = [
    "AbsencePeriod",
    "AvailabilityWindow",
    "InvalidDataError",
    "ScheduleRequest",
    "ScheduleResult",
    "ScheduleStatus",
    "TeamPreferences",
    "TrainingSlot",
    "Weekday",
    "compute_schedule",
]
