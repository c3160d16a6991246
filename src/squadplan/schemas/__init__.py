from squadplan.schemas.availability import (
    AbsenceCreate,
    AbsenceRead,
    AvailabilityCreate,
    AvailabilityRead,
)
from squadplan.schemas.preference import (
    TeamPreferenceRead,
    TeamPreferenceUpdate,
)
from squadplan.schemas.schedule import (
    ComputedSlotRead,
    ScheduleResultRead,
    TrainingSlotRead,
)
from squadplan.schemas.system import StatusResponse

__all__ = [
    "AbsenceCreate",
    "AbsenceRead",
    "AvailabilityCreate",
    "AvailabilityRead",
    "ComputedSlotRead",
    "ScheduleResultRead",
    "StatusResponse",
    "TeamPreferenceRead",
    "TeamPreferenceUpdate",
    "TrainingSlotRead",
]
