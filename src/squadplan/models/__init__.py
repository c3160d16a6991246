from squadplan.models.availability import Absence, Availability
from squadplan.models.preference import TeamPreference
from squadplan.models.schedule import TrainingSlot
from squadplan.models.team import Team, TeamMember

__all__ = [
    "Absence",
    "Availability",
    "Team",
    "TeamMember",
    "TeamPreference",
    "TrainingSlot",
]
