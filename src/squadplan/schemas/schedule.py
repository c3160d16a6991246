from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from squadplan.scheduling.types import ScheduleStatus


class TrainingSlotBase(BaseModel):
    date: datetime
    duration_minutes: int = Field(gt=0)
    attendee_count: int = Field(ge=0)
    feasibility_score: float = Field(ge=0, le=1)
    attendees: list[int] = Field(default_factory=list)


class ComputedSlotRead(TrainingSlotBase):
    pass


class TrainingSlotRead(TrainingSlotBase):
    id: int
    team_id: int
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("attendees", mode="before")
    @classmethod
    def split_attendees(cls, value: object) -> object:
        # Stored as a comma-separated column
        if isinstance(value, str):
            return [int(part) for part in value.split(",") if part]
        return value


class ScheduleResultRead(BaseModel):
    team_id: int
    status: ScheduleStatus
    explanation: str
    slots: list[ComputedSlotRead]
    persisted: bool = False
