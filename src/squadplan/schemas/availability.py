from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from squadplan.scheduling.types import Weekday


class AvailabilityCreate(BaseModel):
    user_id: int
    weekday: Weekday
    start_time: int = Field(ge=0, le=1440)  # minutes since midnight
    end_time: int = Field(ge=0, le=1440)
    priority: int = Field(default=1, ge=1, le=10)

    @model_validator(mode="after")
    def check_range(self) -> "AvailabilityCreate":
        if self.end_time <= self.start_time:
            raise ValueError("start_time must be before end_time")
        return self


class AvailabilityRead(AvailabilityCreate):
    id: int
    team_id: int

    model_config = {"from_attributes": True}


class AbsenceCreate(BaseModel):
    user_id: int
    start: datetime
    end: datetime
    reason: str | None = Field(default=None, max_length=200)

    @model_validator(mode="after")
    def check_range(self) -> "AbsenceCreate":
        if self.end <= self.start:
            raise ValueError("start must be before end")
        return self


class AbsenceRead(AbsenceCreate):
    id: int
    team_id: int

    model_config = {"from_attributes": True}
