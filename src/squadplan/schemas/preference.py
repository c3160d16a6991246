from pydantic import BaseModel, Field, model_validator


class TeamPreferenceBase(BaseModel):
    days_per_week: int = Field(default=3, ge=1, le=7)
    hours_per_week: int = Field(default=6, ge=1)
    min_slot_minutes: int = Field(default=90, ge=30, le=1440)
    max_slot_minutes: int = Field(default=180, ge=30, le=1440)

    @model_validator(mode="after")
    def check_slot_bounds(self) -> "TeamPreferenceBase":
        if self.max_slot_minutes < self.min_slot_minutes:
            raise ValueError("max_slot_minutes must be >= min_slot_minutes")
        return self


class TeamPreferenceUpdate(TeamPreferenceBase):
    pass


class TeamPreferenceRead(TeamPreferenceBase):
    team_id: int

    model_config = {"from_attributes": True}
