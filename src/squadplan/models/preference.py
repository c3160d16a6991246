from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from squadplan.database import Base


class TeamPreference(Base):
    __tablename__ = "team_preferences"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), unique=True)
    days_per_week: Mapped[int] = mapped_column(default=3)
    hours_per_week: Mapped[int] = mapped_column(default=6)
    min_slot_minutes: Mapped[int] = mapped_column(default=90)
    max_slot_minutes: Mapped[int] = mapped_column(default=180)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
