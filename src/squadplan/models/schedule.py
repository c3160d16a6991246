from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from squadplan.database import Base


class TrainingSlot(Base):
    __tablename__ = "training_slots"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    date: Mapped[datetime]  # slot start
    duration_minutes: Mapped[int]
    attendee_count: Mapped[int]
    feasibility_score: Mapped[float]
    attendees: Mapped[str] = mapped_column(String(500), default="")  # comma-separated user ids
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
