from datetime import datetime

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from squadplan.database import Base


class Availability(Base):
    __tablename__ = "availabilities"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    user_id: Mapped[int]
    weekday: Mapped[str] = mapped_column(String(3))  # MON..SUN
    start_time: Mapped[int]  # minutes since midnight
    end_time: Mapped[int]
    priority: Mapped[int] = mapped_column(default=1)  # 1-10
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)


class Absence(Base):
    __tablename__ = "absences"

    id: Mapped[int] = mapped_column(primary_key=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"))
    user_id: Mapped[int]
    start: Mapped[datetime]
    end: Mapped[datetime]
    reason: Mapped[str | None] = mapped_column(String(200), default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
