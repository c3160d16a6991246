"""Schedule planner: loads a team snapshot, runs the engine, stores the slots."""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from squadplan.config import get_settings
from squadplan.models.schedule import TrainingSlot as TrainingSlotRow
from squadplan.scheduling.context import build_schedule_request
from squadplan.scheduling.engine import compute_schedule
from squadplan.scheduling.types import ScheduleResult

logger = logging.getLogger(__name__)


class SchedulePlanner:
    """Runs one scheduling computation for a team."""

    def __init__(self, horizon_days: int | None = None) -> None:
        self._horizon_days = horizon_days or get_settings().planning_horizon_days

    @property
    def horizon_days(self) -> int:
        return self._horizon_days

    async def compute(
        self,
        session: AsyncSession,
        team_id: int,
        horizon_start: date | None = None,
        persist: bool = True,
    ) -> ScheduleResult:
        """Compute training slots for ``team_id``.

        Reads availability, absences and preferences from the DB, runs the
        engine on that snapshot and, when ``persist`` is set, replaces the
        team's stored slots inside the horizon with the new ones.

        Raises:
            InvalidDataError: If the stored data breaks an engine invariant.
        """
        horizon_start = horizon_start or datetime.utcnow().date()
        request = await build_schedule_request(
            session, team_id, horizon_start, self._horizon_days
        )
        result = compute_schedule(request)
        logger.info(
            "Team %s schedule from %s: %s, %d slot(s), %d min from %d candidate(s)",
            team_id,
            horizon_start,
            result.status.value,
            len(result.slots),
            result.total_minutes,
            result.candidates_considered,
        )

        if persist:
            await self._replace_slots(session, team_id, horizon_start, result)
        return result

    async def _replace_slots(
        self,
        session: AsyncSession,
        team_id: int,
        horizon_start: date,
        result: ScheduleResult,
    ) -> None:
        range_start = datetime.combine(horizon_start, time.min)
        range_end = range_start + timedelta(days=self._horizon_days)
        await session.execute(
            delete(TrainingSlotRow).where(
                TrainingSlotRow.team_id == team_id,
                TrainingSlotRow.date >= range_start,
                TrainingSlotRow.date < range_end,
            )
        )
        for slot in result.slots:
            session.add(
                TrainingSlotRow(
                    team_id=slot.team_id,
                    date=slot.date,
                    duration_minutes=slot.duration_minutes,
                    attendee_count=slot.attendee_count,
                    feasibility_score=slot.feasibility_score,
                    attendees=",".join(str(u) for u in slot.attendees),
                )
            )
        await session.commit()
