"""Schedule API routes: compute, list and look up training slots."""

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplan.api.deps import get_team_or_404
from squadplan.database import get_db
from squadplan.models.schedule import TrainingSlot
from squadplan.scheduling.planner import SchedulePlanner
from squadplan.scheduling.types import InvalidDataError
from squadplan.schemas.schedule import (
    ComputedSlotRead,
    ScheduleResultRead,
    TrainingSlotRead,
)

router = APIRouter(prefix="/api/teams/{team_id}/schedule", tags=["schedule"])


@router.get("", response_model=list[TrainingSlotRead])
async def list_schedule(
    team_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[TrainingSlot]:
    """List the team's stored training slots in date order."""
    await get_team_or_404(session, team_id)
    stmt = (
        select(TrainingSlot)
        .where(TrainingSlot.team_id == team_id)
        .order_by(TrainingSlot.date, TrainingSlot.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.post("/compute", response_model=ScheduleResultRead)
async def compute_schedule(
    team_id: int,
    horizon_start: date | None = None,
    horizon_days: int | None = Query(default=None, ge=1, le=28),
    persist: bool = True,
    session: AsyncSession = Depends(get_db),
) -> ScheduleResultRead:
    """Compute training slots for the team's planning horizon.

    `horizon_start` defaults to today (UTC) and `horizon_days` to the configured
    horizon. Infeasible and partially feasible outcomes are returned with
    200; only malformed stored data yields 422.
    """
    await get_team_or_404(session, team_id)
    planner = SchedulePlanner(horizon_days=horizon_days)
    try:
        result = await planner.compute(
            session, team_id, horizon_start=horizon_start, persist=persist
        )
    except InvalidDataError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None

    return ScheduleResultRead(
        team_id=team_id,
        status=result.status,
        explanation=result.explanation,
        slots=[
            ComputedSlotRead(
                date=s.date,
                duration_minutes=s.duration_minutes,
                attendee_count=s.attendee_count,
                feasibility_score=s.feasibility_score,
                attendees=list(s.attendees),
            )
            for s in result.slots
        ],
        persisted=persist,
    )


@router.get("/next", response_model=TrainingSlotRead | None)
async def get_next_slot(
    team_id: int,
    session: AsyncSession = Depends(get_db),
) -> TrainingSlot | None:
    """Earliest stored slot starting now or later, or null if none."""
    await get_team_or_404(session, team_id)
    stmt = (
        select(TrainingSlot)
        .where(
            TrainingSlot.team_id == team_id,
            TrainingSlot.date >= datetime.utcnow(),
        )
        .order_by(TrainingSlot.date, TrainingSlot.id)
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()
