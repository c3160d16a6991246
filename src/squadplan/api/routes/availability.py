"""Availability API routes: recurring weekly windows and absences per team."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplan.api.deps import ensure_member, get_team_or_404
from squadplan.database import get_db
from squadplan.models.availability import Absence, Availability
from squadplan.scheduling.types import Weekday, as_naive_utc
from squadplan.schemas.availability import (
    AbsenceCreate,
    AbsenceRead,
    AvailabilityCreate,
    AvailabilityRead,
)

router = APIRouter(prefix="/api/teams/{team_id}", tags=["availability"])


@router.get("/availability", response_model=list[AvailabilityRead])
async def list_availability(
    team_id: int,
    user_id: int | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[Availability]:
    """List a team's availability windows, optionally for one user."""
    await get_team_or_404(session, team_id)
    stmt = select(Availability).where(Availability.team_id == team_id)
    if user_id is not None:
        stmt = stmt.where(Availability.user_id == user_id)
    result = await session.execute(stmt)
    rows = list(result.scalars().all())
    # Weekday is stored as its name, so order in Python rather than SQL
    rows.sort(key=lambda a: (Weekday(a.weekday).index, a.start_time, a.id))
    return rows


@router.post("/availability", response_model=AvailabilityRead, status_code=201)
async def create_availability(
    team_id: int,
    body: AvailabilityCreate,
    session: AsyncSession = Depends(get_db),
) -> Availability:
    """Create an availability window. Windows are never edited in place."""
    await get_team_or_404(session, team_id)
    await ensure_member(session, team_id, body.user_id)

    row = Availability(
        team_id=team_id,
        user_id=body.user_id,
        weekday=body.weekday.value,
        start_time=body.start_time,
        end_time=body.end_time,
        priority=body.priority,
    )
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


@router.delete("/availability/{availability_id}", status_code=204)
async def delete_availability(
    team_id: int,
    availability_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    stmt = select(Availability).where(
        Availability.id == availability_id,
        Availability.team_id == team_id,
    )
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail="Availability not found")

    await session.delete(row)
    await session.commit()


@router.get("/absences", response_model=list[AbsenceRead])
async def list_absences(
    team_id: int,
    user_id: int | None = None,
    session: AsyncSession = Depends(get_db),
) -> list[Absence]:
    """List a team's absences ordered by start, optionally for one user."""
    await get_team_or_404(session, team_id)
    stmt = select(Absence).where(Absence.team_id == team_id)
    if user_id is not None:
        stmt = stmt.where(Absence.user_id == user_id)
    stmt = stmt.order_by(Absence.start, Absence.id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.post("/absences", response_model=AbsenceRead, status_code=201)
async def create_absence(
    team_id: int,
    body: AbsenceCreate,
    session: AsyncSession = Depends(get_db),
) -> Absence:
    """Record an absence. Stored as naive UTC."""
    await get_team_or_404(session, team_id)
    await ensure_member(session, team_id, body.user_id)

    row = Absence(
        team_id=team_id,
        user_id=body.user_id,
        start=as_naive_utc(body.start),
        end=as_naive_utc(body.end),
        reason=body.reason,
    )
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


@router.delete("/absences/{absence_id}", status_code=204)
async def delete_absence(
    team_id: int,
    absence_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    stmt = select(Absence).where(
        Absence.id == absence_id,
        Absence.team_id == team_id,
    )
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail="Absence not found")

    await session.delete(row)
    await session.commit()
