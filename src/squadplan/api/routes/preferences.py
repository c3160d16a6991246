"""Team preference routes: the weekly cadence the planner aims for."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplan.api.deps import get_team_or_404
from squadplan.database import get_db
from squadplan.models.preference import TeamPreference
from squadplan.schemas.preference import TeamPreferenceRead, TeamPreferenceUpdate

router = APIRouter(prefix="/api/teams/{team_id}/preferences", tags=["preferences"])


@router.get("", response_model=TeamPreferenceRead)
async def get_preferences(
    team_id: int,
    session: AsyncSession = Depends(get_db),
) -> TeamPreference | TeamPreferenceRead:
    """Get the team's preferences, falling back to defaults if none are stored."""
    await get_team_or_404(session, team_id)
    stmt = select(TeamPreference).where(TeamPreference.team_id == team_id)
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()
    if row is None:
        return TeamPreferenceRead(team_id=team_id)
    return row


@router.put("", response_model=TeamPreferenceRead)
async def upsert_preferences(
    team_id: int,
    body: TeamPreferenceUpdate,
    session: AsyncSession = Depends(get_db),
) -> TeamPreference:
    """Create or replace the team's preferences."""
    await get_team_or_404(session, team_id)
    stmt = select(TeamPreference).where(TeamPreference.team_id == team_id)
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()
    if row is None:
        row = TeamPreference(team_id=team_id)
        session.add(row)

    row.days_per_week = body.days_per_week
    row.hours_per_week = body.hours_per_week
    row.min_slot_minutes = body.min_slot_minutes
    row.max_slot_minutes = body.max_slot_minutes
    await session.commit()
    await session.refresh(row)
    return row
