"""Database queries that gather a scheduling snapshot for one team."""

from datetime import date, datetime, time, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from squadplan.models.availability import Absence, Availability
from squadplan.models.preference import TeamPreference
from squadplan.models.team import TeamMember
from squadplan.scheduling.types import (
    AbsencePeriod,
    AvailabilityWindow,
    ScheduleRequest,
    TeamPreferences,
    Weekday,
)


async def get_team_members(session: AsyncSession, team_id: int) -> frozenset[int]:
    stmt = select(TeamMember.user_id).where(TeamMember.team_id == team_id)
    result = await session.execute(stmt)
    return frozenset(result.scalars().all())


async def get_team_preferences(session: AsyncSession, team_id: int) -> TeamPreferences:
    """Stored preferences for a team, or the defaults if none were saved."""
    stmt = select(TeamPreference).where(TeamPreference.team_id == team_id)
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()
    if row is None:
        return TeamPreferences()
    return TeamPreferences(
        days_per_week=row.days_per_week,
        hours_per_week=row.hours_per_week,
        min_slot_minutes=row.min_slot_minutes,
        max_slot_minutes=row.max_slot_minutes,
    )


async def get_availability_windows(
    session: AsyncSession, team_id: int
) -> tuple[AvailabilityWindow, ...]:
    stmt = (
        select(Availability)
        .where(Availability.team_id == team_id)
        .order_by(Availability.id)
    )
    result = await session.execute(stmt)
    return tuple(
        AvailabilityWindow(
            team_id=a.team_id,
            user_id=a.user_id,
            weekday=Weekday(a.weekday),
            start_minute=a.start_time,
            end_minute=a.end_time,
            priority=a.priority,
        )
        for a in result.scalars().all()
    )


async def get_absences_in_range(
    session: AsyncSession, team_id: int, start: date, end: date
) -> tuple[AbsencePeriod, ...]:
    """Absences overlapping ``[start 00:00, end 00:00)``."""
    range_start = datetime.combine(start, time.min)
    range_end = datetime.combine(end, time.min)
    stmt = (
        select(Absence)
        .where(
            Absence.team_id == team_id,
            Absence.start < range_end,
            Absence.end > range_start,
        )
        .order_by(Absence.start, Absence.id)
    )
    result = await session.execute(stmt)
    return tuple(
        AbsencePeriod(
            team_id=a.team_id,
            user_id=a.user_id,
            start=a.start,
            end=a.end,
            reason=a.reason,
        )
        for a in result.scalars().all()
    )


async def build_schedule_request(
    session: AsyncSession, team_id: int, horizon_start: date, horizon_days: int
) -> ScheduleRequest:
    members = await get_team_members(session, team_id)
    horizon_end = horizon_start + timedelta(days=horizon_days)
    return ScheduleRequest(
        team_id=team_id,
        total_team_members=len(members),
        preferences=await get_team_preferences(session, team_id),
        availabilities=await get_availability_windows(session, team_id),
        absences=await get_absences_in_range(session, team_id, horizon_start, horizon_end),
        horizon_start=horizon_start,
        horizon_days=horizon_days,
        team_members=members,
    )
