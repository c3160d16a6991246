"""Scheduling engine: aggregate -> sweep -> candidates -> select.

Pure and synchronous. The same request always yields the same result, so
callers can run one computation per team in parallel without coordination.
"""

import logging
from datetime import date, datetime, time, timedelta

from squadplan.scheduling.aggregator import aggregate
from squadplan.scheduling.candidates import build_candidates
from squadplan.scheduling.optimizer import select
from squadplan.scheduling.sweep import sweep
from squadplan.scheduling.types import (
    ScheduleRequest,
    ScheduleResult,
    ScheduleStatus,
    SlotCandidate,
    TrainingSlot,
)

logger = logging.getLogger(__name__)


def _to_slot(team_id: int, candidate: SlotCandidate) -> TrainingSlot:
    starts_at = datetime.combine(candidate.day, time.min) + timedelta(
        minutes=candidate.start_minute
    )
    return TrainingSlot(
        team_id=team_id,
        date=starts_at,
        duration_minutes=candidate.duration_minutes,
        attendee_count=candidate.attendee_count,
        feasibility_score=candidate.feasibility,
        attendees=candidate.attendees,
    )


def explain(
    request: ScheduleRequest, slots: tuple[TrainingSlot, ...], status: ScheduleStatus
) -> str:
    prefs = request.preferences
    total = sum(s.duration_minutes for s in slots)
    text = (
        f"{len(slots)} of {prefs.days_per_week} requested days filled, "
        f"total {total}/{prefs.hours_per_week_minutes} minutes"
    )
    if status is ScheduleStatus.INFEASIBLE:
        text += (
            f"; no shared window of at least {prefs.min_slot_minutes} minutes "
            f"in the {request.horizon_days}-day horizon"
        )
    return text


def compute_schedule(request: ScheduleRequest) -> ScheduleResult:
    """Compute training slots for one team over its planning horizon.

    Raises:
        InvalidDataError: If any input row breaks its invariants.
    """
    prefs = request.preferences
    intervals_by_date = aggregate(
        request.team_members,
        request.availabilities,
        request.absences,
        request.horizon_start,
        request.horizon_days,
    )

    candidates_by_date: dict[date, tuple[SlotCandidate, ...]] = {}
    for day, intervals in intervals_by_date.items():
        segments = sweep(intervals)
        candidates_by_date[day] = build_candidates(
            day,
            segments,
            prefs.min_slot_minutes,
            prefs.max_slot_minutes,
            request.total_team_members,
        )
        logger.debug(
            "%s: %d intervals, %d segments, %d candidates",
            day,
            len(intervals),
            len(segments),
            len(candidates_by_date[day]),
        )

    chosen, status = select(
        candidates_by_date, prefs.days_per_week, prefs.hours_per_week_minutes
    )
    slots = tuple(_to_slot(request.team_id, c) for c in chosen)
    return ScheduleResult(
        slots=slots,
        status=status,
        explanation=explain(request, slots, status),
        candidates_considered=sum(len(c) for c in candidates_by_date.values()),
    )
