"""Weekly selection: greedy-by-score with a single repair swap.

Picks at most one candidate per date and at most ``days_per_week`` dates,
favouring the highest feasibility scores. If the chosen slots add up to a
weekly duration far from the team's target, one swap may trade the weakest
slot for a candidate that brings the total closer without giving up much
score.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date

from squadplan.scheduling.types import ScheduleStatus, SlotCandidate

logger = logging.getLogger(__name__)

DURATION_TOLERANCE = 0.20
MAX_SCORE_DROP = 0.10


def rank_key(candidate: SlotCandidate) -> tuple:
    """Sort key: best candidate first, fully deterministic."""
    return (
        -candidate.feasibility,
        candidate.day,
        -candidate.attendee_count,
        -candidate.duration_minutes,
        candidate.day.isoformat(),
        candidate.start_minute,
    )


def _within_tolerance(total: int, target: int) -> bool:
    return abs(total - target) <= target * DURATION_TOLERANCE


def _repair(
    accepted: list[SlotCandidate], ranked: list[SlotCandidate], target: int
) -> list[SlotCandidate]:
    total = sum(c.duration_minutes for c in accepted)
    score = sum(c.feasibility for c in accepted)
    # Lowest score goes; on a tie, the one ranked last.
    weakest = max(accepted, key=rank_key)
    other_dates = {c.day for c in accepted if c is not weakest}
    accepted_ids = {id(c) for c in accepted}

    best: SlotCandidate | None = None
    best_distance = abs(total - target)
    for candidate in ranked:
        if id(candidate) in accepted_ids or candidate.day in other_dates:
            continue
        new_score = score - weakest.feasibility + candidate.feasibility
        if new_score < score * (1 - MAX_SCORE_DROP):
            continue
        new_total = total - weakest.duration_minutes + candidate.duration_minutes
        distance = abs(new_total - target)
        if distance < best_distance:
            best, best_distance = candidate, distance

    if best is None:
        return accepted
    logger.debug(
        "Repair swap: %s@%d (%d min) -> %s@%d (%d min)",
        weakest.day,
        weakest.start_minute,
        weakest.duration_minutes,
        best.day,
        best.start_minute,
        best.duration_minutes,
    )
    return [best if c is weakest else c for c in accepted]


def select(
    candidates_by_date: Mapping[date, Iterable[SlotCandidate]],
    days_per_week: int,
    hours_per_week_minutes: int,
) -> tuple[tuple[SlotCandidate, ...], ScheduleStatus]:
    """Choose the week's training slots.

    Args:
        candidates_by_date: Scored candidates grouped by calendar date.
        days_per_week: Maximum number of slots (one per date).
        hours_per_week_minutes: Soft target for the summed slot duration.

    Returns:
        ``(slots, status)`` with slots in chronological order.
    """
    ranked = sorted(
        (c for candidates in candidates_by_date.values() for c in candidates),
        key=rank_key,
    )
    if not ranked:
        return (), ScheduleStatus.INFEASIBLE

    accepted: list[SlotCandidate] = []
    claimed: set[date] = set()
    for candidate in ranked:
        if len(accepted) >= days_per_week:
            break
        if candidate.day in claimed:
            continue
        accepted.append(candidate)
        claimed.add(candidate.day)

    total = sum(c.duration_minutes for c in accepted)
    if accepted and not _within_tolerance(total, hours_per_week_minutes):
        accepted = _repair(accepted, ranked, hours_per_week_minutes)

    status = (
        ScheduleStatus.FEASIBLE
        if len(accepted) >= days_per_week
        else ScheduleStatus.PARTIALLY_FEASIBLE
    )
    slots = tuple(sorted(accepted, key=lambda c: (c.day, c.start_minute)))
    return slots, status
