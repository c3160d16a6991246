"""Clip overlap segments to admissible slot lengths and score them."""

from collections.abc import Iterable
from datetime import date

from squadplan.scheduling.types import InvalidDataError, Segment, SlotCandidate

STAGE = "candidates"

# Attendance coverage dominates; priority fit breaks near-ties.
ATTENDANCE_WEIGHT = 0.7
PRIORITY_WEIGHT = 0.3
MAX_PRIORITY = 10
SCORE_PRECISION = 4
MIN_SHARED_ATTENDEES = 2


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def feasibility_score(attendee_count: int, avg_priority: float, total_team_members: int) -> float:
    """Blend attendance coverage with how strongly attendees prefer the time."""
    coverage = attendee_count / total_team_members
    score = coverage * ATTENDANCE_WEIGHT + (avg_priority / MAX_PRIORITY) * PRIORITY_WEIGHT
    return round(_clamp01(score), SCORE_PRECISION)


def build_candidates(
    day: date,
    segments: Iterable[Segment],
    min_slot_minutes: int,
    max_slot_minutes: int,
    total_team_members: int,
) -> tuple[SlotCandidate, ...]:
    """One candidate per segment long enough to host a slot.

    The slot starts at the segment start and lasts ``min(length, max)``.
    Segments shorter than ``min_slot_minutes`` produce nothing, and so do
    single-attendee segments on a date where two or more members have a
    segment of at least ``min_slot_minutes``.
    """
    if total_team_members < 1:
        raise InvalidDataError(
            f"team must have at least one member, got {total_team_members}",
            stage=STAGE,
            day=day,
        )
    if not 0 < min_slot_minutes <= max_slot_minutes:
        raise InvalidDataError(
            f"slot bounds {min_slot_minutes}-{max_slot_minutes} are not a valid range",
            stage=STAGE,
            day=day,
        )

    long_enough = [s for s in segments if s.length >= min_slot_minutes]
    available = set().union(*(s.attendees for s in long_enough))
    # A slot needs a shared window unless only one member can host one that day.
    required = min(MIN_SHARED_ATTENDEES, len(available))

    candidates = []
    for segment in long_enough:
        if len(segment.attendees) < required:
            continue
        count = len(segment.attendees)
        avg_priority = segment.weight / count
        candidates.append(
            SlotCandidate(
                day=day,
                start_minute=segment.start,
                duration_minutes=min(segment.length, max_slot_minutes),
                attendees=tuple(sorted(segment.attendees)),
                avg_priority=avg_priority,
                feasibility=feasibility_score(count, avg_priority, total_team_members),
            )
        )
    return tuple(candidates)
