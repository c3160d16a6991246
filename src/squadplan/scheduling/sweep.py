"""Interval-partition sweep over one date's availability intervals."""

from collections.abc import Iterable

from squadplan.scheduling.types import DatedInterval, Segment

# Ends sort before starts at the same minute so back-to-back windows touch
# without overlapping.
_END = 0
_START = 1


def _active_weight(active: dict[int, list[int]]) -> int:
    # A user counts once, at the highest priority among their open windows.
    return sum(max(priorities) for priorities in active.values())


def sweep(intervals: Iterable[DatedInterval]) -> tuple[Segment, ...]:
    """Partition a date into maximal segments of constant attendee set.

    Returns segments ordered by start. Minutes nobody is free are left out;
    every minute somebody is free lies in exactly one segment.
    """
    events: list[tuple[int, int, int, int]] = []
    for interval in intervals:
        events.append((interval.start, _START, interval.user_id, interval.priority))
        events.append((interval.end, _END, interval.user_id, interval.priority))
    if not events:
        return ()
    events.sort()

    pieces: list[Segment] = []
    active: dict[int, list[int]] = {}
    prev_point = events[0][0]
    for point, kind, user_id, priority in events:
        if point > prev_point and active:
            pieces.append(
                Segment(prev_point, point, frozenset(active), float(_active_weight(active)))
            )
        prev_point = point
        if kind == _START:
            active.setdefault(user_id, []).append(priority)
        else:
            open_priorities = active[user_id]
            open_priorities.remove(priority)
            if not open_priorities:
                del active[user_id]

    return tuple(_merge_adjacent(pieces))


def _merge_adjacent(pieces: list[Segment]) -> list[Segment]:
    """Join touching pieces that share an attendee set.

    The merged weight is the duration-weighted mean of the pieces' weights,
    which equals their common weight when they agree.
    """
    merged: list[Segment] = []
    for piece in pieces:
        last = merged[-1] if merged else None
        if last is not None and last.end == piece.start and last.attendees == piece.attendees:
            weight = (last.weight * last.length + piece.weight * piece.length) / (
                last.length + piece.length
            )
            merged[-1] = Segment(last.start, piece.end, last.attendees, weight)
        else:
            merged.append(piece)
    return merged
