"""Tests for slot candidate building and scoring."""

from datetime import date

import pytest

from squadplan.scheduling.candidates import build_candidates, feasibility_score
from squadplan.scheduling.types import InvalidDataError, Segment

DAY = date(2026, 10, 19)


class TestFeasibilityScore:
    def test_full_attendance_low_priority(self) -> None:
        assert feasibility_score(2, 1.0, 2) == pytest.approx(0.73)

    def test_half_attendance(self) -> None:
        assert feasibility_score(1, 1.0, 2) == pytest.approx(0.38)

    def test_clamped_to_one(self) -> None:
        assert feasibility_score(5, 10.0, 4) == 1.0

    def test_more_attendees_never_lower(self) -> None:
        scores = [feasibility_score(n, 3.0, 8) for n in range(1, 9)]
        assert scores == sorted(scores)


class TestBuildCandidates:
    def test_long_segment_clipped_to_max(self) -> None:
        segments = [Segment(1080, 1320, frozenset({1, 2}), 2.0)]
        (candidate,) = build_candidates(DAY, segments, 90, 180, 2)
        assert candidate.start_minute == 1080
        assert candidate.duration_minutes == 180
        assert candidate.attendees == (1, 2)
        assert candidate.avg_priority == 1.0
        assert candidate.feasibility == pytest.approx(0.73)

    def test_segment_between_bounds_kept_whole(self) -> None:
        segments = [Segment(600, 720, frozenset({1, 2}), 2.0)]
        (candidate,) = build_candidates(DAY, segments, 90, 180, 2)
        assert candidate.duration_minutes == 120

    def test_short_segment_discarded(self) -> None:
        segments = [Segment(1080, 1125, frozenset({1, 2}), 2.0)]
        assert build_candidates(DAY, segments, 90, 180, 2) == ()

    def test_solo_segments_dropped_when_others_free_that_day(self) -> None:
        segments = [
            Segment(480, 600, frozenset({1}), 1.0),
            Segment(1200, 1320, frozenset({2}), 1.0),
        ]
        assert build_candidates(DAY, segments, 90, 180, 2) == ()

    def test_solo_segment_kept_when_only_member_free(self) -> None:
        segments = [Segment(1080, 1320, frozenset({1}), 1.0)]
        (candidate,) = build_candidates(DAY, segments, 90, 180, 2)
        assert candidate.attendee_count == 1
        assert candidate.feasibility == pytest.approx(0.38)

    def test_solo_segment_kept_when_other_member_window_too_short(self) -> None:
        segments = [
            Segment(480, 540, frozenset({2}), 1.0),
            Segment(1080, 1320, frozenset({1}), 1.0),
        ]
        (candidate,) = build_candidates(DAY, segments, 90, 180, 2)
        assert candidate.start_minute == 1080
        assert candidate.attendees == (1,)

    def test_short_shared_segment_does_not_block_solo(self) -> None:
        segments = [
            Segment(960, 1080, frozenset({1}), 1.0),
            Segment(1080, 1140, frozenset({1, 2}), 2.0),
            Segment(1140, 1200, frozenset({1}), 1.0),
        ]
        (candidate,) = build_candidates(DAY, segments, 90, 180, 2)
        assert candidate.start_minute == 960
        assert candidate.duration_minutes == 120

    def test_duration_bounds_hold_for_every_candidate(self) -> None:
        segments = [
            Segment(0, 60, frozenset({1, 2}), 2.0),
            Segment(60, 200, frozenset({1, 2, 3}), 3.0),
            Segment(200, 700, frozenset({2, 3}), 2.0),
        ]
        candidates = build_candidates(DAY, segments, 90, 180, 3)
        assert [c.duration_minutes for c in candidates] == [140, 180]
        assert all(90 <= c.duration_minutes <= 180 for c in candidates)

    def test_zero_members_is_invalid(self) -> None:
        with pytest.raises(InvalidDataError) as exc:
            build_candidates(DAY, [], 90, 180, 0)
        assert exc.value.stage == "candidates"
        assert exc.value.day == DAY
