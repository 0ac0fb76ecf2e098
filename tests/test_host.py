"""Tests for host session probing and duration resolution.

WHY: Hosts report the sequence duration in different places depending on
version and sequence state. A missed shape silently falls back to 60 s,
so each probe and the fallback itself need coverage.

HOW: Session snapshots are plain dicts shaped like what the panel sends.
"""

import logging
import math

import pytest

from script_subtitler.errors import DurationUnavailableError
from script_subtitler.host import (
    FixedDurationResolver,
    SessionDurationResolver,
    probe_sequence_duration,
    resolve_total_duration,
)


class TestProbeSequenceDuration:
    """Probe order: end, duration, clips, player bounds."""

    def test_sequence_end(self):
        assert probe_sequence_duration({"end": {"seconds": 93.5}}) == 93.5

    def test_end_wins_over_duration(self):
        sequence = {"end": {"seconds": 40}, "duration": {"seconds": 99}}
        assert probe_sequence_duration(sequence) == 40.0

    def test_duration_when_end_is_zero(self):
        sequence = {"end": {"seconds": 0}, "duration": {"seconds": 12.0}}
        assert probe_sequence_duration(sequence) == 12.0

    def test_latest_clip_end(self):
        sequence = {
            "video_tracks": [
                {"clips": [{"end": {"seconds": 10}}, {"end": {"seconds": 25.5}}]},
                {"clips": []},
                {"clips": [{"end": {"seconds": 18}}]},
            ],
        }
        assert probe_sequence_duration(sequence) == 25.5

    def test_player_bounds(self):
        sequence = {"player_bounds": {"width": {"seconds": 75}}}
        assert probe_sequence_duration(sequence) == 75.0

    @pytest.mark.parametrize("sequence", [
        {},
        {"end": None},
        {"end": {"seconds": "40"}},
        {"end": {"seconds": True}},
        {"end": {"seconds": -1}},
        {"duration": {"seconds": math.nan}},
        {"video_tracks": "nope"},
        {"video_tracks": [None, {"clips": [None, {"end": 5}]}]},
        {"player_bounds": []},
    ])
    def test_malformed_shapes_are_skipped(self, sequence):
        assert probe_sequence_duration(sequence) is None


class TestSessionDurationResolver:

    def test_active_sequence(self, session_with_sequence):
        assert SessionDurationResolver(session_with_sequence).resolve() == 40.0

    def test_no_active_sequence(self, session_without_sequence):
        with pytest.raises(DurationUnavailableError, match="make sure your sequence has content"):
            SessionDurationResolver(session_without_sequence).resolve()

    def test_no_session(self):
        with pytest.raises(DurationUnavailableError):
            SessionDurationResolver(None).resolve()

    def test_sequence_without_duration(self):
        resolver = SessionDurationResolver({"active_sequence": {"name": "Empty"}})
        assert resolver.resolve() is None


class TestResolveTotalDuration:
    """Unknown durations fall back to the default."""

    def test_known_duration(self):
        assert resolve_total_duration(FixedDurationResolver(42.0)) == 42.0

    @pytest.mark.parametrize("value", [None, 0.0, -3.0, math.nan, math.inf])
    def test_unknown_duration_uses_default(self, value):
        assert resolve_total_duration(FixedDurationResolver(value), default=60.0) == 60.0

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="script_subtitler.host"):
            resolve_total_duration(FixedDurationResolver(None), default=60.0)
        assert "using default" in caplog.text

    def test_sequence_without_duration_uses_default(self):
        resolver = SessionDurationResolver({"active_sequence": {}})
        assert resolve_total_duration(resolver, default=60.0) == 60.0

    def test_missing_sequence_propagates(self, session_without_sequence):
        with pytest.raises(DurationUnavailableError):
            resolve_total_duration(SessionDurationResolver(session_without_sequence))
