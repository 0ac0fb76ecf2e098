"""Host-editor collaborators: sequence duration and subtitle import.

WHY: In automatic timing mode the total duration comes from the host
editor's active sequence. Hosts expose that duration in different places
depending on version and sequence state, so several shapes have to be
probed. That probing is host object-model plumbing and stays here, out of
the pure subtitle core.

HOW: The host (or the panel that talks to it) sends a JSON snapshot of its
session. probe_sequence_duration() tries each known shape in turn and
returns the first positive value. Resolvers wrap a duration source behind
one ``resolve()`` call that returns seconds or None for "unknown", and
resolve_total_duration() substitutes the configured default for unknown.

RULES:
- Probe order: sequence end, sequence duration, latest clip end across
  video tracks, player bounds width
- Malformed or missing shapes are skipped, never raised
- No active sequence at all -> DurationUnavailableError
- Unknown duration -> DEFAULT_DURATION_S (60 s) with a warning
- A zero or negative duration is never handed to the allocator
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Protocol

from script_subtitler.config import DEFAULT_DURATION_S
from script_subtitler.errors import DurationUnavailableError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Snapshot probing
# ---------------------------------------------------------------------------


def _seconds(node: Any) -> Optional[float]:
    """Return ``node["seconds"]`` if it is a positive finite number."""
    if not isinstance(node, Mapping):
        return None
    value = node.get("seconds")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return float(value)


def _from_end(sequence: Mapping[str, Any]) -> Optional[float]:
    return _seconds(sequence.get("end"))


def _from_duration(sequence: Mapping[str, Any]) -> Optional[float]:
    return _seconds(sequence.get("duration"))


def _from_clips(sequence: Mapping[str, Any]) -> Optional[float]:
    tracks = sequence.get("video_tracks")
    if not isinstance(tracks, list):
        return None
    latest = None  # type: Optional[float]
    for track in tracks:
        clips = track.get("clips") if isinstance(track, Mapping) else None
        if not isinstance(clips, list):
            continue
        for clip in clips:
            clip_end = _seconds(clip.get("end")) if isinstance(clip, Mapping) else None
            if clip_end is not None and (latest is None or clip_end > latest):
                latest = clip_end
    return latest


def _from_player_bounds(sequence: Mapping[str, Any]) -> Optional[float]:
    bounds = sequence.get("player_bounds")
    if not isinstance(bounds, Mapping):
        return None
    return _seconds(bounds.get("width"))


DURATION_PROBES: List[Callable[[Mapping[str, Any]], Optional[float]]] = [
    _from_end,
    _from_duration,
    _from_clips,
    _from_player_bounds,
]


def probe_sequence_duration(sequence: Mapping[str, Any]) -> Optional[float]:
    """Find the duration of a host sequence snapshot.

    Args:
        sequence: The ``active_sequence`` part of a session snapshot, e.g.
            ``{"end": {"seconds": 93.5}, "video_tracks": [...]}``.

    Returns:
        Duration in seconds, or None if no probe found a positive value.
    """
    for probe in DURATION_PROBES:
        duration = probe(sequence)
        if duration is not None:
            logger.debug("Sequence duration %.3fs from %s", duration, probe.__name__)
            return duration
    return None


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------


class DurationResolver(Protocol):
    """Anything that can report the total duration for automatic timing."""

    def resolve(self) -> Optional[float]:
        """Return the duration in seconds, or None if it is unknown."""


class SessionDurationResolver:
    """Resolve the duration from a host session snapshot.

    The snapshot is the JSON the host panel sends: a mapping with an
    ``active_sequence`` entry, or without one when nothing is open.
    """

    def __init__(self, session: Optional[Mapping[str, Any]]) -> None:
        self._session = session

    def resolve(self) -> Optional[float]:
        sequence = self._session.get("active_sequence") if self._session else None
        if not isinstance(sequence, Mapping):
            raise DurationUnavailableError(
                "Could not determine video duration. "
                "Please make sure your sequence has content."
            )
        return probe_sequence_duration(sequence)


class FixedDurationResolver:
    """A duration given up front, e.g. ``--duration`` on the command line."""

    def __init__(self, seconds: Optional[float]) -> None:
        self._seconds = seconds

    def resolve(self) -> Optional[float]:
        return self._seconds


def resolve_total_duration(
    resolver: DurationResolver,
    default: float = DEFAULT_DURATION_S,
) -> float:
    """Ask the resolver for a duration, substituting ``default`` when unknown.

    Raises:
        DurationUnavailableError: Propagated from the resolver when the host
            has nothing to measure.
    """
    duration = resolver.resolve()
    if duration is None or not math.isfinite(duration) or duration <= 0:
        logger.warning(
            "Sequence duration unknown (%r); using default of %.1fs", duration, default
        )
        return default
    return duration


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


class SubtitleImporter(Protocol):
    """Imports a written subtitle file into the host as a caption track.

    Implementations raise ImportFailedError when the host rejects the file.
    """

    def import_subtitles(self, path: Path) -> None:
        """Import the subtitle file at ``path``."""
