"""Script-to-SRT subtitle library.

WHY: Turning a plain script into a timed subtitle track is the only part of
the subtitle workflow with real logic. Keeping it in a small, pure library
lets the CLI, the HTTP service and tests call exactly the same code, with
no host editor or file system involved.

HOW: The single high-level entry point is create_subtitles(raw_text,
total_duration_s, start_offset_s, word_spacing). It runs parse_script() ->
allocate() -> build_cues() -> render_srt() and returns an immutable
SubtitleDocument. The individual stages are exported for callers that
already have lines or word counts.

RULES:
- The library never reads or writes files and never talks to a host.
- Identical inputs produce byte-identical documents.
- Every failure is a SubtitleError subclass (see errors.py).
- Python 3.9 compatible (no slots=True, no match/case, no X | Y unions).
"""

from typing import Optional

from .core import (
    DEFAULT_WORD_SPACING,
    MAX_WORD_SPACING,
    MIN_WORD_SPACING,
    THIN_SPACE,
    allocate,
    apply_word_spacing,
    build_cues,
    clamp_word_spacing,
    count_words,
    generate_srt,
    parse_script,
    parse_time_range,
    parse_time_string,
    render_srt,
    seconds_to_srt_time,
)
from .errors import (
    DocumentEmptyError,
    EmptyDocumentError,
    EmptyInputError,
    InputError,
    NoWordsError,
    SubtitleError,
    ValidationError,
)
from .models import Cue, CueTiming, SubtitleDocument, SubtitleLine, TimingPlan

__version__ = "0.1.0"

__all__ = [
    "create_subtitles",
    "parse_script",
    "allocate",
    "generate_srt",
    "build_cues",
    "render_srt",
    "apply_word_spacing",
    "clamp_word_spacing",
    "count_words",
    "seconds_to_srt_time",
    "parse_time_string",
    "parse_time_range",
    "SubtitleLine",
    "CueTiming",
    "TimingPlan",
    "Cue",
    "SubtitleDocument",
    "SubtitleError",
    "InputError",
    "EmptyInputError",
    "NoWordsError",
    "ValidationError",
    "DocumentEmptyError",
    "EmptyDocumentError",
    "MIN_WORD_SPACING",
    "MAX_WORD_SPACING",
    "DEFAULT_WORD_SPACING",
    "THIN_SPACE",
]


def create_subtitles(
    raw_text: str,
    total_duration_s: float,
    start_offset_s: float = 0.0,
    word_spacing: Optional[float] = DEFAULT_WORD_SPACING,
) -> SubtitleDocument:
    """Build a complete subtitle document from script text.

    WHY: This is the entry point for the application layer. Callers resolve
    the duration and offset (host session, manual range) and decode the
    script file; this function does everything after that.

    HOW: parse_script() -> allocate() -> build_cues() -> render_srt().

    RULES:
    - Raises EmptyInputError / NoWordsError for unusable scripts
    - Raises ValidationError for a non-positive duration or negative offset
    - word_spacing is clamped to [1, 15]; None means 1

    Args:
        raw_text: Decoded script text.
        total_duration_s: Seconds to spread across all lines.
        start_offset_s: Start time of the first cue.
        word_spacing: Spacing factor between words.

    Returns:
        SubtitleDocument with lines, timing plan, cues and SRT content.
    """
    lines = parse_script(raw_text)
    plan = allocate(lines, total_duration_s, start_offset_s)
    cues = build_cues(lines, plan, word_spacing)
    return SubtitleDocument(
        lines=tuple(lines),
        plan=plan,
        cues=cues,
        content=render_srt(cues),
    )
