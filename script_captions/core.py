"""Core subtitle logic: script parsing, timing allocation, and SRT output.

WHY: A script has no timing information of its own. This module turns plain
text plus a known total duration into a finished SRT track by giving every
line screen time in proportion to how many words it has. Everything here is
pure and deterministic; file and host access happen elsewhere.

HOW: The pipeline has three stages:
  1. parse_script(): normalizes line endings, trims each record and keeps
     the non-blank lines in order, with their word counts.
  2. allocate(): splits the total duration proportionally to word counts
     and lays cues end to end starting at the offset.
  3. build_cues() / render_srt(): formats timestamps, applies the word
     spacing transform and assembles the SRT cue blocks.
parse_time_string() / parse_time_range() handle manual ``HH:MM:SS`` input.

RULES:
- No I/O, no global state. Same inputs always give byte-identical output.
- Cue times are accumulated sequentially: end of cue i IS start of cue i+1.
- Timestamps are rounded to the millisecond once, before decomposition.
- No minimum cue duration is enforced.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from .errors import DocumentEmptyError, EmptyInputError, NoWordsError, ValidationError
from .models import Cue, CueTiming, SubtitleLine, TimingPlan

MIN_WORD_SPACING = 1.0
MAX_WORD_SPACING = 15.0
DEFAULT_WORD_SPACING = MIN_WORD_SPACING

THIN_SPACE = "\u2009"
BOM = "\ufeff"

# =============================================================================
# Text Utilities
# =============================================================================

WHITESPACE_RUN_RE = re.compile(r"\s+")
TIME_RE = re.compile(r"(\d{1,2}):(\d{1,2}):(\d{1,2})(?:[.,](\d{1,3}))?", re.ASCII)


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def trim(text: str) -> str:
    """Strip surrounding whitespace, byte-order marks and non-breaking spaces.

    str.strip() covers NBSP but not the BOM, so the two strips alternate
    until neither removes anything.
    """
    stripped = text.strip().strip(BOM)
    while stripped != text:
        text = stripped
        stripped = text.strip().strip(BOM)
    return stripped


def count_words(text: str) -> int:
    """Number of non-empty whitespace-separated tokens."""
    return len(text.split())


# =============================================================================
# Script Parsing
# =============================================================================

def parse_script(raw_text: str) -> List[SubtitleLine]:
    """Parse raw script text into ordered subtitle lines.

    WHY: Scripts come from arbitrary editors: Windows or old Mac line
    endings, a leading BOM, stray blank lines and indentation. Each
    remaining non-blank line becomes exactly one cue.

    HOW: Normalize line endings, split on LF, trim every record, drop the
    empty ones and count the words of the rest.

    RULES:
    - Relative order of the surviving lines is preserved
    - SubtitleLine.index numbers the surviving lines from 0
    - Raises EmptyInputError when nothing survives
    - Raises NoWordsError when no surviving line has a word

    Args:
        raw_text: Already-decoded script text.

    Returns:
        Non-empty list of SubtitleLine objects.
    """
    lines = []  # type: List[SubtitleLine]
    for record in normalize_line_endings(raw_text).split("\n"):
        text = trim(record)
        if not text:
            continue
        lines.append(SubtitleLine(index=len(lines), text=text, word_count=count_words(text)))

    if not lines:
        raise EmptyInputError()
    if all(line.word_count == 0 for line in lines):
        raise NoWordsError()
    return lines


# =============================================================================
# Timing Allocation
# =============================================================================

def proportional_durations(word_counts: Sequence[int], total_duration_s: float) -> List[float]:
    """Split a total duration in proportion to word counts.

    Raises:
        ValidationError: If any word count is negative.
        NoWordsError: If the word counts sum to zero.
    """
    if any(count < 0 for count in word_counts):
        raise ValidationError("Word counts must not be negative.")
    total_words = sum(word_counts)
    if total_words == 0:
        raise NoWordsError()
    return [(count / total_words) * total_duration_s for count in word_counts]


def allocate(
    lines: Sequence[SubtitleLine],
    total_duration_s: float,
    start_offset_s: float = 0.0,
) -> TimingPlan:
    """Compute contiguous cue timings for the given lines.

    WHY: Without per-line timing, the best available estimate of how long a
    line stays on screen is its share of the script's words.

    HOW: Each line gets ``word_count / total_words * total_duration_s``
    seconds. Cues are then laid out with a running cursor that starts at
    the offset: start = cursor, end = cursor + duration, cursor = end.

    RULES:
    - total_duration_s must be finite and positive
    - start_offset_s must be finite and not negative
    - The plan's first start equals the offset exactly
    - The plan's last end equals offset + total within float tolerance;
      rounding error accumulates along the sequence and is not redistributed
    - Lines may be built outside the parser, so zero total words is
      checked here too (NoWordsError)

    Args:
        lines: Ordered subtitle lines.
        total_duration_s: Time to distribute, in seconds.
        start_offset_s: Start time of the first cue, in seconds.

    Returns:
        TimingPlan with one CueTiming per line.
    """
    if not math.isfinite(total_duration_s) or total_duration_s <= 0:
        raise ValidationError(
            "Total duration must be a positive number of seconds, got {!r}.".format(total_duration_s)
        )
    if not math.isfinite(start_offset_s) or start_offset_s < 0:
        raise ValidationError(
            "Start offset must not be negative, got {!r}.".format(start_offset_s)
        )

    durations = proportional_durations([line.word_count for line in lines], total_duration_s)

    timings = []  # type: List[CueTiming]
    cursor = float(start_offset_s)
    for duration in durations:
        end = cursor + duration
        timings.append(CueTiming(start_s=cursor, end_s=end))
        cursor = end

    return TimingPlan(timings=tuple(timings))


# =============================================================================
# Word Spacing
# =============================================================================

def clamp_word_spacing(value: Optional[float]) -> float:
    """Clamp a word spacing factor to [1, 15].

    Missing, NaN, zero, negative and sub-1 values all fall back to 1.
    """
    if value is None:
        return DEFAULT_WORD_SPACING
    value = float(value)
    if math.isnan(value) or value < MIN_WORD_SPACING:
        return DEFAULT_WORD_SPACING
    return min(value, MAX_WORD_SPACING)


def spacing_separator(word_spacing: float) -> str:
    """Build the separator for a (clamped) spacing factor.

    ``floor(factor)`` regular spaces, plus one thin space when the factor
    has a fractional part. 2.5 gives two spaces and a thin space.
    """
    whole = math.floor(word_spacing)
    separator = " " * whole
    if word_spacing - whole > 0:
        separator += THIN_SPACE
    return separator


def apply_word_spacing(text: str, word_spacing: Optional[float] = DEFAULT_WORD_SPACING) -> str:
    """Replace every whitespace run in ``text`` with the spacing separator."""
    separator = spacing_separator(clamp_word_spacing(word_spacing))
    return WHITESPACE_RUN_RE.sub(lambda _: separator, text)


# =============================================================================
# SRT Output
# =============================================================================

def _round_millis(seconds: float) -> int:
    # Half-up on the shortest decimal repr, so 59.9995 rounds the way it reads.
    millis = Decimal(repr(float(seconds))).scaleb(3)
    return int(millis.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def seconds_to_srt_time(seconds: float) -> str:
    """Convert seconds to SRT timestamp format: HH:MM:SS,mmm

    The value is rounded to whole milliseconds first and only then split
    into fields, so a carry (59.9995 -> 00:01:00,000) propagates correctly.

    Raises:
        ValueError: If ``seconds`` is negative or not finite.
    """
    if not math.isfinite(seconds) or seconds < 0:
        raise ValueError("Cannot format {!r} as an SRT timestamp.".format(seconds))

    total_ms = _round_millis(seconds)
    millis = total_ms % 1000
    total_secs = total_ms // 1000
    secs = total_secs % 60
    total_mins = total_secs // 60
    minutes = total_mins % 60
    hours = total_mins // 60
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def build_cues(
    lines: Sequence[SubtitleLine],
    plan: TimingPlan,
    word_spacing: Optional[float] = DEFAULT_WORD_SPACING,
) -> Tuple[Cue, ...]:
    """Pair lines with their timings and format them as cues.

    Raises:
        ValueError: If the plan does not have one timing per line.
    """
    if len(lines) != len(plan):
        raise ValueError(
            "Timing plan has {} cues for {} lines.".format(len(plan), len(lines))
        )

    factor = clamp_word_spacing(word_spacing)
    return tuple(
        Cue(
            index=i,
            start=seconds_to_srt_time(timing.start_s),
            end=seconds_to_srt_time(timing.end_s),
            text=apply_word_spacing(line.text, factor),
        )
        for i, (line, timing) in enumerate(zip(lines, plan), 1)
    )


def render_srt(cues: Sequence[Cue]) -> str:
    """Join cue blocks into the SRT document text.

    Raises:
        DocumentEmptyError: If there is nothing to write.
    """
    content = "".join(cue.render() for cue in cues)
    if not content:
        raise DocumentEmptyError()
    return content


def generate_srt(
    lines: Sequence[SubtitleLine],
    plan: TimingPlan,
    word_spacing: Optional[float] = DEFAULT_WORD_SPACING,
) -> str:
    """Generate SRT content from timed lines.

    HOW: For each line, in order: the 1-based index, ``start --> end``, the
    spaced text and a blank line, separated by LF.

    Args:
        lines: Ordered subtitle lines.
        plan: Timing plan from allocate() for the same lines.
        word_spacing: Spacing factor, clamped to [1, 15].

    Returns:
        Complete SRT file content as a string.
    """
    return render_srt(build_cues(lines, plan, word_spacing))


# =============================================================================
# Manual Time Strings
# =============================================================================

def parse_time_string(text: Optional[str]) -> Optional[float]:
    """Parse ``H:MM:SS`` / ``HH:MM:SS`` with an optional ``.mmm`` or ``,mmm``.

    The suffix is a count of milliseconds (1-3 digits), so ``,5`` is 5 ms
    and ``,500`` is half a second.

    Returns:
        Seconds as a float, or None if the text is empty, does not match,
        or has minutes/seconds of 60 or more.
    """
    if not text:
        return None
    match = TIME_RE.fullmatch(text.strip())
    if match is None:
        return None

    hours, minutes, secs = (int(g) for g in match.group(1, 2, 3))
    if minutes >= 60 or secs >= 60:
        return None

    fraction = match.group(4)
    frac_s = int(fraction) / 1000 if fraction else 0.0
    return hours * 3600 + minutes * 60 + secs + frac_s


def parse_time_range(start_text: Optional[str], end_text: Optional[str]) -> Tuple[float, float]:
    """Parse and validate a manual start/end time pair.

    Raises:
        ValidationError: If either time is invalid or end is not after start.
    """
    start = parse_time_string(start_text)
    end = parse_time_string(end_text)
    if start is None or end is None:
        raise ValidationError("Invalid start or end time format. Please use HH:MM:SS.")
    if end <= start:
        raise ValidationError("End time must be after start time.")
    return start, end
