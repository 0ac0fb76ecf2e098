"""Data models for script-driven subtitle generation.

WHY: Each stage of the pipeline (parse, allocate, encode) hands a
well-defined value to the next one. Frozen dataclasses make those hand-offs
explicit and guarantee that no stage mutates what an earlier one produced.

HOW: SubtitleLine is the parser's output, CueTiming/TimingPlan the
allocator's, Cue/SubtitleDocument the encoder's. Times are float seconds
until the encoder formats them.

RULES:
- All models are immutable (frozen=True)
- TimingPlan has exactly one CueTiming per SubtitleLine, in the same order
- Cue.index is 1-based (SRT numbering); SubtitleLine.index is 0-based
- Python 3.9 compatible (no slots=True, no X | Y unions)
"""

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class SubtitleLine:
    """One non-blank script line.

    Attributes:
        index: Position among the surviving (non-blank) lines, 0-based.
        text: The line text, trimmed of surrounding whitespace.
        word_count: Number of whitespace-separated tokens in ``text``.
    """
    index: int
    text: str
    word_count: int


@dataclass(frozen=True)
class CueTiming:
    """Start and end of one cue, in seconds."""
    start_s: float
    end_s: float

    @property
    def duration_s(self) -> float:
        return self.end_s - self.start_s


@dataclass(frozen=True)
class TimingPlan:
    """Ordered cue timings, one per subtitle line.

    Cues are contiguous: ``timings[i].end_s == timings[i + 1].start_s``
    for every i, with the very same float value.
    """
    timings: Tuple[CueTiming, ...]

    def __len__(self) -> int:
        return len(self.timings)

    def __iter__(self) -> Iterator[CueTiming]:
        return iter(self.timings)

    def __getitem__(self, i: int) -> CueTiming:
        return self.timings[i]

    @property
    def start_s(self) -> float:
        return self.timings[0].start_s

    @property
    def end_s(self) -> float:
        return self.timings[-1].end_s

    @property
    def total_duration_s(self) -> float:
        return sum(t.duration_s for t in self.timings)


@dataclass(frozen=True)
class Cue:
    """One rendered SRT cue block.

    Attributes:
        index: 1-based cue number.
        start: Formatted start timestamp (``HH:MM:SS,mmm``).
        end: Formatted end timestamp.
        text: Line text after the word spacing transform.
    """
    index: int
    start: str
    end: str
    text: str

    def render(self) -> str:
        return "{}\n{} --> {}\n{}\n\n".format(self.index, self.start, self.end, self.text)


@dataclass(frozen=True)
class SubtitleDocument:
    """The finished subtitle track.

    ``content`` is the complete SRT text, ready to be written as UTF-8 and
    handed to an importer. The lines and plan it was built from are kept
    for reporting.
    """
    lines: Tuple[SubtitleLine, ...]
    plan: TimingPlan
    cues: Tuple[Cue, ...]
    content: str

    @property
    def cue_count(self) -> int:
        return len(self.cues)
