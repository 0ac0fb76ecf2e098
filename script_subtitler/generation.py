"""The invoking layer: options -> timing -> subtitle document -> file.

WHY: The CLI, the HTTP service and any host panel all need the same
sequence of steps around the pure core: pick the timing source, build the
document, write it under a name that cannot collide with an earlier import,
and optionally import it. Keeping that sequence in one place means every
surface reports the same errors in the same order.

HOW: GenerationOptions carries the recognized options (wordSpacing,
timingMode, startTime, endTime). resolve_timing() turns them into a total
duration and start offset. generate() calls script_captions.create_subtitles().
run_generation() adds the unique file write and the optional import.

RULES:
- Manual mode: offset = start, duration = end - start (ValidationError if
  either time is malformed or end <= start)
- Auto mode: duration from the resolver (60 s default when unknown), offset 0
- Nothing is written unless the whole document was generated
- File names embed a nanosecond timestamp and never overwrite an existing file
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from script_captions import SubtitleDocument, ValidationError, create_subtitles, parse_time_range
from script_subtitler.config import (
    DEFAULT_TIMING_MODE,
    DEFAULT_WORD_SPACING,
    FILE_PREFIX,
    TimingMode,
)
from script_subtitler.errors import DurationUnavailableError, ImportFailedError
from script_subtitler.host import DurationResolver, SubtitleImporter, resolve_total_duration

logger = logging.getLogger(__name__)


@dataclass
class GenerationOptions:
    """User-facing options for one generation run.

    Attributes:
        word_spacing: Spacing factor, clamped to [1, 15] by the core.
        timing_mode: AUTO (host duration) or MANUAL (start/end strings).
        start_time: Manual start, ``HH:MM:SS[,mmm]``.
        end_time: Manual end, ``HH:MM:SS[,mmm]``.
    """

    word_spacing: Optional[float] = DEFAULT_WORD_SPACING
    timing_mode: TimingMode = DEFAULT_TIMING_MODE
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> GenerationOptions:
        """Build options from panel-style keys (camelCase or snake_case).

        Raises:
            ValidationError: For an unknown timing mode or non-numeric spacing.
        """

        def pick(*names: str) -> Any:
            for name in names:
                if options.get(name) is not None:
                    return options[name]
            return None

        spacing = pick("wordSpacing", "word_spacing")
        mode = pick("timingMode", "timing_mode")

        try:
            word_spacing = float(spacing) if spacing is not None else DEFAULT_WORD_SPACING
        except (TypeError, ValueError):
            raise ValidationError("Word spacing must be a number, got {!r}.".format(spacing))

        return cls(
            word_spacing=word_spacing,
            timing_mode=parse_timing_mode(mode) if mode is not None else DEFAULT_TIMING_MODE,
            start_time=pick("startTime", "start_time"),
            end_time=pick("endTime", "end_time"),
        )


@dataclass
class GenerationResult:
    """Outcome of a successful generation.

    ``path`` is None until the document has been saved.
    """

    document: SubtitleDocument
    total_duration_s: float
    start_offset_s: float
    path: Optional[Path] = None


def parse_timing_mode(value: Any) -> TimingMode:
    """Parse ``auto`` / ``manual`` (case-insensitive)."""
    try:
        return TimingMode(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            "Unknown timing mode '{}'. Available: {}".format(
                value, ", ".join(m.value for m in TimingMode)
            )
        )


def resolve_timing(
    options: GenerationOptions,
    resolver: Optional[DurationResolver] = None,
) -> Tuple[float, float]:
    """Work out the total duration and start offset for a run.

    Returns:
        ``(total_duration_s, start_offset_s)``.

    Raises:
        ValidationError: Manual range malformed or inverted.
        DurationUnavailableError: Auto mode without a usable host session.
    """
    if options.timing_mode == TimingMode.MANUAL:
        start, end = parse_time_range(options.start_time, options.end_time)
        return end - start, start

    if resolver is None:
        raise DurationUnavailableError(
            "Automatic timing needs a sequence duration. "
            "Provide a host session or switch to manual timing."
        )
    return resolve_total_duration(resolver), 0.0


def generate(
    script_text: str,
    options: GenerationOptions,
    resolver: Optional[DurationResolver] = None,
) -> GenerationResult:
    """Resolve timing and build the subtitle document. Writes nothing."""
    total_duration_s, start_offset_s = resolve_timing(options, resolver)
    document = create_subtitles(
        script_text,
        total_duration_s=total_duration_s,
        start_offset_s=start_offset_s,
        word_spacing=options.word_spacing,
    )
    return GenerationResult(
        document=document,
        total_duration_s=total_duration_s,
        start_offset_s=start_offset_s,
    )


def unique_output_path(output_dir: Path, prefix: str = FILE_PREFIX) -> Path:
    """Pick a fresh ``{prefix}_{timestamp}.srt`` path in ``output_dir``.

    The host keeps a reference to every subtitle file it imported, so a
    new run must never reuse an old name. A numeric suffix is added in the
    unlikely case the timestamped name is taken.
    """
    stamp = time.time_ns()
    candidate = output_dir / "{}_{}.srt".format(prefix, stamp)
    counter = 2
    while candidate.exists():
        candidate = output_dir / "{}_{}-{}.srt".format(prefix, stamp, counter)
        counter += 1
    return candidate


def save_document(
    document: SubtitleDocument,
    output_dir: Path,
    prefix: str = FILE_PREFIX,
) -> Path:
    """Write the document as UTF-8 under a unique name and return the path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = unique_output_path(output_dir, prefix)
    # "x" refuses to clobber a file created since the name was chosen
    with open(path, "x", encoding="utf-8", newline="") as f:
        f.write(document.content)
    return path


def run_generation(
    script_text: str,
    options: GenerationOptions,
    resolver: Optional[DurationResolver],
    output_dir: Path,
    importer: Optional[SubtitleImporter] = None,
    prefix: str = FILE_PREFIX,
) -> GenerationResult:
    """Generate, save and optionally import a subtitle track.

    WHY: This is what a "Create captions" button does end to end.

    HOW: generate() first, so any input or validation error aborts before a
    file exists. Then save_document(), then the importer if one is given.

    RULES:
    - Importer failures surface as ImportFailedError; the written file is
      left in place so the user can import it by hand
    - Logs the written path and cue count at INFO

    Returns:
        GenerationResult with the document, file path and timing used.
    """
    result = generate(script_text, options, resolver)
    path = save_document(result.document, output_dir, prefix)
    result.path = path
    logger.info("Wrote %d cues (%.3fs from %.3fs) to %s",
                result.document.cue_count, result.total_duration_s, result.start_offset_s, path)

    if importer is not None:
        try:
            importer.import_subtitles(path)
        except ImportFailedError:
            raise
        except Exception as exc:
            raise ImportFailedError(
                "Failed to import the generated SRT file {}: {}".format(path.name, exc)
            ) from exc
        logger.info("Imported %s into host", path.name)

    return result
