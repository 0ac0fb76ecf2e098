"""Command-line interface for the Script Subtitler.

WHY: Not every workflow runs inside the editor panel. The CLI produces
the same SRT track from a terminal or a batch script, with the duration
given directly, taken from a saved host session snapshot, or derived from
a manual start/end range.

HOW: Uses argparse to accept the script path and the generation options,
builds a duration resolver from --duration or --session, and calls the
shared generation layer. Status messages go to stderr; with --stdout the
SRT content goes to stdout instead of a file.

RULES:
- Positional argument: script text file path
- --timing-mode auto (default) needs --duration or --session
- --timing-mode manual needs --start-time and --end-time
- Output naming: {prefix}_{timestamp}.srt in --output-dir, never overwritten
- Exit codes: 0 = success, 1 = input/validation/collaborator/file error,
  2 = usage error (argparse)
- Python 3.9 compatible: no match/case, no X | Y unions at runtime
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from script_captions import SubtitleError
from script_subtitler.config import (
    DEFAULT_TIMING_MODE,
    DEFAULT_WORD_SPACING,
    FILE_PREFIX,
    OUTPUT_DIR,
    TimingMode,
)
from script_subtitler.errors import CollaboratorError
from script_subtitler.generation import GenerationOptions, generate, run_generation
from script_subtitler.host import DurationResolver, FixedDurationResolver, SessionDurationResolver
from script_subtitler.script_source import load_script


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _build_resolver(args: argparse.Namespace) -> Optional[DurationResolver]:
    """Choose the duration source for automatic timing.

    RULES:
    - --duration wins over --session
    - --session must be a JSON file holding a host session snapshot
    - Neither given -> None (automatic timing then fails with a clear error)
    """
    if args.duration is not None:
        return FixedDurationResolver(args.duration)

    if args.session:
        session_path = Path(args.session)
        try:
            session = json.loads(session_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            _fail("Session file not found: {}".format(session_path))
        except json.JSONDecodeError as e:
            _fail("Session file is not valid JSON: {}".format(e))
        if not isinstance(session, dict):
            _fail("Session file must contain a JSON object.")
        return SessionDurationResolver(session)

    return None


def _run(args: argparse.Namespace) -> None:
    options = GenerationOptions(
        word_spacing=args.word_spacing,
        timing_mode=TimingMode(args.timing_mode),
        start_time=args.start_time,
        end_time=args.end_time,
    )

    resolver = None  # type: Optional[DurationResolver]
    if options.timing_mode == TimingMode.AUTO:
        resolver = _build_resolver(args)

    try:
        script_text = load_script(args.script_file)

        if args.stdout:
            preview = generate(script_text, options, resolver)
            sys.stdout.write(preview.document.content)
            _status("Generated {} captions".format(preview.document.cue_count))
            return

        result = run_generation(
            script_text,
            options,
            resolver,
            output_dir=Path(args.output_dir),
            prefix=args.prefix,
        )
    except (SubtitleError, CollaboratorError) as e:
        _fail(str(e))
        return
    except OSError as e:
        _fail("Could not access file: {}".format(e))
        return

    _status("Wrote {} captions ({:.3f}s starting at {:.3f}s) to {}".format(
        result.document.cue_count,
        result.total_duration_s,
        result.start_offset_s,
        result.path,
    ))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without running generation.
    """
    parser = argparse.ArgumentParser(
        prog="script_subtitler",
        description="Generate an SRT caption track from a plain-text script, "
                    "timing each line by its share of the script's words.",
    )

    parser.add_argument(
        "script_file",
        help="Path to the script text file (one caption per line).",
    )

    parser.add_argument(
        "--word-spacing",
        type=float,
        default=DEFAULT_WORD_SPACING,
        help="Spacing between words, 1-15; fractions add a thin space "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--timing-mode",
        choices=[m.value for m in TimingMode],
        default=DEFAULT_TIMING_MODE.value,
        help="auto: use the sequence duration; manual: use --start-time/--end-time "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--start-time",
        default=None,
        help="Manual mode start time, HH:MM:SS[,mmm].",
    )

    parser.add_argument(
        "--end-time",
        default=None,
        help="Manual mode end time, HH:MM:SS[,mmm].",
    )

    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Auto mode: total duration in seconds.",
    )

    parser.add_argument(
        "--session",
        default=None,
        help="Auto mode: JSON snapshot of the host session to read the sequence duration from.",
    )

    parser.add_argument(
        "--output-dir",
        default=str(OUTPUT_DIR),
        help="Directory to save the SRT file (default: %(default)s).",
    )

    parser.add_argument(
        "--prefix",
        default=FILE_PREFIX,
        help="File name prefix for the SRT file (default: %(default)s).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the SRT content instead of saving a file.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    _run(args)


if __name__ == "__main__":
    main()
