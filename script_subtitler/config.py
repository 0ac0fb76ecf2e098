"""Configuration constants, timing modes, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The duration fallback, default spacing and output
location are plain module-level values, not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are read from
the environment with sensible defaults. TimingMode is the closed set of
ways a run can obtain its total duration.

RULES:
- DEFAULT_DURATION_S (60 s) is substituted when the host cannot tell the
  sequence duration; a zero/negative duration never reaches the allocator
- Word spacing bounds live in script_captions; only the default is here
- All defaults can be overridden via environment variables
- Nothing is written back: configuration is not persisted between runs
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


class TimingMode(str, Enum):
    """Where the total duration and start offset come from.

    - auto: duration from the host sequence, offset 0
    - manual: explicit start/end time strings
    """

    AUTO = "auto"
    MANUAL = "manual"


def _default_output_dir() -> Path:
    desktop = Path.home() / "Desktop"
    return desktop if desktop.is_dir() else Path.home()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError("{} must be a number, got {!r}.".format(name, raw))


# ---------------------------------------------------------------------------
# Generation defaults
# ---------------------------------------------------------------------------

DEFAULT_DURATION_S = _env_float("SUBTITLER_DEFAULT_DURATION", 60.0)
"""Used when the host reports an unknown sequence duration."""

DEFAULT_WORD_SPACING = _env_float("SUBTITLER_WORD_SPACING", 1.0)
DEFAULT_TIMING_MODE = TimingMode(os.getenv("SUBTITLER_TIMING_MODE", "auto").strip().lower())

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

OUTPUT_DIR = Path(os.getenv("SUBTITLER_OUTPUT_DIR", "") or _default_output_dir())
FILE_PREFIX = os.getenv("SUBTITLER_FILE_PREFIX", "subtitles")
SRT_MEDIA_TYPE = "application/x-subrip"

# ---------------------------------------------------------------------------
# HTTP service
# ---------------------------------------------------------------------------

API_HOST = os.getenv("SUBTITLER_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("SUBTITLER_API_PORT", "8000"))
