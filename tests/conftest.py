"""Shared test fixtures for the subtitle test suite.

WHY: Several test modules need the same small scripts and host session
snapshots. Centralizing them keeps the expected timings in one place.

HOW: Pytest fixtures provide the three-line reference script (word counts
2, 1, 1), its expected SRT at 40 seconds, a messy script exercising line
ending and whitespace normalization, and host session snapshots.

RULES:
- THREE_LINE_SCRIPT at 40 s must give cues 0-20, 20-30, 30-40.
- Session snapshots use the keys script_subtitler.host probes.
"""

from typing import Any, Dict

import pytest

from script_captions.models import SubtitleLine

# Word counts 2, 1, 1 (4 words total)
THREE_LINE_SCRIPT = "Hello there\nGood\nBye\n"

THREE_LINE_SRT_40S = (
    "1\n00:00:00,000 --> 00:00:20,000\nHello there\n\n"
    "2\n00:00:20,000 --> 00:00:30,000\nGood\n\n"
    "3\n00:00:30,000 --> 00:00:40,000\nBye\n\n"
)


@pytest.fixture
def three_line_script() -> str:
    return THREE_LINE_SCRIPT


@pytest.fixture
def three_line_srt() -> str:
    """Expected SRT for THREE_LINE_SCRIPT over 40 seconds from 0."""
    return THREE_LINE_SRT_40S


@pytest.fixture
def three_lines():
    """SubtitleLine objects matching THREE_LINE_SCRIPT."""
    return [
        SubtitleLine(index=0, text="Hello there", word_count=2),
        SubtitleLine(index=1, text="Good", word_count=1),
        SubtitleLine(index=2, text="Bye", word_count=1),
    ]


@pytest.fixture
def messy_script() -> str:
    """BOM, CRLF, bare CR, blank and indented lines, tabs and runs of spaces."""
    return "\ufeffFirst  line\r\n\r\n   \r\n\tSecond\tline here  \rThird\n\n"


@pytest.fixture
def session_with_sequence() -> Dict[str, Any]:
    """Host session snapshot whose active sequence ends at 40 seconds."""
    return {
        "project": "Promo",
        "active_sequence": {
            "name": "Main edit",
            "end": {"seconds": 40.0},
        },
    }


@pytest.fixture
def session_without_sequence() -> Dict[str, Any]:
    """Host session snapshot with no sequence open."""
    return {"project": "Promo", "active_sequence": None}
