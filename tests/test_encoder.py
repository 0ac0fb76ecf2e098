"""Unit tests for SRT encoding and the word spacing transform.

WHY: The SRT file is the only artifact a user sees. Importers are picky
about the block layout (index, timing line, text, blank line) and the
spacing transform changes every cue's text.

HOW: Tests check seconds_to_srt_time() formatting and carry, the spacing
clamp and separator, exact document output for the reference script, and
the create_subtitles() entry point.
"""

import math

import pytest

from script_captions import (
    THIN_SPACE,
    Cue,
    DocumentEmptyError,
    EmptyDocumentError,
    EmptyInputError,
    allocate,
    apply_word_spacing,
    build_cues,
    clamp_word_spacing,
    create_subtitles,
    generate_srt,
    parse_script,
    render_srt,
    seconds_to_srt_time,
)
from script_captions.core import spacing_separator


class TestSecondsToSrtTime:
    """Formatting seconds as HH:MM:SS,mmm."""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00:00,000"),
        (0.0005, "00:00:00,001"),
        (1.5, "00:00:01,500"),
        (59.9995, "00:01:00,000"),
        (3661.25, "01:01:01,250"),
        (5999.999, "01:39:59,999"),
        (360000, "100:00:00,000"),
    ])
    def test_formats(self, seconds, expected):
        assert seconds_to_srt_time(seconds) == expected

    def test_carry_never_gives_1000_millis(self):
        assert seconds_to_srt_time(0.9999) == "00:00:01,000"

    @pytest.mark.parametrize("seconds", [-0.001, math.nan, math.inf])
    def test_rejects_bad_values(self, seconds):
        with pytest.raises(ValueError):
            seconds_to_srt_time(seconds)


class TestWordSpacing:
    """Clamp to [1, 15] and replace whitespace runs."""

    @pytest.mark.parametrize("value,expected", [
        (None, 1.0),
        (math.nan, 1.0),
        (-3, 1.0),
        (0, 1.0),
        (0.5, 1.0),
        (1, 1.0),
        (2.5, 2.5),
        (15, 15.0),
        (40, 15.0),
    ])
    def test_clamp(self, value, expected):
        assert clamp_word_spacing(value) == expected

    def test_separator_whole_factor(self):
        assert spacing_separator(3.0) == "   "

    def test_separator_fractional_factor(self):
        assert spacing_separator(2.5) == "  " + THIN_SPACE

    def test_factor_one_is_identity_for_single_spaces(self):
        assert apply_word_spacing("a b c", 1) == "a b c"

    def test_factor_one_collapses_runs(self):
        assert apply_word_spacing("a   b\tc", 1) == "a b c"

    def test_fractional_factor(self):
        assert apply_word_spacing("a b", 2.5) == "a  " + THIN_SPACE + "b"

    def test_large_factor_is_clamped(self):
        assert apply_word_spacing("a b", 100) == "a" + " " * 15 + "b"

    def test_single_word_unchanged(self):
        assert apply_word_spacing("Hello", 7) == "Hello"


class TestRenderSrt:
    """Exact SRT document layout."""

    def test_reference_script(self, three_line_script, three_line_srt):
        lines = parse_script(three_line_script)
        assert generate_srt(lines, allocate(lines, 40.0)) == three_line_srt

    def test_manual_range_offsets_cues(self, three_line_script):
        lines = parse_script(three_line_script)
        content = generate_srt(lines, allocate(lines, 40.0, 10.0))
        assert content.startswith("1\n00:00:10,000 --> 00:00:30,000\nHello there\n\n")
        assert "3\n00:00:40,000 --> 00:00:50,000\nBye\n\n" in content

    def test_cue_count_matches_lines(self, messy_script):
        lines = parse_script(messy_script)
        cues = build_cues(lines, allocate(lines, 30.0))
        assert [c.index for c in cues] == [1, 2, 3]

    def test_spacing_applied_to_text(self, three_line_script):
        lines = parse_script(three_line_script)
        cues = build_cues(lines, allocate(lines, 40.0), word_spacing=3)
        assert cues[0].text == "Hello   there"

    def test_lf_only_and_trailing_blank_line(self, three_line_srt):
        assert "\r" not in three_line_srt
        assert three_line_srt.endswith("\n\n")

    def test_mismatched_plan(self, three_lines):
        plan = allocate(three_lines[:2], 10.0)
        with pytest.raises(ValueError):
            build_cues(three_lines, plan)

    def test_empty_document(self):
        with pytest.raises(DocumentEmptyError):
            render_srt([])

    def test_empty_document_alias(self):
        assert EmptyDocumentError is DocumentEmptyError

    def test_cue_render(self):
        cue = Cue(index=4, start="00:00:01,000", end="00:00:02,000", text="Hi")
        assert cue.render() == "4\n00:00:01,000 --> 00:00:02,000\nHi\n\n"


class TestCreateSubtitles:
    """The high-level entry point."""

    def test_returns_complete_document(self, three_line_script, three_line_srt):
        doc = create_subtitles(three_line_script, 40.0)
        assert doc.content == three_line_srt
        assert doc.cue_count == 3
        assert len(doc.lines) == 3
        assert doc.plan.end_s == 40.0

    def test_deterministic(self, messy_script):
        first = create_subtitles(messy_script, 17.3, 2.0, 2.5)
        second = create_subtitles(messy_script, 17.3, 2.0, 2.5)
        assert first.content == second.content

    def test_empty_script(self):
        with pytest.raises(EmptyInputError):
            create_subtitles("\n\n", 40.0)
