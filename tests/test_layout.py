"""Tests for the layout calculator."""

from __future__ import annotations

import io
import os

import pytest
from hypothesis import given
from hypothesis import strategies as st

import pride_layout
from pride_layout import (
    TEXT_ASCII,
    AnimationError,
    LayoutError,
    compute_layout,
    get_terminal_geometry,
    split_art,
)


class TestSplitArt:
    def test_banner_dimensions(self):
        lines = split_art(TEXT_ASCII)
        assert len(lines) == 6
        assert all(len(line) == 56 for line in lines)

    def test_only_framing_newlines_removed(self):
        assert split_art("\n\nab\n\n") == ["", "ab", ""]

    def test_text_without_framing_newlines(self):
        assert split_art("ab\ncd") == ["ab", "cd"]


class TestComputeLayout:
    def test_reference_scenario(self, scenario_layout):
        layout = scenario_layout
        assert layout.block_width == 8
        assert layout.notice_start_x == 55
        assert layout.notice_end_x == 79
        assert layout.notice_y == 23
        assert layout.text_start_y == 9
        assert layout.text_end_y == 15
        assert layout.text_start_x == 13
        assert layout.text_end_x == 67

    def test_default_notice_offset(self, art_lines):
        layout = compute_layout(80, 24, art_lines, "Press enter to continue")
        assert layout.notice_start_x == 80 - 23 - 1

    def test_art_border_rows(self, scenario_layout):
        assert scenario_layout.art_border(9) == 1
        assert scenario_layout.art_border(14) == 1
        assert scenario_layout.art_border(10) == 2
        assert scenario_layout.art_border(0) == 2

    def test_too_narrow_for_blocks(self, art_lines):
        with pytest.raises(LayoutError):
            compute_layout(8, 24, art_lines, "notice")

    def test_layout_error_is_value_error(self):
        assert issubclass(LayoutError, ValueError)

    def test_content_larger_than_terminal_does_not_crash(self, art_lines):
        layout = compute_layout(20, 3, art_lines, "a notice longer than the terminal")
        assert layout.text_start_x < 0
        assert layout.text_start_y < 0
        assert layout.notice_start_x < 0
        assert layout.text_end_x - layout.text_start_x == 56

    @given(
        width=st.integers(min_value=9, max_value=300),
        height=st.integers(min_value=1, max_value=200),
        data=st.data(),
    )
    def test_boxes_within_terminal_when_content_fits(self, width, height, data):
        art_width = data.draw(st.integers(min_value=0, max_value=width))
        art_height = data.draw(st.integers(min_value=1, max_value=height))
        notice_len = data.draw(st.integers(min_value=0, max_value=width - 1))

        layout = compute_layout(width, height, ["x" * art_width] * art_height, "n" * notice_len)

        assert layout.block_width >= 1
        assert 0 <= layout.text_start_x <= layout.text_end_x <= width
        assert 0 <= layout.text_start_y <= layout.text_end_y <= height
        assert 0 <= layout.notice_start_x <= layout.notice_end_x < width
        assert 0 <= layout.notice_y < height


class TestTerminalGeometry:
    def test_stream_without_terminal_fails(self):
        with pytest.raises(AnimationError, match="failed to get terminal size") as exc_info:
            get_terminal_geometry(io.StringIO())
        assert exc_info.value.__cause__ is not None

    def test_reads_size_from_os(self, monkeypatch):
        monkeypatch.setattr(pride_layout.os, "get_terminal_size",
                            lambda fd: os.terminal_size((120, 40)))
        assert get_terminal_geometry() == (120, 40)

    def test_os_failure_is_fatal(self, monkeypatch):
        def broken(fd):
            raise OSError("not a tty")

        monkeypatch.setattr(pride_layout.os, "get_terminal_size", broken)
        with pytest.raises(AnimationError):
            get_terminal_geometry()
