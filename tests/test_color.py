"""Tests for color math and escape encoding."""

from __future__ import annotations

import logging

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from config import ColorMode
from pride_color import (
    ANSI,
    Color,
    Layer,
    linear_to_srgb,
    overlay_black,
    rgb_to_ansi16,
    rgb_to_ansi256,
    srgb_to_linear,
    to_ansi,
)

channel = st.integers(min_value=0, max_value=255)
rgb = st.tuples(channel, channel, channel)


class TestColor:
    def test_from_hex(self):
        assert Color.from_hex("#FFE09B") == Color(255, 224, 155)

    def test_from_hex_ignores_alpha(self):
        assert Color.from_hex("#11223344") == Color(0x11, 0x22, 0x33)

    def test_to_hex(self):
        assert Color(255, 224, 155).to_hex() == "#FFE09B"

    def test_invalid_hex(self):
        with pytest.raises(ValueError):
            Color.from_hex("not-a-color")


class TestLinearConversion:
    def test_endpoints(self):
        linear = srgb_to_linear(np.array([0, 255]))
        assert linear[0] == 0.0
        assert linear[1] == pytest.approx(1.0)

    @given(rgb)
    def test_gamma_round_trip_is_exact_for_8bit(self, color):
        assert tuple(linear_to_srgb(srgb_to_linear(np.array(color)))) == color


class TestOverlayBlack:
    def test_half_black_over_white(self):
        assert overlay_black(np.array([[255, 255, 255]], dtype=np.uint8)).tolist() == [[188, 188, 188]]

    def test_transparent_overlay_keeps_colors(self):
        colors = np.array([[229, 0, 0], [2, 129, 33]], dtype=np.uint8)
        assert np.array_equal(overlay_black(colors, alpha=0.0), colors)

    def test_opaque_overlay_is_black(self):
        colors = np.array([[229, 0, 0], [255, 255, 255]], dtype=np.uint8)
        assert not overlay_black(colors, alpha=1.0).any()

    @given(rgb)
    def test_never_brighter(self, color):
        shaded = overlay_black(np.array([color], dtype=np.uint8))[0]
        assert all(int(s) <= c for s, c in zip(shaded, color))


class TestEncoding:
    def test_truecolor(self):
        assert to_ansi((255, 0, 255), ColorMode.RGB, Layer.BACKGROUND) == "\x1b[48;2;255;0;255m"
        assert to_ansi((255, 224, 155), ColorMode.RGB, Layer.FOREGROUND) == "\x1b[38;2;255;224;155m"

    def test_256_cube(self):
        assert rgb_to_ansi256((255, 0, 0)) == 196
        assert to_ansi((255, 0, 0), ColorMode.ANSI256, Layer.BACKGROUND) == "\x1b[48;5;196m"

    def test_256_gray_ramp(self):
        assert rgb_to_ansi256((128, 128, 128)) == 244

    def test_16_colors(self):
        assert rgb_to_ansi16((0, 0, 0)) == 0
        assert rgb_to_ansi16((255, 0, 0)) == 9
        assert to_ansi((0, 0, 0), ColorMode.ANSI16, Layer.FOREGROUND) == "\x1b[30m"
        assert to_ansi((255, 0, 0), ColorMode.ANSI16, Layer.FOREGROUND) == "\x1b[91m"
        assert to_ansi((255, 0, 0), ColorMode.ANSI16, Layer.BACKGROUND) == "\x1b[101m"

    def test_16_color_approximation_is_logged_once(self, caplog):
        to_ansi.cache_clear()
        with caplog.at_level(logging.DEBUG, logger="pride.color"):
            to_ansi((250, 10, 10), ColorMode.ANSI16, Layer.BACKGROUND)
            to_ansi((250, 10, 10), ColorMode.ANSI16, Layer.BACKGROUND)

        messages = [r.getMessage() for r in caplog.records if r.name == "pride.color"]
        assert messages == ["Approximated (250, 10, 10) as 16-color index 9"]

    @given(rgb)
    def test_256_index_in_range(self, color):
        assert 16 <= rgb_to_ansi256(color) <= 255

    def test_reset_and_clear(self):
        assert ANSI.LINE_SEPARATOR == "\x1b[0m\n"
        assert ANSI.CLEAR_SCREEN == "\x1b[2J\x1b[H"
