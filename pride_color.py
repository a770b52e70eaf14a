#!/usr/bin/env python3
"""
🎨 Pride Month Animator - Color Utilities
=========================================
Copyright (c) 2025 Pride Month Animator Authors

Color value type, gamma conversion, overlay blending and terminal escape
encoding shared by the compositor and the animation driver.

Color Math
==========
Stripe colors are stored as 8-bit sRGB. Blending happens in linear light:
colors are expanded with the sRGB transfer function, composited, and
encoded back to 8-bit with rounding. Conversions operate on numpy arrays
so a whole palette is processed at once.

Escape Encoding
===============
- ColorMode.RGB:     ESC[38;2;R;G;Bm / ESC[48;2;R;G;Bm
- ColorMode.ANSI256: ESC[38;5;Nm / ESC[48;5;Nm (xterm cube + gray ramp)
- ColorMode.ANSI16:  ESC[30-37m, ESC[90-97m / ESC[40-47m, ESC[100-107m
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import NamedTuple, Tuple

import numpy as np
from PIL import ImageColor

from config import ColorMode

logger = logging.getLogger('pride.color')

# Type alias for RGB colors
RGBColor = Tuple[int, int, int]


class Color(NamedTuple):
    """Immutable 8-bit sRGB color"""
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """
        Parse a CSS-style color string.

        Examples:
            >>> Color.from_hex('#FFE09B')
            Color(r=255, g=224, b=155)
        """
        rgb = ImageColor.getrgb(value)
        return cls(*rgb[:3])

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


class Layer(Enum):
    """Which half of a terminal cell a color applies to"""
    FOREGROUND = "fg"
    BACKGROUND = "bg"


class ANSI:
    RESET = "\033[0m"
    CLEAR_SCREEN = "\033[2J\033[H"
    LINE_SEPARATOR = RESET + "\n"


# ============================================================================
# LINEAR LIGHT CONVERSION
# ============================================================================

def srgb_to_linear(colors: np.ndarray) -> np.ndarray:
    """Expand 8-bit sRGB values to linear floats in [0, 1]"""
    c = np.asarray(colors, dtype=np.float64) / 255.0
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Encode linear floats back to 8-bit sRGB"""
    lin = np.clip(np.asarray(linear, dtype=np.float64), 0.0, 1.0)
    c = np.where(lin <= 0.0031308, lin * 12.92, 1.055 * np.power(lin, 1 / 2.4) - 0.055)
    return np.clip(np.round(c * 255.0), 0, 255).astype(np.uint8)


def overlay_black(colors: np.ndarray, alpha: float = 0.5) -> np.ndarray:
    """
    Composite a black layer of the given opacity over opaque colors.

    Args:
        colors: Array of shape (..., 3) holding 8-bit sRGB colors
        alpha: Opacity of the black layer

    Returns:
        uint8 array of the same shape, darkened in linear light
    """
    linear = srgb_to_linear(colors)
    return linear_to_srgb(linear * (1.0 - alpha))


# ============================================================================
# TERMINAL PALETTE APPROXIMATION
# ============================================================================

# xterm default values for the 16 base colors
ANSI16_PALETTE = (
    (0, 0, 0), (205, 0, 0), (0, 205, 0), (205, 205, 0),
    (0, 0, 238), (205, 0, 205), (0, 205, 205), (229, 229, 229),
    (127, 127, 127), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (92, 92, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
)

CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def _distance(a: RGBColor, b: RGBColor) -> int:
    return sum((x - y) ** 2 for x, y in zip(a, b))


def rgb_to_ansi256(rgb: RGBColor) -> int:
    """Nearest xterm-256 index, picked from the 6x6x6 cube or the gray ramp"""
    cube = [min(range(6), key=lambda i: abs(CUBE_LEVELS[i] - c)) for c in rgb]
    cube_rgb = tuple(CUBE_LEVELS[i] for i in cube)
    cube_index = 16 + 36 * cube[0] + 6 * cube[1] + cube[2]

    mean = sum(rgb) // 3
    gray_step = min(23, max(0, round((mean - 8) / 10)))
    gray_value = 8 + 10 * gray_step
    gray_index = 232 + gray_step

    if _distance(rgb, (gray_value,) * 3) < _distance(rgb, cube_rgb):
        return gray_index
    return cube_index


def rgb_to_ansi16(rgb: RGBColor) -> int:
    """Nearest of the 16 base terminal colors"""
    return min(range(16), key=lambda i: _distance(rgb, ANSI16_PALETTE[i]))


@lru_cache(maxsize=4096)
def to_ansi(rgb: RGBColor, mode: ColorMode, layer: Layer) -> str:
    """
    Encode a color as an SGR escape sequence.

    Examples:
        >>> to_ansi((255, 0, 255), ColorMode.RGB, Layer.BACKGROUND)
        '\\x1b[48;2;255;0;255m'
    """
    r, g, b = (int(c) for c in rgb)
    background = layer is Layer.BACKGROUND

    if mode is ColorMode.RGB:
        return f"\033[{48 if background else 38};2;{r};{g};{b}m"

    if mode is ColorMode.ANSI256:
        return f"\033[{48 if background else 38};5;{rgb_to_ansi256((r, g, b))}m"

    index = rgb_to_ansi16((r, g, b))
    logger.debug(f"Approximated {(r, g, b)} as 16-color index {index}")
    base = 40 if background else 30
    if index >= 8:
        base += 60
        index -= 8
    return f"\033[{base + index}m"
