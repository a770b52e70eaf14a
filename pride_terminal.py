#!/usr/bin/env python3
"""
🏳️‍🌈 Pride Month Animator - Gradient Frame Compositor
=====================================================
Copyright (c) 2025 Pride Month Animator Authors

Deterministic Frame Renderer
============================
Produces one full-screen frame of the pride month animation: diagonal color
stripes scrolling across the terminal, rippled by a slow sine wave, with
darkened boxes behind the ASCII-art banner and the notice.

Per-cell Algorithm
==================
For frame f and cell (x, y):

    idx = f + x + y + floor(2 * sin(y + 0.5 * f))

The stripe color is cycle[(idx // block_width) % len(cycle)]. A background
escape is emitted only where idx % block_width == 0 or on the four box
boundary columns; between emissions the previous background carries on.
Emissions inside a text box use the stripe color composited under a
half-transparent black layer in linear light.

Technical Implementation
========================
- Whole-frame numpy computation: stripe indices, emission mask and the
  carried background are (height, width) arrays
- Static data (box masks, text rows, shaded palette) prepared once
- render() is pure: same frame index always yields the same Frame
- encode_frame() turns a Frame into a single escape-coded string
- frame_to_image() rasterises a Frame with Pillow for GIF export

Module Interface
================
- create_compositor(): Factory function for compositor creation
- GradientCompositor: Main compositor class
  - render(): Compute one Frame
  - render_ansi(): Compute and encode one frame
- encode_frame(): Frame to terminal text
- frame_to_image(): Frame to PIL image
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from config import AnimationConfig, ColorMode, get_config
from pride_color import ANSI, Color, Layer, RGBColor, overlay_black, to_ansi
from pride_layout import Layout
from pride_presets import assemble_color_cycle, cycle_to_array

# ============================================================================
# LOGGING CONFIGURATION
# ============================================================================

logger = logging.getLogger('pride.terminal')

# Character cell dimensions (pixels) for image export
CHAR_WIDTH = 8
CHAR_HEIGHT = 16

# ============================================================================
# FRAME DATA
# ============================================================================

class Cell(NamedTuple):
    """One terminal cell with its resolved colors"""
    char: str
    fg: RGBColor
    bg: RGBColor


@dataclass(frozen=True, eq=False)
class Frame:
    """
    Fully resolved screen contents for one frame index.

    Attributes:
        index: Frame counter the frame was computed for
        chars: One string of width characters per row
        background: (height, width, 3) uint8 background color of every cell
        row_start: (height, 3) uint8 background set at the start of each row
        restyle: (height, width) bool, True where a background escape is emitted
        foreground: Text color shared by every cell
    """
    index: int
    chars: Tuple[str, ...]
    background: np.ndarray
    row_start: np.ndarray
    restyle: np.ndarray
    foreground: Color

    @property
    def height(self) -> int:
        return len(self.chars)

    @property
    def width(self) -> int:
        return self.background.shape[1]

    def row(self, y: int) -> List[Cell]:
        fg = tuple(self.foreground)
        return [Cell(char, fg, tuple(int(c) for c in self.background[y, x]))
                for x, char in enumerate(self.chars[y])]

    @property
    def rows(self) -> List[List[Cell]]:
        return [self.row(y) for y in range(self.height)]


# ============================================================================
# COMPOSITOR
# ============================================================================

class GradientCompositor:
    """
    Pure frame compositor for the scrolling pride gradient.
    Everything that does not depend on the frame index is computed in the
    constructor; render() only evaluates the stripe wave.
    """

    def __init__(self, layout: Layout, cycle: Sequence[Color],
                 foreground: Color = Color(0xFF, 0xE0, 0x9B),
                 overlay_alpha: float = 0.5):
        """
        Initialize compositor.

        Args:
            layout: Geometry and text boxes
            cycle: Color cycle; must not be empty
            foreground: Text color
            overlay_alpha: Opacity of the darkening layer inside text boxes
        """
        if not cycle:
            raise ValueError("Color cycle must contain at least one color")

        self.layout = layout
        self.foreground = Color(*foreground)

        self._palette = cycle_to_array(cycle)
        self._shaded = overlay_black(self._palette, overlay_alpha)

        self._ys = np.arange(layout.height, dtype=np.int64)[:, None]
        self._xs = np.arange(layout.width, dtype=np.int64)[None, :]

        self._boundary = self._build_boundary_mask()
        self._overlay = self._build_overlay_mask()
        self._chars = self._build_text_rows()

        logger.info(f"GradientCompositor initialized: {layout.width}x{layout.height}, "
                    f"block_width={layout.block_width}, {len(self._palette)} colors")

    @property
    def cycle_length(self) -> int:
        return len(self._palette)

    # ------------------------------------------------------------------
    # Static masks
    # ------------------------------------------------------------------

    def _build_boundary_mask(self) -> np.ndarray:
        """Columns that always start a fresh background run"""
        layout = self.layout
        mask = np.zeros((layout.height, layout.width), dtype=bool)

        for y in range(layout.height):
            border = layout.art_border(y)
            for x in (layout.text_start_x - border, layout.text_end_x + border,
                      layout.notice_start_x - 1, layout.notice_end_x + 1):
                if 0 <= x < layout.width:
                    mask[y, x] = True
        return mask

    def _build_overlay_mask(self) -> np.ndarray:
        """Cells whose emitted background gets the dark overlay"""
        layout = self.layout
        mask = np.zeros((layout.height, layout.width), dtype=bool)

        for y in range(layout.height):
            if layout.in_art_rows(y):
                border = layout.art_border(y)
                lo = max(layout.text_start_x - border, 0)
                hi = min(layout.text_end_x + border, layout.width)
                if lo < hi:
                    mask[y, lo:hi] = True

        if 0 <= layout.notice_y < layout.height:
            lo = max(layout.notice_start_x - 1, 0)
            hi = min(layout.notice_end_x + 1, layout.width)
            if lo < hi:
                mask[layout.notice_y, lo:hi] = True
        return mask

    def _char_at(self, x: int, y: int) -> str:
        layout = self.layout
        if layout.in_art_rows(y) and layout.text_start_x <= x < layout.text_end_x:
            line = layout.art_lines[y - layout.text_start_y]
            col = x - layout.text_start_x
            if col < len(line):
                return line[col]
        if y == layout.notice_y and layout.notice_start_x <= x < layout.notice_end_x:
            col = x - layout.notice_start_x
            if col < len(layout.notice):
                return layout.notice[col]
        return ' '

    def _build_text_rows(self) -> Tuple[str, ...]:
        return tuple(''.join(self._char_at(x, y) for x in range(self.layout.width))
                     for y in range(self.layout.height))

    # ------------------------------------------------------------------
    # Per-frame computation
    # ------------------------------------------------------------------

    def stripe_index(self, frame: int) -> np.ndarray:
        """Diagonal wave index of every cell, shape (height, width)"""
        wave = np.floor(2.0 * np.sin(self._ys + 0.5 * frame)).astype(np.int64)
        return frame + self._xs + self._ys + wave

    def color_index(self, idx: np.ndarray) -> np.ndarray:
        """Position in the color cycle for the given stripe indices"""
        return (idx // self.layout.block_width) % len(self._palette)

    def render(self, frame: int) -> Frame:
        """
        Compute the screen contents for one frame index.

        Args:
            frame: Non-negative frame counter

        Returns:
            Frame with characters, resolved backgrounds and emission points
        """
        if frame < 0:
            raise ValueError(f"Frame index must not be negative: {frame}")

        block_width = self.layout.block_width
        idx = self.stripe_index(frame)
        color_index = self.color_index(idx)

        restyle = (idx % block_width == 0) | self._boundary
        emitted = np.where(self._overlay[..., None],
                           self._shaded[color_index],
                           self._palette[color_index])

        row_start = self._palette[((frame + self._ys[:, 0]) // block_width) % len(self._palette)]

        # Carry each emitted background forward to the next emission point
        last = np.maximum.accumulate(np.where(restyle, self._xs, -1), axis=1)
        carried = emitted[self._ys, np.maximum(last, 0)]
        background = np.where((last >= 0)[..., None], carried, row_start[:, None, :])

        return Frame(
            index=frame,
            chars=self._chars,
            background=background.astype(np.uint8),
            row_start=row_start.astype(np.uint8),
            restyle=restyle,
            foreground=self.foreground,
        )

    def render_ansi(self, frame: int, color_mode: ColorMode) -> str:
        """Render a frame and encode it for the terminal"""
        return encode_frame(self.render(frame), color_mode)


# ============================================================================
# OUTPUT ENCODING
# ============================================================================

def encode_frame(frame: Frame, color_mode: ColorMode) -> str:
    """
    Convert a frame to one escape-coded string.

    Every row opens with its starting background and the foreground, then
    switches background only at emission points. Rows are joined by a reset
    and a newline; the last row has no trailing separator.
    """
    fg = to_ansi(tuple(frame.foreground), color_mode, Layer.FOREGROUND)
    parts = []

    for y, chars in enumerate(frame.chars):
        parts.append(to_ansi(tuple(frame.row_start[y].tolist()), color_mode, Layer.BACKGROUND))
        parts.append(fg)

        start = 0
        for x in np.flatnonzero(frame.restyle[y]):
            parts.append(chars[start:x])
            parts.append(to_ansi(tuple(frame.background[y, x].tolist()), color_mode, Layer.BACKGROUND))
            start = x
        parts.append(chars[start:])

        if y != frame.height - 1:
            parts.append(ANSI.LINE_SEPARATOR)

    return ''.join(parts)


# ============================================================================
# IMAGE EXPORT
# ============================================================================

def load_font(size: int = 14) -> ImageFont.ImageFont:
    """Load a monospace font for image export, falling back to Pillow's default"""
    candidates = [
        Path('/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf'),
        Path('/usr/share/fonts/dejavu/DejaVuSansMono.ttf'),
        Path('/usr/share/fonts/TTF/DejaVuSansMono.ttf'),
    ]
    for font_path in candidates:
        if font_path.exists():
            try:
                font = ImageFont.truetype(str(font_path), size)
                logger.info(f"Loaded font from {font_path}")
                return font
            except OSError as e:
                logger.debug(f"Could not load {font_path}: {e}")

    logger.warning("No monospace font found - using default")
    return ImageFont.load_default()


def frame_to_image(frame: Frame, font: Optional[ImageFont.ImageFont] = None,
                   char_width: int = CHAR_WIDTH, char_height: int = CHAR_HEIGHT) -> Image.Image:
    """
    Rasterise a frame: each cell becomes a char_width x char_height block of
    its background color with the character drawn in the foreground color.
    """
    pixels = np.repeat(np.repeat(frame.background, char_height, axis=0), char_width, axis=1)
    img = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))

    draw = ImageDraw.Draw(img)
    font = font or load_font()
    fill = tuple(frame.foreground)

    for y, line in enumerate(frame.chars):
        for x, char in enumerate(line):
            if char != ' ':
                draw.text((x * char_width, y * char_height), char, font=font, fill=fill)

    return img


# ============================================================================
# FACTORY FUNCTION
# ============================================================================

def create_compositor(layout: Layout, cycle: Optional[Sequence[Color]] = None,
                      config: Optional[AnimationConfig] = None) -> GradientCompositor:
    """Factory function for compositor creation"""
    config = config or get_config()
    cycle = cycle if cycle is not None else assemble_color_cycle()
    return GradientCompositor(layout, cycle,
                              foreground=Color.from_hex(config.foreground),
                              overlay_alpha=config.overlay_alpha)
