#!/usr/bin/env python3
"""
📐 Pride Month Animator - Layout Calculator
===========================================
Copyright (c) 2025 Pride Month Animator Authors

Places the ASCII-art banner in the middle of the terminal and the notice in
the bottom-right corner, and derives the width of one color stripe.

Boxes use half-open ranges: a box covers start <= x < end. When the art or
the notice is larger than the terminal the boxes may start at negative
coordinates or overlap; the compositor tolerates this and simply clips.
"""

import os
import logging
from dataclasses import dataclass
from typing import IO, List, Optional, Tuple

logger = logging.getLogger('pride.layout')

TEXT_ASCII = r"""
.======================================================.
| .  .              .__       .     .  .       , .   | |
| |__| _.._ ._   .  [__)._.* _| _   |\/| _ ._ -+-|_  | |
| |  |(_][_)[_)\_|  |   [  |(_](/,  |  |(_)[ ) | [ ) * |
|        |  |  ._|                                     |
'======================================================'
"""


class AnimationError(RuntimeError):
    """Unrecoverable terminal failure (size lookup, clearing, writing)"""


class LayoutError(ValueError):
    """Terminal geometry too small to lay out the stripes"""


def split_art(text: str) -> List[str]:
    """Split a raw-string art block into lines, dropping the framing newlines"""
    if text.startswith("\n"):
        text = text[1:]
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


@dataclass(frozen=True)
class Layout:
    """Pixel-space boxes for one terminal geometry"""
    width: int
    height: int
    block_width: int

    text_start_x: int
    text_end_x: int
    text_start_y: int
    text_end_y: int

    notice_start_x: int
    notice_end_x: int
    notice_y: int

    art_lines: Tuple[str, ...]
    notice: str

    def in_art_rows(self, y: int) -> bool:
        return self.text_start_y <= y < self.text_end_y

    def art_border(self, y: int) -> int:
        """Horizontal padding of the art overlay on row y"""
        return 1 if y in (self.text_start_y, self.text_end_y - 1) else 2


def compute_layout(width: int, height: int, art_lines: List[str], notice: str,
                   blocks: int = 9) -> Layout:
    """
    Compute stripe width and text boxes for a terminal of width x height cells.

    Args:
        width: Terminal columns
        height: Terminal rows
        art_lines: Banner lines; the first line defines the banner width
        notice: Status text placed on the last row
        blocks: Number of stripes across the screen

    Raises:
        LayoutError: If the terminal is narrower than one cell per stripe
    """
    block_width = width // blocks
    if block_width < 1:
        raise LayoutError(f"Terminal width {width} is too small for {blocks} color blocks")

    text_height = len(art_lines)
    text_width = len(art_lines[0]) if art_lines else 0

    text_start_y = height // 2 - text_height // 2
    text_start_x = width // 2 - text_width // 2

    layout = Layout(
        width=width,
        height=height,
        block_width=block_width,
        text_start_x=text_start_x,
        text_end_x=text_start_x + text_width,
        text_start_y=text_start_y,
        text_end_y=text_start_y + text_height,
        notice_start_x=width - len(notice) - 1,
        notice_end_x=width - 1,
        notice_y=height - 1,
        art_lines=tuple(art_lines),
        notice=notice,
    )
    logger.debug(f"Layout for {width}x{height}: {layout}")
    return layout


def get_terminal_geometry(stream: Optional[IO] = None) -> Tuple[int, int]:
    """
    Query the terminal size in character cells.

    Raises:
        AnimationError: If the size cannot be determined
    """
    try:
        fd = stream.fileno() if stream is not None else 1
        size = os.get_terminal_size(fd)
    except (OSError, ValueError) as e:
        raise AnimationError("failed to get terminal size") from e
    return size.columns, size.lines
