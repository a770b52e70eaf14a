#!/usr/bin/env python3
"""
🏳️‍🌈 Pride Month Animator - Animation Driver
=============================================
Copyright (c) 2025 Pride Month Animator Authors

Runs the pride month greeting: a scrolling rainbow of every flag preset
behind the banner, redrawn at a fixed rate until a line is entered on
standard input.

Loop
====
Each tick clears the screen, renders the current frame, writes the whole
buffer in one call and flushes, advances the frame counter by the
configured speed, sleeps 1/fps and polls the cancellation flag. On exit the
terminal style is reset and the screen cleared once.

Terminal size is read once at startup; resizing during the animation is not
tracked and interrupt signals get no special cleanup.

Example Usage
=============
```
pride-month                      # animate in the current terminal
pride-month --mode 256           # force 256-color output
pride-month --export june.gif    # render 60 frames to a GIF instead
```
"""

import sys
import time
import logging
import argparse
import threading
from enum import Enum
from pathlib import Path
from typing import Callable, IO, List, Optional, Sequence, Tuple

from config import AnimationConfig, ColorMode, get_config
from pride_color import ANSI, Color
from pride_input import watch_input
from pride_layout import (
    TEXT_ASCII, AnimationError,
    compute_layout, get_terminal_geometry, split_art,
)
from pride_terminal import create_compositor, frame_to_image, load_font

logger = logging.getLogger('pride.month')

DEFAULT_EXPORT_FRAMES = 60
DEFAULT_EXPORT_WIDTH = 80
DEFAULT_EXPORT_HEIGHT = 24


class AnimationState(Enum):
    READY = "ready"
    RUNNING = "running"
    STOPPED = "stopped"


class PrideMonthAnimation:
    """
    Single-run animation driver.

    The driver owns the frame counter and the cancellation flag; the
    compositor it builds is pure and never sees either of them.
    """

    def __init__(self,
                 color_mode: Optional[ColorMode] = None,
                 config: Optional[AnimationConfig] = None,
                 output: Optional[IO[str]] = None,
                 stdin: Optional[IO[str]] = None,
                 geometry: Optional[Tuple[int, int]] = None,
                 flag: Optional[threading.Event] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 cycle: Optional[Sequence[Color]] = None,
                 art: str = TEXT_ASCII):
        """
        Initialize animation driver.

        Args:
            color_mode: Output encoding (configuration default when None)
            config: Animation settings (global configuration when None)
            output: Terminal text sink (defaults to sys.stdout)
            stdin: Stream watched for the stop line (defaults to sys.stdin)
            geometry: Fixed (width, height); queried from the terminal when None
            flag: Cancellation flag; a fresh event when None
            sleep: Frame pacing function
            cycle: Color cycle (all presets when None)
            art: Banner drawn in the middle of the screen
        """
        self.config = config or get_config()
        self.color_mode = color_mode or self.config.color_mode
        self.output = output if output is not None else sys.stdout
        self.stdin = stdin
        self.geometry = geometry
        self.flag = flag if flag is not None else threading.Event()
        self.sleep = sleep
        self.cycle = cycle
        self.art = art

        self.state = AnimationState.READY
        self.frame = 0
        self.frames_drawn = 0
        self.render_times: List[float] = []

    def _write(self, text: str, context: str):
        try:
            self.output.write(text)
            self.output.flush()
        except (OSError, ValueError) as e:
            raise AnimationError(context) from e

    def clear_screen(self):
        self._write(ANSI.CLEAR_SCREEN, "failed to clear screen")

    def run(self) -> int:
        """
        Animate until the cancellation flag is set.

        Returns:
            Number of frames drawn

        Raises:
            AnimationError: On terminal size, clearing or write failure
            LayoutError: If the terminal is too narrow for the stripes
        """
        if self.state is not AnimationState.READY:
            raise RuntimeError(f"Animation cannot be restarted from state {self.state.value}")

        width, height = self.geometry or get_terminal_geometry(self.output)
        layout = compute_layout(width, height, split_art(self.art),
                                self.config.notice, self.config.blocks)
        compositor = create_compositor(layout, self.cycle, self.config)

        watch_input(self.flag, self.stdin, self.config.eof_retry_delay)

        self.state = AnimationState.RUNNING
        logger.info(f"Animation started: {width}x{height}, mode={self.color_mode.value}, "
                    f"{self.config.fps} fps")

        while True:
            self.clear_screen()

            start_time = time.perf_counter()
            buf = compositor.render_ansi(self.frame, self.color_mode)
            self._write(buf, "failed to write frame to output")
            render_time = (time.perf_counter() - start_time) * 1000
            self.render_times.append(render_time)
            logger.debug(f"Frame {self.frame} drawn in {render_time:.1f}ms")

            self.frames_drawn += 1
            self.frame += self.config.speed
            self.sleep(self.config.frame_delay)

            if self.flag.is_set():
                break

        self._write(ANSI.RESET, "failed to reset terminal style")
        self.clear_screen()
        self.state = AnimationState.STOPPED

        logger.info(f"Animation stopped after {self.frames_drawn} frames")
        return self.frames_drawn


def start_animation(color_mode: Optional[ColorMode] = None, **kwargs) -> int:
    """Run the pride month animation in the current terminal"""
    return PrideMonthAnimation(color_mode, **kwargs).run()


# ============================================================================
# GIF EXPORT
# ============================================================================

def export_gif(output: Path, frames: int = DEFAULT_EXPORT_FRAMES,
               width: int = DEFAULT_EXPORT_WIDTH, height: int = DEFAULT_EXPORT_HEIGHT,
               config: Optional[AnimationConfig] = None,
               cycle: Optional[Sequence[Color]] = None) -> Path:
    """
    Render the first frames of the animation into an animated GIF.

    Args:
        output: Destination file
        frames: Number of frames to render
        width: Virtual terminal columns
        height: Virtual terminal rows
        config: Animation settings (global configuration when None)
        cycle: Color cycle (all presets when None)

    Returns:
        The output path
    """
    if frames <= 0:
        raise ValueError("Frame count must be positive")

    config = config or get_config()
    layout = compute_layout(width, height, split_art(TEXT_ASCII), config.notice, config.blocks)
    compositor = create_compositor(layout, cycle, config)
    font = load_font()

    images = []
    for i in range(frames):
        images.append(frame_to_image(compositor.render(i * config.speed), font))
        if (i + 1) % config.fps == 0:
            logger.info(f"Rendered frame {i + 1}/{frames}")

    output = Path(output)
    images[0].save(
        output,
        format='GIF',
        save_all=True,
        append_images=images[1:],
        duration=int(1000 / config.fps),
        loop=0,
        optimize=False
    )
    logger.info(f"Saved {frames} frames to {output}")
    return output


# ============================================================================
# COMMAND LINE
# ============================================================================

def configure_logging(config: AnimationConfig):
    level = logging.DEBUG if config.debug_mode else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Pride month terminal animation')
    parser.add_argument('--mode', choices=[m.value for m in ColorMode],
                        help='color encoding (default: detected from the terminal)')
    parser.add_argument('--export', type=Path, metavar='PATH',
                        help='render frames to an animated GIF instead of the terminal')
    parser.add_argument('--frames', type=int, default=DEFAULT_EXPORT_FRAMES)
    parser.add_argument('--width', type=int, default=DEFAULT_EXPORT_WIDTH)
    parser.add_argument('--height', type=int, default=DEFAULT_EXPORT_HEIGHT)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    configure_logging(config)

    try:
        if args.export:
            output = export_gif(args.export, args.frames, args.width, args.height, config)
            print(f"✓ Saved {output}")
            return 0

        color_mode = ColorMode(args.mode) if args.mode else None
        start_animation(color_mode, config=config)
        return 0
    except (AnimationError, ValueError) as e:
        cause = f": {e.__cause__}" if e.__cause__ else ""
        logger.error(f"{e}{cause}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
