#!/usr/bin/env python3
"""
🏳️‍🌈 Pride Month Animator - Configuration Module
=================================================
Copyright (c) 2025 Pride Month Animator Authors

Centralized Configuration System
=================================
Complete configuration for the pride month terminal animation including:
- Frame pacing (frames per second, frame speed)
- Stripe geometry (number of color bands across the screen)
- Overlay and foreground colors
- Output color mode (16-color, 256-color, truecolor)
- Input watcher retry timing
- Logging level and debug switch

Configuration Overview
======================
Settings live in a single AnimationConfig dataclass. A process-wide
ConfigurationManager owns the active instance and applies environment
overrides on startup:

- PRIDE_FPS          frames per second
- PRIDE_SPEED        frame counter increment per tick
- PRIDE_BLOCKS       color bands across the terminal width
- PRIDE_FOREGROUND   hex color of the printed text
- PRIDE_NOTICE       status notice in the bottom-right corner
- PRIDE_COLOR_MODE   16, 256 or rgb
- PRIDE_LOG_LEVEL    logging level name
- PRIDE_DEBUG        true/1/yes enables debug logging
"""

import threading
import logging
import os
from typing import Mapping, Optional
from dataclasses import dataclass, replace
from enum import Enum

from PIL import ImageColor

# Configure logging
logger = logging.getLogger('pride.config')

# ============================================================================
# ANIMATION DEFAULTS
# ============================================================================

DEFAULT_FPS = 25
DEFAULT_SPEED = 2
DEFAULT_BLOCKS = 9           # Color bands across the screen
DEFAULT_FOREGROUND = "#FFE09B"
DEFAULT_OVERLAY_ALPHA = 0.5
DEFAULT_NOTICE = "Press enter to continue"
DEFAULT_EOF_RETRY_DELAY = 0.05

# ============================================================================
# CONFIGURATION ENUMS
# ============================================================================

class ColorMode(Enum):
    """Terminal color encodings"""
    ANSI16 = "16"
    ANSI256 = "256"
    RGB = "rgb"


def detect_color_mode(environ: Optional[Mapping[str, str]] = None) -> ColorMode:
    """
    Guess the richest color mode the terminal supports.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        RGB for truecolor terminals, ANSI256 for 256-color terminals,
        ANSI16 otherwise
    """
    environ = os.environ if environ is None else environ
    if environ.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorMode.RGB
    if "256color" in environ.get("TERM", ""):
        return ColorMode.ANSI256
    return ColorMode.ANSI16


# ============================================================================
# ANIMATION CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class AnimationConfig:
    """
    Animation configuration parameters.

    Attributes:
        fps: Nominal frame rate; the driver sleeps 1/fps between frames
        speed: Amount the frame counter advances every tick
        blocks: Number of color bands fitting across the terminal width
        foreground: Hex color used for every printed character
        overlay_alpha: Opacity of the black layer under the text boxes
        notice: Status line shown in the bottom-right corner
        color_mode: Escape sequence encoding for output
        eof_retry_delay: Seconds the input watcher waits after end-of-input
        log_level: Logging level name
        debug_mode: Forces DEBUG logging when set
    """

    fps: int = DEFAULT_FPS
    speed: int = DEFAULT_SPEED
    blocks: int = DEFAULT_BLOCKS
    foreground: str = DEFAULT_FOREGROUND
    overlay_alpha: float = DEFAULT_OVERLAY_ALPHA
    notice: str = DEFAULT_NOTICE
    color_mode: ColorMode = ColorMode.RGB
    eof_retry_delay: float = DEFAULT_EOF_RETRY_DELAY
    log_level: str = "INFO"
    debug_mode: bool = False

    @property
    def frame_delay(self) -> float:
        """Seconds slept after every frame"""
        return 1.0 / self.fps

    def validate(self) -> bool:
        """Validate animation configuration"""
        if self.fps <= 0:
            raise ValueError("Frame rate must be positive")
        if self.speed <= 0:
            raise ValueError("Frame speed must be positive")
        if self.blocks <= 0:
            raise ValueError("Block count must be positive")
        if not 0.0 <= self.overlay_alpha <= 1.0:
            raise ValueError("Overlay alpha must be between 0 and 1")
        if self.eof_retry_delay < 0:
            raise ValueError("EOF retry delay must not be negative")
        try:
            ImageColor.getrgb(self.foreground)
        except ValueError as e:
            raise ValueError(f"Invalid foreground color {self.foreground!r}") from e
        return True


def _env_flag(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes')


def apply_environment_overrides(config: AnimationConfig,
                                environ: Optional[Mapping[str, str]] = None) -> AnimationConfig:
    """
    Return a copy of config with PRIDE_* environment overrides applied.

    Raises:
        ValueError: If a numeric override or the color mode cannot be parsed
    """
    environ = os.environ if environ is None else environ
    overrides = {}

    if 'PRIDE_FPS' in environ:
        overrides['fps'] = int(environ['PRIDE_FPS'])
    if 'PRIDE_SPEED' in environ:
        overrides['speed'] = int(environ['PRIDE_SPEED'])
    if 'PRIDE_BLOCKS' in environ:
        overrides['blocks'] = int(environ['PRIDE_BLOCKS'])
    if 'PRIDE_FOREGROUND' in environ:
        overrides['foreground'] = environ['PRIDE_FOREGROUND']
    if 'PRIDE_NOTICE' in environ:
        overrides['notice'] = environ['PRIDE_NOTICE']
    if 'PRIDE_COLOR_MODE' in environ:
        overrides['color_mode'] = ColorMode(environ['PRIDE_COLOR_MODE'].lower())
    if 'PRIDE_LOG_LEVEL' in environ:
        overrides['log_level'] = environ['PRIDE_LOG_LEVEL'].upper()
    if 'PRIDE_DEBUG' in environ:
        overrides['debug_mode'] = _env_flag(environ['PRIDE_DEBUG'])

    return replace(config, **overrides)


# ============================================================================
# CONFIGURATION MANAGER (SINGLETON)
# ============================================================================

class ConfigurationManager:
    """
    Singleton configuration manager with runtime reloading.
    Thread-safe management of the global animation configuration.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config_lock = threading.RLock()
        self._config = self._load_environment_config(AnimationConfig(color_mode=detect_color_mode()))

        self._initialized = True
        logger.info("Configuration manager initialized")

    def _load_environment_config(self, base: AnimationConfig) -> AnimationConfig:
        """Apply environment overrides, falling back to base when they are invalid"""
        try:
            config = apply_environment_overrides(base)
            config.validate()
            return config
        except ValueError as e:
            logger.error(f"Ignoring invalid environment configuration: {e}")
            return base

    @property
    def config(self) -> AnimationConfig:
        """Get current configuration"""
        with self._config_lock:
            return self._config

    def reload(self, new_config: Optional[AnimationConfig] = None) -> bool:
        """
        Reload configuration.

        Args:
            new_config: New configuration to apply (reloads from env if None)

        Returns:
            True if reload successful
        """
        with self._config_lock:
            try:
                if new_config is not None:
                    new_config.validate()
                    self._config = new_config
                else:
                    self._config = self._load_environment_config(self._config)
            except ValueError as e:
                logger.error(f"Configuration reload failed: {e}")
                return False

            logger.info("Configuration reloaded successfully")
            return True


# ============================================================================
# PUBLIC API FUNCTIONS
# ============================================================================

_manager = ConfigurationManager()

def get_config() -> AnimationConfig:
    """Get current animation configuration"""
    return _manager.config

def reload_config(new_config: Optional[AnimationConfig] = None) -> bool:
    """Reload animation configuration"""
    return _manager.reload(new_config)
