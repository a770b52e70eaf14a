"""Pytest fixtures for pride month animator tests."""

from __future__ import annotations

import io
import os

import pytest
from hypothesis import Phase, Verbosity, settings

from config import AnimationConfig, ColorMode
from pride_color import Color
from pride_layout import TEXT_ASCII, compute_layout, split_art

settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


# Six rows, fifty-four columns
SCENARIO_ART = ["#" * 54] * 6
SCENARIO_NOTICE = "Press enter to continue!"


@pytest.fixture
def art_lines() -> list[str]:
    return split_art(TEXT_ASCII)


@pytest.fixture
def scenario_layout():
    return compute_layout(80, 24, SCENARIO_ART, SCENARIO_NOTICE)


@pytest.fixture
def small_cycle() -> list[Color]:
    return [
        Color(255, 0, 0),
        Color(0, 255, 0),
        Color(0, 0, 255),
        Color(255, 255, 255),
    ]


@pytest.fixture
def animation_config() -> AnimationConfig:
    return AnimationConfig(color_mode=ColorMode.RGB, eof_retry_delay=0.001)


class RecordingOutput(io.StringIO):
    """Text sink that remembers every write and flush."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: list[str] = []
        self.flushes = 0

    def write(self, text: str) -> int:
        self.writes.append(text)
        return super().write(text)

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


@pytest.fixture
def recording_output() -> RecordingOutput:
    return RecordingOutput()
