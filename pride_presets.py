#!/usr/bin/env python3
"""
🏳️‍🌈 Pride Month Animator - Flag Presets
=========================================
Copyright (c) 2025 Pride Month Animator Authors

Catalogue of pride flag color profiles and the palette assembler that
flattens them into the animation's color cycle.

Every preset lists its stripes top to bottom as hex strings. Some flags
have stripes of unequal height; those profiles carry weights and repeat
the affected colors accordingly.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from pride_color import Color

logger = logging.getLogger('pride.presets')


@dataclass(frozen=True)
class ColorProfile:
    """Ordered stripe colors of one flag, optionally weighted"""
    raw: Tuple[Color, ...]
    weights: Optional[Tuple[int, ...]] = None

    @classmethod
    def from_hex(cls, *values: str) -> "ColorProfile":
        return cls(tuple(Color.from_hex(v) for v in values))

    def with_weights(self, *weights: int) -> "ColorProfile":
        """Return a profile where color i is repeated weights[i] times"""
        if len(weights) != len(self.raw):
            raise ValueError(f"Expected {len(self.raw)} weights, got {len(weights)}")
        return ColorProfile(self.raw, tuple(weights))

    @property
    def colors(self) -> List[Color]:
        if self.weights is None:
            return list(self.raw)
        return [c for c, w in zip(self.raw, self.weights) for _ in range(w)]


# ============================================================================
# PRESET CATALOGUE
# ============================================================================

PRESET_PROFILES: Dict[str, ColorProfile] = {
    'rainbow': ColorProfile.from_hex(
        '#E50000', '#FF8D00', '#FFEE00', '#028121', '#004CFF', '#770088'),
    'transgender': ColorProfile.from_hex(
        '#55CDFD', '#F6AAB7', '#FFFFFF', '#F6AAB7', '#55CDFD'),
    'nonbinary': ColorProfile.from_hex(
        '#FCF431', '#FCFCFC', '#9D59D2', '#282828'),
    'agender': ColorProfile.from_hex(
        '#000000', '#BABABA', '#FFFFFF', '#BAF484', '#FFFFFF', '#BABABA', '#000000'),
    'queer': ColorProfile.from_hex(
        '#B57FDD', '#FFFFFF', '#49821E'),
    'genderfluid': ColorProfile.from_hex(
        '#FE76A2', '#FFFFFF', '#BF12D7', '#000000', '#303CBE'),
    'bisexual': ColorProfile.from_hex(
        '#D60270', '#9B4F96', '#0038A8').with_weights(2, 1, 2),
    'pansexual': ColorProfile.from_hex(
        '#FF1C8D', '#FFD700', '#1AB3FF'),
    'polysexual': ColorProfile.from_hex(
        '#F714BA', '#01D66A', '#1594F6'),
    'omnisexual': ColorProfile.from_hex(
        '#FE9ACE', '#FF53BF', '#200044', '#6760FE', '#8EA6FF'),
    'omniromantic': ColorProfile.from_hex(
        '#FEC8E4', '#FDA1DB', '#89739A', '#ABA7FE', '#BFCEFF'),
    'gay-men': ColorProfile.from_hex(
        '#078D70', '#98E8C1', '#FFFFFF', '#7BADE2', '#3D1A78'),
    'lesbian': ColorProfile.from_hex(
        '#D62800', '#FF9B56', '#FFFFFF', '#D462A6', '#A40062'),
    'abrosexual': ColorProfile.from_hex(
        '#46D294', '#A3E9CA', '#FFFFFF', '#F78BB3', '#EE1766'),
    'asexual': ColorProfile.from_hex(
        '#000000', '#A4A4A4', '#FFFFFF', '#810081'),
    'aromantic': ColorProfile.from_hex(
        '#3BA740', '#A8D47A', '#FFFFFF', '#ABABAB', '#000000'),
    'aroace': ColorProfile.from_hex(
        '#E28C00', '#ECCD00', '#FFFFFF', '#62AEDC', '#203856'),
    'greysexual': ColorProfile.from_hex(
        '#740194', '#AEB1AA', '#FFFFFF', '#AEB1AA', '#740194'),
    'demisexual': ColorProfile.from_hex(
        '#FFFFFF', '#6E0071', '#D3D3D3').with_weights(3, 1, 3),
    'intersex': ColorProfile.from_hex(
        '#FFD800', '#7902AA', '#FFD800').with_weights(2, 1, 2),
    'neutrois': ColorProfile.from_hex(
        '#FFFFFF', '#1F9F00', '#000000'),
    'bigender': ColorProfile.from_hex(
        '#C479A2', '#EDA5CD', '#D6C7E8', '#FFFFFF', '#D6C7E8', '#9AC7E8', '#6D82D1'),
    'demigirl': ColorProfile.from_hex(
        '#7F7F7F', '#C4C4C4', '#FDADC8', '#FFFFFF', '#FDADC8', '#C4C4C4', '#7F7F7F'),
    'demiboy': ColorProfile.from_hex(
        '#7F7F7F', '#C4C4C4', '#9DD7EA', '#FFFFFF', '#9DD7EA', '#C4C4C4', '#7F7F7F'),
    'fraysexual': ColorProfile.from_hex(
        '#226CB5', '#94E7DD', '#FFFFFF', '#636363'),
    'plural': ColorProfile.from_hex(
        '#2D0625', '#543475', '#7675C3', '#89C7B0', '#F3EDBD'),
    'baker': ColorProfile.from_hex(
        '#F23D9E', '#F80A24', '#F78022', '#F9E81F', '#1E972E', '#1B86BC', '#243897', '#6F0A82'),
}

class Preset(Enum):
    """Available flag presets; member order fixes the color cycle order"""
    RAINBOW = 'rainbow'
    TRANSGENDER = 'transgender'
    NONBINARY = 'nonbinary'
    AGENDER = 'agender'
    QUEER = 'queer'
    GENDERFLUID = 'genderfluid'
    BISEXUAL = 'bisexual'
    PANSEXUAL = 'pansexual'
    POLYSEXUAL = 'polysexual'
    OMNISEXUAL = 'omnisexual'
    OMNIROMANTIC = 'omniromantic'
    GAY_MEN = 'gay-men'
    LESBIAN = 'lesbian'
    ABROSEXUAL = 'abrosexual'
    ASEXUAL = 'asexual'
    AROMANTIC = 'aromantic'
    AROACE = 'aroace'
    GREYSEXUAL = 'greysexual'
    DEMISEXUAL = 'demisexual'
    INTERSEX = 'intersex'
    NEUTROIS = 'neutrois'
    BIGENDER = 'bigender'
    DEMIGIRL = 'demigirl'
    DEMIBOY = 'demiboy'
    FRAYSEXUAL = 'fraysexual'
    PLURAL = 'plural'
    BAKER = 'baker'

    def color_profile(self) -> ColorProfile:
        return PRESET_PROFILES[self.value]


# ============================================================================
# PALETTE ASSEMBLER
# ============================================================================

def assemble_color_cycle(presets: Optional[Iterable[Preset]] = None) -> List[Color]:
    """
    Concatenate the colors of every preset into one color cycle.

    Args:
        presets: Presets to use, in order (all presets when None)

    Returns:
        Flat list of colors; each preset keeps its internal order and
        duplicates are preserved

    Raises:
        ValueError: If the selection yields no colors
    """
    presets = list(Preset) if presets is None else list(presets)
    cycle = [color for preset in presets for color in preset.color_profile().colors]
    if not cycle:
        raise ValueError("Color cycle must contain at least one color")

    logger.info(f"Assembled color cycle: {len(cycle)} colors from {len(presets)} presets")
    return cycle


def cycle_to_array(cycle: Sequence[Color]) -> np.ndarray:
    """Color cycle as an (n, 3) uint8 array for vectorised lookup"""
    return np.array(cycle, dtype=np.uint8).reshape(-1, 3)
