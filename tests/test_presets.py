"""Tests for the preset catalogue and palette assembler."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from pride_color import Color
from pride_presets import (
    PRESET_PROFILES,
    ColorProfile,
    Preset,
    assemble_color_cycle,
    cycle_to_array,
)


class TestColorProfile:
    def test_unweighted_colors_keep_order(self):
        profile = ColorProfile.from_hex("#FF0000", "#00FF00")
        assert profile.colors == [Color(255, 0, 0), Color(0, 255, 0)]

    def test_weights_repeat_colors(self):
        profile = ColorProfile.from_hex("#FF0000", "#00FF00").with_weights(2, 1)
        assert profile.colors == [Color(255, 0, 0), Color(255, 0, 0), Color(0, 255, 0)]

    def test_weight_count_must_match(self):
        with pytest.raises(ValueError):
            ColorProfile.from_hex("#FF0000").with_weights(1, 2)


class TestPresets:
    def test_every_preset_has_a_profile(self):
        assert [p.value for p in Preset] == list(PRESET_PROFILES)

    def test_rainbow_is_first(self):
        assert list(Preset)[0] is Preset.RAINBOW
        assert Preset.RAINBOW.color_profile().colors[0] == Color.from_hex("#E50000")

    def test_weighted_preset(self):
        colors = Preset.INTERSEX.color_profile().colors
        assert len(colors) == 5
        assert colors[2] == Color.from_hex("#7902AA")


class TestAssembleColorCycle:
    def test_concatenates_all_presets_in_order(self):
        cycle = assemble_color_cycle()
        expected = [c for p in Preset for c in p.color_profile().colors]
        assert cycle == expected

    def test_duplicates_are_preserved(self):
        cycle = assemble_color_cycle([Preset.TRANSGENDER])
        assert cycle[0] == cycle[4]
        assert len(cycle) == 5

    def test_selection_order_is_respected(self):
        cycle = assemble_color_cycle([Preset.QUEER, Preset.RAINBOW])
        assert cycle[:3] == Preset.QUEER.color_profile().colors
        assert cycle[3:] == Preset.RAINBOW.color_profile().colors

    def test_empty_selection_rejected(self):
        with pytest.raises(ValueError):
            assemble_color_cycle([])

    def test_cycle_to_array(self):
        array = cycle_to_array([Color(1, 2, 3), Color(4, 5, 6)])
        assert array.dtype == np.uint8
        assert array.shape == (2, 3)

    @given(idx=st.integers(min_value=0, max_value=10**9), block_width=st.integers(min_value=1, max_value=500))
    def test_stripe_number_is_a_valid_index(self, idx, block_width):
        cycle = assemble_color_cycle()
        position = (idx // block_width) % len(cycle)
        assert 0 <= position < len(cycle)
        assert isinstance(cycle[position], Color)
