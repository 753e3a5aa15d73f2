"""
Tests for heatmap presentation helpers
"""

import pytest

from tickrank.presentation import (
    format_price,
    format_volume,
    get_bar_width,
    get_change_color,
    get_text_color
)
from tickrank.presentation.heatmap import (
    GAIN_BANDS,
    GAIN_NEAR_ZERO,
    LOSS_BANDS,
    LOSS_NEAR_ZERO
)


class TestChangeColor:
    """Test colour bands."""

    @pytest.mark.parametrize("change,expected", [
        (5.0, '#00C853'),
        (4.0, '#00B248'),
        (3.5, '#00B248'),
        (2.5, '#00A63E'),
        (1.75, '#009A38'),
        (1.2, '#089981'),
        (0.7, '#0D9668'),
        (0.3, '#26A69A'),
        (0.2, '#3D8B80'),
        (0.0, '#3D8B80'),
    ])
    def test_gain_ramp(self, change, expected):
        assert get_change_color(change) == expected

    @pytest.mark.parametrize("change,expected", [
        (-5.0, '#FF1744'),
        (-3.5, '#F5153D'),
        (-2.5, '#E91235'),
        (-1.75, '#D8102F'),
        (-1.2, '#C62828'),
        (-0.7, '#B71C1C'),
        (-0.3, '#A52727'),
        (-0.1, '#8B3030'),
    ])
    def test_loss_ramp(self, change, expected):
        assert get_change_color(change) == expected

    def test_eight_distinct_bands_per_sign(self):
        gains = [color for _, color in GAIN_BANDS] + [GAIN_NEAR_ZERO]
        losses = [color for _, color in LOSS_BANDS] + [LOSS_NEAR_ZERO]
        assert len(set(gains)) == 8
        assert len(set(losses)) == 8
        assert not set(gains) & set(losses)

    def test_text_color(self):
        assert get_text_color() == '#FFFFFF'


class TestBarWidth:

    def test_scaled(self):
        assert get_bar_width(2.0, 4.0) == pytest.approx(50.0)

    def test_capped(self):
        assert get_bar_width(-8.0, 4.0) == 100

    def test_small_max_floored_to_one(self):
        assert get_bar_width(0.5, 0.2) == pytest.approx(50.0)


class TestFormatting:

    @pytest.mark.parametrize("vol,expected", [
        (12_345_678, "1.2Cr"),
        (10_000_000, "1.0Cr"),
        (250_000, "2.5L"),
        (100_000, "1.0L"),
        (1_500, "1.5K"),
        (1_000, "1.0K"),
        (999, "999"),
        (0, "0"),
        (42.0, "42"),
    ])
    def test_format_volume(self, vol, expected):
        assert format_volume(vol) == expected

    @pytest.mark.parametrize("vol", [float("inf"), float("-inf"), float("nan")])
    def test_format_volume_non_finite(self, vol):
        assert format_volume(vol) == "0"

    @pytest.mark.parametrize("price,expected", [
        (2450.6, "2451"),
        (1000, "1000"),
        (123.46, "123.5"),
        (100, "100.0"),
        (45.678, "45.68"),
        (0, "0.00"),
    ])
    def test_format_price(self, price, expected):
        assert format_price(price) == expected
