"""
Heatmap Presentation Helpers

Stateless mapping of leaderboard values to display colours and strings.
Volume uses Indian notation (K / L / Cr).
"""

import math
from typing import List, Tuple

# (lower bound on |change|, colour), checked top-down; last band catches the rest
GAIN_BANDS: List[Tuple[float, str]] = [
    (4.0, '#00C853'),
    (3.0, '#00B248'),
    (2.0, '#00A63E'),
    (1.5, '#009A38'),
    (1.0, '#089981'),
    (0.5, '#0D9668'),
    (0.2, '#26A69A'),
]
GAIN_NEAR_ZERO = '#3D8B80'

LOSS_BANDS: List[Tuple[float, str]] = [
    (4.0, '#FF1744'),
    (3.0, '#F5153D'),
    (2.0, '#E91235'),
    (1.5, '#D8102F'),
    (1.0, '#C62828'),
    (0.5, '#B71C1C'),
    (0.2, '#A52727'),
]
LOSS_NEAR_ZERO = '#8B3030'

TEXT_COLOR = '#FFFFFF'

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def get_change_color(change: float) -> str:
    """
    Colour for a percent change.

    Zero counts as a gain. Bands are exclusive lower bounds on |change|.
    """
    bands, near_zero = (GAIN_BANDS, GAIN_NEAR_ZERO) if change >= 0 else (LOSS_BANDS, LOSS_NEAR_ZERO)
    magnitude = abs(change)
    for bound, color in bands:
        if magnitude > bound:
            return color
    return near_zero


def get_text_color() -> str:
    """Tile text colour (white on every band)"""
    return TEXT_COLOR


def get_bar_width(change: float, max_change: float) -> float:
    """Bar width in percent, scaled to max_change (floored at 1) and capped at 100"""
    return min(abs(change) / max(max_change, 1) * 100, 100)


def format_volume(vol: float) -> str:
    """Indian-notation volume; non-finite input renders as '0'"""
    if not math.isfinite(vol):
        return "0"
    if vol >= CRORE:
        return f"{vol / CRORE:.1f}Cr"
    if vol >= LAKH:
        return f"{vol / LAKH:.1f}L"
    if vol >= THOUSAND:
        return f"{vol / THOUSAND:.1f}K"
    return str(int(vol))


def format_price(price: float) -> str:
    if price >= 1000:
        return f"{price:.0f}"
    if price >= 100:
        return f"{price:.1f}"
    return f"{price:.2f}"
