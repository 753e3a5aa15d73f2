"""
Presentation

Colour bands and display formatting for leaderboard and heatmap tiles.
"""

from tickrank.presentation.heatmap import (
    format_price,
    format_volume,
    get_bar_width,
    get_change_color,
    get_text_color
)

__all__ = [
    'format_price',
    'format_volume',
    'get_bar_width',
    'get_change_color',
    'get_text_color',
]
