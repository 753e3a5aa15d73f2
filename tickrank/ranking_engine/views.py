"""
Leaderboard Views

Read-only slices of a ranked leaderboard: sector filter, top-N gainers and
losers, and tabular export. Never touches RankingState.
"""

from enum import Enum
from typing import Iterable, List, Mapping, Optional

import pandas as pd

from tickrank.ranking_engine.config import LeaderboardConfig
from tickrank.ranking_engine.schemas import RankedEntry
from tickrank.ranking_engine.sectors import known_sectors

ALL_SECTORS = "All"

_DEFAULT_LEADERBOARD = LeaderboardConfig()

FRAME_COLUMNS = [
    'current_rank', 'symbol', 'exchange', 'sector', 'ltp', 'open_price',
    'percent_change', 'volume', 'previous_rank', 'rank_change',
    'opening_rank_change', 'is_volume_spike',
]


class LeaderboardFilter(str, Enum):
    """Gainers/losers view selector"""
    ALL = "all"
    GAINERS = "gainers"
    LOSERS = "losers"


def filter_leaderboard(
    entries: List[RankedEntry],
    filter_mode: LeaderboardFilter = LeaderboardFilter.ALL,
    sector: str = ALL_SECTORS,
    top_n: Optional[int] = None
) -> List[RankedEntry]:
    """
    Slice a leaderboard for display.

    Sector filter is applied first. ALL returns the remaining entries in rank
    order without truncation. GAINERS keeps positive movers (best first),
    LOSERS keeps negative movers (worst first), each capped at top_n.
    Raises ValueError for a top_n that is not positive.
    """
    if top_n is None:
        top_n = _DEFAULT_LEADERBOARD.default_top_n
    if top_n <= 0:
        raise ValueError(f"top_n must be positive, got {top_n}")

    data = list(entries)
    if sector != ALL_SECTORS:
        data = [e for e in data if e.sector == sector]

    filter_mode = LeaderboardFilter(filter_mode)
    if filter_mode == LeaderboardFilter.GAINERS:
        gainers = [e for e in data if e.percent_change > 0]
        return sorted(gainers, key=lambda e: e.percent_change, reverse=True)[:top_n]
    if filter_mode == LeaderboardFilter.LOSERS:
        losers = [e for e in data if e.percent_change < 0]
        return sorted(losers, key=lambda e: e.percent_change)[:top_n]
    return data


def sector_options(
    mapping: Optional[Mapping[str, str]] = None,
    entries: Optional[Iterable[RankedEntry]] = None
) -> List[str]:
    """
    Sector filter choices, "All" first.

    With entries, offers the sectors actually present on them (first-seen
    order), which stays in step with a custom sector lookup. Otherwise lists
    the sectors of the given mapping, or of the default map.
    """
    if entries is not None:
        return [ALL_SECTORS] + list(dict.fromkeys(e.sector for e in entries))
    return [ALL_SECTORS] + known_sectors(mapping)


def top_n_options(config: Optional[LeaderboardConfig] = None) -> List[int]:
    """Top-N choices offered by gainers/losers views"""
    return list((config or _DEFAULT_LEADERBOARD).top_n_options)


def to_frame(entries: List[RankedEntry]) -> pd.DataFrame:
    """One row per entry, in rank order"""
    if not entries:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame([e.to_dict() for e in entries], columns=FRAME_COLUMNS)
