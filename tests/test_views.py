"""
Tests for Leaderboard Views
"""

import pandas as pd
import pytest

from tickrank.ranking_engine import RankedEntry
from tickrank.ranking_engine.views import (
    FRAME_COLUMNS,
    LeaderboardFilter,
    filter_leaderboard,
    sector_options,
    top_n_options,
    to_frame
)


def make_entry(symbol, change, sector, rank):
    return RankedEntry(
        symbol=symbol, exchange="NSE", ltp=100.0, open_price=100.0,
        volume=1000.0, percent_change=change, sector=sector,
        current_rank=rank, previous_rank=rank, rank_change=0
    )


@pytest.fixture
def leaderboard():
    moves = [
        ("TCS", 3.0, "IT"), ("SBIN", 2.0, "Banking"), ("INFY", 1.0, "IT"),
        ("FLAT", 0.0, "IT"), ("PNB", -0.5, "Banking"), ("WIPRO", -2.0, "IT"),
        ("AXISBANK", -4.0, "Banking"),
    ]
    return [make_entry(s, c, sec, i + 1) for i, (s, c, sec) in enumerate(moves)]


class TestFilterLeaderboard:
    """Test sector and gainers/losers filters."""

    def test_all_is_untruncated(self, leaderboard):
        result = filter_leaderboard(leaderboard, LeaderboardFilter.ALL, top_n=2)
        assert result == leaderboard

    def test_sector_filter(self, leaderboard):
        result = filter_leaderboard(leaderboard, sector="Banking")
        assert [e.symbol for e in result] == ["SBIN", "PNB", "AXISBANK"]

    def test_gainers_exclude_flat(self, leaderboard):
        result = filter_leaderboard(leaderboard, LeaderboardFilter.GAINERS)
        assert [e.symbol for e in result] == ["TCS", "SBIN", "INFY"]

    def test_losers_worst_first(self, leaderboard):
        result = filter_leaderboard(leaderboard, LeaderboardFilter.LOSERS)
        assert [e.symbol for e in result] == ["AXISBANK", "WIPRO", "PNB"]

    def test_top_n(self, leaderboard):
        assert len(filter_leaderboard(leaderboard, LeaderboardFilter.GAINERS, top_n=2)) == 2
        result = filter_leaderboard(leaderboard, LeaderboardFilter.LOSERS, top_n=1)
        assert [e.symbol for e in result] == ["AXISBANK"]

    def test_sector_then_gainers(self, leaderboard):
        result = filter_leaderboard(leaderboard, "gainers", sector="IT")
        assert [e.symbol for e in result] == ["TCS", "INFY"]

    def test_unknown_sector_empty(self, leaderboard):
        assert filter_leaderboard(leaderboard, sector="Pharma") == []


class TestFrameExport:
    """Test DataFrame export."""

    def test_to_frame(self, leaderboard):
        df = to_frame(leaderboard)

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == FRAME_COLUMNS
        assert len(df) == len(leaderboard)
        assert df["current_rank"].tolist() == list(range(1, 8))
        assert df.loc[0, "symbol"] == "TCS"

    def test_empty_frame(self):
        df = to_frame([])
        assert df.empty
        assert list(df.columns) == FRAME_COLUMNS


def test_sector_options():
    options = sector_options({'A': 'IT', 'B': 'Banking', 'C': 'IT'})
    assert options == ["All", "IT", "Banking"]


def test_top_n_options():
    assert top_n_options() == [5, 10, 15, 20, 25]


def test_default_top_n_is_ten():
    many = [make_entry(f"S{i}", 20.0 - i, "IT", i + 1) for i in range(15)]
    assert len(filter_leaderboard(many, LeaderboardFilter.GAINERS)) == 10


def test_sector_options_from_entries(leaderboard):
    custom = [make_entry("X", 1.0, "Defence", 1)] + leaderboard
    assert sector_options(entries=custom) == ["All", "Defence", "IT", "Banking"]
    assert sector_options(entries=[]) == ["All"]


@pytest.mark.parametrize("top_n", [0, -1])
def test_non_positive_top_n_rejected(leaderboard, top_n):
    with pytest.raises(ValueError):
        filter_leaderboard(leaderboard, LeaderboardFilter.GAINERS, top_n=top_n)
