"""
Ranking Engine

Orders the active universe by intraday percent change and computes
rank movement against the caller's RankingState.

Design Principles:
    - Stable: ties keep feed delivery order
    - Dense: ranks are exactly 1..N
    - Explicit state: all cross-call history lives in RankingState
    - Total: never raises, empty selection yields an empty leaderboard
"""

import logging
from typing import Iterable, List, Optional, Set

from tickrank.ranking_engine.schemas import (
    InstrumentKey,
    NormalizedTick,
    RankedEntry,
    RankingState,
    SourceMode
)

LOG = logging.getLogger(__name__)


class RankingEngine:
    """
    Ranking Engine

    Holds no session state of its own; the same instance can rank any number
    of sessions as long as each passes its own RankingState.
    """

    def __init__(self, default_exchange: str = "NSE"):
        """
        Initialize Ranking Engine.

        Args:
            default_exchange: Venue assumed for universe entries without one
        """
        self.default_exchange = default_exchange

    def compute(
        self,
        state: RankingState,
        ticks: Iterable[NormalizedTick],
        mode: SourceMode = SourceMode.WATCHLIST,
        universe: Optional[Iterable] = None
    ) -> List[RankedEntry]:
        """
        Rank the selected ticks and update previous ranks.

        Args:
            state: Session state, mutated in place (previous_ranks)
            ticks: Normalized ticks in feed order
            mode: WATCHLIST ranks every tick, CUSTOM only the universe
            universe: Custom symbol set (InstrumentKey, pairs or mappings)

        Returns:
            Ranked entries, rank 1 first
        """
        selected = self.select(ticks, mode, universe)

        # sorted() is stable, reverse=True keeps input order among ties
        ordered = sorted(selected, key=lambda t: t.percent_change, reverse=True)

        # Ranks as of the previous compute; a key repeated in this batch
        # must not see its own earlier row
        prior_ranks = dict(state.previous_ranks)

        entries = []
        for index, tick in enumerate(ordered):
            current_rank = index + 1
            key = tick.key
            previous_rank = prior_ranks.get(key, current_rank)

            state.previous_ranks[key] = current_rank

            entries.append(RankedEntry.from_tick(tick, current_rank, previous_rank))

        LOG.debug(
            f"Ranked {len(entries)} instruments ({SourceMode(mode).value} mode, "
            f"{len(state.previous_ranks)} tracked)"
        )
        return entries

    def select(
        self,
        ticks: Iterable[NormalizedTick],
        mode: SourceMode,
        universe: Optional[Iterable] = None
    ) -> List[NormalizedTick]:
        """Apply universe selection for the given mode, preserving order"""
        ticks = list(ticks or [])
        if SourceMode(mode) == SourceMode.WATCHLIST:
            return ticks

        keys = self.universe_keys(universe)
        return [tick for tick in ticks if tick.key in keys]

    def universe_keys(self, universe: Optional[Iterable]) -> Set[InstrumentKey]:
        """Composite keys of a custom universe"""
        return {
            InstrumentKey.coerce(item, self.default_exchange)
            for item in (universe or [])
        }
