"""
Opening Baseline Tracker

Captures one rank snapshot per contiguous open session and reports each
instrument's movement relative to it.

State transitions:
    CLOSED → OPEN_PENDING_CAPTURE → OPEN_CAPTURED → CLOSED
       ↓                                ↑
       └──────── (open with data) ──────┘
"""

import logging
from dataclasses import replace
from typing import List

from tickrank.ranking_engine.schemas import (
    BaselineState,
    RankedEntry,
    RankingState
)

LOG = logging.getLogger(__name__)


def next_baseline_state(
    current: BaselineState,
    is_market_open: bool,
    has_data: bool
) -> BaselineState:
    """
    Pure transition function of the opening baseline state machine.

    Args:
        current: State before this compute
        is_market_open: Market-open signal for this compute
        has_data: Whether the ranked set is non-empty

    Returns:
        State after this compute
    """
    if not is_market_open:
        return BaselineState.CLOSED
    if current == BaselineState.OPEN_CAPTURED:
        return BaselineState.OPEN_CAPTURED
    if has_data:
        return BaselineState.OPEN_CAPTURED
    return BaselineState.OPEN_PENDING_CAPTURE


class OpeningBaselineTracker:
    """
    Drives RankingState.baseline_state and opening_ranks.

    Stateless itself; the session's RankingState carries the snapshot.
    """

    def annotate(
        self,
        state: RankingState,
        entries: List[RankedEntry],
        is_market_open: bool
    ) -> List[RankedEntry]:
        """
        Advance the state machine and set opening_rank_change on each entry.

        Args:
            state: Session state, mutated in place
            entries: Freshly ranked entries
            is_market_open: Market-open signal

        Returns:
            New entries with opening_rank_change filled in
        """
        previous = state.baseline_state
        current = next_baseline_state(previous, bool(is_market_open), len(entries) > 0)

        if current == BaselineState.CLOSED:
            if previous != BaselineState.CLOSED or state.opening_ranks:
                LOG.info(
                    f"Market closed: clearing opening baseline "
                    f"({len(state.opening_ranks)} instruments)"
                )
            state.opening_ranks.clear()
        elif current == BaselineState.OPEN_CAPTURED and previous != BaselineState.OPEN_CAPTURED:
            self._capture(state, entries)
        elif current == BaselineState.OPEN_PENDING_CAPTURE and previous == BaselineState.CLOSED:
            LOG.info("Market open: waiting for ranked data to capture opening baseline")

        state.baseline_state = current

        # The capturing compute is the baseline itself: no movement yet
        captured_now = current == BaselineState.OPEN_CAPTURED and previous != BaselineState.OPEN_CAPTURED
        if current != BaselineState.OPEN_CAPTURED or captured_now:
            return [replace(entry, opening_rank_change=0) for entry in entries]

        return [
            replace(entry, opening_rank_change=self.opening_rank_change(state, entry))
            for entry in entries
        ]

    @staticmethod
    def opening_rank_change(state: RankingState, entry: RankedEntry) -> int:
        """Movement since the opening snapshot, 0 for keys added after capture"""
        opening_rank = state.opening_ranks.get(entry.key)
        if opening_rank is None:
            return 0
        return opening_rank - entry.current_rank

    def _capture(self, state: RankingState, entries: List[RankedEntry]):
        state.opening_ranks.clear()
        for entry in entries:
            state.opening_ranks[entry.key] = entry.current_rank
        LOG.info(f"Captured opening baseline for {len(entries)} instruments")
