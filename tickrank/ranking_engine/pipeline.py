"""
Ranking Pipeline

Orchestrates one leaderboard update:
1. Tick normalization
2. Universe selection and ranking
3. Opening baseline annotation
4. Volume spike annotation
5. Health tracking

Each call is a full recomputation over a materialized batch; the only
history carried between calls is the caller's RankingState.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

import numpy as np

from tickrank.market_session.market_calendar import is_market_open as calendar_is_open
from tickrank.ranking_engine.baseline import OpeningBaselineTracker
from tickrank.ranking_engine.config import RankingEngineConfig
from tickrank.ranking_engine.engine import RankingEngine
from tickrank.ranking_engine.normalizer import TickInput, TickNormalizer
from tickrank.ranking_engine.schemas import (
    BaselineState,
    LeaderboardOutput,
    RankingPipelineHealth,
    RankingState,
    SourceMode
)
from tickrank.ranking_engine.sectors import SectorLookup
from tickrank.ranking_engine.spike_detector import SpikeDetector

LOG = logging.getLogger(__name__)

ENGINE_VERSION = "1.0.0"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RankingPipeline:
    """
    Ranking Pipeline

    Turns raw tick batches into annotated leaderboards. Holds configuration
    and health counters only; session history lives in RankingState.
    """

    def __init__(
        self,
        config: Optional[RankingEngineConfig] = None,
        lookup_sector: Optional[SectorLookup] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize Ranking Pipeline.

        Args:
            config: Pipeline configuration (uses defaults if None)
            lookup_sector: symbol -> sector collaborator (default mapping if None)
            clock: Current-time source, used for timestamps and the market calendar
        """
        self.config = config or RankingEngineConfig()
        self.config_hash = self.config.compute_hash()
        self.clock = clock or _utc_now

        self.normalizer = TickNormalizer(self.config.normalizer, lookup_sector)
        self.engine = RankingEngine(self.config.normalizer.default_exchange)
        self.baseline_tracker = OpeningBaselineTracker()
        self.spike_detector = SpikeDetector(self.config.spike_detector)

        # Health tracking
        self.health = RankingPipelineHealth()
        self._processing_times = []

    def create_state(self) -> RankingState:
        """Start a new ranking session"""
        return RankingState()

    def process_batch(
        self,
        state: RankingState,
        raw_ticks: Optional[Iterable[TickInput]],
        mode: SourceMode = SourceMode.WATCHLIST,
        universe: Optional[Iterable] = None,
        is_market_open: Optional[bool] = None
    ) -> LeaderboardOutput:
        """
        Process one tick batch into a leaderboard.

        This is the main entry point called per feed update.

        Args:
            state: Session state (previous ranks, opening baseline)
            raw_ticks: Feed records in delivery order
            mode: WATCHLIST or CUSTOM
            universe: Custom symbol set for CUSTOM mode
            is_market_open: Market-open signal; consults the market calendar if None

        Returns:
            LeaderboardOutput with ranked, annotated entries
        """
        start_time = time.perf_counter()
        now = self.clock()
        mode = SourceMode(mode)

        if is_market_open is None:
            is_market_open = calendar_is_open(now, self.config.market_hours)

        ticks = self.normalizer.normalize_batch(raw_ticks)
        ranked = self.engine.compute(state, ticks, mode, universe)

        baseline_before = state.baseline_state
        entries = self.baseline_tracker.annotate(state, ranked, is_market_open)
        entries = self.spike_detector.annotate(entries)
        mean_volume, threshold = self.spike_detector.compute_threshold(entries)

        processing_time = (time.perf_counter() - start_time) * 1000

        output = LeaderboardOutput(
            timestamp=now,
            mode=mode,
            entries=entries,
            baseline_state=state.baseline_state,
            mean_volume=mean_volume,
            spike_threshold=threshold,
            config_hash=self.config_hash,
            engine_version=ENGINE_VERSION,
            processing_time_ms=processing_time
        )

        self._update_health(output, len(ticks), baseline_before, state.baseline_state, now)

        return output

    def _update_health(
        self,
        output: LeaderboardOutput,
        ticks_normalized: int,
        baseline_before: BaselineState,
        baseline_after: BaselineState,
        now: datetime
    ):
        """Update health metrics"""
        self.health.total_batches_processed += 1
        self.health.total_ticks_normalized += ticks_normalized
        self.health.last_universe_size = output.universe_size
        self.health.spikes_flagged += output.spike_count
        self.health.last_batch_time = now

        if baseline_after == BaselineState.OPEN_CAPTURED and baseline_before != BaselineState.OPEN_CAPTURED:
            self.health.baseline_captures += 1
        if baseline_after == BaselineState.CLOSED and baseline_before != BaselineState.CLOSED:
            self.health.baseline_resets += 1

        self._processing_times.append(output.processing_time_ms)
        if len(self._processing_times) > 1000:
            self._processing_times.pop(0)
        self.health.avg_processing_time_ms = float(np.mean(self._processing_times))

    def get_health(self) -> RankingPipelineHealth:
        """Get current health metrics"""
        return self.health

    def reset_health(self):
        """Reset health counters"""
        self.health = RankingPipelineHealth()
        self._processing_times = []
