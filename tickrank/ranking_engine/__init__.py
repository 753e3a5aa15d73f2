"""
Real-Time Ranking Engine

Turns a stream of per-instrument ticks into a stably ordered, annotated
leaderboard for position-tracker and sector-heatmap views.

Flow:
    Raw ticks → TickNormalizer → RankingEngine → OpeningBaselineTracker → SpikeDetector

Responsibilities:
    1. Tick normalization (lenient coercion, default venue, sector lookup)
    2. Universe selection (watchlist or custom symbol set)
    3. Stable ranking by intraday percent change
    4. Tick-to-tick rank movement
    5. Movement since the opening baseline
    6. Volume spike flagging

State:
    All cross-call history lives in a caller-owned RankingState,
    one per ranking session.
"""

from tickrank.ranking_engine.config import (
    LeaderboardConfig,
    NormalizerConfig,
    RankingEngineConfig,
    SpikeDetectorConfig
)
from tickrank.ranking_engine.schemas import (
    BaselineState,
    InstrumentKey,
    LeaderboardOutput,
    NormalizedTick,
    RankedEntry,
    RankingPipelineHealth,
    RankingState,
    RawTick,
    SourceMode
)
from tickrank.ranking_engine.normalizer import (
    TickNormalizer,
    calculate_intraday_change,
    coerce_float
)
from tickrank.ranking_engine.engine import RankingEngine
from tickrank.ranking_engine.baseline import OpeningBaselineTracker, next_baseline_state
from tickrank.ranking_engine.spike_detector import SpikeDetector
from tickrank.ranking_engine.pipeline import RankingPipeline
from tickrank.ranking_engine.sectors import UNKNOWN_SECTOR, get_sector, make_sector_lookup
from tickrank.ranking_engine.views import LeaderboardFilter, filter_leaderboard, to_frame

__version__ = "1.0.0"

__all__ = [
    'LeaderboardConfig',
    'NormalizerConfig',
    'RankingEngineConfig',
    'SpikeDetectorConfig',
    'BaselineState',
    'InstrumentKey',
    'LeaderboardOutput',
    'NormalizedTick',
    'RankedEntry',
    'RankingPipelineHealth',
    'RankingState',
    'RawTick',
    'SourceMode',
    'TickNormalizer',
    'calculate_intraday_change',
    'coerce_float',
    'RankingEngine',
    'OpeningBaselineTracker',
    'next_baseline_state',
    'SpikeDetector',
    'RankingPipeline',
    'UNKNOWN_SECTOR',
    'get_sector',
    'make_sector_lookup',
    'LeaderboardFilter',
    'filter_leaderboard',
    'to_frame',
]
