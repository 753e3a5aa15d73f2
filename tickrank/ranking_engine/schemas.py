"""
Ranking Engine Schemas

Defines tick records, ranked leaderboard entries and per-session ranking state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from collections.abc import Mapping
from typing import Any, Dict, List, Optional
from enum import Enum


class SourceMode(str, Enum):
    """Which universe a ranking session draws from"""
    WATCHLIST = "watchlist"   # All ticks delivered by the feed
    CUSTOM = "custom"         # Only the caller's custom symbol set


class BaselineState(str, Enum):
    """Opening baseline state machine states"""
    CLOSED = "CLOSED"                              # Market closed, no baseline
    OPEN_PENDING_CAPTURE = "OPEN_PENDING_CAPTURE"  # Open, waiting for a non-empty ranked set
    OPEN_CAPTURED = "OPEN_CAPTURED"                # Baseline frozen for this session


@dataclass(frozen=True)
class InstrumentKey:
    """
    Unique identity of an instrument across all per-instrument state.

    Case-sensitive on both parts.
    """

    symbol: str
    exchange: str

    @classmethod
    def coerce(cls, value: Any, default_exchange: str) -> "InstrumentKey":
        """
        Build a key from an InstrumentKey, a (symbol, exchange) pair or a
        {symbol, exchange?} mapping. A blank exchange means the default venue.
        """
        if isinstance(value, InstrumentKey):
            return value
        if isinstance(value, Mapping):
            symbol = value.get('symbol')
            exchange = value.get('exchange')
        elif isinstance(value, (tuple, list)):
            symbol = value[0] if len(value) > 0 else None
            exchange = value[1] if len(value) > 1 else None
        else:
            symbol, exchange = value, None

        exchange = str(exchange).strip() if exchange is not None else ""
        return cls(
            symbol="" if symbol is None else str(symbol),
            exchange=exchange or default_exchange,
        )

    def __str__(self) -> str:
        return f"{self.symbol}-{self.exchange}"


@dataclass
class RawTick:
    """
    Tick record as delivered by the feed.

    Numeric fields are untrusted and may hold strings, None or garbage.
    """

    symbol: Any = ""
    exchange: Any = None
    last: Any = None
    open: Any = None
    volume: Any = None
    percent_change_hint: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawTick":
        """Build from a feed record (`last`, `open`, `volume`, `chgP`)"""
        hint = data.get('chgP')
        if hint is None:
            hint = data.get('percent_change_hint')
        return cls(
            symbol=data.get('symbol', ""),
            exchange=data.get('exchange'),
            last=data.get('last'),
            open=data.get('open'),
            volume=data.get('volume'),
            percent_change_hint=hint,
        )


@dataclass
class NormalizedTick:
    """Canonical numeric tick, ready for ranking"""

    symbol: str
    exchange: str
    ltp: float
    open_price: float
    volume: float
    percent_change: float
    sector: str

    @property
    def key(self) -> InstrumentKey:
        return InstrumentKey(self.symbol, self.exchange)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'symbol': self.symbol,
            'exchange': self.exchange,
            'ltp': float(self.ltp),
            'open_price': float(self.open_price),
            'volume': float(self.volume),
            'percent_change': float(self.percent_change),
            'sector': self.sector,
        }


@dataclass
class RankedEntry:
    """
    Leaderboard row.

    rank_change is tick-to-tick movement (positive = climbed toward rank 1).
    opening_rank_change is movement since the opening baseline.
    """

    # Tick values
    symbol: str
    exchange: str
    ltp: float
    open_price: float
    volume: float
    percent_change: float
    sector: str

    # Ranking
    current_rank: int
    previous_rank: int
    rank_change: int

    # Annotations
    opening_rank_change: int = 0
    is_volume_spike: bool = False

    @classmethod
    def from_tick(
        cls,
        tick: NormalizedTick,
        current_rank: int,
        previous_rank: int
    ) -> "RankedEntry":
        return cls(
            symbol=tick.symbol,
            exchange=tick.exchange,
            ltp=tick.ltp,
            open_price=tick.open_price,
            volume=tick.volume,
            percent_change=tick.percent_change,
            sector=tick.sector,
            current_rank=current_rank,
            previous_rank=previous_rank,
            rank_change=previous_rank - current_rank,
        )

    @property
    def key(self) -> InstrumentKey:
        return InstrumentKey(self.symbol, self.exchange)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'symbol': self.symbol,
            'exchange': self.exchange,
            'ltp': float(self.ltp),
            'open_price': float(self.open_price),
            'volume': float(self.volume),
            'percent_change': float(self.percent_change),
            'sector': self.sector,
            'current_rank': int(self.current_rank),
            'previous_rank': int(self.previous_rank),
            'rank_change': int(self.rank_change),
            'opening_rank_change': int(self.opening_rank_change),
            'is_volume_spike': bool(self.is_volume_spike),
        }


@dataclass
class RankingState:
    """
    Cross-call state of one ranking session.

    Owned by the caller: create one per mounted view / selected universe and
    discard it when the session ends. Never share an instance between
    sessions ranking different universes.
    """

    previous_ranks: Dict[InstrumentKey, int] = field(default_factory=dict)
    opening_ranks: Dict[InstrumentKey, int] = field(default_factory=dict)
    baseline_state: BaselineState = BaselineState.CLOSED

    @property
    def session_captured(self) -> bool:
        """Whether the opening snapshot exists for the current open session"""
        return self.baseline_state == BaselineState.OPEN_CAPTURED

    def reset(self):
        """Forget all rank history (e.g. on universe change)"""
        self.previous_ranks.clear()
        self.opening_ranks.clear()
        self.baseline_state = BaselineState.CLOSED

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'previous_ranks': {str(k): v for k, v in self.previous_ranks.items()},
            'opening_ranks': {str(k): v for k, v in self.opening_ranks.items()},
            'baseline_state': self.baseline_state.value,
            'session_captured': self.session_captured,
        }


@dataclass
class LeaderboardOutput:
    """
    Complete pipeline output for one tick batch.

    Combines ranked entries, baseline state and metadata for auditability.
    """

    # Identification
    timestamp: datetime
    mode: SourceMode

    # Core outputs
    entries: List[RankedEntry]
    baseline_state: BaselineState

    # Volume statistics of the ranked set
    mean_volume: float
    spike_threshold: float

    # Configuration versioning
    config_hash: str
    engine_version: str

    # Processing metadata
    processing_time_ms: float

    @property
    def universe_size(self) -> int:
        return len(self.entries)

    @property
    def spike_count(self) -> int:
        return sum(1 for e in self.entries if e.is_volume_spike)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'timestamp': self.timestamp.isoformat(),
            'mode': self.mode.value,
            'entries': [e.to_dict() for e in self.entries],
            'universe_size': self.universe_size,
            'baseline_state': self.baseline_state.value,
            'mean_volume': float(self.mean_volume),
            'spike_threshold': float(self.spike_threshold),
            'config_hash': self.config_hash,
            'engine_version': self.engine_version,
            'processing_time_ms': float(self.processing_time_ms),
        }


@dataclass
class RankingPipelineHealth:
    """Health metrics for Ranking Pipeline monitoring"""

    # Throughput
    total_batches_processed: int = 0
    total_ticks_normalized: int = 0
    last_universe_size: int = 0

    # Annotations
    spikes_flagged: int = 0
    baseline_captures: int = 0
    baseline_resets: int = 0

    # Performance
    avg_processing_time_ms: float = 0.0
    last_batch_time: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            'total_batches_processed': self.total_batches_processed,
            'total_ticks_normalized': self.total_ticks_normalized,
            'last_universe_size': self.last_universe_size,
            'spikes_flagged': self.spikes_flagged,
            'baseline_captures': self.baseline_captures,
            'baseline_resets': self.baseline_resets,
            'avg_processing_time_ms': float(self.avg_processing_time_ms),
            'last_batch_time': self.last_batch_time.isoformat() if self.last_batch_time else None,
        }
