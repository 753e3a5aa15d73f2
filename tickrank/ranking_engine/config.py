"""
Ranking Engine Configuration

Defines venue defaults, spike thresholds, session hours and leaderboard options.
"""

from dataclasses import dataclass, field
from typing import List
import hashlib
import json

from tickrank.market_session.config import MarketHoursConfig


@dataclass
class NormalizerConfig:
    """Tick normalization configuration"""

    # Venue used when a tick carries no exchange
    default_exchange: str = "NSE"

    # Sector sentinel for symbols the lookup does not know
    unknown_sector: str = "Unknown"

    def __post_init__(self):
        if not self.default_exchange or not self.default_exchange.strip():
            raise ValueError("default_exchange must be a non-empty venue code")


@dataclass
class SpikeDetectorConfig:
    """Volume spike detection configuration"""

    # Volume spike = volume > mean_volume * spike_multiplier
    spike_multiplier: float = 2.0

    def __post_init__(self):
        if self.spike_multiplier < 0:
            raise ValueError(f"spike_multiplier must be >= 0, got {self.spike_multiplier}")


@dataclass
class LeaderboardConfig:
    """Leaderboard view configuration"""

    default_top_n: int = 10
    top_n_options: List[int] = field(default_factory=lambda: [5, 10, 15, 20, 25])

    def __post_init__(self):
        if self.default_top_n <= 0:
            raise ValueError(f"default_top_n must be positive, got {self.default_top_n}")
        if any(n <= 0 for n in self.top_n_options):
            raise ValueError(f"top_n_options must all be positive, got {self.top_n_options}")


@dataclass
class RankingEngineConfig:
    """
    Complete Ranking Engine configuration.

    Aggregates all sub-configurations consumed by the pipeline.
    """

    # Sub-configurations
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    spike_detector: SpikeDetectorConfig = field(default_factory=SpikeDetectorConfig)
    market_hours: MarketHoursConfig = field(default_factory=MarketHoursConfig)
    leaderboard: LeaderboardConfig = field(default_factory=LeaderboardConfig)

    # Version tracking
    config_version: str = "1.0.0"

    def compute_hash(self) -> str:
        """
        Compute deterministic hash of configuration.

        Stamped on every leaderboard output for reproducibility.
        """
        config_json = json.dumps(self._settings(), sort_keys=True)
        return hashlib.sha256(config_json.encode()).hexdigest()[:12]

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        config_dict = self._settings()
        config_dict['config_hash'] = self.compute_hash()
        return config_dict

    def _settings(self) -> dict:
        return {
            'normalizer': {
                'default_exchange': self.normalizer.default_exchange,
                'unknown_sector': self.normalizer.unknown_sector,
            },
            'spike_detector': {
                'spike_multiplier': self.spike_detector.spike_multiplier,
            },
            'market_hours': {
                'open_hour': self.market_hours.open_hour,
                'open_minute': self.market_hours.open_minute,
                'close_hour': self.market_hours.close_hour,
                'close_minute': self.market_hours.close_minute,
                'timezone': self.market_hours.timezone,
            },
            'leaderboard': {
                'default_top_n': self.leaderboard.default_top_n,
                'top_n_options': list(self.leaderboard.top_n_options),
            },
            'config_version': self.config_version,
        }


DEFAULT_CONFIG = RankingEngineConfig()
