"""
Volume Spike Detector

Flags instruments whose traded volume exceeds a multiple of the mean volume
across the currently ranked set.

Detection only: volumes are never modified. The threshold is recomputed from
the set passed in on every call.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

import numpy as np

from tickrank.ranking_engine.config import SpikeDetectorConfig
from tickrank.ranking_engine.schemas import RankedEntry

LOG = logging.getLogger(__name__)


class SpikeDetector:
    """
    Mean-based volume anomaly flag.

    With a single instrument the mean equals its own volume, so no spike is
    possible for any multiplier >= 1.
    """

    def __init__(self, config: Optional[SpikeDetectorConfig] = None):
        self.config = config or SpikeDetectorConfig()

    def compute_threshold(self, entries: List[RankedEntry]) -> Tuple[float, float]:
        """
        Mean volume and spike threshold of the given set.

        Returns:
            (mean_volume, threshold), both 0.0 for an empty set
        """
        if not entries:
            return 0.0, 0.0

        volumes = np.array([entry.volume for entry in entries], dtype=float)
        mean_volume = float(volumes.mean())
        return mean_volume, mean_volume * self.config.spike_multiplier

    def annotate(self, entries: List[RankedEntry]) -> List[RankedEntry]:
        """
        Set is_volume_spike on each entry.

        Args:
            entries: Current ranked set

        Returns:
            New entries with is_volume_spike filled in
        """
        mean_volume, threshold = self.compute_threshold(entries)

        annotated = [
            replace(entry, is_volume_spike=bool(entry.volume > threshold))
            for entry in entries
        ]

        spikes = sum(1 for e in annotated if e.is_volume_spike)
        LOG.debug(
            f"Volume mean={mean_volume:.1f} threshold={threshold:.1f} "
            f"spikes={spikes}/{len(annotated)}"
        )
        return annotated
