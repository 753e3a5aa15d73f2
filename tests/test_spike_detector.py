"""
Tests for Volume Spike Detector
"""

import numpy as np
import pytest

from tickrank.ranking_engine import RankedEntry, SpikeDetector, SpikeDetectorConfig


def make_entry(symbol, volume, rank=1):
    return RankedEntry(
        symbol=symbol, exchange="NSE", ltp=100.0, open_price=100.0,
        volume=volume, percent_change=0.0, sector="Unknown",
        current_rank=rank, previous_rank=rank, rank_change=0
    )


def make_entries(volumes):
    return [make_entry(f"S{i}", v, rank=i + 1) for i, v in enumerate(volumes)]


@pytest.fixture
def detector():
    return SpikeDetector()


class TestSpikeDetector:
    """Test spike flagging."""

    def test_flags_only_outlier(self, detector):
        entries = detector.annotate(make_entries([10, 10, 100]))
        assert [e.is_volume_spike for e in entries] == [False, False, True]

    def test_threshold_figures(self, detector):
        mean, threshold = detector.compute_threshold(make_entries([10, 10, 100]))
        assert mean == pytest.approx(40.0)
        assert threshold == pytest.approx(80.0)

    def test_exactly_at_threshold_not_flagged(self, detector):
        # mean = 20, threshold = 40
        entries = detector.annotate(make_entries([0, 0, 20, 40, 40]))
        assert not any(e.is_volume_spike for e in entries)

    def test_empty_set(self, detector):
        assert detector.annotate([]) == []
        assert detector.compute_threshold([]) == (0.0, 0.0)

    def test_single_instrument_never_spikes(self, detector):
        entries = detector.annotate(make_entries([1_000_000]))
        assert entries[0].is_volume_spike is False

    def test_threshold_recomputed_per_call(self, detector):
        detector.annotate([])
        entries = detector.annotate(make_entries([5, 5, 5]))
        assert not any(e.is_volume_spike for e in entries)

        entries = detector.annotate(make_entries([5, 5, 500]))
        assert entries[2].is_volume_spike

        entries = detector.annotate(make_entries([500, 500, 500]))
        assert not any(e.is_volume_spike for e in entries)

    def test_custom_multiplier(self):
        detector = SpikeDetector(SpikeDetectorConfig(spike_multiplier=1.0))
        entries = detector.annotate(make_entries([10, 10, 40]))
        assert [e.is_volume_spike for e in entries] == [False, False, True]

    def test_matches_definition_on_random_set(self, detector):
        np.random.seed(7)
        volumes = np.random.lognormal(10, 1.5, 200)
        entries = detector.annotate(make_entries(volumes.tolist()))

        expected = volumes > 2 * volumes.mean()
        assert [e.is_volume_spike for e in entries] == expected.tolist()

    def test_input_not_mutated(self, detector):
        original = make_entries([10, 10, 100])
        detector.annotate(original)
        assert not any(e.is_volume_spike for e in original)

    def test_negative_multiplier_rejected(self):
        with pytest.raises(ValueError):
            SpikeDetectorConfig(spike_multiplier=-1)
