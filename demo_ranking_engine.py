"""
Ranking Engine Demo

Demonstrates the ranking pipeline on a synthetic NSE session: baseline
capture at the open, intraday reshuffles, a volume spike, and the close.
"""

import logging

import numpy as np

from tickrank.ranking_engine import (
    LeaderboardFilter,
    RankingEngineConfig,
    RankingPipeline,
    SourceMode,
    filter_leaderboard
)
from tickrank.presentation import format_price, format_volume, get_change_color


SYMBOLS = ["RELIANCE", "TCS", "HDFCBANK", "INFY", "SBIN", "ITC", "TATASTEEL", "SUNPHARMA"]


def create_synthetic_batch(step: int, opens: dict, rng: np.random.Generator) -> list:
    """
    Create one feed batch.

    Prices drift randomly around the open; TATASTEEL trades heavy from step 3.
    """
    batch = []
    for symbol in SYMBOLS:
        open_price = opens[symbol]
        last = open_price * (1 + rng.normal(0, 0.01 * (step + 1)))
        volume = rng.integers(50_000, 500_000)
        if symbol == "TATASTEEL" and step >= 3:
            volume *= 20
        batch.append({
            'symbol': symbol,
            'exchange': 'NSE',
            'open': f"{open_price:.2f}",
            'last': round(last, 2),
            'volume': int(volume),
        })
    return batch


def print_leaderboard(output):
    print(f"  {'#':>2} {'Symbol':<10} {'LTP':>8} {'Chg%':>7} {'Vol':>7} "
          f"{'Δtick':>5} {'Δopen':>5}  Spike  Colour")
    for e in output.entries:
        print(
            f"  {e.current_rank:>2} {e.symbol:<10} {format_price(e.ltp):>8} "
            f"{e.percent_change:>+7.2f} {format_volume(e.volume):>7} "
            f"{e.rank_change:>+5d} {e.opening_rank_change:>+5d}  "
            f"{'  ⚡  ' if e.is_volume_spike else '     '}  {get_change_color(e.percent_change)}"
        )


def run_demo():
    """Run demo of the Ranking Pipeline"""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    print("=" * 80)
    print("RANKING ENGINE - DEMONSTRATION")
    print("=" * 80)
    print()

    config = RankingEngineConfig()
    pipeline = RankingPipeline(config)
    print(f"✓ Pipeline initialized with config hash: {pipeline.config_hash}")
    print(f"  Spike Multiplier: {config.spike_detector.spike_multiplier}")
    print(f"  Default Venue: {config.normalizer.default_exchange}")
    print()

    rng = np.random.default_rng(42)
    opens = {symbol: float(rng.uniform(200, 3500)) for symbol in SYMBOLS}

    # (market open?, description)
    steps = [
        (False, "Pre-market snapshot"),
        (True, "First batch after the open - baseline captured"),
        (True, "Intraday update"),
        (True, "Intraday update - heavy volume in TATASTEEL"),
        (True, "Intraday update"),
        (False, "Market closed - baseline cleared"),
    ]

    state = pipeline.create_state()
    output = None
    for step, (is_open, description) in enumerate(steps):
        batch = create_synthetic_batch(step, opens, rng)
        output = pipeline.process_batch(state, batch, SourceMode.WATCHLIST, is_market_open=is_open)

        print(f"\nBatch {step}: {description}")
        print(f"  Baseline: {output.baseline_state.value}  "
              f"Mean Volume: {format_volume(output.mean_volume)}  "
              f"Spike Threshold: {format_volume(output.spike_threshold)}")
        print_leaderboard(output)

    print()
    print("=" * 80)
    print("\nTop 3 Gainers / Losers (last batch):")
    for filter_mode in (LeaderboardFilter.GAINERS, LeaderboardFilter.LOSERS):
        movers = filter_leaderboard(output.entries, filter_mode, top_n=3)
        print(f"  {filter_mode.value}: {', '.join(f'{e.symbol} ({e.percent_change:+.2f}%)' for e in movers)}")

    health = pipeline.get_health()
    print("\nPipeline Health Metrics:")
    print("-" * 80)
    print(f"Batches Processed: {health.total_batches_processed}")
    print(f"Ticks Normalized: {health.total_ticks_normalized}")
    print(f"Spikes Flagged: {health.spikes_flagged}")
    print(f"Baseline Captures: {health.baseline_captures}")
    print(f"Baseline Resets: {health.baseline_resets}")
    print(f"Avg Processing Time: {health.avg_processing_time_ms:.3f}ms")

    print()
    print("=" * 80)
    print("Demo Complete!")
    print("=" * 80)


if __name__ == "__main__":
    run_demo()
