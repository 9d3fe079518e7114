"""
Run the momentum model end to end for one symbol.
Fetch -> analyze -> print signal, latest metrics and chart summaries.
Use --synthetic to skip the network and analyze generated monthly closes.
"""

import argparse
import logging

import numpy as np
import pandas as pd

from chart_projection import ChartProjector
from momentum_errors import DataRetrievalError, MomentumError
from momentum_pipeline import MomentumPipeline
from momentum_schema import ZeroBand
from price_source import AlphaVantageSource
from sector_picks import SectorPicksTable


def load_sample_data(months: int = 60, seed: int = 42) -> pd.DataFrame:
    """Create synthetic monthly closes for offline runs."""
    print("  Generating synthetic monthly closes...")

    dates = pd.date_range(end="2024-12-31", periods=months, freq="ME")

    np.random.seed(seed)
    returns = np.random.normal(0.01, 0.06, size=months)
    prices = 100.0 * np.exp(np.cumsum(returns))

    data = pd.DataFrame({"date": dates, "price": prices})
    print(f"  Generated {len(data)} months")
    print(f"  Price range: ${data['price'].min():.2f} - ${data['price'].max():.2f}")
    return data


def fmt(value, suffix: str = "") -> str:
    return "N/A" if value is None else f"{value:+.2f}{suffix}"


def print_chart(title: str, projection) -> None:
    if not projection.points:
        print(f"  {title:<28} (nothing to plot yet)")
        return

    line = f"  {title:<28} {len(projection.points):>3} pts  " \
           f"[{projection.domain.min:.2f} .. {projection.domain.max:.2f}]  " \
           f"{projection.first_label} -> {projection.last_label}"
    if projection.zero_y is not None:
        line += f"  zero@{projection.zero_y:.1f}" \
                f"{'' if projection.zero_visible else ' (hidden)'}"
    if projection.bars:
        above = sum(1 for b in projection.bars if b.band == ZeroBand.ABOVE)
        line += f"  bars {above}/{len(projection.bars)} above"
    print(line)


def print_picks(table: SectorPicksTable, category: str) -> None:
    print(f"\nTop Picks: {category}")
    print(f"{'Symbol':<8} {'Name':<20} {'2nd ROC':>8}  {'Signal':<10}")
    print("-" * 50)
    for pick in table.picks(category):
        print(f"{pick.symbol:<8} {pick.name:<20} {pick.acceleration:>+8.1f}  {pick.signal:<10}")
    print(f"(next sector: {table.next_category(category)})")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Momentum acceleration (ROC II) model")
    parser.add_argument("symbol", nargs="?", default="AMZN")
    parser.add_argument("--synthetic", action="store_true", help="use generated data")
    parser.add_argument("--sector", default="Tech")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    symbol = args.symbol.strip().upper()
    if not symbol:
        print("❌ ANALYSIS ERROR: symbol must be a non-empty string")
        return 1

    print("=" * 60)
    print(f"MOMENTUM ACCELERATION MODEL: {symbol}")
    print("=" * 60)

    try:
        raw = load_sample_data() if args.synthetic else AlphaVantageSource().fetch_monthly(symbol)
        result = MomentumPipeline(symbol=symbol).analyze(raw)
    except DataRetrievalError as e:
        print(f"❌ DATA SOURCE ERROR: {e}")
        return 2
    except MomentumError as e:
        print(f"❌ ANALYSIS ERROR: {e}")
        return 1

    latest = result.latest
    print(f"\nModel Signal: {result.signal.label} ({result.signal.kind.name})")
    print(f"  As of:        {latest.label}")
    print(f"  Price:        ${latest.price:,.2f}")
    print(f"  Velocity:     {fmt(latest.velocity, '%')}")
    print(f"  Acceleration: {fmt(latest.acceleration)}")

    projector = ChartProjector()
    print("\nTrend Visualization")
    print_chart("Price Action (Monthly)", projector.project_field(result.series, "price"))
    print_chart("Velocity: 1st Order ROC", projector.project_field(result.series, "velocity", zero_line=True))
    print_chart("Acceleration: 2nd Order ROC", projector.project_field(result.series, "acceleration", bars=True))

    print_picks(SectorPicksTable(), args.sector)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
