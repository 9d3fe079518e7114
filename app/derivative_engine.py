# derivative_engine.py
# Momentum derivatives - velocity (ROC) and acceleration (delta ROC)
# No smoothing, no filtering, no forecasts

import logging
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from momentum_errors import PreconditionViolation
from momentum_schema import MetricPoint, PricePoint
from series_integrity import SeriesIntegrityValidator, finite_or_none

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK = 3  # 3-month rate of change


def rate_of_change(current: float, past: float) -> Optional[float]:
    """
    Percent change from past to current.

    Returns None when past is zero or the result is not finite.
    """
    if past == 0:
        return None
    return finite_or_none((current - past) / past * 100)


class DerivativeEngine:
    """
    Computes first and second order rate of change per point.

    velocity[i]     = (price[i] - price[i-k]) / price[i-k] * 100   for i >= k
    acceleration[i] = velocity[i] - velocity(i-1)                  for i >= k+1

    velocity(i-1) is recomputed from raw prices rather than read back
    from the output; velocity_at() exposes that recomputation so the
    two can be compared exactly.

    Pure: input series is never mutated, output is a new list.
    """

    def __init__(self, lookback: int = DEFAULT_LOOKBACK, validate: bool = True):
        SeriesIntegrityValidator.validate_lookback(lookback)
        self.lookback = lookback
        self.validate = validate

    def _check_preconditions(self, series: Sequence[PricePoint]) -> None:
        """Fail fast if the normalizer was bypassed"""
        SeriesIntegrityValidator.validate_series(
            [p.timestamp for p in series],
            [p.price for p in series],
            PreconditionViolation,
        )

    def velocity_at(self, prices: Sequence[float], i: int) -> Optional[float]:
        """
        Velocity at index i, straight from raw prices.

        None during warmup (i < lookback) or if the baseline is zero.
        """
        if i < self.lookback or i >= len(prices):
            return None

        past = prices[i - self.lookback]
        velocity = rate_of_change(prices[i], past)
        if velocity is None:
            logger.warning(
                f"Velocity suppressed at index {i}: baseline price {past} "
                f"gives no finite rate of change"
            )
        return velocity

    def compute(self, series: Sequence[PricePoint]) -> List[MetricPoint]:
        """
        Main derivative function.

        Input: ordered PricePoints (normalizer output)
        Output: same-length MetricPoints

        Handles graceful degradation:
        - Warmup indices -> None, not zero
        - Zero baseline -> None for that point
        - Broken ordering / bad price -> PreconditionViolation (validate=True)
        """
        if self.validate:
            self._check_preconditions(series)

        prices = [p.price for p in series]
        out = []

        for i, point in enumerate(series):
            velocity = self.velocity_at(prices, i)

            acceleration = None
            if i >= self.lookback + 1 and velocity is not None:
                prev_velocity = self.velocity_at(prices, i - 1)
                if prev_velocity is not None:
                    acceleration = finite_or_none(velocity - prev_velocity)

            out.append(
                MetricPoint(
                    timestamp=point.timestamp,
                    label=point.label,
                    price=point.price,
                    velocity=velocity,
                    acceleration=acceleration,
                )
            )

        return out

    @staticmethod
    def to_frame(series: Sequence[MetricPoint]) -> pd.DataFrame:
        """
        Tabular view for export / inspection.

        Absent values become NaN here and only here.
        """
        return pd.DataFrame(
            {
                "timestamp": [p.timestamp for p in series],
                "label": [p.label for p in series],
                "price": [p.price for p in series],
                "velocity": [np.nan if p.velocity is None else p.velocity for p in series],
                "acceleration": [
                    np.nan if p.acceleration is None else p.acceleration for p in series
                ],
            },
            columns=["timestamp", "label", "price", "velocity", "acceleration"],
        )
