"""
Series Integrity Assertions
Guards the boundaries between normalizer, engine and projector.
All violations raise loud exceptions - no silent failures.
"""

import numbers
from datetime import date
from typing import Optional, Sequence, Type

import numpy as np

from momentum_errors import DataIntegrityError, MomentumError, PreconditionViolation


class SeriesIntegrityValidator:
    """
    Validates that a price series is safe to differentiate.

    Every method takes the error class to raise, so the normalizer can
    report DataIntegrityError (bad input) while the engine reports
    PreconditionViolation (caller skipped the normalizer).
    """

    @staticmethod
    def validate_price(
        price: float,
        index: int,
        error: Type[MomentumError] = DataIntegrityError,
    ):
        """
        Validate a single price.

        Raises:
            error: If price is missing, not a real number, NaN, infinite, zero or negative
        """
        if price is None:
            raise error(f"MISSING PRICE at index {index}")

        if isinstance(price, bool) or not isinstance(price, numbers.Real):
            raise error(f"INVALID PRICE at index {index}: {price!r} (not a number)")

        if not np.isfinite(price):
            raise error(f"INVALID PRICE at index {index}: {price} (NaN or Inf)")

        if price <= 0:
            raise error(f"INVALID PRICE at index {index}: {price} (must be > 0)")

    @staticmethod
    def validate_ascending(
        timestamps: Sequence[date],
        error: Type[MomentumError] = DataIntegrityError,
    ):
        """
        Validate timestamps are strictly ascending (no duplicates).

        Raises:
            error: On the first out-of-order, repeated or incomparable timestamp
        """
        for i in range(1, len(timestamps)):
            try:
                out_of_order = timestamps[i] <= timestamps[i - 1]
            except TypeError as exc:
                raise error(
                    f"TEMPORAL INCONSISTENCY at index {i}: {timestamps[i]!r} "
                    f"cannot be compared with {timestamps[i - 1]!r}"
                ) from exc
            if out_of_order:
                raise error(
                    f"TEMPORAL INCONSISTENCY at index {i}: {timestamps[i]} "
                    f"does not follow {timestamps[i - 1]}"
                )

    @staticmethod
    def validate_lookback(lookback: int):
        """
        Validate lookback offset.

        Raises:
            PreconditionViolation: If lookback is not a positive integer
        """
        if isinstance(lookback, bool) or not isinstance(lookback, int) or lookback < 1:
            raise PreconditionViolation(
                f"INVALID LOOKBACK: {lookback!r} (must be a positive integer)"
            )

    @classmethod
    def validate_series(
        cls,
        timestamps: Sequence[date],
        prices: Sequence[float],
        error: Type[MomentumError] = DataIntegrityError,
    ):
        """
        Full check of an ordered series.

        Raises:
            error: If lengths differ, any price is invalid or ordering is broken
        """
        if len(timestamps) != len(prices):
            raise error(
                f"LENGTH MISMATCH: {len(timestamps)} timestamps "
                f"but {len(prices)} prices"
            )

        for i, price in enumerate(prices):
            cls.validate_price(price, i, error)

        cls.validate_ascending(timestamps, error)


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """
    Collapse NaN / Inf to None.

    NaN and Inf never cross a component boundary; absent is absent.
    """
    if value is None:
        return None
    if not np.isfinite(value):
        return None
    return float(value)
