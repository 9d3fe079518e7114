# series_normalizer.py
# Turns raw (date, price) observations into the canonical ordered window
# No smoothing, no filling, no interpolation

import logging
import numbers
from collections.abc import Mapping
from typing import Any, Iterable, List, Tuple, Union

import pandas as pd

from momentum_errors import DataIntegrityError, InsufficientData
from momentum_schema import PricePoint
from series_integrity import SeriesIntegrityValidator

logger = logging.getLogger(__name__)

ADJUSTED_CLOSE_FIELD = "5. adjusted close"
DEFAULT_WINDOW = 48  # 4 years of monthly closes

RawObservations = Union[Mapping, pd.DataFrame, Iterable[Tuple[Any, Any]]]


class SeriesNormalizer:
    """
    Orders raw observations and truncates them to a trailing window.

    Policy:
    - Accepts the data-source mapping (date -> {field: value}),
      (date, price) pairs, or a DataFrame with date/price columns
    - Duplicate dates: last one in input order wins
    - Output strictly ascending, at most `window` points
    - Short series are returned as-is, empty input is an error
    - Invalid prices / dates raise DataIntegrityError
    """

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        price_field: str = ADJUSTED_CLOSE_FIELD,
    ):
        if isinstance(window, bool) or not isinstance(window, int) or window < 1:
            raise ValueError(f"window must be a positive integer, got {window!r}")

        self.window = window
        self.price_field = price_field

    def _extract_rows(self, raw: RawObservations) -> List[Tuple[Any, Any]]:
        """Flatten any supported input shape into (date, price) pairs, input order kept"""
        if raw is None:
            raise InsufficientData("No observations supplied")

        if isinstance(raw, pd.DataFrame):
            missing = [col for col in ("date", "price") if col not in raw.columns]
            if missing:
                raise DataIntegrityError(f"Missing required columns: {missing}")
            return list(zip(raw["date"].tolist(), raw["price"].tolist()))

        if isinstance(raw, Mapping):
            rows = []
            for raw_date, values in raw.items():
                if isinstance(values, Mapping):
                    if self.price_field not in values:
                        raise DataIntegrityError(
                            f"MISSING PRICE for {raw_date}: no {self.price_field!r} field"
                        )
                    rows.append((raw_date, values[self.price_field]))
                else:
                    rows.append((raw_date, values))
            return rows

        rows = []
        for item in raw:
            try:
                raw_date, raw_price = item
            except (TypeError, ValueError) as exc:
                raise DataIntegrityError(
                    f"Observation {item!r} is not a (date, price) pair"
                ) from exc
            rows.append((raw_date, raw_price))
        return rows

    def _parse_date(self, raw_date: Any, index: int) -> pd.Timestamp:
        # pandas reads bare numbers as epoch nanoseconds
        if isinstance(raw_date, numbers.Number):
            raise DataIntegrityError(
                f"INVALID DATE at index {index}: {raw_date!r} (numeric)"
            )

        try:
            ts = pd.Timestamp(raw_date)
        except (TypeError, ValueError) as exc:
            raise DataIntegrityError(
                f"INVALID DATE at index {index}: {raw_date!r}"
            ) from exc

        if pd.isna(ts):
            raise DataIntegrityError(f"MISSING DATE at index {index}")

        if ts.tzinfo is not None:
            ts = ts.tz_localize(None)
        return ts.normalize()

    def _parse_price(self, raw_price: Any, index: int) -> float:
        if raw_price is None:
            raise DataIntegrityError(f"MISSING PRICE at index {index}")
        try:
            price = float(raw_price)
        except (TypeError, ValueError) as exc:
            raise DataIntegrityError(
                f"INVALID PRICE at index {index}: {raw_price!r} (not numeric)"
            ) from exc

        SeriesIntegrityValidator.validate_price(price, index, DataIntegrityError)
        return price

    def to_frame(self, raw: RawObservations) -> pd.DataFrame:
        """
        Parsed, deduplicated, sorted and truncated observations.

        Columns: timestamp (datetime64), price (float)
        """
        rows = self._extract_rows(raw)
        if not rows:
            raise InsufficientData("No observations supplied")

        parsed = [
            (self._parse_date(raw_date, i), self._parse_price(raw_price, i))
            for i, (raw_date, raw_price) in enumerate(rows)
        ]
        df = pd.DataFrame(parsed, columns=["timestamp", "price"])

        deduped = df.drop_duplicates(subset="timestamp", keep="last")
        collapsed = len(df) - len(deduped)
        if collapsed:
            logger.warning(f"Collapsed {collapsed} duplicate timestamp(s), last entry kept")

        ordered = deduped.sort_values("timestamp", kind="mergesort")
        window = ordered.tail(self.window).reset_index(drop=True)

        if len(ordered) > self.window:
            logger.debug(f"Truncated {len(ordered)} observations to trailing {self.window}")

        return window

    def normalize(self, raw: RawObservations) -> List[PricePoint]:
        """
        Main normalization function.

        Input: raw observations in any supported shape
        Output: strictly ascending PricePoints, len <= window

        Raises:
            InsufficientData: zero observations
            DataIntegrityError: unparseable date, missing / non-positive price
        """
        frame = self.to_frame(raw)

        points = [
            PricePoint(
                timestamp=ts.date(),
                label=ts.strftime("%b %y"),
                price=float(price),
            )
            for ts, price in zip(frame["timestamp"], frame["price"])
        ]

        SeriesIntegrityValidator.validate_ascending(
            [p.timestamp for p in points], DataIntegrityError
        )

        logger.debug(f"Normalized {len(points)} points ({points[0].label} to {points[-1].label})")
        return points
