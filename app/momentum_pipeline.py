# momentum_pipeline.py
# Analysis facade - raw observations in, series + latest + signal out
# Normalizer -> DerivativeEngine -> classify. Nothing else.

import logging
from typing import Optional

from derivative_engine import DEFAULT_LOOKBACK, DerivativeEngine
from momentum_schema import AnalysisResult
from series_normalizer import (
    ADJUSTED_CLOSE_FIELD,
    DEFAULT_WINDOW,
    RawObservations,
    SeriesNormalizer,
)
from signal_classifier import classify

logger = logging.getLogger(__name__)


class MomentumPipeline:
    """
    One-shot momentum analysis for a single instrument.

    Philosophy:
    - Closed input, no streaming, no caching
    - Re-analysis means calling analyze() again
    - Short history is valid (WAITING), empty history is not
    - Fails loudly on malformed data
    """

    def __init__(
        self,
        symbol: str = "",
        window: int = DEFAULT_WINDOW,
        lookback: int = DEFAULT_LOOKBACK,
        price_field: str = ADJUSTED_CLOSE_FIELD,
    ):
        self.symbol = symbol
        self.normalizer = SeriesNormalizer(window=window, price_field=price_field)
        self.engine = DerivativeEngine(lookback=lookback)

    def analyze(
        self,
        raw_observations: RawObservations,
        symbol: Optional[str] = None,
    ) -> AnalysisResult:
        """
        Main analysis function.

        Raises:
            InsufficientData: no observations
            DataIntegrityError: malformed observation
        """
        symbol = symbol if symbol is not None else self.symbol

        prices = self.normalizer.normalize(raw_observations)
        series = self.engine.compute(prices)

        latest = series[-1]
        signal = classify(latest.acceleration)

        logger.info(
            f"Analyzed {symbol or '<unnamed>'}: {len(series)} points, "
            f"latest {latest.label} -> {signal.kind.name}"
        )

        return AnalysisResult(
            symbol=symbol,
            series=tuple(series),
            latest=latest,
            signal=signal,
        )


def analyze(raw_observations: RawObservations, symbol: str = "") -> AnalysisResult:
    """Analyze with default window (48) and lookback (3)."""
    return MomentumPipeline(symbol=symbol).analyze(raw_observations)
