# test_momentum_pipeline.py
# End-to-end analysis: payload -> series -> latest -> signal
# Uses data-source shaped payloads, never the network

import pandas as pd
import pytest

from derivative_engine import DerivativeEngine
from momentum_errors import DataIntegrityError, InsufficientData
from momentum_pipeline import MomentumPipeline, analyze
from momentum_schema import SignalKind
from series_normalizer import ADJUSTED_CLOSE_FIELD, SeriesNormalizer
from signal_classifier import classify


def payload_from_prices(prices, start: str = "2020-01-31") -> dict:
    """Oldest price first in, newest-first mapping out (like the real feed)"""
    dates = pd.date_range(start=start, periods=len(prices), freq="ME")
    pairs = list(zip(dates, prices))[::-1]
    return {d.strftime("%Y-%m-%d"): {ADJUSTED_CLOSE_FIELD: str(p)} for d, p in pairs}


class TestAnalyze:

    def test_latest_is_last_point(self):
        result = analyze(payload_from_prices([100.0 + i for i in range(10)]), symbol="AMZN")

        assert result.symbol == "AMZN"
        assert len(result.series) == 10
        assert result.latest == result.series[-1]
        assert result.latest.price == 109.0

    def test_signal_matches_latest_acceleration(self):
        result = analyze(payload_from_prices([100.0, 103.0, 101.0, 107.0, 104.0, 112.0, 109.0]))
        assert result.signal == classify(result.latest.acceleration)

    def test_strong_acceleration(self):
        """Flat then +20%: velocity jumps from 0 to 20, STRONG_BUY."""
        result = analyze(payload_from_prices([100.0] * 6 + [120.0]))

        assert result.latest.velocity == 20.0
        assert result.latest.acceleration == 20.0
        assert result.signal.kind == SignalKind.STRONG_BUY

    def test_sharp_deceleration(self):
        result = analyze(payload_from_prices([100.0] * 6 + [80.0]))
        assert result.signal.kind == SignalKind.TRIM

    def test_linear_growth_is_mild_caution(self):
        """Same dollar gain every month is a shrinking percentage: slightly decelerating."""
        result = analyze(payload_from_prices([100.0 + i for i in range(48)]))

        assert result.signal.kind == SignalKind.CAUTION
        assert abs(result.latest.acceleration) < 0.1

    @pytest.mark.parametrize("n", [1, 2, 3, 4])
    def test_short_history_is_waiting(self, n):
        """Too short for acceleration: valid result, WAITING signal."""
        result = analyze(payload_from_prices([100.0 + i for i in range(n)]))

        assert len(result.series) == n
        assert result.latest.acceleration is None
        assert result.signal.kind == SignalKind.WAITING

    def test_window_applied(self):
        result = analyze(payload_from_prices([100.0 + i for i in range(72)]))

        assert len(result.series) == 48
        assert result.series[0].price == 124.0
        assert result.series[0].velocity is None  # warmup restarts inside the window


class TestFailures:

    def test_empty_payload(self):
        with pytest.raises(InsufficientData):
            analyze({})

    def test_malformed_price(self):
        payload = payload_from_prices([100.0, 101.0, 102.0])
        first = next(iter(payload))
        payload[first] = {ADJUSTED_CLOSE_FIELD: "-4"}

        with pytest.raises(DataIntegrityError):
            analyze(payload)


class TestReanalysis:

    def test_different_lookback_same_prices(self):
        """Same normalized prices, new engine: no refetch, raw series untouched."""
        prices = SeriesNormalizer().normalize(
            payload_from_prices([100.0, 102.0, 101.0, 105.0, 104.0, 110.0, 108.0])
        )
        snapshot = list(prices)

        k3 = DerivativeEngine(lookback=3).compute(prices)
        k1 = DerivativeEngine(lookback=1).compute(prices)

        assert prices == snapshot
        assert k1[1].velocity is not None
        assert k3[1].velocity is None

    def test_repeat_analysis_is_identical(self):
        payload = payload_from_prices([100.0, 97.0, 99.5, 104.0, 103.0, 111.0, 118.0, 116.0])
        pipeline = MomentumPipeline(symbol="TEST")

        assert pipeline.analyze(payload) == pipeline.analyze(payload)

    def test_symbol_override(self):
        pipeline = MomentumPipeline(symbol="AAA")
        result = pipeline.analyze(payload_from_prices([1.0, 2.0]), symbol="BBB")

        assert result.symbol == "BBB"

    def test_custom_window_and_lookback(self):
        pipeline = MomentumPipeline(window=5, lookback=2)
        result = pipeline.analyze(payload_from_prices([10.0 + i for i in range(20)]))

        assert len(result.series) == 5
        assert result.series[2].velocity is not None
        assert result.series[3].acceleration is not None
