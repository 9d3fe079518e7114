"""
Unit Tests for the Alpha Vantage price source
Run with: pytest test_price_source.py -v
No network: a fake session stands in for requests.Session.
"""

import pytest
import requests

from momentum_errors import (
    DataRetrievalError,
    InvalidSymbol,
    NoDataFound,
    RateLimitExceeded,
    TransportFailure,
)
from price_source import (
    API_KEY_ENV,
    MONTHLY_FUNCTION,
    MONTHLY_SERIES_KEY,
    AlphaVantageSource,
    parse_monthly_adjusted,
)

GOOD_PAYLOAD = {
    "Meta Data": {"2. Symbol": "AMZN"},
    MONTHLY_SERIES_KEY: {
        "2024-02-29": {"5. adjusted close": "176.76"},
        "2024-01-31": {"5. adjusted close": "155.20"},
    },
}


class FakeResponse:
    def __init__(self, payload=None, status_error=None, json_error=None):
        self._payload = payload
        self._status_error = status_error
        self._json_error = json_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        if self._json_error:
            raise self._json_error
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


# ============================================================================
# Payload Mapping
# ============================================================================

class TestParse:

    def test_good_payload(self):
        series = parse_monthly_adjusted(GOOD_PAYLOAD)
        assert series == GOOD_PAYLOAD[MONTHLY_SERIES_KEY]

    @pytest.mark.parametrize("payload, error", [
        ({"Note": "Thank you for using Alpha Vantage! 5 calls per minute."}, RateLimitExceeded),
        ({"Information": "rate limit"}, RateLimitExceeded),
        ({"Error Message": "Invalid API call."}, InvalidSymbol),
        ({"Meta Data": {}}, NoDataFound),
        ({MONTHLY_SERIES_KEY: {}}, NoDataFound),
        ([], NoDataFound),
    ])
    def test_error_payloads(self, payload, error):
        with pytest.raises(error):
            parse_monthly_adjusted(payload)

    def test_all_errors_share_base(self):
        for error in (RateLimitExceeded, InvalidSymbol, NoDataFound, TransportFailure):
            assert issubclass(error, DataRetrievalError)


# ============================================================================
# Fetching
# ============================================================================

class TestFetch:

    def test_request_parameters(self):
        session = FakeSession(FakeResponse(GOOD_PAYLOAD))
        source = AlphaVantageSource(api_key="KEY", session=session, timeout=3.0)

        series = source.fetch_monthly("  amzn ")

        assert series == GOOD_PAYLOAD[MONTHLY_SERIES_KEY]
        call = session.calls[0]
        assert call["params"] == {"function": MONTHLY_FUNCTION, "symbol": "AMZN", "apikey": "KEY"}
        assert call["timeout"] == 3.0

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv(API_KEY_ENV, "FROM_ENV")
        source = AlphaVantageSource(session=FakeSession())
        assert source.api_key == "FROM_ENV"

    def test_api_key_default(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV, raising=False)
        source = AlphaVantageSource(session=FakeSession())
        assert source.api_key == "demo"

    @pytest.mark.parametrize("symbol", ["", "   ", None])
    def test_blank_symbol(self, symbol):
        session = FakeSession(FakeResponse(GOOD_PAYLOAD))

        with pytest.raises(ValueError, match="non-empty"):
            AlphaVantageSource(api_key="KEY", session=session).fetch_monthly(symbol)
        assert session.calls == []

    def test_connection_error(self):
        session = FakeSession(error=requests.ConnectionError("down"))

        with pytest.raises(TransportFailure, match="AMZN"):
            AlphaVantageSource(api_key="KEY", session=session).fetch_monthly("AMZN")

    def test_http_error(self):
        session = FakeSession(FakeResponse(status_error=requests.HTTPError("503")))

        with pytest.raises(TransportFailure):
            AlphaVantageSource(api_key="KEY", session=session).fetch_monthly("AMZN")

    def test_non_json_body(self):
        session = FakeSession(FakeResponse(json_error=ValueError("no json")))

        with pytest.raises(TransportFailure, match="JSON"):
            AlphaVantageSource(api_key="KEY", session=session).fetch_monthly("AMZN")

    def test_rate_limit_propagates(self):
        session = FakeSession(FakeResponse({"Note": "slow down"}))

        with pytest.raises(RateLimitExceeded, match="slow down"):
            AlphaVantageSource(api_key="KEY", session=session).fetch_monthly("AMZN")
