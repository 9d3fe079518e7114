"""
Alpha Vantage monthly adjusted closes.
The only module that talks to the network. No retries, no caching:
errors are mapped to typed failures and handed straight to the caller.
"""

import logging
import os
from typing import Any, Dict, Optional

import requests

from momentum_errors import (
    InvalidSymbol,
    NoDataFound,
    RateLimitExceeded,
    TransportFailure,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://www.alphavantage.co/query"
MONTHLY_FUNCTION = "TIME_SERIES_MONTHLY_ADJUSTED"
MONTHLY_SERIES_KEY = "Monthly Adjusted Time Series"
API_KEY_ENV = "ALPHAVANTAGE_API_KEY"


def parse_monthly_adjusted(payload: Dict[str, Any]) -> Dict[str, Dict[str, str]]:
    """
    Extract the date -> values mapping from a monthly adjusted payload.

    Raises:
        RateLimitExceeded: payload carries a "Note" / "Information" throttle message
        InvalidSymbol: payload carries an "Error Message"
        NoDataFound: time series missing or empty
    """
    if not isinstance(payload, dict):
        raise NoDataFound(f"Unexpected payload type: {type(payload).__name__}")

    if "Note" in payload or "Information" in payload:
        raise RateLimitExceeded(payload.get("Note") or payload.get("Information"))

    if "Error Message" in payload:
        raise InvalidSymbol(payload["Error Message"])

    series = payload.get(MONTHLY_SERIES_KEY)
    if not series:
        raise NoDataFound("No data found.")

    return series


class AlphaVantageSource:
    """Fetches monthly adjusted price history from Alpha Vantage."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key or os.environ.get(API_KEY_ENV, "demo")
        self.base_url = base_url
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch_monthly(self, symbol: str) -> Dict[str, Dict[str, str]]:
        """Fetch the raw monthly series for *symbol*.

        Args:
            symbol: Ticker symbol (case-insensitive, surrounding blanks ignored).

        Raises:
            ValueError: if *symbol* is blank.
            TransportFailure: connection error, timeout, non-2xx or non-JSON body.
            RateLimitExceeded / InvalidSymbol / NoDataFound: see parse_monthly_adjusted.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        symbol = symbol.strip().upper()

        params = {
            "function": MONTHLY_FUNCTION,
            "symbol": symbol,
            "apikey": self.api_key,
        }

        try:
            response = self._session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise TransportFailure(f"Request for {symbol} failed: {exc}") from exc
        except ValueError as exc:
            raise TransportFailure(f"Response for {symbol} is not valid JSON") from exc

        series = parse_monthly_adjusted(payload)
        logger.info(f"Fetched {len(series)} monthly observations for {symbol}")
        return series
