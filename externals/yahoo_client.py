from typing import Any, Dict, List, Optional

import requests

from configuration import (
    CHART_INTERVAL,
    CHART_RANGE,
    SEARCH_RESULT_LIMIT,
    YAHOO_BASE_URL,
    YAHOO_SEARCH_TIMEOUT_SECONDS,
    YAHOO_TIMEOUT_SECONDS,
    YAHOO_USER_AGENT,
)


class YahooFinanceAPIError(Exception):
    """Raised when Yahoo Finance returns an unexpected response."""


HEADERS = {"User-Agent": YAHOO_USER_AGENT}


def _get_json(url: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    try:
        response = requests.get(url, params=params, headers=HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as request_error:
        raise YahooFinanceAPIError(
            f"Request to Yahoo Finance failed: {request_error}"
        ) from request_error

    try:
        payload = response.json()
    except ValueError as decode_error:
        raise YahooFinanceAPIError(
            f"Yahoo Finance returned invalid JSON: {decode_error}"
        ) from decode_error

    if not isinstance(payload, dict):
        raise YahooFinanceAPIError(
            f"Unexpected Yahoo Finance payload type: {type(payload).__name__}"
        )
    return payload


def fetch_chart(
    symbol: str, range_: str = CHART_RANGE, interval: str = CHART_INTERVAL
) -> Optional[Dict[str, Any]]:
    """Fetch the chart payload (meta + OHLC arrays) for a symbol.

    Args:
        symbol: Yahoo ticker (e.g., "AAPL", "PTT.BK", "BTC-USD").
        range_: Chart range code (e.g., "3mo").
        interval: Bar interval code (e.g., "1d").

    Returns:
        The first ``chart.result`` entry, or ``None`` when Yahoo has no data
        for the symbol.

    Raises:
        YahooFinanceAPIError: If the request fails or Yahoo reports an error.
    """

    payload = _get_json(
        f"{YAHOO_BASE_URL.rstrip('/')}/v8/finance/chart/{symbol}",
        {"range": range_, "interval": interval},
        YAHOO_TIMEOUT_SECONDS,
    )

    chart = payload.get("chart") or {}
    error = chart.get("error")
    if error:
        code = error.get("code") if isinstance(error, dict) else None
        message = error.get("description") if isinstance(error, dict) else error
        raise YahooFinanceAPIError(f"Yahoo Finance error ({code}): {message}")

    results = chart.get("result") or []
    if not results:
        return None

    return results[0]


def search_symbols(query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[Dict[str, Any]]:
    """Return raw quote matches for a free-text query."""

    payload = _get_json(
        f"{YAHOO_BASE_URL.rstrip('/')}/v1/finance/search",
        {"q": query, "quotesCount": limit, "newsCount": 0},
        YAHOO_SEARCH_TIMEOUT_SECONDS,
    )
    quotes = payload.get("quotes") or []
    return quotes[:limit]
