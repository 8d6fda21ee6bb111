"""Market data service: fetch a quote, compute its levels, cache the result.

Collaborator failures never propagate: they are logged and reported to the
caller as ``None`` ("cannot compute levels").
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from configuration import (
    CACHE_TTL_SECONDS,
    LEVELS_LOOKBACK,
    LEVELS_THRESHOLD_PERCENT,
    SEARCH_RESULT_LIMIT,
    WORLD_INDICES,
)
from externals import YahooFinanceAPIError, fetch_chart, search_symbols
from logger import get_logger
from models import IndexQuote, MarketSnapshot, SymbolMatch
from sr_levels import analyze_window
from utils.data_conversion import build_price_window, chart_to_frame

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MarketDataService:
    def __init__(
        self,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        threshold_percent: float = LEVELS_THRESHOLD_PERCENT,
        lookback: int = LEVELS_LOOKBACK,
        use_historical_ma: bool = False,
        clock: Clock = _utc_now,
    ):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.threshold_percent = threshold_percent
        self.lookback = lookback
        self.use_historical_ma = use_historical_ma
        self._clock = clock
        self._cache: Dict[str, Tuple[datetime, MarketSnapshot]] = {}
        self._lock = threading.Lock()

    def get_snapshot(self, symbol: str) -> Optional[MarketSnapshot]:
        """Return a quote with levels for ``symbol``, or ``None`` if unavailable."""

        key = symbol.strip().upper()
        cached = self._get_cached(key)
        if cached is not None:
            logger.debug(f"  ♻️ Cache hit for {key}")
            return cached

        try:
            snapshot = self._fetch_snapshot(key)
        except YahooFinanceAPIError as err:
            logger.error(f"  ❌ Yahoo Finance error for {key}: {err}")
            return None
        except (AttributeError, KeyError, TypeError, ValueError) as err:
            logger.error(f"  ❌ Malformed chart payload for {key}: {err}")
            return None

        if snapshot is None or snapshot.current_price == 0:
            logger.info(f"  ⚠️ No data found for {key}")
            return None

        with self._lock:
            self._cache[key] = (self._clock(), snapshot)
        return snapshot

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _get_cached(self, key: str) -> Optional[MarketSnapshot]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            stored_at, snapshot = entry
            if self._clock() - stored_at >= self.ttl:
                del self._cache[key]
                return None
            return snapshot

    def _fetch_snapshot(self, symbol: str) -> Optional[MarketSnapshot]:
        chart = fetch_chart(symbol)
        if not chart:
            return None

        meta = chart.get("meta") or {}
        current_price = float(meta.get("regularMarketPrice") or 0)

        frame = chart_to_frame(chart)
        window = build_price_window(frame, current_price, self.lookback)
        closes = frame["close"] if self.use_historical_ma else None
        result = analyze_window(window, self.threshold_percent, closes)

        logger.info(
            f"  ✅ {symbol}: {len(result.levels.support)} support / "
            f"{len(result.levels.resistance)} resistance levels"
        )
        return MarketSnapshot.from_meta(
            symbol, meta, window, result.levels, result.is_fallback
        )

    def search(self, query: str, limit: int = SEARCH_RESULT_LIMIT) -> List[SymbolMatch]:
        try:
            quotes = search_symbols(query, limit)
        except YahooFinanceAPIError as err:
            logger.error(f"  ❌ Symbol search failed for '{query}': {err}")
            return []
        return [SymbolMatch.from_quote(q) for q in quotes if isinstance(q, dict)]

    def get_world_indices(self) -> List[IndexQuote]:
        quotes: List[IndexQuote] = []
        for symbol, name in WORLD_INDICES.items():
            snapshot = self.get_snapshot(symbol)
            if snapshot is None or snapshot.current_price <= 0:
                continue
            quotes.append(
                IndexQuote(
                    symbol=symbol,
                    name=name,
                    price=snapshot.current_price,
                    change_pct=snapshot.change_pct,
                    currency=snapshot.currency,
                )
            )
        return quotes
