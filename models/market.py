from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from models.levels import LevelSet, PriceWindow


@dataclass
class MarketSnapshot:
    """Quote metadata for one symbol together with its computed levels."""

    symbol: str
    current_price: float
    previous_close: float
    company_name: str
    exchange: str
    currency: str
    volume: float
    market_cap: float
    day_high: float
    day_low: float
    window: PriceWindow
    levels: LevelSet
    levels_fallback: bool = False
    data_source: str = "Yahoo Finance"

    @property
    def change(self) -> float:
        return self.current_price - self.previous_close

    @property
    def change_pct(self) -> float:
        if not self.previous_close:
            return 0.0
        return (self.change / self.previous_close) * 100

    @classmethod
    def from_meta(
        cls,
        symbol: str,
        meta: Mapping[str, Any],
        window: PriceWindow,
        levels: LevelSet,
        levels_fallback: bool = False,
    ) -> "MarketSnapshot":
        return cls(
            symbol=symbol,
            current_price=float(meta.get("regularMarketPrice") or 0),
            previous_close=float(meta.get("previousClose") or 0),
            company_name=meta.get("longName") or symbol,
            exchange=meta.get("exchangeName") or "",
            currency=meta.get("currency") or "USD",
            volume=float(meta.get("regularMarketVolume") or 0),
            market_cap=float(meta.get("marketCap") or 0),
            day_high=float(meta.get("regularMarketDayHigh") or 0),
            day_low=float(meta.get("regularMarketDayLow") or 0),
            window=window,
            levels=levels,
            levels_fallback=levels_fallback,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "current_price": self.current_price,
            "previous_close": self.previous_close,
            "change": self.change,
            "change_pct": self.change_pct,
            "company_name": self.company_name,
            "exchange": self.exchange,
            "currency": self.currency,
            "volume": self.volume,
            "market_cap": self.market_cap,
            "day_high": self.day_high,
            "day_low": self.day_low,
            "support_levels": self.levels.support_prices,
            "resistance_levels": self.levels.resistance_prices,
            "support_strength": self.levels.support_strength,
            "resistance_strength": self.levels.resistance_strength,
            "data_source": self.data_source,
        }


@dataclass(frozen=True)
class SymbolMatch:
    symbol: str
    name: str
    exchange: str

    @classmethod
    def from_quote(cls, quote: Mapping[str, Any]) -> "SymbolMatch":
        return cls(
            symbol=quote.get("symbol") or "",
            name=quote.get("longname") or quote.get("shortname") or "",
            exchange=quote.get("exchDisp") or "",
        )


@dataclass(frozen=True)
class IndexQuote:
    symbol: str
    name: str
    price: float
    change_pct: float
    currency: str

    @property
    def is_up(self) -> bool:
        return self.change_pct >= 0

