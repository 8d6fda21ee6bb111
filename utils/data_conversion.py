from typing import Any, Dict, Mapping

import pandas as pd

from configuration import LEVELS_LOOKBACK
from models import PriceWindow

# Used when the chart carries no usable OHLC history.
FALLBACK_HIGH_FACTOR = 1.05
FALLBACK_LOW_FACTOR = 0.95


def chart_to_frame(chart: Mapping[str, Any]) -> pd.DataFrame:
    """Convert a Yahoo chart result into a high/low/close dataframe."""

    quotes = (chart.get("indicators") or {}).get("quote") or [{}]
    quote: Dict[str, Any] = quotes[0] or {}
    timestamps = chart.get("timestamp") or []

    columns = {
        key: pd.Series(quote.get(key) or [], dtype="float64")
        for key in ("high", "low", "close")
    }
    frame = pd.DataFrame(columns)
    if timestamps and len(timestamps) == len(frame):
        frame.index = pd.to_datetime(timestamps, unit="s", utc=True)
    return frame


def build_price_window(
    frame: pd.DataFrame, current_price: float, lookback: int = LEVELS_LOOKBACK
) -> PriceWindow:
    """Recent range of the last ``lookback`` bars plus the latest close.

    Missing bars are skipped per column. Without any history the window is
    a +/-5% band around ``current_price``.
    """

    highs = frame["high"].dropna() if "high" in frame else pd.Series(dtype="float64")
    lows = frame["low"].dropna() if "low" in frame else pd.Series(dtype="float64")
    closes = frame["close"].dropna() if "close" in frame else pd.Series(dtype="float64")

    if highs.empty or lows.empty or closes.empty:
        return PriceWindow(
            high=current_price * FALLBACK_HIGH_FACTOR,
            low=current_price * FALLBACK_LOW_FACTOR,
            close=current_price,
            current_price=current_price,
        )

    return PriceWindow(
        high=float(highs.tail(lookback).max()),
        low=float(lows.tail(lookback).min()),
        close=float(closes.iloc[-1]),
        current_price=current_price,
    )
