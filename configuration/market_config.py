"""Market data provider and analysis settings read from the environment."""
from __future__ import annotations

import os
from typing import Dict, Final

from core import env  # noqa: F401  (loads .env)

YAHOO_BASE_URL: str = os.getenv(
    "YAHOO_BASE_URL", "https://query1.finance.yahoo.com"
)
YAHOO_TIMEOUT_SECONDS: float = float(os.getenv("YAHOO_TIMEOUT_SECONDS", "15"))
YAHOO_SEARCH_TIMEOUT_SECONDS: float = float(
    os.getenv("YAHOO_SEARCH_TIMEOUT_SECONDS", "10")
)
YAHOO_USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
CHART_RANGE: str = os.getenv("CHART_RANGE", "3mo")
CHART_INTERVAL: str = os.getenv("CHART_INTERVAL", "1d")

LEVELS_THRESHOLD_PERCENT: float = float(os.getenv("LEVELS_THRESHOLD_PERCENT", "1.0"))
LEVELS_LOOKBACK: int = int(os.getenv("LEVELS_LOOKBACK", "20"))

CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "300"))

SEARCH_RESULT_LIMIT: int = 6

WORLD_INDICES: Dict[str, str] = {
    "^GSPC": "S&P 500 (US)",
    "^DJI": "Dow Jones (US)",
    "^IXIC": "NASDAQ (US)",
    "^FTSE": "FTSE 100 (UK)",
    "^N225": "Nikkei 225 (Japan)",
    "^HSI": "Hang Seng (HK)",
    "^SET.BK": "SET Index (Thailand)",
}
