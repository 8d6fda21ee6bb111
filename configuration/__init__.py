from .levels_config import LEVEL_SETTINGS, LevelSettings
from .market_config import (
    CACHE_TTL_SECONDS,
    CHART_INTERVAL,
    CHART_RANGE,
    LEVELS_LOOKBACK,
    LEVELS_THRESHOLD_PERCENT,
    SEARCH_RESULT_LIMIT,
    WORLD_INDICES,
    YAHOO_BASE_URL,
    YAHOO_SEARCH_TIMEOUT_SECONDS,
    YAHOO_TIMEOUT_SECONDS,
    YAHOO_USER_AGENT,
)

__all__ = [
    "LEVEL_SETTINGS",
    "LevelSettings",
    "CACHE_TTL_SECONDS",
    "CHART_INTERVAL",
    "CHART_RANGE",
    "LEVELS_LOOKBACK",
    "LEVELS_THRESHOLD_PERCENT",
    "SEARCH_RESULT_LIMIT",
    "WORLD_INDICES",
    "YAHOO_BASE_URL",
    "YAHOO_SEARCH_TIMEOUT_SECONDS",
    "YAHOO_TIMEOUT_SECONDS",
    "YAHOO_USER_AGENT",
]
