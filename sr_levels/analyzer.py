"""Support/resistance analyzer entry point.

Generation and ranking live in ``generator`` and ``clustering``; this module
validates input and guarantees that callers always receive a usable
``LevelSet``, falling back to fixed percentage bands when anything fails.
"""

import math
from typing import Optional, Sequence, Union

import pandas as pd

from configuration import LEVEL_SETTINGS, LevelSettings
from logger import get_logger
from models import Cluster, LevelResult, LevelSet, PriceWindow
from sr_levels.clustering import rank_levels
from sr_levels.generator import (
    HistoricalMovingAverages,
    SyntheticMovingAverages,
    generate_candidates,
)
from utils.rounding import round_half_away

logger = get_logger(__name__)

CloseSeries = Union[pd.Series, Sequence[float]]


def basic_levels(
    current_price: float, settings: LevelSettings = LEVEL_SETTINGS
) -> LevelSet:
    """Fixed percentage bands around ``current_price``."""

    try:
        price = float(current_price)
    except (TypeError, ValueError, OverflowError):
        price = math.nan

    def _band(multipliers):
        return [
            Cluster(
                price=round_half_away(price * multiplier, settings.rounding_digits),
                strength=strength,
                sources=[settings.fallback_source],
            )
            for multiplier, strength in multipliers
        ]

    return LevelSet(
        support=_band(settings.fallback_support),
        resistance=_band(settings.fallback_resistance),
    )


def analyze_window(
    window: PriceWindow,
    threshold_percent: float = LEVEL_SETTINGS.threshold_percent,
    closes: Optional[CloseSeries] = None,
    settings: LevelSettings = LEVEL_SETTINGS,
) -> LevelResult:
    try:
        window = window.validate()
        ma_source = (
            HistoricalMovingAverages(closes)
            if closes is not None
            else SyntheticMovingAverages()
        )
        candidates = generate_candidates(window, settings, ma_source)
        levels = rank_levels(
            candidates, window.current_price, threshold_percent, settings
        )
    except Exception as err:
        logger.warning(f"  ⚠️ Advanced levels failed, using basic levels: {err}")
        return LevelResult.fallback(basic_levels(window.current_price, settings), err)

    logger.debug(
        f"  ✅ {len(levels.support)} support / {len(levels.resistance)} resistance "
        f"levels around {window.current_price}"
    )
    return LevelResult.ok(levels)


def analyze_levels(
    high: float,
    low: float,
    close: float,
    current_price: float,
    threshold_percent: float = LEVEL_SETTINGS.threshold_percent,
    closes: Optional[CloseSeries] = None,
) -> LevelResult:
    """Compute levels and report whether the fallback path was taken."""

    window = PriceWindow(
        high=high, low=low, close=close, current_price=current_price
    )
    return analyze_window(window, threshold_percent, closes)


def compute_levels(
    high: float,
    low: float,
    close: float,
    current_price: float,
    threshold_percent: float = LEVEL_SETTINGS.threshold_percent,
    closes: Optional[CloseSeries] = None,
) -> LevelSet:
    """Return the top support and resistance clusters; never raises."""

    return analyze_levels(
        high, low, close, current_price, threshold_percent, closes
    ).levels
