"""Candidate level generation.

Four independent families are produced from a price window, in a fixed
order: pivot points, Fibonacci retracements, moving-average anchors and
psychological round numbers. The clustering step is order dependent, so the
order of the returned list is part of the contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple, Union

import pandas as pd

from configuration import LEVEL_SETTINGS, LevelSettings
from models import Candidate, PriceWindow
from utils.rounding import round_price, round_to_integer


@dataclass(frozen=True)
class PivotLevels:
    pivot: float
    support: Tuple[float, ...]
    resistance: Tuple[float, ...]


def calculate_pivot_points(high: float, low: float, close: float) -> PivotLevels:
    pivot = (high + low + close) / 3
    r1 = (2 * pivot) - low
    s1 = (2 * pivot) - high
    r2 = pivot + (high - low)
    s2 = pivot - (high - low)
    r3 = high + 2 * (pivot - low)
    s3 = low - 2 * (high - pivot)

    return PivotLevels(
        pivot=round_price(pivot),
        support=(round_price(s1), round_price(s2), round_price(s3)),
        resistance=(round_price(r1), round_price(r2), round_price(r3)),
    )


def calculate_fibonacci_levels(
    high: float, low: float, settings: LevelSettings = LEVEL_SETTINGS
) -> Dict[str, float]:
    diff = high - low
    return {
        label: round_price(high - (ratio * diff))
        for label, ratio in settings.fib_ratios
    }


class MovingAverageSource(Protocol):
    def levels(self, close: float, settings: LevelSettings) -> Dict[str, float]:
        ...


class SyntheticMovingAverages:
    """Approximates MA20/50/200 as fixed offsets below the latest close."""

    def levels(self, close: float, settings: LevelSettings) -> Dict[str, float]:
        return {
            label: round_price(close * offset)
            for label, _, offset in settings.ma_offsets
        }


class HistoricalMovingAverages:
    """Simple moving averages over a real close series.

    Periods longer than the series use the synthetic offset instead.
    """

    def __init__(self, closes: Union[pd.Series, Sequence[float]]):
        series = pd.Series(closes, dtype="float64").dropna()
        self.closes = series.reset_index(drop=True)

    def levels(self, close: float, settings: LevelSettings) -> Dict[str, float]:
        result: Dict[str, float] = {}
        for label, period, offset in settings.ma_offsets:
            if len(self.closes) >= period:
                value = float(self.closes.tail(period).mean())
            else:
                value = close * offset
            result[label] = round_price(value)
        return result


def calculate_psychological_levels(
    current_price: float, settings: LevelSettings = LEVEL_SETTINGS
) -> Dict[str, float]:
    base = round_to_integer(current_price)
    return {label: base + step for label, step, _ in settings.psych_anchors}


def _pivot_candidates(
    window: PriceWindow, settings: LevelSettings
) -> Iterable[Candidate]:
    levels = calculate_pivot_points(window.high, window.low, window.close)
    for i, price in enumerate(levels.support):
        yield Candidate(f"pivot_s{i + 1}", price, settings.pivot_weights[i])
    for i, price in enumerate(levels.resistance):
        yield Candidate(f"pivot_r{i + 1}", price, settings.pivot_weights[i])


def _fibonacci_candidates(
    window: PriceWindow, settings: LevelSettings
) -> Iterable[Candidate]:
    levels = calculate_fibonacci_levels(window.high, window.low, settings)
    for label, price in levels.items():
        yield Candidate(label, price, settings.fib_weights[label])


def _moving_average_candidates(
    window: PriceWindow, settings: LevelSettings, source: MovingAverageSource
) -> Iterable[Candidate]:
    levels = source.levels(window.close, settings)
    for label, price in levels.items():
        # A zero close leaves no usable average.
        if not price:
            continue
        yield Candidate(label, price, settings.ma_weights[label])


def _psychological_candidates(
    window: PriceWindow, settings: LevelSettings
) -> Iterable[Candidate]:
    levels = calculate_psychological_levels(window.current_price, settings)
    weights = {label: weight for label, _, weight in settings.psych_anchors}
    for label, price in levels.items():
        yield Candidate(label, price, weights[label])


def generate_candidates(
    window: PriceWindow,
    settings: LevelSettings = LEVEL_SETTINGS,
    ma_source: Optional[MovingAverageSource] = None,
) -> List[Candidate]:
    """Build every candidate level for ``window`` in clustering order."""

    source = ma_source or SyntheticMovingAverages()
    candidates: List[Candidate] = [
        *_pivot_candidates(window, settings),
        *_fibonacci_candidates(window, settings),
        *_moving_average_candidates(window, settings, source),
        *_psychological_candidates(window, settings),
    ]

    labels = [c.label for c in candidates]
    if len(labels) != len(set(labels)):
        raise ValueError(f"Duplicate candidate labels: {labels}")

    return candidates
