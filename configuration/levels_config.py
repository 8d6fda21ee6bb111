from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class LevelSettings:
    """Weights, ratios and limits used by the level engine."""

    threshold_percent: float
    max_levels_per_side: int
    pivot_weights: Tuple[int, ...]
    fib_ratios: Tuple[Tuple[str, float], ...]
    fib_weights: Dict[str, int]
    ma_offsets: Tuple[Tuple[str, int, float], ...]
    ma_weights: Dict[str, int]
    psych_anchors: Tuple[Tuple[str, float, int], ...]
    fallback_support: Tuple[Tuple[float, int], ...]
    fallback_resistance: Tuple[Tuple[float, int], ...]
    fallback_source: str = "basic"
    rounding_digits: int = 2


LEVEL_SETTINGS = LevelSettings(
    threshold_percent=1.0,
    max_levels_per_side=3,
    # S1/R1, S2/R2, S3/R3
    pivot_weights=(5, 4, 3),
    fib_ratios=(
        ("fib_236", 0.236),
        ("fib_382", 0.382),
        ("fib_500", 0.5),
        ("fib_618", 0.618),
        ("fib_786", 0.786),
    ),
    # Conventional significance, not derived from the ratio.
    fib_weights={
        "fib_618": 4,
        "fib_500": 3,
        "fib_382": 3,
        "fib_786": 2,
        "fib_236": 2,
    },
    # label, period, offset applied to the latest close
    ma_offsets=(
        ("MA20", 20, 0.99),
        ("MA50", 50, 0.98),
        ("MA200", 200, 0.96),
    ),
    ma_weights={"MA20": 3, "MA50": 2, "MA200": 4},
    # label, distance from the rounded price, weight
    psych_anchors=(
        ("psych_00_below", -1.0, 1),
        ("psych_50_below", -0.5, 1),
        ("psych_00", 0.0, 3),
        ("psych_50", 0.5, 2),
        ("psych_00_above", 1.0, 1),
    ),
    fallback_support=((0.98, 2), (0.96, 1), (0.94, 1)),
    fallback_resistance=((1.02, 2), (1.04, 1), (1.06, 1)),
)
