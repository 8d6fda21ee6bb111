from sr_levels.analyzer import (
    analyze_levels,
    analyze_window,
    basic_levels,
    compute_levels,
)
from sr_levels.clustering import (
    cluster_threshold,
    merge_candidates,
    rank_levels,
    split_by_side,
)
from sr_levels.generator import (
    HistoricalMovingAverages,
    MovingAverageSource,
    SyntheticMovingAverages,
    calculate_fibonacci_levels,
    calculate_pivot_points,
    calculate_psychological_levels,
    generate_candidates,
)

__all__ = [
    "analyze_levels",
    "analyze_window",
    "basic_levels",
    "compute_levels",
    "cluster_threshold",
    "merge_candidates",
    "rank_levels",
    "split_by_side",
    "HistoricalMovingAverages",
    "MovingAverageSource",
    "SyntheticMovingAverages",
    "calculate_fibonacci_levels",
    "calculate_pivot_points",
    "calculate_psychological_levels",
    "generate_candidates",
]
