import math
from typing import Iterable, List, Tuple

from configuration import LEVEL_SETTINGS, LevelSettings
from models import Candidate, Cluster, LevelSet


def cluster_threshold(current_price: float, threshold_percent: float) -> float:
    if not math.isfinite(threshold_percent) or threshold_percent < 0:
        raise ValueError(
            f"threshold_percent must be a non-negative number, got {threshold_percent!r}"
        )
    return current_price * (threshold_percent / 100)


def split_by_side(
    candidates: Iterable[Candidate], current_price: float
) -> Tuple[List[Candidate], List[Candidate]]:
    """Candidates below the price are support, the rest resistance."""

    support: List[Candidate] = []
    resistance: List[Candidate] = []
    for candidate in candidates:
        if candidate.price < current_price:
            support.append(candidate)
        else:
            resistance.append(candidate)
    return support, resistance


def merge_candidates(candidates: Iterable[Candidate], threshold: float) -> List[Cluster]:
    """Greedy single pass: each candidate joins the first cluster in range.

    Clusters are tried in creation order and their anchor price never moves,
    so a candidate may join an older cluster even when a newer one is closer.
    """

    clusters: List[Cluster] = []
    for candidate in candidates:
        for cluster in clusters:
            if abs(cluster.price - candidate.price) <= threshold:
                cluster.absorb(candidate)
                break
        else:
            clusters.append(Cluster.from_candidate(candidate))
    return clusters


def _select_strongest(
    clusters: List[Cluster], limit: int, nearest_first_descending: bool
) -> List[Cluster]:
    by_distance = sorted(
        clusters, key=lambda c: c.price, reverse=nearest_first_descending
    )
    # Stable sort: equal strengths keep the level closest to price first.
    strongest = sorted(by_distance, key=lambda c: c.strength, reverse=True)[:limit]
    return sorted(strongest, key=lambda c: c.price, reverse=nearest_first_descending)


def rank_levels(
    candidates: Iterable[Candidate],
    current_price: float,
    threshold_percent: float = LEVEL_SETTINGS.threshold_percent,
    settings: LevelSettings = LEVEL_SETTINGS,
) -> LevelSet:
    threshold = cluster_threshold(current_price, threshold_percent)
    support_pool, resistance_pool = split_by_side(candidates, current_price)

    support = _select_strongest(
        merge_candidates(support_pool, threshold),
        settings.max_levels_per_side,
        nearest_first_descending=True,
    )
    resistance = _select_strongest(
        merge_candidates(resistance_pool, threshold),
        settings.max_levels_per_side,
        nearest_first_descending=False,
    )
    return LevelSet(support=support, resistance=resistance)
