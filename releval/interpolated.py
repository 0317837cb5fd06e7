"""Interpolated precision at recall points and its 11-point average."""

from __future__ import annotations

from typing import Iterable, Sequence

from .relevance import ResRels

__all__ = [
    "DEFAULT_RECALL_POINTS",
    "iprec_at_recall",
    "eleven_pt_avg",
]

#: The standard eleven recall points of the recall-precision graph.
DEFAULT_RECALL_POINTS = (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)


def _interpolated_values(
    res_rels: ResRels, relevance_level: int, points: Sequence[float]
) -> list[float]:
    """Interpolated precision at each of ``points``, which must be sorted.

    Interpolated precision at rank X is the maximum precision at any rank
    Y >= X, so the ranking is walked from the bottom up.
    """
    # Adding 0.9 keeps the default points on the historical cutoffs.
    cutoffs = [int(point * res_rels.num_rel + 0.9) for point in points]
    values = [0.0] * len(points)

    current_cut = len(cutoffs) - 1
    while current_cut >= 0 and cutoffs[current_cut] > res_rels.num_rel_ret:
        current_cut -= 1

    num_ret = res_rels.num_ret
    int_precis = res_rels.num_rel_ret / num_ret if num_ret else 0.0
    rel_so_far = res_rels.num_rel_ret

    ranked = zip(range(num_ret, 0, -1), reversed(res_rels.results_rel_list))
    for rank, rel in ranked:
        if rel_so_far <= 0:
            break
        int_precis = max(int_precis, rel_so_far / rank)
        if rel >= relevance_level:
            while current_cut >= 0 and rel_so_far == cutoffs[current_cut]:
                values[current_cut] = int_precis
                current_cut -= 1
            rel_so_far -= 1

    while current_cut >= 0:
        values[current_cut] = int_precis
        current_cut -= 1
    return values


def iprec_at_recall(
    res_rels: ResRels,
    relevance_level: int,
    recall_points: Iterable[float] = DEFAULT_RECALL_POINTS,
) -> dict[float, float]:
    """Interpolated precision at each recall point.

    Returns a mapping from recall point to value in increasing order.
    Recall points must be given and distinct.
    """
    points = list(recall_points)
    if not points:
        raise ValueError("no cutoff values")
    if len(set(points)) != len(points):
        raise ValueError("cutoffs must not contain duplicates")
    ordered = sorted(points)
    values = _interpolated_values(res_rels, relevance_level, ordered)
    return dict(zip(ordered, values))


def eleven_pt_avg(
    res_rels: ResRels,
    relevance_level: int,
    recall_points: Iterable[float] = DEFAULT_RECALL_POINTS,
) -> float:
    """Interpolated precision averaged over all the given recall points."""
    points = sorted(recall_points)
    if not points:
        raise ValueError("no cutoff values")
    values = _interpolated_values(res_rels, relevance_level, points)
    return sum(values) / len(points)