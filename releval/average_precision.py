"""Average precision and closely related single-topic measures."""

from __future__ import annotations

import math
from itertools import accumulate
from typing import Iterable

from .relevance import ResRels, ResRelsJg

__all__ = [
    "MIN_GEO_MEAN",
    "average_precision",
    "average_precision_avgjg",
    "gm_average_precision",
    "map_cut",
    "binary_g",
]

#: Floor applied before taking the log for geometric-mean measures.
MIN_GEO_MEAN = 0.00001


def _precision_sums(res_rels: ResRels, relevance_level: int) -> list[float]:
    """Running sum of precision at each relevant doc, after each rank."""
    rel_so_far = 0
    contributions = []
    for rank, rel in enumerate(res_rels.results_rel_list, start=1):
        if rel >= relevance_level:
            rel_so_far += 1
            contributions.append(rel_so_far / rank)
        else:
            contributions.append(0.0)
    return [0.0, *accumulate(contributions)]


def average_precision(res_rels: ResRels, relevance_level: int) -> float:
    """Precision after each relevant doc, averaged over all relevant docs."""
    rel_so_far = 0
    total = 0.0
    for rank, rel in enumerate(res_rels.results_rel_list, start=1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
    if rel_so_far:
        return total / res_rels.num_rel
    return 0.0


def average_precision_avgjg(res_rels_jg: ResRelsJg, relevance_level: int) -> float:
    """Average precision averaged over judgment groups."""
    total = sum(average_precision(jg, relevance_level) for jg in res_rels_jg.jgs)
    if res_rels_jg.num_jgs > 1:
        total /= res_rels_jg.num_jgs
    return total


def gm_average_precision(res_rels: ResRels, relevance_level: int) -> float:
    """Log of average precision, for geometric averaging over topics."""
    return math.log(max(average_precision(res_rels, relevance_level), MIN_GEO_MEAN))


def map_cut(
    res_rels: ResRels, relevance_level: int, cutoffs: Iterable[int]
) -> dict[int, float]:
    """Average precision truncated at each document cutoff.

    Returns a mapping from cutoff to value, in increasing cutoff order.
    Cutoffs must be positive and distinct.
    """
    cutoff_list = list(cutoffs)
    if not cutoff_list:
        raise ValueError("no cutoff values")
    if any(c <= 0 for c in cutoff_list):
        raise ValueError("cutoffs must be positive")
    if len(set(cutoff_list)) != len(cutoff_list):
        raise ValueError("cutoffs must not contain duplicates")
    ordered = sorted(cutoff_list)

    if res_rels.num_rel == 0:
        return {c: 0.0 for c in ordered}

    sums = _precision_sums(res_rels, relevance_level)
    return {
        c: sums[min(c, res_rels.num_ret)] / res_rels.num_rel for c in ordered
    }


def binary_g(res_rels: ResRels, relevance_level: int) -> float:
    """Binary G: mean over relevant docs of 1 / log2(2 + nonrel before it)."""
    rel_so_far = 0
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if rel >= relevance_level:
            nonrel_before = index - rel_so_far
            rel_so_far += 1
            total += 1.0 / math.log2(2 + nonrel_before)
    if rel_so_far:
        return total / res_rels.num_rel
    return 0.0