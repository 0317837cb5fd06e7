"""Binary preference and inferred average precision."""

from __future__ import annotations

import math

from .average_precision import MIN_GEO_MEAN
from .relevance import ResRels

__all__ = [
    "RELVALUE_NONPOOL",
    "RELVALUE_UNJUDGED",
    "INFAP_EPSILON",
    "bpref",
    "gm_bpref",
    "inferred_ap",
]

#: Relevance value of a retrieved document that was not in the judgment pool.
RELVALUE_NONPOOL = -1
#: Relevance value of a pooled document that was never judged.
RELVALUE_UNJUDGED = -2
#: Smoothing constant used by inferred AP.
INFAP_EPSILON = 0.00001


def bpref(res_rels: ResRels, relevance_level: int) -> float:
    """Fraction of the top R judged nonrelevant docs ranked after each rel doc."""
    num_nonrel = sum(res_rels.rel_levels[:max(relevance_level, 0)])
    nonrel_so_far = 0
    total = 0.0
    for rel in res_rels.results_rel_list:
        if rel in (RELVALUE_NONPOOL, RELVALUE_UNJUDGED):
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
        elif nonrel_so_far > 0:
            total += 1.0 - (
                min(nonrel_so_far, res_rels.num_rel)
                / min(num_nonrel, res_rels.num_rel)
            )
        else:
            total += 1.0
    if res_rels.num_rel:
        total /= res_rels.num_rel
    return total


def gm_bpref(res_rels: ResRels, relevance_level: int) -> float:
    """Log of bpref, for geometric averaging over topics."""
    return math.log(max(bpref(res_rels, relevance_level), MIN_GEO_MEAN))


def inferred_ap(res_rels: ResRels, relevance_level: int) -> float:
    """Inferred AP for a judgment pool of which only a sample was judged.

    Documents outside the pool count as nonrelevant; pooled but unjudged
    documents are assumed relevant in the same proportion as judged ones.
    """
    nonrel_so_far = 0
    rel_so_far = 0
    pool_unjudged_so_far = 0
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if rel == RELVALUE_NONPOOL:
            continue
        if rel == RELVALUE_UNJUDGED:
            pool_unjudged_so_far += 1
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
            continue
        rel_so_far += 1
        if index == 0:
            total += 1.0
        else:
            fj = float(index)
            above = rel_so_far - 1
            total += 1.0 / (fj + 1.0) + (fj / (fj + 1.0)) * (
                (above + nonrel_so_far + pool_unjudged_so_far) / fj
            ) * (
                (above + INFAP_EPSILON)
                / (above + nonrel_so_far + 2 * INFAP_EPSILON)
            )
    if res_rels.num_rel:
        total /= res_rels.num_rel
    return total