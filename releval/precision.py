"""Precision at document cutoffs and at multiples of the number of relevant docs."""

from __future__ import annotations

from itertools import accumulate
from typing import Iterable

from .relevance import ResRels, ResRelsJg

__all__ = [
    "precision_at",
    "precision_at_avgjg",
    "r_precision",
    "rprec_mult",
    "rprec_mult_avgjg",
]


def _rel_prefix(res_rels: ResRels, relevance_level: int) -> list[int]:
    """Number of relevant docs among the first ``k`` retrieved, for every k."""
    return [
        0,
        *accumulate(int(rel >= relevance_level) for rel in res_rels.results_rel_list),
    ]


def _doc_cutoffs(cutoffs: Iterable[int]) -> list[int]:
    values = list(cutoffs)
    if not values:
        raise ValueError("no cutoff values")
    if any(c <= 0 for c in values):
        raise ValueError("cutoffs must be positive")
    if len(set(values)) != len(values):
        raise ValueError("cutoffs must not contain duplicates")
    return sorted(values)


def _multiples(multiples: Iterable[float]) -> list[float]:
    values = list(multiples)
    if not values:
        raise ValueError("no cutoff values")
    if len(set(values)) != len(values):
        raise ValueError("cutoffs must not contain duplicates")
    return sorted(values)


def _average_over_jgs(
    per_jg: list[dict], keys: list
) -> dict:
    totals = {key: sum(values[key] for values in per_jg) for key in keys}
    if len(per_jg) > 1:
        totals = {key: value / len(per_jg) for key, value in totals.items()}
    return totals


def precision_at(
    res_rels: ResRels, relevance_level: int, cutoffs: Iterable[int]
) -> dict[int, float]:
    """Precision after each document cutoff.

    Cutoffs beyond the retrieved list are filled in with non-relevant docs.
    Returns a mapping from cutoff to value in increasing cutoff order.
    """
    ordered = _doc_cutoffs(cutoffs)
    prefix = _rel_prefix(res_rels, relevance_level)
    return {c: prefix[min(c, res_rels.num_ret)] / c for c in ordered}


def precision_at_avgjg(
    res_rels_jg: ResRelsJg, relevance_level: int, cutoffs: Iterable[int]
) -> dict[int, float]:
    """Precision at cutoffs, averaged over judgment groups."""
    ordered = _doc_cutoffs(cutoffs)
    per_jg = [precision_at(jg, relevance_level, ordered) for jg in res_rels_jg.jgs]
    return _average_over_jgs(per_jg, ordered)


def r_precision(res_rels: ResRels, relevance_level: int) -> float:
    """Precision after R docs are retrieved, R being the number of relevant docs."""
    num_to_look_at = min(res_rels.num_ret, res_rels.num_rel)
    if num_to_look_at == 0:
        return 0.0
    rel_so_far = _rel_prefix(res_rels, relevance_level)[num_to_look_at]
    return rel_so_far / res_rels.num_rel


def rprec_mult(
    res_rels: ResRels, relevance_level: int, multiples: Iterable[float]
) -> dict[float, float]:
    """Precision at each given multiple of the number of relevant docs.

    Returns a mapping from multiple to value in increasing order.
    """
    ordered = _multiples(multiples)
    prefix = _rel_prefix(res_rels, relevance_level)
    total_in_list = prefix[-1]
    values = {}
    for multiple in ordered:
        cutoff = int(multiple * res_rels.num_rel + 0.9)
        if cutoff > res_rels.num_ret:
            values[multiple] = res_rels.num_rel_ret / cutoff
        elif cutoff <= 0:
            values[multiple] = 0.0
        else:
            rel_so_far = res_rels.num_rel_ret - (total_in_list - prefix[cutoff])
            values[multiple] = max(rel_so_far, 0) / cutoff
    return values


def rprec_mult_avgjg(
    res_rels_jg: ResRelsJg, relevance_level: int, multiples: Iterable[float]
) -> dict[float, float]:
    """Precision at multiples of R, averaged over judgment groups."""
    ordered = _multiples(multiples)
    per_jg = [rprec_mult(jg, relevance_level, ordered) for jg in res_rels_jg.jgs]
    return _average_over_jgs(per_jg, ordered)