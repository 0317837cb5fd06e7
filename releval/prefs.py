"""Preference measures averaged over judgment groups."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import takewhile
from typing import Callable, Iterable, Sequence

__all__ = [
    "EquivalenceClass",
    "JudgmentGroup",
    "ResultsPrefs",
    "prefs_avgjg",
    "prefs_avgjg_imp",
    "prefs_avgjg_ret",
    "prefs_avgjg_rnonrel",
    "prefs_avgjg_rnonrel_ret",
]


@dataclass(frozen=True)
class EquivalenceClass:
    """Docs judged equally good, given by their rank among the judged docs.

    Every doc in a class is preferred to every doc in a later class of the
    same judgment group.
    """

    rel_level: float
    docid_ranks: Sequence[int] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "docid_ranks", tuple(self.docid_ranks))

    @property
    def num_in_ec(self) -> int:
        return len(self.docid_ranks)


@dataclass(frozen=True)
class JudgmentGroup:
    """Preference counts and the preferences themselves for one judgment group.

    Preferences are given either as equivalence classes (``ecs``, with the
    nonrelevant class last) or as a square ``prefs_array`` in which
    ``prefs_array[i][j]`` is true when judged doc ``i`` is preferred to
    ``j``; ``rel_array[i]`` is then the relevance of judged doc ``i``.
    """

    num_prefs_fulfilled_ret: int = 0
    num_prefs_possible_ret: int = 0
    num_prefs_fulfilled_imp: int = 0
    num_prefs_possible_imp: int = 0
    num_prefs_possible_notoccur: int = 0
    num_nonrel: int = 0
    num_nonrel_ret: int = 0
    num_rel: int = 0
    num_rel_ret: int = 0
    ecs: Sequence[EquivalenceClass] = field(default_factory=tuple)
    prefs_array: Sequence[Sequence[int]] = field(default_factory=tuple)
    rel_array: Sequence[float] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ecs", tuple(self.ecs))
        array = tuple(tuple(row) for row in self.prefs_array)
        object.__setattr__(self, "prefs_array", array)
        object.__setattr__(self, "rel_array", tuple(self.rel_array))
        if any(len(row) != len(array) for row in array):
            raise ValueError("preference array must be square")
        if array and len(self.rel_array) != len(array):
            raise ValueError("rel_array must have one entry per judged doc")

    @property
    def num_ecs(self) -> int:
        return len(self.ecs)

    @property
    def num_judged(self) -> int:
        """Number of docs covered by the preference array."""
        return len(self.prefs_array)


@dataclass(frozen=True)
class ResultsPrefs:
    """Preference counts of one topic's results, per judgment group."""

    jgs: Sequence[JudgmentGroup] = field(default_factory=tuple)
    num_judged_ret: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "jgs", tuple(self.jgs))

    @property
    def num_jgs(self) -> int:
        return len(self.jgs)


def _div(numerator: float, denominator: float) -> float:
    """Floating point division that yields inf or nan on a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _average(results_prefs: ResultsPrefs, total: float) -> float:
    if total > 0.0:
        return total / results_prefs.num_jgs
    return 0.0


def _simple_ratio(
    results_prefs: ResultsPrefs, counts: Callable[[JudgmentGroup], tuple[int, int]]
) -> float:
    total = 0.0
    for jg in results_prefs.jgs:
        ful, poss = counts(jg)
        if poss:
            total += ful / poss
    return _average(results_prefs, total)


def prefs_avgjg(results_prefs: ResultsPrefs) -> float:
    """Fulfilled over possible preferences per judgment group, averaged.

    Implied preferences count, and a pair with neither doc retrieved counts
    as a failure.
    """
    return _simple_ratio(
        results_prefs,
        lambda jg: (
            jg.num_prefs_fulfilled_ret + jg.num_prefs_fulfilled_imp,
            jg.num_prefs_possible_ret
            + jg.num_prefs_possible_imp
            + jg.num_prefs_possible_notoccur,
        ),
    )


def prefs_avgjg_imp(results_prefs: ResultsPrefs) -> float:
    """Like :func:`prefs_avgjg`, but pairs with neither doc retrieved are ignored."""
    return _simple_ratio(
        results_prefs,
        lambda jg: (
            jg.num_prefs_fulfilled_ret + jg.num_prefs_fulfilled_imp,
            jg.num_prefs_possible_ret + jg.num_prefs_possible_imp,
        ),
    )


def prefs_avgjg_ret(results_prefs: ResultsPrefs) -> float:
    """Like :func:`prefs_avgjg`, counting only pairs with both docs retrieved."""
    return _simple_ratio(
        results_prefs,
        lambda jg: (jg.num_prefs_fulfilled_ret, jg.num_prefs_possible_ret),
    )


def _count_ec_pairs(
    pairs: Iterable[tuple[Iterable[int], Iterable[int]]],
    fulfilled: Callable[[int, int], bool],
) -> tuple[int, int]:
    ful = 0
    not_ful = 0
    for better, worse in pairs:
        worse = list(worse)
        for r1 in better:
            for r2 in worse:
                if fulfilled(r1, r2):
                    ful += 1
                else:
                    not_ful += 1
    return ful, not_ful + ful


def _ec_pairs(
    jg: JudgmentGroup, new_nonrel: Sequence[int], ranks: Callable[[Sequence[int]], Iterable[int]]
) -> Iterable[tuple[Iterable[int], Iterable[int]]]:
    """Class pairs among the relevant classes, then every class against ``new_nonrel``."""
    ecs = jg.ecs
    for ec1 in range(len(ecs)):
        for ec2 in range(ec1 + 1, len(ecs) - 1):
            yield ranks(ecs[ec1].docid_ranks), ranks(ecs[ec2].docid_ranks)
    for ec in ecs:
        yield ranks(ec.docid_ranks), ranks(new_nonrel)


def _first_discarded_nonrel(jg: JudgmentGroup, limit: int) -> int:
    """Position of the nonrel doc after the first ``num_rel`` of them, or ``limit``."""
    seen = 0
    for i, rel in enumerate(jg.rel_array[:limit]):
        if rel == 0.0:
            seen += 1
            if seen == jg.num_rel + 1:
                return i
    return limit


def _kept(jg: JudgmentGroup, first_discarded: int, limit: int) -> list[int]:
    return [
        i
        for i in range(limit)
        if not (i >= first_discarded and jg.rel_array[i] == 0.0)
    ]


def _recalculate(jg: JudgmentGroup, num_judged_ret: int) -> tuple[int, int]:
    """Preference counts keeping only the first ``num_rel`` nonrelevant docs."""
    if jg.num_ecs > 0:
        new_nonrel = jg.ecs[-1].docid_ranks[: jg.num_rel]
        return _count_ec_pairs(
            _ec_pairs(jg, new_nonrel, lambda ranks: ranks),
            lambda r1, r2: r1 < r2 and r1 < num_judged_ret,
        )

    num_judged = jg.num_judged
    first = _first_discarded_nonrel(jg, num_judged)
    kept = _kept(jg, first, num_judged)
    a = jg.prefs_array
    ful = 0
    not_ful = 0
    for i in kept:
        for j in kept:
            if not a[i][j]:
                continue
            if i < num_judged_ret:
                if j > i:
                    ful += 1
                elif j < i:
                    not_ful += 1
            else:
                not_ful += 1
    return ful, not_ful + ful


def _recalculate_ret(jg: JudgmentGroup, num_judged_ret: int) -> tuple[int, int]:
    """Like :func:`_recalculate`, using retrieved docs only."""
    if jg.num_ecs > 0:
        new_nonrel = jg.ecs[-1].docid_ranks[: jg.num_rel_ret]

        def retrieved(ranks: Sequence[int]) -> list[int]:
            return list(takewhile(lambda r: r < num_judged_ret, ranks))

        return _count_ec_pairs(
            _ec_pairs(jg, new_nonrel, retrieved), lambda r1, r2: r1 < r2
        )

    limit = min(num_judged_ret, jg.num_judged)
    first = _first_discarded_nonrel(jg, limit)
    kept = _kept(jg, first, limit)
    a = jg.prefs_array
    ful = 0
    not_ful = 0
    for i in kept:
        for j in kept:
            if not a[i][j]:
                continue
            if j > i:
                ful += 1
            elif j < i:
                not_ful += 1
    return ful, not_ful + ful


def prefs_avgjg_rnonrel(results_prefs: ResultsPrefs) -> float:
    """:func:`prefs_avgjg` with each group's nonrelevant docs set to R of them.

    With fewer nonrelevant docs than relevant ones, the missing ones are
    counted as fulfilled preferences; with more, only the first R are used.
    """
    total = 0.0
    for jg in results_prefs.jgs:
        r, n = jg.num_rel, jg.num_nonrel
        if r >= n:
            ful = (
                jg.num_prefs_fulfilled_ret
                + jg.num_prefs_fulfilled_imp
                + jg.num_rel_ret * (r - n)
            )
            poss = (
                jg.num_prefs_possible_ret
                + jg.num_prefs_possible_imp
                + jg.num_prefs_possible_notoccur
                + jg.num_rel * (r - n)
            )
        else:
            ful, poss = _recalculate(jg, results_prefs.num_judged_ret)
        total += _div(ful, poss)
    return _average(results_prefs, total)


def prefs_avgjg_rnonrel_ret(results_prefs: ResultsPrefs) -> float:
    """:func:`prefs_avgjg_ret` with retrieved nonrelevant docs set to R of them."""
    total = 0.0
    for jg in results_prefs.jgs:
        r, n = jg.num_rel_ret, jg.num_nonrel_ret
        if r >= n:
            ful = jg.num_prefs_fulfilled_ret + jg.num_rel_ret * (r - n)
            poss = jg.num_prefs_possible_ret + jg.num_rel * (r - n)
        else:
            ful, poss = _recalculate_ret(jg, results_prefs.num_judged_ret)
        total += _div(ful, poss)
    return _average(results_prefs, total)