"""Relevance-level gains and the normalized discounted cumulative gain measures."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, field
from itertools import accumulate, repeat
from typing import Iterable, Iterator, Mapping, Sequence, Tuple, Union

from .relevance import ResRels

__all__ = [
    "RelGain",
    "Gains",
    "setup_gains",
    "ndcg",
    "ndcg_cut",
    "ndcg_p",
]

GainParams = Union[
    Mapping[Union[str, int], float], Iterable[Tuple[Union[str, int], float]], None
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class RelGain:
    """Gain assigned to one relevance level, and how many docs are judged at it."""

    rel_level: int
    gain: float
    num_at_level: int = 0


@dataclass(frozen=True)
class Gains:
    """Gains for all known relevance levels, sorted by increasing gain."""

    rel_gains: Sequence[RelGain] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rel_gains", tuple(self.rel_gains))

    @property
    def num_gains(self) -> int:
        return len(self.rel_gains)

    @property
    def total_num_at_levels(self) -> int:
        """Number of judged docs over all levels."""
        return sum(rg.num_at_level for rg in self.rel_gains)

    def gain(self, rel_level: int) -> float:
        """Gain of ``rel_level``; 0.0 for a level that has none."""
        for rg in self.rel_gains:
            if rg.rel_level == rel_level:
                return rg.gain
        return 0.0


def _level_of(name: Union[str, int]) -> int:
    """Relevance level named by a parameter, read like a leading integer."""
    if isinstance(name, int):
        return name
    match = _LEADING_INT.match(name)
    return int(match.group(1)) if match else 0


def _param_pairs(gain_params: GainParams) -> list[tuple[Union[str, int], float]]:
    if gain_params is None:
        return []
    if isinstance(gain_params, Mapping):
        return list(gain_params.items())
    return list(gain_params)


def setup_gains(gain_params: GainParams, rel_levels: Sequence[int]) -> Gains:
    """Combine explicit ``level=gain`` parameters with the judged levels.

    Levels not given a gain get their own level number as gain.
    ``rel_levels[i]`` is the number of judged docs at level ``i``.
    """
    entries = [
        RelGain(_level_of(name), float(value), 0)
        for name, value in _param_pairs(gain_params)
    ]
    for level, count in enumerate(rel_levels):
        index = next(
            (j for j, rg in enumerate(entries) if rg.rel_level == level), None
        )
        if index is None:
            entries.append(RelGain(level, float(level), count))
        else:
            old = entries[index]
            entries[index] = RelGain(old.rel_level, old.gain, count)
    entries.sort(key=lambda rg: rg.gain)
    return Gains(entries)


def _ideal_gains(gains: Gains) -> Iterator[float]:
    """Positive gains of the best possible ranking, in rank order."""
    for rg in reversed(gains.rel_gains):
        if rg.gain <= 0.0:
            return
        yield from repeat(rg.gain, rg.num_at_level)


def _float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _divide(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0.0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def ndcg(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """Normalized discounted cumulative gain over the whole ranking."""
    gains = setup_gains(gain_params, res_rels.rel_levels)
    results_dcg = sum(
        gain / math.log2(rank + 1)
        for rank, gain in enumerate(
            (gains.gain(rel) for rel in res_rels.results_rel_list), start=1
        )
        if gain != 0
    )
    ideal_dcg = sum(
        gain / math.log2(rank + 1)
        for rank, gain in enumerate(_ideal_gains(gains), start=1)
    )
    if ideal_dcg > 0.0:
        return results_dcg / ideal_dcg
    return 0.0


def _doc_cutoffs(cutoffs: Iterable[int]) -> list[int]:
    values = list(cutoffs)
    if not values:
        raise ValueError("no cutoff values")
    if any(c <= 0 for c in values):
        raise ValueError("cutoffs must be positive")
    if len(set(values)) != len(values):
        raise ValueError("cutoffs must not contain duplicates")
    return sorted(values)


def ndcg_cut(res_rels: ResRels, cutoffs: Iterable[int]) -> dict[int, float]:
    """nDCG at each document cutoff, using relevance values as gains.

    Returns a mapping from cutoff to value in increasing cutoff order.
    """
    ordered = _doc_cutoffs(cutoffs)

    dcg = [
        0.0,
        *accumulate(
            rel / math.log2(rank + 1) if rel > 0 else 0.0
            for rank, rel in enumerate(res_rels.results_rel_list, start=1)
        ),
    ]
    ideal_levels = [
        level
        for level in range(len(res_rels.rel_levels) - 1, 0, -1)
        for _ in range(res_rels.rel_levels[level])
    ]
    ideal = [
        0.0,
        *accumulate(
            level / math.log2(rank + 1)
            for rank, level in enumerate(ideal_levels, start=1)
        ),
    ]

    values = {}
    for cutoff in ordered:
        value = dcg[min(cutoff, res_rels.num_ret)]
        ideal_dcg = ideal[min(cutoff, len(ideal_levels))]
        values[cutoff] = value / ideal_dcg if ideal_dcg > 0.0 else value
    return values


def ndcg_p(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """nDCG in which the first two ranks are not discounted.

    Doc at zero-based position ``i`` is discounted by ``log2(i + 1)``
    for ``i > 0``.
    """
    gains = setup_gains(gain_params, res_rels.rel_levels)
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        gain = gains.gain(rel)
        if gain != 0:
            total += gain / math.log2(index + 1) if index > 0 else gain

    ideal_dcg = 0.0
    for index, gain in enumerate(_ideal_gains(gains)):
        if index >= gains.total_num_at_levels:
            break
        if index == 0:
            ideal_dcg += gain
        else:
            ideal_dcg += gain / _float32(math.log2(index + 1))

    if res_rels.num_rel_ret > 0:
        return _divide(total, ideal_dcg)
    return 0.0