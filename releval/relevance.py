"""Per-topic result/judgment summaries and the simple counting measures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

__all__ = [
    "ResRels",
    "ResRelsJg",
    "RelInfo",
    "UnknownRelFormatError",
    "num_ret",
    "num_rel_ret",
    "num_rel",
    "num_nonrel_judged_ret",
    "num_q_average",
    "num_rel_average",
]


class UnknownRelFormatError(ValueError):
    """Raised when relevance information is in a format that cannot be counted."""


@dataclass(frozen=True)
class ResRels:
    """Relevance values of a ranked result list for one topic.

    ``results_rel_list`` holds the judged relevance of each retrieved
    document in rank order.  ``rel_levels[i]`` is the number of judged
    documents at relevance level ``i``.
    """

    results_rel_list: Sequence[int]
    num_rel: int
    num_rel_ret: int
    rel_levels: Sequence[int] = ()
    num_nonpool: int = 0
    num_unjudged_in_pool: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "results_rel_list", tuple(self.results_rel_list))
        object.__setattr__(self, "rel_levels", tuple(self.rel_levels))
        if self.num_rel < 0 or self.num_rel_ret < 0:
            raise ValueError("relevant document counts must not be negative")

    @property
    def num_ret(self) -> int:
        """Number of documents retrieved."""
        return len(self.results_rel_list)

    @property
    def num_rel_levels(self) -> int:
        """Number of distinct relevance levels judged."""
        return len(self.rel_levels)


@dataclass(frozen=True)
class ResRelsJg:
    """Per judgment group result summaries for one topic."""

    jgs: Sequence[ResRels] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "jgs", tuple(self.jgs))

    @property
    def num_jgs(self) -> int:
        return len(self.jgs)


@dataclass(frozen=True)
class RelInfo:
    """Raw relevance judgments for one topic.

    For ``rel_format == "qrels"`` ``rels`` is a sequence of relevance values,
    one per judged document.  For ``"qrels_jg"`` it is a sequence of such
    sequences, one per judgment group.
    """

    qid: str
    rel_format: str
    rels: Sequence

    def count_relevant(self) -> int:
        """Number of judgments with a positive relevance value."""
        if self.rel_format == "qrels":
            return sum(1 for rel in self.rels if rel > 0)
        if self.rel_format == "qrels_jg":
            return sum(1 for group in self.rels for rel in group if rel > 0)
        raise UnknownRelFormatError(
            f"rel_info format not qrels or qrels_jg: {self.rel_format!r}"
        )


def num_ret(res_rels: ResRels) -> float:
    """Number of documents retrieved for the topic."""
    return float(res_rels.num_ret)


def num_rel_ret(res_rels: ResRels) -> float:
    """Number of relevant documents retrieved for the topic."""
    return float(res_rels.num_rel_ret)


def num_rel(res_rels: ResRels) -> float:
    """Number of relevant documents for the topic."""
    return float(res_rels.num_rel)


def num_nonrel_judged_ret(res_rels: ResRels) -> float:
    """Number of judged non-relevant documents retrieved for the topic."""
    return float(
        res_rels.num_ret
        - res_rels.num_nonpool
        - res_rels.num_unjudged_in_pool
        - res_rels.num_rel_ret
    )


def num_q_average(num_queries: int, num_q_rels: int, average_complete: bool) -> float:
    """Number of topics averaged over.

    With ``average_complete`` every topic in the judgments counts, not only
    those with results.
    """
    return float(num_q_rels if average_complete else num_queries)


def num_rel_average(
    summed: float, rel_infos: Iterable[RelInfo], average_complete: bool
) -> float:
    """Summary value of num_rel over all topics.

    Without ``average_complete`` the sum over evaluated topics is kept;
    otherwise relevant judgments of every topic are counted afresh.
    """
    if not average_complete:
        return summed
    return float(sum(info.count_relevant() for info in rel_infos))