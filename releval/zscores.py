"""Reading per-topic means and standard deviations used for z-score output."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path

__all__ = ["ZScore", "ZScoreFormatError", "parse_zscores", "read_zscores"]

# Whitespace as understood by the C locale, without the newline that ends a line.
_FIELD_SEP = re.compile(r"[ \t\r\f\v]+")
_FLOAT_PREFIX = re.compile(
    r"[ \t\n\r\f\v]*"
    r"([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class ZScoreFormatError(ValueError):
    """Raised when z-score data is empty or holds a malformed line."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class ZScore:
    """Reference mean and standard deviation of one measure on one topic."""

    qid: str
    meas: str
    mean: float
    stddev: float


def _atof(text: str) -> float:
    """Value of the longest leading number in ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def parse_zscores(text: str) -> dict[str, tuple[ZScore, ...]]:
    """Parse lines of ``qid measure mean stddev``.

    Returns a mapping from qid to its entries, qids in increasing order and
    each topic's entries sorted by measure name.
    """
    if not text:
        raise ZScoreFormatError("empty zscores data")

    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()

    entries = []
    for number, line in enumerate(lines, start=1):
        fields = [field for field in _FIELD_SEP.split(line) if field]
        if len(fields) != 4:
            raise ZScoreFormatError(f"malformed line {number}", line=number)
        qid, meas, mean, stddev = fields
        entries.append(ZScore(qid, meas, _atof(mean), _atof(stddev)))

    entries.sort(key=lambda z: (z.qid, z.meas))

    grouped: dict[str, list[ZScore]] = {}
    for entry in entries:
        grouped.setdefault(entry.qid, []).append(entry)
    return {qid: tuple(group) for qid, group in grouped.items()}


def read_zscores(path: str | os.PathLike) -> dict[str, tuple[ZScore, ...]]:
    """Read and parse a z-score file."""
    data = Path(path).read_text(encoding="utf-8", errors="surrogateescape")
    if not data:
        raise ZScoreFormatError(f"cannot read zscores file '{os.fspath(path)}'")
    return parse_zscores(data)