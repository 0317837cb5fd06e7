"""Per-topic evaluation measures for ranked retrieval results, and z-score file reading."""

__version__ = "0.1.0"