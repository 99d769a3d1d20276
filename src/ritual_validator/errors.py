"""Error types raised outside the scoring core."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when a config or lexicon file cannot be loaded."""

    pass


class SubmissionError(ValueError):
    """Raised by ingress helpers when a submission is rejected before scoring."""

    pass
