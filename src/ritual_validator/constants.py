"""Project constants."""

from __future__ import annotations

from enum import StrEnum


class ReferenceCategory(StrEnum):
    TRADITION = "tradition"
    LANGUAGE = "language"
    SYMBOL = "symbol"
    PRACTICE = "practice"
    BELIEF = "belief"
    CUSTOM = "custom"


class IssueCategory(StrEnum):
    POLARIZATION = "polarization"
    BIAS = "bias"
    FACTUAL = "factual"
    HARMONY = "harmony"
    CULTURAL = "cultural"


class Severity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MatchMode(StrEnum):
    WORD = "word"
    SUBSTRING = "substring"


GATE_NAMES = ("esep", "ceda", "narrative")


BIOREGIONS = {
    "Tech Haven": "tech-haven",
    "Mythic Forest": "mythic-forest",
    "Isolated Bastion": "isolated-bastion",
}


EMPTY_INPUT_FEEDBACK = "empty input"

LEXICON_CONFIDENCE = 0.9
PATTERN_CONFIDENCE = 0.7
CONTEXT_WINDOW_CHARS = 50
