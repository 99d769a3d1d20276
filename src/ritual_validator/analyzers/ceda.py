"""CEDA: cultural reference detection, diversity and authenticity scoring.

References come from two sources:

* lexicon tables (tradition, symbol, practice, language). Each distinct term
  found in the text yields one reference per category, confidence 0.9, with a
  context window around its first occurrence.
* sentence templates for beliefs and customs (e.g. "ancestors guide"). Each
  template yields at most one reference per sentence, confidence 0.7, with the
  sentence as context.

Lexicon terms are always matched on word boundaries, whatever the configured
match mode, so multi-word phrases and short terms like "om" stay precise.
"""

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Pattern

from ritual_validator.constants import (
    CONTEXT_WINDOW_CHARS,
    LEXICON_CONFIDENCE,
    PATTERN_CONFIDENCE,
    MatchMode,
    ReferenceCategory,
)
from ritual_validator.lexicon import DEFAULT_LEXICON, Lexicon
from ritual_validator.matching import TermMatcher, build_matcher, split_sentences, split_words
from ritual_validator.schemas.results import CedaResult, CulturalContext, CulturalReference

MIN_REFERENCES = 2
RICH_REFERENCES = 5
DENSITY_LIMIT_PER_100_WORDS = 10
DENSITY_PENALTY = 0.8
CONTEXT_BONUS_CHARS = 20

# Theme labels keyed by the tradition terms that signal them.
_THEME_MARKERS: dict[str, tuple[str, ...]] = {
    "Indigenous Wisdom": (
        "smudging", "sweat lodge", "vision quest", "medicine wheel", "talking circle",
        "powwow", "potlatch", "giveaway", "naming ceremony",
    ),
    "Eastern Philosophy": (
        "meditation", "yoga", "qi gong", "tai chi", "zen", "chakra", "dharma",
        "karma", "samsara", "mandala", "mantra", "puja",
    ),
    "Western Spirituality": (
        "prayer", "worship", "communion", "baptism", "confirmation", "pilgrimage",
        "contemplation", "mysticism", "gnosis",
    ),
    "African Heritage": ("ancestral veneration", "libation", "griot", "sankofa", "ubuntu", "kwanzaa"),
    "Earth-Based Seasonal Cycles": (
        "maypole", "solstice", "equinox", "sabbat", "wheel of the year", "imbolc",
        "beltane", "lughnasadh", "samhain", "harvest festival",
    ),
}


def extract_context(text: str, start: int, length: int, window: int = CONTEXT_WINDOW_CHARS) -> str:
    lo = max(0, start - window)
    hi = min(len(text), start + length + window)
    return text[lo:hi].strip()


def cultural_diversity(references: list[CulturalReference]) -> float:
    """Shannon entropy of the category mix normalised to [0, 1].

    Only categories that actually occur count towards the normalising base,
    so a single-category text scores 0.
    """
    if not references:
        return 0.0
    counts = Counter(ref.category for ref in references)
    if len(counts) < 2:
        return 0.0
    total = len(references)
    entropy = 0.0
    for count in counts.values():
        proportion = count / total
        entropy -= proportion * math.log(proportion)
    return min(entropy / math.log(len(counts)), 1.0)


def authenticity_score(references: list[CulturalReference], word_count: int) -> float:
    if not references:
        return 0.0
    score = 0.0
    total_weight = 0.0
    for ref in references:
        weight = ref.confidence
        score += ref.confidence * weight
        total_weight += weight
        if len(ref.surrounding_context) > CONTEXT_BONUS_CHARS:
            score += 0.1 * weight
    density = len(references) / (max(word_count, 1) / 100)
    if density > DENSITY_LIMIT_PER_100_WORDS:
        score *= DENSITY_PENALTY
    if total_weight <= 0:
        return 0.0
    return min(score / total_weight, 1.0)


@dataclass(frozen=True)
class CulturalExpressionAnalyzer:
    lexicon: Lexicon = DEFAULT_LEXICON
    _tables: tuple[tuple[ReferenceCategory, TermMatcher], ...] = field(init=False, repr=False, compare=False)
    _patterns: tuple[tuple[Pattern[str], ReferenceCategory], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        tables = tuple(
            (category, build_matcher(terms, MatchMode.WORD)) for category, terms in self.lexicon.cultural_tables()
        )
        patterns = tuple(
            (re.compile(item.pattern, re.IGNORECASE), item.category) for item in self.lexicon.belief_patterns
        )
        object.__setattr__(self, "_tables", tables)
        object.__setattr__(self, "_patterns", patterns)

    def detect_references(self, text: str) -> list[CulturalReference]:
        references: list[CulturalReference] = []
        lowered = text.lower()
        for category, matcher in self._tables:
            for term, start in matcher.first_occurrences(lowered):
                references.append(
                    CulturalReference(
                        category=category,
                        matched_text=term,
                        confidence=LEXICON_CONFIDENCE,
                        surrounding_context=extract_context(lowered, start, len(term)),
                    )
                )
        references.extend(self._detect_beliefs_and_customs(text))
        return references

    def _detect_beliefs_and_customs(self, text: str) -> list[CulturalReference]:
        references: list[CulturalReference] = []
        for sentence in split_sentences(text):
            for pattern, category in self._patterns:
                match = pattern.search(sentence)
                if match:
                    references.append(
                        CulturalReference(
                            category=category,
                            matched_text=match.group(0),
                            confidence=PATTERN_CONFIDENCE,
                            surrounding_context=sentence.strip(),
                        )
                    )
        return references

    def evaluate(self, text: str) -> CedaResult:
        references = self.detect_references(text)
        diversity = cultural_diversity(references)
        authenticity = authenticity_score(references, len(split_words(text)))
        return CedaResult(
            score=len(references),
            cultural_references=references,
            cultural_diversity=diversity,
            authenticity_score=authenticity,
            feedback=_feedback(len(references), diversity, authenticity),
        )

    def analyze_context(self, text: str) -> CulturalContext:
        """Summarise which traditions dominate a text and how authentic it reads."""
        result = self.evaluate(text)
        traditions = [
            ref.matched_text for ref in result.cultural_references if ref.category is ReferenceCategory.TRADITION
        ]
        primary = list(dict.fromkeys(traditions))

        themes = [theme for theme, markers in _THEME_MARKERS.items() if any(term in markers for term in primary)]

        indicators: list[str] = []
        if result.authenticity_score > 0.8:
            indicators.append("High authenticity")
        if result.cultural_diversity > 0.7:
            indicators.append("Cultural diversity")
        if result.score >= RICH_REFERENCES:
            indicators.append("Rich cultural content")

        return CulturalContext(
            primary_traditions=primary,
            cultural_themes=themes,
            authenticity_indicators=indicators,
        )


def _feedback(count: int, diversity: float, authenticity: float) -> list[str]:
    feedback: list[str] = []
    if count < MIN_REFERENCES:
        feedback.append("Include at least 2 cultural references or expressions")
    if count < RICH_REFERENCES:
        feedback.append("Consider adding more cultural elements to enrich the ritual")
    if diversity < 0.3:
        feedback.append("Try to incorporate elements from diverse cultural traditions")
    if authenticity < 0.5:
        feedback.append("Ensure cultural elements are used respectfully and authentically")
    if count >= RICH_REFERENCES:
        feedback.append("Rich cultural tapestry with multiple traditions represented")
    if diversity > 0.7:
        feedback.append("Excellent cultural diversity and inclusion")
    if authenticity > 0.8:
        feedback.append("Authentic and respectful use of cultural elements")
    return feedback


def evaluate_ceda(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> CedaResult:
    return CulturalExpressionAnalyzer(lexicon=lexicon).evaluate(text)
