"""ESEP: ethical/spiritual balance scoring. Lower scores are better."""

from __future__ import annotations

from dataclasses import dataclass, field

from ritual_validator.constants import EMPTY_INPUT_FEEDBACK, MatchMode
from ritual_validator.lexicon import DEFAULT_LEXICON, Lexicon
from ritual_validator.matching import TermMatcher, build_matcher, split_sections, split_words
from ritual_validator.schemas.results import EsepResult, RitualStructure


def _density(hits: int, total_words: int, rate: float) -> float:
    return min(hits / max(total_words * rate, 1), 1.0)


@dataclass(frozen=True)
class EthicalSpiritualAnalyzer:
    lexicon: Lexicon = DEFAULT_LEXICON
    match_mode: MatchMode = MatchMode.WORD
    _ethical: TermMatcher = field(init=False, repr=False, compare=False)
    _spiritual: TermMatcher = field(init=False, repr=False, compare=False)
    _negative: TermMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_ethical", build_matcher(self.lexicon.ethical, self.match_mode))
        object.__setattr__(self, "_spiritual", build_matcher(self.lexicon.spiritual, self.match_mode))
        object.__setattr__(self, "_negative", build_matcher(self.lexicon.negative, self.match_mode))

    def evaluate(self, text: str) -> EsepResult:
        words = split_words(text)
        total = len(words)
        if total == 0:
            return EsepResult(
                score=1.0,
                ethical_score=0.0,
                spiritual_score=0.0,
                balance_score=0.0,
                negative_score=0.0,
                feedback=[EMPTY_INPUT_FEEDBACK],
            )

        ethical = _density(self._ethical.count_words(words), total, 0.1)
        spiritual = _density(self._spiritual.count_words(words), total, 0.1)
        # Negative terms weigh twice as much: half the density denominator.
        negative = _density(self._negative.count_words(words), total, 0.05)

        balance = 1.0 - abs(ethical - spiritual)
        min_presence = max(0.0, 0.3 - (ethical + spiritual) * 0.15)
        score = min((1.0 - balance) * 0.4 + negative * 0.3 + min_presence * 0.3, 1.0)

        return EsepResult(
            score=score,
            ethical_score=ethical,
            spiritual_score=spiritual,
            balance_score=balance,
            negative_score=negative,
            feedback=_feedback(score, ethical, spiritual, balance, negative),
        )

    def analyze_structure(self, text: str) -> RitualStructure:
        """Per-section ethical and spiritual densities (hits per word)."""
        sections = split_sections(text)
        ethical_density: list[float] = []
        spiritual_density: list[float] = []
        for section in sections:
            words = split_words(section)
            total = len(words)
            ethical_density.append(self._ethical.count_words(words) / total if total else 0.0)
            spiritual_density.append(self._spiritual.count_words(words) / total if total else 0.0)
        return RitualStructure(
            sections=sections,
            ethical_density=ethical_density,
            spiritual_density=spiritual_density,
        )


def _feedback(score: float, ethical: float, spiritual: float, balance: float, negative: float) -> list[str]:
    feedback: list[str] = []
    if ethical < 0.1:
        feedback.append("Consider incorporating more ethical principles and values")
    if spiritual < 0.1:
        feedback.append("Consider adding spiritual or sacred elements to the ritual")
    if balance < 0.7:
        feedback.append("Aim for better balance between ethical and spiritual dimensions")
    if negative > 0.2:
        feedback.append("Reduce negative or harmful language in the ritual")
    if ethical > 0.8 and spiritual < 0.3:
        feedback.append("The ritual is heavily ethical but lacks spiritual depth")
    if spiritual > 0.8 and ethical < 0.3:
        feedback.append("The ritual is deeply spiritual but needs more ethical grounding")
    if score < 0.3:
        feedback.append("Excellent balance of ethical and spiritual elements")
    if balance > 0.9:
        feedback.append("Remarkable harmony between ethical and spiritual dimensions")
    return feedback


def evaluate_esep(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> EsepResult:
    return EthicalSpiritualAnalyzer(lexicon=lexicon).evaluate(text)
