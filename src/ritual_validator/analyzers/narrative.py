"""Narrative forensics: polarization, bias, harmony and claim hygiene.

Every sub-score is reported so that higher is better. Sentence-level checks
emit ``NarrativeIssue`` records independently of the numeric scores.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ritual_validator.constants import IssueCategory, MatchMode, Severity
from ritual_validator.lexicon import DEFAULT_LEXICON, Lexicon
from ritual_validator.matching import TermMatcher, build_matcher, split_sentences, split_words
from ritual_validator.schemas.results import NarrativeIssue, NarrativeReport, NarrativeResult

WEIGHTS = {
    "polarization": 0.3,
    "bias": 0.3,
    "harmony": 0.2,
    "factual": 0.2,
}


def _density(hits: int, total_words: int, rate: float) -> float:
    return min(hits / max(total_words * rate, 1), 1.0)


def overall_score(polarization: float, bias: float, harmony: float, factual: float) -> float:
    value = (
        polarization * WEIGHTS["polarization"]
        + bias * WEIGHTS["bias"]
        + harmony * WEIGHTS["harmony"]
        + factual * WEIGHTS["factual"]
    )
    return min(value, 1.0)


@dataclass(frozen=True)
class NarrativeForensicsAnalyzer:
    lexicon: Lexicon = DEFAULT_LEXICON
    match_mode: MatchMode = MatchMode.WORD
    _m: dict[str, TermMatcher] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        lex = self.lexicon
        tables = {
            "polarizing": lex.polarizing,
            "in_group": lex.in_group,
            "out_group": lex.out_group,
            "absolutes": lex.absolutes,
            "biased": lex.biased,
            "gender_coded": lex.gender_coded,
            "hierarchy": lex.hierarchy,
            "harmony": lex.harmony,
            "factual_claim": lex.factual_claim,
            "factual_hedge": lex.factual_hedge,
            "appropriation_cues": lex.appropriation_cues,
            "permission_cues": lex.permission_cues,
        }
        matchers = {name: build_matcher(terms, self.match_mode) for name, terms in tables.items()}
        object.__setattr__(self, "_m", matchers)

    def evaluate(self, text: str) -> NarrativeResult:
        words = split_words(text)
        sentences = split_sentences(text)
        issues: list[NarrativeIssue] = []

        polarization = self._polarization(words, sentences, issues)
        bias = self._bias(words, sentences, issues)
        harmony = _density(self._m["harmony"].count_words(words), len(words), 0.1)
        factual = self._fact_verification(sentences, issues)
        self._cultural_sensitivity(sentences, issues)

        overall = overall_score(polarization, bias, harmony, factual)
        feedback, recommendations = _feedback(polarization, bias, harmony, factual, overall)

        return NarrativeResult(
            polarization_score=polarization,
            bias_score=bias,
            community_harmony_score=harmony,
            fact_verification_score=factual,
            overall_score=overall,
            feedback=feedback,
            issues=issues,
            recommendations=recommendations,
        )

    def _polarization(self, words: list[str], sentences: list[str], issues: list[NarrativeIssue]) -> float:
        for sentence in sentences:
            lowered = sentence.lower()
            if self._m["in_group"].matches(lowered) and self._m["out_group"].matches(lowered):
                issues.append(
                    NarrativeIssue(
                        category=IssueCategory.POLARIZATION,
                        severity=Severity.MEDIUM,
                        description="Us vs them language detected",
                        excerpt=sentence.strip(),
                        suggestion="Consider using inclusive language that unites rather than divides",
                    )
                )
            if self._m["absolutes"].matches(lowered):
                issues.append(
                    NarrativeIssue(
                        category=IssueCategory.POLARIZATION,
                        severity=Severity.LOW,
                        description="Absolute statement detected",
                        excerpt=sentence.strip(),
                        suggestion="Consider using more nuanced language that acknowledges complexity",
                    )
                )
        return 1.0 - _density(self._m["polarizing"].count_words(words), len(words), 0.1)

    def _bias(self, words: list[str], sentences: list[str], issues: list[NarrativeIssue]) -> float:
        for sentence in sentences:
            lowered = sentence.lower()
            if self._m["gender_coded"].matches(lowered):
                issues.append(
                    NarrativeIssue(
                        category=IssueCategory.BIAS,
                        severity=Severity.MEDIUM,
                        description="Potential gender bias detected",
                        excerpt=sentence.strip(),
                        suggestion="Consider using gender-neutral language",
                    )
                )
            if self._m["hierarchy"].matches(lowered):
                issues.append(
                    NarrativeIssue(
                        category=IssueCategory.BIAS,
                        severity=Severity.HIGH,
                        description="Cultural bias detected",
                        excerpt=sentence.strip(),
                        suggestion="Avoid hierarchical language that implies cultural superiority",
                    )
                )
        return 1.0 - _density(self._m["biased"].count_words(words), len(words), 0.05)

    def _fact_verification(self, sentences: list[str], issues: list[NarrativeIssue]) -> float:
        claims = 0
        hedged = 0
        for sentence in sentences:
            lowered = sentence.lower()
            if not self._m["factual_claim"].matches(lowered):
                continue
            claims += 1
            if self._m["factual_hedge"].matches(lowered):
                hedged += 1
                continue
            issues.append(
                NarrativeIssue(
                    category=IssueCategory.FACTUAL,
                    severity=Severity.MEDIUM,
                    description="Unqualified factual claim detected",
                    excerpt=sentence.strip(),
                    suggestion='Consider qualifying claims with appropriate language like "may" or "suggest"',
                )
            )
        # No claims, no penalty.
        return hedged / claims if claims else 1.0

    def _cultural_sensitivity(self, sentences: list[str], issues: list[NarrativeIssue]) -> None:
        for sentence in sentences:
            lowered = sentence.lower()
            if self._m["appropriation_cues"].matches(lowered) and not self._m["permission_cues"].matches(lowered):
                issues.append(
                    NarrativeIssue(
                        category=IssueCategory.CULTURAL,
                        severity=Severity.HIGH,
                        description="Potential cultural appropriation detected",
                        excerpt=sentence.strip(),
                        suggestion="Ensure proper permission and guidance when referencing cultural traditions",
                    )
                )

    def build_report(self, text: str) -> NarrativeReport:
        result = self.evaluate(text)
        strengths: list[str] = []
        if result.polarization_score > 0.8:
            strengths.append("Low polarization language")
        if result.bias_score > 0.8:
            strengths.append("Minimal bias detected")
        if result.community_harmony_score > 0.7:
            strengths.append("Strong community harmony focus")
        if result.fact_verification_score > 0.9:
            strengths.append("Well-qualified factual claims")
        return NarrativeReport(
            summary=f"Narrative analysis completed with overall score: {result.overall_score * 100:.1f}%",
            strengths=strengths,
            areas_for_improvement=list(result.recommendations),
            cultural_considerations=[
                issue.suggestion for issue in result.issues if issue.category is IssueCategory.CULTURAL
            ],
        )


def _feedback(
    polarization: float, bias: float, harmony: float, factual: float, overall: float
) -> tuple[list[str], list[str]]:
    feedback: list[str] = []
    recommendations: list[str] = []
    if polarization < 0.7:
        feedback.append("Consider reducing polarizing language that creates divisions")
        recommendations.append("Use inclusive language that brings people together")
    if bias < 0.7:
        feedback.append("Review content for potential biases and stereotypes")
        recommendations.append("Ensure balanced and respectful representation of all groups")
    if harmony < 0.5:
        feedback.append("Include more language that promotes community harmony")
        recommendations.append("Emphasize cooperation, understanding, and mutual respect")
    if factual < 0.8:
        feedback.append("Qualify factual claims with appropriate language")
        recommendations.append('Use terms like "may," "suggest," or "appear" for claims')
    if overall > 0.8:
        feedback.append("Excellent narrative balance and cultural sensitivity")
        recommendations.append("Continue maintaining high standards of inclusive language")
    return feedback, recommendations


def evaluate_narrative(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> NarrativeResult:
    return NarrativeForensicsAnalyzer(lexicon=lexicon).evaluate(text)
