"""Analyzer and validation result schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ritual_validator.constants import IssueCategory, ReferenceCategory, Severity


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class EsepResult(_Frozen):
    score: float = Field(ge=0, le=1)
    ethical_score: float = Field(ge=0, le=1)
    spiritual_score: float = Field(ge=0, le=1)
    balance_score: float = Field(ge=0, le=1)
    negative_score: float = Field(ge=0, le=1, default=0.0)
    feedback: list[str] = Field(default_factory=list)


class CulturalReference(_Frozen):
    category: ReferenceCategory
    matched_text: str
    confidence: float = Field(ge=0, le=1)
    surrounding_context: str = ""


class CedaResult(_Frozen):
    score: int = Field(ge=0)
    cultural_references: list[CulturalReference] = Field(default_factory=list)
    cultural_diversity: float = Field(ge=0, le=1)
    authenticity_score: float = Field(ge=0, le=1)
    feedback: list[str] = Field(default_factory=list)


class NarrativeIssue(_Frozen):
    category: IssueCategory
    severity: Severity
    description: str
    excerpt: str
    suggestion: str


class NarrativeResult(_Frozen):
    polarization_score: float = Field(ge=0, le=1)
    bias_score: float = Field(ge=0, le=1)
    community_harmony_score: float = Field(ge=0, le=1)
    fact_verification_score: float = Field(ge=0, le=1)
    overall_score: float = Field(ge=0, le=1)
    feedback: list[str] = Field(default_factory=list)
    issues: list[NarrativeIssue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class GateDecision(_Frozen):
    gate: str
    passed: bool
    value: float
    threshold: float
    comparison: str
    reasons: list[str] = Field(default_factory=list)


class ValidationResult(_Frozen):
    bioregion_id: str
    esep: EsepResult
    ceda: CedaResult
    narrative: NarrativeResult
    gates: list[GateDecision]
    is_approved: bool
    feedback: list[str] = Field(default_factory=list)
    issues: list[NarrativeIssue] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    validation_timestamp: str | None = None

    @property
    def esep_score(self) -> float:
        return self.esep.score

    @property
    def ceda_score(self) -> int:
        return self.ceda.score

    @property
    def narrative_score(self) -> float:
        return self.narrative.overall_score

    @property
    def cultural_references(self) -> list[str]:
        return [ref.matched_text for ref in self.ceda.cultural_references]

    def stamped(self, timestamp: str) -> "ValidationResult":
        """Copy with the caller-side validation timestamp set."""
        return self.model_copy(update={"validation_timestamp": timestamp})

    def summary(self) -> dict[str, Any]:
        """Payload handed to the submission layer."""
        return {
            "esepScore": self.esep_score,
            "cedaScore": self.ceda_score,
            "narrativeScore": self.narrative_score,
            "isApproved": self.is_approved,
            "feedback": list(self.feedback),
            "culturalReferences": self.cultural_references,
            "validationTimestamp": self.validation_timestamp,
        }


class RitualStructure(_Frozen):
    sections: list[str] = Field(default_factory=list)
    ethical_density: list[float] = Field(default_factory=list)
    spiritual_density: list[float] = Field(default_factory=list)


class CulturalContext(_Frozen):
    primary_traditions: list[str] = Field(default_factory=list)
    cultural_themes: list[str] = Field(default_factory=list)
    authenticity_indicators: list[str] = Field(default_factory=list)


class NarrativeReport(_Frozen):
    summary: str
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    cultural_considerations: list[str] = Field(default_factory=list)
