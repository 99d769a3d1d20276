"""Pydantic schemas for analyzer outputs and ingress submissions."""

from .results import (
    CedaResult,
    CulturalContext,
    CulturalReference,
    EsepResult,
    GateDecision,
    NarrativeIssue,
    NarrativeReport,
    NarrativeResult,
    RitualStructure,
    ValidationResult,
)
from .submission import RitualPermissions, RitualSubmission

__all__ = [
    "CedaResult",
    "CulturalContext",
    "CulturalReference",
    "EsepResult",
    "GateDecision",
    "NarrativeIssue",
    "NarrativeReport",
    "NarrativeResult",
    "RitualPermissions",
    "RitualStructure",
    "RitualSubmission",
    "ValidationResult",
]
