"""Per-axis approval gates."""

from __future__ import annotations

from ritual_validator.config import Thresholds
from ritual_validator.constants import GATE_NAMES
from ritual_validator.schemas.results import CedaResult, EsepResult, GateDecision, NarrativeResult


def decide_gate(*, gate: str, value: float, threshold: float, higher_is_better: bool) -> GateDecision:
    if higher_is_better:
        passed = value >= threshold
        comparison = ">="
    else:
        passed = value <= threshold
        comparison = "<="
    reason = "within_threshold" if passed else "outside_threshold"
    return GateDecision(
        gate=gate,
        passed=passed,
        value=value,
        threshold=threshold,
        comparison=comparison,
        reasons=[reason],
    )


def evaluate_gates(
    esep: EsepResult,
    ceda: CedaResult,
    narrative: NarrativeResult,
    thresholds: Thresholds,
) -> list[GateDecision]:
    """One decision per axis. Approval requires every gate to pass."""
    esep_gate, ceda_gate, narrative_gate = GATE_NAMES
    return [
        decide_gate(gate=esep_gate, value=esep.score, threshold=thresholds.esep_max, higher_is_better=False),
        decide_gate(
            gate=ceda_gate,
            value=float(ceda.score),
            threshold=float(thresholds.ceda_min_references),
            higher_is_better=True,
        ),
        decide_gate(
            gate=narrative_gate,
            value=narrative.overall_score,
            threshold=thresholds.narrative_min,
            higher_is_better=True,
        ),
    ]


def is_approved(decisions: list[GateDecision]) -> bool:
    return bool(decisions) and all(decision.passed for decision in decisions)
