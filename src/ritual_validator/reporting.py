"""Reporting helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ritual_validator.config import ValidatorConfig, config_dict_for_hash
from ritual_validator.io.hashing import sha256_json, sha256_text
from ritual_validator.io.json_io import dump_canonical_json
from ritual_validator.orchestrator import ValidationOrchestrator
from ritual_validator.schemas.results import ValidationResult


def build_validation_report(
    text: str,
    result: ValidationResult,
    orchestrator: ValidationOrchestrator,
    config: ValidatorConfig,
) -> dict[str, Any]:
    """Full audit record: summary payload, analyzer details and supplementary analyses.

    The supplementary analyses run only on the default analyzer types; stub
    analyzers injected for tests are skipped.
    """
    supplementary: dict[str, Any] = {}
    analyze_structure = getattr(orchestrator.esep, "analyze_structure", None)
    if analyze_structure is not None:
        supplementary["ritual_structure"] = analyze_structure(text).model_dump(mode="json")
    analyze_context = getattr(orchestrator.ceda, "analyze_context", None)
    if analyze_context is not None:
        supplementary["cultural_context"] = analyze_context(text).model_dump(mode="json")
    build_report = getattr(orchestrator.narrative, "build_report", None)
    if build_report is not None:
        supplementary["narrative_report"] = build_report(text).model_dump(mode="json")

    return {
        "validation": result.summary(),
        "bioregion_id": result.bioregion_id,
        "content_sha256": sha256_text(text),
        "config_sha256": sha256_json(config_dict_for_hash(config)),
        "gates": [gate.model_dump(mode="json") for gate in result.gates],
        "esep": result.esep.model_dump(mode="json"),
        "ceda": result.ceda.model_dump(mode="json"),
        "narrative": result.narrative.model_dump(mode="json"),
        "issues": [issue.model_dump(mode="json") for issue in result.issues],
        "recommendations": list(result.recommendations),
        "supplementary": supplementary,
    }


def write_report(out: Path, report: dict[str, Any]) -> Path:
    dump_canonical_json(out, report)
    return out
