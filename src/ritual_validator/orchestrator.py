"""
ValidationOrchestrator - runs the three analyzers and applies the approval rule.

Example:
    orchestrator = ValidationOrchestrator.from_config(load_config(path))
    result = orchestrator.validate(text, "mythic-forest")
    if result.is_approved:
        persist(result.stamped(now_iso()))
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from ritual_validator.analyzers import (
    CulturalExpressionAnalyzer,
    EthicalSpiritualAnalyzer,
    NarrativeForensicsAnalyzer,
)
from ritual_validator.config import Thresholds, ValidatorConfig
from ritual_validator.gates import evaluate_gates, is_approved
from ritual_validator.schemas.results import CedaResult, EsepResult, NarrativeResult, ValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T", covariant=True)


class Analyzer(Protocol[T]):
    def evaluate(self, text: str) -> T: ...


@dataclass
class ValidationOrchestrator:
    esep: Analyzer[EsepResult] = field(default_factory=EthicalSpiritualAnalyzer)
    ceda: Analyzer[CedaResult] = field(default_factory=CulturalExpressionAnalyzer)
    narrative: Analyzer[NarrativeResult] = field(default_factory=NarrativeForensicsAnalyzer)
    thresholds: Thresholds = field(default_factory=Thresholds)
    parallel: bool = True
    max_workers: int = 3

    @classmethod
    def from_config(cls, config: ValidatorConfig, base_dir: Path | None = None) -> "ValidationOrchestrator":
        lexicon = config.resolve_lexicon(base_dir)
        return cls(
            esep=EthicalSpiritualAnalyzer(lexicon=lexicon, match_mode=config.match_mode),
            ceda=CulturalExpressionAnalyzer(lexicon=lexicon),
            narrative=NarrativeForensicsAnalyzer(lexicon=lexicon, match_mode=config.match_mode),
            thresholds=config.thresholds,
            parallel=config.parallel,
            max_workers=config.max_workers,
        )

    def validate(self, text: str, bioregion_id: str) -> ValidationResult:
        """Score ``text`` on all three axes and decide approval.

        ``bioregion_id`` is carried into the result for the caller but does
        not affect scoring.
        """
        esep, ceda, narrative = self._run_analyzers(text)

        gates = evaluate_gates(esep, ceda, narrative, self.thresholds)
        approved = is_approved(gates)

        result = ValidationResult(
            bioregion_id=bioregion_id,
            esep=esep,
            ceda=ceda,
            narrative=narrative,
            gates=gates,
            is_approved=approved,
            feedback=[*esep.feedback, *ceda.feedback, *narrative.feedback],
            issues=list(narrative.issues),
            recommendations=list(narrative.recommendations),
        )

        if approved:
            logger.info(
                f"Ritual approved for {bioregion_id}: esep={esep.score:.3f} "
                f"ceda={ceda.score} narrative={narrative.overall_score:.3f}"
            )
        else:
            failed = [gate.gate for gate in gates if not gate.passed]
            logger.warning(
                f"Ritual validation failed for {bioregion_id}: gates={failed} esep={esep.score:.3f} "
                f"ceda={ceda.score} narrative={narrative.overall_score:.3f}"
            )
        return result

    def _run_analyzers(self, text: str) -> tuple[EsepResult, CedaResult, NarrativeResult]:
        tasks: list[Callable[[str], Any]] = [self.esep.evaluate, self.ceda.evaluate, self.narrative.evaluate]
        if not self.parallel or self.max_workers <= 1:
            logger.debug("Running analyzers sequentially")
            esep, ceda, narrative = (task(text) for task in tasks)
            return esep, ceda, narrative

        logger.debug(f"Running analyzers on {self.max_workers} worker threads")
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(task, text) for task in tasks]
            esep, ceda, narrative = (future.result() for future in futures)
        return esep, ceda, narrative


def validate(text: str, bioregion_id: str) -> ValidationResult:
    """Validate with the default lexicon and thresholds."""
    return ValidationOrchestrator().validate(text, bioregion_id)
