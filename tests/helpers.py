from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ritual_validator.schemas.results import (
    CedaResult,
    CulturalReference,
    EsepResult,
    NarrativeResult,
)

# 68 words; 9 cultural references; no polarizing, biased or absolute terms.
SAMPLE_CEREMONY = (
    "Gather together in a circle beneath the cedar boughs at moonrise. "
    "Light the sage and offer a quiet blessing for the ancestors who guide this gathering. "
    "Speak words of compassion, kindness and respect, and share peace with the community. "
    "Each person may place a feather on the altar as a gift of love and gratitude. "
    "Close with a song of harmony and care for the land and water."
)

# Long enough for ingress, but carries no cultural references.
PLAIN_TEXT = (
    "The river runs past the stones and the wind moves through the grass "
    "while the hills sleep under grey clouds tonight."
)


def sample_grc(bioregion: str = "Mythic Forest", content: str = SAMPLE_CEREMONY) -> str:
    body = content.replace(". ", ".\n")
    return (
        "# Moonrise Gathering\n"
        f"# Bioregion: {bioregion}\n"
        "# Created: 2024-06-21\n"
        "\n"
        "## Description\n"
        "A small gathering to honor the turning season.\n"
        "\n"
        "## Cultural Context\n"
        "Shared with the valley circle after consultation with local elders.\n"
        "\n"
        "## Ritual Content\n"
        f"{body}\n"
        "\n"
        "## Notes\n"
        "Bring warm clothes.\n"
    )


def write_grc(path: Path, **kwargs: Any) -> Path:
    path.write_text(sample_grc(**kwargs), encoding="utf-8")
    return path


def write_config(path: Path, **overrides: Any) -> Path:
    payload: dict[str, Any] = {
        "thresholds": {"esep_max": 0.7, "ceda_min_references": 2, "narrative_min": 0.6},
        "match_mode": "word",
        "parallel": True,
        "max_workers": 3,
    }
    payload.update(overrides)
    out = path / "config.yaml"
    # JSON is valid YAML.
    out.write_text(json.dumps(payload), encoding="utf-8")
    return out


class FixedAnalyzer:
    """Analyzer stand-in that always returns the same result."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[str] = []

    def evaluate(self, text: str) -> Any:
        self.calls.append(text)
        return self.result


def esep_result(score: float, feedback: list[str] | None = None) -> EsepResult:
    return EsepResult(
        score=score,
        ethical_score=0.5,
        spiritual_score=0.5,
        balance_score=1.0,
        feedback=feedback or [],
    )


def ceda_result(count: int, feedback: list[str] | None = None) -> CedaResult:
    refs = [
        CulturalReference(category="symbol", matched_text=f"term-{i}", confidence=0.9, surrounding_context="")
        for i in range(count)
    ]
    return CedaResult(
        score=count,
        cultural_references=refs,
        cultural_diversity=0.0,
        authenticity_score=0.9 if count else 0.0,
        feedback=feedback or [],
    )


def narrative_result(overall: float, feedback: list[str] | None = None) -> NarrativeResult:
    return NarrativeResult(
        polarization_score=overall,
        bias_score=overall,
        community_harmony_score=overall,
        fact_verification_score=overall,
        overall_score=overall,
        feedback=feedback or [],
    )
