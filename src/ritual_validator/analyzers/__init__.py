"""
Scoring analyzers for ritual texts.

- EthicalSpiritualAnalyzer (ESEP): ethical/spiritual balance, lower is better
- CulturalExpressionAnalyzer (CEDA): cultural references, diversity, authenticity
- NarrativeForensicsAnalyzer: polarization, bias, harmony and claim hygiene

All analyzers are pure functions of their input text and the lexicon they
were built with.
"""

from .ceda import CulturalExpressionAnalyzer, evaluate_ceda
from .esep import EthicalSpiritualAnalyzer, evaluate_esep
from .narrative import NarrativeForensicsAnalyzer, evaluate_narrative

__all__ = [
    "CulturalExpressionAnalyzer",
    "EthicalSpiritualAnalyzer",
    "NarrativeForensicsAnalyzer",
    "evaluate_ceda",
    "evaluate_esep",
    "evaluate_narrative",
]
