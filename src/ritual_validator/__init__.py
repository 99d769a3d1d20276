"""Ritual validation core: ESEP, CEDA and narrative forensics scoring."""

from importlib.metadata import PackageNotFoundError, version

from .analyzers import CulturalExpressionAnalyzer, EthicalSpiritualAnalyzer, NarrativeForensicsAnalyzer
from .lexicon import DEFAULT_LEXICON, Lexicon, load_lexicon
from .orchestrator import ValidationOrchestrator, validate
from .schemas import ValidationResult

try:  # pragma: no cover - during local development
    __version__ = version("ritual-validator")
except PackageNotFoundError:  # pragma: no cover - package not installed
    __version__ = "0.0.0"

__all__ = [
    "CulturalExpressionAnalyzer",
    "DEFAULT_LEXICON",
    "EthicalSpiritualAnalyzer",
    "Lexicon",
    "NarrativeForensicsAnalyzer",
    "ValidationOrchestrator",
    "ValidationResult",
    "load_lexicon",
    "validate",
    "__version__",
]
