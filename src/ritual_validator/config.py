"""Runtime configuration loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from ritual_validator.constants import MatchMode
from ritual_validator.errors import ConfigError
from ritual_validator.lexicon import DEFAULT_LEXICON, Lexicon, load_lexicon

CONFIG_ENV_VAR = "RITUAL_VALIDATOR_CONFIG"


class Thresholds(BaseModel):
    esep_max: float = Field(default=0.7, ge=0, le=1)  # lower is better, inclusive
    ceda_min_references: int = Field(default=2, ge=0)
    narrative_min: float = Field(default=0.6, ge=0, le=1)  # inclusive


class IngressLimits(BaseModel):
    min_content_chars: int = Field(default=100, ge=0)
    max_content_bytes: int = Field(default=10 * 1024 * 1024, ge=1)


class ValidatorConfig(BaseModel):
    thresholds: Thresholds = Field(default_factory=Thresholds)
    ingress: IngressLimits = Field(default_factory=IngressLimits)
    match_mode: MatchMode = MatchMode.WORD
    parallel: bool = True
    max_workers: int = Field(default=3, ge=1, le=3)
    lexicon_file: str | None = None

    @model_validator(mode="after")
    def validate_lexicon_file(self) -> "ValidatorConfig":
        if self.lexicon_file is not None and not self.lexicon_file.strip():
            self.lexicon_file = None
        return self

    def resolve_lexicon(self, base_dir: Path | None = None) -> Lexicon:
        if self.lexicon_file is None:
            return DEFAULT_LEXICON
        path = Path(self.lexicon_file)
        if not path.is_absolute() and base_dir is not None:
            path = base_dir / path
        return load_lexicon(path)


def load_config(config_path: Path) -> ValidatorConfig:
    """Load and validate YAML config."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML {config_path}: {exc}") from exc
    try:
        return ValidatorConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {config_path}: {exc}") from exc


def config_from_env() -> tuple[ValidatorConfig, Path | None]:
    """Config named by ``RITUAL_VALIDATOR_CONFIG``, or defaults when unset."""
    value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if not value:
        return ValidatorConfig(), None
    path = Path(value)
    return load_config(path), path.parent


def config_dict_for_hash(config: ValidatorConfig) -> dict[str, Any]:
    """Stable representation used for config hashing."""
    return config.model_dump(mode="json")
