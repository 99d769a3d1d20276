from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ritual_validator.config import (
    CONFIG_ENV_VAR,
    ValidatorConfig,
    config_dict_for_hash,
    config_from_env,
    load_config,
)
from ritual_validator.constants import MatchMode, ReferenceCategory
from ritual_validator.errors import ConfigError
from ritual_validator.lexicon import DEFAULT_LEXICON, BeliefPattern, Lexicon, load_lexicon
from tests.helpers import write_config


def test_defaults() -> None:
    config = ValidatorConfig()

    assert config.thresholds.esep_max == 0.7
    assert config.thresholds.ceda_min_references == 2
    assert config.thresholds.narrative_min == 0.6
    assert config.ingress.min_content_chars == 100
    assert config.ingress.max_content_bytes == 10 * 1024 * 1024
    assert config.match_mode is MatchMode.WORD
    assert config.resolve_lexicon() is DEFAULT_LEXICON


def test_load_config(tmp_path: Path) -> None:
    path = write_config(tmp_path, match_mode="substring", parallel=False, max_workers=1)
    config = load_config(path)

    assert config.match_mode is MatchMode.SUBSTRING
    assert config.parallel is False
    assert config.max_workers == 1


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_workers": 4},
        {"match_mode": "fuzzy"},
        {"thresholds": {"esep_max": 1.5}},
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, overrides: dict) -> None:
    path = write_config(tmp_path, **overrides)
    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(path)


def test_blank_lexicon_file_means_defaults() -> None:
    assert ValidatorConfig(lexicon_file="  ").lexicon_file is None


def test_lexicon_file_resolves_against_config_dir(tmp_path: Path) -> None:
    (tmp_path / "lexicon.yaml").write_text("version: '2.0'\nethical: [river]\n", encoding="utf-8")
    config = load_config(write_config(tmp_path, lexicon_file="lexicon.yaml"))

    lexicon = config.resolve_lexicon(tmp_path)
    assert lexicon.version == "2.0"
    assert lexicon.ethical == ("river",)
    # Categories absent from the file keep their defaults.
    assert lexicon.spiritual == DEFAULT_LEXICON.spiritual


def test_config_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config, base_dir = config_from_env()
    assert config == ValidatorConfig()
    assert base_dir is None

    path = write_config(tmp_path, parallel=False)
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    config, base_dir = config_from_env()
    assert config.parallel is False
    assert base_dir == tmp_path


def test_config_hash_payload_is_json_ready() -> None:
    payload = config_dict_for_hash(ValidatorConfig())
    assert payload["match_mode"] == "word"
    assert payload["thresholds"]["esep_max"] == 0.7


def test_lexicon_terms_are_normalised() -> None:
    lexicon = Lexicon(ethical=(" Justice", "justice", "", "PEACE"))
    assert lexicon.ethical == ("justice", "peace")


def test_default_lexicon_shape() -> None:
    sizes = DEFAULT_LEXICON.category_sizes()

    assert sizes["ethical"] == 26
    assert sizes["spiritual"] == 30
    assert sizes["belief_patterns"] == 6
    assert [category for category, _ in DEFAULT_LEXICON.cultural_tables()] == [
        ReferenceCategory.TRADITION,
        ReferenceCategory.SYMBOL,
        ReferenceCategory.PRACTICE,
        ReferenceCategory.LANGUAGE,
    ]


def test_load_lexicon_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_lexicon(tmp_path / "missing.yaml")

    listing = tmp_path / "list.yaml"
    listing.write_text("- justice\n- peace\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_lexicon(listing)

    broken = tmp_path / "broken.yaml"
    broken.write_text("belief_patterns: [{category: nonsense, pattern: x}]\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid lexicon"):
        load_lexicon(broken)


def test_load_lexicon_belief_patterns(tmp_path: Path) -> None:
    path = tmp_path / "lexicon.yaml"
    path.write_text(
        "belief_patterns:\n  - pattern: 'river\\s+spirit'\n  - pattern: 'harvest\\s+song'\n    category: custom\n",
        encoding="utf-8",
    )
    lexicon = load_lexicon(path)

    assert [p.pattern for p in lexicon.belief_patterns] == [r"river\s+spirit", r"harvest\s+song"]
    assert lexicon.belief_patterns[1].category is ReferenceCategory.CUSTOM


def test_load_config_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("thresholds: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_config(path)


def test_load_lexicon_malformed_yaml(tmp_path: Path) -> None:
    path = tmp_path / "lexicon.yaml"
    path.write_text("ethical: [justice\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="not valid YAML"):
        load_lexicon(path)


def test_invalid_belief_pattern_is_a_config_error(tmp_path: Path) -> None:
    path = tmp_path / "lexicon.yaml"
    path.write_text("belief_patterns:\n  - pattern: '(unclosed'\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid regular expression"):
        load_lexicon(path)


def test_belief_pattern_compiles_on_construction() -> None:
    with pytest.raises(ValidationError):
        BeliefPattern(pattern="[ancestors")
