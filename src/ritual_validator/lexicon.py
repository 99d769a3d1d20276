"""Versioned lexicon tables shared by all analyzers.

Tables are plain immutable data. Analyzers receive a ``Lexicon`` at
construction time, so tests and deployments can swap in their own tables
(``load_lexicon``) without touching scoring code.
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ritual_validator.constants import ReferenceCategory
from ritual_validator.errors import ConfigError


class BeliefPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    pattern: str
    category: ReferenceCategory = ReferenceCategory.BELIEF

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value


def _dedupe(terms: tuple[str, ...]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for term in terms:
        cleaned = term.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


class Lexicon(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "1.0"

    # ESEP
    ethical: tuple[str, ...] = ()
    spiritual: tuple[str, ...] = ()
    negative: tuple[str, ...] = ()

    # CEDA
    cultural_tradition: tuple[str, ...] = ()
    cultural_symbol: tuple[str, ...] = ()
    cultural_practice: tuple[str, ...] = ()
    cultural_language: tuple[str, ...] = ()
    belief_patterns: tuple[BeliefPattern, ...] = ()

    # Narrative forensics
    polarizing: tuple[str, ...] = ()
    in_group: tuple[str, ...] = ()
    out_group: tuple[str, ...] = ()
    absolutes: tuple[str, ...] = ()
    biased: tuple[str, ...] = ()
    gender_coded: tuple[str, ...] = ()
    hierarchy: tuple[str, ...] = ()
    harmony: tuple[str, ...] = ()
    factual_claim: tuple[str, ...] = ()
    factual_hedge: tuple[str, ...] = ()
    appropriation_cues: tuple[str, ...] = ()
    permission_cues: tuple[str, ...] = ()

    @field_validator(
        "ethical",
        "spiritual",
        "negative",
        "cultural_tradition",
        "cultural_symbol",
        "cultural_practice",
        "cultural_language",
        "polarizing",
        "in_group",
        "out_group",
        "absolutes",
        "biased",
        "gender_coded",
        "hierarchy",
        "harmony",
        "factual_claim",
        "factual_hedge",
        "appropriation_cues",
        "permission_cues",
    )
    @classmethod
    def normalise_terms(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _dedupe(value)

    def cultural_tables(self) -> tuple[tuple[ReferenceCategory, tuple[str, ...]], ...]:
        """Lexicon-driven CEDA categories in detection order."""
        return (
            (ReferenceCategory.TRADITION, self.cultural_tradition),
            (ReferenceCategory.SYMBOL, self.cultural_symbol),
            (ReferenceCategory.PRACTICE, self.cultural_practice),
            (ReferenceCategory.LANGUAGE, self.cultural_language),
        )

    def category_sizes(self) -> dict[str, int]:
        sizes: dict[str, int] = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, tuple):
                sizes[name] = len(value)
        return sizes


DEFAULT_LEXICON = Lexicon(
    version="1.0",
    ethical=(
        "justice", "equity", "fairness", "compassion", "empathy", "kindness",
        "respect", "dignity", "rights", "freedom", "autonomy", "consent",
        "responsibility", "accountability", "transparency", "integrity",
        "honesty", "trust", "cooperation", "solidarity", "community",
        "inclusion", "diversity", "tolerance", "acceptance", "forgiveness",
    ),
    spiritual=(
        "sacred", "divine", "holy", "blessed", "enlightened", "awakened",
        "consciousness", "awareness", "presence", "mindfulness", "meditation",
        "prayer", "worship", "devotion", "faith", "belief", "spirit", "soul",
        "essence", "transcendence", "unity", "oneness", "connection",
        "harmony", "balance", "peace", "love", "grace", "wisdom", "truth",
    ),
    negative=(
        "hate", "violence", "harm", "destruction", "exclusion",
        "discrimination", "oppression", "exploitation", "manipulation",
        "deception", "corruption", "greed", "selfishness", "arrogance",
        "pride", "anger", "fear", "separation", "division", "conflict", "war",
        "suffering", "pain",
    ),
    cultural_tradition=(
        # Indigenous
        "smudging", "sweat lodge", "vision quest", "medicine wheel",
        "talking circle", "powwow", "potlatch", "giveaway", "naming ceremony",
        "coming of age",
        # Eastern
        "meditation", "yoga", "qi gong", "tai chi", "zen", "mindfulness",
        "chakra", "kundalini", "prana", "dharma", "karma", "samsara",
        "mandala", "mudra", "mantra", "yantra", "puja", "darshan",
        # Western
        "prayer", "worship", "blessing", "communion", "baptism",
        "confirmation", "pilgrimage", "retreat", "contemplation", "mysticism",
        "gnosis",
        # African
        "ancestral veneration", "libation", "drumming", "dancing",
        "storytelling", "griot", "sankofa", "ubuntu", "kwanzaa",
        "harvest festival",
        # Middle Eastern
        "salah", "dhikr", "sufism", "whirling", "zakat", "hajj", "ramadan",
        "eid", "halal", "kosher", "shabbat",
        # Latin American
        "día de los muertos", "quinceañera", "fiesta", "celebration",
        "curandero", "shaman", "ayahuasca", "tobacco", "cacao ceremony",
        # Pacific
        "hula", "lei", "aloha", "mana", "kapu", "kahuna", "tapu", "tiki",
        "haka", "koru",
        # European
        "maypole", "bonfire", "harvest", "solstice", "equinox", "sabbat",
        "wheel of the year", "imbolc", "beltane", "lughnasadh", "samhain",
    ),
    cultural_symbol=(
        "circle", "cross", "star", "moon", "sun", "tree", "water", "fire",
        "earth", "air", "yin yang", "om", "swastika", "ankh", "eye of horus",
        "lotus", "dragon", "phoenix", "eagle", "wolf", "bear", "deer",
        "feather", "shell", "crystal", "gemstone", "herb", "flower",
        "mandala", "yantra", "labyrinth", "spiral", "infinity",
        "vesica piscis", "flower of life", "seed of life", "metatron cube",
        "sacred geometry", "cedar", "sage", "sweetgrass",
    ),
    cultural_practice=(
        "ceremony", "ritual", "celebration", "festival", "gathering",
        "offering", "sacrifice", "libation", "incense", "candle", "altar",
        "shrine", "temple", "sacred space", "sanctuary", "dance", "movement",
        "gesture", "posture", "walking", "procession", "pilgrimage",
        "journey", "quest", "adventure", "exploration", "chanting", "singing",
        "drumming", "music", "sound", "vibration", "mantra", "prayer",
        "invocation", "evocation", "blessing",
    ),
    cultural_language=(
        "sanskrit", "pali", "hebrew", "arabic", "latin", "greek",
        "old english", "gaelic", "quechua", "nahuatl", "maori", "amen", "om",
        "shalom", "salaam", "namaste", "aloha", "blessed be",
        "so mote it be", "as above so below", "peace be with you",
        "may the force be with you",
    ),
    belief_patterns=(
        BeliefPattern(pattern=r"ancestors?\s+(spirit|guide|protect|bless)"),
        BeliefPattern(pattern=r"(sacred|holy)\s+(land|water|air|fire|earth)"),
        BeliefPattern(pattern=r"(spirit|soul)\s+(world|realm|dimension)"),
        BeliefPattern(pattern=r"(divine|god|goddess)\s+(presence|blessing|guidance)"),
        BeliefPattern(pattern=r"(traditional|ancient)\s+(wisdom|knowledge|practice)"),
        BeliefPattern(
            pattern=r"(cultural|heritage)\s+(preservation|celebration)",
            category=ReferenceCategory.CUSTOM,
        ),
    ),
    polarizing=(
        # us vs them
        "us", "them", "we", "they", "our", "their", "ours", "theirs", "enemy",
        "opponent", "adversary", "foe", "rival", "superior", "inferior",
        "better", "worse", "right", "wrong",
        # absolutes
        "always", "never", "everyone", "nobody", "all", "none", "completely",
        "totally", "absolutely", "definitely",
        # divisive
        "divide", "separate", "split", "fragment", "isolate", "exclude",
        "reject", "ban", "prohibit", "forbid",
        # emotional manipulation
        "fear", "anger", "hate", "despise", "loathe", "abhor", "manipulate",
        "control", "dominate", "subjugate",
    ),
    in_group=("we", "us", "our"),
    out_group=("they", "them", "their"),
    absolutes=("always", "never", "everyone", "nobody", "all", "none"),
    biased=(
        # gender
        "manly", "womanly", "masculine", "feminine", "girly", "bossy",
        "aggressive", "emotional", "rational",
        # cultural
        "primitive", "advanced", "civilized", "uncivilized", "modern",
        "traditional", "backward", "progressive",
        # religious
        "heathen", "pagan", "infidel", "believer", "non-believer", "sacred",
        "profane", "holy", "unholy",
        # economic
        "rich", "poor", "wealthy", "destitute", "privileged",
        "underprivileged", "elite", "common", "noble", "peasant",
    ),
    gender_coded=("manly", "womanly", "bossy", "aggressive"),
    hierarchy=("primitive", "advanced", "civilized", "backward"),
    harmony=(
        "together", "united", "harmony", "peace", "cooperation",
        "collaboration", "mutual", "shared", "collective", "community",
        "inclusive", "welcoming", "embracing", "accepting", "respecting",
        "heal", "reconcile", "forgive", "understand", "empathize", "support",
        "help", "assist", "nurture", "care",
    ),
    factual_claim=(
        "proven", "scientifically", "research shows", "studies indicate",
        "experts say", "authorities claim", "traditionally", "historically",
        "ancient wisdom", "time-tested", "universally accepted",
    ),
    factual_hedge=(
        "may", "might", "could", "suggest", "suggests", "appear", "appears",
        "seem", "seems",
    ),
    appropriation_cues=("ancient wisdom", "traditional knowledge"),
    permission_cues=("permission", "guidance", "blessing", "consultation"),
)


def load_lexicon(path: Path) -> Lexicon:
    """Load a lexicon from YAML.

    Categories missing from the file fall back to the default tables, so a
    file only needs to list what it overrides.
    """
    if not path.exists():
        raise ConfigError(f"Lexicon file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Lexicon file is not valid YAML {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Lexicon file must contain a mapping: {path}")
    merged = DEFAULT_LEXICON.model_dump()
    merged.update(raw)
    try:
        return Lexicon.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid lexicon file {path}: {exc}") from exc
