"""Term matching and text splitting helpers shared by the analyzers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Pattern

from ritual_validator.constants import MatchMode

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")


def split_words(text: str) -> list[str]:
    return text.lower().split()


def split_sentences(text: str) -> list[str]:
    return [part for part in _SENTENCE_SPLIT.split(text) if part.strip()]


def split_sections(text: str) -> list[str]:
    return [part for part in _PARAGRAPH_SPLIT.split(text) if part.strip()]


def _term_regex(term: str, mode: MatchMode) -> str:
    escaped = re.escape(term)
    if mode is MatchMode.SUBSTRING:
        return escaped
    return rf"(?<!\w){escaped}(?!\w)"


@dataclass(frozen=True)
class TermMatcher:
    """Case-insensitive matcher over a fixed set of terms.

    ``word`` mode only accepts occurrences delimited by non-word characters,
    so "us" does not fire inside "thus". ``substring`` mode accepts any
    containment and reproduces legacy scores.
    """

    terms: tuple[str, ...]
    mode: MatchMode = MatchMode.WORD
    _combined: Pattern[str] | None = field(init=False, repr=False, compare=False)
    _per_term: tuple[tuple[str, Pattern[str]], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = sorted(self.terms, key=len, reverse=True)
        combined = None
        if ordered:
            combined = re.compile("|".join(_term_regex(term, self.mode) for term in ordered), re.IGNORECASE)
        per_term = tuple((term, re.compile(_term_regex(term, self.mode), re.IGNORECASE)) for term in self.terms)
        object.__setattr__(self, "_combined", combined)
        object.__setattr__(self, "_per_term", per_term)

    def matches(self, text: str) -> bool:
        return self._combined is not None and self._combined.search(text) is not None

    def count_words(self, words: Iterable[str]) -> int:
        """Number of words containing at least one term."""
        return sum(1 for word in words if self.matches(word))

    def first_occurrences(self, text: str) -> list[tuple[str, int]]:
        """Every distinct term found in ``text`` with the offset of its first occurrence."""
        found: list[tuple[str, int]] = []
        for term, pattern in self._per_term:
            match = pattern.search(text)
            if match:
                found.append((term, match.start()))
        return found


def build_matcher(terms: Iterable[str], mode: MatchMode | str = MatchMode.WORD) -> TermMatcher:
    return TermMatcher(terms=tuple(terms), mode=MatchMode(mode))
