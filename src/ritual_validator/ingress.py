"""Submission intake: decoding, size limits and ``.grc`` handling.

These checks run before any text reaches the scoring core.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from ritual_validator.config import IngressLimits
from ritual_validator.constants import BIOREGIONS
from ritual_validator.errors import SubmissionError
from ritual_validator.io.grc import GrcDocument, parse_grc
from ritual_validator.schemas.submission import RitualSubmission


@dataclass(frozen=True)
class LoadedRitual:
    path: Path
    content: str
    bioregion_id: str
    document: GrcDocument | None = None


def check_content_limits(content: str, limits: IngressLimits) -> None:
    size = len(content.encode("utf-8"))
    if size > limits.max_content_bytes:
        raise SubmissionError(f"Ritual content is {size} bytes; the limit is {limits.max_content_bytes} bytes.")
    chars = len(content.strip())
    if chars < limits.min_content_chars:
        raise SubmissionError(
            f"Ritual content must be at least {limits.min_content_chars} characters (got {chars})."
        )


def check_bioregion(bioregion_id: str) -> None:
    if not bioregion_id:
        raise SubmissionError("A bioregion is required (use --bioregion or a '# Bioregion:' header).")
    if bioregion_id not in BIOREGIONS.values():
        known = ", ".join(sorted(BIOREGIONS.values()))
        raise SubmissionError(f"Invalid bioregion {bioregion_id!r}; expected one of: {known}.")


def decode_payload(payload: bytes) -> str:
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SubmissionError(f"Ritual file is not valid UTF-8: {exc}") from exc


def load_ritual_file(path: Path, limits: IngressLimits, bioregion_id: str | None = None) -> LoadedRitual:
    """Read a ``.grc`` or plain-text ritual and enforce ingress limits.

    For ``.grc`` files the bioregion header is used unless ``bioregion_id``
    is given explicitly.
    """
    if not path.exists():
        raise SubmissionError(f"Ritual file not found: {path}")
    size = path.stat().st_size
    if size > limits.max_content_bytes:
        raise SubmissionError(f"Ritual file is {size} bytes; the limit is {limits.max_content_bytes} bytes.")

    text = decode_payload(path.read_bytes())
    document = None
    content = text
    resolved_bioregion = bioregion_id or ""
    if path.suffix.lower() == ".grc":
        document = parse_grc(text)
        content = document.content
        if not resolved_bioregion:
            if document.unknown_bioregion is not None:
                raise SubmissionError(f"Unknown bioregion in {path.name}: {document.unknown_bioregion!r}")
            resolved_bioregion = document.bioregion_id
        if not content.strip():
            raise SubmissionError(f"{path.name} has no '## Ritual Content' section.")

    check_content_limits(content, limits)
    check_bioregion(resolved_bioregion)
    return LoadedRitual(path=path, content=content, bioregion_id=resolved_bioregion, document=document)


def submission_from_grc(document: GrcDocument, *, author: str) -> RitualSubmission:
    """Build a full submission record from a parsed ``.grc`` document."""
    try:
        return RitualSubmission(
            name=document.name,
            bioregion_id=document.bioregion_id,
            description=document.description,
            cultural_context=document.cultural_context,
            content=document.content,
            author=author,
        )
    except ValidationError as exc:
        details = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
        raise SubmissionError("Invalid ritual submission: " + "; ".join(details)) from exc
