"""Command line interface."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn

from dotenv import load_dotenv
import typer

# Load .env so RITUAL_VALIDATOR_CONFIG can be set per checkout
load_dotenv()

from ritual_validator.config import ValidatorConfig, config_from_env, load_config
from ritual_validator.errors import ConfigError, SubmissionError
from ritual_validator.ingress import (
    LoadedRitual,
    check_bioregion,
    check_content_limits,
    decode_payload,
    load_ritual_file,
    submission_from_grc,
)
from ritual_validator.io.grc import parse_grc
from ritual_validator.orchestrator import ValidationOrchestrator
from ritual_validator.reporting import build_validation_report, write_report

EXIT_REJECTED = 2

app = typer.Typer(help="Ritual validation CLI (ESEP, CEDA, narrative forensics)", add_completion=False)


def _emit(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _fail(exc: Exception) -> NoReturn:
    _emit({"error": str(exc)})
    raise typer.Exit(code=1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _runtime(config: Path | None, sequential: bool) -> tuple[ValidatorConfig, ValidationOrchestrator]:
    if config is not None:
        cfg = load_config(config.resolve())
        base_dir: Path | None = config.resolve().parent
    else:
        cfg, base_dir = config_from_env()
    if sequential:
        cfg = cfg.model_copy(update={"parallel": False})
    return cfg, ValidationOrchestrator.from_config(cfg, base_dir)


def _load_input(
    cfg: ValidatorConfig, file: Path | None, text: str | None, bioregion: str | None
) -> LoadedRitual:
    if (file is None) == (text is None):
        raise SubmissionError("Provide exactly one of --file or --text.")
    if file is not None:
        return load_ritual_file(file.resolve(), cfg.ingress, bioregion)
    content = text or ""
    check_content_limits(content, cfg.ingress)
    check_bioregion(bioregion or "")
    return LoadedRitual(path=Path("-"), content=content, bioregion_id=bioregion or "")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.command("validate")
def validate_cmd(
    file: Path | None = typer.Option(None, "--file", help="Path to a .grc or plain-text ritual"),
    text: str | None = typer.Option(None, "--text", help="Ritual text given inline"),
    bioregion: str | None = typer.Option(None, "--bioregion", help="Bioregion id, e.g. mythic-forest"),
    config: Path | None = typer.Option(None, "--config", help="Path to YAML config"),
    out: Path | None = typer.Option(None, "--out", help="Write the full report JSON here"),
    sequential: bool = typer.Option(False, "--sequential", help="Run analyzers one after another"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Validate a ritual and print the approval payload."""
    _configure_logging(verbose)
    try:
        cfg, orchestrator = _runtime(config, sequential)
        loaded = _load_input(cfg, file, text, bioregion)
    except (ConfigError, SubmissionError) as exc:
        _fail(exc)

    result = orchestrator.validate(loaded.content, loaded.bioregion_id).stamped(_now_iso())
    payload = result.summary()
    if out is not None:
        report = build_validation_report(loaded.content, result, orchestrator, cfg)
        payload["report"] = str(write_report(out, report))
    _emit(payload)
    if not result.is_approved:
        raise typer.Exit(code=EXIT_REJECTED)


@app.command("report")
def report_cmd(
    file: Path = typer.Option(..., "--file", help="Path to a .grc or plain-text ritual"),
    bioregion: str | None = typer.Option(None, "--bioregion", help="Bioregion id override"),
    config: Path | None = typer.Option(None, "--config", help="Path to YAML config"),
    out: Path | None = typer.Option(None, "--out", help="Write the report JSON here instead of stdout"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Print the full analysis report, including structure and context analyses."""
    _configure_logging(verbose)
    try:
        cfg, orchestrator = _runtime(config, sequential=False)
        loaded = load_ritual_file(file.resolve(), cfg.ingress, bioregion)
    except (ConfigError, SubmissionError) as exc:
        _fail(exc)

    result = orchestrator.validate(loaded.content, loaded.bioregion_id).stamped(_now_iso())
    report = build_validation_report(loaded.content, result, orchestrator, cfg)
    if out is not None:
        _emit({"report": str(write_report(out, report)), "isApproved": result.is_approved})
        return
    _emit(report)


@app.command("parse-grc")
def parse_grc_cmd(
    file: Path = typer.Option(..., "--file", help="Path to a .grc file"),
    author: str = typer.Option(..., "--author", help="Submitting author; .grc files carry none"),
) -> None:
    """Parse a .grc file into a validated ritual submission."""
    if not file.exists():
        _fail(SubmissionError(f"Ritual file not found: {file}"))
    try:
        document = parse_grc(decode_payload(file.read_bytes()))
        submission = submission_from_grc(document, author=author)
    except SubmissionError as exc:
        _fail(exc)
    _emit({"submission": submission.model_dump(mode="json"), "headings": document.headings})


@app.command("lexicon")
def lexicon_cmd(config: Path | None = typer.Option(None, "--config", help="Path to YAML config")) -> None:
    """Show the active lexicon version and table sizes."""
    try:
        if config is not None:
            cfg = load_config(config.resolve())
            lexicon = cfg.resolve_lexicon(config.resolve().parent)
        else:
            cfg, base_dir = config_from_env()
            lexicon = cfg.resolve_lexicon(base_dir)
    except ConfigError as exc:
        _fail(exc)
    _emit({"version": lexicon.version, "match_mode": cfg.match_mode.value, "tables": lexicon.category_sizes()})


def main() -> None:
    app()


if __name__ == "__main__":
    main()
