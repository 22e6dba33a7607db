from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import typer

from longlines.audit import audit_breaks
from longlines.config import WrapSettings, load_settings
from longlines.document import Document
from longlines.heuristic import choose_classification, has_hard_breaks, has_overlong_lines
from longlines.mode import WordWrapController
from longlines.storage import load_document, save_document
from longlines.unfill import unfill_buffer

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except Exception as exc:  # pragma: no cover - exercised in CLI tests
        _exit_with_error(exc)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _cli_overrides(**values: Any) -> dict[str, Any]:
    """Drop options the user did not pass so YAML/env values survive."""
    return {k: v for k, v in values.items() if v is not None}


def _settings(config: str, **values: Any) -> WrapSettings:
    return load_settings(config, overrides=_cli_overrides(**values))


def _emit(text: str, out: Path | None) -> None:
    if out is None:
        sys.stdout.write(text)
    else:
        out.write_text(text, encoding="utf-8")


def _run_unfill(path: Path, out: Path | None, settings: WrapSettings) -> None:
    doc = load_document(path)
    with doc.listeners_suspended():
        unfill_buffer(doc, settings=settings)
    _emit(doc.text, out)


def _run_wrap(path: Path, settings: WrapSettings) -> None:
    doc = load_document(path)
    WordWrapController(doc, settings=settings).activate()
    _emit(doc.text, None)


def _run_normalize(path: Path, out: Path | None, settings: WrapSettings) -> None:
    doc = load_document(path)
    controller = WordWrapController(doc, settings=settings, notify=lambda msg: print(msg, file=sys.stderr))
    controller.activate()
    save_document(doc, out or path)


def _report(doc: Document, width: int, force_all_hard: bool) -> dict[str, Any]:
    overlong = has_overlong_lines(doc, width)
    classification = choose_classification(force_all_hard, overlong, has_hard_breaks(doc))
    return {
        "chars": len(doc),
        "lines": len(doc.lines()),
        "paragraphs": len(doc.paragraphs()),
        "wrap_width": width,
        "overlong_lines": overlong,
        "classification": classification,
        "issues": [str(issue) for issue in audit_breaks(doc, classification)],
    }


def _run_inspect(path: Path, settings: WrapSettings) -> None:
    doc = load_document(path)
    report = _report(doc, settings.viewport_width - 1, settings.force_all_returns_hard)
    print(json.dumps(report, indent=2))


def _input_argument() -> Any:
    return typer.Argument(..., exists=True, dir_okay=False, readable=True)


@app.command()
def unfill(
    input_path: Path = _input_argument(),
    out: Path | None = typer.Option(None, "--out"),
    config: str = typer.Option("longlines.yaml", "--config"),
    double_space_sentence: bool = typer.Option(False, "--double-space-sentence"),
    double_space_colon: bool = typer.Option(False, "--double-space-colon"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Join the soft-wrapped lines of every paragraph into long lines."""
    _configure_logging(verbose)
    _safe(
        lambda: _run_unfill(
            input_path,
            out,
            _settings(
                config,
                double_space_after_sentence=True if double_space_sentence else None,
                double_space_after_colon=True if double_space_colon else None,
            ),
        )
    )


@app.command()
def wrap(
    input_path: Path = _input_argument(),
    width: int | None = typer.Option(None, "--width", help="Viewport width in columns."),
    force_all_hard: bool = typer.Option(False, "--force-all-hard"),
    config: str = typer.Option("longlines.yaml", "--config"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Print a file the way word-wrap mode displays it."""
    _configure_logging(verbose)
    _safe(
        lambda: _run_wrap(
            input_path,
            _settings(
                config,
                viewport_width=width,
                force_all_returns_hard=True if force_all_hard else None,
            ),
        )
    )


@app.command()
def normalize(
    input_path: Path = _input_argument(),
    out: Path | None = typer.Option(None, "--out"),
    width: int | None = typer.Option(None, "--width", help="Viewport width in columns."),
    config: str = typer.Option("longlines.yaml", "--config"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Activate word wrap and save, writing only hard breaks."""
    _configure_logging(verbose)
    _safe(lambda: _run_normalize(input_path, out, _settings(config, viewport_width=width)))


@app.command()
def inspect(
    input_path: Path = _input_argument(),
    width: int | None = typer.Option(None, "--width", help="Viewport width in columns."),
    config: str = typer.Option("longlines.yaml", "--config"),
) -> None:
    """Report line, paragraph and break statistics as JSON."""
    _safe(lambda: _run_inspect(input_path, _settings(config, viewport_width=width)))


if __name__ == "__main__":
    app()
