from __future__ import annotations

import json
import logging
import pathlib
import sys
from typing import Any, Dict, Optional

import typer
import structlog
from pydantic import ValidationError
from rich.console import Console

from .config import load_config, IdcheckConfig
from .engine.facade import Validator
from .reporting.text import render_result
from .results import Kind, UnsupportedKindError, ValidationResult

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="idcheck: identifier, email and password validation")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"idcheck {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to idcheck.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if verbose else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
    ctx.obj = {"config": load_config(config) if config else IdcheckConfig()}
    if verbose:
        log.info("verbose_enabled")


def _emit(result: ValidationResult, title: str, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(result.to_dict()))
    else:
        console.print(render_result(result, title=title))
    if not result.valid:
        raise typer.Exit(code=1)


@app.command()
def check(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help="id11 | id14 | email | password"),
    value: str = typer.Argument(..., help="Value to validate"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Validate a single value. Exit code 1 when it is invalid."""
    try:
        parsed = Kind.parse(kind)
    except UnsupportedKindError as e:
        raise typer.BadParameter(str(e), param_hint="KIND")
    cfg: IdcheckConfig = ctx.obj["config"]
    with Validator(cfg, cache=False) as validator:
        result = validator.check(parsed, value)
    _emit(result, parsed.value, as_json)


@app.command()
def password(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="Password to evaluate"),
    min_length: Optional[int] = typer.Option(None, "--min-length", help="Override minimum length"),
    max_length: Optional[int] = typer.Option(None, "--max-length", help="Override maximum length"),
    no_upper: bool = typer.Option(False, "--no-upper", help="Do not require an uppercase letter"),
    no_lower: bool = typer.Option(False, "--no-lower", help="Do not require a lowercase letter"),
    no_number: bool = typer.Option(False, "--no-number", help="Do not require a number"),
    no_symbol: bool = typer.Option(False, "--no-symbol", help="Do not require a symbol"),
    allow_common: bool = typer.Option(False, "--allow-common", help="Accept denylisted passwords"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Evaluate a password against the configured policy plus any overrides."""
    cfg: IdcheckConfig = ctx.obj["config"]
    overrides: Dict[str, Any] = {}
    if min_length is not None:
        overrides["min_length"] = min_length
    if max_length is not None:
        overrides["max_length"] = max_length
    if no_upper:
        overrides["require_upper"] = False
    if no_lower:
        overrides["require_lower"] = False
    if no_number:
        overrides["require_number"] = False
    if no_symbol:
        overrides["require_symbol"] = False
    if allow_common:
        overrides["forbid_common_passwords"] = False

    try:
        policy = cfg.password.merged(overrides)
    except ValidationError as e:
        raise typer.BadParameter(str(e))
    with Validator(cfg, cache=False) as validator:
        result = validator.check(Kind.PASSWORD, value, policy=policy)
    _emit(result, "password", as_json)


@app.command()
def kinds():
    """List the kinds `check` understands."""
    for k in Kind:
        console.print(k.value)
