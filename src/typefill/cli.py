"""Typer-based command line interface for sampling generated values.

``typefill sample MODULE:QUALNAME`` imports a type and prints one JSON
document per generated value, which is handy for eyeballing what a
generator configuration produces before wiring it into a test.
``typefill show-config`` prints the effective settings.

Exit codes
----------
0 success
2 target error (module or attribute cannot be imported)
4 configuration error
5 generation error (unsupported kind, bad override, value with no JSON form)
"""

from __future__ import annotations

import importlib
import json
import os
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import GeneratorSettings, deep_merge_dicts, load_config
from .generator import Generator
from .ref import Ref
from .utils.errors import GenerationError
from .utils.jsonable import to_jsonable
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="typefill",
    help="Generate random values of Python types. Use 'typefill sample' to print samples.",
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load_settings(config_path: Path | None, overrides: dict[str, Any]) -> GeneratorSettings:
    """Load settings and apply command line overrides, exiting with 4 on error."""

    try:
        settings = load_config(config_path)
        if overrides:
            merged = deep_merge_dicts(settings.model_dump(), overrides)
            settings = GeneratorSettings.model_validate(merged)
    except (ValidationError, OSError, yaml.YAMLError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    return settings


def _resolve_target(target: str) -> Any:
    """Import ``MODULE:QUALNAME`` and return the named object."""

    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"target must look like MODULE:QUALNAME, got {target!r}")
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


@app.callback()
def main() -> None:
    """Entry point for the typefill command group."""
    pass


@app.command()
def sample(  # noqa: PLR0913
    target: str = typer.Argument(..., help="Type to generate, as MODULE:QUALNAME"),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of values to print"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for the random stream"),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    nil_probability: Optional[float] = typer.Option(
        None, "--nil-probability", help="Chance of absent optional values and containers"
    ),
    min_elements: Optional[int] = typer.Option(
        None, "--min-elements", help="Minimum container size"
    ),
    max_elements: Optional[int] = typer.Option(
        None, "--max-elements", help="Maximum container size"
    ),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Recursion ceiling"),
    without_overrides: bool = typer.Option(
        False,
        "--without-overrides",
        help="Skip overrides and generate_self for the target itself",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Emit debug logging to stderr"
    ),
) -> None:
    """Print COUNT random values of TARGET as JSON lines."""

    if verbose:
        configure_logging(verbose=True)

    overrides: dict[str, Any] = {}
    if seed is not None:
        overrides["seed"] = seed
    if nil_probability is not None:
        overrides["nil_probability"] = nil_probability
    if max_depth is not None:
        overrides["max_depth"] = max_depth
    element_count: dict[str, int] = {}
    if min_elements is not None:
        element_count["min"] = min_elements
    if max_elements is not None:
        element_count["max"] = max_elements
    if element_count:
        overrides["element_count"] = element_count
    settings = _load_settings(config_path, overrides)

    try:
        tp = _resolve_target(target)
    except (ImportError, AttributeError, ValueError) as exc:
        _safe_exit(2, str(exc))

    generator = Generator.from_settings(settings)
    fill = generator.fill_without_overrides if without_overrides else generator.fill
    for _ in range(count):
        try:
            ref: Ref[Any] = Ref(tp)
            fill(ref)
        except GenerationError as exc:
            _safe_exit(5, str(exc))
        try:
            doc = to_jsonable(ref.value)
        except TypeError as exc:
            _safe_exit(5, str(exc))
        typer.echo(json.dumps(doc, ensure_ascii=False, sort_keys=True))


@app.command("show-config")
def show_config(
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
) -> None:
    """Print the effective generator settings as JSON."""

    settings = _load_settings(config_path, {})
    typer.echo(settings.model_dump_json(indent=2))
