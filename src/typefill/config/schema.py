"""Typed configuration schema and loader for generator settings."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, confloat, conint, model_validator

SEED_ENV = "TYPEFILL_SEED"

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ElementCountSettings(BaseModel):
    """Inclusive bounds on the size of generated containers."""

    min: conint(ge=0) = 1  # type: ignore[valid-type]
    max: conint(ge=0) = 10  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_order(self) -> ElementCountSettings:
        if self.min > self.max:
            raise ValueError("element_count.min must be <= element_count.max")
        return self


class GeneratorSettings(BaseModel):
    """Top-level generator configuration."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    seed: int | None = None
    nil_probability: confloat(ge=0.0, le=1.0) = 0.2  # type: ignore[valid-type]
    element_count: ElementCountSettings = Field(default_factory=ElementCountSettings)
    max_depth: int = 100

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> GeneratorSettings:
    """Load settings from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    the ``TYPEFILL_SEED`` environment variable.

    Raises
    ------
    pydantic.ValidationError
        If the merged settings contain unknown keys or out-of-range values.
    """

    with (
        importlib_resources.files("typefill.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    if environ.get(SEED_ENV):
        merged = deep_merge_dicts(merged, {"seed": environ[SEED_ENV]})

    return GeneratorSettings.model_validate(merged)


__all__ = [
    "SEED_ENV",
    "ElementCountSettings",
    "GeneratorSettings",
    "deep_merge_dicts",
    "load_config",
]
