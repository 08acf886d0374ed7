"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. Environment variable ``TYPEFILL_SEED`` for the random seed
"""

from .schema import ElementCountSettings, GeneratorSettings, deep_merge_dicts, load_config

__all__ = ["ElementCountSettings", "GeneratorSettings", "deep_merge_dicts", "load_config"]
