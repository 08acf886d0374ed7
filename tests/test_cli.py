from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from typer.testing import CliRunner

from typefill.cli import app


@dataclass
class Point:
    x: int
    y: int
    label: Optional[str]


class Token:
    def generate_self(self, c: Any) -> None:
        self.text = c.rand_string()


runner = CliRunner()


def test_help() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "sample" in result.output
    assert "show-config" in result.output


def test_sample_struct() -> None:
    result = runner.invoke(app, ["sample", f"{__name__}:Point", "--seed", "1", "-n", "3"])
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert len(lines) == 3
    for line in lines:
        doc = json.loads(line)
        assert set(doc) == {"x", "y", "label"}


def test_sample_is_reproducible() -> None:
    args = ["sample", "datetime:datetime", "--seed", "7", "--count", "2"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.exit_code == 0
    assert first.stdout == second.stdout


def test_sample_options(monkeypatch: Any) -> None:
    monkeypatch.delenv("TYPEFILL_SEED", raising=False)
    result = runner.invoke(
        app,
        [
            "sample",
            f"{__name__}:Point",
            "--nil-probability",
            "1",
            "--max-depth",
            "1",
        ],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"x": 0, "y": 0, "label": None}


def test_bad_target() -> None:
    result = runner.invoke(app, ["sample", "no_such_module_for_typefill:Thing"])
    assert result.exit_code == 2
    result = runner.invoke(app, ["sample", "not-a-target"])
    assert result.exit_code == 2
    result = runner.invoke(app, ["sample", f"{__name__}:Missing"])
    assert result.exit_code == 2


def test_bad_config(tmp_path: Path) -> None:
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("unknown: true\n", encoding="utf-8")
    result = runner.invoke(app, ["sample", "builtins:int", "--config", str(bad_cfg)])
    assert result.exit_code == 4


def test_bad_option_value() -> None:
    result = runner.invoke(app, ["sample", "builtins:int", "--nil-probability", "2"])
    assert result.exit_code == 4
    result = runner.invoke(
        app, ["sample", "builtins:int", "--min-elements", "5", "--max-elements", "2"]
    )
    assert result.exit_code == 4


def test_missing_config_file(tmp_path: Path) -> None:
    result = runner.invoke(
        app, ["sample", "builtins:int", "--config", str(tmp_path / "missing.yml")]
    )
    assert result.exit_code == 4


def test_generation_error() -> None:
    result = runner.invoke(app, ["sample", "builtins:complex"])
    assert result.exit_code == 5


def test_show_config(tmp_path: Path, monkeypatch: Any) -> None:
    monkeypatch.delenv("TYPEFILL_SEED", raising=False)
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("max_depth: 12\n", encoding="utf-8")
    result = runner.invoke(app, ["show-config", "--config", str(cfg_file)])
    assert result.exit_code == 0
    doc = json.loads(result.stdout)
    assert doc["max_depth"] == 12
    assert doc["nil_probability"] == 0.2
    assert doc["element_count"] == {"min": 1, "max": 10}


def test_value_without_json_form() -> None:
    result = runner.invoke(app, ["sample", f"{__name__}:Token", "--seed", "1"])
    assert result.exit_code == 5
    assert result.exception is None or isinstance(result.exception, SystemExit)
