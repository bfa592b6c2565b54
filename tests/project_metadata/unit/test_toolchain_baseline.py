"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import re
import tomllib
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict:
    pyproject_path = _project_root() / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def test_project_uses_python_311_baseline_in_pyproject() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["requires-python"] == ">=3.11"
    assert pyproject["tool"]["ruff"]["target-version"] == "py311"
    assert pyproject["tool"]["mypy"]["python_version"] == "3.11"


def test_project_uses_uv_style_metadata_without_poetry() -> None:
    pyproject = _pyproject()
    dev_dependencies = pyproject["dependency-groups"]["dev"]

    assert "black" not in dev_dependencies
    assert "black" not in pyproject["tool"]
    assert "poetry" not in pyproject["tool"]
    assert pyproject["build-system"]["build-backend"] != "poetry.core.masonry.api"


def test_console_script_points_to_cli_main() -> None:
    assert _pyproject()["project"]["scripts"]["xsd2avro"] == "xsd2avro.cli:main"


def test_readme_documents_every_convert_option() -> None:
    project_root = _project_root()
    readme = (project_root / "README.md").read_text(encoding="utf-8")
    cli_source = (project_root / "src" / "xsd2avro" / "cli.py").read_text(encoding="utf-8")

    options = re.findall(r'"(--[a-z-]+)"', cli_source)
    assert "--root-name" in options
    for option in options:
        if option in ("--help", "--version"):
            continue
        assert f"`{option}`" in readme, f"Expected README to document {option}"
