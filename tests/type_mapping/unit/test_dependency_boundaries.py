"""Boundary tests for the mapping core's internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_mapping_core_does_not_import_outer_layers() -> None:
    package_dir = _project_root() / "src" / "xsd2avro"
    core_modules = (
        *sorted((package_dir / "schema_index").glob("*.py")),
        *sorted((package_dir / "type_mapping").glob("*.py")),
        *sorted((package_dir / "shaping").glob("*.py")),
        *sorted((package_dir / "schema_emission").glob("*.py")),
    )
    forbidden_import_fragments = (
        "xsd2avro.configuration",
        "xsd2avro.conversion",
        "xsd2avro.cli",
        "import click",
        "import yaml",
    )

    assert core_modules
    for module_path in core_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"
