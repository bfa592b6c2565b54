"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "xsd2avro.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Conversion configuration for xsd2avro.
# Every key is optional; command line options override the values below.

# Global element to convert. Defaults to the first element named "Payload",
# else the first global element.
# root_name: "Order"

# Avro namespace. Defaults to a namespace derived from the targetNamespace.
# namespace: "com.example.orders"

# Override the name of the top-level Avro record.
# record_name: "OrderEvent"

# Make every attribute nullable, required ones included.
nullable_attributes: false

# Inline the fields of top-level nested records into the root record.
flatten_top_level: false

# Field names (case-insensitive) whose type is forced to string.
force_string: []

# Pretty-print the generated .avsc files.
pretty: false

# Output file names: root | file | file+root
output_naming: "file+root"

# File pattern used when the input is a directory.
glob: "*.xsd"

# Parallel conversions in directory mode.
workers: 1
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
