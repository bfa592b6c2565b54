"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, ConversionSettings, OutputNaming, OutputSettings

_KNOWN_KEYS = frozenset(
    {
        "root_name",
        "namespace",
        "record_name",
        "nullable_attributes",
        "flatten_top_level",
        "force_string",
        "pretty",
        "output_naming",
        "glob",
        "workers",
    }
)


class ConfigurationError(Exception):
    """Raised when the configuration file or option values are invalid."""


def load_configuration(
    config_path: Path | str | None = None, overrides: Mapping[str, Any] | None = None
) -> Configuration:
    """Load and validate conversion settings.

    Args:
      config_path: Optional YAML/JSON configuration file.
      overrides: Values that take precedence over the file, keyed like the file.
        `None` values are ignored.

    Raises:
      ConfigurationError: If the file is missing, unparsable or holds invalid values.
    """
    values: dict[str, Any] = dict(_read_configuration_file(config_path)) if config_path else {}
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    unknown = sorted(set(values) - _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    conversion = ConversionSettings(
        root_name=_optional_string(values.get("root_name"), "root_name"),
        namespace=_optional_string(values.get("namespace"), "namespace"),
        record_name=_optional_string(values.get("record_name"), "record_name"),
        nullable_attributes=_require_bool(
            values.get("nullable_attributes", False), "nullable_attributes"
        ),
        flatten_top_level=_require_bool(
            values.get("flatten_top_level", False), "flatten_top_level"
        ),
        force_string_fields=_normalize_field_names(values.get("force_string")),
    )
    output = OutputSettings(
        pretty=_require_bool(values.get("pretty", False), "pretty"),
        naming=_parse_output_naming(values.get("output_naming", OutputNaming.FILE_AND_ROOT.value)),
        glob=_optional_string(values.get("glob"), "glob") or "*.xsd",
        workers=_require_positive_int(values.get("workers", 1), "workers"),
    )
    return Configuration(conversion=conversion, output=output)


def _read_configuration_file(config_path: Path | str) -> Mapping[str, Any]:
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parsed


def _parse_output_naming(value: Any) -> OutputNaming:
    if isinstance(value, OutputNaming):
        return value
    raw = _require_non_empty_string(value, "output_naming")
    try:
        return OutputNaming(raw)
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in OutputNaming)
        raise ConfigurationError(f"output_naming must be one of: {choices}.") from exc


def _normalize_field_names(value: Any) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        items: Sequence[Any] = value.split(",")
    elif isinstance(value, Sequence):
        items = value
    else:
        raise ConfigurationError("force_string must be a string or list of strings.")
    names = set()
    for item in items:
        if not isinstance(item, str):
            raise ConfigurationError("force_string entries must be strings.")
        stripped = item.strip()
        if stripped:
            names.add(stripped.lower())
    return frozenset(names)


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
