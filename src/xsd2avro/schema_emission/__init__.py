"""Schema emission exports."""

from .avsc_renderer import render, to_schema_json

__all__ = ["render", "to_schema_json"]
