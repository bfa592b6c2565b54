"""Module entry point for `python -m xsd2avro`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
