"""
Serializer — Canonical text output for stitched documents

Canonical form:
- mapping keys sorted by code point at every level
- sequences in original order
- scalars formatted by the backend's own rules
- shared sub-trees written out in full (no YAML anchors/aliases)

Formats:
    yaml  PyYAML SafeDumper, block style (default)
    json  orjson, sorted keys, two-space indent (64-bit integers only)
"""

from typing import Tuple

import orjson
import yaml

from ..core.document import DocumentValue
from ..errors import SerializationError


FORMATS: Tuple[str, ...] = ("yaml", "json")
DEFAULT_FORMAT = "yaml"


class CanonicalDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors or aliases."""

    def ignore_aliases(self, data) -> bool:
        return True


class CanonicalSerializer:
    """Turns a document value into canonical YAML or JSON text."""

    def __init__(self, format: str = DEFAULT_FORMAT, indent: int = 2):
        if format not in FORMATS:
            raise ValueError(f"Unknown format '{format}'. Valid: {', '.join(FORMATS)}")
        self.format = format
        self.indent = indent

    def serialize(self, value: DocumentValue) -> str:
        if self.format == "json":
            return self._to_json(value)
        return self._to_yaml(value)

    def _to_yaml(self, value: DocumentValue) -> str:
        return yaml.dump(
            value,
            Dumper=CanonicalDumper,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
            indent=self.indent,
            width=float("inf"),
        )

    def _to_json(self, value: DocumentValue) -> str:
        # orjson only knows a two-space indent
        option = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE
        try:
            return orjson.dumps(value, option=option).decode("utf-8")
        except orjson.JSONEncodeError as e:
            # Integers beyond 64 bits; the yaml format writes them
            raise SerializationError("json", str(e)) from e


def serialize(value: DocumentValue, format: str = DEFAULT_FORMAT) -> str:
    """Serialize with default settings."""
    return CanonicalSerializer(format).serialize(value)
