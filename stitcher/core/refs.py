"""
Refs — Parsing of $ref strings

Grammar:  [<target>]['#'<json-pointer>]

    "#/components/schemas/User"       internal, left untouched
    "./pet.yaml"                      external, whole document
    "../core/errors.yaml#/ApiError"   external, sub-value
    "https://example.com/x.yaml#/a"   external, absolute URL

Split happens on the first '#' only; the pointer may not contain another.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .document import ValueKind, kind_of


REF_KEY = "$ref"


@dataclass(frozen=True)
class Ref:
    """A parsed $ref value."""
    raw: str
    target: Optional[str] = None
    pointer: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> 'Ref':
        target, sep, pointer = raw.partition("#")
        return cls(
            raw=raw,
            target=target or None,
            pointer=pointer if sep else None,
        )

    @property
    def is_internal(self) -> bool:
        """Same-document reference (no target)."""
        return self.target is None

    @property
    def is_external(self) -> bool:
        return not self.is_internal

    @property
    def has_sub_pointer(self) -> bool:
        """True when the pointer selects something below the document root."""
        return self.pointer is not None and self.pointer not in ("", "/")


def get_ref(value: Any) -> Optional[str]:
    """
    Return the $ref string of a mapping, or None.

    A $ref whose value is not a string is not a reference.
    """
    if kind_of(value) is not ValueKind.MAPPING:
        return None
    ref = value.get(REF_KEY)
    if isinstance(ref, str):
        return ref
    return None
