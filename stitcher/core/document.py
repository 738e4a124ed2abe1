"""
Document — The closed value model every stitching stage operates on

A document is a tree of native Python values restricted to six kinds:

    NULL      None
    BOOL      bool
    NUMBER    int | float
    STRING    str
    SEQUENCE  list of values
    MAPPING   dict of str -> value (keys unique)

Nothing else is a document value. Parsers validate at their boundary, so an
unexpected shape (dates, bytes, sets, non-string keys) is a ParseError there
instead of leaking into the resolution walk.
"""

from enum import Enum
from typing import Any, Dict, List, Union

from ..errors import ParseError


DocumentValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class ValueKind(Enum):
    """Variant tag of a document value."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"

    @property
    def is_scalar(self) -> bool:
        return self not in (ValueKind.SEQUENCE, ValueKind.MAPPING)


def kind_of(value: Any) -> ValueKind:
    """
    Classify a value.

    Raises:
        ParseError: value is not one of the six document kinds
    """
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, test it first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    raise ParseError(f"Unsupported value of type {type(value).__name__}: {value!r}")


def validate(value: Any) -> DocumentValue:
    """
    Check that a whole tree is a document value.

    Returns the value unchanged so parsers can write
    ``return validate(loaded)``.

    Raises:
        ParseError: on the first unsupported value or non-string mapping key
    """
    stack = [value]
    while stack:
        current = stack.pop()
        kind = kind_of(current)
        if kind is ValueKind.SEQUENCE:
            stack.extend(current)
        elif kind is ValueKind.MAPPING:
            for key, item in current.items():
                if not isinstance(key, str):
                    raise ParseError(f"Mapping key must be a string, got {type(key).__name__}: {key!r}")
                stack.append(item)
    return value


def is_mapping(value: Any) -> bool:
    return kind_of(value) is ValueKind.MAPPING


def is_sequence(value: Any) -> bool:
    return kind_of(value) is ValueKind.SEQUENCE
