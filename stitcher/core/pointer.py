"""
Pointer — JSON Pointer navigation over document values

    navigate(doc, "#/components/schemas/Pet")
    navigate(doc, "/paths/~1pets/get")        key "/pets"
    navigate(doc, "/tags/0")                  first element

Tokens are decoded ~1 -> '/' first, then ~0 -> '~'. The reverse order would
turn a literal "~01" into '/' instead of "~1".
"""

from typing import List, Optional

from ..errors import ReferenceNotFoundError
from .document import DocumentValue, ValueKind, kind_of


def decode_token(token: str) -> str:
    """Decode JSON Pointer escapes in one reference token."""
    return token.replace("~1", "/").replace("~0", "~")


def parse_pointer(pointer: str) -> List[str]:
    """
    Split a pointer into decoded tokens.

    One leading '#' and then one leading '/' are stripped. An empty remainder
    is the root and yields no tokens.
    """
    path = pointer
    if path.startswith("#"):
        path = path[1:]
    if path.startswith("/"):
        path = path[1:]
    if not path:
        return []
    return [decode_token(token) for token in path.split("/")]


def navigate(document: DocumentValue, pointer: str, location: Optional[str] = None) -> DocumentValue:
    """
    Resolve ``pointer`` against ``document``.

    Raises:
        ReferenceNotFoundError: a key is missing, an index is invalid or out
            of range, or a token remains after reaching a scalar
    """
    current = document
    for token in parse_pointer(pointer):
        kind = kind_of(current)
        if kind is ValueKind.MAPPING:
            if token not in current:
                raise ReferenceNotFoundError(pointer, location=location)
            current = current[token]
        elif kind is ValueKind.SEQUENCE:
            # Base-10 digits only: no sign, no whitespace
            if not (token.isascii() and token.isdigit()):
                raise ReferenceNotFoundError(pointer, location=location)
            index = int(token)
            if index >= len(current):
                raise ReferenceNotFoundError(pointer, location=location)
            current = current[index]
        else:
            raise ReferenceNotFoundError(pointer, location=location)
    return current
