"""
Errors — Failure kinds raised while stitching

Every failure aborts the whole stitch call. The caller receives exactly one
error, carrying the reference, location or pointer needed to diagnose it.

Hierarchy:
    StitchError
    ├── ParseError              malformed source text
    ├── FetchError              location unreachable / non-success response
    ├── EncodingError           payload is not valid UTF-8
    ├── CircularReferenceError  $ref that closed a cycle
    ├── ReferenceNotFoundError  pointer path absent from its target
    └── SerializationError      value not representable in the output format
"""

from typing import Optional


class StitchError(Exception):
    """Base class for all stitching failures."""


class ParseError(StitchError):
    """Raised when source text cannot be parsed into a document."""

    def __init__(self, message: str, location: Optional[str] = None):
        self.message = message
        self.location = location
        if location:
            super().__init__(f"Parse error in {location}: {message}")
        else:
            super().__init__(f"Parse error: {message}")


class FetchError(StitchError):
    """Raised when a location cannot be retrieved."""

    def __init__(self, location: str, reason: str = ""):
        self.location = location
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Failed to fetch: {location}{detail}")


class EncodingError(StitchError):
    """Raised when fetched bytes are not valid UTF-8 text."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Invalid encoding (expected UTF-8): {location}")


class CircularReferenceError(StitchError):
    """Raised when a $ref leads back to a document still being resolved."""

    def __init__(self, reference: str, location: Optional[str] = None):
        self.reference = reference
        self.location = location
        super().__init__(f"Circular reference: {reference}")


class ReferenceNotFoundError(StitchError):
    """Raised when a JSON pointer does not exist in its target document."""

    def __init__(self, pointer: str, location: Optional[str] = None):
        self.pointer = pointer
        self.location = location
        where = f" in {location}" if location else ""
        super().__init__(f"Reference not found: {pointer}{where}")


class SerializationError(StitchError):
    """Raised when a stitched document cannot be written in the chosen format."""

    def __init__(self, format: str, reason: str):
        self.format = format
        self.reason = reason
        super().__init__(f"Cannot write {format}: {reason}")
