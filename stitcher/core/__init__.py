"""
Core — Resolution layer

- Document: closed value model (null, bool, number, string, sequence, mapping)
- Location: canonical file/URL identity and relative resolution
- Refs: $ref string parsing
- Pointer: JSON Pointer navigation
- Cache: resolution cache and cycle tracker
- Engine: recursive $ref inlining
"""

from .document import DocumentValue, ValueKind, kind_of, validate, is_mapping, is_sequence
from .location import Location, is_absolute_url
from .refs import Ref, REF_KEY, get_ref
from .pointer import navigate, decode_token, parse_pointer
from .cache import ResolutionCache, CycleTracker, ResolutionState
from .engine import ResolutionEngine

__all__ = [
    # Document
    "DocumentValue", "ValueKind", "kind_of", "validate", "is_mapping", "is_sequence",
    # Location
    "Location", "is_absolute_url",
    # Refs
    "Ref", "REF_KEY", "get_ref",
    # Pointer
    "navigate", "decode_token", "parse_pointer",
    # Cache
    "ResolutionCache", "CycleTracker", "ResolutionState",
    # Engine
    "ResolutionEngine",
]
