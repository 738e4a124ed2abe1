"""
Presentation — Output formatting

- Serializer: canonical YAML/JSON with sorted keys
"""

from .serializer import CanonicalSerializer, CanonicalDumper, serialize, FORMATS, DEFAULT_FORMAT

__all__ = ["CanonicalSerializer", "CanonicalDumper", "serialize", "FORMATS", "DEFAULT_FORMAT"]
