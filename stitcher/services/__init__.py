"""
Services — Collaborators of the resolution engine

- Sources: fetch raw text from files, http(s), or memory
- Parser: YAML/JSON text to document values
"""

from .parser import DocumentParser, DocumentLoader
from .sources import ContentSource, FileSource, HttpSource, MemorySource, DefaultSource

__all__ = [
    "DocumentParser", "DocumentLoader",
    "ContentSource", "FileSource", "HttpSource", "MemorySource", "DefaultSource",
]
