"""
Stitcher — Public entry point

    stitcher = Stitcher()
    text = stitcher.stitch("specs/openapi.yaml")
    text = stitcher.stitch("https://example.com/api/openapi.yaml")
    text = stitcher.stitch_content(raw_yaml, base="specs/")

One Stitcher owns one resolution engine, so documents fetched by one call are
reused by the next until clear_cache(). Independent jobs should use
independent instances.
"""

import copy
import os
from pathlib import Path
from typing import Optional, Union

from .config import Config, ConfigManager
from .core.document import DocumentValue
from .core.engine import ResolutionEngine
from .core.location import Location, is_absolute_url
from .presentation.serializer import CanonicalSerializer
from .services.parser import DocumentParser
from .services.sources import ContentSource, DefaultSource


LocationLike = Union[str, Path, Location]


class Stitcher:
    """Stitches multi-file API descriptions into one document."""

    def __init__(
        self,
        source: Optional[ContentSource] = None,
        parser: Optional[DocumentParser] = None,
        serializer: Optional[CanonicalSerializer] = None,
        config: Optional[Config] = None
    ):
        self.config = config or Config()
        self.source = source or DefaultSource.from_config(self.config.fetch)
        self.parser = parser or DocumentParser()
        self.serializer = serializer or CanonicalSerializer(
            self.config.output.format, self.config.output.indent
        )
        self.engine = ResolutionEngine(self.source, self.parser)

    @classmethod
    def from_project(cls, project_dir: Optional[Path] = None, **kwargs) -> 'Stitcher':
        """Build a Stitcher using the layered configuration of ``project_dir``."""
        return cls(config=ConfigManager(project_dir).load(), **kwargs)

    # =========================================================================
    # Stitching
    # =========================================================================

    def stitch(self, location: LocationLike) -> str:
        """Fetch the document at ``location``, resolve it, and serialize it."""
        return self.serializer.serialize(self._resolve(location))

    def stitch_content(self, content: str, base: Optional[LocationLike] = None) -> str:
        """
        Resolve raw text and serialize it.

        Args:
            content: Raw YAML or JSON
            base: Location the text belongs to. A directory (or None for the
                current working directory) anchors relative refs in itself.
        """
        return self.serializer.serialize(self._resolve_content(content, base))

    def resolve(self, location: LocationLike) -> DocumentValue:
        """Like stitch() but returns the document value."""
        return copy.deepcopy(self._resolve(location))

    def resolve_content(self, content: str, base: Optional[LocationLike] = None) -> DocumentValue:
        """Like stitch_content() but returns the document value."""
        return copy.deepcopy(self._resolve_content(content, base))

    def clear_cache(self) -> None:
        """Forget every resolved document."""
        self.engine.clear_cache()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    # The engine's cache shares sub-trees with these results; public methods
    # hand out copies so callers cannot mutate cached documents.
    def _resolve(self, location: LocationLike) -> DocumentValue:
        return self.engine.resolve_location(Location.parse(location))

    def _resolve_content(self, content: str, base: Optional[LocationLike]) -> DocumentValue:
        return self.engine.resolve(content, base_location(base))


def base_location(base: Optional[LocationLike] = None) -> Location:
    """
    Location used as the base for raw content.

    None means the current working directory. Existing local directories
    become a virtual document inside them.
    """
    if base is None:
        return Location.for_directory(os.getcwd())
    if isinstance(base, Location):
        return base
    if not is_absolute_url(str(base)) and os.path.isdir(base):
        return Location.for_directory(base)
    return Location.parse(base)
