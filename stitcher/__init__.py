"""
Stitcher — Multi-file API description bundler

Resolves external $refs across a tree of YAML/JSON fragments into one
self-contained document. Internal refs ("#/...") are kept for the consumer.

Usage:
    stitcher stitch specs/openapi.yaml
    stitcher stitch https://example.com/openapi.yaml --format json
    stitcher config --set output.format=json

Library:
    from stitcher import Stitcher
    text = Stitcher().stitch("specs/openapi.yaml")
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    StitchError, ParseError, FetchError, EncodingError,
    CircularReferenceError, ReferenceNotFoundError, SerializationError,
)

# Core layer (resolution)
from .core.document import DocumentValue, ValueKind, kind_of, validate
from .core.location import Location
from .core.refs import Ref
from .core.pointer import navigate, decode_token, parse_pointer
from .core.cache import ResolutionCache, CycleTracker, ResolutionState
from .core.engine import ResolutionEngine

# Services layer (collaborators)
from .services.parser import DocumentParser
from .services.sources import ContentSource, FileSource, HttpSource, MemorySource, DefaultSource

# Presentation layer
from .presentation.serializer import CanonicalSerializer, serialize

# Config
from .config import Config, ConfigManager, FetchConfig, OutputConfig, get_config

# Facade
from .stitcher import Stitcher

__all__ = [
    # Errors
    'StitchError', 'ParseError', 'FetchError', 'EncodingError',
    'CircularReferenceError', 'ReferenceNotFoundError', 'SerializationError',
    # Core
    'DocumentValue', 'ValueKind', 'kind_of', 'validate',
    'Location', 'Ref',
    'navigate', 'decode_token', 'parse_pointer',
    'ResolutionCache', 'CycleTracker', 'ResolutionState',
    'ResolutionEngine',
    # Services
    'DocumentParser',
    'ContentSource', 'FileSource', 'HttpSource', 'MemorySource', 'DefaultSource',
    # Presentation
    'CanonicalSerializer', 'serialize',
    # Config
    'Config', 'ConfigManager', 'FetchConfig', 'OutputConfig', 'get_config',
    # Facade
    'Stitcher',
]
