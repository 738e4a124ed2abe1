"""
Sources — Retrieval of raw document text

Each source turns a Location into UTF-8 text or fails with:
- FetchError     location missing, unreachable, or non-200 response
- EncodingError  bytes are not valid UTF-8

Available sources:
- FileSource:    local files
- HttpSource:    http(s) via stdlib urllib (no extra dependency)
- MemorySource:  in-memory documents keyed by location
- DefaultSource: files or http depending on the location
"""

import logging
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING, Union

from ..core.location import Location
from ..errors import EncodingError, FetchError

if TYPE_CHECKING:
    from ..config import FetchConfig

logger = logging.getLogger(__name__)


def decode_utf8(data: bytes, location: Location) -> str:
    """Decode bytes as UTF-8, dropping a leading byte-order mark."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise EncodingError(location.canonical) from e


class ContentSource(ABC):
    """Abstract base for document sources."""

    @abstractmethod
    def fetch(self, location: Location) -> str:
        """Return the text stored at ``location``."""
        pass


class FileSource(ContentSource):
    """Reads documents from the local filesystem."""

    def fetch(self, location: Location) -> str:
        if location.is_remote:
            raise FetchError(location.canonical, "not a file location")

        path = Path(location.canonical)
        if path.is_dir():
            raise FetchError(location.canonical, "path is a directory")

        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise FetchError(location.canonical, "file not found") from e
        except OSError as e:
            raise FetchError(location.canonical, e.strerror or str(e)) from e

        logger.debug(f"Read {len(data)} bytes from {location}")
        return decode_utf8(data, location)


class HttpSource(ContentSource):
    """
    Fetches documents over http(s).

    Uses urllib (stdlib). Only a 200 response counts as success; redirects
    are followed by urllib before the status is checked.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "",
        headers: Optional[Dict[str, str]] = None
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.headers = dict(headers or {})

    @classmethod
    def from_config(cls, config: 'FetchConfig') -> 'HttpSource':
        return cls(timeout=config.timeout, user_agent=config.effective_user_agent, headers=config.headers)

    def _build_request(self, location: Location) -> urllib.request.Request:
        headers = dict(self.headers)
        if self.user_agent:
            headers.setdefault("User-Agent", self.user_agent)
        return urllib.request.Request(location.canonical, headers=headers, method="GET")

    def fetch(self, location: Location) -> str:
        if not location.is_remote:
            raise FetchError(location.canonical, "not a URL location")

        req = self._build_request(location)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                if response.status != 200:
                    raise FetchError(location.canonical, f"HTTP {response.status}")
                data = response.read()
        except urllib.error.HTTPError as e:
            raise FetchError(location.canonical, f"HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise FetchError(location.canonical, str(e.reason)) from e
        except (OSError, ValueError) as e:
            raise FetchError(location.canonical, str(e)) from e

        logger.debug(f"Downloaded {len(data)} bytes from {location}")
        return decode_utf8(data, location)


class MemorySource(ContentSource):
    """
    Serves documents held in memory.

    Keys are normalized to canonical locations, so "specs/a.yaml" and
    "./specs/x/../a.yaml" name the same document.
    """

    def __init__(self, documents: Optional[Dict[Union[str, Path, Location], str]] = None):
        self._documents: Dict[str, str] = {}
        for location, text in (documents or {}).items():
            self.add(location, text)

    def add(self, location: Union[str, Path, Location], text: str) -> Location:
        loc = Location.parse(location)
        self._documents[loc.canonical] = text
        return loc

    def fetch(self, location: Location) -> str:
        try:
            return self._documents[location.canonical]
        except KeyError:
            raise FetchError(location.canonical, "no such document") from None

    def __contains__(self, location: Union[str, Path, Location]) -> bool:
        return Location.parse(location).canonical in self._documents


class DefaultSource(ContentSource):
    """Dispatches to the http source for URLs and the file source otherwise."""

    def __init__(
        self,
        file_source: Optional[FileSource] = None,
        http_source: Optional[HttpSource] = None
    ):
        self.file_source = file_source or FileSource()
        self.http_source = http_source or HttpSource()

    @classmethod
    def from_config(cls, config: 'FetchConfig') -> 'DefaultSource':
        return cls(http_source=HttpSource.from_config(config))

    def fetch(self, location: Location) -> str:
        if location.is_remote:
            return self.http_source.fetch(location)
        return self.file_source.fetch(location)
