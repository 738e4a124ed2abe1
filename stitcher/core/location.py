"""
Location — Canonical identity of a document source

A location is either a filesystem path or an http(s) URL. Identity is the
canonical absolute string only:

    files  absolute, normalized path          /specs/core/errors.yaml
    URLs   scheme://host + normalized path    https://example.com/api/pet.yaml

So "./a/../b.yaml" and "b.yaml" seen from the same directory are the same
location, and the cache and cycle tracker can key on it safely.
"""

import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union
from urllib.parse import urlsplit, urlunsplit
from urllib.request import url2pathname


REMOTE_SCHEMES = ("http://", "https://")
FILE_SCHEME = "file://"


def is_absolute_url(spec: str) -> bool:
    """True for http:// and https:// references."""
    return spec.lower().startswith(REMOTE_SCHEMES)


@dataclass(frozen=True)
class Location:
    """A document source, compared and hashed by canonical string."""
    canonical: str
    is_remote: bool = field(default=False, compare=False)
    original: str = field(default="", compare=False)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def parse(cls, spec: Union[str, Path, 'Location']) -> 'Location':
        """Build a location from a path, URL string or existing Location."""
        if isinstance(spec, Location):
            return spec
        if isinstance(spec, Path):
            return cls.from_path(spec)
        if is_absolute_url(spec):
            return cls.from_url(spec)
        if spec.lower().startswith(FILE_SCHEME):
            return cls.from_path(url2pathname(urlsplit(spec).path), original=spec)
        return cls.from_path(spec)

    @classmethod
    def from_path(cls, path: Union[str, Path], original: str = "") -> 'Location':
        canonical = os.path.abspath(os.fspath(path))
        return cls(canonical=canonical, is_remote=False, original=original or os.fspath(path))

    @classmethod
    def for_directory(cls, directory: Union[str, Path]) -> 'Location':
        """
        A virtual document inside ``directory``.

        Used as the base when raw content is stitched: relative refs in it
        resolve against the directory itself.
        """
        canonical = os.path.join(os.path.abspath(os.fspath(directory)), "")
        return cls(canonical=canonical, is_remote=False, original=os.fspath(directory))

    @classmethod
    def from_url(cls, url: str) -> 'Location':
        parts = urlsplit(url)
        path = _normalize_url_path(parts.path)
        # Fragment never belongs to a location; the $ref splitter removes it
        canonical = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))
        return cls(canonical=canonical, is_remote=True, original=url)

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    @property
    def directory(self) -> str:
        """Directory part, the anchor for relative references."""
        if self.is_remote:
            parts = urlsplit(self.canonical)
            dir_path = parts.path[:parts.path.rfind("/") + 1] or "/"
            return urlunsplit((parts.scheme, parts.netloc, dir_path, "", ""))
        return os.path.dirname(self.canonical)

    def resolve(self, target: str) -> 'Location':
        """
        Resolve a $ref target relative to this location.

        Absolute URLs are used directly. Everything else is joined onto this
        location's directory and normalized.
        """
        if is_absolute_url(target):
            return Location.from_url(target)
        if target.lower().startswith(FILE_SCHEME):
            return Location.parse(target)

        if self.is_remote:
            if target.startswith("/"):
                parts = urlsplit(self.canonical)
                return Location.from_url(urlunsplit((parts.scheme, parts.netloc, "", "", "")) + target)
            return Location.from_url(self.directory + target)

        if os.path.isabs(target):
            return Location.from_path(target)
        return Location.from_path(os.path.join(self.directory, target), original=target)

    @property
    def name(self) -> str:
        """Last path segment (file name)."""
        if self.is_remote:
            return posixpath.basename(urlsplit(self.canonical).path)
        return os.path.basename(self.canonical)

    def __str__(self) -> str:
        return self.canonical


def _normalize_url_path(path: str) -> str:
    """Collapse . and .. segments, keeping a trailing slash."""
    if not path:
        return "/"
    normalized = posixpath.normpath(path)
    # posixpath keeps a leading '//' as-is; URLs never want that
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    if path.endswith("/") and normalized != "/":
        normalized += "/"
    return normalized
