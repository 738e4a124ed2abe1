"""
Cache — Resolution cache and cycle tracker for one engine

Both structures are keyed by canonical location string and guarded by one
re-entrant lock. The engine holds that lock for a whole resolve call, so a
check followed by an insert for the same key is never interleaved with
another resolution.

    cache      canonical location -> fully resolved document
    resolving  canonical locations on the active fetch stack
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Set

from ..errors import CircularReferenceError
from .document import DocumentValue


class ResolutionCache:
    """
    Fully resolved external documents.

    Entries are stored only after their own resolution succeeded, so a
    failed stitch never leaves a partial document behind. No eviction.
    """

    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._entries: Dict[str, DocumentValue] = {}

    def get(self, key: str) -> Optional[DocumentValue]:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, document: DocumentValue) -> None:
        with self._lock:
            self._entries[key] = document

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._entries.keys())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class CycleTracker:
    """Canonical locations currently being resolved."""

    def __init__(self, lock: threading.RLock):
        self._lock = lock
        self._active: Set[str] = set()

    @contextmanager
    def track(self, key: str, reference: str) -> Iterator[None]:
        """
        Mark ``key`` as in progress for the duration of the block.

        Raises:
            CircularReferenceError: ``key`` is already in progress
        """
        with self._lock:
            if key in self._active:
                raise CircularReferenceError(reference, location=key)
            self._active.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._active.discard(key)

    def clear(self) -> None:
        with self._lock:
            self._active.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._active

    def __len__(self) -> int:
        with self._lock:
            return len(self._active)


class ResolutionState:
    """Cache and cycle tracker sharing one lock."""

    def __init__(self):
        self.lock = threading.RLock()
        self.cache = ResolutionCache(self.lock)
        self.resolving = CycleTracker(self.lock)

    def clear(self) -> None:
        """Empty both structures atomically."""
        with self.lock:
            self.cache.clear()
            self.resolving.clear()
