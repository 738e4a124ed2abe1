"""
Tests for Cache — Resolution cache and cycle tracker
"""

import pytest

from stitcher.core.cache import ResolutionState
from stitcher.errors import CircularReferenceError


class TestResolutionCache:

    def test_put_and_get(self):
        state = ResolutionState()
        state.cache.put("/a.yaml", {"v": 1})

        assert state.cache.get("/a.yaml") == {"v": 1}
        assert "/a.yaml" in state.cache
        assert len(state.cache) == 1
        assert state.cache.keys() == ["/a.yaml"]

    def test_missing_key(self):
        state = ResolutionState()
        assert state.cache.get("/nope.yaml") is None
        assert "/nope.yaml" not in state.cache

    def test_cached_none_is_still_present(self):
        """A document whose value is null is a real entry."""
        state = ResolutionState()
        state.cache.put("/null.yaml", None)
        assert "/null.yaml" in state.cache


class TestCycleTracker:

    def test_track_scoped(self):
        """Key is present only inside the block."""
        state = ResolutionState()
        with state.resolving.track("/a.yaml", "./a.yaml"):
            assert "/a.yaml" in state.resolving
        assert "/a.yaml" not in state.resolving

    def test_reentry_raises(self):
        state = ResolutionState()
        with state.resolving.track("/a.yaml", "./a.yaml"):
            with pytest.raises(CircularReferenceError) as exc_info:
                with state.resolving.track("/a.yaml", "../x/a.yaml"):
                    pass
        assert exc_info.value.reference == "../x/a.yaml"
        assert exc_info.value.location == "/a.yaml"

    def test_removed_on_exception(self):
        """The key is released even when the block fails."""
        state = ResolutionState()
        with pytest.raises(RuntimeError):
            with state.resolving.track("/a.yaml", "./a.yaml"):
                raise RuntimeError("boom")
        assert len(state.resolving) == 0

    def test_nested_distinct_keys(self):
        state = ResolutionState()
        with state.resolving.track("/a.yaml", "a"):
            with state.resolving.track("/b.yaml", "b"):
                assert len(state.resolving) == 2
            assert len(state.resolving) == 1


class TestResolutionState:

    def test_clear_empties_both(self):
        state = ResolutionState()
        state.cache.put("/a.yaml", 1)
        with state.resolving.track("/b.yaml", "b"):
            state.clear()
            assert len(state.cache) == 0
            assert len(state.resolving) == 0

    def test_structures_share_one_lock(self):
        state = ResolutionState()
        assert state.cache._lock is state.lock
        assert state.resolving._lock is state.lock
