"""
Test Data Factory — Multi-file spec trees for stitcher tests

Writes fragment files under pytest's tmp_path so tests exercise real
relative-path resolution across folders.

Usage:
    def test_something(spec_tree):
        spec_tree.write("api/openapi.yaml", {"x": {"$ref": "../core/x.yaml"}})
        spec_tree.write("core/x.yaml", {"type": "string"})
        result = Stitcher().resolve(spec_tree.path("api/openapi.yaml"))
"""

import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from stitcher.core.location import Location
from stitcher.services.sources import MemorySource


class SpecTreeFactory:
    """Creates fragment files inside an isolated directory."""

    def __init__(self, tmp_path: Path):
        self.root = Path(tmp_path) / "specs"
        self.root.mkdir(parents=True, exist_ok=True)

    def path(self, relative: str) -> Path:
        return self.root / relative

    def location(self, relative: str) -> Location:
        return Location.from_path(self.path(relative))

    def write(self, relative: str, content: Union[str, Dict[str, Any], List[Any]]) -> Path:
        """Write a fragment. Dicts and lists are dumped as YAML."""
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        if not isinstance(content, str):
            content = yaml.safe_dump(content, sort_keys=False)
        target.write_text(content, encoding="utf-8")
        return target

    def write_bytes(self, relative: str, data: bytes) -> Path:
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target

    def create_multifolder_api(self) -> Path:
        """
        Sample API split across folders, with nested relative refs.

        api/openapi.yaml -> api/paths/pets.yaml -> core/schemas.yaml
                         -> core/errors.yaml  (from two places: a diamond)
        """
        self.write("core/errors.yaml", {
            "ApiError": {
                "type": "object",
                "properties": {
                    "code": {"type": "integer"},
                    "message": {"type": "string"},
                },
            },
        })
        self.write("core/schemas.yaml", {
            "Pet": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "tag": {"$ref": "#/Tag"},
                },
            },
            "Tag": {"type": "string"},
        })
        self.write("api/paths/pets.yaml", {
            "get": {
                "responses": {
                    "200": {"schema": {"$ref": "../../core/schemas.yaml#/Pet"}},
                    "default": {"schema": {"$ref": "../../core/errors.yaml#/ApiError"}},
                },
            },
        })
        return self.write("api/openapi.yaml", {
            "openapi": "3.0.3",
            "info": {"title": "Zephyr Pets", "version": "1.0.0"},
            "paths": {"/pets": {"$ref": "./paths/pets.yaml"}},
            "components": {
                "schemas": {
                    "Error": {"$ref": "../core/errors.yaml#/ApiError"},
                    "Local": {"$ref": "#/components/schemas/Error"},
                },
            },
        })


class CountingSource(MemorySource):
    """MemorySource that records every fetch."""

    def __init__(self, documents=None):
        super().__init__(documents)
        self.fetches: Counter = Counter()

    def fetch(self, location: Location) -> str:
        self.fetches[location.canonical] += 1
        return super().fetch(location)

    @property
    def total_fetches(self) -> int:
        return sum(self.fetches.values())


class SlowSource(CountingSource):
    """CountingSource that sleeps on every fetch to widen race windows."""

    def __init__(self, documents=None, delay: float = 0.01):
        super().__init__(documents)
        self.delay = delay

    def fetch(self, location: Location) -> str:
        time.sleep(self.delay)
        return super().fetch(location)
