"""
Tests for Location — Canonical identity and relative resolution
"""

import os
from pathlib import Path

from stitcher.core.location import Location, is_absolute_url


class TestCanonicalForm:
    """Equality is by canonical string only."""

    def test_relative_and_absolute_paths_equal(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert Location.parse("spec.yaml") == Location.parse(str(Path.cwd() / "spec.yaml"))

    def test_dot_segments_collapsed(self):
        assert Location.parse("/a/b/../c/./d.yaml").canonical == os.path.abspath("/a/c/d.yaml")

    def test_path_objects_accepted(self, tmp_path):
        assert Location.parse(tmp_path / "x.yaml") == Location.from_path(str(tmp_path / "x.yaml"))

    def test_hash_uses_canonical(self):
        """Different spellings land in one set entry."""
        locations = {Location.parse("/a/b.yaml"), Location.parse("/a/c/../b.yaml")}
        assert len(locations) == 1

    def test_url_normalized(self):
        location = Location.parse("HTTPS://Example.COM/api/v1/../schemas/./pet.yaml")
        assert location.canonical == "https://example.com/api/schemas/pet.yaml"
        assert location.is_remote

    def test_url_query_kept(self):
        location = Location.parse("https://example.com/spec?format=yaml")
        assert location.canonical == "https://example.com/spec?format=yaml"

    def test_url_without_path(self):
        assert Location.parse("https://example.com").canonical == "https://example.com/"

    def test_file_url_becomes_path(self):
        location = Location.parse("file:///tmp/specs/a.yaml")
        assert not location.is_remote
        assert location == Location.from_path("/tmp/specs/a.yaml")

    def test_original_spelling_not_compared(self):
        a = Location.from_path("/x/y.yaml", original="y.yaml")
        b = Location.from_path("/x/y.yaml", original="./y.yaml")
        assert a == b
        assert str(a) == "/x/y.yaml"


class TestResolution:
    """Resolving $ref targets against a containing document."""

    def test_sibling_file(self):
        base = Location.from_path("/specs/api/openapi.yaml")
        assert base.resolve("./pets.yaml") == Location.from_path("/specs/api/pets.yaml")

    def test_parent_folder(self):
        base = Location.from_path("/specs/api/paths/pets.yaml")
        assert base.resolve("../../core/errors.yaml") == Location.from_path("/specs/core/errors.yaml")

    def test_absolute_path_target(self):
        base = Location.from_path("/specs/api/openapi.yaml")
        assert base.resolve("/other/x.yaml") == Location.from_path("/other/x.yaml")

    def test_url_relative_target(self):
        base = Location.parse("https://example.com/api/v1/openapi.yaml")
        assert base.resolve("../common/errors.yaml").canonical == "https://example.com/api/common/errors.yaml"

    def test_url_root_relative_target(self):
        base = Location.parse("https://example.com/api/v1/openapi.yaml")
        assert base.resolve("/shared/x.yaml").canonical == "https://example.com/shared/x.yaml"

    def test_absolute_url_target_from_file(self):
        base = Location.from_path("/specs/openapi.yaml")
        target = base.resolve("https://example.com/pet.yaml")
        assert target.is_remote
        assert target.canonical == "https://example.com/pet.yaml"

    def test_directory_base(self, tmp_path):
        """A directory base resolves refs inside the directory itself."""
        base = Location.for_directory(tmp_path)
        assert base.resolve("x.yaml") == Location.from_path(tmp_path / "x.yaml")

    def test_directory_property(self):
        assert Location.from_path("/a/b/c.yaml").directory == os.path.abspath("/a/b")
        assert Location.parse("https://h.io/a/b.yaml").directory == "https://h.io/a/"

    def test_name(self):
        assert Location.from_path("/a/b/c.yaml").name == "c.yaml"
        assert Location.parse("https://h.io/a/b.yaml").name == "b.yaml"


class TestIsAbsoluteUrl:

    def test_schemes(self):
        assert is_absolute_url("http://x/y")
        assert is_absolute_url("https://x/y")
        assert not is_absolute_url("./x.yaml")
        assert not is_absolute_url("file:///x.yaml")
        assert not is_absolute_url(str(Path("x")))
