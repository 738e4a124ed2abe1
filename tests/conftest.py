"""
Shared pytest fixtures for the stitcher test suite.

Usage in tests:
    def test_files(spec_tree):
        root = spec_tree.write("openapi.yaml", {...})
        Stitcher().stitch(root)

    def test_memory(memory_source):
        memory_source.add("/virtual/a.yaml", "...")
        stitcher = Stitcher(source=memory_source)
        ...
        assert memory_source.fetches["/virtual/a.yaml"] == 1
"""

import pytest

from stitcher.config import ConfigManager
from stitcher.core.engine import ResolutionEngine
from stitcher.services.parser import DocumentParser
from stitcher.stitcher import Stitcher
from tests.factories import CountingSource, SpecTreeFactory


@pytest.fixture
def spec_tree(tmp_path):
    """Empty directory for writing fragment files."""
    return SpecTreeFactory(tmp_path)


@pytest.fixture
def multifolder_api(spec_tree):
    """spec_tree pre-populated with a sample API split across folders."""
    spec_tree.create_multifolder_api()
    return spec_tree


@pytest.fixture
def memory_source():
    """In-memory source that counts fetches per canonical location."""
    return CountingSource()


@pytest.fixture
def engine(memory_source):
    """Resolution engine reading from memory_source."""
    return ResolutionEngine(memory_source, DocumentParser())


@pytest.fixture
def memory_stitcher(memory_source):
    """Stitcher reading from memory_source."""
    return Stitcher(source=memory_source)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from ~/.stitcher and STITCHER_* variables."""
    user_dir = tmp_path / "home" / ".stitcher"
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", user_dir)
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", user_dir / "config.yaml")
    for name in ("STITCHER_TIMEOUT", "STITCHER_USER_AGENT", "STITCHER_FORMAT", "STITCHER_PROJECT_PATH"):
        monkeypatch.delenv(name, raising=False)
    return user_dir
