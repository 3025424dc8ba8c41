"""Tests for the test-suite configuration itself."""

import fnmatch
from pathlib import Path

UNIT_TESTS_DIR = Path(__file__).parent


class TestCollectionConfig:
    """Make sure every unit test directory is collected."""

    def test_norecursedirs_is_configured(self, pytestconfig):
        """Test that pyproject.toml overrides the default norecursedirs."""
        patterns = pytestconfig.getini("norecursedirs")

        assert "build" not in patterns

    def test_unit_test_directories_not_excluded(self, pytestconfig):
        """Test that no unit test directory matches a norecursedirs pattern."""
        patterns = pytestconfig.getini("norecursedirs")
        directories = [p.name for p in UNIT_TESTS_DIR.iterdir() if p.is_dir() and p.name != "__pycache__"]

        assert "build" in directories
        for name in directories:
            matches = [pattern for pattern in patterns if fnmatch.fnmatch(name, pattern)]
            assert matches == [], f"tests/unit/{name} is excluded by {matches}"
