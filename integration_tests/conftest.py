"""Pytest configuration for integration tests."""

import pytest


# Flows in this directory touch the file system and the database together
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with a local store folder and a database path."""
    (tmp_path / "local").mkdir()
    return tmp_path
