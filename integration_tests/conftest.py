"""Pytest configuration for integration tests."""

import pytest
from click.testing import CliRunner

from repwise.cli import main


def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def data_dir(tmp_path):
    """A data directory that does not exist yet."""
    return tmp_path / "data"


@pytest.fixture
def cli(data_dir):
    """Run repwise against ``data_dir``, failing the test on a non-zero exit."""
    runner = CliRunner()

    def _run(*args):
        result = runner.invoke(main, ["--data-dir", str(data_dir), *args])
        assert result.exit_code == 0, result.output
        return result

    return _run
