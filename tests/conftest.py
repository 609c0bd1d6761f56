"""
Test configuration and fixtures for the oasmodel project.

This file is the root pytest configuration file. It imports the shared
fixtures so they are available to all tests and isolates every test from
the global application configuration.
"""

import pytest

from tests.fixtures.base import (  # noqa: F401
    isolated_config,
    package_logger,
    petstore_path,
    temp_dir,
    write_spec,
)


@pytest.fixture(autouse=True)
def _isolate_config(isolated_config):
    """Apply configuration isolation to every test."""
    yield


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "cli: mark a test that tests CLI functionality")
