"""
Pytest configuration and shared fixtures for prisma-binaries tests.
"""

import gzip

import pytest

from prisma_binaries.config.settings import BinariesConfig
from prisma_binaries.core.platform import clear_platform_cache

CLI_URL = "https://cli.example.com/%s-%s-%s.gz"
ENGINE_URL = "https://engines.example.com/master/%s/%s/%s.gz"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_platform_cache():
    """Drop cached platform detection between tests."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture(autouse=True)
def _no_url_overrides(monkeypatch):
    """Keep the developer's PRISMA_*_URL variables out of the tests."""
    monkeypatch.delenv("PRISMA_CLI_URL", raising=False)
    monkeypatch.delenv("PRISMA_ENGINE_URL", raising=False)


@pytest.fixture
def config() -> BinariesConfig:
    """Configuration pointing at mock hosts with short versions."""
    return BinariesConfig(
        cli_url=CLI_URL,
        engine_url=ENGINE_URL,
        cli_version="1.2.3",
        engine_version="abc123",
    )


@pytest.fixture
def gzipped():
    """Return a helper that gzip-compresses bytes or text."""

    def _gzipped(payload) -> bytes:
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return gzip.compress(payload)

    return _gzipped
