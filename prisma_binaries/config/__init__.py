"""Configuration module for prisma-binaries.

Provides the BinariesConfig value and its YAML / environment loaders.
"""

from prisma_binaries.config.settings import (
    CLI_URL_ENV,
    ENGINE_URL_ENV,
    BinariesConfig,
    load_config,
    resolve_config,
)
from prisma_binaries.core.exceptions import ConfigError

__all__ = [
    "CLI_URL_ENV",
    "ENGINE_URL_ENV",
    "BinariesConfig",
    "ConfigError",
    "load_config",
    "resolve_config",
]
