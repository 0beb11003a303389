"""
prisma-binaries: fetch and cache the Prisma CLI and engine binaries.

Example:
    from prisma_binaries import BinaryFetcher, global_cache_dir

    paths = BinaryFetcher().fetch_all_engines(global_cache_dir())
"""

from prisma_binaries.binaries import BinaryFetcher
from prisma_binaries.config import BinariesConfig, load_config, resolve_config
from prisma_binaries.core.directory import global_cache_dir, global_temp_dir
from prisma_binaries.core.exceptions import PrismaBinariesError
from prisma_binaries.versions import ENGINE_VERSION, ENGINES, PRISMA_VERSION

__all__ = [
    "BinaryFetcher",
    "BinariesConfig",
    "load_config",
    "resolve_config",
    "global_cache_dir",
    "global_temp_dir",
    "PrismaBinariesError",
    "ENGINE_VERSION",
    "ENGINES",
    "PRISMA_VERSION",
]
