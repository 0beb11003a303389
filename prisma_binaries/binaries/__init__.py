"""
Fetching of the Prisma binaries.

Available Components:
--------------------
- BinaryFetcher: Cache-checking fetcher for the CLI and engines
- fetch_all_engines / fetch_engine / fetch_cli: One-shot helpers
"""

from prisma_binaries.binaries.fetcher import (
    BinaryFetcher,
    engine_url_name,
    validate_target_dir,
    fetch_all_engines,
    fetch_engine,
    fetch_cli,
)
from prisma_binaries.versions import ENGINES

__all__ = [
    "BinaryFetcher",
    "ENGINES",
    "engine_url_name",
    "validate_target_dir",
    "fetch_all_engines",
    "fetch_engine",
    "fetch_cli",
]
