"""
Paths command implementation.

Shows the detected platform names and where each binary is expected.
"""

import logging

from prisma_binaries.config import resolve_config
from prisma_binaries.core.directory import (
    artifact_path,
    cli_binary_name,
    global_cache_dir,
    global_temp_dir,
)
from prisma_binaries.core.exceptions import CacheDirError
from prisma_binaries.core.platform import binary_name_with_ssl, platform_name
from prisma_binaries.versions import ENGINES

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the paths command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = resolve_config(args.config)
    platform = platform_name()
    binary_name = binary_name_with_ssl()

    print(f"Platform:       {platform}")
    print(f"Engine binary:  {binary_name}")
    print(f"CLI version:    {config.cli_version}")
    print(f"Engine version: {config.engine_version}")

    temp_dir = global_temp_dir(config.cli_version)
    print(f"Temp dir:       {temp_dir}")

    try:
        cache_dir = global_cache_dir(config.cli_version)
    except CacheDirError as e:
        logger.warning(f"{e}")
        print("Cache dir:      (unavailable)")
        cache_dir = temp_dir
    else:
        print(f"Cache dir:      {cache_dir}")

    print()
    print("Binaries:")
    cli_path = cache_dir / cli_binary_name(platform)
    print(f"  cli: {cli_path}{'' if cli_path.exists() else ' (missing)'}")
    for engine in ENGINES:
        path = artifact_path(cache_dir, engine, binary_name)
        print(f"  {engine}: {path}{'' if path.exists() else ' (missing)'}")

    return 0
