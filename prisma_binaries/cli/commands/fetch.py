"""
Fetch command implementation.

Downloads the Prisma CLI and engines that are not cached yet.
"""

import logging
from dataclasses import replace
from pathlib import Path

from prisma_binaries.binaries import BinaryFetcher, validate_target_dir
from prisma_binaries.config import resolve_config
from prisma_binaries.config.settings import BinariesConfig
from prisma_binaries.core.directory import global_cache_dir, global_temp_dir

logger = logging.getLogger(__name__)


def resolve_target_dir(args, config: BinariesConfig) -> Path:
    """
    Pick the directory to fetch into.

    Args:
        args: Parsed arguments with dir/temp fields
        config: Effective configuration (its CLI version names the directory)

    Returns:
        Absolute target directory

    Raises:
        CacheDirError: If the user cache directory is needed but unknown
    """
    if args.dir:
        return Path(args.dir).expanduser().resolve()
    if args.temp:
        return global_temp_dir(config.cli_version)
    return global_cache_dir(config.cli_version)


def run(args) -> int:
    """
    Run the fetch command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    config = resolve_config(args.config)
    if args.timeout is not None:
        config = replace(config, timeout=args.timeout)

    target_dir = resolve_target_dir(args, config)
    fetcher = BinaryFetcher(config)

    logger.info(f"Fetching Prisma binaries into {target_dir}")

    if args.cli_only:
        paths = {"cli": fetcher.fetch_cli(validate_target_dir(target_dir))}
    elif args.engine:
        target_dir = validate_target_dir(target_dir)
        paths = {"cli": fetcher.fetch_cli(target_dir)}
        for engine in args.engine:
            paths[engine] = fetcher.fetch_engine(engine, target_dir)
    else:
        paths = fetcher.fetch_all_engines(target_dir)

    for name, path in paths.items():
        print(f"{name}: {path}")

    return 0
