"""
Fetching of the Prisma CLI and engine binaries.

A binary is downloaded only when nothing exists at its local path yet; the
existence of the file is the whole cache signal. Fetches run one after the
other and stop at the first failure, leaving binaries fetched so far in place.

Usage:
    from prisma_binaries.binaries import BinaryFetcher
    from prisma_binaries.core.directory import global_cache_dir

    fetcher = BinaryFetcher()
    paths = fetcher.fetch_all_engines(global_cache_dir())
    print(paths["query-engine"])
"""

import logging
import time
from pathlib import Path
from typing import Dict, Optional, Union

from prisma_binaries.config.settings import BinariesConfig
from prisma_binaries.core.directory import artifact_path, cli_binary_name
from prisma_binaries.core.download import download
from prisma_binaries.core.exceptions import (
    FetchError,
    PrismaBinariesError,
    ValidationError,
)
from prisma_binaries.core.locking import DEFAULT_LOCK_TIMEOUT, artifact_lock
from prisma_binaries.core.platform import binary_name_with_ssl, platform_name
from prisma_binaries.versions import ENGINES

logger = logging.getLogger(__name__)

# The query engine is published as "prisma" in the remote store.
_URL_NAMES = {"query-engine": "prisma"}


def engine_url_name(artifact: str) -> str:
    """Get the name an engine is published under in the remote store."""
    return _URL_NAMES.get(artifact, artifact)


def validate_target_dir(target_dir: Union[str, Path, None]) -> Path:
    """
    Check that a target directory was given and is absolute.

    Raises:
        ValidationError: If target_dir is empty or relative
    """
    if target_dir is None or str(target_dir) == "":
        raise ValidationError("target directory must be provided")

    path = Path(target_dir)
    if not path.is_absolute():
        raise ValidationError(f"target directory must be absolute: {target_dir}")

    return path


class BinaryFetcher:
    """
    Downloads the Prisma binaries into a directory on cache miss.

    Attributes:
        config: URL templates, versions and request timeout
        lock_timeout: Seconds to wait for another process downloading the
            same binary
    """

    def __init__(
        self,
        config: Optional[BinariesConfig] = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ):
        """
        Initialize the fetcher.

        Args:
            config: Configuration to use (default: defaults plus the
                PRISMA_CLI_URL / PRISMA_ENGINE_URL environment variables)
            lock_timeout: Maximum wait for the per-binary download lock
        """
        self.config = config if config is not None else BinariesConfig.from_env()
        self.lock_timeout = lock_timeout

    def fetch_all_engines(self, target_dir: Union[str, Path]) -> Dict[str, Path]:
        """
        Fetch the CLI and every engine the generator needs.

        Args:
            target_dir: Absolute directory to place the binaries in

        Returns:
            Mapping of artifact name ('cli', 'query-engine', ...) to local path

        Raises:
            ValidationError: If target_dir is empty or not absolute
            FetchError: On the first binary that could not be fetched
        """
        target_dir = validate_target_dir(target_dir)

        paths = {"cli": self.fetch_cli(target_dir)}
        for engine in ENGINES:
            paths[engine] = self.fetch_engine(engine, target_dir)

        return paths

    def fetch_engine(
        self,
        name: str,
        target_dir: Union[str, Path],
        binary_name: Optional[str] = None,
    ) -> Path:
        """
        Fetch one engine for the running platform.

        Args:
            name: One of ENGINES
            target_dir: Directory to place the binary in
            binary_name: Platform binary suffix (default: detected)

        Returns:
            Path to the engine binary

        Raises:
            ValidationError: If name is not a known engine
            FetchError: If the download fails
        """
        if name not in ENGINES:
            raise ValidationError(
                f"unknown engine {name!r}, expected one of: {', '.join(ENGINES)}"
            )

        return self.fetch_artifact(
            target_dir, name, binary_name or binary_name_with_ssl()
        )

    def fetch_artifact(
        self, target_dir: Union[str, Path], artifact: str, binary_name: str
    ) -> Path:
        """
        Fetch an engine artifact unless it is already present.

        Args:
            target_dir: Directory to place the binary in
            artifact: Artifact name, e.g. 'migration-engine'
            binary_name: Platform binary suffix, e.g. 'debian-openssl-1.1.x'

        Returns:
            target_dir/prisma-<artifact>-<binary_name>

        Raises:
            FetchError: If the download fails
        """
        logger.debug(f"checking {artifact}...")

        to = artifact_path(target_dir, artifact, binary_name)
        url = self.config.format_engine_url(binary_name, engine_url_name(artifact))

        return self._fetch(artifact, url, to)

    def fetch_cli(
        self, target_dir: Union[str, Path], platform: Optional[str] = None
    ) -> Path:
        """
        Fetch the Prisma CLI unless it is already present.

        Args:
            target_dir: Directory to place the binary in
            platform: Platform tag (default: detected)

        Returns:
            Path to the CLI binary

        Raises:
            FetchError: If the download fails
        """
        platform = platform or platform_name()

        to = Path(target_dir) / cli_binary_name(platform)
        url = self.config.format_cli_url(platform)

        return self._fetch("prisma cli", url, to)

    def _fetch(self, label: str, url: str, to: Path) -> Path:
        if to.exists():
            logger.debug(f"{to} is cached")
            return to

        with artifact_lock(to, timeout=self.lock_timeout):
            # Another process may have finished while we waited.
            if to.exists():
                logger.debug(f"{to} was fetched by another process")
                return to

            logger.debug(f"{label} is missing, downloading...")

            start = time.monotonic()
            try:
                download(url, to, timeout=self.config.timeout)
            except PrismaBinariesError as e:
                raise FetchError(url, to, str(e)) from e

            logger.debug(f"download() took {time.monotonic() - start:.2f}s")

        logger.debug(f"{label} done")
        return to


def fetch_all_engines(
    target_dir: Union[str, Path], config: Optional[BinariesConfig] = None
) -> Dict[str, Path]:
    """Fetch the CLI and all engines with a one-off BinaryFetcher."""
    return BinaryFetcher(config).fetch_all_engines(target_dir)


def fetch_engine(
    name: str, target_dir: Union[str, Path], config: Optional[BinariesConfig] = None
) -> Path:
    """Fetch a single engine with a one-off BinaryFetcher."""
    return BinaryFetcher(config).fetch_engine(name, target_dir)


def fetch_cli(
    target_dir: Union[str, Path], config: Optional[BinariesConfig] = None
) -> Path:
    """Fetch the CLI with a one-off BinaryFetcher."""
    return BinaryFetcher(config).fetch_cli(target_dir)


__all__ = [
    "BinaryFetcher",
    "engine_url_name",
    "validate_target_dir",
    "fetch_all_engines",
    "fetch_engine",
    "fetch_cli",
]
