"""
Cross-process locking for binary downloads.

Two processes fetching the same artifact would otherwise both see a cache
miss and race to write the same destination. Each destination gets its own
lock file, so fetches of different artifacts never wait on each other. Lock
files live in a `.locks` directory beside the binaries and are left there
for reuse.

Usage:
    from prisma_binaries.core.locking import artifact_lock

    with artifact_lock(destination, timeout=300):
        if not destination.exists():
            download(url, destination)
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Union

from filelock import FileLock, Timeout

from prisma_binaries.core.exceptions import FilesystemError, LockTimeout

logger = logging.getLogger(__name__)

# Engines are large; give a concurrent download time to finish.
DEFAULT_LOCK_TIMEOUT = 300

LOCK_DIR_NAME = ".locks"

LOCK_SUFFIX = ".lock"


def lock_path_for(destination: Union[str, Path]) -> Path:
    """Get the lock file guarding a destination."""
    destination = Path(destination)
    return destination.parent / LOCK_DIR_NAME / (destination.name + LOCK_SUFFIX)


@contextmanager
def artifact_lock(
    destination: Union[str, Path], timeout: float = DEFAULT_LOCK_TIMEOUT
):
    """
    Acquire the download lock for a destination path.

    Creates the destination's parent and lock directories if needed.

    Args:
        destination: Final path of the artifact
        timeout: Maximum wait time in seconds (default: 300)

    Yields:
        None

    Raises:
        LockTimeout: If the lock can't be acquired within timeout
        FilesystemError: If the lock directory cannot be created
    """
    lock_path = lock_path_for(destination)
    try:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"could not create directory {lock_path.parent}: {e}"
        ) from e

    lock = FileLock(lock_path, timeout=timeout)

    try:
        with lock:
            logger.debug(f"Acquired download lock: {lock_path}")
            yield
            logger.debug(f"Released download lock: {lock_path}")
    except Timeout as e:
        logger.error(
            f"Could not acquire download lock for {destination} after {timeout}s. "
            "Another process may be downloading this binary."
        )
        raise LockTimeout(
            f"Could not acquire download lock for {destination} after {timeout}s"
        ) from e


__all__ = [
    "DEFAULT_LOCK_TIMEOUT",
    "artifact_lock",
    "lock_path_for",
]
