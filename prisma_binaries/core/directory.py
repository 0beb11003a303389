"""
Directory resolution for prisma-binaries.

Binaries are stored per CLI version under a fixed sub-path of either the OS
temp directory or the OS user cache directory:

    <root>/prisma/prisma-python-binaries/<version>/prisma-<artifact>-<suffix>

Changing the version therefore yields a fresh directory; old directories are
never removed.
"""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional, Union

from prisma_binaries.core.exceptions import CacheDirError
from prisma_binaries.core.platform import platform_name
from prisma_binaries.versions import PRISMA_VERSION

BINARIES_NAMESPACE = "prisma-python"


def binaries_dir_name(version: str = PRISMA_VERSION) -> Path:
    """
    Get the versioned sub-path shared by the temp and cache roots.

    Example:
        >>> binaries_dir_name("2.0.0")
        PosixPath('prisma/prisma-python-binaries/2.0.0')
    """
    return Path("prisma") / f"{BINARIES_NAMESPACE}-binaries" / version


def global_temp_dir(version: str = PRISMA_VERSION) -> Path:
    """
    Get the binaries directory rooted at the OS temp directory.

    Returns:
        Path: e.g. /tmp/prisma/prisma-python-binaries/<version>
    """
    return Path(tempfile.gettempdir()) / binaries_dir_name(version)


def user_cache_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the platform-specific user cache directory.

    Args:
        environ: Environment to read (default: os.environ).

    Returns:
        Path: The user cache root.
            - Windows: %LocalAppData%
            - macOS: ~/Library/Caches
            - Linux/other Unix: $XDG_CACHE_HOME or ~/.cache

    Raises:
        CacheDirError: If the directory cannot be determined from the
            environment.
    """
    env = os.environ if environ is None else environ
    name = platform_name()

    if name == "windows":
        local_app_data = env.get("LocalAppData") or env.get("LOCALAPPDATA")
        if not local_app_data:
            raise CacheDirError(
                "could not read user cache dir: %LocalAppData% is not defined"
            )
        return Path(local_app_data)

    home = env.get("HOME")

    if name == "darwin":
        if not home:
            raise CacheDirError("could not read user cache dir: $HOME is not defined")
        return Path(home) / "Library" / "Caches"

    xdg_cache = env.get("XDG_CACHE_HOME")
    if xdg_cache:
        if not os.path.isabs(xdg_cache):
            raise CacheDirError(
                f"could not read user cache dir: path in $XDG_CACHE_HOME is "
                f"relative: {xdg_cache}"
            )
        return Path(xdg_cache)

    if not home:
        raise CacheDirError(
            "could not read user cache dir: neither $XDG_CACHE_HOME nor $HOME "
            "are defined"
        )
    return Path(home) / ".cache"


def global_cache_dir(
    version: str = PRISMA_VERSION, environ: Optional[Mapping[str, str]] = None
) -> Path:
    """
    Get the binaries directory rooted at the OS user cache directory.

    Raises:
        CacheDirError: If the user cache directory cannot be determined.

    Example:
        >>> global_cache_dir()
        PosixPath('/home/user/.cache/prisma/prisma-python-binaries/2.0.0-alpha.443')
    """
    return user_cache_dir(environ) / binaries_dir_name(version)


def artifact_path(
    target_dir: Union[str, Path], artifact: str, binary_name: str
) -> Path:
    """
    Get the local path of an artifact.

    Args:
        target_dir: Directory holding the binaries
        artifact: Artifact name ('cli', 'query-engine', ...)
        binary_name: Platform binary suffix ('darwin', 'debian-openssl-1.1.x', ...)

    Returns:
        target_dir/prisma-<artifact>-<binary_name>
    """
    return Path(target_dir) / f"prisma-{artifact}-{binary_name}"


def cli_binary_name(platform: Optional[str] = None) -> str:
    """Get the local file name of the CLI, e.g. 'prisma-cli-linux'."""
    return f"prisma-cli-{platform or platform_name()}"


__all__ = [
    "BINARIES_NAMESPACE",
    "binaries_dir_name",
    "global_temp_dir",
    "user_cache_dir",
    "global_cache_dir",
    "artifact_path",
    "cli_binary_name",
]
