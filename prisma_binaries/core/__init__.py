"""
Core functionality for prisma-binaries.

This package contains the foundational modules the fetcher depends on:
platform identification, directory resolution, downloading and locking.
"""

from .directory import (
    BINARIES_NAMESPACE,
    binaries_dir_name,
    global_temp_dir,
    user_cache_dir,
    global_cache_dir,
    artifact_path,
    cli_binary_name,
)

from .download import (
    EXECUTABLE_MODE,
    download,
)

from .locking import (
    DEFAULT_LOCK_TIMEOUT,
    artifact_lock,
)

from .platform import (
    platform_name,
    binary_name_with_ssl,
    clear_platform_cache,
)

from .exceptions import (
    PrismaBinariesError,
    ValidationError,
    CacheDirError,
    ConfigError,
    LockTimeout,
    DownloadError,
    HTTPStatusError,
    DecompressionError,
    FilesystemError,
    FetchError,
)

__all__ = [
    "BINARIES_NAMESPACE",
    "binaries_dir_name",
    "global_temp_dir",
    "user_cache_dir",
    "global_cache_dir",
    "artifact_path",
    "cli_binary_name",
    "EXECUTABLE_MODE",
    "download",
    "DEFAULT_LOCK_TIMEOUT",
    "artifact_lock",
    "platform_name",
    "binary_name_with_ssl",
    "clear_platform_cache",
    "PrismaBinariesError",
    "ValidationError",
    "CacheDirError",
    "ConfigError",
    "LockTimeout",
    "DownloadError",
    "HTTPStatusError",
    "DecompressionError",
    "FilesystemError",
    "FetchError",
]
