"""
Centralized exception hierarchy for prisma-binaries.

Every error raised by the fetch pipeline derives from PrismaBinariesError and
carries the URL or path needed to diagnose it without retrying.
"""

from pathlib import Path
from typing import Union


# ============================================================================
# Base Exceptions
# ============================================================================


class PrismaBinariesError(Exception):
    """Base exception for all prisma-binaries errors."""

    pass


class ValidationError(PrismaBinariesError):
    """Raised when caller input is rejected before any I/O takes place."""

    pass


class CacheDirError(PrismaBinariesError):
    """Raised when the OS user cache directory cannot be determined."""

    pass


class ConfigError(PrismaBinariesError):
    """Configuration file parsing or validation error."""

    pass


class LockTimeout(PrismaBinariesError):
    """Raised when the download lock for a destination cannot be acquired."""

    pass


# ============================================================================
# Download Exceptions
# ============================================================================


class DownloadError(PrismaBinariesError):
    """Raised when an artifact cannot be retrieved from the remote store."""

    pass


class HTTPStatusError(DownloadError):
    """Raised when the remote store answers with anything but 200 OK."""

    def __init__(self, url: str, status_code: int, body: str = ""):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"received code {status_code} from {url}: {body!r}")


class DecompressionError(DownloadError):
    """Raised when the response body is not a valid gzip stream."""

    pass


class FilesystemError(PrismaBinariesError):
    """Raised when a directory or file cannot be created or written."""

    pass


# ============================================================================
# Orchestration Exceptions
# ============================================================================


class FetchError(PrismaBinariesError):
    """Raised when fetching a single artifact fails.

    The underlying error is available as ``__cause__``.
    """

    def __init__(self, url: str, destination: Union[str, Path], reason: str):
        self.url = url
        self.destination = Path(destination)
        super().__init__(f"could not download {url} to {destination}: {reason}")


__all__ = [
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
