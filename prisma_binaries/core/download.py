"""
Network download of gzip-compressed binaries.

The response body is decompressed while streaming into a temporary sibling
file, which is then renamed over the destination. A reader of the
destination therefore sees either nothing or a complete binary.
"""

import gzip
import logging
import os
import time
import zlib
from pathlib import Path
from typing import Optional, Union

import requests
from requests.exceptions import RequestException
from urllib3.exceptions import HTTPError as TransportError

from prisma_binaries.core.exceptions import (
    DecompressionError,
    DownloadError,
    FilesystemError,
    HTTPStatusError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Downloaded artifacts must be directly executable by anyone.
EXECUTABLE_MODE = 0o777

CHUNK_SIZE = 8192

TEMP_SUFFIX = ".tmp"


def temp_path_for(destination: Path) -> Path:
    """Get the sibling path the body is streamed into before publishing."""
    return destination.with_name(destination.name + TEMP_SUFFIX)


def download(
    url: str,
    destination: Union[str, Path],
    timeout: Optional[float] = None,
) -> Path:
    """
    Download a gzip-compressed file, decompress it and install it atomically.

    Args:
        url: URL of the .gz artifact
        destination: Final path of the decompressed binary
        timeout: Request timeout in seconds (None waits forever)

    Returns:
        Path to the installed binary

    Raises:
        ValidationError: If URL or destination is empty
        FilesystemError: If the directory or file cannot be written
        DownloadError: If the request fails
        HTTPStatusError: If the server answers with a status other than 200
        DecompressionError: If the body is not a valid gzip stream or
            decompresses to nothing

    Example:
        >>> download(
        ...     "https://example.com/master/abc/darwin/prisma.gz",
        ...     Path("/tmp/bin/prisma-query-engine-darwin"),
        ... )
    """
    if not url:
        raise ValidationError("URL cannot be empty")

    if not destination:
        raise ValidationError("Destination path cannot be empty")

    destination = Path(destination)

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(
            f"could not create directory {destination.parent}: {e}"
        ) from e

    logger.info(f"Downloading {url}")
    start_time = time.monotonic()

    try:
        response = requests.get(url, stream=True, timeout=timeout)
    except RequestException as e:
        raise DownloadError(f"could not get {url}: {e}") from e

    with response:
        if response.status_code != 200:
            raise HTTPStatusError(url, response.status_code, response.text)

        temp_path = temp_path_for(destination)
        try:
            _write_decompressed(response, temp_path, url)
            os.replace(temp_path, destination)
        except DownloadError:
            _discard(temp_path)
            raise
        except OSError as e:
            _discard(temp_path)
            raise FilesystemError(
                f"could not write {destination} from {url}: {e}"
            ) from e

    elapsed = time.monotonic() - start_time
    logger.info(f"Download complete: {destination} ({elapsed:.1f}s)")
    return destination


def _write_decompressed(
    response: requests.Response, temp_path: Path, url: str
) -> None:
    """
    Stream the gunzipped response body into temp_path.

    An empty body is not a gzip stream, but GzipFile reads it as zero
    members without complaint. Since a present file is treated as cached,
    an artifact that decompresses to nothing is rejected rather than
    published.
    """
    # Decompress the raw bytes ourselves even if the server labels the body
    # with a Content-Encoding.
    response.raw.decode_content = False

    written = 0
    fd = os.open(temp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, EXECUTABLE_MODE)
    with open(fd, "wb") as out:
        # umask applies on creation
        os.chmod(temp_path, EXECUTABLE_MODE)
        try:
            with gzip.GzipFile(fileobj=response.raw, mode="rb") as gz:
                while True:
                    chunk = gz.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    written += len(chunk)
        except (gzip.BadGzipFile, EOFError, zlib.error) as e:
            raise DecompressionError(f"could not decompress {url}: {e}") from e
        except (RequestException, TransportError) as e:
            raise DownloadError(f"could not read body of {url}: {e}") from e

    if written == 0:
        raise DecompressionError(f"could not decompress {url}: empty artifact")


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.debug(f"Could not remove {path}: {e}")


__all__ = [
    "EXECUTABLE_MODE",
    "download",
    "temp_path_for",
]
