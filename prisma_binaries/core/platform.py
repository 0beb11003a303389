"""
Platform identification for prisma-binaries.

The remote store publishes one build per operating system, and on Linux one
build per distribution family and OpenSSL line. This module maps the running
environment onto those names.

Usage:
    from prisma_binaries.core.platform import platform_name, binary_name_with_ssl

    platform_name()          # 'linux', 'darwin', 'windows'
    binary_name_with_ssl()   # 'debian-openssl-1.1.x' on most Linux hosts
"""

import functools
import logging
import platform
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# OpenSSL line assumed when `openssl` is missing or its output is unrecognised.
DEFAULT_OPENSSL = "1.1.x"

# Distribution family assumed when /etc/os-release gives no hint.
DEFAULT_DISTRO = "debian"

_RHEL_IDS = ("rhel", "centos", "fedora", "amzn", "ol", "rocky", "almalinux")

_OPENSSL_PATTERN = re.compile(r"^OpenSSL\s(\d+\.\d+)\.\d")


@functools.lru_cache(maxsize=1)
def platform_name() -> str:
    """
    Get the platform tag of the running OS.

    Returns:
        'darwin', 'linux', 'windows', or the lowercase system name for
        anything else (e.g. 'freebsd').
    """
    system = platform.system().lower()
    if system.startswith(("cygwin", "msys", "mingw")):
        return "windows"
    return system


@functools.lru_cache(maxsize=1)
def binary_name_with_ssl() -> str:
    """
    Get the engine binary name for the running platform.

    Returns:
        The platform tag on macOS and Windows, and
        '<distro>-openssl-<version>' on Linux.

    Example:
        >>> binary_name_with_ssl()
        'debian-openssl-1.1.x'
    """
    name = platform_name()
    if name != "linux":
        return name

    return f"{_detect_distro()}-openssl-{_detect_openssl()}"


def parse_openssl_version(output: str) -> str:
    """
    Extract the OpenSSL line from `openssl version` output.

    Args:
        output: Raw output, e.g. 'OpenSSL 1.0.2k-fips  26 Jan 2017'

    Returns:
        The line as 'X.Y.x', or DEFAULT_OPENSSL if it cannot be parsed.
    """
    match = _OPENSSL_PATTERN.match(output.strip())
    if match:
        return f"{match.group(1)}.x"
    return DEFAULT_OPENSSL


def parse_distro(os_release: str) -> str:
    """Map /etc/os-release contents onto 'debian' or 'rhel'."""
    ids = []
    for line in os_release.splitlines():
        if line.startswith(("ID=", "ID_LIKE=")):
            value = line.split("=", 1)[1].strip().strip('"').strip("'")
            ids.extend(value.lower().split())

    if any(i in _RHEL_IDS for i in ids):
        return "rhel"
    return DEFAULT_DISTRO


def _detect_openssl() -> str:
    try:
        result = subprocess.run(
            ["openssl", "version", "-v"], capture_output=True, text=True, timeout=5
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Could not run openssl, assuming {DEFAULT_OPENSSL}: {e}")
        return DEFAULT_OPENSSL

    return parse_openssl_version(result.stdout)


def _detect_distro() -> str:
    os_release_path = Path("/etc/os-release")
    try:
        content = os_release_path.read_text()
    except OSError:
        return DEFAULT_DISTRO

    return parse_distro(content)


def clear_platform_cache():
    """
    Clear the platform detection cache.

    Useful for testing or when platform information changes.
    """
    platform_name.cache_clear()
    binary_name_with_ssl.cache_clear()


__all__ = [
    "platform_name",
    "binary_name_with_ssl",
    "parse_openssl_version",
    "parse_distro",
    "clear_platform_cache",
]
