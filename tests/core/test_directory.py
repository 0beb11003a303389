"""
Unit tests for prisma_binaries.core.directory module.

Tests cover:
- Versioned sub-path naming
- Temp and user cache roots per platform
- Artifact path computation
- Error handling when the cache root is unknown
"""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from prisma_binaries.core.directory import (
    BINARIES_NAMESPACE,
    artifact_path,
    binaries_dir_name,
    cli_binary_name,
    global_cache_dir,
    global_temp_dir,
    user_cache_dir,
)
from prisma_binaries.core.exceptions import CacheDirError
from prisma_binaries.versions import PRISMA_VERSION


class TestBinariesDirName:
    """Tests for binaries_dir_name function."""

    def test_default_version(self):
        """Test the sub-path uses the pinned CLI version."""
        assert binaries_dir_name() == (
            Path("prisma") / f"{BINARIES_NAMESPACE}-binaries" / PRISMA_VERSION
        )

    def test_explicit_version(self):
        """Test a different version yields a different directory."""
        assert binaries_dir_name("9.9.9") == Path(
            "prisma/prisma-python-binaries/9.9.9"
        )
        assert binaries_dir_name("9.9.9") != binaries_dir_name("1.0.0")


class TestGlobalTempDir:
    """Tests for global_temp_dir function."""

    def test_rooted_at_temp_dir(self):
        """Test the directory lives under the OS temp directory."""
        result = global_temp_dir("1.2.3")

        assert result == Path(tempfile.gettempdir()) / binaries_dir_name("1.2.3")


class TestUserCacheDir:
    """Tests for user_cache_dir function."""

    def test_linux_xdg_cache_home(self):
        """Test XDG_CACHE_HOME wins on Linux."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            result = user_cache_dir(
                {"XDG_CACHE_HOME": "/xdg/cache", "HOME": "/home/user"}
            )

        assert result == Path("/xdg/cache")

    def test_linux_home_fallback(self):
        """Test ~/.cache is used without XDG_CACHE_HOME."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            result = user_cache_dir({"HOME": "/home/user"})

        assert result == Path("/home/user/.cache")

    def test_linux_relative_xdg_cache_home(self):
        """Test a relative XDG_CACHE_HOME is rejected."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            with pytest.raises(CacheDirError, match="relative"):
                user_cache_dir({"XDG_CACHE_HOME": "cache", "HOME": "/home/user"})

    def test_linux_no_home(self):
        """Test missing HOME and XDG_CACHE_HOME raise CacheDirError."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            with pytest.raises(CacheDirError, match="could not read user cache dir"):
                user_cache_dir({})

    def test_macos(self):
        """Test ~/Library/Caches is used on macOS."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="darwin"
        ):
            result = user_cache_dir(
                {"HOME": "/Users/user", "XDG_CACHE_HOME": "/ignored"}
            )

        assert result == Path("/Users/user/Library/Caches")

    def test_macos_no_home(self):
        """Test missing HOME on macOS raises CacheDirError."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="darwin"
        ):
            with pytest.raises(CacheDirError, match="HOME"):
                user_cache_dir({})

    def test_windows(self):
        """Test %LocalAppData% is used on Windows."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="windows"
        ):
            result = user_cache_dir({"LocalAppData": "/appdata/local"})

        assert result == Path("/appdata/local")

    def test_windows_missing_local_app_data(self):
        """Test missing %LocalAppData% raises CacheDirError."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="windows"
        ):
            with pytest.raises(CacheDirError, match="LocalAppData"):
                user_cache_dir({"HOME": "/home/user"})


class TestGlobalCacheDir:
    """Tests for global_cache_dir function."""

    def test_rooted_at_user_cache(self):
        """Test the directory lives under the user cache root."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            result = global_cache_dir("1.2.3", {"HOME": "/home/user"})

        assert result == Path(
            "/home/user/.cache/prisma/prisma-python-binaries/1.2.3"
        )

    def test_propagates_cache_dir_error(self):
        """Test an unknown cache root is reported, not swallowed."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            with pytest.raises(CacheDirError):
                global_cache_dir("1.2.3", {})


class TestArtifactPath:
    """Tests for artifact_path function."""

    def test_path_layout(self):
        """Test the artifact file name layout."""
        result = artifact_path("/opt/bin", "query-engine", "debian-openssl-1.1.x")

        assert result == Path("/opt/bin/prisma-query-engine-debian-openssl-1.1.x")

    def test_deterministic(self):
        """Test identical inputs give identical paths."""
        first = artifact_path("/opt/bin", "migration-engine", "darwin")
        second = artifact_path(Path("/opt/bin"), "migration-engine", "darwin")

        assert first == second

    @pytest.mark.parametrize(
        "left,right",
        [
            (("query-engine", "darwin"), ("migration-engine", "darwin")),
            (("query-engine", "darwin"), ("query-engine", "windows")),
            (
                ("introspection-engine", "debian-openssl-1.0.x"),
                ("introspection-engine", "debian-openssl-1.1.x"),
            ),
        ],
    )
    def test_no_collisions(self, left, right):
        """Test different artifacts or platforms never share a path."""
        assert artifact_path("/opt/bin", *left) != artifact_path("/opt/bin", *right)


class TestCliBinaryName:
    """Tests for cli_binary_name function."""

    def test_explicit_platform(self):
        """Test the CLI file name for a given platform."""
        assert cli_binary_name("darwin") == "prisma-cli-darwin"

    def test_detected_platform(self):
        """Test the detected platform is used by default."""
        with patch(
            "prisma_binaries.core.directory.platform_name", return_value="linux"
        ):
            assert cli_binary_name() == "prisma-cli-linux"
