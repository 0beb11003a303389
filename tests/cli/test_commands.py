"""
Tests for the fetch and paths command implementations.
"""

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest

from prisma_binaries.cli.commands import fetch, paths
from prisma_binaries.config.settings import BinariesConfig
from prisma_binaries.core.exceptions import CacheDirError


def fetch_args(**overrides) -> argparse.Namespace:
    values = {
        "config": None,
        "dir": None,
        "temp": False,
        "engine": None,
        "cli_only": False,
        "timeout": None,
        "verbose": False,
        "quiet": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestResolveTargetDir:
    """Tests for fetch.resolve_target_dir."""

    def test_explicit_dir_is_made_absolute(self, tmp_path, monkeypatch):
        """Test a relative --dir is resolved against the working directory."""
        monkeypatch.chdir(tmp_path)

        result = fetch.resolve_target_dir(
            fetch_args(dir=Path("bin")), BinariesConfig()
        )

        assert result == (tmp_path / "bin").resolve()

    def test_temp(self):
        """Test --temp picks the versioned temp directory."""
        config = BinariesConfig(cli_version="1.2.3")

        with patch(
            "prisma_binaries.cli.commands.fetch.global_temp_dir",
            return_value=Path("/tmp/prisma"),
        ) as mock_temp:
            result = fetch.resolve_target_dir(fetch_args(temp=True), config)

        assert result == Path("/tmp/prisma")
        mock_temp.assert_called_once_with("1.2.3")

    def test_default_is_cache_dir(self):
        """Test the user cache directory is the default."""
        with patch(
            "prisma_binaries.cli.commands.fetch.global_cache_dir",
            return_value=Path("/cache/prisma"),
        ):
            result = fetch.resolve_target_dir(fetch_args(), BinariesConfig())

        assert result == Path("/cache/prisma")


class TestFetchRun:
    """Tests for fetch.run."""

    def test_fetch_all(self, tmp_path, capsys):
        """Test the default run fetches everything and prints the paths."""
        results = {"cli": tmp_path / "prisma-cli-linux"}

        with patch(
            "prisma_binaries.cli.commands.fetch.BinaryFetcher"
        ) as mock_fetcher_cls:
            mock_fetcher_cls.return_value.fetch_all_engines.return_value = results
            exit_code = fetch.run(fetch_args(dir=tmp_path))

        assert exit_code == 0
        mock_fetcher_cls.return_value.fetch_all_engines.assert_called_once_with(
            tmp_path.resolve()
        )
        assert f"cli: {tmp_path / 'prisma-cli-linux'}" in capsys.readouterr().out

    def test_selected_engines(self, tmp_path):
        """Test --engine fetches the CLI and only the named engines."""
        with patch(
            "prisma_binaries.cli.commands.fetch.BinaryFetcher"
        ) as mock_fetcher_cls:
            fetcher = mock_fetcher_cls.return_value
            exit_code = fetch.run(
                fetch_args(dir=tmp_path, engine=["migration-engine"])
            )

        assert exit_code == 0
        fetcher.fetch_cli.assert_called_once_with(tmp_path.resolve())
        fetcher.fetch_engine.assert_called_once_with(
            "migration-engine", tmp_path.resolve()
        )
        fetcher.fetch_all_engines.assert_not_called()

    def test_cli_only(self, tmp_path):
        """Test --cli-only skips the engines."""
        with patch(
            "prisma_binaries.cli.commands.fetch.BinaryFetcher"
        ) as mock_fetcher_cls:
            fetcher = mock_fetcher_cls.return_value
            fetch.run(fetch_args(dir=tmp_path, cli_only=True))

        fetcher.fetch_cli.assert_called_once_with(tmp_path.resolve())
        fetcher.fetch_engine.assert_not_called()

    def test_timeout_flag_overrides_config(self, tmp_path):
        """Test --timeout ends up in the fetcher configuration."""
        with patch(
            "prisma_binaries.cli.commands.fetch.BinaryFetcher"
        ) as mock_fetcher_cls:
            mock_fetcher_cls.return_value.fetch_all_engines.return_value = {}
            fetch.run(fetch_args(dir=tmp_path, timeout=15.0))

        config = mock_fetcher_cls.call_args.args[0]
        assert config.timeout == 15.0

    def test_cache_dir_error_propagates(self):
        """Test an unknown cache directory is reported to the caller."""
        with patch(
            "prisma_binaries.cli.commands.fetch.global_cache_dir",
            side_effect=CacheDirError("could not read user cache dir"),
        ):
            with pytest.raises(CacheDirError):
                fetch.run(fetch_args())


class TestPathsRun:
    """Tests for paths.run."""

    def test_lists_binaries(self, tmp_path, capsys):
        """Test platform info and every binary path are printed."""
        (tmp_path / "prisma-cli-linux").write_bytes(b"")

        with patch(
            "prisma_binaries.cli.commands.paths.platform_name", return_value="linux"
        ), patch(
            "prisma_binaries.cli.commands.paths.binary_name_with_ssl",
            return_value="debian-openssl-1.1.x",
        ), patch(
            "prisma_binaries.cli.commands.paths.global_cache_dir",
            return_value=tmp_path,
        ):
            exit_code = paths.run(argparse.Namespace(config=None))

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "debian-openssl-1.1.x" in out
        assert f"cli: {tmp_path / 'prisma-cli-linux'}\n" in out
        assert (
            f"query-engine: {tmp_path / 'prisma-query-engine-debian-openssl-1.1.x'}"
            " (missing)" in out
        )

    def test_cache_dir_unavailable(self, capsys):
        """Test a missing cache directory is reported, not fatal."""
        with patch(
            "prisma_binaries.cli.commands.paths.global_cache_dir",
            side_effect=CacheDirError("no HOME"),
        ):
            exit_code = paths.run(argparse.Namespace(config=None))

        assert exit_code == 0
        assert "(unavailable)" in capsys.readouterr().out
