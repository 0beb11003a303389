"""Configuration for prisma-binaries.

URL templates and versions are plain values handed to the fetcher at
construction time. They come from, in increasing precedence: built-in
defaults, an optional YAML file, and the PRISMA_CLI_URL / PRISMA_ENGINE_URL
environment variables (useful for debugging, or as a fallback should the
default buckets go down).

Example YAML file:

    cli_url: https://mirror.example.com/cli/%s-%s-%s.gz
    engine_url: https://mirror.example.com/engines/master/%s/%s/%s.gz
    timeout: 120
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional, Union

import yaml

from prisma_binaries.core.exceptions import ConfigError
from prisma_binaries.versions import (
    CLI_PACKAGE,
    ENGINE_URL,
    ENGINE_VERSION,
    PRISMA_URL,
    PRISMA_VERSION,
)

logger = logging.getLogger(__name__)

CLI_URL_ENV = "PRISMA_CLI_URL"
ENGINE_URL_ENV = "PRISMA_ENGINE_URL"

# Number of %s placeholders every URL template must carry.
TEMPLATE_PLACEHOLDERS = 3


@dataclass(frozen=True)
class BinariesConfig:
    """Where and which binaries to fetch."""

    cli_url: str = PRISMA_URL
    engine_url: str = ENGINE_URL
    cli_version: str = PRISMA_VERSION
    engine_version: str = ENGINE_VERSION
    cli_package: str = CLI_PACKAGE
    timeout: Optional[float] = None  # seconds; None waits forever

    def __post_init__(self):
        for name in ("cli_url", "engine_url"):
            _validate_template(name, getattr(self, name))
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")

    def format_cli_url(self, platform: str) -> str:
        """Build the CLI download URL for a platform tag."""
        return self.cli_url % (self.cli_package, self.cli_version, platform)

    def format_engine_url(self, binary_name: str, url_name: str) -> str:
        """Build an engine download URL."""
        return self.engine_url % (self.engine_version, binary_name, url_name)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        base: Optional["BinariesConfig"] = None,
    ) -> "BinariesConfig":
        """
        Apply URL overrides from the environment.

        Args:
            environ: Environment to read (default: os.environ)
            base: Configuration to override (default: built-in defaults)

        Returns:
            New configuration with PRISMA_CLI_URL / PRISMA_ENGINE_URL applied
        """
        env = os.environ if environ is None else environ
        config = base if base is not None else cls()

        overrides = {}
        if CLI_URL_ENV in env:
            logger.debug(f"Using CLI URL from {CLI_URL_ENV}")
            overrides["cli_url"] = env[CLI_URL_ENV]
        if ENGINE_URL_ENV in env:
            logger.debug(f"Using engine URL from {ENGINE_URL_ENV}")
            overrides["engine_url"] = env[ENGINE_URL_ENV]

        return replace(config, **overrides) if overrides else config


def _validate_template(name: str, template: str) -> None:
    if not isinstance(template, str) or not template:
        raise ConfigError(f"{name} must be a non-empty string")

    # '%%' is a literal percent sign.
    sample = ("x",) * TEMPLATE_PLACEHOLDERS
    try:
        template % sample
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"{name} must contain exactly {TEMPLATE_PLACEHOLDERS} '%s' "
            f"placeholders ('%%' for a literal '%'): {template}"
        ) from e


def load_config(config_path: Union[str, Path]) -> BinariesConfig:
    """
    Parse a YAML configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configuration with the file's values over the defaults

    Raises:
        ConfigError: If the file is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    if data is None:
        return BinariesConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> BinariesConfig:
    known = {f.name for f in fields(BinariesConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = {}
    for key, value in data.items():
        if key == "timeout":
            if value is not None and (
                isinstance(value, bool) or not isinstance(value, (int, float))
            ):
                raise ConfigError(f"timeout must be a number, got {value!r}")
        elif not isinstance(value, str):
            raise ConfigError(f"{key} must be a string, got {value!r}")
        values[key] = value

    return BinariesConfig(**values)


def resolve_config(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BinariesConfig:
    """
    Build the effective configuration: defaults < YAML file < environment.

    Args:
        config_path: Optional YAML file
        environ: Environment to read (default: os.environ)
    """
    base = load_config(config_path) if config_path else BinariesConfig()
    return BinariesConfig.from_env(environ, base=base)


__all__ = [
    "CLI_URL_ENV",
    "ENGINE_URL_ENV",
    "BinariesConfig",
    "load_config",
    "resolve_config",
]
