"""Typed configuration loading and access.

The config file is optional. When present it is a TOML document with a
single ``[github]`` table:

    [github]
    api_url = "https://api.github.com"
    timeout = 30.0
    user_agent = "ghver/0.1.0"
    token_env = "GITHUB_TOKEN"

The page budget used when scanning releases and tags is deliberately not
part of the config (see ghver.github.limits).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ghver import __version__

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "GitHubConfig",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "default_config_path",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_TOKEN_ENV",
    "CONFIG_ENV",
]

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = f"ghver/{__version__}"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"

CONFIG_ENV = "GHVER_CONFIG"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """GitHub API access settings."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    # Name of the environment variable holding an API token, not the token.
    token_env: str = DEFAULT_TOKEN_ENV

    def token(self) -> str | None:
        value = os.environ.get(self.token_env, "").strip()
        return value or None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    github: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        github: StrDict = get_table(data, "github") or {}

        timeout = get_float(github, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"github.timeout must be positive, got {timeout}")

        return cls(
            github=GitHubConfig(
                api_url=(get_str(github, "api_url") or DEFAULT_API_URL).rstrip("/"),
                timeout=timeout or DEFAULT_TIMEOUT_SECONDS,
                user_agent=get_str(github, "user_agent") or DEFAULT_USER_AGENT,
                token_env=get_str(github, "token_env") or DEFAULT_TOKEN_ENV,
            ),
        )


def default_config_path() -> Path:
    """Config path from $GHVER_CONFIG, else ~/.config/ghver/config.toml."""
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".config" / "ghver" / "config.toml"


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to config.toml file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return default config if it cannot be loaded."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
