"""Core types shared by the GitHub client and the release logic."""

from .cancel import CancelToken
from .config import Config, ConfigError, GitHubConfig, load_config
from .errors import ErrorCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # cancel
    "CancelToken",
    # config
    "Config",
    "ConfigError",
    "GitHubConfig",
    "load_config",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
