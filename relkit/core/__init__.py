"""Core types: results, exit codes, configuration."""

from .config import Config, ConfigError, RepoTarget, load_config, load_optional_config
from .errors import ExitCode
from .result import Err, Ok, Result, is_err, is_ok

__all__ = [
    # config
    "Config",
    "ConfigError",
    "RepoTarget",
    "load_config",
    "load_optional_config",
    # errors
    "ExitCode",
    # result
    "Err",
    "Ok",
    "Result",
    "is_err",
    "is_ok",
]
