"""Configuration management for the title normalizer."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config
from .models import AppConfig, LogFormat, LoggingConfig, LogLevel, MatchingConfig

__all__ = [
    # Loader functions
    "load_config",
    "parse_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "MatchingConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
