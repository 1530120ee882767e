"""Environment variable overrides."""

import os
from typing import Optional

from .exceptions import ConfigurationError

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_LOG_FORMATS = {"json", "key-value"}


class EnvironmentConfig:
    """Environment variable configuration holder.

    ``None`` means the variable was not set and the config file decides.
    """

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        allow_typos: Optional[bool] = None,
        clean_special_characters: Optional[bool] = None,
        environment: str = "local",
    ):
        self.log_level = log_level
        self.log_format = log_format
        self.allow_typos = allow_typos
        self.clean_special_characters = clean_special_characters
        self.environment = environment


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - LOG_FORMAT: json or key-value
    - TITLE_NORMALIZER_ALLOW_TYPOS: boolean
    - TITLE_NORMALIZER_CLEAN_SPECIAL_CHARACTERS: boolean
    - ENVIRONMENT: label attached to log records (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If any variable has an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: {log_level}. Must be one of {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
    else:
        log_level = None

    log_format = os.getenv("LOG_FORMAT")
    if log_format:
        log_format = log_format.strip().lower()
        if log_format not in VALID_LOG_FORMATS:
            errors.append(f"Invalid LOG_FORMAT: {log_format}. Must be 'json' or 'key-value'")
    else:
        log_format = None

    allow_typos = _parse_bool("TITLE_NORMALIZER_ALLOW_TYPOS", errors)
    clean_special_characters = _parse_bool("TITLE_NORMALIZER_CLEAN_SPECIAL_CHARACTERS", errors)

    if errors:
        raise ConfigurationError(
            "Environment configuration validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file or shell environment",
                "Boolean variables accept true/false, yes/no, on/off or 1/0",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        allow_typos=allow_typos,
        clean_special_characters=clean_special_characters,
        environment=os.getenv("ENVIRONMENT", "local"),
    )


def _parse_bool(name: str, errors: list) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None

    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False

    errors.append(f"Invalid {name}: {raw!r}. Expected a boolean")
    return None
