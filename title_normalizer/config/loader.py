"""Configuration loader for the title normalizer."""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import AppConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = (
    Path("title_normalizer.yaml"),
    Path("config") / "title_normalizer.yaml",
)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate configuration from a YAML file.

    Implements fallback logic for the config file location:
    1. Use provided config_path if given (it must exist)
    2. Try title_normalizer.yaml in the current directory
    3. Try ./config/title_normalizer.yaml
    4. Fall back to defaults (built-in vocabulary, no typos, no cleaning)

    Args:
        config_path: Optional path to configuration file

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_file = _find_config_file(config_path)
    if config_file is None:
        return AppConfig()

    config_dict = _read_yaml(config_file)

    # An empty file means "all defaults"
    if config_dict is None:
        return AppConfig()

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping, got {type(config_dict).__name__}",
            suggestions=["Start the file with top-level keys such as 'titles:' and 'matching:'"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    return parse_config(config_dict)


def parse_config(config_dict: Dict[str, Any]) -> AppConfig:
    """
    Validate a configuration dictionary.

    Args:
        config_dict: Raw configuration data

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: With one readable line per validation error
    """
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            error_type = error["type"]

            if error_type == "missing":
                errors.append(f"Missing required field: {field_path}")
            elif error_type in ("string_type", "bool_type", "bool_parsing", "list_type", "dict_type"):
                expected_type = error_type.split("_")[0]
                errors.append(
                    f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
                )
            elif "enum" in error_type:
                errors.append(f"Invalid value for '{field_path}': {error['msg']}")
            else:
                errors.append(f"{field_path}: {error['msg']}")

        raise ConfigurationError(
            "Configuration validation failed",
            errors=errors,
            suggestions=[
                "Map each canonical title to a list of synonym strings",
                "Use true/false for the matching flags",
                "Verify field types match the expected schema",
            ],
        )


def _read_yaml(config_file: Path) -> Any:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        )


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find the configuration file, or None when no default location exists.

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Check the path and try again",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return None
