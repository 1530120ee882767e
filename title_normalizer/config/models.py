"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class MatchingConfig(BaseModel):
    """Matching behaviour of the normalizer."""

    allow_typos: bool = Field(False, description="Fall back to typo-tolerant word matching")
    clean_special_characters: bool = Field(
        False, description="Strip punctuation from synonyms and input before matching"
    )
    include_defaults: bool = Field(
        True, description="Merge the built-in vocabulary into the configured titles"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for the title normalizer."""

    titles: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Canonical title -> synonyms",
    )
    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Matching settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("titles", mode="before")
    @classmethod
    def allow_empty_synonym_lists(cls, v):
        """Treat ``Title:`` with nothing after it as a title with no synonyms."""
        if isinstance(v, dict):
            return {title: (synonyms if synonyms is not None else []) for title, synonyms in v.items()}
        return v

    @field_validator("titles")
    @classmethod
    def normalize_titles(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Strip titles and synonyms; reject blank titles, drop blank synonyms."""
        normalized: Dict[str, List[str]] = {}
        for title, synonyms in v.items():
            stripped_title = title.strip()
            if not stripped_title:
                raise ValueError("Canonical titles cannot be empty or whitespace-only")

            merged = normalized.setdefault(stripped_title, [])
            for synonym in synonyms:
                stripped = synonym.strip()
                if stripped and stripped not in merged:
                    merged.append(stripped)
        return normalized
