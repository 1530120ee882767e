"""Structured logging helpers for the title normalizer."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its component field with per-call extras."""

    def process(self, msg, kwargs):
        """Merge adapter extra into the call's extra; the call wins on conflicts."""
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger, optionally tagging every record with a component.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier (index, scoring, normalizer, cli)

    Returns:
        Logger or ComponentLoggerAdapter instance

    Example:
        >>> logger = get_logger(__name__, component="index")
        >>> logger.info("Synonym index built", extra={"event": "index.built"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger
