"""Non-fatal checks on raw configuration data."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for likely mistakes and return warning messages.

    Synonyms shared by several titles are legal and are not reported.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    titles = config_dict.get("titles", {})
    if not isinstance(titles, dict):
        return warning_messages

    # Titles that only differ by case compete for the same exact match
    seen: Dict[str, str] = {}
    for title in titles:
        if not isinstance(title, str):
            continue
        key = title.strip().lower()
        if key in seen and seen[key] != title:
            warning_messages.append(
                f"Titles '{seen[key]}' and '{title}' differ only by case; "
                "exact matches resolve to one of them"
            )
        else:
            seen[key] = title

    # Blank synonyms are dropped during validation
    for title, synonyms in titles.items():
        if not isinstance(synonyms, list):
            continue
        blanks = [s for s in synonyms if isinstance(s, str) and not s.strip()]
        if blanks:
            warning_messages.append(
                f"Title '{title}' has {len(blanks)} blank synonym(s) that will be ignored"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit configuration warnings to stderr.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(f"Configuration warning: {message}", UserWarning, stacklevel=3)
