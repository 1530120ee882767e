"""Built-in canonical titles and their synonyms.

The vocabulary is read-only. Callers that want a different baseline pass
their own mapping as ``defaults=`` (an empty dict disables it).
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping

DEFAULT_VOCABULARY_VERSION = "1"

DEFAULT_MAPPINGS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "Software Engineer": frozenset({"java", "c#", "python", "developer", "programmer", "coder"}),
    "Architect": frozenset({"designer"}),
    "Accountant": frozenset({"financial", "bookkeeper"}),
    "Quantity Surveyor": frozenset({"construction"}),
})
