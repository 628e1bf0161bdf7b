"""Analysis configuration options."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_DEBOUNCE_DELAY = 0.5
DEFAULT_IDENTIFIER_SEARCH_BACKOFF = 8


@dataclass(frozen=True, slots=True)
class AnalysisOptions:
    """Knobs for revalidation timing, message cleanup and range recovery."""

    debounce_delay: float = DEFAULT_DEBOUNCE_DELAY
    strip_formatting: bool = True
    identifier_search_backoff: int = DEFAULT_IDENTIFIER_SEARCH_BACKOFF
    extra_definition_keywords: frozenset[str] = frozenset()

    def __post_init__(self):
        if self.debounce_delay < 0:
            raise ValueError("debounce_delay cannot be negative")
        if self.identifier_search_backoff < 0:
            raise ValueError("identifier_search_backoff cannot be negative")

    @staticmethod
    def from_mapping(values: Mapping[str, Any] | None) -> "AnalysisOptions":
        """Build options from LSP `initializationOptions`; unknown keys are ignored."""
        if not values:
            return AnalysisOptions()

        strip_formatting = values.get("stripFormatting", True)
        if not isinstance(strip_formatting, bool):
            raise ValueError(f"stripFormatting must be a boolean, got {strip_formatting!r}")
        extra = values.get("extraDefinitionKeywords") or ()
        if isinstance(extra, str):
            extra = (extra,)
        return AnalysisOptions(
            debounce_delay=float(values.get("debounceDelay", DEFAULT_DEBOUNCE_DELAY)),
            strip_formatting=strip_formatting,
            identifier_search_backoff=int(
                values.get("identifierSearchBackoff", DEFAULT_IDENTIFIER_SEARCH_BACKOFF)
            ),
            extra_definition_keywords=frozenset(str(keyword).lower() for keyword in extra),
        )
