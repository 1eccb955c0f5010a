"""Parser configuration shared by the extractor, stream renderer and CLI."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# One line on its own: ``[SUGGESTIONS]`` (case-insensitive, optional colon).
DEFAULT_MARKER_PATTERN = r"\[SUGGESTIONS\]:?"

# Value the conversation layer stores while waiting for the first chunk.
DEFAULT_PLACEHOLDER = "..."


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Immutable parser settings.

    ``marker_pattern`` is matched against each whole, stripped line of the raw
    text; the last matching line starts the suggestions section.
    """

    marker_pattern: str = DEFAULT_MARKER_PATTERN
    placeholder: str = DEFAULT_PLACEHOLDER
    marker_re: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            compiled = re.compile(self.marker_pattern, re.IGNORECASE)
        except re.error as exc:
            raise ValueError(f"Invalid suggestion marker pattern {self.marker_pattern!r}: {exc}") from exc
        object.__setattr__(self, "marker_re", compiled)


DEFAULT_CONFIG = ParserConfig()
