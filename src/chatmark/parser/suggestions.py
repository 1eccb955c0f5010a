"""Split the trailing follow-up suggestions section off an assistant message."""

from __future__ import annotations

import re

from ..config import DEFAULT_CONFIG, ParserConfig
from .base import ParseResult

_LIST_MARKER_RE = re.compile(r"^(?:[-*]|\d+\.)(?:\s+|$)")


class SuggestionExtractor:
    """Extract suggestions using the marker configured in *config*."""

    def __init__(self, config: ParserConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def extract(self, raw: str) -> ParseResult:
        return extract(raw, self.config)


def extract(raw: str, config: ParserConfig = DEFAULT_CONFIG) -> ParseResult:
    """Return the main content of *raw* and the suggestions after the last marker line.

    Without a marker the content is returned unchanged with no suggestions,
    which is the normal state while a response is still streaming.
    """
    lines = raw.split("\n")
    marker_index = None
    for idx in range(len(lines) - 1, -1, -1):
        if config.marker_re.fullmatch(lines[idx].strip()):
            marker_index = idx
            break

    if marker_index is None:
        return ParseResult(content=raw, suggestions=())

    content = "\n".join(lines[:marker_index]).rstrip()
    suggestions: list[str] = []
    for line in lines[marker_index + 1:]:
        question = _LIST_MARKER_RE.sub("", line.strip(), count=1).strip()
        if question:
            suggestions.append(question)

    return ParseResult(content=content, suggestions=tuple(suggestions))
