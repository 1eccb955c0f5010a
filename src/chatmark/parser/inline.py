"""Inline span parsing for a single line or table cell."""

from __future__ import annotations

import re
from collections.abc import Callable

from .base import Bold, InlineCode, InlineSpan, Italic, Link, Spans, Text

# Precedence, highest first: code > link > bold > italic.
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
# Non-empty body, so a stray ``**`` never collapses into an empty italic.
_ITALIC_RE = re.compile(r"\*([^*]+)\*")


def parse_inline(line: str) -> Spans:
    """Parse one line of text into inline spans.

    Unbalanced delimiters are kept as literal text; this never raises.
    """
    return tuple(_split(_CODE_RE, line, lambda m: [InlineCode(m.group(1))], _parse_links))


def _parse_links(text: str) -> list[InlineSpan]:
    def make_link(m: re.Match[str]) -> list[InlineSpan]:
        label = m.group(1)
        return [Link(label=(Text(label),) if label else (), url=m.group(2).strip())]

    return _split(_LINK_RE, text, make_link, _parse_bold)


def _parse_bold(text: str) -> list[InlineSpan]:
    return _split(_BOLD_RE, text, lambda m: [Bold(tuple(_parse_italic(m.group(1))))], _parse_italic)


def _parse_italic(text: str) -> list[InlineSpan]:
    return _split(_ITALIC_RE, text, lambda m: [Italic((Text(m.group(1)),))], _plain)


def _plain(text: str) -> list[InlineSpan]:
    return [Text(text)] if text else []


def _split(
    pattern: re.Pattern[str],
    text: str,
    on_match: Callable[[re.Match[str]], list[InlineSpan]],
    on_text: Callable[[str], list[InlineSpan]],
) -> list[InlineSpan]:
    """Run *on_match* over every match of *pattern* and *on_text* over the gaps."""
    spans: list[InlineSpan] = []
    pos = 0
    for m in pattern.finditer(text):
        spans.extend(on_text(text[pos:m.start()]))
        spans.extend(on_match(m))
        pos = m.end()
    spans.extend(on_text(text[pos:]))
    return spans
