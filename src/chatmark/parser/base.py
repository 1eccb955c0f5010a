"""Core intermediate representation (IR) for parsed assistant messages.

Inline spans and block nodes are closed sets of immutable value types. Every
parse call builds a fresh tree, so callers compare structurally and replace
whole documents instead of patching them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class Bold:
    children: tuple[InlineSpan, ...] = ()


@dataclass(frozen=True, slots=True)
class Italic:
    children: tuple[InlineSpan, ...] = ()


@dataclass(frozen=True, slots=True)
class InlineCode:
    code: str


@dataclass(frozen=True, slots=True)
class Link:
    label: tuple[Text, ...]
    url: str


InlineSpan = Text | Bold | Italic | InlineCode | Link
Spans = tuple[InlineSpan, ...]


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Heading:
    level: Literal[1, 2]
    spans: Spans = ()


@dataclass(frozen=True, slots=True)
class Paragraph:
    spans: Spans = ()


@dataclass(frozen=True, slots=True)
class ListBlock:
    ordered: bool
    items: tuple[Spans, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeBlock:
    language: str = ""
    lines: tuple[str, ...] = ()
    # False while the fence is still open at the end of the current prefix.
    closed: bool = True

    @property
    def code(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class Table:
    header: tuple[Spans, ...] = ()
    rows: tuple[tuple[Spans, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class Rule:
    pass


@dataclass(frozen=True, slots=True)
class Spacer:
    pass


BlockNode = Heading | Paragraph | ListBlock | CodeBlock | Table | Rule | Spacer
Document = tuple[BlockNode, ...]


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Main content (still unparsed) and the trailing suggestion questions."""

    content: str
    suggestions: tuple[str, ...] = ()


def plain_text(spans: Spans) -> str:
    """Flatten inline spans back to their literal text, markup removed."""
    parts: list[str] = []
    for span in spans:
        if isinstance(span, Text):
            parts.append(span.text)
        elif isinstance(span, InlineCode):
            parts.append(span.code)
        elif isinstance(span, Link):
            parts.append(plain_text(span.label))
        else:
            parts.append(plain_text(span.children))
    return "".join(parts)
