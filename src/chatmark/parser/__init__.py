"""Parser package."""

from .base import (
    BlockNode,
    Bold,
    CodeBlock,
    Document,
    Heading,
    InlineCode,
    InlineSpan,
    Italic,
    Link,
    ListBlock,
    Paragraph,
    ParseResult,
    Rule,
    Spacer,
    Table,
    Text,
    plain_text,
)
from .blocks import BlockParser, parse_blocks
from .inline import parse_inline
from .suggestions import SuggestionExtractor, extract

__all__ = [
    "BlockNode",
    "Bold",
    "CodeBlock",
    "Document",
    "Heading",
    "InlineCode",
    "InlineSpan",
    "Italic",
    "Link",
    "ListBlock",
    "Paragraph",
    "ParseResult",
    "Rule",
    "Spacer",
    "Table",
    "Text",
    "plain_text",
    "BlockParser",
    "parse_blocks",
    "parse_inline",
    "SuggestionExtractor",
    "extract",
]
