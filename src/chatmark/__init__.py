"""Streaming-safe markup parser for assistant chat messages."""

from .config import DEFAULT_CONFIG, ParserConfig
from .parser import BlockParser, SuggestionExtractor, extract, parse_blocks, parse_inline
from .stream import RenderFrame, StreamRenderer, is_placeholder, render_text

__all__ = [
    "DEFAULT_CONFIG",
    "ParserConfig",
    "BlockParser",
    "SuggestionExtractor",
    "extract",
    "parse_blocks",
    "parse_inline",
    "RenderFrame",
    "StreamRenderer",
    "is_placeholder",
    "render_text",
]
