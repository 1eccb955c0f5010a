"""Line-oriented block parser for streamed assistant markup.

The parser is re-run over the whole accumulated text after every chunk, so it
must be total over any prefix of a document: a construct that is still open at
the end of the input (fence, list, table) is flushed as a partial node instead
of being dropped.
"""

from __future__ import annotations

import re

from .base import BlockNode, CodeBlock, Document, Heading, ListBlock, Paragraph, Rule, Spacer, Spans, Table
from .inline import parse_inline

_FENCE = "```"
_TABLE_SEPARATOR_RE = re.compile(r"^\|(?:\s*:?-+:?\s*\|)+$")
_ORDERED_ITEM_RE = re.compile(r"^\d+\.\s")
_UNORDERED_PREFIXES = ("* ", "- ")


class BlockParser:
    """Parse accumulated message text into a Document."""

    def parse(self, text: str) -> Document:
        return parse_blocks(text)


def parse_blocks(text: str) -> Document:
    """Parse *text* into block nodes, one node per source line where possible."""
    if not text:
        return ()

    builder = _DocumentBuilder()
    for line in text.replace("\r\n", "\n").split("\n"):
        builder.feed(line)
    return builder.finish()


class _DocumentBuilder:
    """Open-block state for a single parse call.

    At most one of list, table or fence is open at any time.
    """

    def __init__(self) -> None:
        self.blocks: list[BlockNode] = []
        self.list_items: list[Spans] = []
        self.list_ordered = False
        self.table_rows: list[tuple[Spans, ...]] = []
        self.in_table = False
        self.code_lines: list[str] | None = None
        self.code_language = ""

    def feed(self, line: str) -> None:
        stripped = line.strip()

        if stripped.startswith(_FENCE):
            if self.code_lines is None:
                self._flush_list()
                self._flush_table()
                self.code_lines = []
                self.code_language = stripped[len(_FENCE):].strip()
                return
            if stripped == _FENCE:
                self._flush_code(closed=True)
                return

        if self.code_lines is not None:
            self.code_lines.append(line)
            return

        if _is_table_line(stripped):
            self._flush_list()
            self.in_table = True
            if not _TABLE_SEPARATOR_RE.match(stripped):
                self.table_rows.append(_split_cells(stripped))
            return
        self._flush_table()

        if stripped.startswith(("***", "---")):
            self._flush_list()
            self.blocks.append(Rule())
        elif stripped.startswith("## "):
            self._flush_list()
            self.blocks.append(Heading(level=2, spans=parse_inline(stripped[3:])))
        elif stripped.startswith("# "):
            self._flush_list()
            self.blocks.append(Heading(level=1, spans=parse_inline(stripped[2:])))
        elif stripped.startswith(_UNORDERED_PREFIXES):
            self._add_list_item(stripped[2:], ordered=False)
        elif _ORDERED_ITEM_RE.match(stripped):
            self._add_list_item(_ORDERED_ITEM_RE.sub("", stripped, count=1), ordered=True)
        elif not stripped:
            self._flush_list()
            self.blocks.append(Spacer())
        else:
            self._flush_list()
            self.blocks.append(Paragraph(spans=parse_inline(line)))

    def finish(self) -> Document:
        self._flush_list()
        self._flush_table()
        if self.code_lines is not None:
            # Unterminated fence: render what has streamed so far.
            self._flush_code(closed=False)
        return tuple(self.blocks)

    def _add_list_item(self, item: str, *, ordered: bool) -> None:
        if self.list_items and self.list_ordered != ordered:
            self._flush_list()
        if not self.list_items:
            self.list_ordered = ordered
        self.list_items.append(parse_inline(item))

    def _flush_list(self) -> None:
        if self.list_items:
            self.blocks.append(ListBlock(ordered=self.list_ordered, items=tuple(self.list_items)))
            self.list_items = []

    def _flush_table(self) -> None:
        if not self.in_table:
            return
        # A table made only of separator rows has no header to show.
        if self.table_rows:
            self.blocks.append(Table(header=self.table_rows[0], rows=tuple(self.table_rows[1:])))
        self.table_rows = []
        self.in_table = False

    def _flush_code(self, *, closed: bool) -> None:
        self.blocks.append(
            CodeBlock(language=self.code_language, lines=tuple(self.code_lines or ()), closed=closed)
        )
        self.code_lines = None
        self.code_language = ""


def _is_table_line(stripped: str) -> bool:
    return len(stripped) >= 2 and stripped.startswith("|") and stripped.endswith("|")


def _split_cells(stripped: str) -> tuple[Spans, ...]:
    return tuple(parse_inline(cell.strip()) for cell in stripped[1:-1].split("|"))
