"""Render parsed assistant messages into a self-contained HTML page."""

from __future__ import annotations

import html
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from chatmark.parser.base import (
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
    Rule,
    Spacer,
    Spans,
    Table,
    Text,
    plain_text,
)
from chatmark.stream import RenderFrame


class HTMLRenderer:
    """Render a Document and its suggestions through the message template."""

    def __init__(self, template_path: Path | None = None) -> None:
        if template_path is None:
            template_path = Path(__file__).resolve().parent.parent / "template" / "message.html"

        loader = FileSystemLoader(str(template_path.parent))
        self._env = Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)
        self._template_name = template_path.name

    def render(
        self,
        content: RenderFrame | Document,
        suggestions: tuple[str, ...] | list[str] = (),
        *,
        title: str | None = None,
        dark_mode: bool = False,
    ) -> str:
        busy = False
        if isinstance(content, RenderFrame):
            busy = content.busy
            document = content.document
            suggestions = suggestions or content.suggestions
        else:
            document = content

        page_title = title or _first_heading_text(document) or "Assistant"

        template = self._env.get_template(self._template_name)
        return template.render(
            page_title=page_title,
            busy=busy,
            body=self.render_document(document),
            suggestions=list(suggestions),
            dark_mode=dark_mode,
        )

    def render_document(self, document: Document) -> str:
        return "\n".join(self._render_block(block) for block in document)

    def _render_block(self, block: BlockNode) -> str:
        if isinstance(block, Heading):
            tag = f"h{block.level}"
            return f'<{tag} class="msg-heading">{self.render_spans(block.spans)}</{tag}>'

        if isinstance(block, Paragraph):
            return f'<p class="msg-paragraph">{self.render_spans(block.spans)}</p>'

        if isinstance(block, ListBlock):
            tag = "ol" if block.ordered else "ul"
            items = "".join(f"<li>{self.render_spans(item)}</li>" for item in block.items)
            return f'<{tag} class="msg-list">{items}</{tag}>'

        if isinstance(block, CodeBlock):
            return self._render_code(block)

        if isinstance(block, Table):
            return self._render_table(block)

        if isinstance(block, Rule):
            return '<hr class="msg-rule" />'

        if isinstance(block, Spacer):
            return '<div class="msg-spacer"></div>'

        raise TypeError(f"Unsupported block node: {block!r}")

    def _render_code(self, block: CodeBlock) -> str:
        language = html.escape(block.language)
        label = language or "code"
        state = "closed" if block.closed else "open"
        return (
            f'<div class="msg-code" data-state="{state}">'
            f'<div class="msg-code-header"><span class="msg-code-lang">{label}</span></div>'
            f'<pre><code class="language-{language}">{html.escape(block.code)}</code></pre>'
            "</div>"
        )

    def _render_table(self, block: Table) -> str:
        head_cells = "".join(f"<th>{self.render_spans(cell)}</th>" for cell in block.header)
        head_html = f"<thead><tr>{head_cells}</tr></thead>"

        row_html = ""
        if block.rows:
            rows = []
            for row in block.rows:
                cells = "".join(f"<td>{self.render_spans(cell)}</td>" for cell in row)
                rows.append(f"<tr>{cells}</tr>")
            row_html = "<tbody>" + "".join(rows) + "</tbody>"

        return f'<div class="msg-table-wrap"><table class="msg-table">{head_html}{row_html}</table></div>'

    def render_spans(self, spans: Spans) -> str:
        return "".join(self._render_span(span) for span in spans)

    def _render_span(self, span: InlineSpan) -> str:
        if isinstance(span, Text):
            return html.escape(span.text)

        if isinstance(span, Bold):
            return f"<strong>{self.render_spans(span.children)}</strong>"

        if isinstance(span, Italic):
            return f"<em>{self.render_spans(span.children)}</em>"

        if isinstance(span, InlineCode):
            return f'<code class="msg-inline-code">{html.escape(span.code)}</code>'

        if isinstance(span, Link):
            return (
                f'<a href="{html.escape(span.url)}" target="_blank" rel="noopener noreferrer">'
                f"{self.render_spans(span.label)}</a>"
            )

        raise TypeError(f"Unsupported inline span: {span!r}")


def _first_heading_text(document: Document) -> str:
    for block in document:
        if isinstance(block, Heading):
            return plain_text(block.spans).strip()
    return ""
