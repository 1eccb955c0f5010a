"""chatmark CLI entrypoint."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

import click

from chatmark.config import DEFAULT_MARKER_PATTERN, ParserConfig
from chatmark.renderer.html_renderer import HTMLRenderer
from chatmark.stream import StreamRenderer

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_file", type=click.File("r", encoding="utf-8"))
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output HTML path")
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Replay the text as a stream of chunks of this many characters",
)
@click.option(
    "--marker",
    type=str,
    default=DEFAULT_MARKER_PATTERN,
    show_default=True,
    help="Regex for the line that starts the suggestions section",
)
@click.option("--title", type=str, default=None, help="Page title (defaults to the first heading)")
@click.option("--dark-mode", is_flag=True, help="Enable dark mode stylesheet")
@click.option("--verbose", "-v", is_flag=True, help="Log every chunk and render tick")
def main(
    input_file: TextIO,
    output: Path,
    chunk_size: int | None,
    marker: str,
    title: str | None,
    dark_mode: bool,
    verbose: bool,
) -> None:
    """Render streamed assistant text into a standalone HTML message."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = ParserConfig(marker_pattern=marker)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--marker") from exc

    raw = input_file.read()
    renderer = StreamRenderer(config=config)
    frame = renderer.consume(_chunked(raw, chunk_size))

    html = HTMLRenderer().render(frame, title=title, dark_mode=dark_mode)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    logger.info("Wrote %s (%d blocks)", output, len(frame.document))

    click.echo(f"Rendered: {output}")
    for question in renderer.turn_suggestions:
        click.echo(f"Suggestion: {question}")


def _chunked(text: str, size: int | None) -> list[str]:
    if not size:
        return [text]
    return [text[i:i + size] for i in range(0, len(text), size)]


if __name__ == "__main__":  # pragma: no cover
    main()
