"""Re-parse streamed assistant text into a fresh document after every chunk."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable, Iterable
from dataclasses import dataclass

from .config import DEFAULT_CONFIG, ParserConfig
from .parser.base import Document, ParseResult
from .parser.blocks import parse_blocks
from .parser.suggestions import extract

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Everything the display layer needs for one render tick of a turn."""

    raw: str
    document: Document = ()
    suggestions: tuple[str, ...] = ()
    busy: bool = False
    final: bool = False


def is_placeholder(text: str, config: ParserConfig = DEFAULT_CONFIG) -> bool:
    """True when *text* is the "awaiting first chunk" placeholder value."""
    return text == config.placeholder


def render_text(raw: str, config: ParserConfig = DEFAULT_CONFIG) -> RenderFrame:
    """Parse a complete (or stored) message in one shot."""
    if is_placeholder(raw, config):
        return RenderFrame(raw=raw, busy=True, final=True)
    result = extract(raw, config)
    return RenderFrame(raw=raw, document=parse_blocks(result.content), suggestions=result.suggestions, final=True)


class StreamRenderer:
    """Own the accumulator for one assistant turn and re-render it per chunk.

    Nothing but the accumulated string survives between chunks: each chunk
    triggers a full extract + block parse whose result replaces the previous
    frame wholesale.
    """

    def __init__(
        self,
        config: ParserConfig = DEFAULT_CONFIG,
        on_frame: Callable[[RenderFrame], None] | None = None,
    ) -> None:
        self.config = config
        self.on_frame = on_frame
        self._accumulator = ""
        self._chunks = 0
        self._closed = False
        self._frame = RenderFrame(raw=config.placeholder, busy=True)
        self.turn_suggestions: tuple[str, ...] = ()

    @property
    def accumulator(self) -> str:
        return self._accumulator

    @property
    def frame(self) -> RenderFrame:
        return self._frame

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> RenderFrame:
        """Show the busy indicator until the first chunk arrives."""
        self._accumulator = ""
        self._chunks = 0
        self._closed = False
        self.turn_suggestions = ()
        logger.info("Turn started; awaiting first chunk")
        return self._emit(RenderFrame(raw=self.config.placeholder, busy=True))

    def feed(self, chunk: str) -> RenderFrame:
        if self._closed:
            logger.warning("Discarding %d-char chunk for a closed turn", len(chunk))
            return self._frame

        self._accumulator += chunk
        self._chunks += 1
        logger.debug("Chunk %d: +%d chars (total %d)", self._chunks, len(chunk), len(self._accumulator))
        return self._emit(self._parse(final=False))

    def finish(self) -> RenderFrame:
        """Run the final parse; its suggestions become the turn's suggestions."""
        if self._closed:
            return self._frame

        frame = self._parse(final=True)
        self.turn_suggestions = frame.suggestions
        self._closed = True
        logger.info(
            "Turn finished after %d chunks (%d chars, %d blocks, %d suggestions)",
            self._chunks,
            len(self._accumulator),
            len(frame.document),
            len(frame.suggestions),
        )
        return self._emit(frame)

    def close(self) -> None:
        """Abandon the turn; chunks that still arrive are discarded."""
        if not self._closed:
            logger.info("Turn abandoned after %d chunks", self._chunks)
        self._closed = True

    def consume(self, chunks: Iterable[str]) -> RenderFrame:
        """Drive a whole synchronous stream through this renderer."""
        self.start()
        try:
            for chunk in chunks:
                if self._closed:
                    break
                self.feed(chunk)
        except Exception:
            logger.exception("Stream failed after %d chunks", self._chunks)
            raise
        return self.finish()

    async def aconsume(self, chunks: AsyncIterable[str]) -> RenderFrame:
        """Drive a whole asynchronous stream through this renderer."""
        self.start()
        try:
            async for chunk in chunks:
                if self._closed:
                    break
                self.feed(chunk)
        except Exception:
            logger.exception("Stream failed after %d chunks", self._chunks)
            raise
        finally:
            # Release the transport even when the turn was abandoned mid-stream.
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()
        return self.finish()

    def _parse(self, *, final: bool) -> RenderFrame:
        if not self._accumulator and not final:
            return RenderFrame(raw=self.config.placeholder, busy=True)
        if is_placeholder(self._accumulator, self.config):
            return RenderFrame(raw=self._accumulator, busy=True, final=final)
        result: ParseResult = extract(self._accumulator, self.config)
        return RenderFrame(
            raw=self._accumulator,
            document=parse_blocks(result.content),
            suggestions=result.suggestions,
            final=final,
        )

    def _emit(self, frame: RenderFrame) -> RenderFrame:
        self._frame = frame
        if self.on_frame is not None:
            self.on_frame(frame)
        return frame
