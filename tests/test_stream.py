"""Tests for the chunk-by-chunk stream renderer.

Covers:
- Busy placeholder frames from both the streaming and the one-shot path
- Per-chunk re-parse, final frame and turn suggestions
- Chunk-size independence and async consumption
- Abandoned turns, transport release and transport errors
"""

from __future__ import annotations

import asyncio

import pytest

from chatmark.parser.base import CodeBlock, Paragraph, Text
from chatmark.stream import RenderFrame, StreamRenderer, is_placeholder, render_text

_RESPONSE = "Here is code:\n```python\nprint(1)\n```\nDone.\n[SUGGESTIONS]\n- More?\n- Less?"


def _chunks(text: str, size: int) -> list[str]:
    return [text[i:i + size] for i in range(0, len(text), size)]


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def test_start_is_busy() -> None:
    frame = StreamRenderer().start()
    assert frame.busy
    assert frame.document == ()
    assert is_placeholder(frame.raw)


def test_feed_replaces_frame() -> None:
    renderer = StreamRenderer()
    renderer.start()
    first = renderer.feed("Hel")
    second = renderer.feed("lo")
    assert first.document == (Paragraph((Text("Hel"),)),)
    assert second.document == (Paragraph((Text("Hello"),)),)
    assert renderer.accumulator == "Hello"
    assert not second.busy
    assert not second.final


def test_open_fence_streams_as_code() -> None:
    renderer = StreamRenderer()
    renderer.start()
    frame = renderer.feed("```python\nprint(1)")
    assert frame.document == (CodeBlock(language="python", lines=("print(1)",), closed=False),)
    frame = renderer.feed("\n```")
    assert frame.document == (CodeBlock(language="python", lines=("print(1)",), closed=True),)


def test_finish_sets_turn_suggestions() -> None:
    renderer = StreamRenderer()
    frame = renderer.consume(_chunks(_RESPONSE, 3))
    assert frame.final
    assert frame.suggestions == ("More?", "Less?")
    assert renderer.turn_suggestions == ("More?", "Less?")
    assert frame.document[-1] == Paragraph((Text("Done."),))


def test_intermediate_frames_never_fail() -> None:
    frames: list[RenderFrame] = []
    renderer = StreamRenderer(on_frame=frames.append)
    renderer.consume(_chunks(_RESPONSE, 1))
    # start + one per chunk + finish
    assert len(frames) == len(_RESPONSE) + 2
    assert frames[0].busy
    assert frames[-1].final


def test_chunking_does_not_change_final_frame() -> None:
    whole = StreamRenderer().consume([_RESPONSE])
    pieces = StreamRenderer().consume(_chunks(_RESPONSE, 7))
    assert whole == pieces
    assert whole == render_text(_RESPONSE)


def test_finish_without_chunks() -> None:
    frame = StreamRenderer().consume([])
    assert frame.final
    assert frame.document == ()
    assert frame.suggestions == ()


# ---------------------------------------------------------------------------
# Abandoned turns and failures
# ---------------------------------------------------------------------------

def test_closed_turn_discards_chunks() -> None:
    renderer = StreamRenderer()
    renderer.start()
    frame = renderer.feed("kept")
    renderer.close()
    assert renderer.feed(" late") is frame
    assert renderer.accumulator == "kept"
    assert renderer.finish() is frame
    assert renderer.turn_suggestions == ()


def test_transport_error_propagates() -> None:
    def broken():
        yield "partial"
        raise ConnectionError("backend went away")

    renderer = StreamRenderer()
    with pytest.raises(ConnectionError):
        renderer.consume(broken())
    assert renderer.accumulator == "partial"
    assert not renderer.frame.final


def test_async_consume_matches_sync() -> None:
    async def stream():
        for chunk in _chunks(_RESPONSE, 5):
            await asyncio.sleep(0)
            yield chunk

    frame = asyncio.run(StreamRenderer().aconsume(stream()))
    assert frame == StreamRenderer().consume([_RESPONSE])


def test_async_abandoned_turn_releases_transport() -> None:
    released: list[bool] = []

    async def stream():
        try:
            for chunk in ("first", "second", "third"):
                yield chunk
        finally:
            released.append(True)

    async def run() -> tuple[RenderFrame, list[bool]]:
        renderer = StreamRenderer()
        renderer.on_frame = lambda frame: renderer.close() if frame.raw == "first" else None
        frame = await renderer.aconsume(stream())
        return frame, list(released)

    frame, released_before_loop_exit = asyncio.run(run())
    assert released_before_loop_exit == [True]
    assert frame.raw == "first"
    assert not frame.final


# ---------------------------------------------------------------------------
# One-shot rendering
# ---------------------------------------------------------------------------

def test_render_text_placeholder_is_busy() -> None:
    assert render_text("...").busy


def test_streamed_placeholder_matches_one_shot() -> None:
    streamed = StreamRenderer().consume(["..."])
    assert streamed.busy
    assert streamed.final
    assert streamed.document == ()
    assert streamed == render_text("...")


def test_placeholder_split_across_chunks_is_busy() -> None:
    renderer = StreamRenderer()
    renderer.start()
    assert not renderer.feed("..").busy
    assert renderer.feed(".").busy


def test_custom_placeholder() -> None:
    from chatmark.config import ParserConfig

    config = ParserConfig(placeholder="<pending>")
    assert is_placeholder("<pending>", config)
    assert not is_placeholder("...", config)
    assert StreamRenderer(config=config).start().raw == "<pending>"
