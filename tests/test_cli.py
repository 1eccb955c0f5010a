from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from chatmark.cli import _chunked, main


def test_cli_renders_file(tmp_path: Path) -> None:
    src = tmp_path / "reply.md"
    src.write_text("## Answer\n\n- a\n- b\n[SUGGESTIONS]\n1. Tell me more?\n2. Why?\n", encoding="utf-8")
    out = tmp_path / "out" / "reply.html"

    result = CliRunner().invoke(main, [str(src), "-o", str(out), "--chunk-size", "4"])

    assert result.exit_code == 0, result.output
    assert "Suggestion: Tell me more?" in result.output
    assert "Suggestion: Why?" in result.output
    html = out.read_text(encoding="utf-8")
    assert '<h2 class="msg-heading">Answer</h2>' in html
    assert "[SUGGESTIONS]" not in html


def test_cli_reads_stdin(tmp_path: Path) -> None:
    out = tmp_path / "reply.html"
    result = CliRunner().invoke(main, ["-", "-o", str(out), "--dark-mode"], input="plain text")
    assert result.exit_code == 0, result.output
    assert "plain text" in out.read_text(encoding="utf-8")


def test_cli_rejects_bad_marker(tmp_path: Path) -> None:
    result = CliRunner().invoke(main, ["-", "-o", str(tmp_path / "x.html"), "--marker", "["], input="x")
    assert result.exit_code == 2
    assert "--marker" in result.output


def test_chunked() -> None:
    assert _chunked("abcde", 2) == ["ab", "cd", "e"]
    assert _chunked("abc", None) == ["abc"]
