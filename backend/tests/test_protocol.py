"""Tests for the unified stream protocol framing."""

from __future__ import annotations

import json

import pytest

from backend.providers.protocol import (
    ChunkType,
    error_chunk,
    finish_chunk,
    parse_line,
    text_chunk,
)


@pytest.mark.parametrize(
    "text",
    [
        "plain",
        'she said "hi"',
        "line one\nline two\r\n",
        "tab\tand backslash \\",
        "héllo wörld, こんにちは, 🚀",
        "0:not a marker",
    ],
)
def test_text_chunk_payload_decodes_to_original_text(text: str) -> None:
    line = text_chunk(text).encode()

    assert line.startswith("0:")
    assert line.endswith("\n")
    assert line.count("\n") == 1
    assert json.loads(line[2:]) == text
    assert parse_line(line).text == text


def test_error_chunk_is_valid_json_even_with_quotes() -> None:
    line = error_chunk('upstream said "no"\nbye').encode()

    assert line.startswith("3:")
    assert json.loads(line[2:]) == {"message": 'upstream said "no"\nbye'}
    assert parse_line(line).type is ChunkType.ERROR


def test_finish_chunk_reports_stop_and_zero_usage() -> None:
    line = finish_chunk().encode()

    assert line == 'd:{"finishReason":"stop","usage":{"promptTokens":0,"completionTokens":0}}\n'
    chunk = parse_line(line)
    assert chunk.type is ChunkType.FINISH
    assert chunk.finish_reason == "stop"


@pytest.mark.parametrize("line", ["hello", "9:\"x\"", "0:{\"a\":1}", "3:\"oops\""])
def test_parse_line_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(ValueError):
        parse_line(line)
