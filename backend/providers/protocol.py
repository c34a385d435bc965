"""
Unified stream protocol.

Every adapter emits the same line-oriented micro-protocol to clients,
regardless of the upstream wire format:

    0:"text fragment"
    3:{"message": "error text"}
    d:{"finishReason":"stop","usage":{"promptTokens":0,"completionTokens":0}}

One chunk per line, newline terminated. The terminal ``d`` chunk, when
present, is always the last line of the stream.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChunkType(str, Enum):
    """Marker prefixes of the unified stream protocol."""

    TEXT = "0"
    ERROR = "3"
    FINISH = "d"


@dataclass(frozen=True)
class StreamChunk:
    """A single framed unit of the unified stream."""

    type: ChunkType
    text: str = ""
    finish_reason: str | None = None

    def encode(self) -> str:
        """Render the chunk as one newline-terminated protocol line."""
        if self.type is ChunkType.TEXT:
            payload: Any = self.text
        elif self.type is ChunkType.ERROR:
            payload = {"message": self.text}
        else:
            # Token counts are not tracked; usage is always zeroed.
            payload = {
                "finishReason": self.finish_reason or "stop",
                "usage": {"promptTokens": 0, "completionTokens": 0},
            }
        body = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        return f"{self.type.value}:{body}\n"


def text_chunk(text: str) -> StreamChunk:
    return StreamChunk(type=ChunkType.TEXT, text=text)


def error_chunk(message: str) -> StreamChunk:
    return StreamChunk(type=ChunkType.ERROR, text=message)


def finish_chunk(finish_reason: str = "stop") -> StreamChunk:
    return StreamChunk(type=ChunkType.FINISH, finish_reason=finish_reason)


def parse_line(line: str) -> StreamChunk:
    """
    Decode one protocol line back into a StreamChunk.

    Raises:
        ValueError: If the line has no known marker or an invalid payload
    """
    marker, sep, body = line.rstrip("\n").partition(":")
    if not sep:
        raise ValueError(f"Missing chunk marker in line: {line!r}")
    try:
        chunk_type = ChunkType(marker)
    except ValueError as exc:
        raise ValueError(f"Unknown chunk marker: {marker!r}") from exc

    payload = json.loads(body)
    if chunk_type is ChunkType.TEXT:
        if not isinstance(payload, str):
            raise ValueError("Text chunk payload must be a JSON string")
        return text_chunk(payload)
    if not isinstance(payload, dict):
        raise ValueError("Chunk payload must be a JSON object")
    if chunk_type is ChunkType.ERROR:
        return error_chunk(str(payload.get("message", "")))
    return finish_chunk(payload.get("finishReason") or "stop")
