"""
Server-sent-event framing for streamed chat completions.

Frames look like ``data: {"choices":[{"delta":{"content":"Hel"}}]}`` followed
by a blank line, and the stream ends with ``data: [DONE]``. The server side
encodes with format_delta_frame()/DONE_FRAME; clients decode with
DeltaStreamParser, which copes with chunks that split lines, JSON frames or
multi-byte UTF-8 characters anywhere.
"""
import codecs
import json
import logging
from typing import AsyncIterable, AsyncIterator, Optional

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"
DONE_FRAME = f"{DATA_PREFIX}{DONE_SENTINEL}\n\n"


def format_delta_frame(content: str) -> str:
    payload = {"choices": [{"delta": {"content": content}}]}
    return f"{DATA_PREFIX}{json.dumps(payload)}\n\n"


def extract_delta(line: str) -> Optional[str]:
    """
    Returns the delta text carried by one SSE line, or None when the line
    carries nothing (blank, comment, non-data field, [DONE], or JSON that
    does not parse).
    """
    line = line.rstrip("\r")
    if not line.strip() or line.startswith(":"):
        return None
    if not line.startswith(DATA_PREFIX):
        return None

    payload = line[len(DATA_PREFIX):].strip()
    if payload == DONE_SENTINEL:
        return None

    try:
        parsed = json.loads(payload)
    except ValueError:
        # Assume an incomplete frame rather than an error
        logger.debug(f"Ignoring unparseable SSE frame: {payload[:80]!r}")
        return None

    try:
        content = parsed["choices"][0]["delta"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) and content else None


class DeltaStreamParser:
    """Incremental decoder: feed() byte chunks in arrival order, then close() once."""

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._closed = False

    def feed(self, chunk: bytes) -> list[str]:
        if self._closed:
            raise RuntimeError("parser already closed")

        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        # The last element is an incomplete line (or "" after a trailing newline)
        self._buffer = lines.pop()
        return self._deltas(lines)

    def close(self) -> list[str]:
        """Flushes the decoder and gives the residual buffer one final parse attempt."""
        if self._closed:
            return []
        self._closed = True

        residual = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        return self._deltas([residual])

    @staticmethod
    def _deltas(lines) -> list[str]:
        deltas = []
        for line in lines:
            content = extract_delta(line)
            if content is not None:
                deltas.append(content)
        return deltas


async def iter_deltas(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Lazily yields delta fragments from an async byte stream until it is exhausted."""
    parser = DeltaStreamParser()
    async for chunk in chunks:
        for content in parser.feed(chunk):
            yield content
    for content in parser.close():
        yield content
