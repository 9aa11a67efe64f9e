import json
import pytest

from pathfinder.ai.sse import (
    DeltaStreamParser, extract_delta, format_delta_frame, iter_deltas, DONE_FRAME,
)


def frame(content: str) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}, ensure_ascii=False) + "\n\n"


def parse_chunks(chunks) -> str:
    parser = DeltaStreamParser()
    out = []
    for chunk in chunks:
        out.extend(parser.feed(chunk))
    out.extend(parser.close())
    return "".join(out)


async def agen(chunks):
    for chunk in chunks:
        yield chunk


STREAM = (frame("Hel") + frame("lo, ") + frame("वि") + frame("द्यार्थी 🎓") + DONE_FRAME).encode("utf-8")
EXPECTED = "Hello, विद्यार्थी 🎓"


# -------------------------------------------------
# Line handling
# -------------------------------------------------
def test_extract_delta_reads_content():
    assert extract_delta('data: {"choices":[{"delta":{"content":"Hi"}}]}') == "Hi"


@pytest.mark.parametrize("line", [
    "",
    "   ",
    ": keep-alive",
    "event: message",
    "id: 42",
    "data: [DONE]",
    "data: {not json}",
    'data: {"choices":[]}',
    'data: {"choices":[{"delta":{}}]}',
    'data: {"choices":[{"delta":{"content":""}}]}',
    'data: {"choices":[{"delta":{"content":null}}]}',
    'data: ["not", "an", "object"]',
])
def test_extract_delta_ignores_lines_without_content(line):
    assert extract_delta(line) is None


def test_extract_delta_tolerates_carriage_return():
    assert extract_delta('data: {"choices":[{"delta":{"content":"ok"}}]}\r') == "ok"


def test_format_delta_frame_round_trips_through_extract():
    encoded = format_delta_frame('quote " and newline \n inside')
    assert encoded.endswith("\n\n")
    assert extract_delta(encoded.split("\n")[0]) == 'quote " and newline \n inside'


# -------------------------------------------------
# Chunked decoding
# -------------------------------------------------
def test_json_frame_split_across_chunks():
    chunks = [
        b'data: {"choices":[{"delta":{"content":"Hel',
        b'lo"}}]}\n\n',
    ]
    assert parse_chunks(chunks) == "Hello"


def test_malformed_frame_then_done_yields_nothing():
    assert parse_chunks([b"data: {not json}\n\n", b"data: [DONE]\n\n"]) == ""


def test_whole_stream_in_one_chunk():
    assert parse_chunks([STREAM]) == EXPECTED


def test_every_two_way_split_gives_same_text():
    for i in range(len(STREAM) + 1):
        assert parse_chunks([STREAM[:i], STREAM[i:]]) == EXPECTED, f"split at byte {i}"


def test_byte_at_a_time():
    assert parse_chunks([STREAM[i:i + 1] for i in range(len(STREAM))]) == EXPECTED


def test_multibyte_character_split_inside_code_point():
    emoji = "🎓".encode("utf-8")
    data = frame("🎓").encode("utf-8")
    start = data.index(emoji)
    # Cut after the first and after the third byte of the 4-byte character
    chunks = [data[:start + 1], data[start + 1:start + 3], data[start + 3:]]
    assert parse_chunks(chunks) == "🎓"


def test_non_data_lines_never_contribute():
    stream = (": ping\n" + "event: delta\n" + frame("A") + "retry: 1000\n" + frame("B") + DONE_FRAME).encode()
    assert parse_chunks([stream]) == "AB"


def test_done_sentinel_is_not_terminal():
    stream = (frame("before") + DONE_FRAME + frame(" after")).encode()
    assert parse_chunks([stream]) == "before after"


def test_crlf_line_endings():
    stream = frame("one").replace("\n", "\r\n") + frame(" two").replace("\n", "\r\n")
    assert parse_chunks([stream.encode()]) == "one two"


def test_residual_line_without_newline_is_flushed_on_close():
    parser = DeltaStreamParser()
    assert parser.feed(b'data: {"choices":[{"delta":{"content":"tail"}}]}') == []
    assert parser.close() == ["tail"]


def test_truncated_residual_is_ignored():
    parser = DeltaStreamParser()
    parser.feed(b'data: {"choices":[{"delta":{"con')
    assert parser.close() == []


def test_feed_after_close_raises():
    parser = DeltaStreamParser()
    parser.close()
    with pytest.raises(RuntimeError):
        parser.feed(b"data: [DONE]\n")
    assert parser.close() == []


# -------------------------------------------------
# Async iteration
# -------------------------------------------------
@pytest.mark.asyncio
async def test_iter_deltas_yields_fragments_in_order():
    chunks = [STREAM[:7], STREAM[7:50], STREAM[50:]]
    fragments = [d async for d in iter_deltas(agen(chunks))]
    assert fragments == ["Hel", "lo, ", "वि", "द्यार्थी 🎓"]


@pytest.mark.asyncio
async def test_iter_deltas_on_empty_stream():
    assert [d async for d in iter_deltas(agen([]))] == []
