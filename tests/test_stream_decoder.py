import asyncio
import io

import pytest

from streamdiff import json_util
from streamdiff.cancel import CancellationToken
from streamdiff.decoder import BufferedDecoder
from streamdiff.errors import ParseFailure, RunCancelled
from streamdiff.stream_decoder import StreamDecoder, locate_error


def _stream(data: bytes, chunk_size=16384, token=None):
    return asyncio.run(StreamDecoder(chunk_size).decode(io.BytesIO(data), token))


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 7, 4096])
def test_multibyte_characters_split_across_chunks(chunk_size):
    value = [{"s": "\U0001d11e\U0001f600", "t": "é€", "n": None}, [], {}, 0, "\x00"]
    raw = json_util.dumpb(value)
    assert b"\xf0\x9d\x84\x9e" in raw
    assert _stream(raw, chunk_size) == value


def test_truncated_source_reports_element(ascii_records):
    raw = json_util.dumpb(ascii_records)
    start = 1 + sum(len(json_util.dumpb(r)) + 1 for r in ascii_records[:31])
    cut = start + len(json_util.dumpb(ascii_records[31])) // 2
    with pytest.raises(ParseFailure) as ei:
        _stream(raw[:cut], chunk_size=64)
    assert ei.value.path.startswith("$[31]")
    assert ei.value.source == "streaming"


def test_empty_source():
    with pytest.raises(ParseFailure):
        _stream(b"")


def test_cancelled_before_first_read():
    token = CancellationToken()
    token.cancel()
    with pytest.raises(RunCancelled):
        _stream(b"[1,2,3]", token=token)


def test_locate_error():
    assert locate_error(b'[1,2,{"a":tru').startswith("$[2]")
    assert locate_error(b"[1,2]") is None


def test_buffered_failure_has_path():
    with pytest.raises(ParseFailure) as ei:
        BufferedDecoder().decode('[0,{"a":[1,2,}]')
    assert ei.value.path.startswith("$[1].a")
    assert ei.value.source == "buffered"


def test_cut_between_elements_says_after(ascii_records):
    raw = json_util.dumpb(ascii_records)
    start = 1 + sum(len(json_util.dumpb(r)) + 1 for r in ascii_records[:17])
    assert raw[start - 1:start] == b","
    with pytest.raises(ParseFailure) as ei:
        _stream(raw[:start], chunk_size=64)
    assert ei.value.path == "$[16]"
    assert "after $[16]" in str(ei.value)


def test_cut_inside_element_says_at():
    with pytest.raises(ParseFailure) as ei:
        _stream(b'[{"a":1},{"a":', chunk_size=4)
    assert "at $[1].a" in str(ei.value)
