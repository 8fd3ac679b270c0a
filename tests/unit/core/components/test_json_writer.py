from __future__ import annotations

"""
Unit tests for the streaming JSON writer.

Verifies:
1. Comma placement between siblings at every nesting level.
2. Open/close bookkeeping and misuse detection.
3. Pass-through of undecodable file names via surrogateescape.
"""

import io
import json

import pytest

from duplicacy2ncdu.core.pipeline.components.writer import JsonStreamWriter


def test_nested_arrays_are_compact_and_valid():
    out = io.StringIO()
    w = JsonStreamWriter(out)

    w.begin_array()
    w.value(1)
    w.value({"name": "a b", "n": 2})
    w.begin_array()
    w.value("x")
    w.begin_array()
    w.end_array()
    w.end_array()
    w.value(True)
    w.end_array()
    w.finish()

    assert out.getvalue() == '[1,{"name":"a b","n":2},["x",[]],true]\n'
    assert json.loads(out.getvalue()) == [1, {"name": "a b", "n": 2}, ["x", []], True]
    assert w.opens == w.closes == 3


def test_writes_are_incremental():
    out = io.StringIO()
    w = JsonStreamWriter(out)
    w.begin_array()
    w.value("first")
    assert out.getvalue() == '["first"'
    assert w.depth == 1


def test_non_ascii_names_written_verbatim():
    out = io.StringIO()
    w = JsonStreamWriter(out)
    w.value({"name": "café"})
    w.finish()
    assert out.getvalue() == '{"name":"café"}\n'


def test_surrogate_escaped_names_roundtrip_to_bytes():
    raw_name = b"caf\xe9".decode("utf-8", errors="surrogateescape")
    buffer = io.BytesIO()
    out = io.TextIOWrapper(buffer, encoding="utf-8", errors="surrogateescape")
    w = JsonStreamWriter(out)
    w.value({"name": raw_name})
    w.finish()

    assert buffer.getvalue() == b'{"name":"caf\xe9"}\n'


def test_end_without_open_raises():
    w = JsonStreamWriter(io.StringIO())
    with pytest.raises(ValueError):
        w.end_array()


def test_finish_with_open_array_raises():
    w = JsonStreamWriter(io.StringIO())
    w.begin_array()
    with pytest.raises(ValueError):
        w.finish()


def test_finish_empty_document_raises():
    with pytest.raises(ValueError):
        JsonStreamWriter(io.StringIO()).finish()


def test_second_top_level_value_raises():
    w = JsonStreamWriter(io.StringIO())
    w.begin_array()
    w.end_array()
    with pytest.raises(ValueError):
        w.value(1)
