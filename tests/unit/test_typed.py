"""Unit tests for the typed helpers — fixed-size values and delimited reads."""

from __future__ import annotations

import struct

import pytest

from bytestreams.config import settings
from bytestreams.core.errors import WriteError
from bytestreams.core.memory import MemorySink, MemorySource, SpanSink
from bytestreams.core.typed import (
    FLOAT64,
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    fixed_struct,
    get_byte,
    get_char,
    get_fixed,
    ignore_bytes,
    print_to,
    put_bytes,
    put_char,
    put_fixed,
    put_line,
    read_exact,
    read_line,
    read_until,
)

BOUNDARY_VALUES = [
    (INT8, 0), (INT8, -1), (INT8, -128), (INT8, 127),
    (UINT8, 0), (UINT8, 0xFF),
    (INT16, 0), (INT16, -1), (INT16, -(2**15)),
    (UINT16, 0xFFFF),
    (INT32, 0), (INT32, -1), (INT32, -(2**31)), (INT32, 2**31 - 1),
    (UINT32, 0xFFFFFFFF),
    (INT64, 0), (INT64, -1), (INT64, -(2**63)), (INT64, 2**63 - 1),
    (UINT64, 0xFFFFFFFFFFFFFFFF),
]


class TestFixedValues:
    @pytest.mark.parametrize(("fmt", "value"), BOUNDARY_VALUES)
    def test_put_then_get_returns_value(self, fmt, value):
        sink = MemorySink()
        assert put_fixed(sink, fmt, value) == fixed_struct(fmt).size
        assert get_fixed(MemorySource(sink.getvalue()), fmt) == value

    def test_sizes_match_fixed_widths(self):
        assert [fixed_struct(f).size for f in (INT8, INT16, INT32, INT64)] == [1, 2, 4, 8]

    def test_host_byte_order(self):
        sink = MemorySink()
        put_fixed(sink, UINT32, 0x01020304)
        assert sink.getvalue() == struct.pack("=I", 0x01020304)

    def test_explicit_byte_order_is_respected(self):
        sink = MemorySink()
        put_fixed(sink, ">H", 0x0102)
        assert sink.getvalue() == b"\x01\x02"
        assert get_fixed(MemorySource(b"\x01\x02"), "<H") == 0x0201

    def test_compound_record_returns_tuple(self):
        sink = MemorySink()
        put_fixed(sink, "hd", -2, 1.5)
        assert len(sink) == 10  # no alignment padding
        assert get_fixed(MemorySource(sink.getvalue()), "hd") == (-2, 1.5)

    def test_precompiled_struct_accepted(self):
        record = struct.Struct("<iI")
        sink = MemorySink()
        put_fixed(sink, record, -7, 7)
        assert get_fixed(MemorySource(sink.getvalue()), record) == (-7, 7)

    def test_float_round_trip(self):
        sink = MemorySink()
        put_fixed(sink, FLOAT64, 3.1415926)
        assert get_fixed(MemorySource(sink.getvalue()), FLOAT64) == 3.1415926

    def test_short_read_returns_none(self):
        source = MemorySource(b"\x01\x02\x03")
        assert get_fixed(source, INT32) is None

    def test_empty_source_returns_none(self):
        assert get_fixed(MemorySource(b""), INT8) is None

    def test_put_into_exact_span(self, control_bytes):
        span = bytearray(len(control_bytes))
        sink = SpanSink(span)
        put_fixed(sink, INT8, 0x01)
        put_fixed(sink, INT16, 0x0202)
        put_fixed(sink, INT32, 0x03030303)
        assert len(sink.unused()) == 8
        put_fixed(sink, INT64, 0x0404040404040404)
        assert bytes(span) == control_bytes

    def test_put_beyond_span_raises(self):
        sink = SpanSink(bytearray(3))
        with pytest.raises(WriteError):
            put_fixed(sink, INT32, 1)

    def test_get_byte_and_char(self):
        source = MemorySource(b"Tx")
        assert get_char(source) == b"T"
        assert get_byte(source) == ord("x")
        assert get_byte(source) is None
        assert get_char(source) is None


class TestReadLine:
    def test_final_line_without_terminator(self):
        source = MemorySource(b"ab\ncd")
        assert read_line(source) == b"ab"
        assert read_line(source) == b"cd"
        assert read_line(source) is None

    def test_trailing_terminator_yields_no_extra_line(self):
        source = MemorySource(b"ab\n")
        assert read_line(source) == b"ab"
        assert read_line(source) is None

    def test_empty_line_is_not_end_of_data(self):
        source = MemorySource(b"\n\nx")
        assert read_line(source) == b""
        assert read_line(source) == b""
        assert read_line(source) == b"x"
        assert read_line(source) is None

    def test_custom_terminator(self):
        source = MemorySource(b"a;b;")
        assert read_line(source, b";") == b"a"
        assert read_line(source, b";") == b"b"
        assert read_line(source, b";") is None

    def test_default_terminator_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "line_terminator", "|")
        source = MemorySource(b"one|two")
        assert read_line(source) == b"one"

    def test_multi_byte_terminator_rejected(self):
        with pytest.raises(ValueError, match="single byte"):
            read_line(MemorySource(b"x"), b"\r\n")

    def test_sentences(self):
        source = MemorySource(b"This is a test.\nThis is only a test.")
        assert read_line(source) == b"This is a test."
        assert read_line(source) == b"This is only a test."


class TestOtherReads:
    def test_read_until_includes_sentinel(self):
        source = MemorySource(b"key=value;rest")
        assert read_until(source, b"=") == b"key="
        assert read_until(source, ord(";")) == b"value;"
        assert read_until(source, b";") == b"rest"
        assert read_until(source, b";") == b""

    def test_ignore_bytes(self):
        source = MemorySource(b"skipme!")
        assert ignore_bytes(source, 6) == 6
        assert read_exact(source, 1) == b"!"
        assert ignore_bytes(source, 4) == 0

    def test_ignore_negative_rejected(self):
        with pytest.raises(ValueError):
            ignore_bytes(MemorySource(b""), -1)

    def test_read_exact_all_or_nothing(self):
        source = MemorySource(b"abcde")
        assert read_exact(source, 3) == b"abc"
        assert read_exact(source, 3) is None


class TestWriters:
    def test_put_bytes_encodes_str(self):
        sink = MemorySink()
        put_bytes(sink, "255;ff;377;11111111")
        assert sink.getvalue() == b"255;ff;377;11111111"

    def test_put_line_appends_terminator(self):
        sink = MemorySink()
        put_line(sink, "255;ff;377;11111111")
        assert sink.getvalue() == b"255;ff;377;11111111\n"

    def test_put_char(self):
        sink = MemorySink()
        put_char(sink, "A")
        put_char(sink, 0x42)
        put_char(sink, b"C")
        assert sink.getvalue() == b"ABC"

    def test_put_bytes_uses_configured_encoding(self, monkeypatch):
        monkeypatch.setattr(settings, "encoding", "utf-16-le")
        sink = MemorySink()
        put_bytes(sink, "hi")
        assert sink.getvalue() == b"h\x00i\x00"

    def test_print_to_formats(self):
        sink = MemorySink()
        count = print_to(sink, "{0:d};{0:x};{0:o};{0:b}", 0x00FF)
        assert sink.getvalue() == b"255;ff;377;11111111"
        assert count == len(b"255;ff;377;11111111")
