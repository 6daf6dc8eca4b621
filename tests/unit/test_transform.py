"""Tests for TransformSink and decorator composition."""

from __future__ import annotations

import pytest

from bytestreams.core.buffered import BufferedSink
from bytestreams.core.memory import MemorySink
from bytestreams.core.transform import TransformSink
from bytestreams.core.typed import put_bytes


class TestTransformSink:
    def test_transform_applied_to_each_write(self):
        sink = MemorySink()
        with TransformSink(sink, bytes.upper) as shout:
            assert shout.write(b"Hello, ") == 7
            shout.write(b"world!")
        assert sink.getvalue() == b"HELLO, WORLD!"

    def test_length_changing_transform_reports_caller_count(self):
        sink = MemorySink()
        with TransformSink(sink, lambda chunk: chunk * 2) as doubled:
            assert doubled.write(b"ab") == 2
        assert sink.getvalue() == b"abab"

    def test_flush_passes_through(self, recording_sink):
        with TransformSink(recording_sink, bytes.upper) as shout:
            shout.flush()
        assert recording_sink.flushes == 1

    def test_buffered_over_transform(self):
        sink = MemorySink()
        shout = TransformSink(sink, bytes.upper)
        with BufferedSink(shout, 16) as out:
            put_bytes(out, "Hello, world!")
            assert sink.getvalue() == b""
        assert sink.getvalue() == b"HELLO, WORLD!"
        shout.close()

    def test_transform_sees_buffered_chunks(self, recording_sink):
        seen = []

        def spy(chunk: bytes) -> bytes:
            seen.append(chunk)
            return chunk

        with TransformSink(recording_sink, spy) as spying:
            with BufferedSink(spying, 4) as out:
                out.write(b"abcdefghij")
        assert seen == [b"abcd", b"efgh", b"ij"]

    def test_closed_sink_rejects_writes_and_flushes(self):
        sink = MemorySink()
        shout = TransformSink(sink, bytes.upper)
        shout.close()
        assert shout.closed
        with pytest.raises(ValueError, match="closed"):
            shout.write(b"late")
        with pytest.raises(ValueError, match="closed"):
            shout.flush()
        assert sink.getvalue() == b""

    def test_close_lets_another_decorator_take_over(self):
        sink = MemorySink()
        first = TransformSink(sink, bytes.upper)
        first.close()
        with TransformSink(sink, bytes.lower) as second:
            second.write(b"Quiet")
        with pytest.raises(ValueError):
            first.write(b"LOUD")
        assert sink.getvalue() == b"quiet"
