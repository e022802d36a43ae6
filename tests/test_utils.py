"""Tests for shared utilities."""

import io

import pytest

from settingsstore.testing import FailingStream
from settingsstore.utils import copy_stream, is_not_empty


class TestIsNotEmpty:

    @pytest.mark.parametrize("value", [None, "", " ", "\t\n ", "\x00\x01\x1f"])
    def test_blank(self, value):
        assert is_not_empty(value) is False

    @pytest.mark.parametrize("value", ["x", " x ", "0", "\u00a0", "\u2003"])
    def test_non_blank(self, value):
        assert is_not_empty(value) is True


class TestCopyStream:

    def test_copies_across_buffer_boundaries(self):
        data = bytes(range(256)) * 10
        sink = io.BytesIO()

        assert copy_stream(io.BytesIO(data), sink, buffer_size=7) is True
        assert sink.getvalue() == data

    def test_leaves_streams_open(self):
        source, sink = io.BytesIO(b"abc"), io.BytesIO()

        copy_stream(source, sink)

        assert not source.closed
        assert not sink.closed

    def test_read_failure_returns_false(self, caplog):
        sink = io.BytesIO()

        assert copy_stream(FailingStream(b"partial"), sink) is False
        assert sink.getvalue() == b"partial"
        assert "Stream copy failed" in caplog.text

    def test_closed_sink_returns_false(self):
        sink = io.BytesIO()
        sink.close()

        assert copy_stream(io.BytesIO(b"abc"), sink) is False
