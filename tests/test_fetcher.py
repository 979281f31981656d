"""Tests for line-clean range fetching."""

import io

import pytest

from fakes import FakeHandle, numbered_lines
from textwindow.config import Settings
from textwindow.core.fetcher import fetch_range
from textwindow.core.model import (
    ByteRange, StatusKind, NotFound, IOFault, UnsatisfiableRange, MalformedRange,
)
from textwindow.io.local import LocalResource


class TestFetchRange:
    """Test RangeTextFetcher behaviour."""

    def test_no_range_full_fetch(self):
        """Without a range the first window is served as a full response."""
        data = numbered_lines(50000)  # 500000 bytes
        result = fetch_range(LocalResource(io.BytesIO(data)))

        assert result.status_kind is StatusKind.FULL
        assert result.status_code == 200
        assert result.range == ByteRange(0, 499999)
        assert result.content_range == "bytes 0-499999/500000"
        assert result.payload == data

    def test_partial_range_whole_lines(self):
        """A ranged fetch reports the requested range and returns whole lines."""
        data = numbered_lines(100)  # 1000 bytes
        result = fetch_range(LocalResource(io.BytesIO(data)), "bytes=100-199")

        assert result.status_code == 206
        assert result.content_range == "bytes 100-199/1000"
        # the safe window covers the whole resource, so only the first line goes
        assert result.payload == data[10:]
        assert result.payload.endswith(b"\n")

    def test_small_margin_trims_both_ends(self):
        """Partial lines at both edges of the safe window are dropped."""
        data = numbered_lines(100)
        settings = Settings(safe_margin=15)
        result = fetch_range(FakeHandle(data), "bytes=105-194", settings=settings)

        # safe window 90-209 holds lines 9..20; line 9 is the partial lead-in
        assert result.range == ByteRange(105, 194)
        assert result.payload == data[100:210]

    def test_mid_line_window_edges(self):
        """Window edges that fall mid-line are cut back to line boundaries."""
        data = numbered_lines(100)
        settings = Settings(safe_margin=3)
        result = fetch_range(FakeHandle(data), "bytes=105-194", settings=settings)

        # safe window 102-197: tail of line 10 .. head of line 19
        assert result.payload == data[110:190]

    def test_suffix_range_keeps_last_line(self):
        """A fetch reaching the end keeps the final line, even without newline."""
        data = numbered_lines(10) + b"tail-no-newline"
        result = fetch_range(FakeHandle(data), "bytes=-5", settings=Settings(safe_margin=30))

        assert result.range == ByteRange(len(data) - 5, len(data) - 1)
        assert result.payload.endswith(b"tail-no-newline")
        assert result.payload.startswith(b"line")

    def test_multibyte_boundaries(self):
        """Ranges splitting UTF-8 sequences decode with replacement and trim clean."""
        data = "aé\nbé\ncé\n".encode("utf-8")  # 4 bytes per line
        result = fetch_range(FakeHandle(data), "bytes=2-9", settings=Settings(safe_margin=0))

        assert result.payload == "bé\n".encode("utf-8")

    def test_long_line_not_trimmed(self):
        """A line longer than the margin is returned untrimmed."""
        data = b"x" * 20000
        result = fetch_range(FakeHandle(data), "bytes=10000-10009")

        assert result.payload == data[10000 - 4096:10009 + 4096 + 1]

    def test_short_read_tolerated(self):
        """A stream ending before the reported size is not an error."""
        data = numbered_lines(10)
        handle = FakeHandle(data, size=len(data) + 500)
        result = fetch_range(handle, "bytes=0-")

        assert result.payload == data
        assert result.range == ByteRange(0, len(data) + 499)

    def test_range_errors_propagate(self):
        """Range errors surface with the total size and without opening the stream."""
        handle = FakeHandle(numbered_lines(100))

        with pytest.raises(UnsatisfiableRange) as exc:
            fetch_range(handle, "bytes=2000-")
        assert exc.value.total_size == 1000
        with pytest.raises(MalformedRange):
            fetch_range(handle, "lines=1-2")
        assert handle.opened == 0

    def test_missing_or_empty_handle(self):
        """A missing or empty resource is NotFound."""
        with pytest.raises(NotFound):
            fetch_range(None)
        with pytest.raises(NotFound):
            fetch_range(FakeHandle(b""))

    def test_stream_opened_once_and_closed(self):
        """The stream is opened exactly once and released afterwards."""
        handle = FakeHandle(numbered_lines(100))
        fetch_range(handle, "bytes=10-20")

        assert handle.opened == 1
        assert handle.closed == 1

    def test_io_fault_releases_stream(self):
        """Read failures become IOFault and the stream is still closed."""
        handle = FakeHandle(numbered_lines(100), fail_after=50)

        with pytest.raises(IOFault, match="device went away"):
            fetch_range(handle, "bytes=100-199", settings=Settings(safe_margin=0))
        assert handle.closed == 1
