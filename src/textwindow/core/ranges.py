"""Byte-range resolution and line-safe windowing for text fetches."""

from __future__ import annotations

import re
from typing import NamedTuple

from .model import ByteRange, SafeWindow, MalformedRange, UnsatisfiableRange

DEFAULT_WINDOW = 1024 * 1024          # served when no range (or no end) is given
DEFAULT_MARGIN = 4096                 # context read on each side before trimming

_RANGE_RE = re.compile(r"^bytes=([0-9]*)-([0-9]*)$")


class ResolvedRange(NamedTuple):
    range: ByteRange
    partial: bool


def resolve_range(range_spec: str | None, total_size: int, *,
                  default_window: int = DEFAULT_WINDOW) -> ResolvedRange:
    """Turn a ``Range`` header value into a concrete inclusive byte range.

    Accepted forms are ``bytes=START-END``, ``bytes=START-`` and
    ``bytes=-SUFFIX``. ``None`` or a blank spec selects the first
    ``default_window`` bytes and is reported as a full (non-partial) fetch.

    Raises MalformedRange for any other syntax and UnsatisfiableRange when
    the range does not overlap the resource.
    """
    if range_spec is None or not range_spec.strip():
        end = min(total_size - 1, default_window - 1)
        if end < 0:
            raise UnsatisfiableRange("Resource is empty", total_size)
        return ResolvedRange(ByteRange(0, end), False)

    m = _RANGE_RE.match(range_spec.strip())
    if m is None or m.group(1) == m.group(2) == "":
        raise MalformedRange(f"Malformed range: {range_spec!r}", total_size)

    first, last = m.group(1), m.group(2)
    if not first:
        # bytes=-SUFFIX: trailing bytes, suffix larger than the resource means all of it
        suffix = min(int(last), total_size)
        start = total_size - suffix
        end = total_size - 1
    else:
        start = int(first)
        end = int(last) if last else start + default_window - 1

    if start < 0 or start >= total_size:
        raise UnsatisfiableRange(
            f"Range start {start} outside resource of {total_size} bytes", total_size)
    end = min(end, total_size - 1)
    if end < start:
        raise UnsatisfiableRange(f"Range end {end} before start {start}", total_size)
    return ResolvedRange(ByteRange(start, end), True)


def expand_window(byte_range: ByteRange, total_size: int,
                  margin: int = DEFAULT_MARGIN) -> SafeWindow:
    """Widen ``byte_range`` by ``margin`` on both sides, clamped to the resource."""
    return SafeWindow(
        safe_start=max(0, byte_range.start - margin),
        safe_end=min(total_size - 1, byte_range.end + margin),
    )


def trim_to_lines(text: str, start: int, end: int, total_size: int) -> str:
    """Drop the partial first/last lines of a decoded safe window.

    ``start``/``end`` are the requested bounds, not the safe ones: a window that
    begins at the start of the resource keeps its first line, and one that
    reaches the end keeps its last line. When no newline exists on the side
    that needs trimming (a line longer than the margin) the text is left as is.
    """
    if start > 0:
        first_nl = text.find("\n")
        if first_nl >= 0:
            text = text[first_nl + 1:]
    if end < total_size - 1:
        last_nl = text.rfind("\n")
        if last_nl >= 0:
            text = text[:last_nl + 1]
    return text
