"""Forward, line-by-line substring search with resumable byte offsets.

Offsets are approximate: each decoded line is re-encoded as UTF-8 and one
byte is added for its terminator. They are meant as resumption hints for the
next page (``next_offset``) or as jump targets for a range fetch, which trims
to line boundaries anyway.
"""

from __future__ import annotations

import io
import logging

from ..config import Settings, DEFAULT_SETTINGS, MAX_HITS_LIMIT
from ..io.base import ResourceHandle
from .model import (SearchQuery, SearchHit, SearchResult, StopReason,
                    NotFound, IOFault)
from .snippet import make_snippet

logger = logging.getLogger(__name__)


def _parse_int(value, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def clamp_max_hits(value, default: int = 100, limit: int = MAX_HITS_LIMIT) -> int:
    """Coerce a caller-supplied hit cap into ``[1, limit]``; junk means default."""
    return max(1, min(_parse_int(value, default), limit))


def clamp_start_offset(value, total_size: int) -> int:
    """Coerce a caller-supplied offset into ``[0, max(0, total_size - 1)]``."""
    return max(0, min(_parse_int(value, 0), max(0, total_size - 1)))


def search_stream(handle: ResourceHandle | None, query: SearchQuery, *,
                  settings: Settings = DEFAULT_SETTINGS) -> SearchResult:
    """Scan ``handle`` from ``query.start_offset`` for lines containing the needle.

    Stops after ``query.max_hits`` hits or at end of resource. The returned
    ``next_offset`` is the (approximate) offset of the first line that was not
    examined, or ``total_bytes`` when the scan reached the end.
    """
    if handle is None or handle.size == 0:
        raise NotFound("content missing")

    total = handle.size
    hits: list[SearchHit] = []
    offset = query.start_offset
    stop = StopReason.END_OF_RESOURCE

    try:
        with handle.open_stream(query.start_offset) as stream:
            text = io.TextIOWrapper(stream, encoding="utf-8", errors="replace")
            try:
                while True:
                    if len(hits) >= query.max_hits:
                        stop = StopReason.HIT_CAP
                        break
                    line = text.readline()
                    if not line:
                        break
                    line = line.rstrip("\n")

                    if query.needle in line:
                        hits.append(SearchHit(
                            offset=offset,
                            snippet=make_snippet(line, query.needle, settings.snippet_length),
                        ))

                    offset += len(line.encode("utf-8")) + 1
                    if offset >= total:
                        break
            finally:
                # the outer context owns the stream
                text.detach()
    except OSError as e:
        logger.warning("Search read failed on %r: %s", handle, e)
        raise IOFault(f"Read failed: {e}") from e

    next_offset = min(offset, total)
    logger.debug("search %r from %d: %d hits, next %d (%s)",
                 query.needle, query.start_offset, len(hits), next_offset, stop.value)
    return SearchResult(
        query=query,
        total_bytes=total,
        start_offset=query.start_offset,
        next_offset=next_offset,
        hits=hits,
        stop_reason=stop,
    )
