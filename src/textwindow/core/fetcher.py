from __future__ import annotations

import logging

from ..config import Settings, DEFAULT_SETTINGS
from ..io.base import ResourceHandle, read_up_to
from .model import FetchResult, StatusKind, NotFound, IOFault
from .ranges import resolve_range, expand_window, trim_to_lines

logger = logging.getLogger(__name__)


def fetch_range(handle: ResourceHandle | None, range_spec: str | None = None, *,
                settings: Settings = DEFAULT_SETTINGS) -> FetchResult:
    """Fetch the requested byte range of a text resource, trimmed to whole lines.

    The range is widened by ``settings.safe_margin`` before reading so that the
    partial first and last lines can be cut without losing requested content.
    The returned result still reports the range the client asked for.
    """
    if handle is None or handle.size == 0:
        raise NotFound("content missing")

    total = handle.size
    resolved = resolve_range(range_spec, total, default_window=settings.default_window)
    rng = resolved.range
    window = expand_window(rng, total, settings.safe_margin)
    logger.debug("range %d-%d/%d, safe window %d-%d",
                 rng.start, rng.end, total, window.safe_start, window.safe_end)

    try:
        with handle.open_stream(window.safe_start) as stream:
            raw = read_up_to(stream, window.length, settings.read_chunk_size)
    except OSError as e:
        logger.warning("Read failed on %r: %s", handle, e)
        raise IOFault(f"Read failed: {e}") from e

    if len(raw) < window.length:
        logger.debug("short read: %d of %d bytes", len(raw), window.length)

    text = raw.decode("utf-8", errors="replace")
    text = trim_to_lines(text, rng.start, rng.end, total)

    return FetchResult(
        status_kind=StatusKind.PARTIAL if resolved.partial else StatusKind.FULL,
        range=rng,
        total_size=total,
        payload=text.encode("utf-8"),
    )
