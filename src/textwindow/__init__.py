"""textwindow - line-clean range fetches and resumable search over large text resources."""

from .config import Settings, DEFAULT_SETTINGS
from .core.model import (                                             # re-export
    ByteRange, SafeWindow, FetchResult, StatusKind,
    SearchQuery, SearchHit, SearchResult, StopReason,
    TextWindowError, BadRequest, NotFound, RangeError,
    MalformedRange, UnsatisfiableRange, IOFault,
)
from .core.fetcher import fetch_range
from .core.searcher import search_stream, clamp_max_hits, clamp_start_offset
from .io import open_resource, open_content_source
from .service import TextService


def _open(source, settings: Settings):
    try:
        return open_resource(source, timeout=settings.http_timeout)
    except FileNotFoundError as e:
        raise NotFound(str(e)) from e
    except OSError as e:
        raise IOFault(str(e)) from e


def fetch_text(source, range_spec: str | None = None, *,
               settings: Settings = DEFAULT_SETTINGS) -> FetchResult:
    """Fetch a line-trimmed byte range from a source (path, URL, or file-like object)."""
    return fetch_range(_open(source, settings), range_spec, settings=settings)


def search_text(source, q: str, *, max_hits=None, start_offset=None,
                settings: Settings = DEFAULT_SETTINGS) -> SearchResult:
    """Search a source (path, URL, or file-like object) for lines containing `q`."""
    if not q or not q.strip():
        raise BadRequest("q is required")
    handle = _open(source, settings)
    query = SearchQuery(
        needle=q,
        start_offset=clamp_start_offset(start_offset, handle.size),
        max_hits=clamp_max_hits(max_hits, settings.default_max_hits),
    )
    return search_stream(handle, query, settings=settings)
