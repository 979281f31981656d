from __future__ import annotations
from typing import Any, Dict

from .model import FetchResult, SearchResult, RangeError

NO_STORE = "no-store"


def search_asdict(res: SearchResult) -> Dict[str, Any]:
    """Return the JSON-serialisable search payload."""
    return {
        "q": res.query.needle,
        "totalBytes": res.total_bytes,
        "startOffset": res.start_offset,
        "nextOffset": res.next_offset,
        "hits": [{"offset": h.offset, "snippet": h.snippet} for h in res.hits],
    }


def fetch_headers(res: FetchResult) -> Dict[str, str]:
    """Response headers for a successful range fetch."""
    return {
        "Accept-Ranges": "bytes",
        "Content-Range": res.content_range,
        "Cache-Control": NO_STORE,
    }


def range_error_headers(err: RangeError) -> Dict[str, str]:
    """Response headers for a 416 reply."""
    return {"Content-Range": err.content_range}
