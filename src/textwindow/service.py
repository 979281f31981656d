"""Request-level fetch and search operations.

`TextService` validates caller input, resolves resource ids through an
injected content source and hands the resulting handle to the core.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .config import Settings, DEFAULT_SETTINGS
from .core.fetcher import fetch_range
from .core.model import BadRequest, NotFound, IOFault, FetchResult, SearchQuery, SearchResult
from .core.searcher import search_stream, clamp_max_hits, clamp_start_offset
from .io.base import ContentSource, ResourceHandle

logger = logging.getLogger(__name__)

IntParam = Union[int, str, None]


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class TextService:
    """Fetch and search text resources from one content source."""

    def __init__(self, content: ContentSource, settings: Settings = DEFAULT_SETTINGS):
        self.content = content
        self.settings = settings

    def _open(self, resource_id: str) -> ResourceHandle:
        try:
            if not self.content.exists(resource_id):
                raise NotFound("resource not found")
            handle = self.content.open_reader(resource_id)
        except OSError as e:
            raise IOFault(f"Content lookup failed: {e}") from e
        if handle is None or handle.size == 0:
            raise NotFound("content missing")
        return handle

    def fetch(self, resource_id: Optional[str], range_header: Optional[str] = None) -> FetchResult:
        """Return the line-trimmed window of `resource_id` selected by `range_header`."""
        if _blank(resource_id):
            raise BadRequest("id parameter is required")
        handle = self._open(resource_id)
        result = fetch_range(handle, range_header, settings=self.settings)
        logger.debug("fetch %s %s -> %d bytes", resource_id, result.content_range,
                     len(result.payload))
        return result

    def search(self, resource_id: Optional[str], q: Optional[str],
               max_hits: IntParam = None, start_offset: IntParam = None) -> SearchResult:
        """Search `resource_id` for `q`, starting near byte `start_offset`.

        `max_hits` and `start_offset` may come straight from a query string:
        values that do not parse fall back to their defaults, and both are
        clamped to their valid ranges.
        """
        if _blank(resource_id) or _blank(q):
            raise BadRequest("id and q are required")
        handle = self._open(resource_id)
        query = SearchQuery(
            needle=q,
            start_offset=clamp_start_offset(start_offset, handle.size),
            max_hits=clamp_max_hits(max_hits, self.settings.default_max_hits),
        )
        return search_stream(handle, query, settings=self.settings)
