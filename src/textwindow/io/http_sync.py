"""Synchronous HTTP resources using requests."""

import io
import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional
from urllib.parse import quote

import requests

from .base import READ_CHUNK, skip_fully

logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class _ResponseStream(io.RawIOBase):
    """Raw stream over a streamed response body.

    Transport errors raised while iterating are turned into IOError.
    """

    def __init__(self, response: requests.Response, chunk_size: int = READ_CHUNK):
        self._response = response
        self._chunks = response.iter_content(chunk_size=chunk_size)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if not self._pending:
            try:
                self._pending = next(self._chunks, b"")
            except requests.RequestException as e:
                raise IOError(f"GET body read failed: {e}")
        n = min(len(b), len(self._pending))
        b[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n

    def close(self):
        if not self.closed:
            self._response.close()
        super().close()


class HTTPResource:
    """Text resource served over HTTP; size comes from a HEAD request."""

    def __init__(self, url: str, timeout: float = 30.0):
        self.url = url
        self.timeout = timeout
        self.content_length: Optional[int] = None
        self._accept_ranges = False
        self._session = _get_session()

        # Perform HEAD request immediately
        self._perform_head()

    def _perform_head(self):
        """Perform HEAD request to learn the resource size."""
        try:
            response = self._session.head(self.url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise IOError(f"HEAD request failed: {e}")

        if response.status_code in (404, 410):
            raise FileNotFoundError(f"Resource not found: {self.url}")
        if response.status_code >= 400:
            raise IOError(f"HEAD request failed with status {response.status_code}")

        content_length_header = response.headers.get('content-length')
        if content_length_header is None:
            raise IOError(f"Server did not report Content-Length for {self.url}")
        self.content_length = int(content_length_header)

        accept_ranges = response.headers.get('accept-ranges', '').lower()
        self._accept_ranges = accept_ranges == 'bytes'

    @property
    def size(self) -> int:
        return self.content_length

    @contextmanager
    def open_stream(self, start: int = 0) -> Iterator[BinaryIO]:
        """Yield the GET body from `start` as a buffered binary stream; closed on exit.

        Servers that advertised ``Accept-Ranges: bytes`` are asked for
        ``bytes=<start>-`` only. Otherwise, or when the server answers the
        Range request with a full 200, the leading bytes are read and dropped.
        """
        headers = {}
        if start > 0 and self._accept_ranges:
            headers['Range'] = f'bytes={start}-'
        try:
            response = self._session.get(self.url, headers=headers, stream=True,
                                         timeout=self.timeout)
        except requests.RequestException as e:
            raise IOError(f"GET request failed: {e}")
        if response.status_code >= 400:
            response.close()
            raise IOError(f"GET request failed with status {response.status_code}")

        stream = io.BufferedReader(_ResponseStream(response), buffer_size=READ_CHUNK)
        try:
            if start > 0 and response.status_code != 206:
                logger.debug("No range support at %s, reading through %d bytes", self.url, start)
                skip_fully(stream, start)
            yield stream
        finally:
            stream.close()

    def __repr__(self) -> str:
        return f"HTTPResource({self.url})"


class HTTPContentSource:
    """Content source whose resource ids are paths under `base_url`."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = _get_session()

    def url_for(self, resource_id: str) -> str:
        return f"{self.base_url}/{quote(resource_id.lstrip('/'))}"

    def exists(self, resource_id: str) -> bool:
        try:
            response = self._session.head(
                self.url_for(resource_id), timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise IOError(f"HEAD request failed: {e}")
        if response.status_code in (404, 410):
            return False
        if response.status_code >= 400:
            raise IOError(f"HEAD request failed with status {response.status_code}")
        return True

    def open_reader(self, resource_id: str) -> Optional[HTTPResource]:
        try:
            return HTTPResource(self.url_for(resource_id), timeout=self.timeout)
        except FileNotFoundError:
            logger.debug("No content behind %s", resource_id)
            return None


def open_http_resource(url: str, timeout: float = 30.0) -> HTTPResource:
    """Create an HTTP resource handle."""
    return HTTPResource(url, timeout=timeout)
