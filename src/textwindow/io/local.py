"""Local file resources and a directory-backed content source."""

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from .base import skip_fully

logger = logging.getLogger(__name__)


class LocalResource:
    """A text resource backed by a local file or an in-memory binary object."""

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self._path: Optional[Path] = None
        self._data: Optional[bytes] = None  # For in-memory sources

        if hasattr(source, 'read'):
            # BinaryIO object: read all data upfront so every request gets its own stream
            current_pos = source.tell() if source.seekable() else None
            if current_pos is not None:
                source.seek(0)
            self._data = source.read()
            if current_pos is not None:
                source.seek(current_pos)
        else:
            self._path = Path(source)
            if not self._path.is_file():
                raise FileNotFoundError(f"File not found: {self._path}")

    @property
    def size(self) -> int:
        """Return the total size of the source in bytes."""
        if self._data is not None:
            return len(self._data)
        return self._path.stat().st_size

    @contextmanager
    def open_stream(self, start: int = 0) -> Iterator[BinaryIO]:
        """Yield a fresh binary stream at offset `start`; closed on exit."""
        if self._data is not None:
            stream = io.BytesIO(self._data)
        else:
            stream = open(self._path, 'rb')
        try:
            skip_fully(stream, start)
            yield stream
        finally:
            stream.close()

    def __repr__(self) -> str:
        where = str(self._path) if self._path is not None else "<memory>"
        return f"LocalResource({where})"


class DirectoryContentSource:
    """Content source whose resource ids are file paths relative to `root`."""

    def __init__(self, root: Union[Path, str]):
        self.root = Path(root).resolve()

    def _resolve(self, resource_id: str) -> Optional[Path]:
        try:
            path = (self.root / resource_id.lstrip("/")).resolve()
        except ValueError:
            # e.g. an embedded NUL byte
            logger.warning("Unusable resource id: %r", resource_id)
            return None
        if path != self.root and self.root not in path.parents:
            logger.warning("Resource id escapes content root: %s", resource_id)
            return None
        return path

    def exists(self, resource_id: str) -> bool:
        path = self._resolve(resource_id)
        return path is not None and path.exists()

    def open_reader(self, resource_id: str) -> Optional[LocalResource]:
        path = self._resolve(resource_id)
        if path is None or not path.is_file():
            return None
        return LocalResource(path)


def open_local_resource(source: Union[Path, str, BinaryIO]) -> LocalResource:
    """Create a local resource handle."""
    return LocalResource(source)
