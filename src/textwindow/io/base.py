"""Base protocols and shared helpers for the content layer."""

import io
from typing import BinaryIO, ContextManager, Optional, Protocol, runtime_checkable


READ_CHUNK = 64 * 1024  # 64 KB


@runtime_checkable
class ResourceHandle(Protocol):
    """A readable resource of known, stable size."""

    @property
    def size(self) -> int:
        """Total size of the resource in bytes."""
        ...

    def open_stream(self, start: int = 0) -> ContextManager[BinaryIO]:
        """Open a fresh binary stream positioned at byte `start`.

        A `start` past the end yields an exhausted stream. The stream is
        closed when the context exits, whatever the outcome.
        """
        ...


@runtime_checkable
class ContentSource(Protocol):
    """Resolves opaque resource ids to readable handles."""

    def exists(self, resource_id: str) -> bool:
        ...

    def open_reader(self, resource_id: str) -> Optional[ResourceHandle]:
        """Return a handle for `resource_id`, or None when it has no content."""
        ...


def skip_fully(stream: BinaryIO, count: int, chunk_size: int = READ_CHUNK) -> int:
    """Advance `stream` by `count` bytes, stopping early at end of stream.

    Seekable streams are moved directly; others are read and discarded.
    Returns the number of bytes actually skipped.
    """
    if count <= 0:
        return 0
    if stream.seekable():
        pos = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        target = min(pos + count, end)
        stream.seek(target)
        return target - pos

    remaining = count
    while remaining > 0:
        chunk = stream.read(min(chunk_size, remaining))
        if not chunk:
            break
        remaining -= len(chunk)
    return count - remaining


def read_up_to(stream: BinaryIO, length: int, chunk_size: int = READ_CHUNK) -> bytes:
    """Read `length` bytes, or fewer if the stream ends first."""
    buf = bytearray()
    remaining = length
    while remaining > 0:
        chunk = stream.read(min(chunk_size, remaining))
        if not chunk:
            break
        buf.extend(chunk)
        remaining -= len(chunk)
    return bytes(buf)
