from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class StatusKind(str, Enum):
    FULL = "full"
    PARTIAL = "partial"


class StopReason(str, Enum):
    HIT_CAP = "hit_cap"
    END_OF_RESOURCE = "end_of_resource"


@dataclass(slots=True, frozen=True)
class ByteRange:
    start: int
    end: int                   # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(slots=True, frozen=True)
class SafeWindow:
    safe_start: int
    safe_end: int              # inclusive

    @property
    def length(self) -> int:
        return self.safe_end - self.safe_start + 1


@dataclass(slots=True, frozen=True)
class FetchResult:
    status_kind: StatusKind
    range: ByteRange           # what the client asked for, not the safe window
    total_size: int
    payload: bytes

    @property
    def partial(self) -> bool:
        return self.status_kind is StatusKind.PARTIAL

    @property
    def status_code(self) -> int:
        return 206 if self.partial else 200

    @property
    def content_range(self) -> str:
        return f"bytes {self.range.start}-{self.range.end}/{self.total_size}"


@dataclass(slots=True, frozen=True)
class SearchQuery:
    needle: str
    start_offset: int = 0
    max_hits: int = 100

    def __post_init__(self):
        if not self.needle:
            raise ValueError("needle must be a non-empty string")
        if self.start_offset < 0:
            raise ValueError(f"start_offset cannot be negative, got {self.start_offset}")
        if not 1 <= self.max_hits <= 1000:
            raise ValueError(f"max_hits must be between 1 and 1000, got {self.max_hits}")


@dataclass(slots=True, frozen=True)
class SearchHit:
    offset: int                # approximate byte offset of the line start
    snippet: str


@dataclass(slots=True)
class SearchResult:
    query: SearchQuery
    total_bytes: int
    start_offset: int
    next_offset: int
    hits: List[SearchHit] = field(default_factory=list)
    stop_reason: StopReason = StopReason.END_OF_RESOURCE


class TextWindowError(RuntimeError):
    """Base class for errors surfaced to callers of fetch/search."""
    pass


class BadRequest(TextWindowError):
    """Raised when a required input is missing or blank."""
    pass


class NotFound(TextWindowError):
    """Raised when a resource id does not resolve or its content is absent."""
    pass


class RangeError(TextWindowError):
    """Raised when a range cannot be served; carries the resource size."""

    def __init__(self, message: str, total_size: int):
        super().__init__(message)
        self.total_size = total_size

    @property
    def content_range(self) -> str:
        return f"bytes */{self.total_size}"


class MalformedRange(RangeError):
    """Raised when a range spec does not match the bytes=START-END syntax."""
    pass


class UnsatisfiableRange(RangeError):
    """Raised when a syntactically valid range lies outside the resource."""
    pass


class IOFault(TextWindowError):
    """Raised when the underlying stream fails mid-operation."""
    pass
