from __future__ import annotations

ELLIPSIS = "..."
DEFAULT_SNIPPET_LENGTH = 80


def make_snippet(line: str, needle: str, max_len: int = DEFAULT_SNIPPET_LENGTH) -> str:
    """Return at most ``max_len`` characters of ``line`` centred on ``needle``.

    Ellipses mark the sides where the line was cut.
    """
    idx = line.find(needle)
    if idx < 0:
        return line if len(line) <= max_len else line[:max_len] + ELLIPSIS

    start = max(0, idx - max_len // 2)
    end = min(len(line), start + max_len)
    snippet = line[start:end]
    if start > 0:
        snippet = ELLIPSIS + snippet
    if end < len(line):
        snippet = snippet + ELLIPSIS
    return snippet
