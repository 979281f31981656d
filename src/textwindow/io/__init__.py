"""Content layer for textwindow - resolves sources to readable resources."""

# Re-export these for import convenience
from .base import ResourceHandle, ContentSource, skip_fully, read_up_to
from .local import LocalResource, DirectoryContentSource, open_local_resource
from .http_sync import HTTPResource, HTTPContentSource, open_http_resource


def _is_url(source) -> bool:
    return str(source).startswith(('http://', 'https://'))


def open_resource(source, *, timeout: float = 30.0):
    """Factory function to create the appropriate resource handle for a source."""
    if hasattr(source, 'read'):  # BinaryIO
        return open_local_resource(source)

    source_str = str(source)
    if _is_url(source_str):
        return open_http_resource(source_str, timeout=timeout)
    return open_local_resource(source)


def open_content_source(root, *, timeout: float = 30.0):
    """Factory function for a content source rooted at a directory or base URL."""
    if _is_url(root):
        return HTTPContentSource(str(root), timeout=timeout)
    return DirectoryContentSource(root)
