"""Tests for I/O factory functions."""

import tempfile
import io
from pathlib import Path

from textwindow.io import open_resource, open_content_source
from textwindow.io.local import LocalResource, DirectoryContentSource
from textwindow.io.http_sync import HTTPResource, HTTPContentSource


class TestFactoryFunctions:
    """Test the main factory functions."""

    def test_open_resource_with_path_string(self):
        """Test factory with path string."""
        with tempfile.NamedTemporaryFile() as f:
            f.write(b"0123456789")
            f.flush()

            resource = open_resource(f.name)
            assert isinstance(resource, LocalResource)
            assert resource.size == 10

    def test_open_resource_with_path_object(self):
        """Test factory with Path object."""
        with tempfile.NamedTemporaryFile(delete=False) as f:
            f.write(b"0123456789")
            f.flush()
            temp_path = Path(f.name)

        try:
            resource = open_resource(temp_path)
            assert isinstance(resource, LocalResource)
            with resource.open_stream() as stream:
                assert stream.read(5) == b"01234"
        finally:
            temp_path.unlink()

    def test_open_resource_with_binary_io(self):
        """Test factory with BinaryIO object."""
        resource = open_resource(io.BytesIO(b"0123456789"))
        assert isinstance(resource, LocalResource)
        assert resource.size == 10

    def test_open_resource_with_http_url(self, httpserver):
        """Test factory with HTTP URL."""
        httpserver.expect_request("/doc.txt").respond_with_data(b"abc\n")

        resource = open_resource(httpserver.url_for("/doc.txt"))
        assert isinstance(resource, HTTPResource)
        assert resource.size == 4

    def test_open_content_source(self, tmp_path, httpserver):
        """Directories and base URLs pick the matching content source."""
        assert isinstance(open_content_source(tmp_path), DirectoryContentSource)
        assert isinstance(open_content_source(str(tmp_path)), DirectoryContentSource)
        assert isinstance(open_content_source(httpserver.url_for("/")), HTTPContentSource)
