"""
Unit tests for image_source module.

HTTP access is exercised through a mocked requests session.
"""

from unittest.mock import Mock

import pytest
import requests

from CB_Libs.CatalogLib.image_source import (
    ImageLoadError,
    ImageSource,
    get_proxy_url,
    is_s3_url,
)
from CB_Libs.config import ColoringBookConfig

S3_URL = "https://bucket.s3.us-east-1.amazonaws.com/animals/cat.png"


def mock_session(content=b"image-bytes", error=None):
    session = Mock()
    response = Mock()
    response.content = content
    if error is not None:
        response.raise_for_status.side_effect = error
    session.get.return_value = response
    return session


class TestProxyUrl:
    def test_detects_s3(self):
        assert is_s3_url(S3_URL)
        assert not is_s3_url("https://example.com/cat.png")
        assert not is_s3_url(None)

    def test_routes_s3_through_proxy(self):
        proxied = get_proxy_url(S3_URL, "http://api.test/")

        assert proxied == (
            "http://api.test/api/proxy-image?url="
            "https%3A%2F%2Fbucket.s3.us-east-1.amazonaws.com%2Fanimals%2Fcat.png"
        )

    def test_without_api_url_unchanged(self):
        assert get_proxy_url(S3_URL, None) == S3_URL

    def test_non_s3_unchanged(self):
        assert get_proxy_url("https://example.com/a.png", "http://api.test") == "https://example.com/a.png"


class TestImageSource:
    def test_fetches_http(self):
        session = mock_session()
        source = ImageSource(ColoringBookConfig(request_timeout=5), session=session)

        assert source.fetch_bytes("https://example.com/cat.png") == b"image-bytes"
        session.get.assert_called_once_with("https://example.com/cat.png", timeout=5.0)

    def test_s3_fetch_uses_proxy(self):
        session = mock_session()
        source = ImageSource(ColoringBookConfig(api_base_url="http://api.test"), session=session)

        source.fetch_bytes(S3_URL)

        requested = session.get.call_args[0][0]
        assert requested.startswith("http://api.test/api/proxy-image?url=")

    def test_http_error_raises(self):
        session = mock_session(error=requests.HTTPError("404 Not Found"))
        source = ImageSource(session=session)

        with pytest.raises(ImageLoadError):
            source.fetch_bytes("https://example.com/missing.png")

    def test_connection_error_raises(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("refused")
        source = ImageSource(session=session)

        with pytest.raises(ImageLoadError):
            source.fetch_bytes("http://localhost:1/cat.png")

    def test_empty_body_raises(self):
        source = ImageSource(session=mock_session(content=b""))

        with pytest.raises(ImageLoadError):
            source.fetch_bytes("https://example.com/empty.png")

    def test_reads_local_path(self, tmp_path):
        path = tmp_path / "cat.png"
        path.write_bytes(b"local")
        session = Mock()

        assert ImageSource(session=session).fetch_bytes(str(path)) == b"local"
        session.get.assert_not_called()

    def test_reads_file_url(self, tmp_path):
        path = tmp_path / "cat.png"
        path.write_bytes(b"local")

        assert ImageSource(session=Mock()).fetch_bytes(path.as_uri()) == b"local"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ImageLoadError):
            ImageSource(session=Mock()).fetch_bytes(str(tmp_path / "nope.png"))

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_empty_url_raises(self, url):
        with pytest.raises(ImageLoadError):
            ImageSource(session=Mock()).fetch_bytes(url)

    def test_load_error_is_os_error(self):
        assert issubclass(ImageLoadError, OSError)
