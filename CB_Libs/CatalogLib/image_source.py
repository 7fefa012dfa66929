"""
Image acquisition by URL for the canvas session.

Supports:
- http(s) URLs, fetched with requests
- S3 object URLs, routed through the web service's image proxy when an
  API base URL is configured (avoids CORS-restricted buckets)
- local paths and file:// URLs

Classes:
    ImageLoadError: Raised when image bytes cannot be acquired or decoded
    ImageSource: Fetches raw image bytes

Functions:
    is_s3_url: Check whether a URL points to an S3 bucket
    get_proxy_url: Route an S3 URL through the image proxy
"""

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote, unquote, urlparse

import requests

from CB_Libs.config import ColoringBookConfig
from CB_Libs.constants import PROXY_IMAGE_PATH

logger = logging.getLogger(__name__)


class ImageLoadError(OSError):
    """The source image could not be fetched or decoded."""


def is_s3_url(url: Optional[str]) -> bool:
    if not url:
        return False
    return ".s3." in url and ".amazonaws.com" in url


def get_proxy_url(url: str, api_base_url: Optional[str]) -> str:
    """
    Route an S3 URL through the image proxy.

    URLs that are not S3, or calls without a configured API base URL,
    are returned unchanged.
    """
    if not is_s3_url(url) or not api_base_url:
        return url
    return f"{api_base_url.rstrip('/')}{PROXY_IMAGE_PATH}?url={quote(url, safe='')}"


class ImageSource:
    """Fetch raw image bytes from URLs or local paths."""

    def __init__(self, config: Optional[ColoringBookConfig] = None, session: Optional[Any] = None) -> None:
        self.config = config or ColoringBookConfig()
        self.session = session or requests.Session()

    def resolve_url(self, url: str) -> str:
        return get_proxy_url(url, self.config.api_base_url)

    def fetch_bytes(self, url: str) -> bytes:
        """
        Fetch the bytes behind a URL or path.

        Args:
            url: http(s) URL, file:// URL, or filesystem path

        Returns:
            Raw image bytes

        Raises:
            ImageLoadError: If the resource cannot be read
        """
        if not url or not str(url).strip():
            raise ImageLoadError("No image URL given")

        url = str(url).strip()
        scheme = urlparse(url).scheme.lower()

        if scheme in ("http", "https"):
            return self._fetch_http(self.resolve_url(url))

        if scheme == "file":
            return self._read_file(Path(unquote(urlparse(url).path)))

        return self._read_file(Path(url))

    def _fetch_http(self, url: str) -> bytes:
        logger.debug(f"Fetching image: {url}")
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageLoadError(f"Failed to fetch image {url}: {e}")

        if not response.content:
            raise ImageLoadError(f"Empty response for image {url}")
        return response.content

    def _read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ImageLoadError(f"Failed to read image {path}: {e}")
