"""
Client for the web service's drawing generation endpoint.

The service turns a text theme into a new line-art drawing and answers with
the stored drawing's filename and URL. Prompting and storage happen on the
server.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from CB_Libs.config import ColoringBookConfig
from CB_Libs.constants import GENERATE_DRAWING_PATH

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """The drawing could not be generated."""


@dataclass(frozen=True)
class GeneratedDrawing:
    filename: str
    url: Optional[str] = None


class DrawingGenerator:
    """POST a theme to the generation endpoint and return the new drawing."""

    def __init__(self, config: ColoringBookConfig, session: Optional[Any] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        if not self.config.api_base_url:
            raise GenerationError("No API base URL configured for drawing generation")
        return f"{self.config.api_base_url}{GENERATE_DRAWING_PATH}"

    def generate(self, theme: str) -> GeneratedDrawing:
        """
        Request a new drawing for a theme.

        Args:
            theme: Free-text theme, e.g. 'a dragon reading a book'

        Returns:
            GeneratedDrawing with the stored filename and URL

        Raises:
            ValueError: If the theme is empty
            GenerationError: If the service is unreachable or answers with an error
        """
        theme = (theme or "").strip()
        if not theme:
            raise ValueError("Please enter a theme for the drawing.")

        endpoint = self.endpoint
        logger.info(f"Requesting drawing for theme: {theme!r}")
        try:
            response = self.session.post(
                endpoint,
                json={"theme": theme},
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise GenerationError(f"Connection error. Please check if the server is running. ({e})")

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.error(f"Non-JSON response from {endpoint}: {response.text[:200]!r}")
            raise GenerationError(
                "Server returned an invalid response. "
                "Please check if the server is running correctly."
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError(f"Server returned malformed JSON: {e}")

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise GenerationError(message or "Error generating drawing")

        if not isinstance(data, dict) or not data.get("filename"):
            raise GenerationError("Server response did not include a filename")

        drawing = GeneratedDrawing(filename=str(data["filename"]), url=data.get("url"))
        logger.info(f"Generated drawing: {drawing.filename}")
        return drawing
