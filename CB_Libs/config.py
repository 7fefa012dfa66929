"""
Application configuration for Coloring Book.

Settings are resolved in priority order: environment variables, then the
JSON config file, then the dataclass defaults.

Classes:
    ColoringBookConfig: Runtime settings for the application

Functions:
    load_config: Build a config from an optional JSON file and the environment
"""

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from CB_Libs.constants import (
    DEFAULT_FILL_TOLERANCE,
    DEFAULT_REQUEST_TIMEOUT,
    DRAWINGS_DIR_NAME,
    ENV_API_URL,
    ENV_DRAWINGS_DIR,
    ENV_LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@dataclass
class ColoringBookConfig:
    """Runtime settings for the coloring book.

    Attributes:
        drawings_dir: Root directory holding one sub-directory per category
        api_base_url: Base URL of the coloring-book web service (None = offline)
        request_timeout: Timeout in seconds for HTTP requests
        fill_tolerance: Per-channel tolerance used by flood fill (0-255)
        download_dir: Directory used when exporting without a dialog
        log_level: Name of the logging level (DEBUG, INFO, ...)
    """
    drawings_dir: str = DRAWINGS_DIR_NAME
    api_base_url: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    fill_tolerance: int = DEFAULT_FILL_TOLERANCE
    download_dir: str = "."
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate and normalize values."""
        if not 0 <= int(self.fill_tolerance) <= 255:
            raise ValueError(f"fill_tolerance must be 0-255, got {self.fill_tolerance}")
        self.fill_tolerance = int(self.fill_tolerance)

        if float(self.request_timeout) <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        self.request_timeout = float(self.request_timeout)

        if self.api_base_url:
            self.api_base_url = self.api_base_url.rstrip("/")
        else:
            self.api_base_url = None

        self.log_level = str(self.log_level).upper()

    @property
    def drawings_path(self) -> Path:
        return Path(self.drawings_dir)

    @property
    def download_path(self) -> Path:
        return Path(self.download_dir)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ColoringBookConfig":
        """Create from dictionary, ignoring unknown keys."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if environ.get(ENV_DRAWINGS_DIR):
        overrides["drawings_dir"] = environ[ENV_DRAWINGS_DIR]
    if environ.get(ENV_API_URL):
        overrides["api_base_url"] = environ[ENV_API_URL]
    if environ.get(ENV_LOG_LEVEL):
        overrides["log_level"] = environ[ENV_LOG_LEVEL]
    return overrides


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ColoringBookConfig:
    """
    Load configuration from a JSON file and the environment.

    A missing config file is not an error; defaults are used instead.

    Args:
        config_path: Optional path to a JSON config file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Resolved ColoringBookConfig

    Raises:
        ValueError: If the file is not valid JSON, not a JSON object,
                    or holds invalid values
    """
    if environ is None:
        environ = os.environ

    data: Dict[str, Any] = {}
    if config_path is not None and Path(config_path).exists():
        try:
            payload = json.loads(Path(config_path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}")

        if not isinstance(payload, dict):
            raise ValueError(f"Config file must contain a JSON object: {config_path}")
        data.update(payload)
        logger.debug(f"Loaded config file: {config_path}")
    elif config_path is not None:
        logger.info(f"Config file not found, using defaults: {config_path}")

    data.update(_env_overrides(environ))
    return ColoringBookConfig.from_dict(data)
