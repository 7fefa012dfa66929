"""
Export sinks that receive encoded images and offer them to the user.

Classes:
    ExportedImage: Encoded image bytes with a suggested filename
    ExportSink: Protocol for anything that can save an ExportedImage
    DirectorySink: Saves exports into a directory without overwriting
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedImage:
    filename: str
    data: bytes
    mime_type: str


class ExportSink(Protocol):
    def save(self, exported: ExportedImage) -> Optional[Path]:
        ...


class DirectorySink:
    """Write exports into a directory.

    Existing files are never replaced; a numeric suffix is appended instead.
    """

    def __init__(self, directory: Path, create_directories: bool = True) -> None:
        self.directory = Path(directory)
        self.create_directories = create_directories

    def resolve_path(self, filename: str) -> Path:
        """
        Pick a free path in the directory for a filename.

        Raises:
            ValueError: If filename is empty or contains path components
        """
        name = Path(filename).name
        if not filename or name != filename or name in (".", ".."):
            raise ValueError(f"Export filename must be a plain file name: {filename!r}")

        candidate = self.directory / name
        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while candidate.exists():
            candidate = self.directory / f"{stem}_{counter}{suffix}"
            counter += 1
        return candidate

    def save(self, exported: ExportedImage) -> Optional[Path]:
        """
        Write the exported bytes.

        Returns:
            Path written to

        Raises:
            ValueError: If the filename is not a plain file name
            OSError: If the directory is missing or the file cannot be written
        """
        if self.create_directories:
            self.directory.mkdir(parents=True, exist_ok=True)
        elif not self.directory.is_dir():
            raise OSError(f"Output directory does not exist: {self.directory}")

        output_file = self.resolve_path(exported.filename)
        output_file.write_bytes(exported.data)
        logger.info(f"Saved {exported.mime_type} export to {output_file}")
        return output_file
