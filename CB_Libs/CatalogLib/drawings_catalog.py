"""
Filesystem catalog of coloring drawings.

Drawings live under `<drawings_dir>/<category>/<file>`. Each category
directory holding at least one drawing becomes a catalog entry.

Classes:
    DrawingRef: A single drawing (category, filename, source URL)
    CategoryEntry: Display name and sorted drawings of a category

Functions:
    list_categories: Scan the drawings directory
    format_display_name: 'sea-animals' -> 'Sea Animals'
    friendly_name: 'pirate_ship_2.png' -> 'Pirate Ship'
    filename_to_slug: 'Pirate_Ship.png' -> 'pirate-ship'
    find_drawing_by_slug: Look up a drawing by category and slug
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from CB_Libs.constants import DRAWING_EXTENSIONS

logger = logging.getLogger(__name__)

TRAILING_NUMBER_PATTERN = re.compile(r"[\s_-]+\d+$")


@dataclass(frozen=True)
class DrawingRef:
    category: str
    filename: str
    url: str

    @property
    def stem(self) -> str:
        return Path(self.filename).stem

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lstrip(".").lower()

    @property
    def slug(self) -> str:
        return filename_to_slug(self.filename)

    @property
    def display_name(self) -> str:
        return friendly_name(self.filename)


@dataclass
class CategoryEntry:
    name: str
    display_name: str
    drawings: List[DrawingRef] = field(default_factory=list)


def format_display_name(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def remove_trailing_numbers(text: str) -> str:
    if not text:
        return ""
    return TRAILING_NUMBER_PATTERN.sub("", text)


def friendly_name(filename: str) -> str:
    """Human-readable drawing name derived from its filename."""
    if not filename:
        return ""
    name = re.sub(r"\.(svg|png|jpg|jpeg|webp)$", "", filename, flags=re.IGNORECASE)
    name = remove_trailing_numbers(name.replace("_", " "))
    return " ".join(word[:1].upper() + word[1:] for word in name.lower().split(" "))


def filename_to_slug(filename: str) -> str:
    if not filename:
        return ""
    return Path(filename).stem.replace("_", "-").lower().strip()


def is_drawing_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in DRAWING_EXTENSIONS


def list_categories(drawings_dir: Path) -> Dict[str, CategoryEntry]:
    """
    Scan the drawings directory.

    A missing directory yields an empty catalog. Categories without any
    drawing are omitted.

    Args:
        drawings_dir: Root directory of the catalog

    Returns:
        Mapping of category directory name to CategoryEntry, sorted by name
    """
    drawings_dir = Path(drawings_dir)
    catalog: Dict[str, CategoryEntry] = {}

    if not drawings_dir.is_dir():
        logger.info(f"Drawings directory not found: {drawings_dir}")
        return catalog

    for category_dir in sorted(p for p in drawings_dir.iterdir() if p.is_dir()):
        files = sorted(p for p in category_dir.iterdir() if is_drawing_file(p))
        if not files:
            continue

        catalog[category_dir.name] = CategoryEntry(
            name=category_dir.name,
            display_name=format_display_name(category_dir.name),
            drawings=[
                DrawingRef(category=category_dir.name, filename=p.name, url=str(p))
                for p in files
            ],
        )

    logger.debug(f"Found {len(catalog)} categories in {drawings_dir}")
    return catalog


def find_drawing_by_slug(
    catalog: Dict[str, CategoryEntry],
    category: str,
    slug: str,
) -> Optional[DrawingRef]:
    entry = catalog.get(category)
    if entry is None or not slug:
        return None

    slug = slug.lower()
    for drawing in entry.drawings:
        if drawing.slug == slug:
            return drawing
    return None
