import argparse
import logging
import sys
from pathlib import Path

from PyQt5.QtWidgets import QApplication

from CB_Libs.config import ColoringBookConfig, load_config
from CB_Libs.constants import CONFIG_FILE_NAME
from CB_Libs.CatalogLib.drawings_catalog import DrawingRef
from CB_Libs.PaintLib.coloring_window import ColoringBookWindow

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Coloring book for kids")
    parser.add_argument("--config", type=Path, default=Path(CONFIG_FILE_NAME), help="JSON config file")
    parser.add_argument("drawing", nargs="?", help="Drawing path or URL to open directly")
    return parser.parse_args(argv)


def configure(config_path: Path) -> ColoringBookConfig:
    """
    Load the config and set up logging.

    Raises:
        SystemExit: If the config file is invalid
    """
    try:
        config = load_config(config_path)
    except (OSError, ValueError) as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.error(f"Could not load config {config_path}: {e}")
        raise SystemExit(f"Invalid configuration in {config_path}: {e}")

    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO), format=LOG_FORMAT)
    return config


def main(argv=None) -> None:
    args = parse_args(argv)
    config = configure(args.config)

    app = QApplication(sys.argv)
    window = ColoringBookWindow(config)
    if args.drawing:
        filename = Path(args.drawing.split("?")[0]).name
        window.load_drawing(DrawingRef("", filename, args.drawing))
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
