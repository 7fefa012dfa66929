"""
Unit tests for config module.
"""

import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from CB_Libs.config import ColoringBookConfig, load_config


class TestColoringBookConfig(unittest.TestCase):
    """Test ColoringBookConfig validation and serialization."""

    def test_defaults(self):
        config = ColoringBookConfig()

        self.assertEqual(config.fill_tolerance, 30)
        self.assertIsNone(config.api_base_url)
        self.assertEqual(config.drawings_path, Path("drawings"))
        self.assertEqual(config.log_level, "INFO")

    def test_normalizes_values(self):
        config = ColoringBookConfig(api_base_url="http://api.test/", log_level="debug")

        self.assertEqual(config.api_base_url, "http://api.test")
        self.assertEqual(config.log_level, "DEBUG")

    def test_empty_api_url_is_none(self):
        self.assertIsNone(ColoringBookConfig(api_base_url="").api_base_url)

    def test_invalid_tolerance(self):
        with self.assertRaises(ValueError):
            ColoringBookConfig(fill_tolerance=256)
        with self.assertRaises(ValueError):
            ColoringBookConfig(fill_tolerance=-1)

    def test_invalid_timeout(self):
        with self.assertRaises(ValueError):
            ColoringBookConfig(request_timeout=0)

    def test_dict_round_trip(self):
        config = ColoringBookConfig(drawings_dir="pages", fill_tolerance=12)

        restored = ColoringBookConfig.from_dict(config.to_dict())

        self.assertEqual(restored, config)

    def test_from_dict_ignores_unknown_keys(self):
        config = ColoringBookConfig.from_dict({"fill_tolerance": 5, "theme": "dark"})

        self.assertEqual(config.fill_tolerance, 5)


class TestLoadConfig(unittest.TestCase):
    """Test load_config file and environment resolution."""

    def setUp(self):
        self.temp_dir = TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "coloring_book.json"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_missing_file_uses_defaults(self):
        config = load_config(self.config_path, environ={})

        self.assertEqual(config, ColoringBookConfig())

    def test_reads_file(self):
        self.config_path.write_text(json.dumps({"drawings_dir": "pages", "fill_tolerance": 10}))

        config = load_config(self.config_path, environ={})

        self.assertEqual(config.drawings_dir, "pages")
        self.assertEqual(config.fill_tolerance, 10)

    def test_environment_overrides_file(self):
        self.config_path.write_text(json.dumps({"drawings_dir": "pages", "api_base_url": "http://file"}))
        environ = {
            "COLORING_BOOK_DRAWINGS_DIR": "/srv/drawings",
            "COLORING_BOOK_API_URL": "http://env/",
            "COLORING_BOOK_LOG_LEVEL": "warning",
        }

        config = load_config(self.config_path, environ=environ)

        self.assertEqual(config.drawings_dir, "/srv/drawings")
        self.assertEqual(config.api_base_url, "http://env")
        self.assertEqual(config.log_level, "WARNING")

    def test_invalid_json(self):
        self.config_path.write_text("{not json")

        with self.assertRaises(ValueError):
            load_config(self.config_path, environ={})

    def test_non_object_json(self):
        self.config_path.write_text("[1, 2, 3]")

        with self.assertRaises(ValueError):
            load_config(self.config_path, environ={})

    def test_invalid_value_in_file(self):
        self.config_path.write_text(json.dumps({"fill_tolerance": 999}))

        with self.assertRaises(ValueError):
            load_config(self.config_path, environ={})


if __name__ == "__main__":
    unittest.main()
