"""Unit tests for stored default settings."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pagefill.settings import FormatSettings
from pagefill.settings_persistence import SettingsPersistence, get_persistence


class TestSettingsPersistence(unittest.TestCase):
    """Test settings persistence functionality."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.persistence = SettingsPersistence()
        self.persistence._config_dir = Path(self.temp_dir) / "config"
        self.persistence._settings_file = self.persistence._config_dir / "settings.json"
        self.persistence._settings_cache = None

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_raw(self, text):
        self.persistence._config_dir.mkdir(parents=True, exist_ok=True)
        self.persistence.settings_file.write_text(text, encoding="utf-8")
        self.persistence.clear_cache()

    def test_missing_file_gives_builtin_defaults(self):
        self.assertEqual(self.persistence.load_defaults(), FormatSettings())

    def test_save_and_load_defaults(self):
        settings = FormatSettings(text_width=60, paragraph_skip=1, justify=False)
        self.assertTrue(self.persistence.save_defaults(settings))

        self.persistence.clear_cache()
        self.assertEqual(self.persistence.load_defaults(), settings)

    def test_saved_file_is_json(self):
        self.persistence.save_defaults(FormatSettings(text_width=55))
        with open(self.persistence.settings_file, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["defaults"]["text_width"], 55)
        self.assertFalse(self.persistence.settings_file.with_suffix(".tmp").exists())

    def test_corrupt_file_gives_builtin_defaults(self):
        self.write_raw("{not json")
        with self.assertLogs("pagefill.settings_persistence", level="WARNING"):
            self.assertEqual(self.persistence.load_defaults(), FormatSettings())

    def test_non_dict_file_ignored(self):
        self.write_raw("[1, 2, 3]")
        with self.assertLogs("pagefill.settings_persistence", level="WARNING"):
            self.assertEqual(self.persistence.load_defaults(), FormatSettings())

    def test_invalid_entries_dropped(self):
        self.write_raw(json.dumps({"defaults": {
            "text_width": "wide",
            "paragraph_skip": 2,
            "fill": 1,
            "unknown": True,
        }}))
        with self.assertLogs("pagefill.settings_persistence", level="WARNING") as logs:
            settings = self.persistence.load_defaults()
        self.assertEqual(settings, FormatSettings(paragraph_skip=2))
        self.assertEqual(len(logs.output), 3)

    def test_inconsistent_defaults_fall_back(self):
        self.write_raw(json.dumps({"defaults": {"text_width": 2}}))
        with self.assertLogs("pagefill.settings_persistence", level="WARNING"):
            self.assertEqual(self.persistence.load_defaults(), FormatSettings())

    def test_save_failure_returns_false(self):
        with patch("pathlib.Path.replace", side_effect=OSError("disk full")):
            with self.assertLogs("pagefill.settings_persistence", level="WARNING"):
                self.assertFalse(self.persistence.save_defaults(FormatSettings()))

    def test_validate_setting(self):
        p = self.persistence
        self.assertTrue(p.validate_setting("text_width", 65))
        self.assertFalse(p.validate_setting("text_width", -1))
        self.assertFalse(p.validate_setting("text_width", True))
        self.assertTrue(p.validate_setting("paragraph_indentation", -4))
        self.assertFalse(p.validate_setting("text_height", 0))
        self.assertTrue(p.validate_setting("justify", False))
        self.assertFalse(p.validate_setting("fill", "yes"))
        self.assertFalse(p.validate_setting("font_name", "Courier"))

    def test_get_persistence_is_singleton(self):
        self.assertIs(get_persistence(), get_persistence())


if __name__ == '__main__':
    unittest.main()
