import json
import tempfile
import unittest
from pathlib import Path

from fixme.core import config as core_config


class CoreConfigTests(unittest.TestCase):
    def test_defaults_fill_missing_keys(self):
        cfg = core_config.normalize_config({"translate_to_english": False})
        self.assertFalse(cfg["translate_to_english"])
        self.assertTrue(cfg["enabled"])
        self.assertEqual(cfg["model"], "gpt-4o-mini")

    def test_invalid_timing_values_fall_back_to_defaults(self):
        cfg = core_config.normalize_config({"poll_interval": -1, "flash_duration": "soon", "request_timeout": 0})
        self.assertEqual(cfg["poll_interval"], core_config.DEFAULT_CONFIG["poll_interval"])
        self.assertEqual(cfg["flash_duration"], core_config.DEFAULT_CONFIG["flash_duration"])
        self.assertEqual(cfg["request_timeout"], core_config.DEFAULT_CONFIG["request_timeout"])

    def test_invalid_temperature_and_model_are_repaired(self):
        cfg = core_config.normalize_config({"temperature": 9, "model": "  "})
        self.assertEqual(cfg["temperature"], core_config.DEFAULT_CONFIG["temperature"])
        self.assertEqual(cfg["model"], core_config.DEFAULT_CONFIG["model"])

    def test_ignored_apps_must_be_a_list(self):
        cfg = core_config.normalize_config({"ignored_apps": "com.apple.Terminal"})
        self.assertEqual(cfg["ignored_apps"], core_config.DEFAULT_CONFIG["ignored_apps"])

    def test_string_booleans_are_coerced(self):
        cfg = core_config.normalize_config(
            {"enabled": "false", "skip_code": "Yes", "filter_apps": 1, "sound_effects": "maybe"}
        )
        self.assertIs(cfg["enabled"], False)
        self.assertIs(cfg["skip_code"], True)
        self.assertIs(cfg["filter_apps"], True)
        self.assertIs(cfg["sound_effects"], core_config.DEFAULT_CONFIG["sound_effects"])

    def test_defaults_are_not_shared_between_calls(self):
        first = core_config.normalize_config({})
        first["ignored_apps"].append("com.example.Editor")
        second = core_config.normalize_config({})
        self.assertNotIn("com.example.Editor", second["ignored_apps"])

    def test_load_save_round_trip_uses_normalization(self):
        original_dir = core_config.CONFIG_DIR
        original_file = core_config.CONFIG_FILE

        try:
            with tempfile.TemporaryDirectory() as tmpdir:
                core_config.CONFIG_DIR = Path(tmpdir)
                core_config.CONFIG_FILE = core_config.CONFIG_DIR / "config.json"

                core_config.save_config({"skip_code": False, "poll_interval": 0})
                loaded = core_config.load_config()

                self.assertFalse(loaded["skip_code"])
                self.assertEqual(loaded["poll_interval"], 1.0)
                self.assertEqual(loaded["model"], "gpt-4o-mini")
        finally:
            core_config.CONFIG_DIR = original_dir
            core_config.CONFIG_FILE = original_file

    def test_config_store_uses_its_own_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "config.json"
            store = core_config.ConfigStore(path)

            store.save({"presentation_mode": True})

            self.assertTrue(path.exists())
            self.assertTrue(json.loads(path.read_text(encoding="utf-8"))["presentation_mode"])
            self.assertTrue(store.load()["presentation_mode"])

    def test_corrupt_file_loads_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text("{not json", encoding="utf-8")

            with self.assertLogs("fixme", level="WARNING") as logs:
                cfg = core_config.load_config(path)

            self.assertEqual(cfg, core_config.normalize_config({}))
            self.assertTrue(any("Failed to load config" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
