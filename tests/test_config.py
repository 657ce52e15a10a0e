"""Tests for settings persistence, logging setup and display helpers.

Covers: sw.core.config, sw.common.logger, sw.common.setup, sw.util.misc
"""

import json
import logging
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch


# ──────────────────────────────────────────────────────────────────────────
# config.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestConfig(unittest.TestCase):
    """Tests for loading and saving settings.json."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)

        # Monkey-patch the settings path to use temp dir
        from sw.core import config
        self._orig_settings_path = config.SETTINGS_PATH
        config.SETTINGS_PATH = self._tmppath / "nested" / "settings.json"

    def tearDown(self):
        from sw.core import config
        config.SETTINGS_PATH = self._orig_settings_path
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, payload):
        from sw.core import config
        config.SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(config.SETTINGS_PATH, "w", encoding="utf-8") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)

    def test_fresh_start_returns_defaults(self):
        """No settings file → default settings, nothing written."""
        from sw.core import config
        settings = config.load_settings()
        self.assertEqual(settings["max_time"], "5m")
        self.assertTrue(settings["always_on_top"])
        self.assertEqual(settings["log_level"], "INFO")
        self.assertEqual(settings["schema_version"], 1)
        self.assertFalse(config.SETTINGS_PATH.exists())

    def test_save_and_load_roundtrip(self):
        """save_settings() creates missing folders and the values come back."""
        from sw.core import config
        settings = config.load_settings()
        settings["max_time"] = "90s"
        settings["always_on_top"] = False
        config.save_settings(settings)

        self.assertTrue(config.SETTINGS_PATH.exists())
        loaded = config.load_settings()
        self.assertEqual(loaded["max_time"], "90s")
        self.assertFalse(loaded["always_on_top"])
        self.assertIn("saved_at", loaded)

    def test_missing_keys_filled_with_defaults(self):
        from sw.core import config
        self._write({"max_time": "2m"})
        with self.assertLogs("stopwatch", level="WARNING") as logs:
            loaded = config.load_settings()
        self.assertEqual(loaded["max_time"], "2m")
        self.assertEqual(loaded["log_level"], "INFO")
        self.assertFalse(loaded["console_log"])
        self.assertIn("console_log", logs.output[0])

    def test_invalid_values_replaced(self):
        """A max_time that doesn't parse and wrongly typed values fall back to defaults."""
        from sw.core import config
        self._write({"max_time": "forever", "always_on_top": "yes", "log_level": "LOUD", "console_log": True})
        loaded = config.load_settings()
        self.assertEqual(loaded["max_time"], "5m")
        self.assertTrue(loaded["always_on_top"])
        self.assertEqual(loaded["log_level"], "INFO")
        self.assertTrue(loaded["console_log"])

    def test_corrupted_file_falls_back_to_defaults(self):
        from sw.core import config
        self._write("{invalid json!!")
        loaded = config.load_settings()
        self.assertEqual(loaded, config.build_default_settings())

    def test_non_object_file_falls_back_to_defaults(self):
        from sw.core import config
        self._write([1, 2, 3])
        loaded = config.load_settings()
        self.assertEqual(loaded["max_time"], "5m")

    def test_log_level_lookup(self):
        from sw.core import config
        self.assertEqual(config.log_level({"log_level": "DEBUG"}), logging.DEBUG)
        self.assertEqual(config.log_level({}), logging.INFO)


# ──────────────────────────────────────────────────────────────────────────
# setup.py / logger.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestPaths(unittest.TestCase):

    def test_override_env_var_wins(self):
        from sw.common.setup import ProjectPaths
        with patch.dict(os.environ, {"STOPWATCH_HOME": "/tmp/sw-home", "APPDATA": "/tmp/appdata"}):
            paths = ProjectPaths.build()
        self.assertEqual(paths.data, Path("/tmp/sw-home"))
        self.assertEqual(paths.logs, Path("/tmp/sw-home") / "logs")

    def test_appdata_used_when_no_override(self):
        from sw.common.setup import ProjectPaths
        with patch.dict(os.environ, {"APPDATA": "/tmp/appdata"}):
            os.environ.pop("STOPWATCH_HOME", None)
            paths = ProjectPaths.build()
        self.assertEqual(paths.data, Path("/tmp/appdata") / "Stopwatch")

    def test_ensure_directory(self):
        from sw.common.setup import ensure_directory
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "a" / "b"
            self.assertEqual(ensure_directory(target), target)
            self.assertTrue(target.is_dir())
            with self.assertRaises(FileNotFoundError):
                ensure_directory(Path(tmp) / "missing", must_exist=True)


class TestLogger(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.name = "stopwatch-test"

    def tearDown(self):
        logger = logging.getLogger(self.name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_creates_log_files_once(self):
        from sw.common.logger import get_logger
        log_dir = Path(self.tmpdir)
        logger = get_logger(name=self.name, log_dir=log_dir, historical_debugs=2)
        handler_count = len(logger.handlers)
        get_logger(name=self.name, log_dir=log_dir, historical_debugs=2)

        self.assertEqual(len(logger.handlers), handler_count)
        logger.info("hello")
        self.assertTrue((log_dir / f"{self.name}.log").exists())
        self.assertTrue((log_dir / "latest.log").exists())
        self.assertEqual(len(list((log_dir / "debug").glob(f"{self.name}_*.log"))), 1)

    def test_second_call_relevels_existing_handlers(self):
        """Setting up with defaults first and then from loaded settings moves handlers to the new level."""
        from sw.common.logger import get_logger
        log_dir = Path(self.tmpdir)
        logger = get_logger(name=self.name, log_dir=log_dir, historical_debugs=1)
        get_logger(name=self.name, level=logging.WARNING, log_dir=log_dir, console=True, historical_debugs=1)

        levels = {h.get_name(): h.level for h in logger.handlers}
        self.assertEqual(levels[f"{self.name}:persistent"], logging.WARNING)
        self.assertEqual(levels[f"{self.name}:latest"], logging.WARNING)
        self.assertEqual(levels[f"{self.name}:console"], logging.WARNING)
        self.assertEqual(levels[f"{self.name}:historical_debug"], logging.DEBUG)
        self.assertEqual(len(logger.handlers), 4)

        logger.info("only in the debug file")
        for handler in logger.handlers:
            handler.flush()
        self.assertNotIn("only in the debug file", (log_dir / "latest.log").read_text(encoding="utf-8"))

    def test_console_only_writes_nothing_to_disk(self):
        from sw.common.logger import get_logger
        log_dir = Path(self.tmpdir) / "logs"
        logger = get_logger(name=self.name, log_dir=log_dir, persistent=False, console=True, historical_debugs=0)
        self.assertFalse(log_dir.exists())
        self.assertEqual([h.get_name() for h in logger.handlers], [f"{self.name}:console"])


# ──────────────────────────────────────────────────────────────────────────
# misc.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestFormatTime(unittest.TestCase):

    def test_formats(self):
        from sw.util import format_time
        self.assertEqual(format_time(0), "00:00")
        self.assertEqual(format_time(65), "01:05")
        self.assertEqual(format_time(300), "05:00")
        self.assertEqual(format_time(3725), "1:02:05")
        self.assertEqual(format_time(-3), "00:00")


if __name__ == "__main__":
    unittest.main()
