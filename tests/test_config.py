import json
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from termcapture import (
    DEFAULT_CONFIG,
    DEFAULT_FILENAME,
    ENCODING,
    FLUSH_INTERVAL,
    config,
)


class TestDefaults(unittest.TestCase):
    """Test configuration defaults"""

    def test_default_values_exist(self):
        """Test that default configuration values are set"""
        self.assertIsInstance(DEFAULT_FILENAME, str)
        self.assertTrue(DEFAULT_FILENAME)
        self.assertIsInstance(ENCODING, str)

    def test_flush_interval_is_positive(self):
        """Test that the periodic flush interval is usable"""
        self.assertGreater(FLUSH_INTERVAL, 0)

    def test_default_config_keys(self):
        """Test that every setting has a string default"""
        for key, value in DEFAULT_CONFIG.items():
            self.assertTrue(key.startswith("TERMCAPTURE_"))
            self.assertIsInstance(value, str)


class TestSettings(unittest.TestCase):
    """Test setting resolution: Env Var > Config File > Default"""

    def setUp(self):
        """Point the config file at a scratch directory"""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.config_file = self.temp_dir / "config.json"
        self.patches = [
            patch.object(config, "TERMCAPTURE_DIR", self.temp_dir),
            patch.object(config, "CONFIG_FILE", self.config_file),
        ]
        for p in self.patches:
            p.start()

    def tearDown(self):
        for p in self.patches:
            p.stop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_default_when_unset(self):
        """Test falling back to the default"""
        with patch.dict("os.environ", {}, clear=True):
            self.assertEqual(config.get_setting("TERMCAPTURE_FILENAME", "fallback.txt"), "fallback.txt")

    def test_config_file_over_default(self):
        """Test that the config file beats the default"""
        self.config_file.write_text(json.dumps({"TERMCAPTURE_FILENAME": "from_file.txt"}))
        with patch.dict("os.environ", {}, clear=True):
            self.assertEqual(config.get_setting("TERMCAPTURE_FILENAME", "x"), "from_file.txt")

    def test_env_over_config_file(self):
        """Test that an environment variable beats the config file"""
        self.config_file.write_text(json.dumps({"TERMCAPTURE_FILENAME": "from_file.txt"}))
        with patch.dict("os.environ", {"TERMCAPTURE_FILENAME": "from_env.txt"}):
            self.assertEqual(config.get_setting("TERMCAPTURE_FILENAME", "x"), "from_env.txt")

    def test_load_config_file(self):
        """Test that the JSON config file is read as a dict"""
        self.config_file.write_text(json.dumps({"TERMCAPTURE_ENCODING": "latin-1"}))
        self.assertEqual(config.load_config(), {"TERMCAPTURE_ENCODING": "latin-1"})

    def test_missing_config_file(self):
        """Test that no config file means no overrides"""
        self.assertEqual(config.load_config(), {})

    def test_float_setting_from_config_file(self):
        """Test that the flush interval can come from the config file"""
        self.config_file.write_text(json.dumps({"TERMCAPTURE_FLUSH_INTERVAL": 0.25}))
        with patch.dict("os.environ", {}, clear=True):
            self.assertEqual(config.get_float_setting("TERMCAPTURE_FLUSH_INTERVAL", 1.0), 0.25)

    @patch("termcapture.config.err_console")
    def test_load_invalid_json(self, mock_console):
        """Test that a broken config file is reported and ignored"""
        self.config_file.write_text("invalid json content {{{")
        self.assertEqual(config.load_config(), {})
        mock_console.print.assert_called_once()

    @patch("termcapture.config.err_console")
    def test_invalid_float_uses_default(self, mock_console):
        """Test that a non-numeric interval falls back with a warning"""
        with patch.dict("os.environ", {"TERMCAPTURE_FLUSH_INTERVAL": "soon"}):
            self.assertEqual(config.get_float_setting("TERMCAPTURE_FLUSH_INTERVAL", 1.0), 1.0)
        mock_console.print.assert_called_once()


if __name__ == "__main__":
    unittest.main()
