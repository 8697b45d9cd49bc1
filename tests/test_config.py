"""
Config loading: defaults, YAML overrides, recolor section validation.
"""
import inspect
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from recolor.config import DEFAULT_SENTINEL, get_recolor_config, get_service_config, load_config
from recolor.recoloring.orchestrator import apply_assignment
from recolor.recoloring.rewriter import rewrite_layer


class TestConfig(unittest.TestCase):

    def test_missing_file_gives_defaults(self):
        config = load_config(Path("/nonexistent/config.yaml"))
        self.assertEqual(config["service"]["api_base"], "http://localhost:5000")
        self.assertEqual(config["recolor"]["sentinel_layer"], "main")
        self.assertEqual(config["swatches"]["spacing"], 110)

    def test_shipped_default_yaml(self):
        config = load_config()
        self.assertEqual(get_service_config(config)["assign_path"], "/assign_colors")
        self.assertEqual(get_recolor_config(config)["solid_mode"], "replace")

    def test_sentinel_default_is_shared(self):
        self.assertEqual(DEFAULT_SENTINEL, "main")
        self.assertEqual(get_recolor_config({})["sentinel_layer"], DEFAULT_SENTINEL)
        for func in (apply_assignment, rewrite_layer):
            with self.subTest(func=func.__name__):
                self.assertEqual(inspect.signature(func).parameters["sentinel"].default, DEFAULT_SENTINEL)

    def test_partial_override_keeps_section_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "c.yaml"
            path.write_text("service:\n  api_base: http://palette:8000\nrecolor:\n  sentinel_layer: root\n",
                            encoding="utf-8")
            config = load_config(path)
        self.assertEqual(config["service"]["api_base"], "http://palette:8000")
        self.assertEqual(config["service"]["timeout"], 60)
        self.assertEqual(config["recolor"]["sentinel_layer"], "root")
        self.assertEqual(config["recolor"]["duplicate_names"], "error")

    def test_invalid_solid_mode(self):
        with self.assertRaises(ValueError):
            get_recolor_config({"recolor": {"solid_mode": "paint"}})


if __name__ == "__main__":
    unittest.main()
