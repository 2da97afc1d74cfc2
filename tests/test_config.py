import os
import tempfile
import unittest

from petronorm.config import Config, load_config


class ConfigTests(unittest.TestCase):
    def _write(self, text):
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        handle.write(text)
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_defaults(self):
        config = Config()
        config.validate()
        self.assertEqual(config.unit_ratio, 10000.0)
        self.assertEqual(config.iron_mode, "reported")
        self.assertEqual(config.missing_policy, "skip")

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config("/nonexistent/petronorm.yaml"), Config())

    def test_empty_file_gives_defaults(self):
        self.assertEqual(load_config(self._write("")), Config())

    def test_yaml_values(self):
        path = self._write("unit_ratio: 1\niron_mode: ferrous\nclamp_negative_minerals: true\n")
        config = load_config(path)
        self.assertEqual(config.unit_ratio, 1)
        self.assertEqual(config.iron_mode, "ferrous")
        self.assertTrue(config.clamp_negative_minerals)

    def test_unknown_key(self):
        with self.assertRaises(ValueError):
            load_config(self._write("ratio: 2\n"))

    def test_not_a_mapping(self):
        with self.assertRaises(ValueError):
            load_config(self._write("- 1\n- 2\n"))

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            load_config(self._write("iron_mode: oxidized\n"))
        for bad in (
            Config(unit_ratio=0),
            Config(missing_policy="mean"),
            Config(detection_limit_policy="third"),
            Config(total_tolerance=-1.0),
            Config(id_key=""),
        ):
            with self.assertRaises(ValueError):
                bad.validate()


if __name__ == "__main__":
    unittest.main()
