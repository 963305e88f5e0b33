import tempfile
import unittest
from pathlib import Path

from dumpinfo import registry
from dumpinfo.config import ReportConfig, load_config, normalize, save_config
from dumpinfo.errors import ConfigError
from engine import bootstrap_categories


class ReportConfigTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        bootstrap_categories()

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, text: str) -> Path:
        path = self.root / ".dumpinfo.yml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file_disables_everything(self):
        config = load_config(self.root / "absent.yml", registry())
        self.assertEqual(config.enabled, frozenset())

    def test_toggles_under_dump_key(self):
        path = self._write("dump:\n  agents: true\n  plugins: false\n  environmentVariables: true\n")
        config = load_config(path, registry())
        self.assertEqual(config.enabled, frozenset({"agents", "environment_variables"}))

    def test_toggles_at_document_root(self):
        path = self._write("tools: true\ndirectory_bindings: true\n")
        config = load_config(path, registry())
        self.assertEqual(config.enabled, frozenset({"tools", "directory_bindings"}))

    def test_legacy_toggle_names(self):
        path = self._write("dumpComputers: true\ndumpJdks: true\ndumpPlugins: false\n")
        config = load_config(path, registry())
        self.assertEqual(config.enabled, frozenset({"agents", "tools"}))

    def test_unknown_category_rejected(self):
        path = self._write("dump:\n  gpus: true\n")
        with self.assertRaises(ConfigError) as caught:
            load_config(path, registry())
        self.assertIn("gpus", str(caught.exception))
        self.assertEqual(caught.exception.source, str(path))

    def test_non_boolean_toggle_rejected(self):
        path = self._write("dump:\n  agents: sometimes\n")
        with self.assertRaises(ConfigError):
            load_config(path, registry())

    def test_invalid_yaml_rejected(self):
        path = self._write("dump: [agents\n")
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_save_writes_every_category(self):
        path = self.root / "nested" / "job.yml"
        save_config(path, ReportConfig.of("plugins", "system_properties"), registry())
        text = path.read_text(encoding="utf-8")
        self.assertTrue(text.startswith("dump:\n  agents: false\n"))
        self.assertEqual(load_config(path, registry()).enabled, frozenset({"plugins", "system_properties"}))

    def test_normalize_resolves_aliases(self):
        config = normalize(ReportConfig.of("jdks", "computers"), registry())
        self.assertEqual(config.enabled, frozenset({"tools", "agents"}))


if __name__ == "__main__":
    unittest.main()
