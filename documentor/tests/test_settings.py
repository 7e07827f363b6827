"""Tests for documentor settings loading."""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from core.config_loader import ConfigValidationError
from documentor.settings import (
    DEFAULT_SETTINGS,
    DocumentorSettings,
    load_documentor_settings,
    settings_from_mapping,
)


class TestDocumentorSettings(unittest.TestCase):
    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmpdir.name)

    def tearDown(self) -> None:
        self._tmpdir.cleanup()

    def _write(self, name: str, content: str) -> str:
        path = self.tmpdir / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_defaults(self) -> None:
        settings = DocumentorSettings()
        self.assertEqual(settings.marker_type, "EventSource")
        self.assertEqual(settings.source_attribute, "EventSource")
        self.assertEqual(settings.event_attribute, "Event")
        self.assertEqual(
            (settings.name_argument, settings.id_argument, settings.level_argument),
            ("Name", "Id", "Level"),
        )
        self.assertEqual(settings.default_event_id, "")
        self.assertEqual(settings.default_event_level, "Informational")
        self.assertEqual((settings.summary_section, settings.resolution_section),
                         ("summary", "resolution"))
        self.assertEqual(settings.source_extensions, (".cs",))

    def test_no_path_returns_defaults(self) -> None:
        self.assertIs(load_documentor_settings(None, strict=True), DEFAULT_SETTINGS)

    def test_load_yaml_section(self) -> None:
        path = self._write(
            "eventdoc.yml",
            "documentor:\n"
            "  marker_type: TraceSource\n"
            "  event_attribute: Trace\n"
            "  line_separator: \"\\r\\n\"\n"
            "  source_extensions: [.cs, .csx]\n",
        )
        settings = load_documentor_settings(path, strict=True)
        self.assertEqual(settings.marker_type, "TraceSource")
        self.assertEqual(settings.event_attribute, "Trace")
        self.assertEqual(settings.line_separator, "\r\n")
        self.assertEqual(settings.source_extensions, (".cs", ".csx"))
        self.assertEqual(settings.level_argument, "Level")

    def test_load_json_top_level(self) -> None:
        path = self._write("eventdoc.json", json.dumps({"default_event_level": "Verbose"}))
        settings = load_documentor_settings(path, strict=True)
        self.assertEqual(settings.default_event_level, "Verbose")

    def test_unknown_key_non_strict_ignored(self) -> None:
        path = self._write("eventdoc.yml", "marker_typo: X\nevent_attribute: Trace\n")
        with self.assertLogs("core.config_loader", level="WARNING"):
            settings = load_documentor_settings(path, strict=False)
        self.assertEqual(settings.event_attribute, "Trace")
        self.assertEqual(settings.marker_type, "EventSource")

    def test_unknown_key_strict_raises(self) -> None:
        path = self._write("eventdoc.yml", "marker_typo: X\n")
        with self.assertRaises(ConfigValidationError):
            load_documentor_settings(path, strict=True)

    def test_missing_file(self) -> None:
        missing = str(self.tmpdir / "missing.yml")
        self.assertEqual(load_documentor_settings(missing, strict=False), DEFAULT_SETTINGS)
        with self.assertRaises(ConfigValidationError):
            load_documentor_settings(missing, strict=True)

    def test_empty_name_rejected(self) -> None:
        with self.assertRaises(ConfigValidationError):
            settings_from_mapping({"event_attribute": "  "}, strict=True)

    def test_empty_default_allowed(self) -> None:
        settings = settings_from_mapping({"default_event_level": ""}, strict=True)
        self.assertEqual(settings.default_event_level, "")

    def test_wrong_column_count_rejected(self) -> None:
        with self.assertRaises(ConfigValidationError):
            settings_from_mapping({"csv_columns": ["Name", "Id"]}, strict=True)

    def test_non_string_value_non_strict_falls_back(self) -> None:
        with self.assertLogs("core.config_loader", level="WARNING"):
            settings = settings_from_mapping({"marker_type": 42}, strict=False)
        self.assertEqual(settings.marker_type, "EventSource")

    def test_strict_mode_from_environment(self) -> None:
        path = self._write("eventdoc.yml", "marker_typo: X\n")
        with patch.dict(os.environ, {"STRICT_CONFIG_VALIDATION": "true"}):
            with self.assertRaises(ConfigValidationError):
                load_documentor_settings(path)


if __name__ == "__main__":
    unittest.main()
