"""
Unit tests for parser.py

Tests parser creation, byte parsing, byte order marks, file parsing, and
syntax error diagnostics.
"""

import codecs
import os
import tempfile
import unittest
from pathlib import Path
from documentor.parser import (
    count_error_nodes,
    create_parser,
    first_error_point,
    parse_bytes,
    parse_file,
    strip_bom,
)

SOURCE = b"namespace Demo { public class Foo : EventSource { public void Bar() { } } }"
BROKEN = b"namespace Demo\n{\n    public class { void ( }\n"


class TestParser(unittest.TestCase):
    """Test C# parser initialization and parsing."""

    def setUp(self):
        """Set up test fixtures path."""
        self.fixtures_dir = Path(__file__).parent / "fixtures"

    def test_create_parser(self):
        """Test that a parser can be created and parses C#."""
        tree = create_parser().parse(b"class Foo {}")
        self.assertEqual(tree.root_node.type, "compilation_unit")

    def test_parse_bytes(self):
        """Test parsing raw bytes."""
        tree = parse_bytes(SOURCE)
        self.assertEqual(tree.root_node.type, "compilation_unit")
        self.assertFalse(tree.root_node.has_error)

    def test_parse_bytes_rejects_str(self):
        """Test that non-bytes input raises TypeError."""
        with self.assertRaises(TypeError):
            parse_bytes("namespace Demo { }")

    def test_byte_order_mark_ignored(self):
        """Test that a UTF-8 byte order mark does not produce a syntax error."""
        tree = parse_bytes(codecs.BOM_UTF8 + SOURCE)
        self.assertFalse(tree.root_node.has_error)
        self.assertEqual(tree.root_node.children[0].type, "namespace_declaration")

    def test_strip_bom(self):
        """Test that only a leading byte order mark is removed."""
        self.assertEqual(strip_bom(codecs.BOM_UTF8 + b"class A {}"), b"class A {}")
        self.assertEqual(strip_bom(b"class A {}"), b"class A {}")

    def test_parse_file(self):
        """Test parsing a fixture file returns tree and raw bytes."""
        path = self.fixtures_dir / "customized_event_source.cs"
        tree, source = parse_file(str(path))
        self.assertEqual(tree.root_node.type, "compilation_unit")
        self.assertEqual(source, strip_bom(path.read_bytes()))

    def test_parse_file_with_bom(self):
        """Test that files saved with a byte order mark parse cleanly."""
        with tempfile.NamedTemporaryFile(suffix=".cs", delete=False) as f:
            f.write(codecs.BOM_UTF8 + SOURCE)
            temp_path = f.name
        try:
            tree, source = parse_file(temp_path)
            self.assertEqual(source, SOURCE)
            self.assertFalse(tree.root_node.has_error)
        finally:
            os.unlink(temp_path)

    def test_parse_missing_file(self):
        """Test that a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            parse_file("/nonexistent/EventSource.cs")

    def test_parsing_is_repeatable(self):
        """Test that each parse produces an independent tree."""
        first = parse_bytes(SOURCE)
        second = parse_bytes(SOURCE)
        self.assertIsNot(first, second)
        self.assertEqual(first.root_node.child_count, second.root_node.child_count)
        self.assertEqual(first.root_node.end_byte, second.root_node.end_byte)


class TestSyntaxErrorDiagnostics(unittest.TestCase):
    """Test syntax error counting and location."""

    def test_valid_source_has_no_errors(self):
        """Test that valid source reports neither errors nor an error point."""
        tree = parse_bytes(SOURCE)
        self.assertEqual(count_error_nodes(tree), 0)
        self.assertIsNone(first_error_point(tree))

    def test_broken_source_has_errors(self):
        """Test that broken source reports error nodes."""
        with self.assertLogs("documentor.parser", level="WARNING") as logs:
            tree = parse_bytes(BROKEN)
        self.assertTrue(tree.root_node.has_error)
        self.assertGreater(count_error_nodes(tree), 0)
        self.assertTrue(any("syntax errors" in line for line in logs.output))

    def test_first_error_point_is_one_based(self):
        """Test that the first error is located on a 1-based line."""
        line, column = first_error_point(parse_bytes(BROKEN))
        self.assertGreaterEqual(line, 1)
        self.assertGreaterEqual(column, 1)


if __name__ == "__main__":
    unittest.main()
