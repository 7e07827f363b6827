"""
Unit tests for resolver.py

Tests literal value text, same-file constant lookup, nested class references,
external enum members, and unsupported expression shapes.
"""

import unittest
from pathlib import Path
from documentor.attributes import find_argument, find_attribute
from documentor.locator import (
    find_field_initializer,
    find_nested_class,
    get_declared_name,
    iter_methods,
    locate_event_source_class,
)
from documentor.parser import parse_bytes, parse_file
from documentor.resolver import resolve_expression

FIXTURES_DIR = Path(__file__).parent / "fixtures"

LITERALS = b'''
namespace Demo
{
    public sealed class Literals : EventSource
    {
        const int Decimal = 5;
        const int Hex = 0x1F;
        const int Binary = 0b101;
        const long Suffixed = 10L;
        const int Separated = 1_000_000;
        const double Real = 2.5d;
        const string Text = "Samples-Demo";
        const string Escaped = "a\\tb\\\\c";
        const string Verbatim = @"C:\\logs ""quoted""";
        const string Empty = "";
        const string Interpolated = $"id-{Decimal}";
        const bool Flag = true;
        const int Sum = Decimal + 1;
        const int Call = Compute();
        const int Conditional = Flag ? 1 : 2;
        const int Wrapped = ((int)Hex);
    }
}
'''


def _field_value(class_node, name: str) -> str:
    return resolve_expression(class_node, find_field_initializer(class_node, name))


class TestLiterals(unittest.TestCase):
    """Test literal value text."""

    @classmethod
    def setUpClass(cls):
        cls.class_node = locate_event_source_class(parse_bytes(LITERALS))

    def test_decimal(self):
        """Test a decimal integer literal."""
        self.assertEqual(_field_value(self.class_node, "Decimal"), "5")

    def test_hex_rendered_in_decimal(self):
        """Test that hex literals are rendered in decimal."""
        self.assertEqual(_field_value(self.class_node, "Hex"), "31")

    def test_binary_rendered_in_decimal(self):
        """Test that binary literals are rendered in decimal."""
        self.assertEqual(_field_value(self.class_node, "Binary"), "5")

    def test_suffix_dropped(self):
        """Test that integer suffixes are dropped."""
        self.assertEqual(_field_value(self.class_node, "Suffixed"), "10")

    def test_digit_separators_dropped(self):
        """Test that digit separators are dropped."""
        self.assertEqual(_field_value(self.class_node, "Separated"), "1000000")

    def test_real(self):
        """Test a real literal with a type suffix."""
        self.assertEqual(_field_value(self.class_node, "Real"), "2.5")

    def test_string_unquoted(self):
        """Test that string literals are unquoted."""
        self.assertEqual(_field_value(self.class_node, "Text"), "Samples-Demo")

    def test_string_escapes_decoded(self):
        """Test that escape sequences are decoded."""
        self.assertEqual(_field_value(self.class_node, "Escaped"), "a\tb\\c")

    def test_verbatim_string(self):
        """Test that verbatim strings collapse doubled quotes."""
        self.assertEqual(_field_value(self.class_node, "Verbatim"), 'C:\\logs "quoted"')

    def test_empty_string(self):
        """Test an empty string literal."""
        self.assertEqual(_field_value(self.class_node, "Empty"), "")

    def test_casts_and_parentheses_are_transparent(self):
        """Test resolving through casts and parentheses."""
        self.assertEqual(_field_value(self.class_node, "Wrapped"), "31")

    def test_unsupported_shapes_resolve_empty(self):
        """Test that expressions outside the supported shapes give ""."""
        for name in ("Interpolated", "Flag", "Sum", "Call", "Conditional"):
            with self.subTest(name=name):
                self.assertEqual(_field_value(self.class_node, name), "")

    def test_none_expression(self):
        """Test that a missing expression gives ""."""
        self.assertEqual(resolve_expression(self.class_node, None), "")


class TestReferences(unittest.TestCase):
    """Test identifier and qualified reference resolution."""

    @classmethod
    def setUpClass(cls):
        tree, _ = parse_file(str(FIXTURES_DIR / "customized_event_source.cs"))
        cls.class_node = locate_event_source_class(tree)
        cls.methods = {get_declared_name(m): m for m in iter_methods(cls.class_node)}

    def _argument(self, method: str, name: str):
        attribute = find_attribute(self.methods[method], "Event")
        return find_argument(attribute, name).expression

    def test_nested_class_reference(self):
        """Test that Tasks.Request resolves through the nested class."""
        expression = self._argument("RequestStart", "Task")
        self.assertEqual(resolve_expression(self.class_node, expression), "1")

    def test_nested_class_reference_keywords(self):
        """Test that Keywords.Debug resolves through the nested class."""
        expression = self._argument("DebugTrace", "Keywords")
        self.assertEqual(resolve_expression(self.class_node, expression), "2")

    def test_external_enum_member_kept_verbatim(self):
        """Test that EventLevel.Verbose is kept as written."""
        expression = self._argument("RequestPhase", "Level")
        self.assertEqual(resolve_expression(self.class_node, expression), "EventLevel.Verbose")

    def test_external_opcode_kept_verbatim(self):
        """Test that EventOpcode.Stop is kept as written."""
        expression = self._argument("RequestStop", "Opcode")
        self.assertEqual(resolve_expression(self.class_node, expression), "EventOpcode.Stop")

    def test_resolution_is_repeatable(self):
        """Test that resolving twice gives the same value."""
        expression = self._argument("RequestStart", "Task")
        first = resolve_expression(self.class_node, expression)
        second = resolve_expression(self.class_node, expression)
        self.assertEqual(first, second)


class TestConstantChains(unittest.TestCase):
    """Test multi-hop constant chains in the constants fixture."""

    @classmethod
    def setUpClass(cls):
        tree, _ = parse_file(str(FIXTURES_DIR / "constants_event_source.cs"))
        cls.class_node = locate_event_source_class(tree)

    def test_identifier_to_string_constant(self):
        """Test an identifier that names a string constant."""
        self.assertEqual(_field_value(self.class_node, "SourceName"), "Contoso-Service")

    def test_identifier_to_nested_member(self):
        """AliasedId = EventIds.Started = 1_000"""
        self.assertEqual(_field_value(self.class_node, "AliasedId"), "1000")

    def test_identifier_inside_nested_scope(self):
        """EventIds.Stopping = Started2 resolves within EventIds."""
        event_ids = find_nested_class(self.class_node, "EventIds")
        self.assertEqual(_field_value(event_ids, "Stopping"), "1001")

    def test_unknown_identifier_resolves_empty(self):
        source = b"""
namespace Demo
{
    public sealed class S : EventSource
    {
        const int Alias = Missing;
        const int Member = Ids.Missing;
        public static class Ids { public const int Present = 1; }
    }
}
"""
        class_node = locate_event_source_class(parse_bytes(source))
        self.assertEqual(_field_value(class_node, "Alias"), "")
        self.assertEqual(_field_value(class_node, "Member"), "")

    def test_cycle_resolves_empty_with_warning(self):
        """Test that a cyclic reference gives "" and a warning."""
        with self.assertLogs("documentor.resolver", level="WARNING") as logs:
            value = _field_value(self.class_node, "Loop")
        self.assertEqual(value, "")
        self.assertTrue(any("Cyclic" in line for line in logs.output))

    def test_three_segment_external_reference(self):
        source = b"""
namespace Demo
{
    public sealed class S : EventSource
    {
        const EventLevel Level = System.Diagnostics.Tracing.EventLevel.Critical;
    }
}
"""
        class_node = locate_event_source_class(parse_bytes(source))
        self.assertEqual(
            _field_value(class_node, "Level"),
            "System.Diagnostics.Tracing.EventLevel.Critical",
        )


if __name__ == "__main__":
    unittest.main()
