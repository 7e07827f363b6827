"""
Attribute argument expression resolution.

Resolves the small set of expression shapes used by EventSource annotations
to their textual value:

- numeric and string literals give their value text;
- a simple identifier names a field of the current class, whose initializer
  is resolved in turn;
- ``Outer.Member`` names a field of the nested class ``Outer``; when
  ``Outer`` is not a nested class the reference is an external value (such
  as ``EventLevel.Verbose``) and is returned as written;
- casts and parentheses are looked through.

Anything else resolves to "". Lookups never leave the parsed file.
"""

import logging
import re
from typing import FrozenSet, Optional, Tuple
from tree_sitter import Node

from documentor.config import (
    IDENTIFIER_NODE,
    MEMBER_ACCESS_NODE,
    QUALIFIED_NAME_NODE,
    INTEGER_LITERAL_NODE,
    REAL_LITERAL_NODE,
    STRING_LITERAL_NODE,
    VERBATIM_STRING_LITERAL_NODE,
    RAW_STRING_LITERAL_NODE,
    TRANSPARENT_EXPRESSIONS,
    COMMENT_NODE,
)
from documentor.locator import node_text, find_field_initializer, find_nested_class

logger = logging.getLogger(__name__)

_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|x[0-9a-fA-F]{1,4}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "'": "'",
    '"': '"',
    "\\": "\\",
    "0": "\0",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

# (scope start byte, scope end byte, identifier) currently being resolved
_VisitKey = Tuple[int, int, str]


def _integer_value_text(text: str) -> str:
    """Render an integer literal in decimal, dropping separators and suffixes."""
    cleaned = text.replace("_", "").rstrip("uUlL")
    lowered = cleaned.lower()
    try:
        if lowered.startswith("0x"):
            return str(int(cleaned[2:], 16))
        if lowered.startswith("0b"):
            return str(int(cleaned[2:], 2))
        return str(int(cleaned))
    except ValueError:
        logger.debug("Keeping unparseable integer literal %r as written", text)
        return text


def _real_value_text(text: str) -> str:
    return text.replace("_", "").rstrip("fFdDmM")


def _decode_escape(match: "re.Match[str]") -> str:
    body = match.group(1)
    if body[0] in "uUx" and len(body) > 1:
        return chr(int(body[1:], 16))
    return _SIMPLE_ESCAPES.get(body, match.group(0))


def _raw_string_value(text: str) -> str:
    fence = len(text) - len(text.lstrip('"'))
    inner = text[fence:len(text) - fence]
    if "\n" not in inner:
        return inner
    # Multi-line raw strings drop the opening/closing lines and the
    # indentation of the closing fence.
    lines = inner.split("\n")
    indent = lines[-1]
    body = lines[1:-1]
    return "\n".join(
        line[len(indent):] if line.startswith(indent) else line for line in body
    ).replace("\r", "")


def literal_value_text(node: Node) -> str:
    """Return the value text of a numeric or string literal node.

    Integers are rendered in decimal (``0x1`` -> ``"1"``), strings are
    unquoted with escapes decoded. Other node types give "".
    """
    text = node_text(node).strip()
    if node.type == INTEGER_LITERAL_NODE:
        return _integer_value_text(text)
    if node.type == REAL_LITERAL_NODE:
        return _real_value_text(text)
    if text.endswith(("u8", "U8")):
        text = text[:-2]
    if node.type == STRING_LITERAL_NODE:
        return _ESCAPE_RE.sub(_decode_escape, text[1:-1])
    if node.type == VERBATIM_STRING_LITERAL_NODE:
        return text[2:-1].replace('""', '"')
    if node.type == RAW_STRING_LITERAL_NODE:
        return _raw_string_value(text)
    return ""


def _inner_expression(node: Node) -> Optional[Node]:
    """Return the wrapped expression of a cast or parenthesized expression."""
    value = node.child_by_field_name("value")
    if value is not None:
        return value
    named = [child for child in node.named_children if child.type != COMMENT_NODE]
    return named[-1] if named else None


def _resolve_identifier(scope: Node, name: str, visiting: FrozenSet[_VisitKey]) -> str:
    key = (scope.start_byte, scope.end_byte, name)
    if key in visiting:
        logger.warning(
            "Cyclic constant reference through '%s' at line %d; leaving it unresolved",
            name,
            scope.start_point.row + 1,
        )
        return ""

    initializer = find_field_initializer(scope, name)
    if initializer is None:
        logger.debug("No initialized field '%s' in scope at line %d", name, scope.start_point.row + 1)
        return ""
    return _resolve(scope, initializer, visiting | {key})


def _resolve_member_access(scope: Node, node: Node, visiting: FrozenSet[_VisitKey]) -> str:
    target = node.child_by_field_name("expression")
    if target is None:
        target = node.child_by_field_name("qualifier")
    member = node.child_by_field_name("name")
    if target is not None and member is not None and target.type == IDENTIFIER_NODE:
        nested = find_nested_class(scope, node_text(target))
        if nested is not None:
            return _resolve_identifier(nested, node_text(member), visiting)

    # Defined outside this class (EventLevel, EventChannel, EventOpcode ...)
    return "".join(node_text(node).split())


def _resolve(scope: Node, expression: Optional[Node], visiting: FrozenSet[_VisitKey]) -> str:
    if expression is None:
        return ""

    kind = expression.type
    if kind in TRANSPARENT_EXPRESSIONS:
        return _resolve(scope, _inner_expression(expression), visiting)
    if kind in (
        INTEGER_LITERAL_NODE,
        REAL_LITERAL_NODE,
        STRING_LITERAL_NODE,
        VERBATIM_STRING_LITERAL_NODE,
        RAW_STRING_LITERAL_NODE,
    ):
        return literal_value_text(expression)
    if kind == IDENTIFIER_NODE:
        return _resolve_identifier(scope, node_text(expression), visiting)
    if kind in (MEMBER_ACCESS_NODE, QUALIFIED_NAME_NODE):
        return _resolve_member_access(scope, expression, visiting)

    logger.debug(
        "Unsupported expression '%s' (%s) at line %d",
        node_text(expression),
        kind,
        expression.start_point.row + 1,
    )
    return ""


def resolve_expression(scope: Node, expression: Optional[Node]) -> str:
    """Resolve an attribute argument expression to its textual value.

    Args:
        scope: Class declaration whose fields and nested classes are visible.
        expression: The expression node, or None.

    Returns:
        The resolved text, or "" when the expression cannot be resolved.
    """
    return _resolve(scope, expression, frozenset())
