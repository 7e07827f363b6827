"""
Attribute lookup on C# declarations.

Reads ``[Name(arg, Key = value)]`` attribute lists attached to a class or
method declaration and splits them into named and positional arguments.
"""

import logging
from typing import List, Optional
from tree_sitter import Node

from documentor.config import (
    ATTRIBUTE_LIST_NODE,
    ATTRIBUTE_NODE,
    ATTRIBUTE_ARGUMENT_LIST_NODE,
    ATTRIBUTE_ARGUMENT_NODE,
    NAME_EQUALS_NODE,
    NAME_COLON_NODE,
    IDENTIFIER_NODE,
    COMMENT_NODE,
)
from documentor.locator import node_text
from documentor.models import AttributeArgument

logger = logging.getLogger(__name__)


class MalformedMarkerAttributeError(ValueError):
    """Raised when a confirmed event-source class lacks its naming attribute."""


def iter_attributes(node: Node) -> List[Node]:
    """Return every attribute attached to a declaration, in source order."""
    attributes: List[Node] = []
    for attribute_list in node.named_children:
        if attribute_list.type != ATTRIBUTE_LIST_NODE:
            continue
        for attribute in attribute_list.named_children:
            if attribute.type == ATTRIBUTE_NODE:
                attributes.append(attribute)
    return attributes


def get_attribute_name(attribute: Node) -> str:
    """Return the name of an attribute as written (``Event``, ``Foo.Bar``)."""
    name_node = attribute.child_by_field_name("name")
    if name_node is None and attribute.named_children:
        name_node = attribute.named_children[0]
    return node_text(name_node).strip()


def find_attribute(node: Node, attribute_name: str) -> Optional[Node]:
    """Find the first attribute named exactly ``attribute_name`` on a declaration.

    Args:
        node: A class or method declaration node.
        attribute_name: Attribute name to match (no ``Attribute`` suffix handling).

    Returns:
        The attribute node, or None if the declaration does not carry it.
    """
    for attribute in iter_attributes(node):
        if get_attribute_name(attribute) == attribute_name:
            return attribute
    return None


def _parse_argument(argument: Node) -> Optional[AttributeArgument]:
    """Split an attribute_argument node into its name and expression.

    Newer grammars emit ``identifier '=' expression`` directly, older ones
    wrap the name in a ``name_equals`` node. ``name: expr`` arguments are
    constructor arguments and count as positional.
    """
    name: Optional[str] = None
    expression: Optional[Node] = None
    pending_identifier: Optional[Node] = None

    for child in argument.children:
        if child.type == NAME_EQUALS_NODE:
            name = node_text(child.child_by_field_name("name") or _first_identifier(child))
        elif child.type == NAME_COLON_NODE:
            continue
        elif not child.is_named:
            if child.type == "=" and pending_identifier is not None:
                name = node_text(pending_identifier)
                pending_identifier = None
            elif child.type == ":":
                pending_identifier = None
        elif child.type == COMMENT_NODE:
            continue
        elif (
            child.type == IDENTIFIER_NODE
            and name is None
            and expression is None
            and pending_identifier is None
        ):
            pending_identifier = child
        else:
            expression = child

    if expression is None:
        # A bare identifier argument, e.g. ``[Event(SomeId)]``
        expression = pending_identifier
    if expression is None:
        return None
    return AttributeArgument(name=name, expression=expression)


def _first_identifier(node: Node) -> Optional[Node]:
    for child in node.named_children:
        if child.type == IDENTIFIER_NODE:
            return child
    return None


def get_arguments(attribute: Node) -> List[AttributeArgument]:
    """Return the arguments of an attribute in source order."""
    arguments: List[AttributeArgument] = []
    for child in attribute.named_children:
        if child.type != ATTRIBUTE_ARGUMENT_LIST_NODE:
            continue
        for argument in child.named_children:
            if argument.type != ATTRIBUTE_ARGUMENT_NODE:
                continue
            parsed = _parse_argument(argument)
            if parsed is None:
                logger.debug(
                    "Skipping empty attribute argument at line %d",
                    argument.start_point.row + 1,
                )
                continue
            arguments.append(parsed)
    return arguments


def find_argument(
    attribute: Node,
    name: str,
    accept_positional: bool = False,
) -> Optional[AttributeArgument]:
    """Find an attribute argument by name.

    Args:
        attribute: An attribute node.
        name: Argument name to match (``Name``, ``Id``, ``Level`` ...).
        accept_positional: Also accept the first positional argument, the
            way an event id may be given as ``[Event(5)]``.

    Returns:
        The first matching argument, or None.
    """
    for argument in get_arguments(attribute):
        if argument.name == name:
            return argument
        if accept_positional and argument.is_positional:
            return argument
    return None


def require_named_argument(
    node: Node,
    attribute_name: str,
    argument_name: str,
) -> AttributeArgument:
    """Find a named argument of an attribute that must be present.

    Raises:
        MalformedMarkerAttributeError: If the declaration lacks the attribute
            or the attribute lacks the argument.
    """
    attribute = find_attribute(node, attribute_name)
    if attribute is None:
        raise MalformedMarkerAttributeError(
            f"Declaration at line {node.start_point.row + 1} has no "
            f"[{attribute_name}] attribute"
        )
    argument = find_argument(attribute, argument_name)
    if argument is None:
        raise MalformedMarkerAttributeError(
            f"[{attribute_name}] attribute at line {attribute.start_point.row + 1} "
            f"has no '{argument_name}' argument"
        )
    return argument
