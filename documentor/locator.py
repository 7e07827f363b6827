"""
Class and member lookup over a parsed C# syntax tree.

Finds the event-source class inside the top-level namespaces of a file and
provides the member lookups (nested classes, field initializers, methods)
that the resolver and record assembler build on.
"""

import logging
from typing import Iterator, List, Optional
from tree_sitter import Node, Tree

from documentor.config import (
    NAMESPACE_NODE,
    FILE_SCOPED_NAMESPACE_NODE,
    CLASS_NODE,
    METHOD_NODE,
    FIELD_NODE,
    BASE_LIST_NODE,
    COMMENT_NODE,
    PREPROCESSOR_CONTAINERS,
    VARIABLE_DECLARATION_NODE,
    VARIABLE_DECLARATOR_NODE,
    EQUALS_VALUE_CLAUSE_NODE,
    IDENTIFIER_NODE,
    DEFAULT_MARKER_TYPE,
)

logger = logging.getLogger(__name__)


def node_text(node: Optional[Node]) -> str:
    """Decode the source text of a node ("" for None)."""
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _iter_declarations(container: Node) -> Iterator[Node]:
    """Yield the declarations of a container, looking through #if blocks."""
    for child in container.named_children:
        if child.type == COMMENT_NODE:
            continue
        if child.type in PREPROCESSOR_CONTAINERS:
            yield from _iter_declarations(child)
        else:
            yield child


def iter_namespace_members(root: Node) -> Iterator[Node]:
    """Yield the members of every top-level namespace in a compilation unit.

    Handles block-scoped namespaces and file-scoped ``namespace X;``
    declarations. Depending on the grammar version the members of a
    file-scoped namespace are either its children or its following siblings.
    """
    in_file_scope = False
    for child in _iter_declarations(root):
        if child.type == NAMESPACE_NODE:
            body = child.child_by_field_name("body")
            if body is not None:
                yield from _iter_declarations(body)
        elif child.type == FILE_SCOPED_NAMESPACE_NODE:
            in_file_scope = True
            name_node = child.child_by_field_name("name")
            for member in _iter_declarations(child):
                if name_node is None or member.id != name_node.id:
                    yield member
        elif in_file_scope:
            yield child


def has_namespace(root: Node) -> bool:
    """Check if a compilation unit declares any top-level namespace."""
    return any(
        child.type in (NAMESPACE_NODE, FILE_SCOPED_NAMESPACE_NODE)
        for child in _iter_declarations(root)
    )


def get_base_type_names(class_node: Node) -> List[str]:
    """Return the textual base types of a class declaration, in order."""
    names: List[str] = []
    for child in class_node.named_children:
        if child.type != BASE_LIST_NODE:
            continue
        for base in child.named_children:
            if base.type == COMMENT_NODE:
                continue
            names.append(node_text(base).strip())
    return names


def is_event_source_class(node: Node, marker_type: str = DEFAULT_MARKER_TYPE) -> bool:
    """Check if a node is a class whose base list names ``marker_type`` exactly."""
    if node.type != CLASS_NODE:
        return False
    return marker_type in get_base_type_names(node)


def get_declared_name(node: Node) -> str:
    """Return the identifier of a class or method declaration."""
    return node_text(node.child_by_field_name("name"))


def locate_event_source_class(
    tree: Tree,
    marker_type: str = DEFAULT_MARKER_TYPE,
) -> Optional[Node]:
    """Find the event-source class of a parsed file.

    Args:
        tree: The parsed syntax tree.
        marker_type: Base type name identifying an event-source class.

    Returns:
        The class declaration node, or None when the file has no namespace or
        no namespace member derives from ``marker_type``.
    """
    root = tree.root_node
    if not has_namespace(root):
        # AssemblyInfo.cs and friends
        logger.debug("No namespace declaration found")
        return None

    candidates = [
        member
        for member in iter_namespace_members(root)
        if is_event_source_class(member, marker_type)
    ]
    if not candidates:
        logger.debug("No class deriving from %s found", marker_type)
        return None

    if len(candidates) > 1:
        logger.warning(
            "Found %d classes deriving from %s; using %s",
            len(candidates),
            marker_type,
            get_declared_name(candidates[0]),
        )
    return candidates[0]


def iter_class_members(class_node: Node, member_type: Optional[str] = None) -> Iterator[Node]:
    """Yield the members of a class body in declaration order.

    Args:
        class_node: A class declaration node.
        member_type: Only yield members of this node type when given.
    """
    body = class_node.child_by_field_name("body")
    if body is None:
        return
    for member in _iter_declarations(body):
        if member_type is None or member.type == member_type:
            yield member


def iter_methods(class_node: Node) -> Iterator[Node]:
    """Yield the method declarations of a class in declaration order."""
    return iter_class_members(class_node, METHOD_NODE)


def find_nested_class(scope: Node, name: str) -> Optional[Node]:
    """Find a class declared directly inside ``scope`` by name."""
    for member in iter_class_members(scope, CLASS_NODE):
        if get_declared_name(member) == name:
            return member
    return None


def _declarator_name(declarator: Node) -> str:
    name_node = declarator.child_by_field_name("name")
    if name_node is None:
        for child in declarator.named_children:
            if child.type == IDENTIFIER_NODE:
                name_node = child
                break
    return node_text(name_node)


def _declarator_initializer(declarator: Node) -> Optional[Node]:
    """Return the initializer expression of a variable declarator, if any."""
    seen_equals = False
    for child in declarator.children:
        if child.type == EQUALS_VALUE_CLAUSE_NODE:
            return child.named_children[0] if child.named_children else None
        if not child.is_named and child.type == "=":
            seen_equals = True
        elif seen_equals and child.is_named and child.type != COMMENT_NODE:
            return child
    return None


def find_field_initializer(scope: Node, name: str) -> Optional[Node]:
    """Find the initializer of a field declared directly inside ``scope``.

    Returns None when no field of that name exists or it has no initializer.
    """
    for field_node in iter_class_members(scope, FIELD_NODE):
        for declaration in field_node.named_children:
            if declaration.type != VARIABLE_DECLARATION_NODE:
                continue
            for declarator in declaration.named_children:
                if declarator.type != VARIABLE_DECLARATOR_NODE:
                    continue
                if _declarator_name(declarator) == name:
                    return _declarator_initializer(declarator)
    return None
