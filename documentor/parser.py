"""
C# source parsing.

Wraps the tree-sitter C# grammar: one fresh parser per parse so independent
files never share state, byte-order-mark handling for files saved by Visual
Studio, and syntax error diagnostics. Syntax errors are reported but never
reject a file; the locator works on whatever tree tree-sitter recovers.
"""

import codecs
import logging
from typing import Optional, Tuple
import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

CSHARP_LANGUAGE = Language(tscsharp.language())


def create_parser() -> Parser:
    """Create a tree-sitter parser for C#.

    Example:
        >>> tree = create_parser().parse(b"class Foo {}")
        >>> tree.root_node.type
        'compilation_unit'
    """
    return Parser(CSHARP_LANGUAGE)


def strip_bom(source: bytes) -> bytes:
    """Drop a leading UTF-8 byte order mark; the grammar has no rule for it."""
    if source.startswith(codecs.BOM_UTF8):
        return source[len(codecs.BOM_UTF8):]
    return source


def _is_error(node: Node) -> bool:
    return node.type == "ERROR" or node.is_missing


def _iter_nodes(tree: Tree):
    """Yield every node of a tree in document order."""
    cursor = tree.walk()
    visited_children = False
    while True:
        if not visited_children:
            yield cursor.node
            if cursor.goto_first_child():
                continue
        if cursor.goto_next_sibling():
            visited_children = False
        elif cursor.goto_parent():
            visited_children = True
        else:
            return


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    return sum(1 for node in _iter_nodes(tree) if _is_error(node))


def first_error_point(tree: Tree) -> Optional[Tuple[int, int]]:
    """Return the 1-based (line, column) of the first syntax error, if any."""
    if not tree.root_node.has_error:
        return None
    for node in _iter_nodes(tree):
        if _is_error(node):
            return node.start_point.row + 1, node.start_point.column + 1
    return None


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of C# source code.

    A leading byte order mark is ignored.

    Args:
        source: UTF-8 encoded bytes of C# source code.

    Returns:
        The parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    tree = create_parser().parse(strip_bom(source))

    error_point = first_error_point(tree)
    if error_point is not None:
        logger.warning(
            "C# source has syntax errors (first at line %d, column %d); "
            "documenting what could be recovered",
            *error_point,
        )
    return tree


def parse_file(file_path: str) -> Tuple[Tree, bytes]:
    """Read and parse a C# source file.

    Returns:
        A tuple of (tree, source bytes without byte order mark).

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = strip_bom(f.read())
    except OSError as e:
        logger.error("Cannot read C# source %s: %s", file_path, e)
        raise

    logger.debug("Read %d bytes from %s", len(source_bytes), file_path)
    return parse_bytes(source_bytes), source_bytes
