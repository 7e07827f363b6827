"""
XML documentation comment handling.

Collects the ``///`` comment block attached to a declaration and pulls named
sections (``<summary>``, ``<resolution>``) out of it, keeping intentional line
breaks while dropping the comment markers.
"""

import logging
from typing import Optional
from xml.etree import ElementTree

from tree_sitter import Node

from documentor.config import (
    COMMENT_NODE,
    DOC_COMMENT_PREFIX,
    DOC_COMMENT_ROOT,
    DEFAULT_SUMMARY_SECTION,
    DEFAULT_RESOLUTION_SECTION,
    DEFAULT_LINE_SEPARATOR,
)
from documentor.locator import node_text
from documentor.models import DocSections

logger = logging.getLogger(__name__)


def is_doc_comment(comment_text: str) -> bool:
    """Check if a comment is an XML documentation comment (``///`` but not ``////``)."""
    stripped = comment_text.strip()
    return stripped.startswith(DOC_COMMENT_PREFIX) and not stripped.startswith("////")


def get_leading_doc_comment(node: Node) -> Optional[str]:
    """Collect the ``///`` comment lines preceding a declaration.

    Walks backward through comment siblings until the previous declaration
    (or the start of the enclosing body). Blank lines do not detach a comment
    block, and ordinary ``//`` comments inside the block are skipped.

    Args:
        node: A method or class declaration node.

    Returns:
        The raw comment lines joined with newlines, or None if there are none.
    """
    lines = []
    sibling = node.prev_named_sibling

    while sibling is not None and sibling.type == COMMENT_NODE:
        comment_text = node_text(sibling)
        if is_doc_comment(comment_text):
            lines.append(comment_text.strip())
        sibling = sibling.prev_named_sibling

    if not lines:
        return None
    lines.reverse()
    return "\n".join(lines)


def format_section_lines(text: str, line_separator: str = DEFAULT_LINE_SEPARATOR) -> str:
    """Strip ``///`` markers and surrounding whitespace from each line of a section.

    Empty lines are dropped; the remaining lines are joined with
    ``line_separator``.
    """
    cleaned = []
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(DOC_COMMENT_PREFIX):
            stripped = stripped[len(DOC_COMMENT_PREFIX):].strip()
        if stripped:
            cleaned.append(stripped)
    return line_separator.join(cleaned)


def _section_text(root: ElementTree.Element, section: str, line_separator: str) -> str:
    element = root.find(section)
    if element is None:
        return ""
    return format_section_lines("".join(element.itertext()), line_separator)


def parse_sections(
    raw_comment: Optional[str],
    summary_section: str = DEFAULT_SUMMARY_SECTION,
    resolution_section: str = DEFAULT_RESOLUTION_SECTION,
    line_separator: str = DEFAULT_LINE_SEPARATOR,
) -> DocSections:
    """Parse the description and resolution sections of a doc comment.

    The raw comment is wrapped in a synthetic root element and parsed as XML.
    A missing comment or section gives "", and so does a comment that is not
    well-formed XML once wrapped.

    Args:
        raw_comment: Raw ``///`` comment text, or None.
        summary_section: Element name used for the description.
        resolution_section: Element name used for the resolution.
        line_separator: Separator used to rejoin section lines.

    Returns:
        The parsed sections.
    """
    if not raw_comment:
        return DocSections()

    wrapped = f"<{DOC_COMMENT_ROOT}>{raw_comment}</{DOC_COMMENT_ROOT}>"
    try:
        root = ElementTree.fromstring(wrapped)
    except ElementTree.ParseError as e:
        logger.warning("Ignoring malformed documentation comment: %s", e)
        return DocSections()

    return DocSections(
        description=_section_text(root, summary_section, line_separator),
        resolution=_section_text(root, resolution_section, line_separator),
    )
