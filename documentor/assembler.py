"""
Event record assembly.

Turns every ``[Event]`` method of an event-source class into an EventRecord.
"""

import logging
from typing import Iterator, List
from tree_sitter import Node

from documentor.attributes import find_argument, find_attribute, require_named_argument
from documentor.doc_comments import get_leading_doc_comment, parse_sections
from documentor.locator import get_declared_name, iter_methods
from documentor.models import EventRecord
from documentor.resolver import resolve_expression
from documentor.settings import DEFAULT_SETTINGS, DocumentorSettings

logger = logging.getLogger(__name__)


def iter_event_methods(class_node: Node, event_attribute: str) -> Iterator[Node]:
    """Yield the methods of a class that carry ``event_attribute``, in order."""
    for method in iter_methods(class_node):
        if find_attribute(method, event_attribute) is not None:
            yield method


def get_event_source_name(
    class_node: Node,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> str:
    """Resolve the ``Name`` of the class-level ``[EventSource(Name = ...)]`` attribute.

    Raises:
        MalformedMarkerAttributeError: If the attribute or its ``Name``
            argument is missing.
    """
    argument = require_named_argument(
        class_node, settings.source_attribute, settings.name_argument
    )
    return resolve_expression(class_node, argument.expression)


def build_event_record(
    class_node: Node,
    method: Node,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> EventRecord:
    """Build the record of one event method.

    Args:
        class_node: The event-source class, used as the resolution scope.
        method: A method declaration carrying the event attribute.
        settings: Names and defaults to use.

    Returns:
        The assembled record. Missing arguments fall back to the configured
        defaults; unresolvable ones become "".
    """
    event_attribute = find_attribute(method, settings.event_attribute)

    event_id = settings.default_event_id
    event_level = settings.default_event_level
    if event_attribute is not None:
        id_argument = find_argument(
            event_attribute, settings.id_argument, accept_positional=True
        )
        if id_argument is not None:
            event_id = resolve_expression(class_node, id_argument.expression)

        level_argument = find_argument(event_attribute, settings.level_argument)
        if level_argument is not None:
            event_level = resolve_expression(class_node, level_argument.expression)

    sections = parse_sections(
        get_leading_doc_comment(method),
        summary_section=settings.summary_section,
        resolution_section=settings.resolution_section,
        line_separator=settings.line_separator,
    )

    return EventRecord(
        event_name=get_declared_name(method),
        event_id=event_id,
        event_level=event_level,
        description=sections.description,
        resolution=sections.resolution,
    )


def assemble_event_records(
    class_node: Node,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> List[EventRecord]:
    """Assemble one record per event method, in declaration order."""
    records = [
        build_event_record(class_node, method, settings)
        for method in iter_event_methods(class_node, settings.event_attribute)
    ]
    logger.debug(
        "Assembled %d event records for %s", len(records), get_declared_name(class_node)
    )
    return records
