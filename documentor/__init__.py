"""
EventSource documentation extractor

Tree-sitter-based C# parser that finds an EventSource-derived class and
turns each of its [Event] methods into a documentation record.
"""

from documentor.models import EventRecord, EventSourceDocument, AttributeArgument, DocSections
from documentor.settings import DocumentorSettings, DEFAULT_SETTINGS, load_documentor_settings
from documentor.parser import (
    create_parser,
    parse_file,
    parse_bytes,
    strip_bom,
    count_error_nodes,
    first_error_point,
)
from documentor.locator import locate_event_source_class
from documentor.attributes import MalformedMarkerAttributeError, find_attribute, find_argument
from documentor.resolver import resolve_expression
from documentor.doc_comments import get_leading_doc_comment, parse_sections
from documentor.assembler import assemble_event_records, get_event_source_name
from documentor.writer import write_records_csv
from documentor.extractor import (
    extract_event_source,
    extract_event_source_file,
    document_file,
    document_sources,
    discover_source_files,
    DocumentationResult,
    DocumentationStats,
)

__all__ = [
    # Data models
    "EventRecord",
    "EventSourceDocument",
    "AttributeArgument",
    "DocSections",
    # Settings
    "DocumentorSettings",
    "DEFAULT_SETTINGS",
    "load_documentor_settings",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "strip_bom",
    "count_error_nodes",
    "first_error_point",
    # Extraction engine
    "locate_event_source_class",
    "MalformedMarkerAttributeError",
    "find_attribute",
    "find_argument",
    "resolve_expression",
    "get_leading_doc_comment",
    "parse_sections",
    "assemble_event_records",
    "get_event_source_name",
    # Output and orchestration
    "write_records_csv",
    "extract_event_source",
    "extract_event_source_file",
    "document_file",
    "document_sources",
    "discover_source_files",
    "DocumentationResult",
    "DocumentationStats",
]
