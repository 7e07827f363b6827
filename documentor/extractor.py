"""
High-level orchestrator for EventSource documentation.

This module provides the per-file extraction entry points and the build-task
style driver that documents a list of source files into CSV files.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from tree_sitter import Tree

from core.structured_logging import event_source_scope, source_file_scope
from documentor.assembler import assemble_event_records, get_event_source_name
from documentor.attributes import MalformedMarkerAttributeError
from documentor.config import SKIPPED_DIRECTORIES
from documentor.locator import get_declared_name, locate_event_source_class
from documentor.models import EventSourceDocument
from documentor.parser import count_error_nodes, parse_bytes, parse_file
from documentor.settings import DEFAULT_SETTINGS, DocumentorSettings
from documentor.writer import write_records_csv

logger = logging.getLogger(__name__)


class DocumentationStats:
    """Statistics for a documentation run."""

    def __init__(self):
        self.files_processed = 0
        self.files_skipped = 0
        self.files_failed = 0
        self.records_extracted = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_processed": self.files_processed,
            "files_skipped": self.files_skipped,
            "files_failed": self.files_failed,
            "records_extracted": self.records_extracted,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"DocumentationStats(processed={self.files_processed}, "
            f"skipped={self.files_skipped}, failed={self.files_failed}, "
            f"records={self.records_extracted})"
        )


@dataclass
class DocumentationResult:
    """Outcome of documenting a set of source files."""

    generated_files: List[str] = field(default_factory=list)
    stats: DocumentationStats = field(default_factory=DocumentationStats)


def _document_from_tree(
    tree: Tree,
    settings: DocumentorSettings,
) -> Optional[EventSourceDocument]:
    if tree.root_node.has_error:
        logger.debug("Source contains %d error nodes", count_error_nodes(tree))

    class_node = locate_event_source_class(tree, settings.marker_type)
    if class_node is None:
        return None

    source_name = get_event_source_name(class_node, settings)
    records = assemble_event_records(class_node, settings)
    return EventSourceDocument(
        source_name=source_name,
        class_name=get_declared_name(class_node),
        records=tuple(records),
    )


def extract_event_source(
    source: bytes,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> Optional[EventSourceDocument]:
    """Extract the event documentation of one C# source text.

    Args:
        source: UTF-8 encoded C# source.
        settings: Names and defaults to use.

    Returns:
        The extracted document, or None when the source has no event-source
        class.

    Raises:
        MalformedMarkerAttributeError: If the event-source class lacks its
            ``[EventSource(Name = ...)]`` attribute.
    """
    return _document_from_tree(parse_bytes(source), settings)


def extract_event_source_file(
    file_path: str,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> Optional[EventSourceDocument]:
    """Extract the event documentation of a C# source file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a C# source file.
        MalformedMarkerAttributeError: See ``extract_event_source``.
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    ext = os.path.splitext(file_path)[1]
    if ext not in settings.source_extensions:
        raise ValueError(
            f"File {file_path} is not a C# source file. "
            f"Expected one of: {settings.source_extensions}"
        )

    tree, _ = parse_file(file_path)
    return _document_from_tree(tree, settings)


def discover_source_files(
    directory: str,
    extensions: Sequence[str] = DEFAULT_SETTINGS.source_extensions,
) -> List[str]:
    """Recursively discover C# source files in a directory.

    Args:
        directory: Root directory to search.
        extensions: File suffixes to collect.

    Returns:
        Sorted list of absolute paths.
    """
    source_files = []
    directory = os.path.abspath(directory)

    logger.info("Discovering C# files in %s", directory)

    for root, dirs, files in os.walk(directory):
        # Skip hidden directories and build output
        dirs[:] = [d for d in dirs if not d.startswith('.') and d not in SKIPPED_DIRECTORIES]

        for file in files:
            if os.path.splitext(file)[1] in extensions:
                source_files.append(os.path.join(root, file))

    logger.info("Found %d C# files", len(source_files))
    return sorted(source_files)


def _output_name(document: EventSourceDocument) -> str:
    if document.source_name:
        return document.source_name
    logger.warning(
        "EventSource name of %s resolved to an empty value; naming output after the class",
        document.class_name,
    )
    return document.class_name


def write_document(
    document: EventSourceDocument,
    output_dir: str,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> str:
    """Write ``<EventSourceName>.csv`` for a document and return its path."""
    with event_source_scope(document.source_name):
        logger.info(
            "Generating EventSource documentation for EventSource: %s",
            document.source_name,
        )
        output_path = os.path.join(output_dir, _output_name(document) + ".csv")
        write_records_csv(document.records, output_path, settings.csv_columns)
        logger.info("EventSource documentation generated at: %s", output_path)
    return output_path


def document_file(
    file_path: str,
    output_dir: str,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
) -> Optional[str]:
    """Write the CSV documentation of one source file.

    Returns:
        The generated CSV path, or None for non event-source files.
    """
    document = extract_event_source_file(file_path, settings)
    if document is None:
        logger.info("Skipping Non EventSource class at: %s", file_path)
        return None
    return write_document(document, output_dir, settings)


def document_sources(
    sources: Sequence[str],
    project_dir: str,
    output_dir: str,
    settings: DocumentorSettings = DEFAULT_SETTINGS,
    continue_on_error: bool = True,
) -> DocumentationResult:
    """Document every event-source class found in ``sources``.

    Missing files and files without an event-source class are logged and
    skipped. A file whose event-source class is malformed counts as failed;
    the run continues with the next file unless ``continue_on_error`` is False.

    Args:
        sources: Source paths, relative to ``project_dir`` unless absolute.
        project_dir: Directory relative source paths are resolved against.
        output_dir: Directory receiving one ``<EventSourceName>.csv`` per class.
        settings: Names and defaults to use.
        continue_on_error: If False, re-raise the first failure.

    Returns:
        Generated file paths and run statistics.
    """
    result = DocumentationResult()
    stats = result.stats

    for source in sources:
        file_path = os.path.join(project_dir, source)
        with source_file_scope(source):
            if not os.path.isfile(file_path):
                logger.info(
                    "Skipping EventSource document generation, as there are no files found at: %s",
                    file_path,
                )
                stats.files_skipped += 1
                continue

            logger.info("Processing file: %s", file_path)
            try:
                document = extract_event_source_file(file_path, settings)
                if document is None:
                    logger.info("Skipping Non EventSource class at: %s", source)
                    stats.files_skipped += 1
                    continue

                output_path = write_document(document, output_dir, settings)
                result.generated_files.append(output_path)
                stats.files_processed += 1
                stats.records_extracted += len(document.records)

            except MalformedMarkerAttributeError as e:
                logger.error("Malformed EventSource class in %s: %s", file_path, e)
                stats.files_failed += 1
                if not continue_on_error:
                    raise

            except ValueError as e:
                logger.error("Invalid file: %s", e)
                stats.files_failed += 1
                if not continue_on_error:
                    raise

            except OSError as e:
                logger.error("Error documenting %s: %s", file_path, e)
                stats.files_failed += 1
                if not continue_on_error:
                    raise

    logger.info("Documentation complete: %s", stats)
    return result
