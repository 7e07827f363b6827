"""
Data models for extracted EventSource documentation.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any, Tuple

from tree_sitter import Node

from documentor.config import CSV_COLUMNS


@dataclass(frozen=True)
class EventRecord:
    """Documentation for a single event method.

    Records are value objects: two records with the same field values are
    interchangeable.

    Attributes:
        event_name: Declared name of the event method.
        event_id: Resolved event id, or "" when absent or unresolvable.
        event_level: Resolved event level, "Informational" when absent.
        description: Text of the doc comment ``summary`` section.
        resolution: Text of the doc comment ``resolution`` section.
    """

    event_name: str
    event_id: str
    event_level: str
    description: str
    resolution: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary suitable for JSON serialization."""
        return asdict(self)

    def to_row(self, columns: Tuple[str, ...] = CSV_COLUMNS) -> Dict[str, str]:
        """Convert the record to a CSV row keyed by ``columns``.

        Columns are matched to fields positionally, so renamed headers keep
        the field order.
        """
        values = (
            self.event_name,
            self.event_id,
            self.event_level,
            self.description,
            self.resolution,
        )
        return dict(zip(columns, values))


@dataclass(frozen=True)
class AttributeArgument:
    """One argument of an attribute: ``Name = expr`` or a positional ``expr``."""

    name: Optional[str]
    expression: Node

    @property
    def is_positional(self) -> bool:
        return self.name is None


@dataclass(frozen=True)
class DocSections:
    """Named sections of an XML documentation comment."""

    description: str = ""
    resolution: str = ""


@dataclass(frozen=True)
class EventSourceDocument:
    """Everything extracted from one event-source class.

    Attributes:
        source_name: Resolved ``Name`` of the class-level EventSource attribute.
        class_name: Declared name of the class.
        records: One record per event method, in declaration order.
    """

    source_name: str
    class_name: str
    records: Tuple[EventRecord, ...]
