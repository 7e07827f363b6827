"""Settings for the EventSource documentor.

Every name the extractor recognises is configurable; the defaults follow the
EventSource conventions in ``documentor.config``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from core.config_loader import (
    load_config_payload,
    report_config_problem,
    resolve_strict_config_validation,
)
from documentor.config import (
    CSHARP_EXTENSIONS,
    CSV_COLUMNS,
    DEFAULT_EVENT_ATTRIBUTE,
    DEFAULT_EVENT_ID,
    DEFAULT_EVENT_LEVEL,
    DEFAULT_ID_ARGUMENT,
    DEFAULT_LEVEL_ARGUMENT,
    DEFAULT_LINE_SEPARATOR,
    DEFAULT_MARKER_TYPE,
    DEFAULT_NAME_ARGUMENT,
    DEFAULT_RESOLUTION_SECTION,
    DEFAULT_SOURCE_ATTRIBUTE,
    DEFAULT_SUMMARY_SECTION,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentorSettings:
    """Names and defaults recognised by the extractor.

    Attributes:
        marker_type: Base type that identifies an event-source class.
        source_attribute: Class attribute carrying the event source name.
        event_attribute: Method attribute that marks an event.
        name_argument: Argument of ``source_attribute`` holding the name.
        id_argument: Named form of the event id argument.
        level_argument: Named event level argument.
        default_event_id: Id used when no id argument is present.
        default_event_level: Level used when no level argument is present.
        summary_section: Doc comment element used as the description.
        resolution_section: Doc comment element used as the resolution.
        line_separator: Separator used to rejoin doc comment lines.
        source_extensions: File suffixes treated as C# sources.
        csv_columns: Header row of generated CSV files.
    """

    marker_type: str = DEFAULT_MARKER_TYPE
    source_attribute: str = DEFAULT_SOURCE_ATTRIBUTE
    event_attribute: str = DEFAULT_EVENT_ATTRIBUTE
    name_argument: str = DEFAULT_NAME_ARGUMENT
    id_argument: str = DEFAULT_ID_ARGUMENT
    level_argument: str = DEFAULT_LEVEL_ARGUMENT
    default_event_id: str = DEFAULT_EVENT_ID
    default_event_level: str = DEFAULT_EVENT_LEVEL
    summary_section: str = DEFAULT_SUMMARY_SECTION
    resolution_section: str = DEFAULT_RESOLUTION_SECTION
    line_separator: str = DEFAULT_LINE_SEPARATOR
    source_extensions: tuple[str, ...] = tuple(sorted(CSHARP_EXTENSIONS))
    csv_columns: tuple[str, ...] = CSV_COLUMNS


DEFAULT_SETTINGS = DocumentorSettings()

_TUPLE_FIELDS = {"source_extensions", "csv_columns"}


def _coerce_value(key: str, raw: Any, strict: bool) -> Optional[Any]:
    if key in _TUPLE_FIELDS:
        if not isinstance(raw, (list, tuple)) or not raw:
            report_config_problem(f"'{key}' must be a non-empty list", strict)
            return None
        values = tuple(str(item).strip() for item in raw)
        if key == "csv_columns" and len(values) != len(CSV_COLUMNS):
            report_config_problem(
                f"'csv_columns' must name exactly {len(CSV_COLUMNS)} columns",
                strict,
            )
            return None
        return values

    if not isinstance(raw, str):
        report_config_problem(f"'{key}' must be a string", strict)
        return None
    # Defaults may legitimately be empty; names may not.
    if not raw.strip() and not key.startswith("default_") and key != "line_separator":
        report_config_problem(f"'{key}' must not be empty", strict)
        return None
    return raw


def settings_from_mapping(
    payload: dict[str, Any],
    strict: bool = False,
) -> DocumentorSettings:
    """Build settings from a parsed mapping, validating every key."""
    known = {f.name for f in fields(DocumentorSettings)}
    overrides: dict[str, Any] = {}
    for key, raw in payload.items():
        if key not in known:
            report_config_problem(f"Unknown documentor setting '{key}'", strict)
            continue
        value = _coerce_value(key, raw, strict)
        if value is not None:
            overrides[key] = value
    return replace(DEFAULT_SETTINGS, **overrides)


def load_documentor_settings(
    path: Optional[str] = None,
    strict: Optional[bool] = None,
) -> DocumentorSettings:
    """Load documentor settings from a YAML/JSON file.

    Args:
        path: Settings file. ``None`` returns the defaults.
        strict: Raise ``ConfigValidationError`` on any problem instead of
            falling back. ``None`` reads ``STRICT_CONFIG_VALIDATION``.

    Returns:
        The resolved settings.
    """
    if strict is None:
        strict = resolve_strict_config_validation()
    if path is None:
        return DEFAULT_SETTINGS

    payload = load_config_payload(path, strict=strict)
    # Settings may live at the top level or under a "documentor" key.
    section = payload.get("documentor", payload)
    if not isinstance(section, dict):
        report_config_problem("'documentor' section must be a mapping", strict)
        return DEFAULT_SETTINGS

    settings = settings_from_mapping(section, strict=strict)
    logger.info("Loaded documentor settings from %s", path)
    return settings
