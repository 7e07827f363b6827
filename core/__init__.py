"""Core shared contracts and utilities."""

from core.structured_logging import (
    configure_structured_logging,
    event_source_scope,
    get_event_source,
    get_run_id,
    get_source_file,
    set_run_id,
    source_file_scope,
)
from core.config_loader import (
    ConfigValidationError,
    load_config_payload,
    report_config_problem,
    resolve_strict_config_validation,
)
from core.run_artifacts import build_run_report, write_run_report

__all__ = [
    "configure_structured_logging",
    "event_source_scope",
    "get_event_source",
    "get_run_id",
    "get_source_file",
    "set_run_id",
    "source_file_scope",
    "ConfigValidationError",
    "load_config_payload",
    "report_config_problem",
    "resolve_strict_config_validation",
    "build_run_report",
    "write_run_report",
]
