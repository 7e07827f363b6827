"""Configuration file loading helpers.

Provides strict/non-strict YAML or JSON loading used by the documentor
settings layer.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def report_config_problem(msg: str, strict: bool) -> None:
    """Raise in strict mode, otherwise log and let the caller fall back."""
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; continuing with defaults", msg)


def load_config_payload(path: str, strict: bool = False) -> dict[str, Any]:
    """Load a YAML or JSON mapping from ``path``.

    The format is picked from the file suffix (``.json`` is JSON, anything
    else is YAML). In non-strict mode this returns an empty dict on
    read/parse failures. In strict mode this raises ``ConfigValidationError``.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    try:
        if config_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        msg = f"Failed to parse config at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        report_config_problem(f"Config file is empty: {config_path}", strict)
        return {}

    if not isinstance(payload, dict):
        report_config_problem(
            f"Unexpected config payload type: {type(payload).__name__}", strict
        )
        return {}

    return payload
