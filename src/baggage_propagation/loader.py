"""YAML configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import PropagationError, PropagationErrorCodes
from .models import PropagationConfig


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        code = PropagationErrorCodes.READ_FILE if isinstance(e, OSError) else PropagationErrorCodes.PARSE_YAML
        raise PropagationError(code=code, message=f"Cannot load config {path}: {e}", cause=e) from e


def load(base_path: Path, env_path: Path | None = None) -> PropagationConfig:
    """Load a PropagationConfig from YAML.

    Sections of ``env_path``, when that file exists, replace the matching
    fields of ``base_path`` one level deep (``log``, ``tracing``).
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        for section, fields in _read_yaml(env_path).items():
            if isinstance(fields, dict) and isinstance(data.get(section), dict):
                data[section] = {**data[section], **fields}
            else:
                data[section] = fields
    try:
        return PropagationConfig.model_validate(data)
    except ValidationError as e:
        raise PropagationError(
            code=PropagationErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
