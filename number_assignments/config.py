"""Configuration helpers for the assignment report."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .pipeline import CATEGORY_NAMES

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}
_ALL = "all"


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load report settings from a JSON or YAML file.

    Keys are ``report``, ``format``, ``output``, ``raise_on_error`` and a
    ``directory`` section naming the client ``class`` and its ``options``.
    An empty file yields an empty mapping.
    """

    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )
    try:
        text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' was not found") from exc

    data = _parse_json(text, file_path) if suffix == ".json" else _parse_yaml(text, file_path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping")
    return data


def _parse_json(text: str, source: Path) -> Any:
    try:
        return json.loads(text) if text.strip() else None
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Configuration file '{source}' is not valid JSON: {exc}") from exc


def _parse_yaml(text: str, source: Path) -> Any:
    try:
        import yaml  # type: ignore
    except ImportError as exc:  # pragma: no cover - dependency optional
        raise ConfigurationError("YAML configuration requires the 'pyyaml' package to be installed") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Configuration file '{source}' is not valid YAML: {exc}") from exc


def resolve_categories(value: Optional[Union[str, Iterable[str]]]) -> List[str]:
    """Expand a report selection into category names in processing order.

    ``None`` and ``"All"`` select every category. Names match case-insensitively.
    """

    if value is None:
        return list(CATEGORY_NAMES)
    requested = [value] if isinstance(value, str) else list(value)
    lookup = {name.lower(): name for name in CATEGORY_NAMES}

    selected = set()
    for entry in requested:
        key = str(entry).strip().lower()
        if key == _ALL:
            return list(CATEGORY_NAMES)
        if key not in lookup:
            raise ConfigurationError(
                f"Unknown report category '{entry}'. Expected one of: All, {', '.join(CATEGORY_NAMES)}"
            )
        selected.add(lookup[key])

    if not selected:
        LOGGER.warning("Empty report selection, defaulting to all categories")
        return list(CATEGORY_NAMES)
    return [name for name in CATEGORY_NAMES if name in selected]
