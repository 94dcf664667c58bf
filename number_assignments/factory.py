"""Factory helpers for constructing directory clients from configuration."""
from __future__ import annotations

import importlib
from typing import Any, Dict, Optional

from .config import ConfigurationError
from .directory.base import DirectoryClient

DEFAULT_CLIENT_CLASS = "number_assignments.directory.snapshot.SnapshotDirectoryClient"


def _load_class(path: str):
    module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Invalid directory client class path '{path}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Could not import directory client module '{module_name}': {exc}") from exc
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f"Module '{module_name}' does not define '{attr}'") from exc


def build_directory_client(config: Dict[str, Any]) -> Optional[DirectoryClient]:
    """Instantiate the directory client described by the ``directory`` section.

    Returns ``None`` when no client is configured.
    """

    directory_cfg = config.get("directory")
    if not directory_cfg:
        return None
    if not isinstance(directory_cfg, dict):
        raise ConfigurationError("The 'directory' configuration section must be a mapping")

    class_path = directory_cfg.get("class") or DEFAULT_CLIENT_CLASS
    options = directory_cfg.get("options", {}) or {}
    if not isinstance(options, dict):
        raise ConfigurationError("Directory client 'options' must be a mapping")

    client_cls = _load_class(class_path)
    try:
        return client_cls(**options)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid options for directory client '{class_path}': {exc}") from exc
