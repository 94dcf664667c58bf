"""Directory client backed by an exported snapshot on disk."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from .base import DirectoryQueryError, RawItem, coerce_items

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

_TABULAR_SUFFIXES = (".csv", ".tsv", ".xlsx")
_DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")
_NUMERIC_TAGS = {"tag:yaml.org,2002:int", "tag:yaml.org,2002:float"}


class SnapshotDirectoryClient:
    """Read directory objects from files exported ahead of time.

    ``path`` may be a single JSON/YAML document with ``users``,
    ``meeting_rooms`` and ``resource_accounts`` lists, or a folder holding one
    ``<category>.csv``/``.tsv``/``.json``/``.xlsx`` file per category.
    """

    name = "snapshot"

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        self._document: Optional[Dict[str, Any]] = None

    def get_users(self) -> List[RawItem]:
        return self._load_category("users")

    def get_meeting_rooms(self) -> List[RawItem]:
        return self._load_category("meeting_rooms")

    def get_resource_accounts(self) -> List[RawItem]:
        return self._load_category("resource_accounts")

    def _load_category(self, category: str) -> List[RawItem]:
        if not self.path.exists():
            raise DirectoryQueryError(f"Directory snapshot '{self.path}' was not found")

        if self.path.is_dir():
            items = self._load_category_file(category)
        else:
            document = self._load_document()
            if category not in document:
                raise DirectoryQueryError(f"Snapshot '{self.path}' has no '{category}' section")
            items = coerce_items(document[category], self.path)

        LOGGER.debug("Loaded %s %s item(s) from %s", len(items), category, self.path)
        return items

    def _load_document(self) -> Dict[str, Any]:
        if self._document is None:
            loaded = _read_document(self.path)
            if not isinstance(loaded, dict):
                raise DirectoryQueryError(f"Snapshot '{self.path}' must contain a mapping of categories")
            self._document = loaded
        return self._document

    def _load_category_file(self, category: str) -> List[RawItem]:
        for suffix in _TABULAR_SUFFIXES + _DOCUMENT_SUFFIXES:
            candidate = self.path / f"{category}{suffix}"
            if not candidate.exists():
                continue
            if suffix in _TABULAR_SUFFIXES:
                return _read_table(candidate)
            return coerce_items(_read_document(candidate), candidate)
        raise DirectoryQueryError(f"No '{category}' export found in '{self.path}'")


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8-sig")
    if not text.strip():
        return []
    if path.suffix.lower() == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DirectoryQueryError(f"Snapshot '{path}' is not valid JSON: {exc}") from exc

    try:
        import yaml  # type: ignore
    except ImportError as exc:  # pragma: no cover - dependency optional
        raise DirectoryQueryError("YAML snapshots require the 'pyyaml' package to be installed") from exc
    try:
        return yaml.load(text, Loader=_text_number_loader(yaml))
    except yaml.YAMLError as exc:
        raise DirectoryQueryError(f"Snapshot '{path}' is not valid YAML: {exc}") from exc


def _text_number_loader(yaml: Any) -> Any:
    """SafeLoader variant that leaves numeric scalars such as +15551234567 or 0123 as text."""

    resolvers = {
        first: [(tag, pattern) for tag, pattern in entries if tag not in _NUMERIC_TAGS]
        for first, entries in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }
    return type("TextNumberLoader", (yaml.SafeLoader,), {"yaml_implicit_resolvers": resolvers})


def _read_table(path: Path) -> List[RawItem]:
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        dataframe = pd.read_excel(path, dtype=str, engine="openpyxl")
    else:
        dataframe = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            sep="\t" if suffix == ".tsv" else ",",
            encoding="utf-8-sig",
        )
    dataframe = dataframe.fillna("")
    return [{str(key): value for key, value in row.items()} for row in dataframe.to_dict(orient="records")]


__all__ = ["SnapshotDirectoryClient"]
