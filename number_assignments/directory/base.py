"""Common interface shared by directory service clients."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Protocol

LOGGER = logging.getLogger(__name__)

RawItem = Mapping[str, Any]


class DirectoryQueryError(RuntimeError):
    """Raised when a directory category cannot be queried."""


class DirectoryClient(Protocol):
    """Protocol defining the bulk queries a directory client must answer.

    Each method returns the raw directory objects of one category, already
    authenticated against the service.
    """

    def get_users(self) -> Iterable[RawItem]:  # pragma: no cover - runtime protocol
        """Return voice enabled users (``UserPrincipalName``, ``LineURI``, ...)."""

    def get_meeting_rooms(self) -> Iterable[RawItem]:  # pragma: no cover - runtime protocol
        """Return meeting rooms (``UserPrincipalName``, ``LineURI``, ``DisplayName``)."""

    def get_resource_accounts(self) -> Iterable[RawItem]:  # pragma: no cover - runtime protocol
        """Return resource accounts (``PhoneNumber``, ``ApplicationId``, ...)."""


def coerce_items(value: Any, source: object) -> List[RawItem]:
    """Return ``value`` as a list of directory objects."""

    # ConvertTo-Json emits a bare object when a query returns a single item.
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        items = [item for item in value if isinstance(item, dict)]
        if len(items) != len(value):
            LOGGER.warning("Skipped %s entries from '%s' that are not directory objects", len(value) - len(items), source)
        return items
    raise DirectoryQueryError(f"'{source}' did not return a list of directory objects")
