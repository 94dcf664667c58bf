"""Report pipeline that fetches, normalises and merges every category."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence

from ..directory.base import DirectoryClient, RawItem
from ..merge import AssignmentCollection
from ..models import AssignmentRecord
from ..normalize import normalize_meeting_room, normalize_resource_account, normalize_user

LOGGER = logging.getLogger(__name__)

Exporter = Callable[[Sequence[AssignmentRecord]], Any]


@dataclass(frozen=True)
class CategoryHandler:
    """Binds a directory query to the normaliser for its objects."""

    name: str
    fetch_method: str
    phone_field: str
    normalize: Callable[[RawItem], AssignmentRecord]

    def fetch(self, client: DirectoryClient) -> Iterable[RawItem]:
        return getattr(client, self.fetch_method)()

    def has_phone(self, item: RawItem) -> bool:
        value = item.get(self.phone_field)
        return value is not None and str(value).strip() != ""


# Later handlers supersede earlier ones for the same identity.
CATEGORY_HANDLERS: Sequence[CategoryHandler] = (
    CategoryHandler("Users", "get_users", "LineURI", normalize_user),
    CategoryHandler("MeetingRooms", "get_meeting_rooms", "LineURI", normalize_meeting_room),
    CategoryHandler("ResourceAccounts", "get_resource_accounts", "PhoneNumber", normalize_resource_account),
)

CATEGORY_NAMES: Sequence[str] = tuple(handler.name for handler in CATEGORY_HANDLERS)


def sort_records(records: Iterable[AssignmentRecord]) -> List[AssignmentRecord]:
    """Order records by their raw ``LineURI`` string; blanks sort first."""

    return sorted(records, key=lambda record: record.line_uri or "")


def emit(records: Sequence[AssignmentRecord], exporter: Optional[Exporter] = None) -> Any:
    """Hand the records to ``exporter``, or return them untouched without one."""

    if exporter is None:
        return list(records)
    return exporter(records)


class AssignmentReportPipeline:
    """Collects phone number assignments from a directory client."""

    def __init__(
        self,
        client: DirectoryClient,
        *,
        categories: Optional[Iterable[str]] = None,
        handlers: Sequence[CategoryHandler] = CATEGORY_HANDLERS,
        raise_on_error: bool = False,
    ) -> None:
        self._client = client
        selected = set(categories) if categories is not None else {handler.name for handler in handlers}
        self._handlers = [handler for handler in handlers if handler.name in selected]
        self._raise_on_error = raise_on_error

    @property
    def handlers(self) -> List[CategoryHandler]:
        return list(self._handlers)

    def collect(self) -> List[AssignmentRecord]:
        """Fetch and merge every enabled category, returning records sorted by LineURI."""

        collection = AssignmentCollection()
        for handler in self._handlers:
            items = self._fetch(handler)
            added = collection.extend(self._normalize_items(handler, items), handler.name)
            LOGGER.info("Collected %s %s assignment(s)", added, handler.name)

        if collection.superseded:
            LOGGER.info("Replaced %s record(s) superseded by a more specific category", collection.superseded)
        return sort_records(collection.records())

    def run(self, exporter: Optional[Exporter] = None) -> Any:
        return emit(self.collect(), exporter)

    def _normalize_items(self, handler: CategoryHandler, items: Iterable[RawItem]) -> Iterator[AssignmentRecord]:
        for item in items:
            try:
                if not handler.has_phone(item):
                    continue
                record = handler.normalize(item)
            except Exception as exc:
                if self._raise_on_error:
                    raise
                LOGGER.warning("Skipping malformed %s entry %r: %s", handler.name, item, exc)
                continue
            yield record

    def _fetch(self, handler: CategoryHandler) -> List[RawItem]:
        try:
            return list(handler.fetch(self._client) or [])
        except Exception as exc:
            if self._raise_on_error:
                raise
            LOGGER.warning("Could not query %s, treating the category as empty: %s", handler.name, exc)
            return []
