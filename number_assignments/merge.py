"""Utility helpers for merging assignment records across directory categories."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

from .models import AssignmentRecord

LOGGER = logging.getLogger(__name__)


class AssignmentCollection:
    """Running collection of records keyed by ``UserPrincipalName``.

    A record added under a later category supersedes every record stored for
    the same identity by an earlier category. Records sharing an identity
    within one category are all kept.
    """

    def __init__(self) -> None:
        self._buckets: Dict[str, Tuple[str, List[AssignmentRecord]]] = {}
        self.superseded = 0

    def __len__(self) -> int:
        return sum(len(records) for _, records in self._buckets.values())

    def __contains__(self, identity: object) -> bool:
        return identity in self._buckets

    def add(self, record: AssignmentRecord, category: str) -> None:
        key = record.identity
        bucket = self._buckets.get(key)
        if bucket is None:
            self._buckets[key] = (category, [record])
            return

        stored_category, records = bucket
        if stored_category == category:
            records.append(record)
            return

        LOGGER.debug(
            "%s entry for %s supersedes %s %s record(s)",
            category,
            key,
            len(records),
            stored_category,
        )
        self.superseded += len(records)
        self._buckets[key] = (category, [record])

    def extend(self, records: Iterable[AssignmentRecord], category: str) -> int:
        count = 0
        for record in records:
            self.add(record, category)
            count += 1
        return count

    def records(self) -> List[AssignmentRecord]:
        return [record for _, records in self._buckets.values() for record in records]


def merge_categories(
    categories: Iterable[Tuple[str, Iterable[AssignmentRecord]]]
) -> AssignmentCollection:
    """Merge ``(category, records)`` pairs in the order they are supplied."""

    collection = AssignmentCollection()
    for category, records in categories:
        collection.extend(records, category)
    return collection


__all__ = ["AssignmentCollection", "merge_categories"]
