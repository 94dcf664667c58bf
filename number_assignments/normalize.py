"""Convert raw directory objects into :class:`AssignmentRecord` instances."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .line_uri import parse_line_uri
from .models import AssignmentRecord, AssignmentType

AUTO_ATTENDANT_APPLICATION_ID = "ce933385-9390-45d1-9512-c8d228074e07"
CALL_QUEUE_APPLICATION_ID = "11cd3e2e-fccb-42ad-ad00-878b93575e07"

_APPLICATION_TYPES: Mapping[str, AssignmentType] = {
    AUTO_ATTENDANT_APPLICATION_ID: AssignmentType.AUTO_ATTENDANT,
    CALL_QUEUE_APPLICATION_ID: AssignmentType.CALL_QUEUE,
}


def _text(item: Mapping[str, Any], key: str) -> str:
    value = item.get(key)
    if value is None:
        return ""
    return str(value)


def _optional_text(item: Mapping[str, Any], key: str) -> Optional[str]:
    value = item.get(key)
    if value is None:
        return None
    return str(value)


def classify_application_id(application_id: Optional[str]) -> AssignmentType:
    """Map a resource account application id onto its assignment type."""

    if application_id is None:
        return AssignmentType.UNKNOWN_RESOURCE_ACCOUNT
    return _APPLICATION_TYPES.get(str(application_id), AssignmentType.UNKNOWN_RESOURCE_ACCOUNT)


def _build_record(
    item: Mapping[str, Any],
    line_uri: str,
    assignment_type: AssignmentType,
    *,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> AssignmentRecord:
    parsed = parse_line_uri(line_uri)
    return AssignmentRecord(
        user_principal_name=_text(item, "UserPrincipalName"),
        line_uri=line_uri,
        ddi=parsed.ddi,
        ext=parsed.ext,
        display_name=_text(item, "DisplayName"),
        type=assignment_type,
        first_name=first_name,
        last_name=last_name,
    )


def normalize_user(item: Mapping[str, Any]) -> AssignmentRecord:
    """Normalise a voice enabled user.

    First and last names are always populated on user records, falling back
    to an empty string when the directory leaves them unset.
    """

    return _build_record(
        item,
        _text(item, "LineURI"),
        AssignmentType.USER,
        first_name=_optional_text(item, "FirstName") or "",
        last_name=_optional_text(item, "LastName") or "",
    )


def normalize_meeting_room(item: Mapping[str, Any]) -> AssignmentRecord:
    return _build_record(item, _text(item, "LineURI"), AssignmentType.MEETING_ROOM)


def normalize_resource_account(item: Mapping[str, Any]) -> AssignmentRecord:
    """Normalise a resource account; its ``PhoneNumber`` becomes the LineURI."""

    assignment_type = classify_application_id(_optional_text(item, "ApplicationId"))
    return _build_record(item, _text(item, "PhoneNumber"), assignment_type)


__all__ = [
    "AUTO_ATTENDANT_APPLICATION_ID",
    "CALL_QUEUE_APPLICATION_ID",
    "classify_application_id",
    "normalize_meeting_room",
    "normalize_resource_account",
    "normalize_user",
]
