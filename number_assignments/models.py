"""Data models shared by the normalizer, merge step and exporters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


REPORT_COLUMNS = (
    "UserPrincipalName",
    "LineURI",
    "DDI",
    "Ext",
    "DisplayName",
    "FirstName",
    "LastName",
    "Type",
)


class AssignmentType(str, Enum):
    """Classification attached to every phone number assignment."""

    USER = "User"
    MEETING_ROOM = "MeetingRoom"
    AUTO_ATTENDANT = "AutoAttendantResourceAccount"
    CALL_QUEUE = "CallQueueResourceAccount"
    UNKNOWN_RESOURCE_ACCOUNT = "UnknownResourceAccount"

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class AssignmentRecord:
    """A single phone number assigned to a directory identity."""

    user_principal_name: str
    line_uri: str
    ddi: str
    ext: str
    display_name: str
    type: AssignmentType
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def identity(self) -> str:
        return self.user_principal_name

    def as_row(self) -> Dict[str, Any]:
        """Return the report row; name columns only appear on user records."""
        row: Dict[str, Any] = {
            "UserPrincipalName": self.user_principal_name,
            "LineURI": self.line_uri,
            "DDI": self.ddi,
            "Ext": self.ext,
            "DisplayName": self.display_name,
        }
        if self.first_name is not None:
            row["FirstName"] = self.first_name
        if self.last_name is not None:
            row["LastName"] = self.last_name
        row["Type"] = self.type.value
        return row


__all__ = ["AssignmentRecord", "AssignmentType", "REPORT_COLUMNS"]
