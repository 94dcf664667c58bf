"""Phone number assignment reporting for Teams style telephony directories."""

from . import models  # noqa: F401
from .line_uri import ParsedLineUri, parse_line_uri
from .merge import AssignmentCollection
from .models import AssignmentRecord, AssignmentType
from .normalize import (
    classify_application_id,
    normalize_meeting_room,
    normalize_resource_account,
    normalize_user,
)
from .pipeline import AssignmentReportPipeline

__all__ = [
    "AssignmentCollection",
    "AssignmentRecord",
    "AssignmentReportPipeline",
    "AssignmentType",
    "ParsedLineUri",
    "classify_application_id",
    "normalize_meeting_room",
    "normalize_resource_account",
    "normalize_user",
    "parse_line_uri",
    "directory",
    "export",
    "pipeline",
]
