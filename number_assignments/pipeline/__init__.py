"""Fetch, merge and sort workflow for assignment reports."""

from .service import CATEGORY_HANDLERS, CATEGORY_NAMES, AssignmentReportPipeline, CategoryHandler, emit, sort_records

__all__ = [
    "AssignmentReportPipeline",
    "CATEGORY_HANDLERS",
    "CATEGORY_NAMES",
    "CategoryHandler",
    "emit",
    "sort_records",
]
