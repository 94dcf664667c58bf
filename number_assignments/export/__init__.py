"""Report writers for phone number assignment collections."""

from .exporters import (  # noqa: F401
    ExportError,
    build_exporter,
    default_output_path,
    export_records,
    records_to_dataframe,
    supported_formats,
)

__all__ = [
    "ExportError",
    "build_exporter",
    "default_output_path",
    "export_records",
    "records_to_dataframe",
    "supported_formats",
]
