"""Export utilities for phone number assignment reports."""
from __future__ import annotations

import html
import importlib.util
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, TextIO, Tuple, Union
from xml.etree import ElementTree

import pandas as pd

from ..models import REPORT_COLUMNS, AssignmentRecord

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

XML_ROOT = "Assignments"
XML_ROW = "Assignment"
SHEET_NAME = "Assignments"
OUTPUT_PREFIX = "PhoneNumberAssignments"
_NAME_COLUMNS = ("FirstName", "LastName")


class ExportError(RuntimeError):
    """Raised when a report cannot be produced in the requested format."""


def records_to_dataframe(records: Sequence[AssignmentRecord]) -> pd.DataFrame:
    """Convert records into a :class:`pandas.DataFrame` with the report column order.

    Name columns are only included when at least one user record is present.
    """

    rows = [record.as_row() for record in records]
    present = {key for row in rows for key in row}
    columns = [
        column
        for column in REPORT_COLUMNS
        if column not in _NAME_COLUMNS or column in present
    ]
    return pd.DataFrame(rows, columns=columns)


def records_to_json(records: Sequence[AssignmentRecord], *, indent: Optional[int] = 2) -> str:
    return json.dumps([record.as_row() for record in records], indent=indent, ensure_ascii=False)


def default_output_path(fmt: str, now: Optional[datetime] = None, directory: PathLike = ".") -> Path:
    """Return ``PhoneNumberAssignments_<timestamp>.<ext>`` inside ``directory``."""

    extension = _extension_for(fmt)
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(directory) / f"{OUTPUT_PREFIX}_{stamp}.{extension}"


def print_table(records: Sequence[AssignmentRecord], stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    dataframe = records_to_dataframe(records)
    if dataframe.empty:
        stream.write("No phone number assignments found.\n")
        return
    stream.write(dataframe.to_string(index=False, na_rep=""))
    stream.write("\n")


def write_table(records: Sequence[AssignmentRecord], path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        print_table(records, handle)


def write_csv(records: Sequence[AssignmentRecord], path: Path) -> None:
    records_to_dataframe(records).to_csv(path, index=False, encoding="utf-8")


def write_json(records: Sequence[AssignmentRecord], path: Path) -> None:
    path.write_text(records_to_json(records) + "\n", encoding="utf-8")


def write_xml(records: Sequence[AssignmentRecord], path: Path) -> None:
    dataframe = records_to_dataframe(records)
    if dataframe.empty:
        ElementTree.ElementTree(ElementTree.Element(XML_ROOT)).write(path, encoding="utf-8", xml_declaration=True)
        return
    dataframe.fillna("").to_xml(
        path,
        index=False,
        root_name=XML_ROOT,
        row_name=XML_ROW,
        parser="etree",
        encoding="utf-8",
    )


def write_yaml(records: Sequence[AssignmentRecord], path: Path) -> None:
    """Write YAML by round-tripping the JSON representation through PyYAML."""

    try:
        import yaml  # type: ignore
    except ImportError as exc:
        raise ExportError("YAML reports require the 'pyyaml' package to be installed") from exc

    document = json.loads(records_to_json(records))
    path.write_text(
        yaml.safe_dump(document, sort_keys=False, allow_unicode=True, default_flow_style=False),
        encoding="utf-8",
    )


def write_html(records: Sequence[AssignmentRecord], path: Path, *, now: Optional[datetime] = None) -> None:
    """Write an HTML page with the report table and a generation timestamp footer."""

    generated = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    table = records_to_dataframe(records).to_html(index=False, na_rep="", border=0, classes="assignments")
    page = "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{html.escape(OUTPUT_PREFIX)}</title>",
            "</head>",
            "<body>",
            table,
            f'<p class="footer">Generated {html.escape(generated)}</p>',
            "</body>",
            "</html>",
            "",
        ]
    )
    path.write_text(page, encoding="utf-8")


def write_excel(records: Sequence[AssignmentRecord], path: Path) -> None:
    if importlib.util.find_spec("openpyxl") is None:
        raise ExportError("Excel reports require the 'openpyxl' package to be installed")
    records_to_dataframe(records).to_excel(path, index=False, sheet_name=SHEET_NAME, engine="openpyxl")


Writer = Callable[[Sequence[AssignmentRecord], Path], None]

FORMATS: Dict[str, Tuple[Writer, str]] = {
    "table": (write_table, "txt"),
    "csv": (write_csv, "csv"),
    "json": (write_json, "json"),
    "xml": (write_xml, "xml"),
    "yaml": (write_yaml, "yaml"),
    "html": (write_html, "html"),
    "xlsx": (write_excel, "xlsx"),
}


_OPTIONAL_MODULES: Dict[str, Tuple[str, str]] = {
    "yaml": ("yaml", "pyyaml"),
    "xlsx": ("openpyxl", "openpyxl"),
}


def _extension_for(fmt: str) -> str:
    try:
        return FORMATS[fmt][1]
    except KeyError as exc:
        raise ExportError(f"Unsupported report format '{fmt}'. Supported formats: {sorted(FORMATS)}") from exc


def export_records(
    records: Sequence[AssignmentRecord],
    fmt: str,
    path: Optional[PathLike] = None,
    *,
    stream: Optional[TextIO] = None,
) -> Optional[Path]:
    """Write ``records`` in ``fmt``.

    The ``table`` format prints to ``stream`` unless a ``path`` is given. Every
    other format writes a file, named by :func:`default_output_path` when no
    ``path`` is supplied. Returns the written path, if any.
    """

    _extension_for(fmt)
    if fmt == "table" and path is None:
        print_table(records, stream)
        return None

    writer, _ = FORMATS[fmt]
    destination = Path(path) if path is not None else default_output_path(fmt)
    destination.parent.mkdir(parents=True, exist_ok=True)
    writer(records, destination)
    LOGGER.info("Wrote %s record(s) to %s", len(records), destination)
    return destination


def build_exporter(
    fmt: str,
    path: Optional[PathLike] = None,
    *,
    stream: Optional[TextIO] = None,
) -> Callable[[Sequence[AssignmentRecord]], Optional[Path]]:
    """Bind format and destination into a single-argument exporter for the pipeline.

    Missing optional libraries for ``fmt`` are reported here, before any
    directory query runs.
    """

    _extension_for(fmt)
    required = _OPTIONAL_MODULES.get(fmt)
    if required and importlib.util.find_spec(required[0]) is None:
        raise ExportError(f"{fmt} reports require the '{required[1]}' package to be installed")

    def _export(records: Sequence[AssignmentRecord]) -> Optional[Path]:
        return export_records(records, fmt, path, stream=stream)

    return _export


def supported_formats() -> List[str]:
    return list(FORMATS)


__all__ = [
    "ExportError",
    "FORMATS",
    "build_exporter",
    "default_output_path",
    "export_records",
    "print_table",
    "records_to_dataframe",
    "records_to_json",
    "supported_formats",
]
