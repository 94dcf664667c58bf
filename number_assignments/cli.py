"""Command line interface for producing phone number assignment reports."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict

from .config import ConfigurationError, load_configuration, resolve_categories
from .directory import DirectoryQueryError
from .export import ExportError, build_exporter, supported_formats
from .factory import DEFAULT_CLIENT_CLASS, build_directory_client
from .pipeline import CATEGORY_NAMES, AssignmentReportPipeline

LOGGER = logging.getLogger(__name__)

NO_EXPORT = "none"


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Report phone numbers assigned to users, meeting rooms and resource accounts",
    )
    parser.add_argument(
        "--config",
        help="Path to a report configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--snapshot",
        help="Read directory objects from an exported snapshot file or folder",
    )
    parser.add_argument(
        "--report",
        nargs="+",
        choices=["All", *CATEGORY_NAMES],
        default=None,
        help="Categories to include (default: All)",
    )
    parser.add_argument(
        "--format",
        choices=[*supported_formats(), NO_EXPORT],
        default=None,
        help="Report format; 'none' prints raw records as JSON lines (default: table)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Report file path (default: PhoneNumberAssignments_<timestamp>.<ext>)",
    )
    parser.add_argument(
        "--raise-on-error",
        action="store_true",
        help="Abort when a category query fails instead of treating it as empty",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def _merge_arguments(args: argparse.Namespace, config: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(config)
    if args.snapshot:
        merged["directory"] = {"class": DEFAULT_CLIENT_CLASS, "options": {"path": args.snapshot}}
    if args.report is not None:
        merged["report"] = args.report
    if args.format is not None:
        merged["format"] = args.format
    if args.output is not None:
        merged["output"] = args.output
    if args.raise_on_error:
        merged["raise_on_error"] = True
    return merged


def _print_raw(records) -> None:
    for record in records:
        sys.stdout.write(json.dumps(record.as_row(), ensure_ascii=False) + "\n")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        config = load_configuration(args.config) if args.config else {}
        settings = _merge_arguments(args, config)
        client = build_directory_client(settings)
        if client is None:
            parser.error("no directory client configured; pass --snapshot or a config with a 'directory' section")

        categories = resolve_categories(settings.get("report"))
        fmt = str(settings.get("format") or "table").lower()
        exporter = None if fmt == NO_EXPORT else build_exporter(fmt, settings.get("output"))

        pipeline = AssignmentReportPipeline(
            client,
            categories=categories,
            raise_on_error=bool(settings.get("raise_on_error", False)),
        )
        result = pipeline.run(exporter)
        if exporter is None:
            _print_raw(result)
    except (ConfigurationError, DirectoryQueryError, ExportError) as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
