"""Parsing helpers for telephony identifiers (``tel:+15551234567;ext=204``)."""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

LINE_URI_PATTERN = re.compile(r"^(?:tel:)?(?:\+)?(\d+)(?:;ext=(\d+))?(?:;([\w-]+))?$")


class ParsedLineUri(NamedTuple):
    """Result of :func:`parse_line_uri`. Unmatched groups are empty strings."""

    full_match: str
    ddi: str
    ext: str

    @property
    def matched(self) -> bool:
        return bool(self.full_match)

    @property
    def tag(self) -> str:
        """Trailing ``;<tag>`` segment. Parsed but not carried into records."""
        if not self.full_match:
            return ""
        return LINE_URI_PATTERN.match(self.full_match).group(3) or ""


_NO_MATCH = ParsedLineUri("", "", "")


def parse_line_uri(value: Optional[str]) -> ParsedLineUri:
    """Split a raw identifier into its direct dial number and extension.

    ``None``, empty and malformed identifiers never raise; they produce a
    result whose fields are all empty.
    """

    if not value:
        return _NO_MATCH
    match = LINE_URI_PATTERN.match(str(value))
    if match is None:
        return _NO_MATCH
    return ParsedLineUri(match.group(0), match.group(1), match.group(2) or "")


__all__ = ["LINE_URI_PATTERN", "ParsedLineUri", "parse_line_uri"]
