"""HTML parsing utilities for extracting labeled rate rows."""

from __future__ import annotations

import math
import re
from typing import Dict

from bs4 import BeautifulSoup
from bs4.element import Tag

from dollar_rates.logger import get_logger

LOGGER = get_logger(__name__)

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class ParseError(ValueError):
    """Raised when a numeric value cannot be parsed from text."""


class ExtractionError(ValueError):
    """Raised when a matched row does not have the expected structure."""

    def __init__(self, message: str, row: str) -> None:
        self.row = row
        super().__init__(f"{message}: {row}")


def parse_decimal(text: str) -> float:
    """Parse a comma-decimal string such as ``"36,50"`` into a float."""
    raw_text = text.strip()
    if not raw_text:
        raise ParseError("Could not parse rate value from empty text")

    normalized = raw_text.replace(",", ".")
    if not _DECIMAL_RE.fullmatch(normalized):
        raise ParseError(f"Could not parse rate value from {raw_text!r}")

    value = float(normalized)
    if not math.isfinite(value):
        raise ParseError(f"Rate value {raw_text!r} is out of range")
    return value


class RateRowExtractor:
    """Collect ``label -> value`` pairs from repeated rate rows."""

    def __init__(
        self,
        row_selector: str = ".row.recuadrotsmc",
        label_selector: str = "span",
        value_selector: str = "strong",
    ) -> None:
        self.row_selector = row_selector
        self.label_selector = label_selector
        self.value_selector = value_selector

    def _text_of(self, row: Tag, selector: str, what: str) -> str:
        elem = row.select_one(selector)
        if elem is None:
            raise ExtractionError(f"Failed to find {what} for row", str(row))
        text = elem.get_text().strip()
        if not text:
            raise ExtractionError(f"The {what} for row was empty", str(row))
        return text

    def extract(self, html: str) -> Dict[str, float]:
        """Return every row's lowercased label mapped to its parsed value.

        Any malformed row fails the whole extraction; no partial mapping is
        returned. A page with no matching rows yields an empty mapping.
        """
        soup = BeautifulSoup(html, "html.parser")
        fields: Dict[str, float] = {}
        for row in soup.select(self.row_selector):
            label = self._text_of(row, self.label_selector, "currency name").lower()
            raw_value = self._text_of(row, self.value_selector, "currency value")
            try:
                value = parse_decimal(raw_value)
            except ParseError as exc:
                raise ExtractionError(f"Failed to parse currency value ({exc})", str(row)) from exc
            if label in fields:
                LOGGER.debug("Duplicate row for %r, keeping the later value", label)
            fields[label] = value
        return fields
