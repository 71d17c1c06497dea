"""Slug, year and link helpers shared by the catalog and site modules."""

from __future__ import annotations

import re


_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_FOUR_DIGITS = re.compile(r"\d{4}")
_MODERN_YEAR = re.compile(r"(19|20)\d{2}")
_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def slugify(text) -> str:
    """Return a lowercase, hyphen-delimited identifier for ``text``.

    Runs of characters outside ``[a-z0-9]`` collapse to a single hyphen and
    leading/trailing hyphens are removed. ``slugify(slugify(x)) == slugify(x)``.
    """
    slug = _NON_ALNUM.sub("-", str(text).lower().strip())
    return slug.strip("-")


def parse_years(value) -> str:
    """Extract the first 4-digit year from a year cell.

    Falls back to the trimmed cell when no 4-digit run is present, and to an
    empty string for blank input.
    """
    if value is None:
        return ""
    text = str(value)
    if not text.strip():
        return ""
    m = _FOUR_DIGITS.search(text)
    return m.group(0) if m else text.strip()


def first_year(value) -> int:
    """Integer value of the first 4-digit run in ``value``, or 0."""
    m = _FOUR_DIGITS.search(str(value or ""))
    return int(m.group(0)) if m else 0


def year_key(value) -> int:
    """Integer value of the first 19xx/20xx year in ``value``, or 0."""
    m = _MODERN_YEAR.search(str(value or ""))
    return int(m.group(0)) if m else 0


def normalize_link(link) -> str:
    """Turn a spreadsheet link cell into an absolute URL.

    ``oppr.org/s/abc`` becomes ``https://oppr.org/s/abc``; links that already
    carry an http(s) scheme are returned unchanged.
    """
    if not isinstance(link, str):
        return ""
    trimmed = link.strip()
    if not trimmed:
        return ""
    if _HTTP_SCHEME.match(trimmed):
        return trimmed
    return "https://" + trimmed.lstrip("/")
