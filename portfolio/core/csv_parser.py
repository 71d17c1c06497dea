"""Line-oriented CSV parsing for published spreadsheet exports.

Spreadsheet exports are parsed one line at a time so that a malformed row
never takes the whole load down with it. Quoting errors degrade by toggling
quote state instead of raising.
"""

from __future__ import annotations

from typing import List


# Title..collaboration columns; fixed-index access downstream relies on this.
MIN_FIELDS = 11


def parse_csv_line(line: str, min_fields: int = MIN_FIELDS) -> List[str]:
    """Split one CSV line into trimmed fields.

    Supports double-quoted fields, ``""`` as an escaped quote inside a quoted
    field, and commas inside quotes. The result is padded with empty strings
    up to ``min_fields``.

    Args:
        line: A single line of CSV text (no trailing newline required).
        min_fields: Minimum number of fields to return.

    Returns:
        List of field values with surrounding whitespace removed.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current).strip())

    while len(fields) < min_fields:
        fields.append("")
    return fields


def split_csv_lines(text: str) -> List[str]:
    """Split CSV text into non-blank lines, dropping ``\\r`` line endings."""
    lines = []
    for raw in text.split("\n"):
        line = raw.rstrip("\r")
        if line.strip():
            lines.append(line)
    return lines
