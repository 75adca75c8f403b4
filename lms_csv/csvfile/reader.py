from __future__ import annotations

import re
from dataclasses import dataclass

"""CSV decoding and quote-aware row splitting.

The whole buffer is decoded at once; callers cap upload size before calling in.
Lines are split on \\n or \\r\\n, blank lines are dropped, and each remaining
line is scanned into fields. Malformed quoting never raises: an unterminated
quote runs to the end of its line.
"""

__all__ = [
    "UTF8_BOM",
    "BOM_WARNING",
    "CsvParseError",
    "EmptyFileError",
    "ParsedCsv",
    "has_bom",
    "remove_bom",
    "parse_row",
    "parse_csv",
]

UTF8_BOM = b"\xef\xbb\xbf"
BOM_WARNING = "File contains BOM (Byte Order Mark). BOM will be removed during processing."

DELIMITER = ","
QUOTE = '"'

_LINE_BREAK = re.compile(r"\r?\n")
# field trim: Unicode whitespace plus U+FEFF
_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


class CsvParseError(Exception):
    """Raised when the file cannot be turned into rows at all."""


class EmptyFileError(CsvParseError):
    """Raised when the file has no non-blank lines."""

    def __init__(self) -> None:
        super().__init__("File is empty")


@dataclass
class ParsedCsv:
    rows: list[list[str]]  # row 0 = header
    bom_removed: bool = False


def has_bom(content: bytes) -> bool:
    """Check only the first 3 bytes for the UTF-8 byte order mark."""
    return content[:3] == UTF8_BOM


def remove_bom(content: bytes) -> bytes:
    if has_bom(content):
        return content[3:]
    return content


def _trim(value: str) -> str:
    return _EDGE_SPACE.sub("", value)


def parse_row(line: str) -> list[str]:
    """Split one line into trimmed fields.

    A quote toggles the quoted state, a doubled quote inside a quoted span is a
    literal quote, and a delimiter inside a quoted span is literal.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)
    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            values.append(_trim("".join(current)))
            current = []
        else:
            current.append(char)
        i += 1

    # last field (also closes an unterminated quoted span)
    values.append(_trim("".join(current)))
    return values


def parse_csv(content: bytes) -> ParsedCsv:
    """Decode raw bytes and parse them into rows.

    Raises:
        EmptyFileError: if no non-blank lines remain after decoding
    """
    bom = has_bom(content)
    # a second BOM left after removal is dropped by the decoder, not kept as text
    text = remove_bom(content).decode("utf-8", errors="replace").removeprefix("\ufeff")
    lines = [line for line in _LINE_BREAK.split(text) if _trim(line)]
    if not lines:
        raise EmptyFileError()
    return ParsedCsv(rows=[parse_row(line) for line in lines], bom_removed=bom)
