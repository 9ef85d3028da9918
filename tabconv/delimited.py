from __future__ import annotations
import re
from typing import List

from .lines import LineBuilder
from .utils.logging import get_logger

logger = get_logger(__name__)

Matrix = List[List[str]]

_LINE_BREAK = re.compile(r"\r?\n")
_QUOTE = '"'


def _split_line(line: str, delimiter: str) -> List[str]:
    """Quote-aware scan of a single line into cells."""
    cells: List[str] = []
    cur: List[str] = []
    in_quote = False
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if in_quote:
            if ch == _QUOTE:
                if i + 1 < n and line[i + 1] == _QUOTE:
                    cur.append(_QUOTE)
                    i += 1
                else:
                    in_quote = False
            else:
                cur.append(ch)
        elif ch == _QUOTE:
            in_quote = True
        elif ch == delimiter:
            cells.append("".join(cur))
            cur = []
        else:
            cur.append(ch)
        i += 1
    # an unterminated quote simply ends with the line
    cells.append("".join(cur))
    return cells


def parse_delimited(text: str, delimiter: str = ",") -> Matrix:
    """
    Parse CSV/TSV text into a matrix of strings.
    Lines are split before quote handling, so a quoted field cannot span lines.
    Whitespace-only lines are skipped. Never raises on malformed quoting.
    """
    rows = [_split_line(line, delimiter)
            for line in _LINE_BREAK.split(text or "")
            if line.strip() != ""]
    logger.debug("parsed %d delimited rows (delimiter=%r)", len(rows), delimiter)
    return rows


def escape_field(value: str, delimiter: str = ",") -> str:
    if delimiter in value or _QUOTE in value or "\n" in value or "\r" in value:
        return _QUOTE + value.replace(_QUOTE, '""') + _QUOTE
    return value


def serialize_delimited(matrix: Matrix, delimiter: str = ",") -> str:
    """Matrix -> delimited text; rows joined by '\\n', no trailing newline."""
    out = LineBuilder("\n")
    for row in matrix:
        out.add(delimiter.join(escape_field(v, delimiter) for v in row))
    return out.build()


def parse_csv(text: str) -> Matrix:
    return parse_delimited(text, ",")


def parse_tsv(text: str) -> Matrix:
    return parse_delimited(text, "\t")


def serialize_csv(matrix: Matrix) -> str:
    return serialize_delimited(matrix, ",")


def serialize_tsv(matrix: Matrix) -> str:
    return serialize_delimited(matrix, "\t")
