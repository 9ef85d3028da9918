from __future__ import annotations
import math
import re
from typing import List

from .errors import EmptyInputError
from .lines import LineBuilder
from .utils.logging import get_logger

logger = get_logger(__name__)

Matrix = List[List[str]]

DEFAULT_TABLE_NAME = "my_table"

_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*$")
# unsigned only; a sign makes a radix literal text
_RADIX_RE = re.compile(r"^\s*0(?:[xX][0-9a-fA-F]+|[bB][01]+|[oO][0-7]+)\s*$")


def is_number(value: str) -> bool:
    """
    True for a finite decimal literal or an unsigned 0x/0b/0o literal,
    surrounding whitespace allowed.
    """
    if _RADIX_RE.match(value):
        return True
    if not _NUMBER_RE.match(value):
        return False
    return math.isfinite(float(value))


def coerce_sql_value(value: str) -> str:
    """Render one cell as NULL, a bare number, or a quoted string literal."""
    if value == "":
        return "NULL"
    if is_number(value):
        return value
    return "'" + value.replace("'", "''") + "'"


def quote_identifier(name: str) -> str:
    # backticks inside the name are not escaped
    return f"`{name}`"


def matrix_to_sql(matrix: Matrix, table_name: str = DEFAULT_TABLE_NAME) -> str:
    """One INSERT statement per data row; row 0 supplies the column names."""
    if len(matrix) < 2:
        raise EmptyInputError("SQL output needs a header row and at least one data row.")
    header, *data = matrix
    cols = ", ".join(quote_identifier(h) for h in header)
    table = quote_identifier(table_name)
    out = LineBuilder("\n")
    for row in data:
        vals = ", ".join(coerce_sql_value(v) for v in row)
        out.add(f"INSERT INTO {table} ({cols}) VALUES ({vals});")
    logger.debug("built %d INSERT statements for table %s", len(out), table)
    return out.build()
