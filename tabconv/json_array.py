"""
JSON array-of-objects <-> matrix.

Row 0 of a matrix holds the field names. In the other direction the header is
taken from the keys of the first array element only; keys that appear only on
later elements are dropped.
"""
from __future__ import annotations
import json
from decimal import Decimal
from typing import Any, Dict, List

from .errors import ConversionError, ParseError
from .utils.logging import get_logger

logger = get_logger(__name__)

Matrix = List[List[str]]


def matrix_to_json(matrix: Matrix) -> str:
    if not matrix:
        return "[]"
    header, *data = matrix
    objs: List[Dict[str, str]] = []
    for row in data:
        obj: Dict[str, str] = {}
        for i, key in enumerate(header):
            obj[key] = row[i] if i < len(row) else ""
        objs.append(obj)
    return json.dumps(objs, indent=2, ensure_ascii=False)


def number_text(value: float) -> str:
    """
    Browser-style text for a finite float: plain digits while the decimal
    point sits between 1e-7 and 1e21, exponent form ("1e-7", "1.5e+21")
    outside that range. Digits are the shortest round-trip ones, as repr().
    """
    if value == 0:
        return "0"
    sign, digits, exp = Decimal(repr(value)).normalize().as_tuple()
    ds = "".join(map(str, digits))
    k = len(ds)
    n = exp + k  # position of the decimal point relative to ds
    if k <= n <= 21:
        body = ds + "0" * (n - k)
    elif 0 < n <= 21:
        body = ds[:n] + "." + ds[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * -n + ds
    else:
        e = n - 1
        mant = ds if k == 1 else ds[0] + "." + ds[1:]
        body = f"{mant}e{'+' if e > 0 else '-'}{abs(e)}"
    return ("-" if sign else "") + body


def stringify(value: Any) -> str:
    """String form of a decoded JSON value as it appears in a cell."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return number_text(value)
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    raise ConversionError(f"Cannot convert value of type {type(value).__name__} to text.")


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity/-Infinity; strict JSON does not
    raise ParseError(f"Invalid JSON: {name} is not a valid JSON value.")


def json_to_matrix(text: str) -> Matrix:
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list) or not data:
        raise ParseError("JSON input must be a non-empty array of objects.")
    first = data[0]
    if not isinstance(first, dict):
        raise ParseError("The first element of the JSON array must be an object.")

    keys = list(first.keys())
    rows: Matrix = [keys]
    for item in data:
        if not isinstance(item, dict):
            item = {}
        rows.append([stringify(item.get(k)) for k in keys])

    extra = {k for item in data[1:] if isinstance(item, dict) for k in item} - set(keys)
    if extra:
        logger.debug("dropping keys absent from the first element: %s", sorted(extra))
    return rows
