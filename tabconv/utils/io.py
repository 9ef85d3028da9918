from __future__ import annotations
import io as _io
import os
import re
import sys
import warnings
from typing import List, Optional, Sequence

import pandas as pd
from wcwidth import wcswidth


def read_text(path: Optional[str], *, encoding: str = "utf-8") -> str:
    """Read a whole document from a file or stdin ('-' or None)."""
    if path in (None, "-"):
        raw = _io.TextIOWrapper(sys.stdin.buffer, encoding=encoding).read()
        if raw == "":
            raise ValueError("No input detected on stdin. Pipe a document or use -i <file>.")
        return raw
    with open(path, "r", encoding=encoding) as fh:
        return fh.read()


def write_text(text: str, path: Optional[str] = None, *, encoding: str = "utf-8") -> None:
    """Write text plus a final newline to a file or stdout; remain quiet on BrokenPipe."""
    out = sys.stdout if path in (None, "-") else open(path, "w", encoding=encoding)
    close = (out is not sys.stdout)
    try:
        out.write(text)
        if text and not text.endswith("\n"):
            out.write("\n")
    except BrokenPipeError:
        return
    finally:
        if close:
            out.close()


def _unique_names(names: Sequence[str]) -> List[str]:
    """Make header labels displayable: blanks become col<i>, duplicates get .1, .2 ..."""
    seen: dict[str, int] = {}
    out: List[str] = []
    for i, n in enumerate(names):
        base = n if n.strip() else f"col{i}"
        k = seen.get(base, 0)
        seen[base] = k + 1
        out.append(base if k == 0 else f"{base}.{k}")
    return out


def matrix_to_frame(matrix: Sequence[Sequence[str]], *, header: bool = True) -> pd.DataFrame:
    """
    Build a string DataFrame from a (possibly ragged) matrix.
    Short rows are padded with "". With header=False columns are numbered.
    """
    rows = [list(r) for r in matrix]
    width = max((len(r) for r in rows), default=0)
    rows = [r + [""] * (width - len(r)) for r in rows]
    if header and rows:
        cols, body = _unique_names(rows[0]), rows[1:]
    else:
        cols, body = [str(i) for i in range(1, width + 1)], rows
    return pd.DataFrame(body, columns=cols, dtype="object")


def pretty_print(df: pd.DataFrame, *, args=None, stream: str = "stdout") -> None:
    """
    ASCII table preview with MySQL-style borders (non-folding).
    Honors:
      - args.max_cols       : preview only first N columns
      - args.max_col_width  : truncate cells to this display width (default 40)
      - args.show_full      : disable truncation
    Numeric-looking columns are right-aligned and shown in blue on a TTY.
    """
    out_stream = sys.stdout if stream == "stdout" else sys.stderr
    supports_color = out_stream.isatty() and os.environ.get("NO_COLOR") is None

    C_RESET = "\033[0m" if supports_color else ""
    C_BLUE = "\033[94m" if supports_color else ""

    max_cols = int(getattr(args, "max_cols", 0) or 0)
    df2 = df.iloc[:, :max_cols] if max_cols > 0 else df

    NUM_LIKE_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?\s*$")

    def is_numeric_like(series: pd.Series) -> bool:
        sample = [v for v in series.tolist() if v != ""][:20]
        if not sample:
            return False
        return all(isinstance(v, str) and NUM_LIKE_RE.match(v) for v in sample)

    display_as_numeric = [is_numeric_like(df2[col]) for col in df2.columns]

    max_col_width = None if getattr(args, "show_full", False) else int(getattr(args, "max_col_width", 40) or 40)

    ell = "…"
    try:
        ell.encode(out_stream.encoding or "utf-8")
    except (LookupError, UnicodeEncodeError):
        ell = "..."

    def _coerce(x) -> str:
        s = str(x) if x is not None else ""
        s = s.replace("\r", "").replace("\n", "⏎").replace("\t", " ")
        return re.sub(r"[\x00-\x08\x0b-\x1f\x7f]", "", s)

    def clip(s: str, wmax: int | None) -> str:
        if wmax is None: return s
        w = wcswidth(s)
        if w <= wmax: return s
        keep = wmax - wcswidth(ell)
        if keep <= 0: return ell if wmax >= wcswidth(ell) else "." * min(3, max(0, wmax))
        out = ""
        for ch in s:
            if wcswidth(out + ch) > keep: break
            out += ch
        return out + ell

    with warnings.catch_warnings():
        warnings.simplefilter(action='ignore', category=FutureWarning)
        raw_rows = df2.to_numpy().tolist()

    headers = [_coerce(c) for c in df2.columns]
    disp_headers = [clip(h, max_col_width) for h in headers]
    disp_rows = [[clip(_coerce(v), max_col_width) for v in r] for r in raw_rows]

    cols = list(zip(*([disp_headers] + disp_rows))) if disp_headers else []
    widths = [max(wcswidth(x) for x in col) for col in cols] if cols else []

    def hline() -> str:
        return "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def render_row(vals, is_header=False) -> str:
        cells = []
        for i, w in enumerate(widths):
            v = vals[i]
            pad = " " * (w - wcswidth(v))
            if is_header:
                cells.append(" " + v + pad + " ")
            elif display_as_numeric[i]:
                cells.append(" " + pad + C_BLUE + v + C_RESET + " ")  # Right-align
            else:
                cells.append(" " + v + pad + " ")
        return "|" + "|".join(cells) + "|"

    try:
        if widths:
            out_stream.write(hline() + "\n")
            out_stream.write(render_row(disp_headers, is_header=True) + "\n")
            out_stream.write(hline() + "\n")
            for r in disp_rows:
                out_stream.write(render_row(r) + "\n")
            out_stream.write(hline() + "\n")
        else:
            out_stream.write("(empty table)\n")
    except BrokenPipeError:
        return
