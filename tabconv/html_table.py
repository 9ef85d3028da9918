"""
HTML <table> markup <-> matrix.

Parsing goes through BeautifulSoup behind parse_first_table(); spanned cells
collapse to a single cell. Serialization does not escape cell text.
"""
from __future__ import annotations
from typing import Callable, List

from bs4 import BeautifulSoup

from .errors import ParseError
from .lines import LineBuilder
from .utils.logging import get_logger

logger = get_logger(__name__)

Matrix = List[List[str]]

# html5lib builds the tree with the HTML5 rules, so optional end tags
# (<td>, <th>, <tr>) close the way a browser closes them.
HTML_PARSER = "html5lib"


def parse_first_table(text: str) -> Matrix:
    """Extract the rows/cells of the first <table> found in an HTML fragment."""
    soup = BeautifulSoup(text or "", HTML_PARSER)
    table = soup.find("table")
    if table is None:
        raise ParseError("No <table> element found in HTML input.")
    rows = [[cell.get_text() for cell in tr.find_all(["th", "td"])]
            for tr in table.find_all("tr")]
    logger.debug("parsed %d rows from first <table>", len(rows))
    return rows


# Swappable markup backend; must map text -> Matrix and raise ParseError.
table_parser: Callable[[str], Matrix] = parse_first_table


def html_to_matrix(text: str) -> Matrix:
    return table_parser(text)


def matrix_to_html(matrix: Matrix) -> str:
    if not matrix:
        return "<table></table>"
    header, *data = matrix
    out = LineBuilder("\n", indent="  ")
    out.add("<table>")
    out.add("<thead>", 1)
    out.add("<tr>", 2)
    out.extend((f"<th>{h}</th>" for h in header), 3)
    out.add("</tr>", 2)
    out.add("</thead>", 1)
    out.add("<tbody>", 1)
    for row in data:
        out.add("<tr>", 2)
        out.extend((f"<td>{v}</td>" for v in row), 3)
        out.add("</tr>", 2)
    out.add("</tbody>", 1)
    out.add("</table>")
    return out.build()
