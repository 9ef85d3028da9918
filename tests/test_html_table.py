# tests/test_html_table.py  (HTML <table> <-> matrix)
import pytest

from tabconv import html_table
from tabconv.errors import ParseError
from tabconv.html_table import html_to_matrix, matrix_to_html, parse_first_table

TWO_BY_TWO = """<table>
  <thead>
    <tr>
      <th>A</th>
      <th>B</th>
    </tr>
  </thead>
  <tbody>
    <tr>
      <td>1</td>
      <td>2</td>
    </tr>
  </tbody>
</table>"""


def test_matrix_to_html_layout():
    assert matrix_to_html([["A", "B"], ["1", "2"]]) == TWO_BY_TWO


def test_round_trip_two_by_two():
    m = html_to_matrix(TWO_BY_TWO)
    assert m == [["A", "B"], ["1", "2"]]
    assert matrix_to_html(m) == TWO_BY_TWO


def test_first_table_only_and_fragment_input():
    html = "<p>intro</p><table><tr><td>x</td></tr></table><table><tr><td>y</td></tr></table>"
    assert parse_first_table(html) == [["x"]]


def test_cell_text_is_flattened_and_not_stripped():
    html = "<table><tr><td><b>bold</b> <i>text</i></td><th> pad </th></tr></table>"
    assert html_to_matrix(html) == [["bold text", " pad "]]


def test_spans_are_ignored():
    html = '<table><tr><td colspan="2">wide</td></tr><tr><td rowspan="2">a</td><td>b</td></tr></table>'
    assert html_to_matrix(html) == [["wide"], ["a", "b"]]


def test_rows_without_thead_and_mixed_cells():
    html = "<table><tr><th>h1</th><td>d1</td></tr><tr><td></td></tr></table>"
    assert html_to_matrix(html) == [["h1", "d1"], [""]]


def test_omitted_end_tags_close_cells_and_rows():
    html = "<table><tr><th>a<th>b<tr><td>1<td>2</table>"
    assert html_to_matrix(html) == [["a", "b"], ["1", "2"]]
    html = "<table><tbody><tr><td>x</td><td>y<tr><td>z</tbody></table>"
    assert html_to_matrix(html) == [["x", "y"], ["z"]]


def test_missing_table_raises_parse_error():
    with pytest.raises(ParseError):
        html_to_matrix("<div>no table here</div>")
    with pytest.raises(ParseError):
        html_to_matrix("")


def test_empty_table_gives_no_rows():
    assert html_to_matrix("<table></table>") == []


def test_empty_and_header_only_output():
    assert matrix_to_html([]) == "<table></table>"
    assert matrix_to_html([["A"]]) == (
        "<table>\n  <thead>\n    <tr>\n      <th>A</th>\n    </tr>\n  </thead>\n"
        "  <tbody>\n  </tbody>\n</table>"
    )


def test_cell_text_is_not_escaped():
    out = matrix_to_html([["a<b"], ["x & y"]])
    assert "<th>a<b</th>" in out
    assert "<td>x & y</td>" in out


def test_table_parser_is_pluggable(monkeypatch):
    monkeypatch.setattr(html_table, "table_parser", lambda text: [["stub"]])
    assert html_to_matrix("<anything/>") == [["stub"]]
