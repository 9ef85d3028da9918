# tests/test_cli.py  (tabconv command line, driven through main())
import json
from pathlib import Path

from tabconv import samples
from tabconv.core import main


def _w(p: Path, text: str) -> str:
    p.write_text(text, encoding="utf-8")
    return str(p)


def test_convert_csv_to_sql(tmp_path, capsys):
    src = _w(tmp_path / "in.csv", "name,age,note\nAlice,30,\n")
    rc = main(["convert", "-f", "csv", "-t", "sql", "--table-name", "t", "-i", src])
    assert rc == 0
    assert capsys.readouterr().out == "INSERT INTO `t` (`name`, `age`, `note`) VALUES ('Alice', 30, NULL);\n"


def test_convert_with_mode_and_out_file(tmp_path):
    src = _w(tmp_path / "in.html", samples.HTML)
    dst = tmp_path / "out.json"
    rc = main(["convert", "--mode", "html2json", "-i", src, "-O", str(dst)])
    assert rc == 0
    assert json.loads(dst.read_text(encoding="utf-8")) == [
        {"Name": "Alice", "Age": "30", "City": "Beijing"},
        {"Name": "Bob", "Age": "25", "City": "Shanghai"},
    ]


def test_convert_defaults_to_csv_to_json(tmp_path, capsys):
    src = _w(tmp_path / "in.csv", samples.CSV)
    assert main(["convert", "-i", src]) == 0
    assert json.loads(capsys.readouterr().out)[0] == {"name": "Alice", "age": "30", "city": "Beijing"}


def test_convert_empty_input_fails_with_code_2(tmp_path, capsys):
    src = _w(tmp_path / "blank.csv", "  \n\n")
    assert main(["convert", "-f", "csv", "-t", "json", "-i", src]) == 2
    assert capsys.readouterr().out == ""


def test_convert_bad_json_and_disallowed_surface(tmp_path):
    src = _w(tmp_path / "bad.json", "{not json")
    assert main(["convert", "-f", "json", "-t", "csv", "-i", src]) == 2
    src = _w(tmp_path / "in.csv", "a\n1")
    assert main(["convert", "-f", "csv", "-t", "sql", "--surface", "table", "-i", src]) == 2


def test_convert_missing_file_exit_code_3(tmp_path):
    assert main(["convert", "-f", "csv", "-t", "json", "-i", str(tmp_path / "nope.csv")]) == 3


def test_convert_pretty_preview(tmp_path, capsys):
    src = _w(tmp_path / "in.tsv", "a\tb\n1\t2")
    assert main(["convert", "-f", "tsv", "-t", "csv", "--pretty", "-i", src]) == 0
    out = capsys.readouterr().out
    assert out.startswith("+---+---+")
    assert "| a | b |" in out


def test_swap_command(capsys):
    assert main(["swap", "-f", "csv", "-t", "sql"]) == 0
    assert capsys.readouterr().out == "csv\ttsv\n"
    assert main(["swap", "--mode", "html2json"]) == 0
    assert capsys.readouterr().out == "json\thtml\n"


def test_view_command(tmp_path, capsys):
    src = _w(tmp_path / "in.json", samples.JSON)
    assert main(["view", "-f", "json", "-i", src]) == 0
    out = capsys.readouterr().out
    assert "| Name  | Age | City     |" in out
    assert "| Alice |  30 | Beijing  |" in out


def test_view_empty_input(tmp_path):
    src = _w(tmp_path / "in.csv", "\n")
    assert main(["view", "-f", "csv", "-i", src]) == 2


def test_sample_and_formats(capsys):
    assert main(["sample", "tsv"]) == 0
    assert capsys.readouterr().out == samples.TSV + "\n"
    assert main(["formats"]) == 0
    out = capsys.readouterr().out
    assert "delimited" in out and "csv,tsv,json,sql" in out


def test_unknown_format_choice_exits_2():
    assert main(["sample", "xml"]) == 2


def test_commands_tree_and_help(capsys):
    assert main(["--commands"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "tabconv"
    assert any(line.startswith("├── convert") for line in out)
    assert main(["--help"]) == 0
    out = capsys.readouterr().out
    assert "Command  Description" in out and "swap" in out
