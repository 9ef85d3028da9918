from __future__ import annotations
import argparse
from tabconv.utils import formatters as UFMT


def build_epilog(title: str, items: list[str]) -> str:
    if not items:
        return ""
    width = max(len(x) for x in items)
    lines = ["", title]
    for x in items:
        pad = " " * (width - len(x))
        lines.append(f"  {x}{pad}  ")
    return "\n".join(lines)


def add_common_io_args(ap: argparse.ArgumentParser) -> None:
    g = ap.add_argument_group("I/O")
    g.add_argument("-i", "--input", help="Input document (default: stdin).")
    g.add_argument("-O", "--out-file", dest="out_file", help="Output file (default: stdout).")
    g.add_argument("--encoding", default="utf-8")
    g.add_argument("--quiet", action="store_true")
    g.add_argument("--debug", action="store_true")
    g.add_argument("--log-file", dest="log_file")
    g.add_argument("--commands", action=UFMT.CommandsAction,
                   help="Show the available commands as a tree and exit.")


def add_format_args(ap: argparse.ArgumentParser, *, with_output: bool = True) -> None:
    g = ap.add_argument_group("Formats")
    g.add_argument("-f", "--from", dest="input_format", metavar="FMT",
                   help="Input format: csv, tsv, json, html.")
    if with_output:
        g.add_argument("-t", "--to", dest="output_format", metavar="FMT",
                       help="Output format: csv, tsv, json, html, sql.")
    g.add_argument("--surface", choices=("delimited", "table"),
                   help="Conversion surface that limits the format choices "
                        "(default: the first one allowing the pair).")
