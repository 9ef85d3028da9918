from __future__ import annotations
import sys
import argparse
import traceback
import signal
from typing import Optional, Tuple

from . import __version__
from . import orchestrator as ORCH
from . import samples
from .errors import EmptyInputError
from .orchestrator import ConvertOptions, Format
from .utils import io as UIO
from .utils import parsing as UP
from .utils import logging as ULOG
from .utils import formatters as UFMT


def _resolve_pair(args: argparse.Namespace) -> Tuple[ORCH.Surface, Format, Format]:
    """Pick surface and (input, output) formats from --mode or --from/--to."""
    named = getattr(args, "surface", None)
    mode = getattr(args, "mode", None)
    if mode:
        src, dst = ORCH.parse_mode(mode)
    else:
        default = ORCH.get_surface(named)
        src = Format.coerce(getattr(args, "input_format", None) or default.default_input)
        dst = Format.coerce(getattr(args, "output_format", None) or default.default_output)
    return ORCH.surface_for(src, dst, named), src, dst


#-- Handlers --
def _handle_convert(text: str | None, args: argparse.Namespace) -> int:
    if text is None: raise ValueError("convert expects input (stdin or -i).")
    logger = ULOG.get_logger("tabconv.core")
    surface, src, dst = _resolve_pair(args)

    if getattr(args, "pretty", False):
        surface.check(src, dst)
        return _show_matrix(ORCH.parse(text, src), args)

    options = ConvertOptions(table_name=args.table_name)
    res = ORCH.convert(text, src, dst, options, surface)
    if not res.ok:
        logger.error(res.message)
        return 2
    UIO.write_text(res.text, getattr(args, "out_file", None), encoding=args.encoding)
    return 0


def _handle_swap(text: str | None, args: argparse.Namespace) -> int:
    surface, src, dst = _resolve_pair(args)
    new_in, new_out = ORCH.swap(src, dst, surface)
    sys.stdout.write(f"{new_in}\t{new_out}\n")
    return 0


def _show_matrix(matrix, args: argparse.Namespace) -> int:
    if not matrix:
        raise EmptyInputError("Input is empty: no rows to show.")
    df = UIO.matrix_to_frame(matrix, header=not getattr(args, "no_header", False))
    UIO.pretty_print(df, args=args, stream="stdout")
    return 0


def _handle_view(text: str | None, args: argparse.Namespace) -> int:
    """Parse the input and pretty-print the resulting matrix."""
    if text is None: raise ValueError("view expects input (stdin or -i).")
    surface = ORCH.get_surface(getattr(args, "surface", None))
    src = Format.coerce(args.input_format or surface.default_input)
    return _show_matrix(ORCH.parse(text, src), args)


def _handle_sample(text: str | None, args: argparse.Namespace) -> int:
    UIO.write_text(samples.get_sample(args.format), getattr(args, "out_file", None), encoding=args.encoding)
    return 0


def _handle_formats(text: str | None, args: argparse.Namespace) -> int:
    rows = [["surface", "inputs", "outputs", "swap fallback"]]
    for s in ORCH.SURFACES.values():
        rows.append([s.name,
                     ",".join(str(f) for f in s.inputs),
                     ",".join(str(f) for f in s.outputs),
                     str(s.fallback_input)])
    UIO.pretty_print(UIO.matrix_to_frame(rows), args=argparse.Namespace(show_full=True))
    return 0


#-- Parser --
def _attach_commands(subparsers: argparse._SubParsersAction, *, parents=None) -> None:
    modes = [f"{i}2{o}" for s in ORCH.SURFACES.values() for i in s.inputs for o in s.outputs if i != o]
    p_conv = subparsers.add_parser(
        "convert", help="Convert a table between formats.",
        description="Parse the input in one format and write it in another.",
        epilog=UP.build_epilog("Modes:", sorted(set(modes))),
        formatter_class=argparse.RawDescriptionHelpFormatter, parents=parents,
    )
    UP.add_format_args(p_conv)
    p_conv.add_argument("-m", "--mode", help="Shorthand for --from/--to, e.g. csv2json.")
    p_conv.add_argument("--table-name", dest="table_name", default=ORCH.sql_insert.DEFAULT_TABLE_NAME,
                        help="Table name for SQL output (default: my_table).")
    p_conv.add_argument("--pretty", action="store_true", help="Pretty-print the parsed table instead of converting.")
    p_conv.add_argument("--max-col-width", type=int, default=40, help=argparse.SUPPRESS)
    p_conv.set_defaults(handler=_handle_convert, needs_input=True)

    p_swap = subparsers.add_parser(
        "swap", help="Show the format pair after swapping input and output.",
        description="Print '<input>\\t<output>' after swapping; write-only formats degrade to a parseable one.",
        parents=parents,
    )
    UP.add_format_args(p_swap)
    p_swap.add_argument("-m", "--mode", help="Shorthand for --from/--to, e.g. csv2sql.")
    p_swap.set_defaults(handler=_handle_swap, needs_input=False)

    p_view = subparsers.add_parser(
        "view", help="Pretty-print a table (ASCII, non-folding).",
        description="Parse the input and display it with clear ASCII borders.",
        parents=parents,
    )
    UP.add_format_args(p_view, with_output=False)
    p_view.add_argument("--max-cols", type=int, help="Limit to first N columns.")
    p_view.add_argument("--max-col-width", type=int, default=40,
                        help="Truncate each column to this width (default: 40).")
    p_view.add_argument("--show-full", action="store_true",
                        help="Do not truncate wide fields (disables --max-col-width).")
    p_view.add_argument("--no-header", action="store_true", help="Show row 0 as data.")
    p_view.set_defaults(handler=_handle_view, needs_input=True)

    p_sample = subparsers.add_parser(
        "sample", help="Print an example document for a format.", parents=parents,
    )
    p_sample.add_argument("format", choices=sorted(samples.SAMPLES))
    p_sample.set_defaults(handler=_handle_sample, needs_input=False)

    p_fmt = subparsers.add_parser("formats", help="List surfaces and their formats.", parents=parents)
    p_fmt.set_defaults(handler=_handle_formats, needs_input=False)


def build_parser() -> argparse.ArgumentParser:
    ap = UFMT.CustomArgumentParser(
        prog="tabconv",
        description="Convert tables between CSV, TSV, JSON, HTML and SQL INSERT text.",
        add_help=False,
    )
    UP.add_common_io_args(ap)
    common_parent = argparse.ArgumentParser(add_help=False)
    UP.add_common_io_args(common_parent)

    g = ap.add_argument_group("Global Options")
    g.add_argument("-h", "--help", action="help", help=argparse.SUPPRESS)
    g.add_argument("--version", action="version", version=__version__)
    subs = ap.add_subparsers(dest="command", metavar="command", required=True,
                             parser_class=UFMT.ActionParser)
    _attach_commands(subs, parents=[common_parent])
    return ap


def run_handler(args: argparse.Namespace) -> int:
    handler = getattr(args, "handler", None)
    if handler is None:
        raise ValueError("No command selected. Use --help.")
    text: Optional[str] = None
    if getattr(args, "needs_input", False):
        path = getattr(args, "input", None)
        if path not in (None, "-") or not sys.stdin.isatty():
            text = UIO.read_text(path, encoding=args.encoding)
    return handler(text, args)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        parser.error("command is required")
        return 2
    try:
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)
    except (AttributeError, ValueError):
        pass

    try:
        args0, _ = parser.parse_known_args(argv)
    except SystemExit as e:
        return 0 if e.code == 0 else 2
    ULOG.configure(quiet=getattr(args0, "quiet", False),
                   debug=getattr(args0, "debug", False),
                   log_file=getattr(args0, "log_file", None))
    logger = ULOG.get_logger("tabconv.core")

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        return 0 if e.code == 0 else 2

    try:
        return run_handler(args)
    except ValueError as e:
        logger.error(str(e))
        if getattr(args, "debug", False): traceback.print_exc()
        return 2
    except BrokenPipeError:
        return 0
    except OSError as e:
        logger.error(str(e))
        if getattr(args, "debug", False): traceback.print_exc()
        return 3
    except Exception as e:
        logger.error("An unexpected error occurred: %s", e)
        if getattr(args, "debug", False): traceback.print_exc()
        return 4


if __name__ == "__main__":
    raise SystemExit(main())
