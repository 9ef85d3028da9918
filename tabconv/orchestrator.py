"""
Format registry and conversion pipeline.

    text --parse(input format)--> matrix --serialize(output format)--> text

convert() is the engine boundary: it never raises for a failed conversion and
returns a ConversionResult carrying either the output text or the error.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from . import delimited, html_table, json_array, sql_insert
from .errors import ConversionError, EmptyInputError, TabconvError
from .utils.logging import get_logger

logger = get_logger(__name__)

Matrix = List[List[str]]


class Format(str, Enum):
    CSV = "csv"
    TSV = "tsv"
    JSON = "json"
    HTML = "html"
    SQL = "sql"

    @classmethod
    def coerce(cls, value: "Format | str") -> "Format":
        if isinstance(value, Format):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ConversionError(f"Unknown format: {value!r} (choose from {choices}).") from None

    @property
    def readable(self) -> bool:
        return self in PARSERS

    def __str__(self) -> str:
        return self.value


@dataclass
class ConvertOptions:
    table_name: str = sql_insert.DEFAULT_TABLE_NAME


PARSERS: Dict[Format, Callable[[str], Matrix]] = {
    Format.CSV: delimited.parse_csv,
    Format.TSV: delimited.parse_tsv,
    Format.JSON: json_array.json_to_matrix,
    Format.HTML: html_table.html_to_matrix,
}

SERIALIZERS: Dict[Format, Callable[[Matrix, ConvertOptions], str]] = {
    Format.CSV: lambda m, o: delimited.serialize_csv(m),
    Format.TSV: lambda m, o: delimited.serialize_tsv(m),
    Format.JSON: lambda m, o: json_array.matrix_to_json(m),
    Format.HTML: lambda m, o: html_table.matrix_to_html(m),
    Format.SQL: lambda m, o: sql_insert.matrix_to_sql(m, o.table_name),
}


@dataclass(frozen=True)
class Surface:
    """Allowed formats for one conversion screen, plus its swap policy."""
    name: str
    inputs: Tuple[Format, ...]
    outputs: Tuple[Format, ...]
    fallback_input: Format
    tie_break: Tuple[Format, ...]
    default_input: Format
    default_output: Format

    def check(self, input_format: Format, output_format: Format) -> None:
        if input_format not in self.inputs:
            raise ConversionError(f"Input format '{input_format}' is not available on the '{self.name}' surface.")
        if output_format not in self.outputs:
            raise ConversionError(f"Output format '{output_format}' is not available on the '{self.name}' surface.")


DELIMITED = Surface(
    name="delimited",
    inputs=(Format.CSV, Format.TSV, Format.JSON),
    outputs=(Format.CSV, Format.TSV, Format.JSON, Format.SQL),
    fallback_input=Format.CSV,
    tie_break=(Format.CSV, Format.TSV, Format.JSON, Format.SQL),
    default_input=Format.CSV,
    default_output=Format.JSON,
)

TABLE = Surface(
    name="table",
    inputs=(Format.HTML, Format.CSV, Format.JSON),
    outputs=(Format.HTML, Format.CSV, Format.JSON),
    fallback_input=Format.CSV,
    tie_break=(Format.HTML, Format.CSV, Format.JSON),
    default_input=Format.HTML,
    default_output=Format.JSON,
)

SURFACES: Dict[str, Surface] = {s.name: s for s in (DELIMITED, TABLE)}
DEFAULT_SURFACE = DELIMITED


def get_surface(surface: "Surface | str | None") -> Surface:
    if surface is None:
        return DEFAULT_SURFACE
    if isinstance(surface, Surface):
        return surface
    try:
        return SURFACES[surface]
    except KeyError:
        raise ConversionError(f"Unknown surface: {surface!r} (choose from {', '.join(SURFACES)}).") from None


def surface_for(input_format: Format, output_format: Format,
                surface: "Surface | str | None" = None) -> Surface:
    """The named surface, or else the first built-in one allowing the pair."""
    if surface is not None:
        return get_surface(surface)
    for s in SURFACES.values():
        if input_format in s.inputs and output_format in s.outputs:
            return s
    return DEFAULT_SURFACE


def parse_mode(mode: str) -> Tuple[Format, Format]:
    """'csv2json' -> (Format.CSV, Format.JSON)."""
    src, sep, dst = str(mode).strip().lower().partition("2")
    if not sep or not src or not dst:
        raise ConversionError(f"Invalid mode: {mode!r} (expected e.g. 'csv2json').")
    return Format.coerce(src), Format.coerce(dst)


def parse(text: str, fmt: "Format | str") -> Matrix:
    fmt = Format.coerce(fmt)
    parser = PARSERS.get(fmt)
    if parser is None:
        raise ConversionError(f"'{fmt}' is an output-only format and cannot be parsed.")
    return parser(text)


def serialize(matrix: Matrix, fmt: "Format | str", options: Optional[ConvertOptions] = None) -> str:
    fmt = Format.coerce(fmt)
    return SERIALIZERS[fmt](matrix, options or ConvertOptions())


@dataclass
class ConversionResult:
    text: Optional[str] = None
    error: Optional[TabconvError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return "" if self.error is None else str(self.error)


def run(text: str, input_format: "Format | str", output_format: "Format | str",
        options: Optional[ConvertOptions] = None, surface: "Surface | str | None" = None) -> str:
    """Raising variant of convert()."""
    src, dst = Format.coerce(input_format), Format.coerce(output_format)
    surface_for(src, dst, surface).check(src, dst)
    matrix = parse(text, src)
    if not matrix:
        raise EmptyInputError("Input is empty: no rows to convert.")
    logger.debug("converting %d rows: %s -> %s", len(matrix), src, dst)
    return serialize(matrix, dst, options)


def convert(text: str, input_format: "Format | str", output_format: "Format | str",
            options: Optional[ConvertOptions] = None, surface: "Surface | str | None" = None) -> ConversionResult:
    try:
        return ConversionResult(text=run(text, input_format, output_format, options, surface))
    except TabconvError as e:
        logger.debug("conversion failed: %s", e)
        return ConversionResult(error=e)
    except Exception as e:
        logger.warning("unexpected conversion failure: %s", e, exc_info=True)
        err = ConversionError(f"Conversion failed: {e}")
        err.__cause__ = e
        return ConversionResult(error=err)


def swap(input_format: "Format | str", output_format: "Format | str",
         surface: "Surface | str | None" = None) -> Tuple[Format, Format]:
    """
    Exchange input and output roles.
    A write-only output degrades to the surface's fallback input; if the new
    output would equal the new input, the first tie-break entry that differs
    is used instead.
    """
    old_in, old_out = Format.coerce(input_format), Format.coerce(output_format)
    s = surface_for(old_in, old_out, surface)

    new_in = old_out
    if not new_in.readable or new_in not in s.inputs:
        new_in = s.fallback_input
    new_out = old_in
    if new_out == new_in or new_out not in s.outputs:
        new_out = next(f for f in s.tie_break if f != new_in)
    logger.debug("swap on %s: (%s, %s) -> (%s, %s)", s.name, old_in, old_out, new_in, new_out)
    return new_in, new_out


@dataclass
class Converter:
    """A conversion session: selected formats plus the last input and output."""
    surface: Surface = DEFAULT_SURFACE
    input_format: Format = Format.CSV
    output_format: Format = Format.JSON
    options: ConvertOptions = field(default_factory=ConvertOptions)
    input_text: str = ""
    output_text: str = ""
    last_error: Optional[TabconvError] = None

    def __post_init__(self) -> None:
        self.surface = get_surface(self.surface)
        self.input_format = Format.coerce(self.input_format)
        self.output_format = Format.coerce(self.output_format)

    def convert(self, text: Optional[str] = None) -> ConversionResult:
        if text is not None:
            self.input_text = text
        res = convert(self.input_text, self.input_format, self.output_format,
                      self.options, self.surface)
        self.last_error = res.error
        if res.ok:
            self.output_text = res.text
        return res

    def swap(self) -> Tuple[Format, Format]:
        self.input_format, self.output_format = swap(
            self.input_format, self.output_format, self.surface)
        self.input_text = self.output_text or self.input_text
        self.output_text = ""
        self.last_error = None
        return self.input_format, self.output_format

    def clear(self) -> None:
        self.input_text = ""
        self.output_text = ""
        self.last_error = None
