from __future__ import annotations
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("tabconv")
except PackageNotFoundError:  # local dev
    __version__ = "0.0.0.dev0"

from .errors import TabconvError, ParseError, EmptyInputError, ConversionError
from .orchestrator import (
    Format, Surface, ConvertOptions, ConversionResult, Converter,
    convert, swap, parse, serialize,
)

__all__ = [
    "Format", "Surface", "ConvertOptions", "ConversionResult", "Converter",
    "convert", "swap", "parse", "serialize",
    "TabconvError", "ParseError", "EmptyInputError", "ConversionError",
    "__version__",
]
