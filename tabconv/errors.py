"""Error taxonomy for table conversions.

All errors derive from ValueError so the CLI reports them like any other
bad-input condition (exit code 2).
"""
from __future__ import annotations


class TabconvError(ValueError):
    """Base class for every conversion failure."""


class ParseError(TabconvError):
    """Input does not meet the structural minimum of its declared format."""


class EmptyInputError(TabconvError):
    """Parsing succeeded but there is nothing to convert."""


class ConversionError(TabconvError):
    """Unexpected failure while serializing, or an unsupported format pair."""


__all__ = ["TabconvError", "ParseError", "EmptyInputError", "ConversionError"]
