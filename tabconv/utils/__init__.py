# Shared helpers for the CLI and engine: I/O, argument parsing, help formatting, logging.
from __future__ import annotations

from . import io, parsing, formatters
from . import logging as ULOG

__all__ = ["io", "parsing", "formatters", "ULOG"]
