"""confstore — line-oriented ``key = value`` configuration store."""

from .document import ConfigDocument, load
from .errors import (
    ConfIOError,
    ConfStoreError,
    ConfSyntaxError,
    ConfValueError,
    LineTooLongError,
)
from .model import DEFAULT_DIALECT, Dialect, Option, OptionKind
from .reader import is_skippable, parse_line
from .repl import ConfRepl
from .table import HashTable
from .writer import format_option

__all__ = [
    "load",
    "ConfigDocument",
    "ConfRepl",
    "Dialect",
    "DEFAULT_DIALECT",
    "Option",
    "OptionKind",
    "HashTable",
    "parse_line",
    "is_skippable",
    "format_option",
    "ConfStoreError",
    "ConfIOError",
    "ConfSyntaxError",
    "ConfValueError",
    "LineTooLongError",
]
