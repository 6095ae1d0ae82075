"""ConfigDocument — the handle callers load, query, mutate and save."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .errors import ConfIOError
from .model import DEFAULT_DIALECT, Dialect, Option
from .reader import iter_options
from .table import HashTable
from .writer import check_name, check_token, check_value, format_option

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike

# Bytes that are not valid UTF-8 pass through load/save untouched
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


@dataclass
class ConfigDocument:
    """Options keyed by name, backed by a bucketed hash table.

    Usage::

        doc = ConfigDocument()
        doc.load("mail.conf")
        doc.get("smtp")               # -> "mail.example.org" or None
        doc.get_array("users")        # -> ["ben", "lan"] or None
        doc.set("port", "25")
        doc.save("mail.conf")
        doc.release()
    """

    dialect: Dialect = DEFAULT_DIALECT
    table: HashTable = field(default_factory=HashTable)

    # -- Persistence ----------------------------------------------------

    def load(self, path: PathLike) -> None:
        """Merge the options of *path* into this document.

        All-or-nothing: lines are staged in a scratch table and only merged
        once the whole file parsed.  Raises ConfIOError or ConfSyntaxError;
        on either the document is left untouched.
        """
        staged = HashTable(self.table.n_buckets)
        try:
            with open(path, encoding=_ENCODING, errors=_ERRORS) as fh:
                for option in iter_options(fh, self.dialect, os.fspath(path)):
                    staged.insert_or_update(option.name, option)
        except OSError as exc:
            raise ConfIOError(path, exc) from exc

        for name, option in staged.for_each():
            self.table.insert_or_update(name, option)
        logger.debug("loaded %d options from %s", len(staged), path)

    def save(self, path: PathLike) -> None:
        """Write every option to *path*, truncating it.  Raises ConfIOError."""
        try:
            with open(path, "w", encoding=_ENCODING, errors=_ERRORS) as fh:
                for option in self.options():
                    fh.write(format_option(option, self.dialect))
        except OSError as exc:
            raise ConfIOError(path, exc) from exc
        logger.debug("saved %d options to %s", len(self.table), path)

    # -- Queries --------------------------------------------------------

    def get_option(self, name: str) -> Option | None:
        return self.table.find(name)

    def get(self, name: str) -> str | None:
        """Scalar value of *name*; None if absent or an array."""
        opt = self.table.find(name)
        if opt is None or opt.is_array:
            return None
        return opt.value

    def get_array(self, name: str) -> list[str] | None:
        """Copy of the values of array *name*; None if absent or scalar."""
        opt = self.table.find(name)
        if opt is None or not opt.is_array:
            return None
        return list(opt.values)

    def contains_value(self, name: str, candidate: str) -> bool:
        """True iff *name* is an array option holding *candidate*."""
        values = self.get_array(name)
        return values is not None and candidate in values

    def describe(self, name: str) -> str:
        opt = self.table.find(name)
        if opt is None:
            return "NULL => NULL"
        shown = ",".join(opt.values) if opt.is_array else opt.value
        return f"name => {opt.name}\nvalue => {shown}"

    def names(self) -> list[str]:
        return list(self.table)

    def options(self) -> Iterator[Option]:
        for _, opt in self.table.for_each():
            yield opt

    # -- Mutation -------------------------------------------------------

    def set(self, name: str, value: str) -> None:
        """Insert or overwrite *name* as a scalar."""
        check_name(name, self.dialect)
        check_value(value)
        self.table.insert_or_update(name, Option.scalar(name, value))

    def set_array(self, name: str, values: Iterable[str]) -> None:
        """Insert or overwrite *name* as an array of at least one value."""
        check_name(name, self.dialect)
        values = [check_token(v, self.dialect) for v in values]
        self.table.insert_or_update(name, Option.array(name, values))

    def remove(self, name: str) -> bool:
        return self.table.remove(name)

    def release(self) -> None:
        """Drop every option held by this document."""
        self.table.release()

    # -- Python protocol ------------------------------------------------

    def __enter__(self) -> ConfigDocument:
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, name: object) -> bool:
        return name in self.table

    def __iter__(self) -> Iterator[str]:
        return iter(self.table)


def load(path: PathLike, dialect: Dialect = DEFAULT_DIALECT) -> ConfigDocument:
    """Create a document from *path*."""
    doc = ConfigDocument(dialect=dialect)
    doc.load(path)
    return doc
