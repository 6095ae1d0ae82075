"""Exceptions raised by confstore."""

from __future__ import annotations


class ConfStoreError(Exception):
    """Base class for every confstore error."""


class ConfIOError(ConfStoreError):
    """A configuration file could not be opened, read or written."""

    def __init__(self, path, cause: OSError) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"cannot access '{self.path}': {cause.strerror or cause}")


class ConfSyntaxError(ConfStoreError):
    """A line does not follow the ``name = value`` grammar."""

    def __init__(
        self,
        reason: str,
        line: str,
        lineno: int | None = None,
        path: str | None = None,
    ) -> None:
        self.reason = reason
        self.line = line
        self.lineno = lineno
        self.path = path
        super().__init__(self._format())

    def _format(self) -> str:
        where = ""
        if self.path is not None:
            where = f"{self.path}:"
        if self.lineno is not None:
            where += f"{self.lineno}:"
        if where:
            where += " "
        return f"{where}{self.reason}: {self.line.rstrip(chr(10))!r}"

    def located(self, path: str | None, lineno: int) -> "ConfSyntaxError":
        """Attach file position to an error raised by the line parser."""
        self.path = path
        self.lineno = lineno
        self.args = (self._format(),)
        return self


class LineTooLongError(ConfSyntaxError):
    """A line exceeds the dialect's ``max_line_length``."""


class ConfValueError(ConfStoreError, ValueError):
    """A name or value cannot be represented in the file format."""
