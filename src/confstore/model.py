"""Data model for confstore options and file dialects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .errors import ConfValueError


# ---------------------------------------------------------------------------
# OptionKind
# ---------------------------------------------------------------------------

class OptionKind(Enum):
    Scalar = auto()
    Array = auto()


# ---------------------------------------------------------------------------
# Option
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Option:
    """One configuration entry: ``name = value`` or ``name = (a,b,c)``.

    Exactly one of ``value`` / ``values`` is populated, matching ``kind``.
    """

    name: str
    kind: OptionKind
    value: str | None = None
    values: list[str] | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ConfValueError("option name must not be empty")
        if self.kind is OptionKind.Scalar:
            if self.value is None or self.values is not None:
                raise ConfValueError(f"scalar option '{self.name}' needs exactly a value")
        else:
            if self.value is not None or not self.values:
                raise ConfValueError(f"array option '{self.name}' needs at least one value")

    @classmethod
    def scalar(cls, name: str, value: str) -> Option:
        return cls(name=name, kind=OptionKind.Scalar, value=value)

    @classmethod
    def array(cls, name: str, values) -> Option:
        return cls(name=name, kind=OptionKind.Array, values=list(values))

    @property
    def is_array(self) -> bool:
        return self.kind is OptionKind.Array


# ---------------------------------------------------------------------------
# Dialect
# ---------------------------------------------------------------------------

_RESERVED = (" ", '"', "(", ")", ",", "\n")


@dataclass(frozen=True, slots=True)
class Dialect:
    """Syntax knobs for reading and writing configuration files."""

    delim: str = "="
    comment: str = "#"
    # None disables the ceiling
    max_line_length: int | None = 1024

    def __post_init__(self) -> None:
        for label, char in (("delimiter", self.delim), ("comment", self.comment)):
            if len(char) != 1:
                raise ConfValueError(f"{label} must be a single character, got {char!r}")
            if char in _RESERVED:
                raise ConfValueError(f"{label} cannot be {char!r}")
        if self.delim == self.comment:
            raise ConfValueError("delimiter and comment character must differ")
        if self.max_line_length is not None and self.max_line_length < 1:
            raise ConfValueError("max_line_length must be positive")


DEFAULT_DIALECT = Dialect()


# ---------------------------------------------------------------------------
# Name rules (shared by reader and writer)
# ---------------------------------------------------------------------------

def name_problem(name: str, dialect: Dialect = DEFAULT_DIALECT) -> str | None:
    """Why *name* cannot be written and read back, or None if it can."""
    if not name:
        return "missing name"
    if any(c.isspace() for c in name) or '"' in name or dialect.delim in name:
        return "invalid name"
    if name[0] == dialect.comment:
        return "name starts with the comment character"
    return None
