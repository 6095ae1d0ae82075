"""Writer layer: Option -> text, plus checks for what the format can hold."""

from __future__ import annotations

from .errors import ConfValueError
from .model import DEFAULT_DIALECT, Dialect, Option, name_problem


# ---------------------------------------------------------------------------
# Representability checks
# ---------------------------------------------------------------------------

def _has_space(text: str) -> bool:
    return any(c.isspace() for c in text)


def check_name(name: str, dialect: Dialect = DEFAULT_DIALECT) -> str:
    problem = name_problem(name, dialect)
    if problem is not None:
        raise ConfValueError(f"{problem}: {name!r}")
    return name


def check_value(value: str) -> str:
    if '"' in value or "\n" in value or "\r" in value:
        raise ConfValueError(f"value {value!r} cannot contain '\"' or a line break")
    return value


def check_token(token: str, dialect: Dialect = DEFAULT_DIALECT) -> str:
    """Array elements travel unquoted, so they get the strictest rules."""
    if not token:
        raise ConfValueError("array values must not be empty")
    if _has_space(token) or any(c in token for c in ('"', ",", "(", ")", dialect.delim)):
        raise ConfValueError(f"invalid array value {token!r}")
    return token


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def needs_quoting(value: str, dialect: Dialect = DEFAULT_DIALECT) -> bool:
    """Whether *value* only survives a reload inside double quotes."""
    return (
        not value
        or _has_space(value)
        or dialect.delim in value
        or value.startswith("(")
    )


def format_value(option: Option, dialect: Dialect = DEFAULT_DIALECT) -> str:
    if option.is_array:
        return "(" + ",".join(option.values) + ")"
    if needs_quoting(option.value, dialect):
        return f'"{option.value}"'
    return option.value


def format_option(option: Option, dialect: Dialect = DEFAULT_DIALECT) -> str:
    """Render *option* as one line, newline included."""
    return f"{option.name} {dialect.delim} {format_value(option, dialect)}\n"
