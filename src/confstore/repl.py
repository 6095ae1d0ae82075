"""ConfRepl — interactive shell over a ConfigDocument.

Also provides the ``confstore-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO

from .document import ConfigDocument
from .errors import ConfStoreError
from .model import DEFAULT_DIALECT, Dialect
from .reader import is_skippable, parse_line

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"


# ---------------------------------------------------------------------------
# ConfRepl class (programmatic use)
# ---------------------------------------------------------------------------

class ConfRepl:
    """Stateful shell that accumulates options across calls.

    Usage::

        repl = ConfRepl()
        repl.eval("name = \\"jacky liu\\"")
        repl.eval("family = (ben,lan,man)")
        repl.doc.get("name")         # → "jacky liu"
        repl.reset()                 # clear state
    """

    def __init__(self, dialect: Dialect = DEFAULT_DIALECT) -> None:
        self.doc = ConfigDocument(dialect=dialect)

    def eval(self, text: str) -> str | None:
        """Parse *text* as one option line and store it.

        Returns the option name, or ``None`` for a comment or blank line.
        """
        if is_skippable(text, self.doc.dialect):
            return None
        opt = parse_line(text, self.doc.dialect)
        if opt.is_array:
            self.doc.set_array(opt.name, opt.values)
        else:
            self.doc.set(opt.name, opt.value)
        return opt.name

    def reset(self) -> None:
        """Drop every option."""
        self.doc.release()


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _show_value(repl: ConfRepl, name: str, dest: IO[str]) -> None:
    """Print a scalar, or an array as a numbered list."""
    opt = repl.doc.get_option(name)
    if opt is None:
        print("not found", file=dest)
    elif opt.is_array:
        for i, value in enumerate(opt.values, 1):
            print(f"{i}. {value}", file=dest)
    else:
        print(opt.value, file=dest)


def _show_vars(repl: ConfRepl, dest: IO[str]) -> None:
    if not len(repl.doc):
        print("  (no options defined)", file=dest)
        return
    width = max(len(name) for name in repl.doc)
    for opt in repl.doc.options():
        shown = ",".join(opt.values) if opt.is_array else opt.value
        print(f"  {opt.name:<{width}} : {shown}", file=dest)


def _show_membership(repl: ConfRepl, args: str, dest: IO[str]) -> None:
    parts = args.split()
    if len(parts) != 2:
        print("usage: :has <name> <value>", file=sys.stderr)
        return
    print("yes" if repl.doc.contains_value(*parts) else "no", file=dest)


def _run_file(repl: ConfRepl, filepath: str, dest: IO[str]) -> None:
    try:
        with open(filepath, encoding="utf-8", errors="surrogateescape") as fh:
            for file_line in fh:
                _process_line(repl, file_line.rstrip("\n"), dest)
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)


def _process_line(repl: ConfRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    try:
        # ── Control commands ──────────────────────────────────────────────
        if line == ":vars":
            _show_vars(repl, dest)
        elif line == ":reset":
            repl.reset()
        elif line.startswith(":load "):
            repl.doc.load(line[6:].strip())
        elif line.startswith(":save "):
            repl.doc.save(line[6:].strip())

        # ── inspect() / i() ───────────────────────────────────────────────
        elif line.startswith(("inspect(", "i(")) and line.endswith(")"):
            name = line[line.index("(") + 1:-1].strip()
            print(repl.doc.describe(name), file=dest)

        # ── ? name / :has name value ───────────────────────────────────────
        elif line.startswith("? "):
            _show_value(repl, line[2:].strip(), dest)
        elif line.startswith(":has "):
            _show_membership(repl, line[5:], dest)

        # ── Batch file ────────────────────────────────────────────────────
        elif line.startswith("?<< "):
            _run_file(repl, line[4:].strip(), dest)

        # ── Option line ───────────────────────────────────────────────────
        else:
            repl.eval(line)
    except ConfStoreError as exc:
        logger.debug("command %r failed", line, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confstore-repl",
        description="Interactive shell for key = value configuration files.",
    )
    parser.add_argument("file", nargs="?", help="configuration file to load first")
    parser.add_argument("-d", "--delim", default="=", help="key/value delimiter (default '=')")
    parser.add_argument("-c", "--comment", default="#", help="comment character (default '#')")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Interactive shell (``confstore-repl`` / ``python -m confstore.repl``)."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        repl = ConfRepl(Dialect(delim=args.delim, comment=args.comment))
        if args.file:
            repl.doc.load(args.file)
    except ConfStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None

    print("confstore  (:q to quit  |  :vars  :reset  :load  :save  |  ? <name>  i(<name>)  :has <name> <value>)")

    while True:
        try:
            line = input("conf> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not line:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if line.startswith("?>> "):
            filepath = line[4:].strip()
            if _file:
                _file.close()
                _file = None
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                dest = sys.stdout
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if line == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if not _process_line(repl, line, dest):
            break

    if _file:
        _file.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
