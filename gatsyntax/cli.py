import argparse
import json
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from gatsyntax.errors import GATSyntaxError
from gatsyntax.expr import BaseExpr
from gatsyntax.printing import show_latex, show_sexpr, show_unicode
from gatsyntax.reference import render_reference
from gatsyntax.serialization import dumps, parse_json
from gatsyntax.syntax import Syntax
from gatsyntax.theories import ALL_SYNTAXES

logger = logging.getLogger(__name__)

FORMATS = ("text", "sexpr", "unicode", "latex", "json")


@dataclass(frozen=True)
class Loaded:
    source: str
    expr: BaseExpr


@dataclass(frozen=True)
class Failed:
    source: str
    error: Exception


LoadResult = Loaded | Failed


def find_syntax(name: str) -> Syntax | None:
    for syn in ALL_SYNTAXES:
        if syn.name == name:
            return syn
    return None


def load_expression(source: str, syn: Syntax, *, symbols: bool) -> LoadResult:
    """Read a JSON expression from a file (or ``-`` for stdin) into ``syn``."""
    try:
        text = sys.stdin.read() if source == "-" else Path(source).read_text()
    except OSError as e:
        return Failed(source, e)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return Failed(source, e)
    try:
        return Loaded(source, parse_json(syn, data, symbols=symbols))
    except (GATSyntaxError, ValueError) as e:
        return Failed(source, e)


def render(expr: BaseExpr, fmt: str) -> str:
    match fmt:
        case "text":
            return str(expr)
        case "sexpr":
            return show_sexpr(expr)
        case "unicode":
            return show_unicode(expr)
        case "latex":
            return show_latex(expr)
        case "json":
            return dumps(expr)
    raise ValueError(f"Unknown format: {fmt}")


def handle_theories() -> int:
    for syn in ALL_SYNTAXES:
        print(f"{syn.name:<32} {syn.signature.name}")
    return 0


def handle_reference(name: str) -> int:
    syn = find_syntax(name)
    if syn is None:
        print(f"Unknown syntax: {name}", file=sys.stderr)
        return 1
    print(render_reference(syn), end="")
    return 0


def handle_show(name: str, files: Sequence[str], *, fmt: str, symbols: bool) -> int:
    """Parse each JSON expression file into the syntax and print it."""
    syn = find_syntax(name)
    if syn is None:
        print(f"Unknown syntax: {name}", file=sys.stderr)
        return 1

    failures = 0
    for source in files:
        match load_expression(source, syn, symbols=symbols):
            case Loaded(_, expr):
                print(render(expr, fmt))
            case Failed(_, e):
                logger.debug("Failed to load %s", source, exc_info=e)
                print(f"{source}: {e}", file=sys.stderr)
                failures += 1
    return 1 if failures else 0


def configure_logging(verbose: bool) -> None:
    # load_dotenv runs first so GATSYNTAX_LOG_LEVEL may come from a .env file.
    load_dotenv()
    level = "DEBUG" if verbose else os.environ.get("GATSYNTAX_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gatsyntax",
        description="Inspect the free syntaxes of generalized algebraic theories",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Log at DEBUG level (default: $GATSYNTAX_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: theories
    subparsers.add_parser("theories", help="List the bundled syntaxes.")

    # Command: reference
    reference_parser = subparsers.add_parser(
        "reference",
        help="Print the Markdown reference of a syntax.",
    )
    reference_parser.add_argument("syntax", help="Syntax name, e.g. FreeCategory.")

    # Command: show
    show_parser = subparsers.add_parser(
        "show",
        help="Parse JSON expression file(s) into a syntax and print them.",
    )
    show_parser.add_argument("syntax", help="Syntax name, e.g. FreeCategory.")
    show_parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="JSON expression file(s); '-' reads standard input.",
    )
    show_parser.add_argument(
        "--format",
        "-f",
        choices=FORMATS,
        default="unicode",
        help="Output notation (default: unicode).",
    )
    show_parser.add_argument(
        "--symbols",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Read leaf strings as symbols (default: plain strings).",
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    match args.command:
        case "theories":
            return handle_theories()
        case "reference":
            return handle_reference(args.syntax)
        case "show":
            return handle_show(
                args.syntax,
                args.files,
                fmt=args.format,
                symbols=args.symbols,
            )
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
