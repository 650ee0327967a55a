"""JSON serialization for syntax expressions.

An expression serializes to an S-expression encoded as JSON: a list whose
first element is the constructor name, followed by the serialized arguments.
Generators use their sort's name and list the leaf value followed by their
sort parameters:

    compose(f, g)  →  ["compose",
                       ["Hom", "f", ["Ob", "X"], ["Ob", "Y"]],
                       ["Hom", "g", ["Ob", "Y"], ["Ob", "Z"]]]

Leaf values serialize as themselves if numeric, otherwise as strings.
Round-trip: parse_json(syn, to_json(e)) == e, provided ``symbols`` matches
how the generators of ``e`` were created.
"""

from __future__ import annotations

import json
import logging
from numbers import Real
from typing import Any

from .expr import BaseExpr, Symbol, constructor_args, constructor_name
from .syntax import Syntax

logger = logging.getLogger(__name__)

JSON = Any


def to_json(expr: Any) -> JSON:
    if isinstance(expr, BaseExpr):
        return [constructor_name(expr), *(to_json(a) for a in constructor_args(expr))]
    if isinstance(expr, Real):
        return expr
    return str(expr)


def parse_json(syn: Syntax, sexpr: JSON, symbols: bool = False) -> Any:
    """Rebuild an expression in ``syn`` from its JSON form.

    Constructors are looked up by name; an unknown name raises
    :class:`~gatsyntax.errors.UnknownConstructorError`. If ``symbols`` is
    true, leaf strings become :class:`Symbol` values.
    """
    match sexpr:
        case [str(name), *rest]:
            args = [parse_json(syn, x, symbols=symbols) for x in rest]
            logger.debug("Invoking %s.%s with %d argument(s)", syn.name, name, len(args))
            return syn.invoke_term(name, *args)
        case str():
            return Symbol(sexpr) if symbols else sexpr
        case bool() | int() | float():
            return sexpr
    raise ValueError(f"Ill-formed expression JSON: {sexpr!r}")


# ---------------------------------------------------------------------------
# Convenience: dump / load expressions as JSON strings
# ---------------------------------------------------------------------------


def dumps(expr: BaseExpr, **kwargs: Any) -> str:
    return json.dumps(to_json(expr), **kwargs)


def loads(syn: Syntax, s: str, symbols: bool = False) -> Any:
    return parse_json(syn, json.loads(s), symbols=symbols)
