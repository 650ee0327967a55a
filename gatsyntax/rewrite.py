"""Rewriting helpers for syntax overrides.

Syntaxes don't normalize on their own; an override opts in by passing the
node built by the default constructor through one of these functions.
"""

from __future__ import annotations

from typing import Any

from .expr import BaseExpr


def associate(expr: BaseExpr) -> BaseExpr:
    """Flatten nested applications of an associative operation.

    ``op(op(x, y), z)`` and ``op(x, op(y, z))`` both become the n-ary node
    ``op(x, y, z)``, keeping the sort parameters of the outer node.
    """
    op = expr.head
    flat: list[Any] = []
    for arg in expr.args:
        if isinstance(arg, BaseExpr) and arg.head == op:
            flat.extend(arg.args)
        else:
            flat.append(arg)
    return type(expr)(op, tuple(flat), expr.type_args)


def associate_unit(expr: BaseExpr, unit: Any) -> BaseExpr:
    """Drop a unit operand of a binary operation, otherwise associate.

    ``unit`` is the unit's constructor, or its name.
    """
    unit_name = unit if isinstance(unit, str) else unit.__name__
    first, last = expr.args[0], expr.args[-1]
    if isinstance(first, BaseExpr) and first.head == unit_name:
        return last
    if isinstance(last, BaseExpr) and last.head == unit_name:
        return first
    return associate(expr)
