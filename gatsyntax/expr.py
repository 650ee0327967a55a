"""Expressions in the syntax of a generalized algebraic theory.

Each sort constructor of a theory gets its own Python class (generated per
syntax, see :mod:`gatsyntax.synthesis`), all deriving from :class:`BaseExpr`.
Python's type system has no dependent types, so the sort parameters of an
expression (e.g. the domain and codomain of a morphism) are stored as extra
data on the node, in ``type_args``.

A node records

    head:      the term constructor that built it, or "generator"
    args:      sub-expressions, or (value,) for a generator
    type_args: the sort parameters computed when the node was built

Two nodes are equal when they have the same class and equal head, args and
type_args. Nodes are immutable and hashable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from .syntax import Syntax

GENERATOR = "generator"


@dataclass(frozen=True)
class Symbol:
    """A symbolic identifier used as a generator value.

    Unlike a plain string, a symbol is rendered bare in S-expressions
    (``:f`` rather than ``'f'``).
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BaseExpr:
    """Base class for expressions of every syntax."""

    head: str
    args: tuple[Any, ...]
    type_args: tuple[BaseExpr, ...] = ()

    # Set on each generated class.
    sort_name: ClassVar[str] = ""
    syntax: ClassVar[Syntax | None] = None

    @property
    def is_generator(self) -> bool:
        return self.head == GENERATOR

    @property
    def value(self) -> Any:
        """The leaf value of a generator."""
        if not self.is_generator:
            raise AttributeError(f"{self.head} expression has no generator value")
        return self.args[0]

    def __str__(self) -> str:
        if self.is_generator:
            return str(self.args[0])
        return f"{self.head}({','.join(str(a) for a in self.args)})"


def head(expr: BaseExpr) -> str:
    return expr.head


def accessor(expr: BaseExpr, index: int) -> BaseExpr:
    """The ``index``-th sort parameter of an expression."""
    return expr.type_args[index]


def constructor_name(expr: BaseExpr) -> str:
    """Name of the constructor that created ``expr``.

    Generators are introduced by the constructor named after their sort.
    """
    return type(expr).sort_name if expr.is_generator else expr.head


def constructor_args(expr: BaseExpr) -> tuple[Any, ...]:
    """Arguments to pass to ``constructor_name(expr)`` to rebuild ``expr``."""
    if expr.is_generator:
        return (expr.args[0], *expr.type_args)
    return expr.args


def generator_like(expr: BaseExpr, value: Any) -> BaseExpr:
    """Create a generator of the same sort and sort parameters as ``expr``."""
    syn = type(expr).syntax
    if syn is None:
        raise TypeError(f"{type(expr).__qualname__} does not belong to a syntax")
    return syn.invoke_term(type(expr).sort_name, value, *expr.type_args)
