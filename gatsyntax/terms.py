"""Terms and sorts of a generalized algebraic theory.

Sort expressions in a theory may depend on terms. A morphism sort
``Hom(X, Y)`` depends on two object variables; a monoidal product of
morphisms has sort ``Hom(otimes(A, C), otimes(B, D))``. These expressions
live at the *signature* level: they are built from

  - Variables (parameters or implicit context variables of a constructor)
  - Applications of term constructors or type accessors to terms

and are evaluated against actual arguments when a syntax builds a node.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Term AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Var:
    """A variable: an explicit parameter or an implicit context variable.

    Example: X in Hom(X, Y)
    """

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class App:
    """Application of a term constructor or accessor to terms.

    Example: otimes(A, C)   — App("otimes", (Var("A"), Var("C")))
    Example: dom(f)         — App("dom", (Var("f"),))
    Example: munit()        — App("munit", ())  [nullary constructor]
    """

    name: str
    args: tuple[TermExpr, ...]

    def __str__(self) -> str:
        return f"{self.name}({','.join(str(a) for a in self.args)})"


TermExpr = Var | App


@dataclass(frozen=True)
class SortExpr:
    """A sort constructor applied to terms.

    Example: Ob          — SortExpr("Ob", ())
    Example: Hom(X, Y)   — SortExpr("Hom", (Var("X"), Var("Y")))
    """

    name: str
    args: tuple[TermExpr, ...] = ()

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}({','.join(str(a) for a in self.args)})"


# ---------------------------------------------------------------------------
# Operations on terms
# ---------------------------------------------------------------------------


def free_vars(t: TermExpr | SortExpr) -> tuple[str, ...]:
    """Variable names occurring in a term or sort, in order of first occurrence."""
    seen: list[str] = []

    def walk(u: TermExpr | SortExpr) -> None:
        match u:
            case Var(name):
                if name not in seen:
                    seen.append(name)
            case App(_, args) | SortExpr(_, args):
                for a in args:
                    walk(a)

    walk(t)
    return tuple(seen)


def substitute(t: TermExpr, bindings: Mapping[str, TermExpr]) -> TermExpr:
    """Replace variables by terms. Unbound variables are left in place."""
    match t:
        case Var(name):
            return bindings.get(name, t)
        case App(name, args):
            return App(name, tuple(substitute(a, bindings) for a in args))
    raise TypeError(f"Unknown term type: {type(t)}")


def evaluate(
    t: TermExpr,
    env: Mapping[str, Any],
    call: Callable[..., Any],
) -> Any:
    """Evaluate a term given values for its variables.

    ``call(name, *args)`` performs each application; a syntax passes its own
    resolved functions here so that user overrides take part.
    """
    match t:
        case Var(name):
            return env[name]
        case App(name, args):
            return call(name, *(evaluate(a, env, call) for a in args))
    raise TypeError(f"Unknown term type: {type(t)}")
