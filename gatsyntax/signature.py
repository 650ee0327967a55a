"""Signatures of generalized algebraic theories.

A signature Σ = (S, T, M) consists of:
  S: sort constructors, possibly dependent on terms
       Ob            : sort
       Hom(dom, codom) : sort, where dom, codom : Ob
  T: term constructors, each with a typed profile
       id(X)          : Hom(X, X)                  where X : Ob
       compose(f, g)  : Hom(X, Z)                  where f : Hom(X, Y), g : Hom(Y, Z)
  M: default methods, convenience operations expressed through T
       compose(f₁, ..., fₙ) = compose(...compose(f₁, f₂)..., fₙ)

A signature may include parent signatures; their constructors are inherited
in declaration order, parents first.

A well-formed signature requires that every sort expression names a declared
sort with the right number of arguments, and every variable is either an
explicit parameter or declared in the constructor's context.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from .errors import ConfigurationError
from .terms import App, SortExpr, TermExpr, Var, free_vars, substitute

# Pattern element matching any value (the leaf value of a generator).
ANY = "Any"


@dataclass(frozen=True)
class Vararg:
    """Pattern element matching one or more trailing arguments of a sort."""

    sort: str

    def __str__(self) -> str:
        return f"{self.sort}..."


PatternElem = str | Vararg
Pattern = tuple[PatternElem, ...]


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Param:
    """A named parameter with its declared sort."""

    name: str
    sort: SortExpr

    def __str__(self) -> str:
        return f"{self.name}::{self.sort}"


@dataclass(frozen=True)
class SortConstructor:
    """A sort constructor with its sort parameters.

    Examples:
        Ob                                   (no parameters)
        Hom(dom::Ob, codom::Ob)              (depends on two objects)
        Hom2(dom::Hom(A,B), codom::Hom(A,B)) (context: A::Ob, B::Ob)
    """

    name: str
    params: tuple[Param, ...] = ()
    context: tuple[Param, ...] = ()
    doc: str = ""

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    def generator(self) -> TermConstructor:
        """The term constructor introducing generators of this sort.

        It takes the leaf value followed by the sort parameters, e.g.
        ``Hom(value, dom::Ob, codom::Ob)::Hom(dom, codom)``.
        """
        return TermConstructor(
            name=self.name,
            params=(Param(GENERATOR_VALUE, SortExpr(ANY)), *self.params),
            result=SortExpr(self.name, tuple(Var(p.name) for p in self.params)),
            context=self.context,
        )


GENERATOR_VALUE = "__value__"


@dataclass(frozen=True)
class TermConstructor:
    """A term constructor with a dependent profile.

    Examples:
        munit()::Ob
        id(X::Ob)::Hom(X,X)
        compose(f::Hom(X,Y), g::Hom(Y,Z))::Hom(X,Z)   context: X, Y, Z :: Ob
    """

    name: str
    params: tuple[Param, ...]
    result: SortExpr
    context: tuple[Param, ...] = ()
    doc: str = ""

    @property
    def arity(self) -> int:
        return len(self.params)

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.params)

    @property
    def pattern(self) -> Pattern:
        """Sorts of the explicit parameters, with dependencies stripped."""
        return tuple(p.sort.name for p in self.params)

    @property
    def is_generator(self) -> bool:
        return bool(self.params) and self.params[0].name == GENERATOR_VALUE


@dataclass(frozen=True)
class DefaultMethod:
    """A default implementation declared by the signature itself.

    ``impl(syn, *args)`` receives the assembled syntax namespace, so every
    call it makes resolves inside that namespace.
    """

    name: str
    pattern: Pattern
    impl: Callable[..., Any]
    doc: str = ""


# ---------------------------------------------------------------------------
# Implicit variables and equations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Expansion:
    """Result of expanding the implicit variables of a term constructor.

    bindings:  every variable → term over the explicit parameters
    type_args: the result sort's arguments, expanded
    equations: pairs of terms that must be equal for a well-typed call
    """

    bindings: Mapping[str, TermExpr]
    type_args: tuple[TermExpr, ...]
    equations: tuple[tuple[TermExpr, TermExpr], ...]


# ---------------------------------------------------------------------------
# Signature
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Signature:
    """A named GAT signature, optionally including parent signatures.

    Invariant: every sort expression refers to a sort of ``all_sorts`` with
    matching arity, and every variable is declared.
    """

    name: str
    sorts: tuple[SortConstructor, ...] = ()
    terms: tuple[TermConstructor, ...] = ()
    methods: tuple[DefaultMethod, ...] = ()
    parents: tuple[Signature, ...] = ()
    doc: str = ""
    _lineage: tuple[Signature, ...] = field(
        default=(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lineage", _linearize(self))
        _validate(self)

    # Inherited views ---------------------------------------------------

    @property
    def lineage(self) -> tuple[Signature, ...]:
        """Included signatures, parents first, ending with this one."""
        return self._lineage

    @cached_property
    def all_sorts(self) -> tuple[SortConstructor, ...]:
        return tuple(s for sig in self._lineage for s in sig.sorts)

    @cached_property
    def all_terms(self) -> tuple[TermConstructor, ...]:
        return tuple(t for sig in self._lineage for t in sig.terms)

    @cached_property
    def all_methods(self) -> tuple[DefaultMethod, ...]:
        return tuple(m for sig in self._lineage for m in sig.methods)

    def get_sort(self, name: str) -> SortConstructor | None:
        for s in self.all_sorts:
            if s.name == name:
                return s
        return None

    def get_terms(self, name: str) -> tuple[TermConstructor, ...]:
        return tuple(t for t in self.all_terms if t.name == name)

    def includes(self, other: Signature) -> bool:
        return any(sig is other for sig in self._lineage)

    @property
    def sort_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.all_sorts)

    @property
    def term_names(self) -> tuple[str, ...]:
        names: list[str] = []
        for t in self.all_terms:
            if t.name not in names:
                names.append(t.name)
        return tuple(names)

    # Expansion ---------------------------------------------------------

    def expand(self, cons: TermConstructor) -> Expansion:
        """Bind every implicit variable of ``cons`` to an accessor path.

        Starting from the explicit parameters, each argument of a parameter's
        sort is reachable through the corresponding accessor: if
        ``f : Hom(X, Y)`` then ``X = dom(f)``. The first path found binds the
        variable; every further occurrence produces an equation.
        """
        sorts: dict[str, SortExpr] = {p.name: p.sort for p in cons.context}
        sorts.update({p.name: p.sort for p in cons.params})
        bindings: dict[str, TermExpr] = {p.name: Var(p.name) for p in cons.params}
        pending: list[tuple[TermExpr, TermExpr]] = []

        queue = list(cons.param_names)
        while queue:
            var = queue.pop(0)
            sort_expr = sorts[var]
            if sort_expr.name == ANY:
                continue
            sort_cons = self.get_sort(sort_expr.name)
            assert sort_cons is not None, sort_expr.name
            for accessor, arg in zip(sort_cons.params, sort_expr.args):
                path = App(accessor.name, (bindings[var],))
                if isinstance(arg, Var) and arg.name not in bindings:
                    bindings[arg.name] = path
                    queue.append(arg.name)
                else:
                    pending.append((path, arg))

        unbound = [
            v for v in _vars_of(cons) if v not in bindings
        ]
        if unbound:
            raise ConfigurationError(
                f"Term constructor {cons.name}: cannot infer {', '.join(unbound)} "
                "from the explicit parameters"
            )

        equations: list[tuple[TermExpr, TermExpr]] = []
        for lhs, rhs in pending:
            rhs = substitute(rhs, bindings)
            if lhs != rhs and (lhs, rhs) not in equations:
                equations.append((lhs, rhs))

        type_args = tuple(substitute(a, bindings) for a in cons.result.args)
        return Expansion(bindings, type_args, tuple(equations))


def _vars_of(cons: TermConstructor) -> tuple[str, ...]:
    names: list[str] = []
    for sort_expr in (cons.result, *(p.sort for p in cons.params)):
        for v in free_vars(sort_expr):
            if v not in names:
                names.append(v)
    return tuple(names)


def _linearize(sig: Signature) -> tuple[Signature, ...]:
    """Signatures in inclusion order: parents (recursively) first, each once."""
    order: list[Signature] = []

    def visit(s: Signature) -> None:
        for parent in s.parents:
            visit(parent)
        if not any(s is seen for seen in order):
            order.append(s)

    visit(sig)
    return tuple(order)


def _validate(sig: Signature) -> None:
    sort_arity: dict[str, int] = {}
    for s in sig.all_sorts:
        if s.name == ANY:
            raise ConfigurationError(f"{sig.name}: {ANY!r} is reserved")
        if s.name in sort_arity:
            raise ConfigurationError(f"{sig.name}: duplicate sort {s.name!r}")
        sort_arity[s.name] = s.arity

    callable_names = {t.name for t in sig.all_terms}
    callable_names.update(p.name for s in sig.all_sorts for p in s.params)

    def check_apps(owner: str, t: TermExpr | SortExpr) -> None:
        if isinstance(t, App) and t.name not in callable_names:
            raise ConfigurationError(f"{owner}: unknown term constructor {t.name!r}")
        if isinstance(t, (App, SortExpr)):
            for a in t.args:
                check_apps(owner, a)

    def check_sort(owner: str, sort_expr: SortExpr, declared: set[str]) -> None:
        if sort_expr.name == ANY:
            return
        check_apps(owner, sort_expr)
        if sort_expr.name not in sort_arity:
            raise ConfigurationError(f"{owner}: unknown sort {sort_expr.name!r}")
        if len(sort_expr.args) != sort_arity[sort_expr.name]:
            raise ConfigurationError(
                f"{owner}: sort {sort_expr} expects "
                f"{sort_arity[sort_expr.name]} argument(s)"
            )
        for v in free_vars(sort_expr):
            if v not in declared:
                raise ConfigurationError(f"{owner}: undeclared variable {v!r}")

    for s in sig.all_sorts:
        declared = {p.name for p in s.context}
        for p in (*s.context, *s.params):
            check_sort(f"{sig.name}.{s.name}", p.sort, declared)
        sig.expand(s.generator())

    for t in sig.all_terms:
        if t.name in sort_arity:
            raise ConfigurationError(
                f"{sig.name}: term constructor {t.name!r} clashes with a sort"
            )
        declared = {p.name for p in (*t.context, *t.params)}
        for p in (*t.context, *t.params):
            check_sort(f"{sig.name}.{t.name}", p.sort, declared)
        check_sort(f"{sig.name}.{t.name}", t.result, declared)
        sig.expand(t)
