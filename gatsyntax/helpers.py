"""Builder helpers for declaring signatures.

These are the primary public API for writing theories. Strings stand for
variables wherever a term is expected and for sorts wherever a sort is
expected:

    S("Hom", "X", "Y")                       # Hom(X, Y)
    S("Hom", app("otimes", "A", "C"), "B")   # Hom(otimes(A, C), B)
    term("id", [("X", "Ob")], S("Hom", "X", "X"))
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from gatsyntax.signature import (
    DefaultMethod,
    Param,
    PatternElem,
    Signature,
    SortConstructor,
    TermConstructor,
)
from gatsyntax.terms import App, SortExpr, TermExpr, Var

SortLike = str | SortExpr
TermLike = str | TermExpr


def _term(t: TermLike) -> TermExpr:
    return Var(t) if isinstance(t, str) else t


def _sort(s: SortLike) -> SortExpr:
    return SortExpr(s) if isinstance(s, str) else s


def S(name: str, *args: TermLike) -> SortExpr:
    return SortExpr(name, tuple(_term(a) for a in args))


def var(name: str) -> Var:
    return Var(name)


def app(name: str, *args: TermLike) -> App:
    return App(name, tuple(_term(a) for a in args))


def param(name: str, sort: SortLike) -> Param:
    return Param(name, _sort(sort))


def _params(params: Iterable[tuple[str, SortLike]]) -> tuple[Param, ...]:
    return tuple(param(n, s) for n, s in params)


def sort(
    name: str,
    params: Sequence[tuple[str, SortLike]] = (),
    context: Sequence[tuple[str, SortLike]] = (),
    doc: str = "",
) -> SortConstructor:
    return SortConstructor(name, _params(params), _params(context), doc)


def term(
    name: str,
    params: Sequence[tuple[str, SortLike]],
    result: SortLike,
    context: Sequence[tuple[str, SortLike]] = (),
    doc: str = "",
) -> TermConstructor:
    return TermConstructor(name, _params(params), _sort(result), _params(context), doc)


def method(
    name: str,
    pattern: Sequence[PatternElem],
    impl: Callable[..., Any],
    doc: str = "",
) -> DefaultMethod:
    return DefaultMethod(name, tuple(pattern), impl, doc or (impl.__doc__ or ""))


def signature(
    name: str,
    sorts: Sequence[SortConstructor] = (),
    terms: Sequence[TermConstructor] = (),
    methods: Sequence[DefaultMethod] = (),
    parents: Sequence[Signature] = (),
    doc: str = "",
) -> Signature:
    return Signature(
        name=name,
        sorts=tuple(sorts),
        terms=tuple(terms),
        methods=tuple(methods),
        parents=tuple(parents),
        doc=doc,
    )
