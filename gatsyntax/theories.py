"""Library of standard theories and their free syntaxes.

These are the building blocks most theories extend:

- Monoid: one sort, a unit and a binary product
- Category: objects, morphisms between them, identities and composition
- MonoidalCategory: a category with a monoidal product on objects and
  morphisms, and a unit object
- SymmetricMonoidalCategory: adds the braiding

Each signature follows the same layout:
  1. Declare sorts, with their sort parameters
  2. Declare term constructors, with implicit variables in the context
  3. Declare default methods (variadic forms)

The free syntaxes normalize associativity (and, for monoidal products of
objects, the unit) by overriding the binary constructors. FreeCategory does
not check domains; FreeCategoryStrict and the monoidal syntaxes compose with
``strict=True``.
"""

from __future__ import annotations

from functools import reduce
from types import MappingProxyType
from typing import Any

from gatsyntax.expr import BaseExpr
from gatsyntax.helpers import S, app, method, signature, sort, term
from gatsyntax.printing import (
    Notation,
    latex_infix,
    latex_script,
    latex_symbol,
    unicode_infix,
    unicode_symbol,
)
from gatsyntax.rewrite import associate, associate_unit
from gatsyntax.signature import Signature, Vararg
from gatsyntax.syntax import Syntax, override, syntax

# =====================================================================
# Monoid
# =====================================================================

def _mtimes_many(syn: Syntax, *xs: BaseExpr) -> BaseExpr:
    return reduce(syn.mtimes, xs)


MONOID: Signature = signature(
    "Monoid",
    sorts=[sort("Elem")],
    terms=[
        term("munit", [], "Elem"),
        term("mtimes", [("x", "Elem"), ("y", "Elem")], "Elem"),
    ],
    methods=[method("mtimes", [Vararg("Elem")], _mtimes_many)],
    doc="Signature of the theory of monoids.",
)


# =====================================================================
# Category
# =====================================================================

_OBJECTS = [("X", "Ob"), ("Y", "Ob"), ("Z", "Ob")]


def _compose_many(syn: Syntax, *fs: BaseExpr) -> BaseExpr:
    """compose(f₁, ..., fₙ) as a left fold of binary composition."""
    return reduce(syn.compose, fs)


CATEGORY: Signature = signature(
    "Category",
    sorts=[
        sort("Ob", doc="Object in a category"),
        sort("Hom", [("dom", "Ob"), ("codom", "Ob")], doc="Morphism in a category"),
    ],
    terms=[
        term("id", [("X", "Ob")], S("Hom", "X", "X")),
        term(
            "compose",
            [("f", S("Hom", "X", "Y")), ("g", S("Hom", "Y", "Z"))],
            S("Hom", "X", "Z"),
            context=_OBJECTS,
        ),
    ],
    methods=[method("compose", [Vararg("Hom")], _compose_many)],
    doc="Signature of the theory of categories.",
)


# =====================================================================
# Monoidal categories
# =====================================================================


def _otimes_many(syn: Syntax, *xs: BaseExpr) -> BaseExpr:
    """otimes(x₁, ..., xₙ) as a left fold of the binary product."""
    return reduce(syn.otimes, xs)


MONOIDAL_CATEGORY: Signature = signature(
    "MonoidalCategory",
    terms=[
        term("otimes", [("A", "Ob"), ("B", "Ob")], "Ob"),
        term(
            "otimes",
            [("f", S("Hom", "A", "B")), ("g", S("Hom", "C", "D"))],
            S("Hom", app("otimes", "A", "C"), app("otimes", "B", "D")),
            context=[("A", "Ob"), ("B", "Ob"), ("C", "Ob"), ("D", "Ob")],
        ),
        term("munit", [], "Ob"),
    ],
    methods=[
        method("otimes", [Vararg("Ob")], _otimes_many),
        method("otimes", [Vararg("Hom")], _otimes_many),
    ],
    parents=[CATEGORY],
    doc="Signature of the theory of (strict) monoidal categories.",
)

SYMMETRIC_MONOIDAL_CATEGORY: Signature = signature(
    "SymmetricMonoidalCategory",
    terms=[
        term(
            "braid",
            [("A", "Ob"), ("B", "Ob")],
            S("Hom", app("otimes", "A", "B"), app("otimes", "B", "A")),
        ),
    ],
    parents=[MONOIDAL_CATEGORY],
    doc="Signature of the theory of symmetric monoidal categories.",
)


# =====================================================================
# Free syntaxes
# =====================================================================

_MONOID_NOTATION = Notation(
    unicode=MappingProxyType({"mtimes": unicode_infix("⋅"), "munit": unicode_symbol("e")}),
    latex=MappingProxyType({"mtimes": latex_infix("\\cdot"), "munit": latex_symbol("e")}),
)

_CATEGORY_UNICODE: dict[str, Any] = {"compose": unicode_infix("⋅")}
_CATEGORY_LATEX: dict[str, Any] = {
    "compose": latex_infix("\\cdot"),
    "id": latex_script("\\mathrm{id}"),
}
_MONOIDAL_UNICODE = {
    **_CATEGORY_UNICODE,
    "otimes": unicode_infix("⊗"),
    "munit": unicode_symbol("I"),
}
_MONOIDAL_LATEX = {
    **_CATEGORY_LATEX,
    "otimes": latex_infix("\\otimes"),
    "munit": latex_symbol("I"),
    "braid": latex_script("\\sigma"),
}


@override("mtimes", "Elem", "Elem")
def _mtimes_assoc_unit(syn: Syntax, x: BaseExpr, y: BaseExpr) -> BaseExpr:
    return associate_unit(syn.defaults.mtimes(x, y), syn.munit)


@override("compose", "Hom", "Hom")
def _compose_assoc(syn: Syntax, f: BaseExpr, g: BaseExpr) -> BaseExpr:
    return associate(syn.defaults.compose(f, g))


@override("compose", "Hom", "Hom")
def _compose_strict(syn: Syntax, f: BaseExpr, g: BaseExpr) -> BaseExpr:
    return associate(syn.defaults.compose(f, g, strict=True))


@override("otimes", "Ob", "Ob")
def _otimes_ob(syn: Syntax, a: BaseExpr, b: BaseExpr) -> BaseExpr:
    return associate_unit(syn.defaults.otimes(a, b), syn.munit)


@override("otimes", "Hom", "Hom")
def _otimes_hom(syn: Syntax, f: BaseExpr, g: BaseExpr) -> BaseExpr:
    return associate(syn.defaults.otimes(f, g))


FREE_MONOID: Syntax = syntax(
    "FreeMonoid",
    MONOID,
    [_mtimes_assoc_unit],
    notation=_MONOID_NOTATION,
    doc="The free monoid: words in the generators.",
)

_CATEGORY_NOTATION = Notation(
    unicode=MappingProxyType(_CATEGORY_UNICODE),
    latex=MappingProxyType(_CATEGORY_LATEX),
)

FREE_CATEGORY: Syntax = syntax(
    "FreeCategory",
    CATEGORY,
    [_compose_assoc],
    notation=_CATEGORY_NOTATION,
    doc="Syntax for the theory of categories, associative. Domains are not checked.",
)

FREE_CATEGORY_STRICT: Syntax = syntax(
    "FreeCategoryStrict",
    CATEGORY,
    [_compose_strict],
    notation=_CATEGORY_NOTATION,
    doc="Syntax for the theory of categories, associative and domain-checked.",
)

_MONOIDAL_OVERRIDES = [_compose_strict, _otimes_ob, _otimes_hom]

FREE_MONOIDAL_CATEGORY: Syntax = syntax(
    "FreeMonoidalCategory",
    MONOIDAL_CATEGORY,
    _MONOIDAL_OVERRIDES,
    notation=Notation(
        unicode=MappingProxyType(_MONOIDAL_UNICODE),
        latex=MappingProxyType(_MONOIDAL_LATEX),
    ),
    doc="Syntax for the theory of monoidal categories.",
)

FREE_SYMMETRIC_MONOIDAL_CATEGORY: Syntax = syntax(
    "FreeSymmetricMonoidalCategory",
    SYMMETRIC_MONOIDAL_CATEGORY,
    _MONOIDAL_OVERRIDES,
    notation=Notation(
        unicode=MappingProxyType(_MONOIDAL_UNICODE),
        latex=MappingProxyType(_MONOIDAL_LATEX),
    ),
    doc="Syntax for the theory of symmetric monoidal categories.",
)

ALL_SYNTAXES: tuple[Syntax, ...] = (
    FREE_MONOID,
    FREE_CATEGORY,
    FREE_CATEGORY_STRICT,
    FREE_MONOIDAL_CATEGORY,
    FREE_SYMMETRIC_MONOIDAL_CATEGORY,
)
