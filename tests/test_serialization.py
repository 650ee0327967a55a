import json

import pytest

from gatsyntax import Symbol, UnknownConstructorError, dumps, loads, parse_json, syntax, to_json
from gatsyntax.helpers import signature, term
from gatsyntax.signature import ANY
from gatsyntax.theories import FREE_CATEGORY, FREE_MONOIDAL_CATEGORY, MONOID


@pytest.fixture
def morphisms():
    syn = FREE_CATEGORY
    X, Y, Z = syn.Ob("X"), syn.Ob("Y"), syn.Ob("Z")
    return syn.Hom("f", X, Y), syn.Hom("g", Y, Z)


def test_to_json(morphisms) -> None:
    f, g = morphisms
    assert to_json(FREE_CATEGORY.compose(f, g)) == [
        "compose",
        ["Hom", "f", ["Ob", "X"], ["Ob", "Y"]],
        ["Hom", "g", ["Ob", "Y"], ["Ob", "Z"]],
    ]
    assert to_json(FREE_CATEGORY.id(FREE_CATEGORY.Ob("X"))) == ["id", ["Ob", "X"]]


def test_parse_json(morphisms) -> None:
    f, g = morphisms
    sexpr = [
        "compose",
        ["Hom", "f", ["Ob", "X"], ["Ob", "Y"]],
        ["Hom", "g", ["Ob", "Y"], ["Ob", "Z"]],
    ]
    assert parse_json(FREE_CATEGORY, sexpr) == FREE_CATEGORY.compose(f, g)


def test_symbols() -> None:
    syn = FREE_CATEGORY
    X = syn.Ob(Symbol("X"))
    assert to_json(X) == ["Ob", "X"]
    assert parse_json(syn, ["Ob", "X"], symbols=True) == X
    assert parse_json(syn, ["Ob", "X"]) != X
    assert parse_json(syn, ["Ob", "X"]).value == "X"


def test_numeric_leaves() -> None:
    numeric = signature(
        "MonoidNumeric",
        terms=[term("elem_int", [("x", ANY)], "Elem")],
        parents=[MONOID],
    )
    syn = syntax("MonoidNumeric", numeric)
    expr = syn.mtimes(syn.elem_int(1), syn.Elem(2.5))
    assert to_json(expr) == ["mtimes", ["elem_int", 1], ["Elem", 2.5]]
    assert parse_json(syn, to_json(expr)) == expr


def test_round_trip() -> None:
    syn = FREE_MONOIDAL_CATEGORY
    A, B, C = syn.Ob("A"), syn.Ob("B"), syn.Ob("C")
    f, g, h = syn.Hom("f", A, B), syn.Hom("g", B, C), syn.Hom("h", C, A)
    for expr in [
        syn.compose(f, g, h),
        syn.otimes(f, syn.id(syn.munit()), g),
        syn.compose(syn.otimes(f, g), syn.otimes(g, h)),
        syn.otimes(A, B, C),
    ]:
        assert parse_json(syn, to_json(expr)) == expr
        assert loads(syn, dumps(expr)) == expr


def test_dumps() -> None:
    syn = FREE_CATEGORY
    text = dumps(syn.id(syn.Ob("X")), indent=2)
    assert json.loads(text) == ["id", ["Ob", "X"]]


def test_unknown_constructor() -> None:
    with pytest.raises(UnknownConstructorError, match="'mtimes'"):
        parse_json(FREE_CATEGORY, ["mtimes", ["Ob", "X"], ["Ob", "Y"]])
    with pytest.raises(UnknownConstructorError):
        parse_json(FREE_CATEGORY, ["dom", ["Hom", "f", ["Ob", "X"], ["Ob", "Y"]]])


def test_ill_formed() -> None:
    with pytest.raises(ValueError, match="Ill-formed"):
        parse_json(FREE_CATEGORY, [1, 2])
    with pytest.raises(ValueError):
        parse_json(FREE_CATEGORY, {"Ob": "X"})
