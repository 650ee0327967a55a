import pytest

from gatsyntax import ConfigurationError, UnknownConstructorError, functor, instance, syntax
from gatsyntax.theories import (
    CATEGORY,
    FREE_CATEGORY,
    FREE_MONOID,
    FREE_MONOIDAL_CATEGORY,
    FREE_SYMMETRIC_MONOIDAL_CATEGORY,
    MONOID,
)

STRINGS = instance(MONOID, str, munit=lambda: "", mtimes=lambda x, y: x + y)


def test_string_monoid_with_generator_map() -> None:
    syn = FREE_MONOID
    x, y, z = syn.Elem("x"), syn.Elem("y"), syn.Elem("z")
    gens = {x: "x", y: "y", z: "z"}
    assert functor(STRINGS, syn.mtimes(x, syn.mtimes(y, z)), generators=gens) == "xyz"
    assert functor(STRINGS, syn.mtimes(x, syn.munit()), generators=gens) == "x"
    assert functor(STRINGS, syn.munit()) == ""


def test_unnormalized_expression() -> None:
    syn = syntax("PlainMonoid", MONOID)
    x, y = syn.Elem("x"), syn.Elem("y")
    gens = {x: "x", y: "y"}
    expr = syn.mtimes(syn.mtimes(x, syn.munit()), y)
    assert functor(STRINGS, expr, generators=gens) == "xy"


def test_generator_terms() -> None:
    syn = FREE_MONOID
    x, y = syn.Elem("x"), syn.Elem("y")
    result = functor(
        STRINGS,
        syn.mtimes(x, y, x),
        generator_terms={"Elem": lambda e: e.value * 2},
    )
    assert result == "xxyyxx"


def test_generators_through_instance() -> None:
    upper = instance(
        MONOID, str, munit=lambda: "", mtimes=lambda x, y: x + y, Elem=str.upper
    )
    syn = FREE_MONOID
    expr = syn.mtimes(syn.Elem("x"), syn.Elem("y"))
    assert functor(upper, expr) == "XY"
    with pytest.raises(UnknownConstructorError, match="'Elem'"):
        functor(STRINGS, expr)


def test_generator_results_are_checked_against_sort_types() -> None:
    lengths = instance(
        MONOID, str, munit=lambda: "", mtimes=lambda x, y: x + y, Elem=len
    )
    with pytest.raises(TypeError, match="generator Elem returned int, expected str"):
        functor(lengths, FREE_MONOID.Elem("x"))


def test_functor_without_codomain() -> None:
    syn = FREE_MONOID
    x, y = syn.Elem("x"), syn.Elem("y")
    assert functor(None, x, generators={x: 1}) == 1
    with pytest.raises(LookupError):
        functor(None, syn.mtimes(x, y), generators={x: 1, y: 2})


def test_syntax_to_syntax() -> None:
    plain = syntax("PlainMonoid", MONOID)
    x, y, z = plain.Elem("x"), plain.Elem("y"), plain.Elem("z")
    expr = plain.mtimes(plain.mtimes(x, plain.munit()), plain.mtimes(y, z))
    free = FREE_MONOID
    assert functor(free, expr) == free.mtimes(
        free.Elem("x"), free.Elem("y"), free.Elem("z")
    )


def test_path_category() -> None:
    paths = instance(
        CATEGORY,
        (str, tuple),
        Ob=lambda value: value,
        Hom=lambda value, dom, codom: ((dom, value, codom),),
        id=lambda X: (),
        compose=lambda f, g: f + g,
    )
    syn = FREE_CATEGORY
    X, Y, Z = syn.Ob("X"), syn.Ob("Y"), syn.Ob("Z")
    f, g, h = syn.Hom("f", X, Y), syn.Hom("g", Y, Z), syn.Hom("h", Z, X)
    expr = syn.compose(f, g, h)
    assert len(expr.args) == 3
    assert functor(paths, expr) == (("X", "f", "Y"), ("Y", "g", "Z"), ("Z", "h", "X"))
    assert functor(paths, syn.compose(syn.id(X), f)) == (("X", "f", "Y"),)
    assert paths.compose(("a",), ("b",), ("c",)) == ("a", "b", "c")


def test_instance_declaration_errors() -> None:
    with pytest.raises(ConfigurationError, match="expected 2 type"):
        instance(CATEGORY, str, id=lambda X: X, compose=lambda f, g: f)
    with pytest.raises(ConfigurationError, match="missing mtimes"):
        instance(MONOID, str, munit=lambda: "")
    with pytest.raises(ConfigurationError, match="dom not in the signature"):
        instance(
            CATEGORY,
            (str, str),
            id=lambda X: X,
            compose=lambda f, g: f,
            dom=lambda f: f,
        )
    assert str(STRINGS) == "Monoid(str)"


def test_monoidal_syntax_to_syntax() -> None:
    src = FREE_MONOIDAL_CATEGORY
    A, B = src.Ob("A"), src.Ob("B")
    f, g = src.Hom("f", A, B), src.Hom("g", B, A)
    expr = src.compose(src.otimes(f, g), src.otimes(g, f))
    dst = FREE_SYMMETRIC_MONOIDAL_CATEGORY
    A2, B2 = dst.Ob("A"), dst.Ob("B")
    f2, g2 = dst.Hom("f", A2, B2), dst.Hom("g", B2, A2)
    mapped = functor(dst, expr)
    assert mapped == dst.compose(dst.otimes(f2, g2), dst.otimes(g2, f2))
    assert dst.dom(mapped) == dst.otimes(A2, B2)
