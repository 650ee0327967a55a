import pytest

from gatsyntax import ANY, App, ConfigurationError, TermExpr, Var, Vararg
from gatsyntax.helpers import S, app, method, signature, sort, term
from gatsyntax.terms import free_vars, substitute
from gatsyntax.theories import (
    CATEGORY,
    MONOID,
    MONOIDAL_CATEGORY,
    SYMMETRIC_MONOIDAL_CATEGORY,
)


def dom(t: TermExpr) -> App:
    return App("dom", (t,))


def codom(t: TermExpr) -> App:
    return App("codom", (t,))


def test_compose_expansion() -> None:
    (compose,) = CATEGORY.get_terms("compose")
    expansion = CATEGORY.expand(compose)
    assert expansion.type_args == (dom(Var("f")), codom(Var("g")))
    assert expansion.equations == ((dom(Var("g")), codom(Var("f"))),)
    assert expansion.bindings["Y"] == codom(Var("f"))


def test_id_has_no_equations() -> None:
    (ident,) = CATEGORY.get_terms("id")
    expansion = CATEGORY.expand(ident)
    assert expansion.type_args == (Var("X"), Var("X"))
    assert expansion.equations == ()


def test_generator_constructor() -> None:
    hom = CATEGORY.get_sort("Hom")
    assert hom is not None
    gen = hom.generator()
    assert gen.is_generator
    assert gen.pattern == (ANY, "Ob", "Ob")
    assert CATEGORY.expand(gen).type_args == (Var("dom"), Var("codom"))


def test_monoidal_product_of_morphisms() -> None:
    otimes_ob, otimes_hom = MONOIDAL_CATEGORY.get_terms("otimes")
    assert otimes_ob.pattern == ("Ob", "Ob")
    assert otimes_hom.pattern == ("Hom", "Hom")
    expansion = MONOIDAL_CATEGORY.expand(otimes_hom)
    assert expansion.type_args == (
        App("otimes", (dom(Var("f")), dom(Var("g")))),
        App("otimes", (codom(Var("f")), codom(Var("g")))),
    )
    assert expansion.equations == ()


def test_inclusion() -> None:
    assert MONOIDAL_CATEGORY.sort_names == ("Ob", "Hom")
    assert MONOIDAL_CATEGORY.term_names == ("id", "compose", "otimes", "munit")
    assert SYMMETRIC_MONOIDAL_CATEGORY.includes(CATEGORY)
    assert not CATEGORY.includes(MONOIDAL_CATEGORY)
    assert [s.name for s in SYMMETRIC_MONOIDAL_CATEGORY.lineage] == [
        "Category",
        "MonoidalCategory",
        "SymmetricMonoidalCategory",
    ]


def test_diamond_inclusion_is_flattened_once() -> None:
    two = signature("MonoidTwo", terms=[term("one", [], "Elem")], parents=[MONOID])
    both = signature("Both", parents=[MONOID, two])
    assert both.sort_names == ("Elem",)
    assert both.term_names == ("munit", "mtimes", "one")


def test_two_cells() -> None:
    sig = signature(
        "TwoCategory",
        sorts=[
            sort("Hom2", [("dom", S("Hom", "A", "B")), ("codom", S("Hom", "A", "B"))],
                 context=[("A", "Ob"), ("B", "Ob")]),
        ],
        terms=[
            term(
                "compose2",
                [("alpha", S("Hom2", "f", "g")), ("beta", S("Hom2", "g", "h"))],
                S("Hom2", "f", "h"),
                context=[("A", "Ob"), ("B", "Ob"),
                         ("f", S("Hom", "A", "B")), ("g", S("Hom", "A", "B")),
                         ("h", S("Hom", "A", "B"))],
            ),
        ],
        parents=[CATEGORY],
    )
    (compose2,) = sig.get_terms("compose2")
    expansion = sig.expand(compose2)
    assert expansion.bindings["A"] == dom(dom(Var("alpha")))
    assert expansion.type_args == (dom(Var("alpha")), codom(Var("beta")))
    assert (dom(Var("beta")), codom(Var("alpha"))) in expansion.equations

    hom2 = sig.get_sort("Hom2")
    assert hom2 is not None
    assert sig.expand(hom2.generator()).equations == (
        (dom(Var("codom")), dom(Var("dom"))),
        (codom(Var("codom")), codom(Var("dom"))),
    )


def test_unknown_sort() -> None:
    with pytest.raises(ConfigurationError, match="unknown sort 'Obj'"):
        signature("Bad", sorts=[sort("Ob")], terms=[term("e", [], "Obj")])


def test_sort_arity() -> None:
    with pytest.raises(ConfigurationError, match="expects 2 argument"):
        signature("Bad", terms=[term("e", [("X", "Ob")], S("Hom", "X"))], parents=[CATEGORY])


def test_undeclared_variable() -> None:
    with pytest.raises(ConfigurationError, match="undeclared variable 'Y'"):
        signature(
            "Bad",
            terms=[term("e", [("X", "Ob")], S("Hom", "X", "Y"))],
            parents=[CATEGORY],
        )


def test_uninferable_variable() -> None:
    with pytest.raises(ConfigurationError, match="cannot infer Y"):
        signature(
            "Bad",
            terms=[term("e", [("X", "Ob")], S("Hom", "X", "Y"), context=[("Y", "Ob")])],
            parents=[CATEGORY],
        )


def test_unknown_term_in_sort() -> None:
    with pytest.raises(ConfigurationError, match="unknown term constructor 'oplus'"):
        signature(
            "Bad",
            terms=[term("e", [("X", "Ob")], S("Hom", app("oplus", "X", "X"), "X"))],
            parents=[CATEGORY],
        )


def test_duplicate_sort_and_clash() -> None:
    with pytest.raises(ConfigurationError, match="duplicate sort"):
        signature("Bad", sorts=[sort("Elem")], parents=[MONOID])
    with pytest.raises(ConfigurationError, match="clashes with a sort"):
        signature("Bad", terms=[term("Elem", [], "Elem")], parents=[MONOID])
    with pytest.raises(ConfigurationError, match="reserved"):
        signature("Bad", sorts=[sort(ANY)])


def test_default_method_pattern() -> None:
    (m,) = CATEGORY.all_methods
    assert m.name == "compose"
    assert m.pattern == (Vararg("Hom"),)
    assert "left fold" in m.doc
    assert method("f", ["Hom"], lambda syn, f: f, doc="x").doc == "x"


def test_terms_helpers() -> None:
    t = app("otimes", "A", app("munit"))
    assert free_vars(S("Hom", t, "B")) == ("A", "B")
    assert substitute(t, {"A": Var("Z")}) == app("otimes", "Z", app("munit"))
    assert str(S("Hom", t, "B")) == "Hom(otimes(A,munit()),B)"
