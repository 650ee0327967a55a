"""Synthesis of expression types and default functions for a syntax.

For a signature, a syntax needs

1. *Types*: one expression class per sort constructor
2. *Generators*: functions creating new generator terms, e.g. objects or
   morphisms, from a leaf value and the sort parameters
3. *Accessors*: functions returning the sort parameters of an expression,
   e.g. domain and codomain
4. *Term constructors*: functions applying term constructors, e.g.
   composition and monoidal products

Everything here is generated from the signature as ordinary closures. The
syntax assembler decides which of these defaults end up exported.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .dispatch import Method
from .errors import ArityError, SyntaxDomainError
from .expr import GENERATOR, BaseExpr
from .signature import Signature, SortConstructor, TermConstructor
from .terms import evaluate

# ``resolve(name, *args)`` calls the function ``name`` of the syntax being built.
Resolver = Callable[..., Any]


def gen_types(
    sig: Signature,
    syntax_name: str,
    base_types: Sequence[type[BaseExpr]],
) -> dict[str, type[BaseExpr]]:
    """Create one expression class per sort, deriving from the given bases."""
    types: dict[str, type[BaseExpr]] = {}
    for cons, base in zip(sig.all_sorts, base_types):
        namespace = {
            "sort_name": cons.name,
            "__module__": base.__module__,
            "__qualname__": f"{syntax_name}.{cons.name}",
            "__doc__": cons.doc or f"Expression of sort {cons.name} in {syntax_name}.",
        }
        types[cons.name] = type(cons.name, (base,), namespace)
    return types


def gen_accessors(cons: SortConstructor) -> list[tuple[str, Method]]:
    """One accessor per sort parameter, e.g. ``dom`` and ``codom`` for ``Hom``."""
    accessors: list[tuple[str, Method]] = []
    for index, p in enumerate(cons.params):

        def access(expr: BaseExpr, _index: int = index) -> BaseExpr:
            return expr.type_args[_index]

        access.__name__ = p.name
        access.__doc__ = f"{p.name}(::{cons.name})::{p.sort.name}"
        accessors.append((p.name, Method((cons.name,), access)))
    return accessors


def gen_term_constructor(
    sig: Signature,
    cons: TermConstructor,
    types: dict[str, type[BaseExpr]],
    resolve: Resolver,
    head: str | None = None,
) -> Method:
    """Function building nodes for ``cons``.

    The sort parameters of the new node are computed by evaluating the
    expanded result sort on the actual arguments. When the constructor has
    equations, the function takes a ``strict`` keyword: if true and the
    equations fail, :class:`SyntaxDomainError` is raised. Domains are not
    checked otherwise.
    """
    expansion = sig.expand(cons)
    cls = types[cons.result.name]
    names = cons.param_names
    head = head or cons.name
    is_generator = head == GENERATOR

    def build(args: tuple[Any, ...]) -> BaseExpr:
        if len(args) != len(names):
            raise ArityError(cons.name, [len(names)], len(args))
        env = dict(zip(names, args))
        type_args = tuple(evaluate(t, env, resolve) for t in expansion.type_args)
        return cls(head, args[:1] if is_generator else args, type_args)

    if expansion.equations:

        def construct(*args: Any, strict: bool = False) -> BaseExpr:
            if strict and len(args) == len(names):
                env = dict(zip(names, args))
                holds = all(
                    evaluate(lhs, env, resolve) == evaluate(rhs, env, resolve)
                    for lhs, rhs in expansion.equations
                )
                if not holds:
                    raise SyntaxDomainError(cons.name, args)
            return build(args)

    else:

        def construct(*args: Any) -> BaseExpr:
            return build(args)

    construct.__name__ = cons.name
    construct.__doc__ = _profile(cons)
    return Method(cons.pattern, construct)


def synthesize(
    sig: Signature,
    types: dict[str, type[BaseExpr]],
    resolve: Resolver,
) -> dict[str, list[Method]]:
    """All default functions of a syntax, keyed by exported name."""
    defaults: dict[str, list[Method]] = {}
    for sort_cons in sig.all_sorts:
        generator = gen_term_constructor(
            sig, sort_cons.generator(), types, resolve, head=GENERATOR
        )
        defaults.setdefault(sort_cons.name, []).append(generator)
        for name, accessor in gen_accessors(sort_cons):
            defaults.setdefault(name, []).append(accessor)
    for term_cons in sig.all_terms:
        defaults.setdefault(term_cons.name, []).append(
            gen_term_constructor(sig, term_cons, types, resolve)
        )
    return defaults


def _profile(cons: TermConstructor) -> str:
    params = ", ".join(str(p) for p in cons.params)
    profile = f"{cons.name}({params})::{cons.result}"
    if cons.context:
        profile += " where " + ", ".join(str(p) for p in cons.context)
    return profile
