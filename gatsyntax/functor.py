"""Functors from syntax expressions into instances of a theory.

Strictly speaking, these are structure-preserving maps (model homomorphisms)
from the free term algebra of a syntax into another model of the same theory.
A functor is completely determined by its action on the generators, which
can be given in three ways:

  1. Explicitly map generator expressions to values, via ``generators``.
  2. For each sort, give a function mapping generator expressions of that
     sort to values, via ``generator_terms``.
  3. Let the codomain rebuild the generator: its function named after the
     sort is called with the leaf value and the mapped sort parameters.

Every other node is mapped by calling the same-named term constructor of the
codomain on the mapped arguments.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Any, Protocol

from .dispatch import Method
from .errors import ConfigurationError, UnknownConstructorError
from .expr import BaseExpr, constructor_args, constructor_name
from .signature import Signature

logger = logging.getLogger(__name__)


class Algebra(Protocol):
    """Anything a functor can map into: syntaxes and instances."""

    def invoke_term(self, name: str, *args: Any) -> Any: ...


@dataclass(frozen=True, eq=False)
class Instance:
    """A concrete model of a theory.

    ``types`` names the Python type standing for each sort; ``functions``
    maps each term constructor name (and optionally each sort name, for
    generators) to a callable over those types. Generator functions must
    return an instance of their sort's type.

    Calls no function accepts fall back to the signature's default methods,
    so an n-ary ``compose(f, g, h)`` is folded through the binary one.
    """

    signature: Signature
    types: tuple[type, ...]
    functions: Mapping[str, Callable[..., Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __getattr__(self, name: str) -> Callable[..., Any]:
        functions = self.__dict__.get("functions", {})
        if name in functions:
            return partial(self.invoke_term, name)
        raise AttributeError(f"instance has no function {name!r}")

    def invoke_term(self, name: str, *args: Any) -> Any:
        fn = self.functions.get(name)
        if fn is None:
            raise UnknownConstructorError(name, f"instance {self}")
        if not _accepts(fn, args):
            for m in self.signature.all_methods:
                if m.name == name and Method(m.pattern, m.impl).accepts_arity(len(args)):
                    return m.impl(self, *args)
        result = fn(*args)
        sorts = self.signature.sort_names
        if name in sorts:
            expected = self.types[sorts.index(name)]
            if not isinstance(result, expected):
                raise TypeError(
                    f"{self}: generator {name} returned {type(result).__name__}, "
                    f"expected {expected.__name__}"
                )
        return result

    def __str__(self) -> str:
        types = ", ".join(t.__name__ for t in self.types)
        return f"{self.signature.name}({types})"


def _accepts(fn: Callable[..., Any], args: tuple[Any, ...]) -> bool:
    try:
        inspect.signature(fn).bind(*args)
    except TypeError:
        return False
    except ValueError:
        # No introspectable signature (some builtins).
        return True
    return True


def instance(
    sig: Signature,
    types: type | tuple[type, ...],
    **functions: Callable[..., Any],
) -> Instance:
    """Declare an instance of ``sig``.

    Every term constructor of the signature must be implemented. Sort names
    may be given too, to map generator values in functors.

        instance(MONOID, str, munit=lambda: "", mtimes=lambda x, y: x + y)
    """
    types = types if isinstance(types, tuple) else (types,)
    if len(types) != len(sig.all_sorts):
        raise ConfigurationError(
            f"instance of {sig.name}: expected {len(sig.all_sorts)} type(s), got {len(types)}"
        )
    allowed = {*sig.term_names, *sig.sort_names}
    unknown = sorted(set(functions) - allowed)
    if unknown:
        raise ConfigurationError(
            f"instance of {sig.name}: {', '.join(unknown)} not in the signature"
        )
    missing = [name for name in sig.term_names if name not in functions]
    if missing:
        raise ConfigurationError(
            f"instance of {sig.name}: missing {', '.join(missing)}"
        )
    return Instance(sig, types, MappingProxyType(dict(functions)))


class _NoCodomain:
    def invoke_term(self, name: str, *args: Any) -> Any:
        raise UnknownConstructorError(name, "functor without codomain")


def functor(
    codomain: Algebra | None,
    expr: BaseExpr,
    generators: Mapping[BaseExpr, Any] | None = None,
    generator_terms: Mapping[str, Callable[[BaseExpr], Any]] | None = None,
) -> Any:
    """Map ``expr`` into ``codomain``, a syntax or :class:`Instance`.

    With ``codomain=None`` every node must be a generator resolved by
    ``generators`` or ``generator_terms``.
    """
    target: Algebra = codomain if codomain is not None else _NoCodomain()
    generators = generators or {}
    generator_terms = generator_terms or {}

    def visit(e: BaseExpr) -> Any:
        name = constructor_name(e)
        if e.is_generator:
            if e in generators:
                return generators[e]
            if name in generator_terms:
                return generator_terms[name](e)

        term_args = [
            visit(arg) if isinstance(arg, BaseExpr) else arg
            for arg in constructor_args(e)
        ]
        logger.debug("functor: invoking %s with %d argument(s)", name, len(term_args))
        return target.invoke_term(name, *term_args)

    return visit(expr)
