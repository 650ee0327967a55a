"""Syntax systems for generalized algebraic theories (GATs).

Unlike instances of a theory, syntactic expressions don't necessarily satisfy
the equations of the theory. For example, the default syntax operations for
the theory of categories don't form a category because they don't satisfy the
category laws, e.g.

    compose(f, id(A)) != f

Whether dependent types are enforced at runtime and whether expressions are
brought to normal form depends on the particular syntax. A single theory may
have many syntaxes; :func:`syntax` assembles one from a signature and a set of
overrides.

For every operation the theory requires (generators, accessors, term
constructors and the signature's default methods), the assembled syntax
exports exactly one implementation, chosen in this order:

1. an override supplied to :func:`syntax` for that name and sort pattern;
2. a default method declared by the signature;
3. the synthesized default (see :mod:`gatsyntax.synthesis`).

Override and default-method bodies receive the syntax as first argument.
``syn.defaults`` holds the synthesized defaults, so an override can wrap them:

    @override("mtimes", "Elem", "Elem")
    def mtimes(syn, x, y):
        return associate(syn.defaults.mtimes(x, y))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Any

from .dispatch import Method, Operation, Operations
from .errors import ConfigurationError, UnknownConstructorError
from .expr import BaseExpr
from .printing import Notation
from .signature import ANY, Pattern, Signature
from .synthesis import gen_types, synthesize

logger = logging.getLogger(__name__)

OperationKey = tuple[str, Pattern]


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Override:
    """A user-supplied implementation for one operation of a syntax."""

    name: str
    pattern: Pattern
    impl: Callable[..., Any]

    @property
    def key(self) -> OperationKey:
        return (self.name, self.pattern)


def override(name: str, *pattern: Any) -> Callable[[Callable[..., Any]], Override]:
    """Declare an override for the operation ``name`` with parameter sorts ``pattern``.

    Generators take the leaf value first, matched by ``ANY``:

        @override("Elem", ANY)
        def Elem(syn, value):
            raise ValueError("No extra generators allowed!")
    """

    def decorate(fn: Callable[..., Any]) -> Override:
        return Override(name, tuple(pattern), fn)

    return decorate


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Requirement:
    """An operation a syntax must export."""

    name: str
    pattern: Pattern
    kind: str  # "generator" | "accessor" | "term" | "method"

    @property
    def key(self) -> OperationKey:
        return (self.name, self.pattern)


def interface(sig: Signature) -> tuple[Requirement, ...]:
    """Complete set of operations of a syntax for ``sig``, in export order."""
    reqs: list[Requirement] = []
    for s in sig.all_sorts:
        reqs.append(Requirement(s.name, (ANY, *(p.sort.name for p in s.params)), "generator"))
        for p in s.params:
            reqs.append(Requirement(p.name, (s.name,), "accessor"))
    for t in sig.all_terms:
        reqs.append(Requirement(t.name, t.pattern, "term"))
    for m in sig.all_methods:
        reqs.append(Requirement(m.name, m.pattern, "method"))

    seen: set[OperationKey] = set()
    for r in reqs:
        if r.key in seen:
            raise ConfigurationError(
                f"{sig.name}: operation {_show_key(r.key)} is declared twice"
            )
        seen.add(r.key)
    return tuple(reqs)


def _show_key(key: OperationKey) -> str:
    name, pattern = key
    return f"{name}({', '.join(str(p) for p in pattern)})"


# ---------------------------------------------------------------------------
# Syntax namespace
# ---------------------------------------------------------------------------


class Syntax:
    """A syntax system: expression types plus resolved functions.

    Functions are available as attributes (``FreeCategory.compose``) and by
    item (``FreeCategory["compose"]``); expression classes are in ``types``.
    """

    def __init__(
        self,
        name: str,
        signature: Signature,
        notation: Notation,
        doc: str,
    ) -> None:
        self.name = name
        self.signature = signature
        self.notation = notation
        self.__doc__ = doc
        self._types: dict[str, type[BaseExpr]] = {}
        self._ops: dict[str, Operation] = {}
        self._defaults: dict[str, Operation] = {}
        self._sources: dict[OperationKey, str] = {}
        self.types: Mapping[str, type[BaseExpr]] = MappingProxyType(self._types)
        self.defaults = Operations(MappingProxyType(self._defaults), f"{name}.defaults")
        self.sources: Mapping[OperationKey, str] = MappingProxyType(self._sources)

    def __repr__(self) -> str:
        return f"<syntax {self.name} of {self.signature.name}>"

    def __getattr__(self, name: str) -> Operation:
        ops = self.__dict__.get("_ops", {})
        try:
            return ops[name]
        except KeyError:
            owner = self.__dict__.get("name", "?")
            raise AttributeError(f"syntax {owner!r} has no operation {name!r}") from None

    def __getitem__(self, name: str) -> Operation:
        return self._ops[name]

    def __contains__(self, name: object) -> bool:
        return name in self._ops

    def __dir__(self) -> list[str]:
        return sorted({*super().__dir__(), *self._ops})

    @property
    def operations(self) -> Mapping[str, Operation]:
        return MappingProxyType(self._ops)

    @property
    def constructors(self) -> tuple[str, ...]:
        """Names reachable through :meth:`invoke_term`."""
        sig = self.signature
        names = [*sig.sort_names, *sig.term_names]
        names += [m.name for m in sig.all_methods if m.name not in names]
        return tuple(names)

    def invoke_term(self, name: str, *args: Any) -> Any:
        """Invoke a term or generator constructor by name.

        In everyday use the function should be called directly; this is the
        reflective entry point used by functors and deserialization.
        """
        if name not in self.constructors:
            raise UnknownConstructorError(name, f"syntax {self.name}")
        return self._ops[name](*args)


def invoke_term(syn: Syntax, name: str, *args: Any) -> Any:
    return syn.invoke_term(name, *args)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


@dataclass
class _SyntaxBuilder:
    """State threaded through the assembly of one syntax."""

    signature: Signature
    overrides: dict[OperationKey, Override]
    syn: Syntax
    resolved: dict[str, list[Method]] = field(default_factory=dict)

    def resolve(self, name: str, *args: Any) -> Any:
        return self.syn._ops[name](*args)

    def build(self, base_types: Sequence[type[BaseExpr]]) -> Syntax:
        sig, syn = self.signature, self.syn
        syn._types.update(gen_types(sig, syn.name, base_types))
        for cls in syn._types.values():
            cls.syntax = syn

        defaults = synthesize(sig, syn._types, self.resolve)
        for name, methods in defaults.items():
            syn._defaults[name] = Operation(f"{syn.name}.defaults.{name}", methods, syn.types)

        methods = {(m.name, m.pattern): m for m in sig.all_methods}
        for req in interface(sig):
            if req.key in self.overrides:
                impl = partial(self.overrides[req.key].impl, syn)
                source = "override"
            elif req.kind == "method":
                impl = partial(methods[req.key].impl, syn)
                source = "signature"
            else:
                impl = _find(defaults[req.name], req.pattern).impl
                source = "default"
            logger.debug("%s: %s -> %s", syn.name, _show_key(req.key), source)
            syn._sources[req.key] = source
            self.resolved.setdefault(req.name, []).append(Method(req.pattern, impl))

        for name, ms in self.resolved.items():
            syn._ops[name] = Operation(name, ms, syn.types)
        return syn


def _find(methods: Iterable[Method], pattern: Pattern) -> Method:
    for m in methods:
        if m.pattern == pattern:
            return m
    raise ConfigurationError(f"no synthesized method for pattern {pattern}")


def syntax(
    name: str,
    signature: Signature,
    overrides: Iterable[Override] = (),
    base_types: Sequence[type[BaseExpr]] = (),
    notation: Notation | None = None,
    doc: str | None = None,
) -> Syntax:
    """Assemble a syntax system for ``signature``.

    ``base_types``, if given, supplies one :class:`BaseExpr` subclass per sort
    for the generated expression classes to derive from.

    Raises :class:`ConfigurationError` if an override names an operation the
    signature does not have, or if ``base_types`` is malformed.
    """
    sorts = signature.all_sorts
    if base_types:
        if len(base_types) != len(sorts):
            raise ConfigurationError(
                f"syntax {name}: expected {len(sorts)} base type(s), got {len(base_types)}"
            )
        for base in base_types:
            if not (isinstance(base, type) and issubclass(base, BaseExpr)):
                raise ConfigurationError(
                    f"syntax {name}: base type {base!r} is not a BaseExpr subclass"
                )
    else:
        base_types = [BaseExpr] * len(sorts)

    required = {r.key for r in interface(signature)}
    by_key: dict[OperationKey, Override] = {}
    for ov in overrides:
        if ov.key not in required:
            raise ConfigurationError(
                f"syntax {name}: {_show_key(ov.key)} is not an operation of {signature.name}"
            )
        if ov.key in by_key:
            raise ConfigurationError(f"syntax {name}: {_show_key(ov.key)} overridden twice")
        by_key[ov.key] = ov

    syn = Syntax(
        name,
        signature,
        notation or Notation(),
        doc if doc is not None else signature.doc,
    )
    _SyntaxBuilder(signature, by_key, syn).build(base_types)
    logger.debug(
        "Assembled syntax %s (%d sorts, %d operations, %d overrides)",
        name, len(sorts), len(syn._ops), len(by_key),
    )
    return syn
