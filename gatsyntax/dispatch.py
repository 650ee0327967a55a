"""Multiple dispatch on sorts for the functions of a syntax.

A single name may stand for several operations of a theory, e.g. ``otimes``
on objects and on morphisms of a monoidal category, or the binary and the
variadic ``compose``. An :class:`Operation` collects the methods sharing a
name and picks one per call from the sorts of the arguments.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ArityError, SortError
from .signature import ANY, Pattern, Vararg


@dataclass(frozen=True)
class Method:
    """One implementation of an operation, for one parameter-sort pattern."""

    pattern: Pattern
    impl: Callable[..., Any]

    @property
    def is_variadic(self) -> bool:
        return bool(self.pattern) and isinstance(self.pattern[-1], Vararg)

    @property
    def specificity(self) -> tuple[int, int]:
        concrete = sum(1 for p in self.pattern if p != ANY)
        return (1 if self.is_variadic else 0, -concrete)

    def accepts_arity(self, n: int) -> bool:
        if self.is_variadic:
            return n >= len(self.pattern)
        return n == len(self.pattern)


class Operation:
    """A named function of a syntax, dispatching on the sorts of its arguments.

    ``types`` maps sort names to the classes that represent them; it is
    shared with the owning syntax and looked up at call time.
    """

    def __init__(
        self,
        name: str,
        methods: list[Method],
        types: Mapping[str, type],
    ) -> None:
        self.name = name
        # Stable sort keeps declaration order among equally specific methods.
        self.methods = tuple(sorted(methods, key=lambda m: m.specificity))
        self._types = types
        self.__name__ = name
        self.__qualname__ = name

    def __repr__(self) -> str:
        return f"<operation {self.name} with {len(self.methods)} method(s)>"

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.dispatch(args).impl(*args, **kwargs)

    def dispatch(self, args: tuple[Any, ...]) -> Method:
        candidates = [m for m in self.methods if m.accepts_arity(len(args))]
        if not candidates:
            arities = sorted({len(m.pattern) for m in self.methods})
            raise ArityError(self.name, arities, len(args))
        for m in candidates:
            if self._matches(m.pattern, args):
                return m
        raise SortError(self.name, args)

    def _matches(self, pattern: Pattern, args: tuple[Any, ...]) -> bool:
        for i, arg in enumerate(args):
            elem = pattern[min(i, len(pattern) - 1)]
            if isinstance(elem, Vararg):
                elem = elem.sort
            if elem == ANY:
                continue
            cls = self._types.get(elem)
            if cls is None or not isinstance(arg, cls):
                return False
        return True


class Operations:
    """Attribute-style namespace over a mapping of operations."""

    def __init__(self, ops: Mapping[str, Operation], owner: str) -> None:
        self._ops = ops
        self._owner = owner

    def __getattr__(self, name: str) -> Operation:
        try:
            return self._ops[name]
        except KeyError:
            raise AttributeError(f"{self._owner} has no operation {name!r}") from None

    def __getitem__(self, name: str) -> Operation:
        return self._ops[name]

    def __contains__(self, name: object) -> bool:
        return name in self._ops

    def __iter__(self) -> Iterator[str]:
        return iter(self._ops)

    def __dir__(self) -> list[str]:
        return sorted(self._ops)
