"""Exceptions raised by signatures, syntaxes and their consumers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class GATSyntaxError(Exception):
    """Base class for every error raised by gatsyntax."""


class ConfigurationError(GATSyntaxError):
    """A signature, syntax or instance declaration is ill-formed.

    Raised at declaration/assembly time, never at call time.
    """


class ArityError(GATSyntaxError, TypeError):
    """A constructor or generator was called with the wrong number of arguments."""

    def __init__(self, name: str, expected: Sequence[int], got: int) -> None:
        self.name = name
        self.expected = tuple(expected)
        self.got = got
        arities = " or ".join(str(n) for n in self.expected) or "no"
        super().__init__(f"{name}() takes {arities} argument(s), got {got}")


class SortError(GATSyntaxError, TypeError):
    """No method of an operation accepts the sorts of the given arguments."""

    def __init__(self, name: str, args: Sequence[Any]) -> None:
        self.name = name
        self.arguments = tuple(args)
        shown = ", ".join(type(a).__qualname__ for a in self.arguments)
        super().__init__(f"No method {name}({shown})")


class SyntaxDomainError(GATSyntaxError):
    """The equations of a term constructor fail for the actual arguments.

    Only raised when the constructor is invoked with ``strict=True``.
    """

    def __init__(self, constructor: str, args: Sequence[Any]) -> None:
        self.constructor = constructor
        self.arguments = tuple(args)
        super().__init__(str(self))

    def __str__(self) -> str:
        shown = ",".join(str(a) for a in self.arguments)
        return f"Domain error in term constructor {self.constructor}({shown})"


class UnknownConstructorError(GATSyntaxError, LookupError):
    """A constructor name is not exported by the target namespace or instance."""

    def __init__(self, name: str, target: str) -> None:
        self.name = name
        self.target = target
        super().__init__(f"No term constructor {name!r} in {target}")
