"""Pretty-printing of syntax expressions.

Three renderers, all pure functions from an expression tree to text:

  - S-expressions:     (compose f g)
  - Unicode, infix:    f⋅g
  - LaTeX math, infix: f \\cdot g

By default every term constructor is shown in prefix notation. A syntax may
register its own notation per constructor name, e.g. infix ``⋅`` for
``compose``; see :class:`Notation` and the renderer factories below.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .expr import BaseExpr, Symbol

# A renderer receives the expression and whether it appears as an operand.
Renderer = Callable[..., str]

_EMPTY: Mapping[str, Renderer] = MappingProxyType({})


@dataclass(frozen=True)
class Notation:
    """Per-constructor renderers for the Unicode and LaTeX printers."""

    unicode: Mapping[str, Renderer] = field(default_factory=lambda: _EMPTY)
    latex: Mapping[str, Renderer] = field(default_factory=lambda: _EMPTY)


def _notation(expr: BaseExpr) -> Notation:
    syn = type(expr).syntax
    return syn.notation if syn is not None else Notation()


# ---------------------------------------------------------------------------
# S-expressions
# ---------------------------------------------------------------------------


def show_sexpr(expr: Any) -> str:
    """Show the expression as an S-expression; generators show their value."""
    if not isinstance(expr, BaseExpr):
        return f":{expr}" if isinstance(expr, Symbol) else repr(expr)
    if expr.is_generator:
        return show_sexpr(expr.value)
    return "(" + " ".join([expr.head, *(show_sexpr(a) for a in expr.args)]) + ")"


# ---------------------------------------------------------------------------
# Unicode
# ---------------------------------------------------------------------------


def show_unicode(expr: Any, paren: bool = False) -> str:
    """Show the expression using Unicode symbols, prefix by default."""
    if not isinstance(expr, BaseExpr):
        return str(expr)
    if expr.is_generator:
        return str(expr.value)
    rule = _notation(expr).unicode.get(expr.head)
    if rule is not None:
        return rule(expr, paren=paren)
    return f"{expr.head}[{','.join(show_unicode(a) for a in expr.args)}]"


def show_unicode_infix(expr: BaseExpr, op: str, paren: bool = False) -> str:
    inner = op.join(show_unicode(a, paren=True) for a in expr.args)
    return f"({inner})" if paren else inner


def unicode_infix(op: str) -> Renderer:
    def render(expr: BaseExpr, paren: bool = False) -> str:
        return show_unicode_infix(expr, op, paren=paren)

    return render


def unicode_symbol(symbol: str) -> Renderer:
    """Render a (typically nullary) constructor as a fixed symbol."""

    def render(expr: BaseExpr, paren: bool = False) -> str:
        return symbol

    return render


# ---------------------------------------------------------------------------
# LaTeX
# ---------------------------------------------------------------------------


def show_latex(expr: Any, paren: bool = False) -> str:
    """Show the expression in LaTeX math, without ``$`` delimiters."""
    if not isinstance(expr, BaseExpr):
        return str(expr)
    if expr.is_generator:
        # Multi-letter names are text, single letters and symbols are math.
        content = str(expr.value)
        if content.isalpha() and len(content) > 1:
            return f"\\mathrm{{{content}}}"
        return content
    rule = _notation(expr).latex.get(expr.head)
    if rule is not None:
        return rule(expr, paren=paren)
    args = ",".join(show_latex(a) for a in expr.args)
    return f"\\mathop{{\\mathrm{{{expr.head}}}}}\\left[{args}\\right]"


def show_latex_infix(expr: BaseExpr, op: str, paren: bool = False) -> str:
    sep = op if op == " " else f" {op} "
    inner = sep.join(show_latex(a, paren=True) for a in expr.args)
    return f"\\left({inner}\\right)" if paren else inner


def show_latex_script(expr: BaseExpr, head: str, superscript: bool = False) -> str:
    script = "^" if superscript else "_"
    return head + script + "{" + ",".join(show_latex(a) for a in expr.args) + "}"


def latex_infix(op: str) -> Renderer:
    def render(expr: BaseExpr, paren: bool = False) -> str:
        return show_latex_infix(expr, op, paren=paren)

    return render


def latex_script(head: str, superscript: bool = False) -> Renderer:
    def render(expr: BaseExpr, paren: bool = False) -> str:
        return show_latex_script(expr, head, superscript=superscript)

    return render


def latex_symbol(symbol: str) -> Renderer:
    def render(expr: BaseExpr, paren: bool = False) -> str:
        return symbol

    return render
