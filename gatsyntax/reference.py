"""Markdown reference for an assembled syntax, rendered from Jinja2 templates.

Documents what a syntax exports: expression types, generators, accessors,
term constructors with their equations, and where each operation's
implementation comes from (override, signature default, or synthesized).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import jinja2

from .syntax import Syntax, interface
from .terms import TermExpr

# Setup jinja2 environment pointing to gatsyntax/templates
_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template with the given keyword arguments."""
    template = _ENV.get_template(template_name)
    return template.render(**kwargs)


@dataclass(frozen=True)
class OperationEntry:
    kind: str
    signature: str
    source: str
    equations: tuple[str, ...]


def _equation(lhs: TermExpr, rhs: TermExpr) -> str:
    return f"{lhs} == {rhs}"


def operation_entries(syn: Syntax) -> list[OperationEntry]:
    sig = syn.signature
    terms = {(t.name, t.pattern): t for t in sig.all_terms}
    entries: list[OperationEntry] = []
    for req in interface(sig):
        shown = f"{req.name}({', '.join(str(p) for p in req.pattern)})"
        equations: tuple[str, ...] = ()
        match req.kind:
            case "generator":
                sort_cons = sig.get_sort(req.name)
                assert sort_cons is not None
                cons = sort_cons.generator()
                params = ["value", *(str(p) for p in cons.params[1:])]
            case "term":
                cons = terms[req.key]
                params = [str(p) for p in cons.params]
            case _:
                cons = None
        if cons is not None:
            shown = f"{req.name}({', '.join(params)}) :: {cons.result}"
            equations = tuple(_equation(l, r) for l, r in sig.expand(cons).equations)
        entries.append(OperationEntry(req.kind, shown, syn.sources[req.key], equations))
    return entries


def render_reference(syn: Syntax) -> str:
    sig = syn.signature
    return render(
        "syntax_reference.md.j2",
        syntax=syn,
        doc=syn.__doc__,
        signature=sig,
        parents=[s.name for s in sig.lineage if s is not sig],
        sorts=sig.all_sorts,
        type_names={name: cls.__qualname__ for name, cls in syn.types.items()},
        entries=operation_entries(syn),
    )
