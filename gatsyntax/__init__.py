"""gatsyntax: Free syntax systems for generalized algebraic theories."""

from .terms import App, SortExpr, TermExpr, Var
from .signature import (
    ANY,
    DefaultMethod,
    Param,
    Signature,
    SortConstructor,
    TermConstructor,
    Vararg,
)
from .errors import (
    ArityError,
    ConfigurationError,
    GATSyntaxError,
    SortError,
    SyntaxDomainError,
    UnknownConstructorError,
)
from .expr import (
    BaseExpr,
    Symbol,
    accessor,
    constructor_name,
    generator_like,
    head,
)
from .syntax import Override, Syntax, invoke_term, override, syntax
from .rewrite import associate, associate_unit
from .functor import Instance, functor, instance
from .serialization import dumps, loads, parse_json, to_json
from .printing import (
    Notation,
    show_latex,
    show_latex_infix,
    show_latex_script,
    show_sexpr,
    show_unicode,
    show_unicode_infix,
)
from .helpers import S, app, method, param, signature, sort, term

__all__ = [
    # Terms
    "App", "SortExpr", "TermExpr", "Var",
    # Signature
    "ANY", "DefaultMethod", "Param", "Signature", "SortConstructor",
    "TermConstructor", "Vararg",
    # Errors
    "ArityError", "ConfigurationError", "GATSyntaxError", "SortError",
    "SyntaxDomainError", "UnknownConstructorError",
    # Expressions
    "BaseExpr", "Symbol", "accessor", "constructor_name", "generator_like", "head",
    # Syntax
    "Override", "Syntax", "invoke_term", "override", "syntax",
    # Rewriting
    "associate", "associate_unit",
    # Functors
    "Instance", "functor", "instance",
    # Serialization
    "dumps", "loads", "parse_json", "to_json",
    # Printing
    "Notation", "show_latex", "show_latex_infix", "show_latex_script",
    "show_sexpr", "show_unicode", "show_unicode_infix",
    # Helpers
    "S", "app", "method", "param", "signature", "sort", "term",
]
