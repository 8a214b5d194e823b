from __future__ import annotations

import logging
from itertools import count
from typing import TYPE_CHECKING

from formula import SExpression, TransformerFunction
from formula.types.collections import MapLiteral, SetLiteral, Vector, is_call_form
from formula.types.symbol import Symbol

if TYPE_CHECKING:
    from formula.types.environment import HoistEnvironment

logger = logging.getLogger(__name__)

QUOTE = Symbol("quote")
DOT = Symbol(".")
NEW = Symbol("new")


def desugar_interop(form: list) -> SExpression:
    """
    Host interop sugar, rewritten like any other head-position expansion:

        (.-field obj)         => (. obj -field)
        (.method obj args*)   => (. obj method args*)
        (Ctor. args*)         => (new Ctor args*)

    Returns None when the head is not interop sugar.
    """
    head = form[0]
    name = head.name
    if name.startswith(".") and name not in (".", "..") and head.namespace is None:
        if len(form) < 2:
            return None
        _, obj, *args = form
        return [DOT, obj, Symbol(name[1:]), *args]
    if name.endswith(".") and len(name) > 1 and not name.startswith("."):
        return [NEW, Symbol(head.id[:-1]), *form[1:]]
    return None


class MacroEnvironment:
    """
    Macro environment mapping macro names (Symbols) to Python transformer
    functions.

    A transformer is called with the unevaluated argument forms and the
    HoistEnvironment the form appears in, and returns the expansion:

        def when_macro(args, env):
            test, *body = args
            return [Symbol("if"), test, [Symbol("do"), *body]]

    Features:
    - Head-position macro expansion, host interop sugar included
    - Fixed-point head expansion
    - Recursive nested expansion (never inside quote)
    - Gensym support for transformers that need fresh names
    """

    def __init__(self):
        self.macros: dict[Symbol, TransformerFunction] = {}
        self._gensym_counter = count(1)

    def define_macro(self, name: Symbol, transformer: TransformerFunction) -> None:
        self.macros[name] = transformer

    def is_macro(self, sym: Symbol) -> bool:
        return sym in self.macros

    def gen_sym(self, prefix: str = "G") -> Symbol:
        return Symbol(f"{prefix}__{next(self._gensym_counter)}")

    # Single-step head expansion
    def expand_1(self, form: SExpression, env: HoistEnvironment) -> SExpression:
        """Expand only the head-position macro if present.

        Interop sugar heads (.method, .-field, Ctor.) expand the same way.
        A head symbol that names a local of the surrounding code is an ordinary
        value, neither a macro nor sugar.
        """
        if is_call_form(form) and form:
            head = form[0]
            if isinstance(head, Symbol) and self.is_macro(head) and not env.is_local(head):
                expansion = self.macros[head](form[1:], env)
                logger.debug("expanded %s macro", head)
                return expansion
            if isinstance(head, Symbol) and not head.is_keyword and not env.is_local(head):
                expansion = desugar_interop(form)
                if expansion is not None:
                    logger.debug("expanded %s interop form", head)
                    return expansion

        return form  # Not a macro call, unchanged

    # Fixed-point head expansion
    def macro_expand_head(self, form: SExpression, env: HoistEnvironment) -> SExpression:
        cur = form
        while True:
            nxt = self.expand_1(cur, env)
            if nxt is cur or nxt == cur:
                return cur
            cur = nxt

    # Full expansion
    def macro_expand_all(self, form: SExpression, env: HoistEnvironment) -> SExpression:
        expanded = self.macro_expand_head(form, env)

        if is_call_form(expanded):
            # Do not recurse into (quote ...) templates.
            if expanded and expanded[0] == QUOTE:
                return expanded
            return [self.macro_expand_all(x, env) for x in expanded]

        if isinstance(expanded, (Vector, SetLiteral)):
            return type(expanded)(self.macro_expand_all(x, env) for x in expanded)

        if isinstance(expanded, MapLiteral):
            return MapLiteral(
                (self.macro_expand_all(k, env), self.macro_expand_all(v, env))
                for k, v in expanded
            )

        return expanded
