"""Scope-aware walker for hoisting.

Rewrites a form so that every free symbol is replaced by an alias recorded in
the HoistContext. Call forms are macro-expanded as they are reached, then
dispatched on their head symbol to the binding-aware handlers in
WALK_FORMS; anything else is walked element by element.
"""

from __future__ import annotations

import logging

from formula import SExpression
from formula.errors import UnsupportedFormError
from formula.hoisting.context import HoistContext
from formula.hoisting.walk_forms import UNSUPPORTED_FORMS, WALK_FORMS
from formula.types.collections import MapLiteral, SetLiteral, Vector, is_call_form
from formula.types.environment import HoistEnvironment
from formula.types.scope import Scope
from formula.types.symbol import Symbol

logger = logging.getLogger(__name__)


def should_hoist(symbol: Symbol, scope: Scope, env: HoistEnvironment) -> bool:
    if symbol in scope or symbol.is_keyword or env.is_core(symbol):
        return False
    # A local of the surrounding code is a dependency even if it shadows syntax
    return env.is_local(symbol) or not env.is_special(symbol)


def is_unsupported(op: Symbol, scope: Scope, env: HoistEnvironment) -> bool:
    return op in UNSUPPORTED_FORMS and op not in scope and not env.is_local(op)


def walk(form: SExpression, scope: Scope, ctx: HoistContext) -> SExpression:
    match form:
        case Symbol():
            if not should_hoist(form, scope, ctx.env):
                return form
            return ctx.hoist(form)
        case Vector() | SetLiteral():
            return type(form)(walk(x, scope, ctx) for x in form)
        case MapLiteral():
            return MapLiteral((walk(k, scope, ctx), walk(v, scope, ctx)) for k, v in form)
        case list():
            return walk_call(form, scope, ctx)
        case _:
            return form


def walk_call(form: list, scope: Scope, ctx: HoistContext) -> SExpression:
    head = form[0] if form else None
    # A head bound by an enclosing form is a local function, not a macro
    if not (isinstance(head, Symbol) and head in scope):
        form = ctx.env.macros.macro_expand_head(form, ctx.env)
        if not is_call_form(form):
            return walk(form, scope, ctx)

    return _dispatch(form, scope, ctx)


def _dispatch(form: list, scope: Scope, ctx: HoistContext) -> SExpression:
    if not form:
        return form

    head = form[0]
    if isinstance(head, Symbol):
        handler = WALK_FORMS.get(head)
        if handler is not None:
            return handler(form, scope, ctx, walk)
        if is_unsupported(head, scope, ctx.env):
            logger.debug("rejecting %s form", head)
            raise UnsupportedFormError(head)

    return [walk(x, scope, ctx) for x in form]
