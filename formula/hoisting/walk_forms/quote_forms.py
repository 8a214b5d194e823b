"""Quoted data and its escapes.

(quote x) is data: the whole form becomes an argument of the closure so it is
evaluated once, where the closure is applied, and never walked.

(unquote x) and (unquote-splicing x) leave the closure altogether: x is
expanded and supplied as an argument computed at the call site, read through
deref in the splicing case.
"""

from formula import SExpression, WalkFn
from formula.hoisting.context import HoistContext
from formula.types.scope import Scope
from formula.types.symbol import Symbol

DEREF = Symbol("deref")


def _unwrapped(form: list, ctx: HoistContext) -> SExpression:
    inner = form[1] if len(form) > 1 else None
    return ctx.env.macros.macro_expand_all(inner, ctx.env)


def walk_quote(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    return ctx.pass_through(form)


def walk_unquote(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    return ctx.pass_through(_unwrapped(form, ctx))


def walk_unquote_splicing(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    return ctx.pass_through([DEREF, _unwrapped(form, ctx)])
