"""Walking of let*/loop* and letfn* forms, and of binding targets.

A binding target is a symbol or a destructuring vector or map. bind_target
returns the names a target introduces; the target itself is left as
written, except for the default expressions of an :or map, which are code.
"""

from __future__ import annotations

from formula import SExpression, WalkFn
from formula.hoisting.context import HoistContext
from formula.types.collections import MapLiteral, Vector
from formula.types.scope import Scope
from formula.types.symbol import Symbol

AMPERSAND = Symbol("&")
AS = Symbol(":as")
OR = Symbol(":or")
KEY_LISTS = frozenset({Symbol(":keys"), Symbol(":strs"), Symbol(":syms")})


def _local_name(sym: Symbol) -> Symbol:
    # :keys [a/b :c] binds b and c
    return Symbol(sym.name.lstrip(":"))


def bind_target(
    target: SExpression, scope: Scope, ctx: HoistContext, walk_fn: WalkFn
) -> tuple[SExpression, list[Symbol]]:
    match target:
        case Symbol():
            if target == AMPERSAND or target.is_keyword:
                return target, []
            return target, [target]

        case Vector():
            names: list[Symbol] = []
            result = Vector()
            for item in target:
                item, bound = bind_target(item, scope, ctx, walk_fn)
                result.append(item)
                names.extend(bound)
            return result, names

        case MapLiteral():
            names = []
            result = MapLiteral()
            for key, value in target:
                if key == AS:
                    if isinstance(value, Symbol):
                        names.append(value)
                elif isinstance(key, Symbol) and key in KEY_LISTS:
                    if isinstance(value, Vector):
                        names.extend(_local_name(s) for s in value if isinstance(s, Symbol))
                elif key == OR:
                    if isinstance(value, MapLiteral):
                        value = MapLiteral((n, walk_fn(d, scope, ctx)) for n, d in value)
                else:
                    # {target lookup-key}, the target may itself destructure
                    key, bound = bind_target(key, scope, ctx, walk_fn)
                    names.extend(bound)
                result.append((key, value))
            return result, names

        case _:
            return target, []


def _pairs(bindings: list) -> list[tuple[SExpression, SExpression]]:
    return list(zip(bindings[::2], bindings[1::2]))


def walk_let(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    """
    (let* [name value ...] body*), also loop*.

    Each value sees the names bound before it, never its own; the body sees
    them all.
    """
    if len(form) < 2:
        return form

    sym, bindings, *body = form
    walked = type(bindings)()
    for target, value in _pairs(bindings):
        value = walk_fn(value, scope, ctx)
        target, names = bind_target(target, scope, ctx, walk_fn)
        walked.extend((target, value))
        scope = scope.extend(*names)

    return [sym, walked, *(walk_fn(x, scope, ctx) for x in body)]


def walk_letfn(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    """
    (letfn* [name fn ...] body*)

    All names are bound before any function is walked, so the functions can
    call each other regardless of order.
    """
    if len(form) < 2:
        return form

    sym, bindings, *body = form
    pairs = _pairs(bindings)
    scope = scope.extend(*(name for name, _ in pairs if isinstance(name, Symbol)))

    walked = type(bindings)()
    for name, value in pairs:
        walked.extend((name, walk_fn(value, scope, ctx)))

    return [sym, walked, *(walk_fn(x, scope, ctx) for x in body)]
