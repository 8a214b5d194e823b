from formula import SExpression, WalkFn
from formula.hoisting.context import HoistContext
from formula.hoisting.walk_forms.binding_forms import bind_target
from formula.types.collections import Vector
from formula.types.scope import Scope
from formula.types.symbol import Symbol


def _walk_arity(arity: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> list:
    if not arity:
        return arity
    params, *body = arity
    params, names = bind_target(params, scope, ctx, walk_fn)
    inner = scope.extend(*names)
    return [params, *(walk_fn(x, inner, ctx) for x in body)]


def walk_fn_form(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    """
    (fn* name? [params] body*)
    (fn* name? ([params] body*)+)

    A name is visible in every arity so the function can call itself. The
    & marker in a parameter vector is syntax and binds nothing.
    """
    sym, *rest = form
    head = [sym]
    if rest and isinstance(rest[0], Symbol):
        name, *rest = rest
        head.append(name)
        scope = scope.extend(name)

    if rest and isinstance(rest[0], Vector):
        return [*head, *_walk_arity(rest, scope, ctx, walk_fn)]

    return [*head, *(_walk_arity(arity, scope, ctx, walk_fn) for arity in rest)]
