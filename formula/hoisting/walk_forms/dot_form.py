from formula import SExpression, WalkFn
from formula.hoisting.context import HoistContext
from formula.types.collections import is_call_form
from formula.types.scope import Scope


def walk_dot(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    """
    (. obj member args*)    field access or method call, member kept as is
    (. obj (method args*))  method call, method name kept as is
    """
    if len(form) < 3:
        return [form[0], *(walk_fn(x, scope, ctx) for x in form[1:])]

    sym, obj, member, *more = form
    obj = walk_fn(obj, scope, ctx)
    more = [walk_fn(x, scope, ctx) for x in more]

    if is_call_form(member) and member:
        method, *args = member
        member = [method, *(walk_fn(a, scope, ctx) for a in args)]

    return [sym, obj, member, *more]
