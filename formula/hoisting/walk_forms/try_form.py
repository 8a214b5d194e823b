# (try body* (catch Type name body*)* (finally body*)?)
#
# The catch local is visible only inside its own clause. The finally body sees
# the scope the try form itself was walked in.

from formula import SExpression, WalkFn
from formula.hoisting.context import HoistContext
from formula.types.collections import is_call_form
from formula.types.scope import Scope
from formula.types.symbol import Symbol

CATCH = Symbol("catch")
FINALLY = Symbol("finally")


def _is_clause(form: SExpression, sym: Symbol) -> bool:
    return is_call_form(form) and bool(form) and form[0] == sym


def walk_try(form: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    sym, *body = form
    result = [sym]
    for expr in body:
        if _is_clause(expr, CATCH):
            result.append(walk_catch(expr, scope, ctx, walk_fn))
        elif _is_clause(expr, FINALLY):
            result.append(walk_finally(expr, scope, ctx, walk_fn))
        else:
            result.append(walk_fn(expr, scope, ctx))
    return result


def walk_catch(clause: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    """
    (catch Type name body*) is the full clause. When the exception type is
    left out, (catch name body*), the second element is the local.
    """
    if len(clause) >= 3 and isinstance(clause[2], Symbol):
        head, body = clause[:3], clause[3:]
    elif len(clause) >= 2 and isinstance(clause[1], Symbol):
        head, body = clause[:2], clause[2:]
    else:
        return [clause[0], *(walk_fn(x, scope, ctx) for x in clause[1:])]

    inner = scope.extend(head[-1])
    return [*head, *(walk_fn(x, inner, ctx) for x in body)]


def walk_finally(clause: list, scope: Scope, ctx: HoistContext, walk_fn: WalkFn) -> SExpression:
    sym, *body = clause
    return [sym, *(walk_fn(x, scope, ctx) for x in body)]
