"""Hoisting of formula expressions.

hoist() splits an expression into a closure over its dependencies and the
list of dependency expressions, in parameter order:

    (+ a (* a b))  =>  (fn* [dep__1 dep__2] (+ dep__1 (* dep__1 dep__2)))
                       [a b]

The reactive runtime calls the closure with the current values of the
arguments, and again whenever one of them changes. cell_form() wraps that
pair in the runtime call ((formula closure) args...).
"""

from __future__ import annotations

import logging
from typing import Optional

from formula import SExpression
from formula.hoisting.context import HoistContext
from formula.hoisting.walker import walk
from formula.types.collections import Vector
from formula.types.environment import HoistEnvironment
from formula.types.scope import EMPTY_SCOPE
from formula.types.symbol import Symbol

logger = logging.getLogger(__name__)

FN = Symbol("fn*")
FORMULA = Symbol("formula")


def _default_environment() -> HoistEnvironment:
    # Lazy import: the cell macros themselves call back into hoist
    from formula.builtin.defaults import default_environment
    return default_environment()


def hoist(
    expr: SExpression, env: Optional[HoistEnvironment] = None
) -> tuple[list, list[SExpression]]:
    """Return (closure, arguments) for ``expr``.

    Raises UnsupportedFormError if ``expr`` contains a definitional form;
    nothing is returned in that case.
    """
    if env is None:
        env = _default_environment()

    ctx = HoistContext(env)
    body = walk(expr, EMPTY_SCOPE, ctx)
    params, args = ctx.parameters(), ctx.arguments()
    logger.debug(
        "hoisted %d dependencies and %d literals",
        len(ctx.hoisted),
        len(ctx.passthrough),
    )
    return [FN, Vector(params), body], args


def cell_form(expr: SExpression, env: Optional[HoistEnvironment] = None) -> list:
    closure, args = hoist(expr, env)
    return [[FORMULA, closure], *args]


def macroexpand_all(expr: SExpression, env: Optional[HoistEnvironment] = None) -> SExpression:
    """Fully expand ``expr`` without hoisting, for inspecting what the walker sees."""
    if env is None:
        env = _default_environment()
    return env.macros.macro_expand_all(expr, env)
