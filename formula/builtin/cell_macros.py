"""Formula cell macros.

Call-site sugar over hoisting. Every macro here is a shallow rewrite that
ends in a call into the reactive runtime (formula, set-formula!, cell,
dosync*), which is provided by the host.

    (cell= (+ a b))  =>  ((formula (fn* [dep__1 dep__2] (+ dep__1 dep__2))) a b)
"""

from formula import SExpression
from formula.builtin.macro_builtin import check_bindings
from formula.errors import FormulaArityError, FormulaTypeError
from formula.hoisting.hoist import cell_form, hoist
from formula.types.collections import Vector
from formula.types.environment import HoistEnvironment
from formula.types.macro_environment import MacroEnvironment
from formula.types.symbol import Symbol

FORMULA = Symbol("formula")
SET_FORMULA = Symbol("set-formula!")
CELL = Symbol("cell")
CELL_EQ = Symbol("cell=")
DEF = Symbol("def")
DOT = Symbol(".")
FN_STAR = Symbol("fn*")
LET_STAR = Symbol("let*")
SET_BANG = Symbol("set!")
UPDATE = Symbol("-update")
WITH_LET = Symbol("with-let")
DOSYNC_STAR = Symbol("dosync*")


def cell_eq_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """
    (cell= expr)    => ((formula closure) args...)
    (cell= expr f)  => the same cell, with f installed as its update callback
    """
    if len(args) == 1:
        return cell_form(args[0], env)
    if len(args) == 2:
        expr, f = args
        c = env.macros.gen_sym("c")
        return [
            WITH_LET,
            Vector([c, [CELL_EQ, expr]]),
            [SET_BANG, [DOT, c, UPDATE], f],
        ]
    raise FormulaArityError("cell= expects an expression and an optional update function")


def set_cell_eq_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """(set-cell!= c expr updatefn?) => (set-formula! c closure [args...] updatefn)"""
    if len(args) not in (2, 3):
        raise FormulaArityError("set-cell!= expects a cell, an expression and an optional update function")
    c, expr, *more = args
    closure, deps = hoist(expr, env)
    return [SET_FORMULA, c, closure, Vector(deps), more[0] if more else None]


def defc_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """(defc sym doc? expr) => (def sym doc? (cell expr))"""
    if len(args) not in (2, 3):
        raise FormulaArityError("defc expects a name, an optional docstring and an expression")
    sym, *doc, expr = args
    return [DEF, sym, *doc, [CELL, expr]]


def defc_eq_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """
    (defc= sym expr)
    (defc= sym expr f)
    (defc= sym doc expr)
    (defc= sym doc expr f)
    => (def sym doc? (cell= expr f?))
    """
    if not 2 <= len(args) <= 4:
        raise FormulaArityError("defc= expects a name, an optional docstring, an expression and an optional update function")
    sym, *rest = args
    doc = []
    if len(rest) > 1 and isinstance(rest[0], str):
        doc, rest = rest[:1], rest[1:]
    if len(rest) > 2:
        raise FormulaArityError("defc= takes at most one update function")
    return [DEF, sym, *doc, [CELL_EQ, *rest]]


def formula_of_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """
    (formula-of [x y] body...) => ((formula (fn* [x y] body...)) x y)

    No walking: the body sees the listed dependencies and nothing else is hoisted.
    """
    if not args:
        raise FormulaArityError("formula-of requires a vector of dependencies")
    deps, *body = args
    if not isinstance(deps, Vector) or not all(isinstance(d, Symbol) for d in deps):
        raise FormulaTypeError("first argument must be a vector of symbols")
    return [[FORMULA, [FN_STAR, Vector(deps), *body]], *deps]


def formulet_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """
    (formulet [v (cell= (inc a)) w b] body...)
    => ((formula (fn* [v w] body...)) (cell= (inc a)) b)

    Dependency expressions are evaluated once, when the cell is created.
    """
    if not args:
        raise FormulaArityError("formulet requires a vector of binding pairs")
    bindings = check_bindings("formulet", args[0])
    names = Vector(bindings[::2])
    exprs = list(bindings[1::2])
    return [[FORMULA, [FN_STAR, names, *args[1:]]], *exprs]


def dosync_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """(dosync body...) => (dosync* (fn* [] body...))"""
    return [DOSYNC_STAR, [FN_STAR, Vector(), *args]]


def with_let_macro(args: list[SExpression], env: HoistEnvironment) -> SExpression:
    """(with-let [binding resource] body...) => (let* [binding resource] body... binding)"""
    if not args:
        raise FormulaArityError("with-let requires a [binding resource] vector")
    binding = args[0]
    if not isinstance(binding, Vector) or len(binding) != 2:
        raise FormulaTypeError(f"with-let expects a [binding resource] vector, got {binding}")
    return [LET_STAR, binding, *args[1:], binding[0]]


def register(macro_env: MacroEnvironment) -> None:
    """Register formula cell macros in the provided MacroEnvironment."""
    macro_env.define_macro(CELL_EQ, cell_eq_macro)
    macro_env.define_macro(Symbol("set-cell!="), set_cell_eq_macro)
    macro_env.define_macro(Symbol("defc"), defc_macro)
    macro_env.define_macro(Symbol("defc="), defc_eq_macro)
    macro_env.define_macro(Symbol("formula-of"), formula_of_macro)
    macro_env.define_macro(Symbol("formulet"), formulet_macro)
    macro_env.define_macro(Symbol("dosync"), dosync_macro)
    macro_env.define_macro(WITH_LET, with_let_macro)
