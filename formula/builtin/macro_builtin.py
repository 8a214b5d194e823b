"""Builtin macro transformers for formula (implemented in Python).

These expand everyday source forms into the special forms the hoisting
walker understands: let*, loop*, fn*, letfn*, if and do.
"""

from typing import Any

from formula import SExpression
from formula.errors import FormulaArityError, FormulaTypeError
from formula.types.collections import MapLiteral, SetLiteral, Vector, is_call_form
from formula.types.macro_environment import MacroEnvironment
from formula.types.symbol import Symbol

LET_STAR = Symbol("let*")
LOOP_STAR = Symbol("loop*")
FN_STAR = Symbol("fn*")
LETFN_STAR = Symbol("letfn*")
DEF = Symbol("def")
IF = Symbol("if")
DO = Symbol("do")

QUOTE = Symbol("quote")
QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")
SEQ = Symbol("seq")
CONCAT = Symbol("concat")
LIST = Symbol("list")
VEC = Symbol("vec")
SET = Symbol("set")
APPLY = Symbol("apply")
HASH_MAP = Symbol("hash-map")


def check_bindings(name: str, bindings: SExpression) -> Vector:
    if not isinstance(bindings, Vector):
        raise FormulaTypeError(f"{name} bindings must be a vector, got {bindings}")
    if len(bindings) % 2 != 0:
        raise FormulaTypeError(f"{name} bindings must appear in name-value pairs")
    return bindings


def _binding_macro(name: str, special: Symbol):
    def transformer(args: list[SExpression], env: Any) -> SExpression:
        if not args:
            raise FormulaArityError(f"{name} requires a bindings vector")
        bindings = check_bindings(name, args[0])
        return [special, bindings, *args[1:]]

    transformer.__name__ = f"{name}_macro"
    return transformer


let_macro = _binding_macro("let", LET_STAR)
loop_macro = _binding_macro("loop", LOOP_STAR)


def fn_macro(args: list[SExpression], env: Any) -> SExpression:
    """(fn name? [params] body...) or (fn name? ([params] body...)+) -> fn*"""
    rest = args[1:] if args and isinstance(args[0], Symbol) else args
    if not rest:
        raise FormulaArityError("fn requires a parameter vector or arities")
    return [FN_STAR, *args]


def letfn_macro(args: list[SExpression], env: Any) -> SExpression:
    """
    (letfn [(f [x] body...) ...] body...)
    => (letfn* [f (fn* f [x] body...) ...] body...)
    """
    if not args:
        raise FormulaArityError("letfn requires a vector of function specs")
    specs = args[0]
    if not isinstance(specs, Vector):
        raise FormulaTypeError(f"letfn function specs must be a vector, got {specs}")

    bindings = Vector()
    for spec in specs:
        if not is_call_form(spec) or not spec or not isinstance(spec[0], Symbol):
            raise FormulaTypeError(f"letfn function spec must be (name [params] body...), got {spec}")
        bindings.extend((spec[0], [FN_STAR, *spec]))
    return [LETFN_STAR, bindings, *args[1:]]


def when_macro(args: list[SExpression], env: Any) -> SExpression:
    if not args:
        raise FormulaArityError("when requires a test")
    test, *body = args
    return [IF, test, [DO, *body]]


def cond_macro(args: list[SExpression], env: Any) -> SExpression:
    """(cond t1 e1 t2 e2 ...) => (if t1 e1 (cond t2 e2 ...))"""
    if not args:
        return None
    if len(args) % 2 != 0:
        raise FormulaArityError("cond requires an even number of forms")
    test, expr, *more = args
    return [IF, test, expr, [Symbol("cond"), *more]] if more else [IF, test, expr]


def defn_macro(args: list[SExpression], env: Any) -> SExpression:
    """(defn name doc? [params] body...) => (def name (fn* name [params] body...))"""
    if len(args) < 2:
        raise FormulaArityError("defn requires a name and a function body")
    name, *rest = args
    if rest and isinstance(rest[0], str):
        rest = rest[1:]
    return [DEF, name, [FN_STAR, name, *rest]]


def _thread(args: list[SExpression], last: bool) -> SExpression:
    if not args:
        raise FormulaArityError("threading macros require an initial form")
    acc, *steps = args
    for step in steps:
        if is_call_form(step) and step:
            acc = [*step, acc] if last else [step[0], acc, *step[1:]]
        else:
            acc = [step, acc]
    return acc


def thread_first_macro(args: list[SExpression], env: Any) -> SExpression:
    return _thread(args, last=False)


def thread_last_macro(args: list[SExpression], env: Any) -> SExpression:
    return _thread(args, last=True)


# Syntax quote
#
# `(a ~b ~@c) => (seq (concat (list (quote a)) (list b) c))
#
# Nested quasiquotes raise the depth; unquotes only escape at depth 1.

def _template_items(items: list[SExpression], depth: int) -> list[SExpression]:
    parts = []
    for item in items:
        if is_call_form(item) and item and item[0] == UNQUOTE_SPLICING and depth == 1:
            parts.append(item[1])
        else:
            parts.append([LIST, _template(item, depth)])
    return parts


def _template(form: SExpression, depth: int) -> SExpression:
    if is_call_form(form):
        if not form:
            return [LIST]
        head = form[0]
        if head in (UNQUOTE, UNQUOTE_SPLICING) and len(form) == 2:
            if depth > 1:
                return [LIST, [QUOTE, head], _template(form[1], depth - 1)]
            if head == UNQUOTE:
                return form[1]
            raise FormulaTypeError("unquote-splicing must appear inside a sequence")
        if head == QUASIQUOTE and len(form) == 2:
            return [LIST, [QUOTE, QUASIQUOTE], _template(form[1], depth + 1)]
        return [SEQ, [CONCAT, *_template_items(form, depth)]]

    if isinstance(form, Vector):
        return [VEC, [CONCAT, *_template_items(form, depth)]]
    if isinstance(form, SetLiteral):
        return [SET, [CONCAT, *_template_items(form, depth)]]
    if isinstance(form, MapLiteral):
        return [APPLY, HASH_MAP, [CONCAT, *_template_items(form.flat(), depth)]]
    if isinstance(form, Symbol) and not form.is_keyword:
        return [QUOTE, form]
    return form


def quasiquote_macro(args: list[SExpression], env: Any) -> SExpression:
    if len(args) != 1:
        raise FormulaArityError("quasiquote expects exactly 1 argument")
    return _template(args[0], 1)


def register(macro_env: MacroEnvironment) -> None:
    """Register builtin macros in the provided MacroEnvironment."""
    macro_env.define_macro(Symbol("let"), let_macro)
    macro_env.define_macro(Symbol("loop"), loop_macro)
    macro_env.define_macro(Symbol("fn"), fn_macro)
    macro_env.define_macro(Symbol("letfn"), letfn_macro)
    macro_env.define_macro(Symbol("when"), when_macro)
    macro_env.define_macro(Symbol("cond"), cond_macro)
    macro_env.define_macro(Symbol("defn"), defn_macro)
    macro_env.define_macro(Symbol("->"), thread_first_macro)
    macro_env.define_macro(Symbol("->>"), thread_last_macro)
    macro_env.define_macro(QUASIQUOTE, quasiquote_macro)
