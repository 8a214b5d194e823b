import pytest

from formula.errors import FormulaArityError, FormulaTypeError
from formula.reader.parser import read
from formula.types.collections import Vector
from formula.types.symbol import Symbol

S = Symbol


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(let [a 1] a)", "(let* [a 1] a)"),
        ("(loop [i 0] (recur i))", "(loop* [i 0] (recur i))"),
        ("(fn [x] x)", "(fn* [x] x)"),
        ("(fn f ([] 1) ([x] x))", "(fn* f ([] 1) ([x] x))"),
        ("(letfn [(f [x] x)] (f 1))", "(letfn* [f (fn* f [x] x)] (f 1))"),
        ("(when t a b)", "(if t (do a b))"),
        ("(cond a 1 b 2)", "(if a 1 (if b 2))"),
        ("(defn f \"doc\" [x] x)", "(def f (fn* f [x] x))"),
        ("(-> x (f 1) g)", "(g (f x 1))"),
        ("(->> x (f 1) g)", "(g (f 1 x))"),
    ],
)
def test_expansions(compiler, source, expected):
    assert compiler.macroexpand(source) == read(expected)


def test_empty_cond_is_nil(compiler):
    assert compiler.macroexpand("(cond)") is None


def test_macroexpand_1_is_a_single_step(compiler):
    assert compiler.macroexpand_1("(cond a 1 b 2)") == read("(if a 1 (cond b 2))")


def test_expansion_reaches_nested_forms(compiler):
    assert compiler.macroexpand("[(when a b) {:k (-> x f)}]") == read("[(if a (do b)) {:k (f x)}]")


def test_quoted_forms_are_not_expanded(compiler):
    assert compiler.macroexpand("'(when a b)") == read("'(when a b)")


# -------------------------
# Syntax quote
# -------------------------

def test_syntax_quote_sequence(compiler):
    assert compiler.macroexpand("`(a ~b ~@c)") == [
        S("seq"),
        [S("concat"), [S("list"), [S("quote"), S("a")]], [S("list"), S("b")], S("c")],
    ]


def test_syntax_quote_collections(compiler):
    assert compiler.macroexpand("`[a ~b]") == [
        S("vec"),
        [S("concat"), [S("list"), [S("quote"), S("a")]], [S("list"), S("b")]],
    ]
    assert compiler.macroexpand("`#{~x}") == [S("set"), [S("concat"), [S("list"), S("x")]]]
    assert compiler.macroexpand("`{:k ~v}") == [
        S("apply"),
        S("hash-map"),
        [S("concat"), [S("list"), S(":k")], [S("list"), S("v")]],
    ]


def test_syntax_quote_literals(compiler):
    assert compiler.macroexpand("`:k") == S(":k")
    assert compiler.macroexpand("`1") == 1
    assert compiler.macroexpand("`()") == [S("list")]


def test_nested_syntax_quote_keeps_inner_unquote(compiler):
    expanded = compiler.macroexpand("``~a")
    assert expanded == [
        S("list"),
        [S("quote"), S("quasiquote")],
        [S("list"), [S("quote"), S("unquote")], [S("quote"), S("a")]],
    ]


def test_splice_outside_a_sequence_is_an_error(compiler):
    with pytest.raises(FormulaTypeError):
        compiler.macroexpand("`~@xs")


# -------------------------
# Errors
# -------------------------

@pytest.mark.parametrize(
    "source, error",
    [
        ("(let)", FormulaArityError),
        ("(let (a 1) a)", FormulaTypeError),
        ("(let [a] a)", FormulaTypeError),
        ("(fn)", FormulaArityError),
        ("(fn f)", FormulaArityError),
        ("(letfn (f))", FormulaTypeError),
        ("(letfn [f] 1)", FormulaTypeError),
        ("(when)", FormulaArityError),
        ("(cond a)", FormulaArityError),
        ("(defn f)", FormulaArityError),
        ("(->)", FormulaArityError),
        ("(quasiquote a b)", FormulaArityError),
    ],
)
def test_malformed_macro_calls(compiler, source, error):
    with pytest.raises(error):
        compiler.macroexpand(source)


def test_hoisting_expands_let_bindings(compiler):
    closure, args = compiler.hoist("(let [x (-> y inc)] x)")
    assert args == [S("y")]
    assert closure[2] == [S("let*"), Vector([S("x"), [S("inc"), closure[1][0]]]), S("x")]
