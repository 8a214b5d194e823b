import pytest

from formula.types.collections import MapLiteral, SetLiteral, Vector
from formula.types.environment import HoistEnvironment
from formula.types.macro_environment import MacroEnvironment
from formula.types.symbol import Symbol

S = Symbol


def inc_macro(args, env):
    """(inc x) -> (+ x 1)"""
    return [S("+"), args[0], 1]


def wrapinc_macro(args, env):
    """(wrapinc y) -> (inc y)"""
    return [S("inc"), args[0]]


# -------------------------
# Fixtures
# -------------------------

@pytest.fixture
def macro_env():
    macros = MacroEnvironment()
    macros.define_macro(S("inc"), inc_macro)
    macros.define_macro(S("wrapinc"), wrapinc_macro)
    return macros


@pytest.fixture
def base_env(macro_env):
    return HoistEnvironment(macros=macro_env)


# -------------------------
# Head-position expansion
# -------------------------

def test_simple_macro_expansion(macro_env, base_env):
    assert macro_env.expand_1([S("inc"), 5], base_env) == [S("+"), 5, 1]


def test_expand_1_is_a_single_step(macro_env, base_env):
    assert macro_env.expand_1([S("wrapinc"), 10], base_env) == [S("inc"), 10]


def test_non_macro_forms_are_returned_unchanged(macro_env, base_env):
    form = [S("f"), 1]
    assert macro_env.expand_1(form, base_env) is form
    assert macro_env.expand_1(S("inc"), base_env) == S("inc")
    assert macro_env.expand_1([], base_env) == []
    assert macro_env.expand_1(Vector([S("inc"), 1]), base_env) == Vector([S("inc"), 1])


def test_head_expansion_reaches_fixpoint(macro_env, base_env):
    assert macro_env.macro_expand_head([S("wrapinc"), 10], base_env) == [S("+"), 10, 1]


def test_head_expansion_leaves_arguments_alone(macro_env, base_env):
    form = [S("wrapinc"), [S("inc"), 1]]
    assert macro_env.macro_expand_head(form, base_env) == [S("+"), [S("inc"), 1], 1]


def test_local_heads_are_not_macros(macro_env, base_env):
    nested = base_env.extend([S("inc")])
    form = [S("inc"), 1]
    assert macro_env.expand_1(form, nested) is form


# -------------------------
# Interop sugar
# -------------------------

@pytest.mark.parametrize(
    "form, expected",
    [
        ([S(".-value"), S("el")], [S("."), S("el"), S("-value")]),
        ([S(".log"), S("js/console"), S("x")], [S("."), S("js/console"), S("log"), S("x")]),
        ([S("Date."), 1, 2], [S("new"), S("Date"), 1, 2]),
        ([S("goog.Uri."), S("u")], [S("new"), S("goog.Uri"), S("u")]),
        ([S("js/Date.")], [S("new"), S("js/Date")]),
    ],
)
def test_interop_sugar_expands(macro_env, base_env, form, expected):
    assert macro_env.expand_1(form, base_env) == expected


@pytest.mark.parametrize(
    "form",
    [
        [S("."), S("el"), S("-value")],
        [S(".."), S("a"), S("b")],
        [S(".-value")],
        [S(":k"), S("m")],
        [S("new"), S("Date")],
    ],
)
def test_forms_that_are_not_interop_sugar(macro_env, base_env, form):
    assert macro_env.expand_1(form, base_env) is form


def test_local_heads_are_not_interop_sugar(macro_env):
    env = HoistEnvironment(macros=macro_env, locals=[S("Point.")])
    form = [S("Point."), 1]
    assert macro_env.expand_1(form, env) is form


# -------------------------
# Full expansion
# -------------------------

def test_macro_recursive_nested_lists(macro_env, base_env):
    expr = [[S("inc"), 1], [S("inc"), 2]]
    assert macro_env.macro_expand_all(expr, base_env) == [[S("+"), 1, 1], [S("+"), 2, 1]]


def test_expansion_inside_literal_collections(macro_env, base_env):
    expr = Vector([[S("inc"), 1], SetLiteral([[S("wrapinc"), 2]]), MapLiteral([(S(":k"), [S("inc"), 3])])])
    assert macro_env.macro_expand_all(expr, base_env) == Vector(
        [
            [S("+"), 1, 1],
            SetLiteral([[S("+"), 2, 1]]),
            MapLiteral([(S(":k"), [S("+"), 3, 1])]),
        ]
    )


def test_expansion_does_not_descend_into_quote(macro_env, base_env):
    expr = [S("list"), [S("quote"), [S("inc"), 1]], [S("inc"), 2]]
    assert macro_env.macro_expand_all(expr, base_env) == [
        S("list"),
        [S("quote"), [S("inc"), 1]],
        [S("+"), 2, 1],
    ]


def test_transformer_errors_propagate(macro_env, base_env):
    def broken(args, env):
        raise ValueError("bad expansion")

    macro_env.define_macro(S("broken"), broken)
    with pytest.raises(ValueError, match="bad expansion"):
        macro_env.macro_expand_all([S("f"), [S("broken")]], base_env)


def test_transformer_receives_environment(macro_env, base_env):
    seen = []
    macro_env.define_macro(S("spy"), lambda args, env: seen.append(env) or 1)
    macro_env.expand_1([S("spy")], base_env)
    assert seen == [base_env]


# -------------------------
# Gensym uniqueness
# -------------------------

def test_gen_sym_uniqueness(macro_env):
    s1 = macro_env.gen_sym()
    s2 = macro_env.gen_sym()
    s3 = macro_env.gen_sym("c")
    assert len({s1, s2, s3}) == 3
    assert s1.id.startswith("G__")
    assert s3.id.startswith("c__")
