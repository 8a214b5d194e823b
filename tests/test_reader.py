import pytest
from hypothesis import given, strategies as st

from formula.errors import FormulaSyntaxError
from formula.reader.parser import lex, read, read_all
from formula.types.collections import MapLiteral, SetLiteral, Vector
from formula.types.symbol import Symbol

S = Symbol


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("(a b)", [("open", "("), ("symbol", "a"), ("symbol", "b"), ("close", ")")]),
        ("[a]", [("open", "["), ("symbol", "a"), ("close", "]")]),
        ("#{1}", [("set_open", "#{"), ("symbol", "1"), ("close", "}")]),
        ("'x", [("prefix", "'"), ("symbol", "x")]),
        ("`y", [("prefix", "`"), ("symbol", "y")]),
        ("~z", [("prefix", "~"), ("symbol", "z")]),
        ("~@w", [("prefix", "~@"), ("symbol", "w")]),
        ("@c", [("prefix", "@"), ("symbol", "c")]),
        ("#'v", [("prefix", "#'"), ("symbol", "v")]),
        ('"hello"', [("string", '"hello"')]),
        ("\\a", [("char", "\\a")]),
        ("#_x y", [("discard", "#_"), ("symbol", "x"), ("symbol", "y")]),
        ("; comment\n a, b", [("symbol", "a"), ("symbol", "b")]),
    ],
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", None),
        ("true", True),
        ("false", False),
        ("123", 123),
        ("-45", -45),
        ("3.5", 3.5),
        ("1e3", 1000.0),
        ("-", S("-")),
        (":kw", S(":kw")),
        ("cljs.core/+", S("cljs.core/+")),
        ('"a\\nb"', "a\nb"),
        ('"say \\"hi\\""', 'say "hi"'),
        ("\\space", " "),
        ("\\x", "x"),
        ("'a", [S("quote"), S("a")]),
        ("@c", [S("deref"), S("c")]),
        ("~x", [S("unquote"), S("x")]),
        ("~@xs", [S("unquote-splicing"), S("xs")]),
        ("#'f", [S("var"), S("f")]),
        ("`(a ~b)", [S("quasiquote"), [S("a"), [S("unquote"), S("b")]]]),
        ("()", []),
        ("[]", Vector()),
    ],
)
def test_parser(source, expected):
    assert read(source) == expected


def test_collections_keep_their_kind():
    form = read("(a [b c] {:k 1, d e} #{f g})")
    assert form == [
        S("a"),
        Vector([S("b"), S("c")]),
        MapLiteral([(S(":k"), 1), (S("d"), S("e"))]),
        SetLiteral([S("f"), S("g")]),
    ]
    assert type(form) is list
    assert isinstance(form[1], Vector)
    assert isinstance(form[2], MapLiteral)
    assert isinstance(form[3], SetLiteral)


def test_map_keys_are_never_merged():
    assert read("{1 :one true :yes 0 a false b}") == MapLiteral(
        [(1, S(":one")), (True, S(":yes")), (0, S("a")), (False, S("b"))]
    )


def test_map_keys_may_be_collections():
    assert read("{[x y] :pt 'a 1}") == MapLiteral(
        [(Vector([S("x"), S("y")]), S(":pt")), ([S("quote"), S("a")], 1)]
    )


def test_nested_lists():
    assert read("((a b) [(c)])") == [[S("a"), S("b")], Vector([[S("c")]])]


def test_read_all_and_discard():
    assert list(read_all("a #_ignored (b) #_(c d)")) == [S("a"), [S("b")]]
    assert read("[1 #_2 3]") == Vector([1, 3])


@pytest.mark.parametrize(
    "source",
    [
        "(a b",
        "[a)",
        ")",
        "{a}",
        "1/2",
        "(+ x -3/4)",
        "'",
        "a b",
        "",
    ],
)
def test_syntax_errors(source):
    with pytest.raises(FormulaSyntaxError):
        read(source)


_names = st.from_regex(r"[a-z][a-z0-9\-?!*]{0,8}", fullmatch=True).filter(
    lambda s: s not in ("nil", "true", "false")
)


@given(_names)
def test_symbols_read_back(name):
    assert read(name) == Symbol(name)


@given(st.integers())
def test_integers_read_back(n):
    assert read(str(n)) == n


@given(st.lists(_names, max_size=6))
def test_vectors_of_symbols(names):
    assert read("[" + " ".join(names) + "]") == Vector(Symbol(n) for n in names)
