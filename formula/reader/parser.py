"""
  Reader for formula source text

- Streaming, lazy parsing
- Emits Python values:

    - nil -> None, true/false -> bool
    - (a b) -> list (call form)
    - [a b] -> Vector
    - {a b} -> MapLiteral of (key, value) pairs
    - #{a b} -> SetLiteral
    - symbols and :keywords -> Symbol
    - strings -> str, \\c characters -> str
    - numbers -> int/float; ratios such as 1/2 are rejected
    - 'x -> (quote x), `x -> (quasiquote x), ~x -> (unquote x),
      ~@x -> (unquote-splicing x), @x -> (deref x), #'x -> (var x)
    - #_x discards the next form
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from formula import SExpression
from formula.errors import FormulaSyntaxError
from formula.types.collections import MapLiteral, SetLiteral, Vector
from formula.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<prefix>~@|#'|['`~@])"  # quote, syntax-quote, unquote(-splicing), deref, var
    r"|(?P<discard>#_)"  # discard next form
    r"|(?P<set_open>#\{)"  # set literal
    r"|(?P<open>[(\[{])"
    r"|(?P<close>[)\]}])"
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<char>\\(?:newline|space|tab|return|.))"  # character literals, named or single-char
    r"|(?P<symbol>[^\s,()\[\]{}\";'`~@]+)"  # fallback: symbols, keywords, numbers
)

WHITESPACE_RE = re.compile(r"[\s,]+")

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
RATIO_RE = re.compile(r"[+-]?\d+/\d+")

NAMED_CHARS: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "tab": "\t",
    "return": "\r",
}

PREFIX_FORMS: dict[str, Symbol] = {
    "'": Symbol("quote"),
    "`": Symbol("quasiquote"),
    "~": Symbol("unquote"),
    "~@": Symbol("unquote-splicing"),
    "@": Symbol("deref"),
    "#'": Symbol("var"),
}

CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}", "#{": "}"}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        ws = WHITESPACE_RE.match(source, pos)
        if ws:
            pos = ws.end()
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise FormulaSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        kind = m.lastgroup
        if kind == "comment":
            continue
        yield kind, m.group(kind)


def _read_string(token: str) -> str:
    body = token[1:-1]
    return re.sub(r"\\(.)", lambda m: STRING_ESCAPES.get(m.group(1), m.group(1)), body)


def _read_atom(token: str) -> SExpression:
    if token == "nil":
        return None
    if token == "true":
        return True
    if token == "false":
        return False
    if INT_RE.fullmatch(token):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    if RATIO_RE.fullmatch(token):
        raise FormulaSyntaxError(f"Ratio literals are not supported: {token}")
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def _parse_until(self, opener: str) -> list[SExpression]:
        closer = CLOSERS[opener]
        items: list[SExpression] = []
        while True:
            tok_type, tok_val = self.peek()
            if tok_type is None:
                raise FormulaSyntaxError(f"Unmatched '{opener}'")
            if tok_type == "close":
                self.advance()
                if tok_val != closer:
                    raise FormulaSyntaxError(f"Expected '{closer}' to close '{opener}', got '{tok_val}'")
                return items
            if tok_type == "discard":
                self.advance()
                self._parse_required()
                continue
            items.append(self._parse_required())

    def _parse_required(self) -> SExpression:
        if self.peek()[0] is None:
            raise FormulaSyntaxError("Unexpected end of input")
        return self.parse_expr()

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            return _read_atom(tok_val)

        if tok_type == "prefix":
            return [PREFIX_FORMS[tok_val], self._parse_required()]

        if tok_type == "discard":
            self._parse_required()
            return self.parse_expr()

        if tok_type == "open":
            items = self._parse_until(tok_val)
            if tok_val == "(":
                return items
            if tok_val == "[":
                return Vector(items)
            if len(items) % 2 != 0:
                raise FormulaSyntaxError("Map literal must contain an even number of forms")
            return MapLiteral.from_flat(items)

        if tok_type == "set_open":
            return SetLiteral(self._parse_until("#{"))

        if tok_type == "string":
            return _read_string(tok_val)

        if tok_type == "char":
            val = tok_val[1:]  # strip off "\"
            if len(val) == 1:
                return val
            return NAMED_CHARS[val]

        if tok_type == "close":
            raise FormulaSyntaxError(f"Unexpected '{tok_val}'")

        raise FormulaSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            if tok_type == "discard":
                self.advance()
                self._parse_required()
                continue
            yield self.parse_expr()


def read_all(source: str) -> Iterator[SExpression]:
    return TokenStream(lex(source)).parse_all()


def read(source: str) -> SExpression:
    """Read exactly one form from ``source``."""
    forms = list(read_all(source))
    if len(forms) != 1:
        raise FormulaSyntaxError(f"Expected exactly one form, found {len(forms)}")
    return forms[0]
