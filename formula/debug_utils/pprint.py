"""Rendering of forms back to source text, for inspecting expansions.

    print(mx(read("(cell= (+ a 1))")))
    ((formula (fn* [dep__5f0c2a1e_1] (+ dep__5f0c2a1e_1 1))) a)
"""

import json
import logging
import pprint
import re
from typing import Optional

from formula import SExpression
from formula.hoisting.hoist import macroexpand_all
from formula.types.collections import MapLiteral, SetLiteral, Vector, is_call_form
from formula.types.environment import HoistEnvironment
from formula.types.symbol import Symbol

logger = logging.getLogger(__name__)

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_KEYWORD = "\033[95m"
COLOR_ALIAS = "\033[92m"
COLOR_SPECIAL_FORM = "\033[90m"
COLOR_STRING = "\033[93m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 64,
    "color": False,
}

SPECIAL_FORMS = {"def", "fn*", "let*", "loop*", "letfn*", "if", "do", "try", "catch", "finally", "quote"}

ALIAS_RE = re.compile(r".+__[0-9a-f]{8}_\d+")

READER_PREFIXES = {
    "quote": "'",
    "unquote": "~",
    "unquote-splicing": "~@",
    "deref": "@",
}


# ----------------- Colorize utility -----------------
def colorize(obj, options: dict = DEFAULT_OPTIONS) -> str:
    if isinstance(obj, Symbol):
        name = str(obj)
        if not options.get("color", False):
            return name
        if obj.is_keyword:
            return f"{COLOR_KEYWORD}{name}{RESET}"
        if ALIAS_RE.fullmatch(name):
            return f"{COLOR_ALIAS}{name}{RESET}"
        if name in SPECIAL_FORMS:
            return f"{COLOR_SPECIAL_FORM}{name}{RESET}"
        return f"{COLOR_SYMBOL}{name}{RESET}"
    if isinstance(obj, str):
        text = json.dumps(obj)
        return f"{COLOR_STRING}{text}{RESET}" if options.get("color", False) else text
    if obj is None:
        return "nil"
    if isinstance(obj, bool):
        return "true" if obj else "false"
    return str(obj)


def _visible_len(text: str) -> int:
    return len(re.sub(r"\033\[\d+m", "", text))


# ----------------- Pretty printer -----------------
def format_form(
    expr: SExpression,
    indent: int = 0,
    options: Optional[dict] = None,
    _current_depth: int = 0,
) -> str:
    if options is None:
        options = DEFAULT_OPTIONS

    if _current_depth >= options.get("max_depth", 64):
        return "…"

    if is_call_form(expr):
        if not expr:
            return "()"
        head = expr[0]
        if isinstance(head, Symbol) and head.id in READER_PREFIXES and len(expr) == 2:
            inner = format_form(expr[1], indent, options, _current_depth + 1)
            return READER_PREFIXES[head.id] + inner
        return _format_seq("(", ")", expr, indent, options, _current_depth)

    if isinstance(expr, Vector):
        return _format_seq("[", "]", expr, indent, options, _current_depth)

    if isinstance(expr, SetLiteral):
        return _format_seq("#{", "}", expr, indent, options, _current_depth)

    if isinstance(expr, MapLiteral):
        return _format_seq("{", "}", expr.flat(), indent, options, _current_depth)

    return colorize(expr, options)


def _format_seq(
    open_: str, close: str, items: list, indent: int, options: dict, _current_depth: int
) -> str:
    if not items:
        return open_ + close
    parts = [format_form(e, indent + 1, options, _current_depth + 1) for e in items]

    single_line = open_ + " ".join(parts) + close
    if _visible_len(single_line) + indent * 2 <= options.get("max_line_length", 80):
        return single_line

    aligned_lines = [open_ + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += close
    return "\n".join(aligned_lines)


def mx(form: SExpression, env: Optional[HoistEnvironment] = None, options: Optional[dict] = None) -> str:
    """Expand all macros in form and render the result as code."""
    return format_form(macroexpand_all(form, env), options=options)


def mx2(form: SExpression, env: Optional[HoistEnvironment] = None) -> str:
    """Expand all macros in form and render the result as data."""
    return pprint.pformat(macroexpand_all(form, env))


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError as ex:
        logger.warning("ignoring malformed printer options: %s", ex)
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        logger.warning("ignoring printer options that are not a JSON object")
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
