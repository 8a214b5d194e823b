import pytest

from formula.compiler import Compiler
from formula.builtin.defaults import default_environment
from formula.types.collections import MapLiteral, SetLiteral, Vector
from formula.types.symbol import Symbol


def _substitute(form, mapping):
    if isinstance(form, Symbol):
        return mapping.get(form, form)
    if isinstance(form, (Vector, SetLiteral)):
        return type(form)(_substitute(x, mapping) for x in form)
    if isinstance(form, MapLiteral):
        return MapLiteral((_substitute(k, mapping), _substitute(v, mapping)) for k, v in form)
    if isinstance(form, list):
        return [_substitute(x, mapping) for x in form]
    return form


@pytest.fixture
def compiler():
    """Compiler with the builtin and cell macros, no surrounding locals."""
    return Compiler()


@pytest.fixture
def env():
    return default_environment()


@pytest.fixture
def inline():
    """Apply a hoisted closure to its own argument forms, syntactically.

    inline(*hoist(expr)) gives back the expanded expression, which lets tests
    compare structure without knowing the generated alias names.
    """
    def _inline(closure, args):
        _, params, body = closure
        return _substitute(body, dict(zip(params, args)))
    return _inline
