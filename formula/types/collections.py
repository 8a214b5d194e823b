"""Literal collection forms.

Call forms are plain Python lists. Vectors, set literals and map literals are
list subclasses so they keep their written order, but a Vector never compares
equal to a call form (or to a SetLiteral) with the same elements.

A MapLiteral holds (key, value) pairs rather than a dict: keys may be any
form, including collections, and keys Python would merge (0 and false) stay
distinct.
"""

from __future__ import annotations

from typing import Iterable


class _TaggedList(list):
    __slots__ = ()

    def __eq__(self, other):
        return type(other) is type(self) and list.__eq__(self, other)

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({list.__repr__(self)})"


class Vector(_TaggedList):
    """``[a b c]``"""
    __slots__ = ()


class SetLiteral(_TaggedList):
    """``#{a b c}``, elements kept in written order."""
    __slots__ = ()


class MapLiteral(_TaggedList):
    """``{k1 v1 k2 v2}`` as [(k1, v1), (k2, v2)], in written order."""
    __slots__ = ()

    @classmethod
    def from_flat(cls, items: Iterable) -> MapLiteral:
        items = list(items)
        return cls(zip(items[::2], items[1::2]))

    def flat(self) -> list:
        return [x for pair in self for x in pair]


def is_call_form(form) -> bool:
    # The literal collections subclass list; only a plain list is a call form
    return type(form) is list
