"""Lexical scope tracking for the hoisting walker.

A Scope is the set of names bound by enclosing forms at one point of the
walk. It is immutable: binding forms derive a new Scope and pass it down,
so siblings never see each other's locals.
"""

from __future__ import annotations

from typing import Iterable

from formula.types.symbol import Symbol


class Scope:
    __slots__ = ("names",)

    def __init__(self, names: Iterable[Symbol] = ()):
        self.names: frozenset[Symbol] = frozenset(names)

    def extend(self, *names: Symbol) -> Scope:
        if not names:
            return self
        return Scope(self.names.union(names))

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)

    def __eq__(self, other) -> bool:
        return isinstance(other, Scope) and self.names == other.names

    def __hash__(self) -> int:
        return hash(self.names)

    def __repr__(self) -> str:
        return f"Scope({sorted(str(n) for n in self.names)})"


EMPTY_SCOPE = Scope()
