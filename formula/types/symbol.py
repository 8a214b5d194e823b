from __future__ import annotations
import sys
from typing import Optional


class Symbol:
    """A name in a form, optionally namespace qualified as ``ns/name``.

    Symbols whose name starts with ``:`` are keywords; they read as symbols
    but are literals everywhere else.
    """

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)

    @property
    def namespace(self) -> Optional[str]:
        # "/" on its own (division) and "ns//" both need care
        ns, sep, name = self.id.partition("/")
        if not sep or not ns or not name:
            return None
        return ns

    @property
    def name(self) -> str:
        ns = self.namespace
        return self.id if ns is None else self.id[len(ns) + 1:]

    @property
    def is_keyword(self) -> bool:
        return self.id.startswith(":") and len(self.id) > 1

    def __eq__(self, other: Symbol) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id
