"""Compile-time environment for hoisting.

A HoistEnvironment describes the code *around* a formula expression: the
macros in effect, the locals bound by enclosing code (those are dependencies,
never built-ins), which namespace an unqualified name is referred from, which
namespaces count as always-available core, and which names are special forms.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from formula import SExpression
from formula.builtin.core_names import CORE_REFERS, SPECIAL_FORMS
from formula.config import get_core_namespaces
from formula.types.macro_environment import MacroEnvironment
from formula.types.symbol import Symbol


class HoistEnvironment:
    __slots__ = (
        "macros",
        "locals",
        "outer",
        "refers",
        "core_namespaces",
        "special_forms",
    )

    def __init__(
        self,
        macros: Optional[MacroEnvironment] = None,
        locals: Iterable[Symbol] = (),
        outer: Optional[HoistEnvironment] = None,
        refers: Optional[Mapping[Symbol, str]] = None,
        core_namespaces: Optional[Iterable[str]] = None,
        special_forms: Optional[Iterable[Symbol]] = None,
    ):
        self.outer: HoistEnvironment | None = outer
        self.locals: frozenset[Symbol] = frozenset(locals)
        if outer is not None:
            # Children share everything but their locals with the root
            self.macros = outer.macros if macros is None else macros
            self.refers = outer.refers if refers is None else dict(refers)
            self.core_namespaces = (
                outer.core_namespaces if core_namespaces is None else frozenset(core_namespaces)
            )
            self.special_forms = (
                outer.special_forms if special_forms is None else frozenset(special_forms)
            )
            return

        self.macros: MacroEnvironment = macros if macros is not None else MacroEnvironment()
        self.refers: dict[Symbol, str] = dict(CORE_REFERS if refers is None else refers)
        self.core_namespaces: frozenset[str] = (
            get_core_namespaces() if core_namespaces is None else frozenset(core_namespaces)
        )
        self.special_forms: frozenset[Symbol] = frozenset(
            SPECIAL_FORMS if special_forms is None else special_forms
        )

    def extend(self, names: Iterable[Symbol]) -> HoistEnvironment:
        """Environment for code nested inside a binding of ``names``."""
        return HoistEnvironment(locals=names, outer=self)

    def find(self, symbol: Symbol) -> Optional[HoistEnvironment]:
        env: Optional[HoistEnvironment] = self
        while env is not None:
            if symbol in env.locals:
                return env
            env = env.outer
        return None

    def is_local(self, symbol: Symbol) -> bool:
        return self.find(symbol) is not None

    def resolve_namespace(self, symbol: Symbol) -> Optional[str]:
        ns = symbol.namespace
        if ns is not None:
            return ns
        # Locals shadow referred names
        if self.is_local(symbol):
            return None
        return self.refers.get(symbol)

    def is_core(self, symbol: Symbol) -> bool:
        return self.resolve_namespace(symbol) in self.core_namespaces

    def is_special(self, symbol: Symbol) -> bool:
        return symbol in self.special_forms

    def expand_1(self, form: SExpression) -> SExpression:
        return self.macros.expand_1(form, self)

    def __repr__(self) -> str:
        chain = []
        env = self
        while env is not None:
            chain.append("{" + ", ".join(sorted(str(s) for s in env.locals)) + "}")
            env = env.outer
        return f"<HoistEnvironment locals: {' -> '.join(chain)}>"
