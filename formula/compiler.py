from __future__ import annotations

from typing import Iterable, Optional

from formula import SExpression
from formula.builtin.defaults import default_macros
from formula.hoisting.hoist import cell_form, hoist
from formula.reader.parser import read
from formula.types.environment import HoistEnvironment
from formula.types.macro_environment import MacroEnvironment
from formula.types.symbol import Symbol


class Compiler:
    """
    Reads formula source and hoists it against one HoistEnvironment.

    Every method accepts either source text or an already-read form. The
    environment (macros, refers, core namespaces) is kept across calls; each
    hoist still gets its own context.
    """

    def __init__(
        self,
        macros: Optional[MacroEnvironment] = None,
        locals: Iterable[Symbol | str] = (),
        **env_options,
    ):
        self.macros: MacroEnvironment = macros if macros is not None else default_macros()
        self.env: HoistEnvironment = HoistEnvironment(
            macros=self.macros,
            locals=[Symbol(n) if isinstance(n, str) else n for n in locals],
            **env_options,
        )

    @staticmethod
    def read(code: str | SExpression) -> SExpression:
        return read(code) if isinstance(code, str) else code

    def with_locals(self, *names: Symbol | str) -> Compiler:
        """A compiler for code nested inside bindings of ``names``."""
        nested = Compiler.__new__(Compiler)
        nested.macros = self.macros
        nested.env = self.env.extend(Symbol(n) if isinstance(n, str) else n for n in names)
        return nested

    def hoist(self, code: str | SExpression) -> tuple[list, list[SExpression]]:
        return hoist(self.read(code), self.env)

    def cell(self, code: str | SExpression) -> list:
        return cell_form(self.read(code), self.env)

    def macroexpand(self, code: str | SExpression) -> SExpression:
        return self.macros.macro_expand_all(self.read(code), self.env)

    def macroexpand_1(self, code: str | SExpression) -> SExpression:
        return self.macros.expand_1(self.read(code), self.env)
