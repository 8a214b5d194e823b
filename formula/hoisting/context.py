"""Per-call accumulator for one hoist invocation."""

from __future__ import annotations

import logging
import uuid
from itertools import count
from typing import Optional

from formula import SExpression
from formula.config import get_alias_prefix
from formula.types.environment import HoistEnvironment
from formula.types.symbol import Symbol

logger = logging.getLogger(__name__)


class HoistContext:
    """
    Records what the walker pulls out of an expression.

    - hoisted: free symbol -> alias. Hoisting the same symbol again returns
      the alias it already has.
    - passthrough: alias -> argument form that is carried verbatim (quoted
      data, unquoted expressions). These come first in the parameter list.

    Aliases embed a random per-context token, so two hoist calls never
    produce the same alias.
    """

    __slots__ = ("env", "hoisted", "passthrough", "prefix", "_token", "_counter")

    def __init__(self, env: HoistEnvironment, prefix: Optional[str] = None):
        self.env: HoistEnvironment = env
        self.hoisted: dict[Symbol, Symbol] = {}
        self.passthrough: dict[Symbol, SExpression] = {}
        self.prefix: str = prefix or get_alias_prefix()
        self._token: str = uuid.uuid4().hex[:8]
        self._counter = count(1)

    def fresh_alias(self) -> Symbol:
        return Symbol(f"{self.prefix}__{self._token}_{next(self._counter)}")

    def hoist(self, symbol: Symbol) -> Symbol:
        alias = self.hoisted.get(symbol)
        if alias is None:
            alias = self.hoisted[symbol] = self.fresh_alias()
            logger.debug("hoisted %s as %s", symbol, alias)
        return alias

    def pass_through(self, form: SExpression) -> Symbol:
        alias = self.fresh_alias()
        self.passthrough[alias] = form
        logger.debug("passing %r through as %s", form, alias)
        return alias

    def parameters(self) -> list[Symbol]:
        return [*self.passthrough.keys(), *self.hoisted.values()]

    def arguments(self) -> list[SExpression]:
        return [*self.passthrough.values(), *self.hoisted.keys()]
