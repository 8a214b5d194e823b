from __future__ import annotations
import logging
import os
import re
from typing import Iterable, List

# Defaults
_DEFAULT_CORE_NAMESPACES = ["clojure.core", "cljs.core", "js"]
_DEFAULT_ALIAS_PREFIX = "dep"
_DEFAULT_LOG_LEVEL = "WARNING"


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


def names_from_env(var: str, defaults: Iterable[str]) -> List[str]:
    raw = os.environ.get(var)
    if not raw:
        return list(defaults)
    # ',' is accepted everywhere, the path separator too
    parts = re.split(f"[,{re.escape(_sep())}]", raw)
    return [p.strip() for p in parts if p.strip()]


def get_core_namespaces() -> frozenset[str]:
    return frozenset(names_from_env('FORMULA_CORE_NAMESPACES', _DEFAULT_CORE_NAMESPACES))


def get_alias_prefix() -> str:
    prefix = os.environ.get('FORMULA_ALIAS_PREFIX', '').strip()
    return prefix or _DEFAULT_ALIAS_PREFIX


def get_log_level() -> str:
    level = os.environ.get('FORMULA_LOG_LEVEL', '').strip().upper()
    # getLevelName maps a known name to its number
    if not isinstance(logging.getLevelName(level), int):
        return _DEFAULT_LOG_LEVEL
    return level
