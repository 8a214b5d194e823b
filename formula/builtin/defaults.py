from formula.builtin import cell_macros, macro_builtin
from formula.types.environment import HoistEnvironment
from formula.types.macro_environment import MacroEnvironment


def default_macros() -> MacroEnvironment:
    macros = MacroEnvironment()
    macro_builtin.register(macros)
    cell_macros.register(macros)
    return macros


def default_environment(**kwargs) -> HoistEnvironment:
    """A HoistEnvironment with the builtin and formula cell macros registered."""
    kwargs.setdefault("macros", default_macros())
    return HoistEnvironment(**kwargs)
