"""Registry of macro functions recognised at compile time.

Maps the exported names of the macros module to the handlers that compute
their values. A call matches only when its callee traces back to an import of
exactly that name from exactly that module; the first matching entry wins.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from macroeval import ConfigValue
from macroeval.macros.dependency_satisfies import dependency_satisfies
from macroeval.macros.get_config import get_config
from macroeval.macros.modes import is_developing_app, is_developing_this_package, is_testing
from macroeval.macros.module_exists import module_exists
from macroeval.reader.bindings import references_import
from macroeval.reader.parser import NodePath
from macroeval.types.state import MacroState

MacroHandler = Callable[[NodePath, MacroState], ConfigValue]

MACRO_HANDLERS: dict[str, MacroHandler] = {
    "dependencySatisfies": dependency_satisfies,
    "moduleExists": module_exists,
    "getConfig": partial(get_config, mode="package"),
    "getOwnConfig": partial(get_config, mode="own"),
    "getGlobalConfig": partial(get_config, mode="global"),
    "isDevelopingApp": is_developing_app,
    "isDevelopingThisPackage": is_developing_this_package,
    "isTesting": is_testing,
}


def macro_name(callee: NodePath, state: MacroState) -> Optional[str]:
    """Name of the macro `callee` refers to, or None."""
    module = state.options.macros_module
    for name in MACRO_HANDLERS:
        if references_import(callee, module, name):
            return name
    return None


def is_macro_call(path: NodePath, state: MacroState) -> bool:
    if path.type != "call_expression":
        return False
    callee = path.get("callee")
    return isinstance(callee, NodePath) and macro_name(callee, state) is not None
