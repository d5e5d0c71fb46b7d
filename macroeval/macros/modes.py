from __future__ import annotations

from macroeval.macros.arguments import expect_arity, static_arguments
from macroeval.macros.get_config import global_config
from macroeval.reader.parser import NodePath
from macroeval.types.state import MacroState, owning_package


def is_developing_app(path: NodePath, state: MacroState) -> bool:
    """isDevelopingApp(): the app itself is among the packages under development."""
    expect_arity(static_arguments(path, state, "isDevelopingApp"), 0, "isDevelopingApp")
    root = state.options.app_package_root
    return bool(root) and state.options.is_developing(root)


def is_developing_this_package(path: NodePath, state: MacroState) -> bool:
    """isDevelopingThisPackage(): the package owning this file is under development."""
    expect_arity(static_arguments(path, state, "isDevelopingThisPackage"), 0, "isDevelopingThisPackage")
    return state.options.is_developing(owning_package(state).root)


def is_testing(path: NodePath, state: MacroState) -> bool:
    """isTesting(): the `isTesting` flag of the macros module's global config."""
    expect_arity(static_arguments(path, state, "isTesting"), 0, "isTesting")
    g = global_config(state)
    e = g.get(state.options.macros_module) if isinstance(g, dict) else None
    return bool(isinstance(e, dict) and e.get("isTesting"))
