from __future__ import annotations

import logging

from macroeval import ConfigValue
from macroeval.macros.arguments import expect_arity, static_arguments, string_argument
from macroeval.reader.parser import NodePath
from macroeval.types.state import MacroState, owning_package
from macroeval.types.undefined import UNDEFINED

logger = logging.getLogger(__name__)

MACRO_NAMES = {"package": "getConfig", "own": "getOwnConfig", "global": "getGlobalConfig"}


def get_config(path: NodePath, state: MacroState, mode: str) -> ConfigValue:
    """Configuration visible to the calling file.

    mode "package": getConfig(name), the user config of the named package.
    mode "own":     getOwnConfig(), the user config of the owning package.
    mode "global":  getGlobalConfig(), the global config.
    Missing configs evaluate to undefined.
    """
    if mode not in MACRO_NAMES:
        raise ValueError(f"unknown config mode {mode!r}")
    macro = MACRO_NAMES[mode]
    args = static_arguments(path, state, macro)
    options = state.options

    if mode == "global":
        expect_arity(args, 0, macro)
        return options.global_config

    if mode == "own":
        expect_arity(args, 0, macro)
        root = owning_package(state).root
    else:
        expect_arity(args, 1, macro)
        name = string_argument(args, 0, macro)
        pkg = options.package_named(name)
        if pkg is None:
            logger.debug("getConfig(%r): no such package", name)
            return UNDEFINED
        root = pkg.root

    config = options.config_for(root)
    return UNDEFINED if config is None else config


def global_config(state: MacroState) -> ConfigValue:
    return state.options.global_config
