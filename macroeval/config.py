from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Iterable, List

from macroeval.types.state import DEFAULT_MACROS_MODULE, MacroOptions

logger = logging.getLogger(__name__)


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_app_root() -> str | None:
    raw = os.environ.get('MACROS_APP_ROOT', '').strip()
    return raw or None


def get_global_config() -> dict:
    raw = os.environ.get('MACROS_GLOBAL_CONFIG')
    if not raw:
        return {}
    config = json.loads(raw)
    if not isinstance(config, dict):
        raise ValueError('MACROS_GLOBAL_CONFIG must hold a JSON object')
    return config


def options_from_env() -> MacroOptions:
    options = MacroOptions(
        app_package_root=get_app_root(),
        is_developing_package_roots=[str(p) for p in paths_from_env('MACROS_DEVELOPING_ROOTS', [])],
        global_config=get_global_config(),
        macros_module=os.environ.get('MACROS_MODULE') or DEFAULT_MACROS_MODULE,
    )
    logger.debug("macro options from environment: %r", options)
    return options
