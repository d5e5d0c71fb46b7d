"""Extension context threaded through the evaluator to the macro hooks.

The evaluator never looks inside a MacroState; it only hands it to the
runtime-config hook and the macro handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Optional

from macroeval import ConfigValue
from macroeval.errors import MacroUsageError

DEFAULT_MACROS_MODULE = "@embroider/macros"


def normalize_root(root: str) -> str:
    return str(PurePath(root))


@dataclass(frozen=True)
class PackageInfo:
    """A package known to the build: its name, root directory and version."""
    name: str
    root: str
    version: str = "0.0.0"


@dataclass
class MacroOptions:
    app_package_root: Optional[str] = None
    is_developing_package_roots: list[str] = field(default_factory=list)
    # Keyed by package root.
    user_configs: dict[str, ConfigValue] = field(default_factory=dict)
    global_config: dict[str, ConfigValue] = field(default_factory=dict)
    packages: list[PackageInfo] = field(default_factory=list)
    macros_module: str = DEFAULT_MACROS_MODULE

    def package_named(self, name: str) -> Optional[PackageInfo]:
        for pkg in self.packages:
            if pkg.name == name:
                return pkg
        return None

    def is_developing(self, root: str) -> bool:
        wanted = normalize_root(root)
        return any(normalize_root(r) == wanted for r in self.is_developing_package_roots)

    def config_for(self, root: str) -> ConfigValue | None:
        wanted = normalize_root(root)
        for k, v in self.user_configs.items():
            if normalize_root(k) == wanted:
                return v
        return None


@dataclass
class MacroState:
    """Per-file state for one macro expansion pass.

    `needed_runtime_imports` maps a local identifier to a tag describing the
    runtime helper it stands for. The tag "config" marks an accessor whose
    value is deferred until run time.
    """
    filename: str
    options: MacroOptions = field(default_factory=MacroOptions)
    needed_runtime_imports: dict[str, str] = field(default_factory=dict)


def owning_package(state: MacroState) -> PackageInfo:
    """Return the known package whose root contains `state.filename`.

    The deepest root wins so nested packages shadow their parents.
    Raises MacroUsageError if no known package contains the file.
    """
    filename = PurePath(state.filename)
    best: PackageInfo | None = None
    best_depth = -1
    for pkg in state.options.packages:
        root = PurePath(pkg.root)
        if filename == root or root in filename.parents:
            depth = len(root.parts)
            if depth > best_depth:
                best, best_depth = pkg, depth
    if best is None:
        raise MacroUsageError(f"{state.filename} does not belong to any known package")
    return best
