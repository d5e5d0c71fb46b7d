"""moduleExists(specifier)

Resolves a module specifier the way a bundler would, against the file being
expanded:

    - relative specifiers ("./x", "../y") from the file's directory
    - bare specifiers ("pkg", "@scope/pkg/sub") from the known packages,
      then from node_modules directories above the file

A candidate path exists if it is a file as written, with one of the known
extensions, or as a directory index.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

from macroeval.macros.arguments import expect_arity, static_arguments, string_argument
from macroeval.reader.parser import NodePath
from macroeval.types.state import MacroState

EXTENSIONS = (".js", ".mjs", ".cjs", ".ts", ".json")


def module_exists(path: NodePath, state: MacroState) -> bool:
    macro = "moduleExists"
    args = static_arguments(path, state, macro)
    expect_arity(args, 1, macro)
    specifier = string_argument(args, 0, macro)
    return resolve_module(specifier, state) is not None


def resolve_module(specifier: str, state: MacroState) -> Optional[Path]:
    here = Path(state.filename).parent
    if specifier.startswith(("./", "../")) or specifier in (".", ".."):
        return _first_file(_candidates(here / specifier))

    name, subpath = split_specifier(specifier)
    for root in _package_roots(name, here, state):
        if not subpath:
            if root.is_dir():
                return root
            continue
        found = _first_file(_candidates(root / subpath))
        if found is not None:
            return found
    return None


def split_specifier(specifier: str) -> tuple[str, str]:
    """Split a bare specifier into package name and subpath."""
    parts = specifier.split("/")
    count = 2 if specifier.startswith("@") else 1
    return "/".join(parts[:count]), "/".join(parts[count:])


def _package_roots(name: str, start: Path, state: MacroState) -> Iterator[Path]:
    pkg = state.options.package_named(name)
    if pkg is not None:
        yield Path(pkg.root)
    for directory in (start, *start.parents):
        yield directory / "node_modules" / name


def _candidates(base: Path) -> Iterator[Path]:
    yield base
    if base.name:
        for ext in EXTENSIONS:
            yield base.with_name(base.name + ext)
    for ext in EXTENSIONS:
        yield base / f"index{ext}"


def _first_file(candidates: Iterator[Path]) -> Optional[Path]:
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None
