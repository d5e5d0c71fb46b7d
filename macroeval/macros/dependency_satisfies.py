from __future__ import annotations

import logging

from semantic_version import NpmSpec, Version

from macroeval.errors import MacroUsageError
from macroeval.macros.arguments import expect_arity, static_arguments, string_argument
from macroeval.reader.parser import NodePath
from macroeval.types.state import MacroState

logger = logging.getLogger(__name__)


def dependency_satisfies(path: NodePath, state: MacroState) -> bool:
    """dependencySatisfies(packageName, semverRange)

    True when a known package of that name is present and its version falls
    inside the npm-style range. Unknown packages and unparseable installed
    versions are simply not satisfying.
    """
    macro = "dependencySatisfies"
    args = static_arguments(path, state, macro)
    expect_arity(args, 2, macro)
    name = string_argument(args, 0, macro)
    range_ = string_argument(args, 1, macro)

    try:
        spec = NpmSpec(range_)
    except ValueError as exc:
        raise MacroUsageError(f"{macro}: invalid semver range {range_!r}") from exc

    pkg = state.options.package_named(name)
    if pkg is None:
        logger.debug("%s: %s is not installed", macro, name)
        return False
    try:
        version = Version.coerce(pkg.version)
    except ValueError:
        logger.debug("%s: %s has unparseable version %r", macro, name, pkg.version)
        return False
    return spec.match(version)
