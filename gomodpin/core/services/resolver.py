"""
Version resolver — the module → version map to pin.

Seeds from the require list, then applies replace directives in file
order: a replace that points elsewhere drops the module, a replace that
points at the same path overrides its version.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gomodpin.core.models.manifest import ModuleRef, ReplaceDirective

logger = logging.getLogger(__name__)


def resolve_versions(
    requires: Iterable[ModuleRef],
    replaces: Iterable[ReplaceDirective],
) -> dict[str, str]:
    """Build the version map from requires and replaces.

    Args:
        requires: Required modules, in file order.
        replaces: Replace directives, in file order.

    Returns:
        Mapping of module path → version. Paths are unique; a later
        require for the same path wins.
    """
    versions: dict[str, str] = {}
    for require in requires:
        versions[require.path] = require.version

    for replace in replaces:
        if not replace.is_self_replace:
            if versions.pop(replace.old.path, None) is not None:
                logger.debug("Dropping %s (replaced by %s)", replace.old.path, replace.new.path)
            continue
        logger.info("Replacing: %s with %s", replace.old.path, replace.new.version)
        versions[replace.old.path] = replace.new.version

    return versions
