"""
Exclusion filter — drops modules that must not be pinned.

Two passes over the version map:

    1. exclude directives declared in the go.mod itself
    2. the exclusion set: built-in defaults ∪ user paths

Both mutate the map in place and return the paths they removed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gomodpin.core.models.manifest import ExcludeDirective

logger = logging.getLogger(__name__)

# Managed independently of the application's own dependency graph.
DEFAULT_EXCLUDES: tuple[str, ...] = (
    "gopkg.in/DataDog/dd-trace-go.v1",
    "github.com/DataDog/dd-trace-go/v2",
    "github.com/DataDog/orchestrion",
)


def build_exclusion_set(
    user_excludes: Iterable[str] = (),
    *,
    use_defaults: bool = True,
    defaults: Iterable[str] = DEFAULT_EXCLUDES,
) -> frozenset[str]:
    """Union of the default list (unless disabled) and user-supplied paths."""
    paths = set(defaults) if use_defaults else set()
    paths.update(p for p in user_excludes if p)
    return frozenset(paths)


def apply_manifest_excludes(
    versions: dict[str, str],
    excludes: Iterable[ExcludeDirective],
) -> list[str]:
    """Remove every module the go.mod excludes. Returns removed paths."""
    removed: list[str] = []
    for exclude in excludes:
        if exclude.path not in versions:
            continue
        version = versions.pop(exclude.path)
        logger.info("Excluding (from go.mod exclude) %s@%s", exclude.path, version)
        removed.append(exclude.path)
    return removed


def apply_exclusion_set(
    versions: dict[str, str],
    exclusion_set: Iterable[str],
) -> list[str]:
    """Remove every module in the exclusion set. Returns removed paths."""
    removed: list[str] = []
    for path in sorted(set(exclusion_set)):
        if path not in versions:
            continue
        del versions[path]
        logger.info("Excluding (from flags) %s", path)
        removed.append(path)
    return removed


def filter_versions(
    versions: dict[str, str],
    manifest_excludes: Iterable[ExcludeDirective],
    exclusion_set: Iterable[str],
) -> list[str]:
    """Run both exclusion passes. Returns all removed paths."""
    removed = apply_manifest_excludes(versions, manifest_excludes)
    removed.extend(apply_exclusion_set(versions, exclusion_set))
    return removed
