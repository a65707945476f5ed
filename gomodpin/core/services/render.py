"""
Block renderer — the ``replace (...)`` text appended to go.mod.

Entries are always emitted in lexicographic path order so repeated runs
produce byte-identical output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PIN_HEADER = "// prevent module upgrades"
_BLOCK_OPEN = f"\n\n{PIN_HEADER}\nreplace (\n"
_BLOCK_CLOSE = ")\n"


@dataclass(frozen=True)
class RenderedBlock:
    """Rendered pin block and the number of entries in it."""

    text: str
    count: int
    skipped: tuple[str, ...] = ()


def iter_sorted(versions: Mapping[str, str]) -> Iterator[tuple[str, str]]:
    """Yield ``(path, version)`` pairs with paths sorted."""
    for path in sorted(versions):
        yield path, versions[path]


def process_ordered(
    versions: Mapping[str, str],
    fn: Callable[[str, str], None],
) -> None:
    """Call ``fn(path, version)`` for every entry, in sorted path order."""
    for path, version in iter_sorted(versions):
        fn(path, version)


def render_entry(path: str, version: str) -> str:
    return f"\t{path} => {path} {version}\n"


def render_pin_block(versions: Mapping[str, str]) -> RenderedBlock:
    """Render the pin block.

    Entries with an empty version are skipped; they would produce a
    malformed directive.

    Returns:
        RenderedBlock. ``count == 0`` means there is nothing to pin.
    """
    lines: list[str] = []
    skipped: list[str] = []

    def emit(path: str, version: str) -> None:
        if not version:
            logger.info("Skipping %s due to empty version", path)
            skipped.append(path)
            return
        lines.append(render_entry(path, version))

    process_ordered(versions, emit)

    text = _BLOCK_OPEN + "".join(lines) + _BLOCK_CLOSE
    return RenderedBlock(text=text, count=len(lines), skipped=tuple(skipped))
