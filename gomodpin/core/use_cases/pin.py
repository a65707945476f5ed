"""
Pin use case — validate, parse, resolve, filter, render, persist.

Strictly sequential. Any ``PinError`` stops the run and is reported
on the result; nothing after the failing step executes.
"""

from __future__ import annotations

import logging
import stat
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from gomodpin.core.errors import ManifestPathError, ManifestReadError, PinError
from gomodpin.core.models.settings import PinSettings
from gomodpin.core.services.exclusions import build_exclusion_set, filter_versions
from gomodpin.core.services.modfile import parse_modfile
from gomodpin.core.services.render import PIN_HEADER, iter_sorted, render_pin_block
from gomodpin.core.services.resolver import resolve_versions
from gomodpin.core.services.writer import backup_path_for, persist_pin

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "go.mod"


@dataclass
class PinResult:
    """Outcome of one pin run."""

    manifest_path: Path | None = None
    backup_path: Path | None = None
    pinned: dict[str, str] = field(default_factory=dict)
    excluded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    count: int = 0
    appended: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {
                "manifest": str(self.manifest_path) if self.manifest_path else None,
                "error": self.error,
            }
        return {
            "manifest": str(self.manifest_path),
            "backup": str(self.backup_path) if self.backup_path else None,
            "count": self.count,
            "appended": self.appended,
            "pinned": [
                {"path": path, "version": version}
                for path, version in iter_sorted(self.pinned)
                if version
            ],
            "excluded": sorted(self.excluded),
            "skipped": self.skipped,
        }


def validate_manifest_path(manifest_path: Path) -> Path:
    """Check the path names an existing regular file called go.mod.

    Raises:
        ManifestPathError: On a missing path, a directory, or another filename.
    """
    try:
        info = manifest_path.stat()
    except OSError as e:
        raise ManifestPathError(f"error accessing path: {e}") from e

    if stat.S_ISDIR(info.st_mode):
        raise ManifestPathError(
            f"provided path is a directory; expected path to a {MANIFEST_FILENAME} file"
        )
    if manifest_path.name != MANIFEST_FILENAME:
        raise ManifestPathError(
            f"provided path must be a {MANIFEST_FILENAME} file; got {manifest_path.name!r}"
        )
    return manifest_path


def _run(
    result: PinResult,
    manifest_path: Path,
    settings: PinSettings,
) -> None:
    validate_manifest_path(manifest_path)

    try:
        data = manifest_path.read_bytes()
        mode = stat.S_IMODE(manifest_path.stat().st_mode)
    except OSError as e:
        raise ManifestReadError(f"error reading {MANIFEST_FILENAME}: {e}") from e

    manifest = parse_modfile(str(manifest_path), data)

    versions = resolve_versions(manifest.requires, manifest.replaces)
    exclusion_set = build_exclusion_set(
        settings.exclude,
        use_defaults=settings.use_default_excludes,
        defaults=settings.default_excludes,
    )
    result.excluded = filter_versions(versions, manifest.excludes, exclusion_set)

    block = render_pin_block(versions)
    result.pinned = versions
    result.skipped = list(block.skipped)
    result.count = block.count

    if PIN_HEADER.encode("utf-8") in data:
        logger.warning(
            "%s already contains a pinned replace block; appending another one",
            manifest_path,
        )

    result.appended = persist_pin(manifest_path, data, mode, block)
    result.backup_path = backup_path_for(manifest_path)


def pin_manifest(
    manifest_path: Path,
    *,
    user_excludes: Iterable[str] = (),
    use_default_excludes: bool = True,
    settings: PinSettings | None = None,
) -> PinResult:
    """Append a pinned ``replace`` block to a go.mod.

    Args:
        manifest_path: Path to the go.mod.
        user_excludes: Extra module paths to keep out of the block.
        use_default_excludes: False drops the built-in exclusion list.
        settings: Loaded settings; CLI arguments are layered on top.

    Returns:
        PinResult. ``error`` is set if any step failed; ``count == 0``
        with no error means there was nothing to pin.
    """
    settings = (settings or PinSettings()).with_overrides(
        extra_excludes=tuple(user_excludes),
        no_default_excludes=not use_default_excludes,
    )
    result = PinResult(manifest_path=manifest_path)

    try:
        _run(result, manifest_path, settings)
    except PinError as e:
        logger.debug("Pin failed for %s", manifest_path, exc_info=True)
        result.error = str(e)

    return result
