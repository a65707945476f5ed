"""
Manifest writer — backup, then append.

The original bytes are copied to a sibling ``go.mod.old`` before the
manifest is touched. The pin block is then appended; existing bytes are
never rewritten.

Appending is not idempotent: every run adds another block. There is no
locking either, so concurrent runs against the same go.mod race on the
backup and may interleave their appends.
"""

from __future__ import annotations

import logging
from pathlib import Path

from gomodpin.core.errors import AppendWriteError, BackupWriteError
from gomodpin.core.services.render import RenderedBlock

logger = logging.getLogger(__name__)

BACKUP_FILENAME = "go.mod.old"


def backup_path_for(manifest_path: Path) -> Path:
    """Sibling backup path for a manifest."""
    return manifest_path.parent / BACKUP_FILENAME


def write_backup(manifest_path: Path, data: bytes, mode: int) -> Path:
    """Write ``data`` to the backup path with the manifest's permission bits.

    Raises:
        BackupWriteError: If the backup cannot be written.
    """
    backup = backup_path_for(manifest_path)
    try:
        backup.write_bytes(data)
        backup.chmod(mode)
    except OSError as e:
        raise BackupWriteError(f"error writing backup file {backup}: {e}") from e

    logger.info("Backed up %s to %s", manifest_path, backup)
    return backup


def append_block(manifest_path: Path, text: str) -> None:
    """Append ``text`` to the end of the manifest.

    Raises:
        AppendWriteError: If the manifest cannot be opened or written.
    """
    try:
        with manifest_path.open("ab") as fh:
            fh.write(text.encode("utf-8"))
    except OSError as e:
        raise AppendWriteError(f"error appending replace block to {manifest_path}: {e}") from e


def persist_pin(
    manifest_path: Path,
    data: bytes,
    mode: int,
    block: RenderedBlock,
) -> bool:
    """Back up the manifest, then append the block if it has entries.

    Args:
        manifest_path: The go.mod being pinned.
        data: Its original bytes, as read before rendering.
        mode: Its permission bits.
        block: The rendered pin block.

    Returns:
        True if the block was appended, False when there was nothing to pin.
    """
    write_backup(manifest_path, data, mode)

    if block.count == 0:
        logger.info("No replacements to append")
        return False

    append_block(manifest_path, block.text)
    logger.info("Appended %d replacements to %s", block.count, manifest_path)
    return True
