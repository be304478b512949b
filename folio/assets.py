"""Asset copying for Folio.

Assets are copied unchanged: every directory under the assets tree is
recreated and every file copied byte-for-byte into the output root at the
same relative path. There is no minification or image processing.

The copy stops at the first failure. Files copied before the failure stay in
place, so a failed copy can leave a partial assets tree; nothing is retried.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import AssetCopyError

logger = logging.getLogger(__name__)


def copy_tree(src: Path, dest: Path) -> None:
    """Mirror a directory tree into another directory.

    Args:
        src: Directory to copy from.
        dest: Directory to copy into; created if missing.

    Raises:
        AssetCopyError: If ``src`` is missing or any read or write fails.
    """
    if not src.is_dir():
        raise AssetCopyError(f"Assets directory not found: {src}")

    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise AssetCopyError(f"Error creating directory {dest}: {exc}") from exc

    for item in sorted(src.rglob("*")):
        target = dest / item.relative_to(src)
        if item.is_dir():
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise AssetCopyError(
                    f"Error creating directory {target}: {exc}"
                ) from exc
            continue
        copy_file(item, target)
        logger.debug("Copied asset %s -> %s", item, target)


def copy_file(src: Path, dest: Path) -> None:
    """Copy one file's content, creating parent directories as needed.

    Raises:
        AssetCopyError: If the file cannot be read or written.
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(src, dest)
    except OSError as exc:
        raise AssetCopyError(f"Error copying file from {src} to {dest}: {exc}") from exc
