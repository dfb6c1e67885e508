"""Pass-through copying and final cleanup of the output directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from mapeo_deconstructor.core.settings import (
    DEFAULT_RELAY_FILES,
    DEFAULT_SANITIZE_FILES,
)

logger = logging.getLogger(__name__)


def copy_files(
    working_dir: Path,
    output_dir: Path,
    names: Iterable[str] = DEFAULT_RELAY_FILES,
) -> list[Path]:
    """Copy each named file that exists in working_dir into output_dir."""
    copied: list[Path] = []
    try:
        logger.debug("Copying files from %s to %s", working_dir, output_dir)
        for name in names:
            src = working_dir / name
            dest = output_dir / name
            if not src.exists():
                continue
            if src.resolve() != dest.resolve():
                shutil.copyfile(src, dest)
                logger.debug("Copied %s to %s", src, dest)
            copied.append(dest)
    except Exception as e:
        logger.error("Error in copy_files: %s", e)
    return copied


def cleanup_output_folder(
    output_dir: Path, names: Iterable[str] = DEFAULT_SANITIZE_FILES
) -> list[Path]:
    """Delete source-named leftovers from output_dir. Safe to re-run."""
    removed: list[Path] = []
    try:
        for name in names:
            path = output_dir / name
            if path.is_file():
                path.unlink()
                logger.debug("Removed %s", path)
                removed.append(path)
    except Exception as e:
        logger.error("Error in cleanup_output_folder: %s", e)
    return removed
