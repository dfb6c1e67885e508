"""Preset decomposition: split presets.json into per-entity files."""

from __future__ import annotations

import logging
from pathlib import Path

from mapeo_deconstructor.core.fileio import read_json, write_json
from mapeo_deconstructor.stages.fields import normalize_field

logger = logging.getLogger(__name__)


def deconstruct_presets(working_dir: Path, output_dir: Path) -> list[Path]:
    """Write presets/<id>.json, fields/<id>.json and defaults.json.

    Fields are normalized to the current schema; presets and defaults are
    written verbatim. Unknown top-level sections are ignored. Errors are
    logged and whatever was written before the failure is returned.
    """
    written: list[Path] = []
    try:
        logger.debug(
            "Deconstructing presets from %s to %s", working_dir, output_dir
        )
        catalog = read_json(working_dir / "presets.json")
        for section, entries in catalog.items():
            if section == "presets":
                _write_entries(output_dir / "presets", entries, written)
            elif section == "fields":
                normalized = {
                    key: normalize_field(value) for key, value in entries.items()
                }
                _write_entries(output_dir / "fields", normalized, written)
            elif section == "defaults":
                path = write_json(output_dir / "defaults.json", entries)
                logger.debug("Wrote %s", path)
                written.append(path)
    except Exception as e:
        logger.error("Error in deconstruct_presets: %s", e)
    return written


def _write_entries(directory: Path, entries: dict, written: list[Path]) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for key, value in entries.items():
        path = write_json(directory / f"{key}.json", value)
        logger.debug("Wrote %s", path)
        written.append(path)
