"""Translation flattening: translations.json -> messages/<lang>.json."""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Any

from mapeo_deconstructor.core.fileio import read_json, run_all, write_json

logger = logging.getLogger(__name__)


def _entry(description: str, message: Any) -> dict[str, Any]:
    return {"description": description, "message": message}


def flatten_language(language: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Flatten one language's presets/fields/categories into dotted keys.

    Keys are returned in codepoint order so the written file is stable.
    """
    flat: dict[str, dict[str, Any]] = {}

    for preset_id, preset in (language.get("presets") or {}).items():
        if "name" in preset:
            flat[f"presets.{preset_id}.name"] = _entry(
                f"The name of preset '{preset_id}'", preset["name"]
            )

    for field_id, field in (language.get("fields") or {}).items():
        if "label" not in field:
            continue
        flat[f"fields.{field_id}.label"] = _entry(
            f"Label for field '{field_id}'", field["label"]
        )
        if "helperText" in field:
            flat[f"fields.{field_id}.helperText"] = _entry(
                f"Helper text for field '{field_id}'", field["helperText"]
            )

    categories = language.get("categories") or {}
    for category_id, category in categories.items():
        if "name" in category:
            flat[f"categories.{category_id}.name"] = _entry(
                f"The name of category '{category_id}'", category["name"]
            )

    return dict(sorted(flat.items()))


def _write_language(path: Path, messages: dict[str, Any]) -> Path:
    write_json(path, messages, indent=2)
    logger.debug("Wrote %s", path)
    return path


def flatten_translations(
    working_dir: Path, output_dir: Path, max_workers: int = 4
) -> list[Path]:
    """Write one pretty-printed messages/<lang>.json per language.

    A missing translations.json is a no-op. All per-language writes are
    joined before returning.
    """
    written: list[Path] = []
    translations_path = working_dir / "translations.json"
    if not translations_path.exists():
        logger.debug("No translations.json in %s, skipping", working_dir)
        return written
    try:
        logger.debug(
            "Flattening translations from %s to %s", working_dir, output_dir
        )
        translations = read_json(translations_path)
        messages_dir = output_dir / "messages"
        messages_dir.mkdir(parents=True, exist_ok=True)
        jobs = [
            partial(
                _write_language,
                messages_dir / f"{lang}.json",
                flatten_language(language),
            )
            for lang, language in translations.items()
        ]
        written.extend(run_all(jobs, max_workers=max_workers))
    except Exception as e:
        logger.error("Error in flatten_translations: %s", e)
    return written
