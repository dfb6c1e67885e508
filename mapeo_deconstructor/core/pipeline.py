"""Pipeline: extract, decompose, build manifest, sanitize."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional

from mapeo_deconstructor.core.errors import DeconstructError
from mapeo_deconstructor.core.extractor import PathLike, extract_config
from mapeo_deconstructor.core.fileio import read_json
from mapeo_deconstructor.core.models import ConfigPackage, DeconstructResult
from mapeo_deconstructor.core.settings import Settings
from mapeo_deconstructor.stages.files import cleanup_output_folder, copy_files
from mapeo_deconstructor.stages.manifest import create_package_json
from mapeo_deconstructor.stages.presets import deconstruct_presets
from mapeo_deconstructor.stages.sprite import (
    deconstruct_svg_sprite,
    parse_symbols,
)
from mapeo_deconstructor.stages.translations import flatten_translations

logger = logging.getLogger(__name__)

Stage = Callable[[Path, Path], list[Path]]


class Pipeline:
    """Runs extract, {presets, sprite, translations}, relay, manifest, sanitize."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def stages(self) -> dict[str, Stage]:
        """Independent decomposition stages, keyed by name."""
        s = self.settings
        return {
            "presets": deconstruct_presets,
            "sprite": lambda src, dest: deconstruct_svg_sprite(
                src, dest, max_workers=s.max_workers
            ),
            "translations": lambda src, dest: flatten_translations(
                src, dest, max_workers=s.max_workers
            ),
        }

    def decompose(self, package: ConfigPackage) -> list[Path]:
        """Run the independent stages concurrently, join them, then relay.

        Relay runs last because a relayed defaults.json replaces the one
        split out of presets.json.
        """
        stages = self.stages()
        src, dest = package.working_dir, package.output_dir
        written: list[Path] = []
        with ThreadPoolExecutor(max_workers=len(stages)) as executor:
            futures = {
                name: executor.submit(stage, src, dest)
                for name, stage in stages.items()
            }
            for name, future in futures.items():
                paths = future.result()
                logger.debug("Stage %s produced %d files", name, len(paths))
                written.extend(paths)
        written.extend(copy_files(src, dest, self.settings.relay_files))
        return written

    def run(
        self,
        config_path: PathLike,
        output_dir: Optional[PathLike] = None,
        *,
        skip_package_json: bool = False,
        skip_cleanup: bool = False,
    ) -> DeconstructResult:
        """Execute the full pipeline. Fatal errors propagate."""
        package = extract_config(config_path, output_dir, self.settings)
        logger.debug(
            "Building project %s into %s", package.name, package.output_dir
        )

        written = self.decompose(package)

        if not skip_package_json:
            written.append(
                create_package_json(package.working_dir, package.output_dir)
            )

        removed: list[Path] = []
        if not skip_cleanup:
            removed = cleanup_output_folder(
                package.output_dir, self.settings.sanitize_files
            )

        removed_set = set(removed)
        return DeconstructResult(
            success=True,
            package_name=package.name,
            working_dir=package.working_dir,
            output_dir=package.output_dir,
            files_written=len(set(written) - removed_set),
            files_removed=len(removed),
        )


def deconstruct(
    config_path: Optional[PathLike],
    output_dir: Optional[PathLike] = None,
    *,
    skip_package_json: bool = False,
    skip_cleanup: bool = False,
    settings: Optional[Settings] = None,
) -> DeconstructResult:
    """Programmatic entry point that reports fatal errors in the result."""
    if not config_path:
        raise ValueError("config_path is required")
    try:
        return Pipeline(settings).run(
            config_path,
            output_dir,
            skip_package_json=skip_package_json,
            skip_cleanup=skip_cleanup,
        )
    except DeconstructError as e:
        logger.error("Deconstruction failed: %s", e)
        return DeconstructResult(success=False, error_message=str(e))


def summarize(working_dir: Path) -> dict[str, int]:
    """Count presets, fields, icons and languages without writing anything."""
    counts = {"presets": 0, "fields": 0, "icons": 0, "languages": 0}
    presets_path = working_dir / "presets.json"
    if presets_path.exists():
        catalog = read_json(presets_path)
        counts["presets"] = len(catalog.get("presets") or {})
        counts["fields"] = len(catalog.get("fields") or {})
    icons_path = working_dir / "icons.svg"
    if icons_path.exists():
        counts["icons"] = len(parse_symbols(icons_path)[1])
    translations_path = working_dir / "translations.json"
    if translations_path.exists():
        counts["languages"] = len(read_json(translations_path))
    return counts
