"""package.json generation from the bundled template."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mapeo_deconstructor.core.errors import DeconstructError, ManifestError
from mapeo_deconstructor.core.extractor import read_package_name

logger = logging.getLogger(__name__)

TEMPLATE_PATH = (
    Path(__file__).resolve().parent.parent / "templates" / "package-template.json"
)

NAME_PLACEHOLDER = "{name}"


def render_manifest(template: str, name: str) -> str:
    """Replace every occurrence of the name placeholder."""
    return template.replace(NAME_PLACEHOLDER, name)


def create_package_json(
    working_dir: Path,
    output_dir: Path,
    template_path: Optional[Path] = None,
) -> Path:
    """Render package.json into output_dir. Raises ManifestError on failure."""
    template_path = template_path or TEMPLATE_PATH
    logger.debug("Building package.json in %s", output_dir)
    try:
        template = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Could not read manifest template: {e}") from e
    try:
        name = read_package_name(working_dir)
    except DeconstructError as e:
        raise ManifestError(str(e)) from e

    path = output_dir / "package.json"
    try:
        path.write_text(render_manifest(template, name), encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Could not write {path}: {e}") from e
    logger.debug("Wrote %s", path)
    return path
