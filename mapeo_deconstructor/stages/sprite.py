"""SVG sprite decomposition: one file per <symbol>."""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from functools import partial
from pathlib import Path

from mapeo_deconstructor.core.fileio import run_all

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Keep the SVG namespace as the default one instead of ns0: prefixes.
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

SMALL_ICON_MARKER = "-12"


def icon_filename(symbol_id: str) -> str:
    """Map a symbol id to its output filename.

    Ids containing ``-12`` are small icons promoted to 24px; everything
    else is a 100px icon. Only the text before the first ``-12`` is kept.
    """
    parts = symbol_id.split(SMALL_ICON_MARKER)
    if len(parts) > 1:
        return f"{parts[0]}-24px.svg"
    return f"{parts[0]}-100px.svg"


def _namespace(tag: str) -> str:
    if tag.startswith("{"):
        return tag[: tag.index("}") + 1]
    return ""


def parse_symbols(sprite_path: Path) -> tuple[str, list[ET.Element]]:
    """Parse the sprite; return its namespace prefix and its <symbol> children."""
    root = ET.parse(sprite_path).getroot()
    ns = _namespace(root.tag)
    return ns, root.findall(f"{ns}symbol")


def symbol_to_svg(symbol: ET.Element, ns: str = "") -> ET.Element:
    """Wrap a symbol's attributes and content in a standalone <svg> root."""
    svg = ET.Element(f"{ns}svg", dict(symbol.attrib))
    svg.text = symbol.text
    for child in symbol:
        svg.append(copy.deepcopy(child))
    return svg


def _write_symbol(svg: ET.Element, path: Path) -> Path:
    ET.ElementTree(svg).write(path, encoding="utf-8", xml_declaration=True)
    logger.debug("Wrote %s", path)
    return path


def deconstruct_svg_sprite(
    working_dir: Path, output_dir: Path, max_workers: int = 4
) -> list[Path]:
    """Split icons.svg into icons/<name>-{24px|100px}.svg.

    A missing sprite or a sprite without symbols is a no-op. A symbol that
    fails is logged and skipped; the rest are still written.
    """
    written: list[Path] = []
    sprite_path = working_dir / "icons.svg"
    if not sprite_path.exists():
        logger.debug("No icons.svg in %s, skipping sprite", working_dir)
        return written
    try:
        logger.debug(
            "Deconstructing SVG sprite from %s to %s", working_dir, output_dir
        )
        ns, symbols = parse_symbols(sprite_path)
        if not symbols:
            return written
        icons_dir = output_dir / "icons"
        icons_dir.mkdir(parents=True, exist_ok=True)

        # One job per target file; a later symbol replaces an earlier one.
        jobs: dict[Path, partial] = {}
        for symbol in symbols:
            symbol_id = symbol.get("id")
            if symbol_id is None:
                logger.error("Error in deconstruct_svg_sprite: symbol without id")
                continue
            svg = symbol_to_svg(symbol, ns)
            path = icons_dir / icon_filename(symbol_id)
            if path in jobs:
                logger.warning(
                    "Symbol %r overrides an earlier symbol written to %s",
                    symbol_id,
                    path.name,
                )
            jobs[path] = partial(_write_symbol, svg, path)

        written.extend(
            run_all(
                jobs.values(),
                max_workers=max_workers,
                on_error=lambda e: logger.error(
                    "Error in deconstruct_svg_sprite: %s", e
                ),
            )
        )
    except Exception as e:
        logger.error("Error in deconstruct_svg_sprite: %s", e)
    return written
