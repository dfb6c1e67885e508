"""Shared test fixtures for mapeo-deconstructor tests."""

from __future__ import annotations

import copy
import json
import tarfile
import zipfile
from pathlib import Path
from typing import Any, Callable

import pytest

from mapeo_deconstructor.core.settings import Settings


SPRITE_SVG = """\
<svg xmlns="http://www.w3.org/2000/svg">
  <symbol id="river-12px" viewBox="0 0 12 12"><path d="M0 0L12 12"/></symbol>
  <symbol id="mountain" viewBox="0 0 100 100"><circle cx="50" cy="50" r="40"/></symbol>
</svg>
"""

PRESETS = {
    "presets": {
        "building": {
            "icon": "building",
            "fields": ["building-type", "name"],
            "geometry": ["point"],
            "tags": {"type": "building"},
            "name": "Building",
        },
        "river": {
            "icon": "river",
            "fields": ["name"],
            "geometry": ["line"],
            "tags": {"waterway": "river"},
            "name": "Río",
        },
    },
    "fields": {
        "building-type": {
            "key": "building-type",
            "type": "select_one",
            "label": "Building type",
            "placeholder": "School/hospital/etc",
            "options": ["School", "Hospital"],
        },
        "name": {
            "tagKey": "name",
            "type": "text",
            "label": "Name",
            "helperText": "Common name for this place",
            "universal": True,
        },
    },
    "defaults": {"point": ["building"], "line": ["river"]},
}

TRANSLATIONS = {
    "en": {
        "presets": {"building": {"name": "Building"}, "river": {"name": "River"}},
        "fields": {
            "name": {"label": "Name", "helperText": "Common name"},
            "notes": {"label": "Notes"},
        },
        "categories": {},
    },
    "fr": {
        "presets": {"building": {"name": "Bâtiment"}, "river": {"name": "Rivière"}},
        "fields": {
            "name": {"label": "Nom", "helperText": "Nom commun"},
            "notes": {"label": "Notes"},
        },
        "categories": {"natural": {"name": "Nature"}},
    },
}


def _write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _make_tar(source: Path, archive: Path) -> Path:
    """Pack source's contents into a gzipped tar at archive."""
    with tarfile.open(archive, "w:gz") as tar:
        for child in sorted(source.iterdir()):
            tar.add(child, arcname=child.name)
    return archive


def _make_zip(source: Path, archive: Path) -> Path:
    """Pack source's contents into a zip at archive."""
    with zipfile.ZipFile(archive, "w") as zf:
        for child in sorted(source.iterdir()):
            zf.write(child, arcname=child.name)
    return archive


@pytest.fixture
def write_config_json() -> Callable[[Path, Any], Path]:
    """Write plain JSON to a path and return the path."""
    return _write_json


@pytest.fixture
def make_tar() -> Callable[[Path, Path], Path]:
    """Pack a directory's contents into a .mapeosettings-style tarball."""
    return _make_tar


@pytest.fixture
def presets_catalog() -> dict:
    """The presets.json written into config_dir."""
    return copy.deepcopy(PRESETS)


@pytest.fixture
def translations_catalog() -> dict:
    """The translations.json written into config_dir."""
    return copy.deepcopy(TRANSLATIONS)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings whose temp root lives inside tmp_path."""
    return Settings(root_dir=tmp_path / "tmp-root")


@pytest.fixture
def config_dir(tmp_path) -> Path:
    """A fully populated, pre-extracted configuration directory."""
    root = tmp_path / "config"
    root.mkdir()
    _write_json(root / "metadata.json", {"name": "test-config", "version": "1.0.0"})
    _write_json(root / "presets.json", PRESETS)
    _write_json(root / "translations.json", TRANSLATIONS)
    (root / "icons.svg").write_text(SPRITE_SVG, encoding="utf-8")
    (root / "style.css").write_text("body {}", encoding="utf-8")
    (root / "VERSION").write_text("1.0.0", encoding="utf-8")
    return root


@pytest.fixture
def minimal_config_dir(tmp_path) -> Path:
    """Metadata and presets only: no icons, no translations."""
    root = tmp_path / "minimal"
    root.mkdir()
    _write_json(root / "metadata.json", {"name": "acme"})
    _write_json(
        root / "presets.json",
        {
            "presets": {"p1": {}},
            "fields": {
                "f1": {"key": "f1", "type": "select_one", "options": ["a", "b"]}
            },
            "defaults": {"point": ["p1"]},
        },
    )
    return root


@pytest.fixture
def output_dir(tmp_path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def mapeosettings_file(tmp_path, config_dir) -> Path:
    return _make_tar(config_dir, tmp_path / "test.mapeosettings")


@pytest.fixture
def comapeocat_file(tmp_path, config_dir) -> Path:
    return _make_zip(config_dir, tmp_path / "test.comapeocat")
