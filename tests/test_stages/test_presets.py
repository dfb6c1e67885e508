"""Tests for mapeo_deconstructor.stages.presets: catalog splitting."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

from mapeo_deconstructor.core import fileio
from mapeo_deconstructor.stages.fields import normalize_field
from mapeo_deconstructor.stages.presets import deconstruct_presets


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


class TestDeconstructPresets:
    def test_one_file_per_preset(self, config_dir, output_dir):
        deconstruct_presets(config_dir, output_dir)
        files = sorted(p.name for p in (output_dir / "presets").iterdir())
        assert files == ["building.json", "river.json"]

    def test_preset_content_verbatim(self, config_dir, output_dir, presets_catalog):
        deconstruct_presets(config_dir, output_dir)
        for preset_id, preset in presets_catalog["presets"].items():
            assert _read(output_dir / "presets" / f"{preset_id}.json") == preset

    def test_preset_written_compact_and_unescaped(
        self, config_dir, output_dir, presets_catalog
    ):
        deconstruct_presets(config_dir, output_dir)
        text = (output_dir / "presets" / "river.json").read_text(encoding="utf-8")
        assert text == json.dumps(
            presets_catalog["presets"]["river"],
            ensure_ascii=False,
            separators=(",", ":"),
        )
        assert "Río" in text

    def test_fields_are_normalized(self, config_dir, output_dir, presets_catalog):
        deconstruct_presets(config_dir, output_dir)
        assert sorted(p.name for p in (output_dir / "fields").iterdir()) == [
            "building-type.json",
            "name.json",
        ]
        for field_id, field in presets_catalog["fields"].items():
            written = _read(output_dir / "fields" / f"{field_id}.json")
            assert written == normalize_field(field)

    def test_defaults_verbatim(self, config_dir, output_dir, presets_catalog):
        deconstruct_presets(config_dir, output_dir)
        assert _read(output_dir / "defaults.json") == presets_catalog["defaults"]

    def test_returns_written_paths(self, config_dir, output_dir):
        written = deconstruct_presets(config_dir, output_dir)
        # 2 presets + 2 fields + defaults
        assert len(written) == 5
        assert all(p.exists() for p in written)

    def test_unknown_sections_ignored(self, tmp_path, output_dir, write_config_json):
        write_config_json(
            tmp_path / "presets.json",
            {"presets": {"a": {}}, "categories": {"c": {"name": "C"}}},
        )
        deconstruct_presets(tmp_path, output_dir)
        assert not (output_dir / "categories").exists()
        assert not (output_dir / "fields").exists()
        assert (output_dir / "presets" / "a.json").exists()

    def test_missing_catalog_is_logged(self, tmp_path, output_dir, caplog):
        with caplog.at_level(logging.ERROR):
            written = deconstruct_presets(tmp_path, output_dir)
        assert written == []
        assert "Error in deconstruct_presets" in caplog.text

    def test_malformed_catalog_is_logged(self, tmp_path, output_dir, caplog):
        (tmp_path / "presets.json").write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.ERROR):
            written = deconstruct_presets(tmp_path, output_dir)
        assert written == []
        assert "Error in deconstruct_presets" in caplog.text

    def test_partial_output_kept_on_failure(self, config_dir, output_dir, caplog):
        real_write = fileio.write_json
        calls = []

        def flaky(path, data, indent=None):
            calls.append(path)
            if len(calls) == 2:
                raise OSError("disk full")
            return real_write(path, data, indent)

        with patch("mapeo_deconstructor.stages.presets.write_json", side_effect=flaky):
            with caplog.at_level(logging.ERROR):
                written = deconstruct_presets(config_dir, output_dir)

        assert len(written) == 1
        assert "disk full" in caplog.text
