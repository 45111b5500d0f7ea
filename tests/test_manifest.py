"""Tests for plugin manifest loading."""

import json

import pytest
from pydantic import ValidationError

from pluginapi.constants import TEMPLATE_PLUGIN_DIR
from pluginapi.plugins.manifest import PluginManifest, load_manifest


def write_manifest(directory, content) -> None:
    (directory / "plugin.json").write_text(content, encoding="utf-8")


class TestPluginManifest:
    """Tests for the PluginManifest model."""

    def test_defaults(self):
        manifest = PluginManifest(id="igdb", name="IGDB", entry_point="plugin:IgdbPlugin")
        assert manifest.version == "1.0.0"
        assert manifest.capabilities == []
        assert manifest.license is None

    def test_id_must_be_kebab_case(self):
        with pytest.raises(ValidationError):
            PluginManifest(id="My Plugin", name="x", entry_point="plugin:X")

    @pytest.mark.parametrize("entry_point", ["PluginTemplate", "plugin:", ":PluginTemplate", "plugin:Plugin Template"])
    def test_entry_point_must_be_module_colon_class(self, entry_point):
        with pytest.raises(ValidationError):
            PluginManifest(id="template", name="x", entry_point=entry_point)


class TestLoadManifest:
    """Tests for load_manifest."""

    def test_bundled_template_manifest(self):
        manifest = load_manifest(TEMPLATE_PLUGIN_DIR)
        assert manifest is not None
        assert manifest.id == "template"
        assert manifest.entry_point == "plugin:PluginTemplate"
        assert "metadata" in manifest.capabilities

    def test_missing_file(self, tmp_path):
        assert load_manifest(tmp_path) is None

    def test_invalid_json(self, tmp_path):
        write_manifest(tmp_path, "{not json")
        assert load_manifest(tmp_path) is None

    def test_missing_required_field(self, tmp_path):
        write_manifest(tmp_path, json.dumps({"id": "x", "name": "X"}))
        assert load_manifest(tmp_path) is None

    def test_not_an_object(self, tmp_path):
        write_manifest(tmp_path, json.dumps(["id", "x"]))
        assert load_manifest(tmp_path) is None

    def test_valid_file(self, tmp_path):
        write_manifest(tmp_path, json.dumps({
            "id": "steam",
            "name": "Steam",
            "version": "2.1.0",
            "entry_point": "plugin:SteamPlugin",
            "capabilities": ["metadata"],
        }))
        manifest = load_manifest(tmp_path)
        assert manifest.version == "2.1.0"
        assert manifest.capabilities == ["metadata"]
