"""Tests for gitstitch.manifest module."""

import pytest
import yaml

from gitstitch.manifest import ManifestError, load_manifest, save_manifest
from gitstitch.stitch import Component


class TestLoadManifest:
    """Tests for load_manifest function."""

    def test_loads_components(self, temp_dir):
        path = temp_dir / "stitch.yaml"
        path.write_text(
            "components:\n"
            "  - name: alpha\n"
            "    remote: alpha\n"
            "    branch: main\n"
            "  - name: docs\n"
            "    remote: website\n"
            "    branch: main\n"
            "    subdir: docs/\n"
            "    directory: website-docs\n"
        )

        components = load_manifest(path)

        assert [c.name for c in components] == ["alpha", "docs"]
        assert components[0].directory == "alpha"
        assert components[1].subdir == "docs"
        assert components[1].directory == "website-docs"
        assert components[1].ref == "website/main"

    def test_missing_file(self, temp_dir):
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(temp_dir / "nope.yaml")
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("components: [unclosed\n")
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_not_a_mapping(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- alpha\n- beta\n")
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_invalid_component(self, temp_dir):
        path = temp_dir / "invalid.yaml"
        path.write_text("components:\n  - name: two words\n")
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_empty_component_list(self, temp_dir):
        path = temp_dir / "empty.yaml"
        path.write_text("components: []\n")
        with pytest.raises(ManifestError) as exc_info:
            load_manifest(path)
        assert "no components" in str(exc_info.value)


class TestSaveManifest:
    """Tests for save_manifest function."""

    def test_writes_loadable_manifest(self, temp_dir):
        path = temp_dir / "out" / "stitch.yaml"
        components = [
            Component(name="alpha", remote="alpha", branch="main"),
            Component(name="docs", branch="main", subdir="docs", directory="site"),
        ]

        save_manifest(path, components)

        data = yaml.safe_load(path.read_text())
        assert data["components"][0] == {
            "name": "alpha",
            "remote": "alpha",
            "branch": "main",
            "subdir": ".",
            "directory": "alpha",
        }
        assert "remote" not in data["components"][1]
        assert load_manifest(path) == components
