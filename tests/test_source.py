"""Tests for the source document loader."""

import json

import pytest
import yaml

from scenemirror.paths import walk
from scenemirror.scene import SceneNode
from scenemirror.source import default_source, load_source, validate_source


def _write_yaml(tmp_path, content, name="composition.yaml") -> str:
    path = tmp_path / name
    path.write_text(yaml.dump(content))
    return str(path)


class TestLoadSource:
    def test_yaml(self, source_file, source_doc):
        assert load_source(source_file) == source_doc

    def test_json(self, tmp_path, source_doc):
        path = tmp_path / "composition.json"
        path.write_text(json.dumps(source_doc))
        assert load_source(str(path)) == source_doc

    def test_resolves_and_strips_paths(self, tmp_path):
        path = _write_yaml(tmp_path, {
            "paths": {"cdn": "https://cdn.test"},
            "elements": [{"id": "v", "type": "video", "source": "${cdn}/v.mp4"}],
        })
        doc = load_source(path)
        assert "paths" not in doc
        assert doc["elements"][0]["source"] == "https://cdn.test/v.mp4"

    def test_missing_elements_defaults_to_empty(self, tmp_path):
        path = _write_yaml(tmp_path, {"width": 720})
        assert load_source(path)["elements"] == []

    def test_unknown_path_var_raises(self, tmp_path):
        path = _write_yaml(tmp_path, {"elements": [{"id": "v", "source": "${cdn}/v.mp4"}]})
        with pytest.raises(ValueError, match="Unknown path variable"):
            load_source(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_source(str(tmp_path / "nope.yaml"))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = _write_yaml(tmp_path, ["a", "b"])
        with pytest.raises(ValueError, match="top level"):
            load_source(path)


class TestValidateSource:
    def test_duplicate_id_across_levels(self):
        doc = {"elements": [
            {"id": "x", "elements": [{"id": "y"}]},
            {"id": "y"},
        ]}
        with pytest.raises(ValueError, match="duplicate id 'y'"):
            validate_source(doc)

    def test_non_positive_track(self):
        with pytest.raises(ValueError, match="track must be a positive integer"):
            validate_source({"elements": [{"id": "x", "track": 0}]})

    def test_non_integer_track(self):
        with pytest.raises(ValueError, match="track must be a positive integer"):
            validate_source({"elements": [{"id": "x", "track": 1.5}]})

    def test_elements_must_be_list(self):
        with pytest.raises(ValueError, match=r"elements\[0\]\.elements: must be a list"):
            validate_source({"elements": [{"id": "x", "elements": {"id": "y"}}]})

    def test_reports_all_problems(self):
        doc = {"elements": [{"id": "x", "track": -1}, {"id": "x"}]}
        with pytest.raises(ValueError, match="2 problem"):
            validate_source(doc)

    def test_elements_without_ids_allowed(self):
        validate_source({"elements": [{"type": "shape"}, {"type": "shape"}]})


class TestDefaultSource:
    def test_loads_and_resolves(self):
        doc = default_source()
        assert doc["elements"]
        assert "paths" not in doc
        assert all("${" not in str(e.get("source", "")) for e in doc["elements"])

    def test_contains_nested_composition(self):
        root = SceneNode.from_dict(default_source())
        compositions = [n for n in walk(root) if n.type == "composition"]
        assert any(
            child.is_container for node in compositions for child in node.children
        )
