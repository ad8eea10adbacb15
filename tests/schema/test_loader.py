"""Tests for schema loader."""

import pytest

from ecomap.schema.loader import (
    dump_yaml,
    load_yaml,
    load_yaml_document,
    parse_entity,
    parse_yaml_string,
)
from ecomap.schema.errors import SchemaLoadError, SchemaValidationError


class TestLoadYaml:
    def test_load_valid_yaml(self, tmp_path):
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("key: value\nlist:\n  - item1\n  - item2")

        data = load_yaml(yaml_file)
        assert data["key"] == "value"
        assert data["list"] == ["item1", "item2"]

    def test_file_not_found(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml("/nonexistent/path.yaml")
        assert "not found" in str(exc_info.value).lower()

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml(tmp_path)
        assert "not a file" in str(exc_info.value).lower()

    def test_invalid_yaml(self, tmp_path):
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("key: [unclosed bracket")

        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "Invalid YAML" in str(exc_info.value)

    def test_empty_file_returns_empty_dict(self, tmp_path):
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        data = load_yaml(yaml_file)
        assert data == {}

    def test_non_mapping_at_root(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- item1\n- item2")

        with pytest.raises(SchemaLoadError) as exc_info:
            load_yaml(yaml_file)
        assert "mapping" in str(exc_info.value).lower()

    def test_document_of_any_shape(self, tmp_path):
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- item1\n- item2")

        assert load_yaml_document(yaml_file) == ["item1", "item2"]


class TestParseYamlString:
    def test_empty_document_is_none(self):
        assert parse_yaml_string("") is None

    def test_error_carries_source(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            parse_yaml_string("a: [", "data/parachains.yml")
        assert exc_info.value.path == "data/parachains.yml"


class TestDumpYaml:
    def test_keeps_key_order(self):
        text = dump_yaml([{"slug": "b", "name": "B", "type": "dapp"}])
        assert text.index("slug") < text.index("name") < text.index("type")
        assert parse_yaml_string(text) == [{"slug": "b", "name": "B", "type": "dapp"}]


class TestParseEntity:
    def test_valid_entity(self):
        entity = parse_entity({"slug": "acala", "name": "Acala", "type": "parachain"})
        assert entity.slug == "acala"

    def test_invalid_entity(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_entity({"slug": "acala", "name": "Acala"})
        assert any(err["loc"] == "type" for err in exc_info.value.errors)
