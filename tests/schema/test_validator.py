"""Tests for the JSON-Schema entity validator."""

import pytest

from ecomap.schema.errors import SchemaLoadError
from ecomap.schema.validator import SchemaValidator, load_schema


@pytest.fixture
def validator(entity_schema):
    return SchemaValidator(entity_schema)


class TestSchemaValidator:
    def test_valid_record(self, validator):
        record = {"slug": "moonbeam", "name": "Moonbeam", "type": "parachain"}
        assert validator.validate(record) == []
        assert validator.is_valid(record)

    def test_one_error_per_violated_constraint(self, validator):
        record = {"slug": "Bad Slug", "name": "", "type": "chain"}
        errors = validator.validate(record)

        assert [e.field for e in errors] == ["/name", "/slug", "/type"]

    def test_missing_required_field_located_at_root(self, validator):
        errors = validator.validate({"slug": "moonbeam", "name": "Moonbeam"})

        assert len(errors) == 1
        assert "'type' is a required property" in errors[0].message
        assert errors[0].field.startswith("#/")

    def test_nested_location(self, validator):
        record = {
            "slug": "moonbeam",
            "name": "Moonbeam",
            "type": "parachain",
            "relationships": [{"target": "acala"}],
        }
        errors = validator.validate(record)

        assert errors[0].field == "/relationships/0"

    def test_error_value_reported(self, validator):
        errors = validator.validate(
            {"slug": "moonbeam", "name": "Moonbeam", "type": "parachain", "metrics": {"stars": "x"}}
        )
        assert errors[0].value == "x"
        assert str(errors[0]).startswith("/metrics/stars:")

    def test_malformed_schema(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            SchemaValidator({"type": "not-a-type"})
        assert "Invalid JSON schema" in str(exc_info.value)


class TestLoadSchema:
    def test_load_from_file(self, schema_file):
        validator = load_schema(schema_file)
        assert validator.schema["required"] == ["slug", "name", "type"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            load_schema(tmp_path / "missing.yml")
