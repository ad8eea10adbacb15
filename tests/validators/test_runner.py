"""Tests for the validation runner."""

import pytest

from ecomap.data.errors import DataLoadError
from ecomap.data.sources import DirectorySource
from ecomap.schema.errors import SchemaLoadError
from ecomap.validators.entity_schema import too_many_invalid
from ecomap.validators.runner import (
    run_validators,
    validate_data_source,
    validate_relationships_file,
)

INVALID_DAPPS = """
- slug: Bad Slug
  name: Broken
  type: dapp
- slug: nameless
  type: dapp
- slug: typeless
  name: Typeless
"""


class TestRunValidators:
    def test_combines_structural_checks(self, sample_dataset, sample_graph):
        result = run_validators(sample_dataset, sample_graph)

        codes = {i.code for i in result.issues}
        assert codes == {"UNDEFINED_ENTITY_REF", "UNDEFINED_TYPE_REF", "ORPHAN_ENTITY"}
        assert result.is_valid


class TestValidateDataSource:
    def test_valid_root(self, data_root, schema_file):
        result = validate_data_source(DirectorySource(data_root), schema_file)

        assert result.checked == 4
        assert result.is_valid
        assert not too_many_invalid(result)

    def test_majority_invalid(self, make_data_root, schema_file):
        root = make_data_root(dapps=INVALID_DAPPS)
        result = validate_data_source(DirectorySource(root), schema_file)

        assert result.checked == 5
        assert len(result.errors) == 3
        assert too_many_invalid(result)

    def test_no_records(self, tmp_path, schema_file):
        with pytest.raises(DataLoadError):
            validate_data_source(DirectorySource(tmp_path), schema_file)

    def test_missing_schema(self, data_root, tmp_path):
        with pytest.raises(SchemaLoadError):
            validate_data_source(DirectorySource(data_root), tmp_path / "missing.yml")


class TestValidateRelationshipsFile:
    def test_file(self, data_root):
        result = validate_relationships_file(data_root / "relationships.yml")
        assert result.checked == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            validate_relationships_file(tmp_path / "nope.yml")
