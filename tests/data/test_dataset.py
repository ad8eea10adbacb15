"""Tests for the resolved dataset."""

import pytest

from ecomap.data.dataset import build_dataset, filter_entities, load_dataset
from ecomap.data.errors import DataLoadError
from ecomap.data.sources import DirectorySource


class TestBuildDataset:
    def test_metadata(self, sample_dataset):
        metadata = sample_dataset.metadata

        assert metadata.total_entities == 4
        assert metadata.entity_type_counts == {"parachain": 2, "dapp": 1, "infrastructure": 1}
        assert metadata.last_updated

    def test_entity_types_in_first_seen_order(self, sample_dataset):
        assert sample_dataset.entity_types == ("parachain", "dapp", "infrastructure")

    def test_styles_carried(self, sample_dataset):
        assert "technical" in sample_dataset.categories
        assert "integrates" in sample_dataset.types

    def test_without_manual_config(self, sample_entities):
        dataset = build_dataset(sample_entities)
        assert len(dataset.relationships) == 2
        assert dataset.categories == {}

    def test_get_entity(self, sample_dataset):
        assert sample_dataset.get_entity("acala").name == "Acala"
        assert sample_dataset.get_entity("nope") is None

    def test_to_dict(self, sample_dataset):
        data = sample_dataset.to_dict()

        assert data["metadata"]["totalEntities"] == 4
        assert data["entityTypes"] == ["parachain", "dapp", "infrastructure"]
        assert data["relationships"][0]["isManual"] is True
        assert data["categories"]["business"]["style"] == "dashed"


class TestFilterEntities:
    def test_by_type(self, sample_dataset):
        result = sample_dataset.filter_entities(types=["parachain"])
        assert [e.slug for e in result] == ["moonbeam", "acala"]

    def test_empty_types_means_all(self, sample_dataset):
        assert len(sample_dataset.filter_entities(types=[])) == 4

    def test_query_matches_name_case_insensitive(self, sample_entities):
        result = filter_entities(sample_entities, query="STELLA")
        assert [e.slug for e in result] == ["stellaswap"]

    def test_query_matches_description_and_tags(self, sample_entities):
        assert [e.slug for e in filter_entities(sample_entities, query="explorer")] == ["subscan"]
        assert [e.slug for e in filter_entities(sample_entities, query="evm")] == ["moonbeam"]

    def test_type_and_query_combined(self, sample_entities):
        result = filter_entities(sample_entities, types=["dapp"], query="moon")
        assert result == []


class TestLoadDataset:
    def test_loads_sample_root(self, data_root):
        dataset = load_dataset(DirectorySource(data_root))

        assert dataset.get_all_slugs() == ["moonbeam", "acala", "stellaswap", "subscan"]
        assert len(dataset.relationships) == 5

    def test_empty_root(self, tmp_path):
        with pytest.raises(DataLoadError):
            load_dataset(DirectorySource(tmp_path))
