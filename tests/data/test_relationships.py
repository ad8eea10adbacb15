"""Tests for relationship resolution."""

import logging

from ecomap.data.relationships import (
    entity_relationships,
    expand_manual_relationship,
    load_manual_relationships,
    merge_relationships,
    parse_manual_relationships,
    resolve_relationships,
)
from ecomap.data.sources import DirectorySource
from ecomap.schema.models import Entity, ManualRelationship, Relationship


def _entity(slug, relationships=None):
    return Entity.model_validate(
        {"slug": slug, "name": slug.title(), "type": "dapp", "relationships": relationships or []}
    )


class TestEntityRelationships:
    def test_weight_defaults_to_one(self):
        edges = entity_relationships([_entity("a", [{"target": "b", "type": "uses"}])])

        assert edges == [Relationship(source="a", target="b", type="uses", weight=1)]
        assert edges[0].is_manual is False

    def test_explicit_weight_kept(self):
        edges = entity_relationships(
            [_entity("a", [{"target": "b", "type": "uses", "weight": 4}])]
        )
        assert edges[0].weight == 4


class TestExpandManualRelationship:
    def test_one_way(self):
        edges = expand_manual_relationship(
            ManualRelationship(source="a", target="b", type="uses")
        )

        assert len(edges) == 1
        assert edges[0].is_manual is True

    def test_bidirectional_adds_reverse(self):
        forward, reverse = expand_manual_relationship(
            ManualRelationship(
                source="a", target="b", type="uses", weight=3, bidirectional=True
            )
        )

        assert (forward.source, forward.target) == ("a", "b")
        assert forward.bidirectional is True
        assert (reverse.source, reverse.target) == ("b", "a")
        assert reverse.bidirectional is False
        assert reverse.weight == 3
        assert reverse.is_manual is True


class TestMergeRelationships:
    def test_manual_overrides_entity(self, caplog):
        entity_edge = Relationship(source="a", target="b", type="uses", weight=2)
        manual_edge = Relationship(source="a", target="b", type="uses", weight=8, is_manual=True)

        with caplog.at_level(logging.INFO):
            merged = merge_relationships([entity_edge], [manual_edge])

        assert merged == [manual_edge]
        assert "a|b|uses" in caplog.text

    def test_overridden_key_keeps_position(self):
        first = Relationship(source="a", target="b", type="uses")
        second = Relationship(source="b", target="c", type="uses")
        manual = Relationship(source="a", target="b", type="uses", is_manual=True)

        merged = merge_relationships([first, second], [manual])

        assert [r.key for r in merged] == ["a|b|uses", "b|c|uses"]
        assert merged[0].is_manual

    def test_last_manual_entry_wins(self):
        one = Relationship(source="a", target="b", type="uses", weight=1, is_manual=True)
        two = Relationship(source="a", target="b", type="uses", weight=2, is_manual=True)

        assert merge_relationships([], [one, two]) == [two]

    def test_keys_are_unique(self, sample_dataset):
        keys = [r.key for r in sample_dataset.relationships]
        assert len(keys) == len(set(keys))


class TestResolveRelationships:
    def test_sample_resolution(self, sample_entities, manual_config):
        resolved = resolve_relationships(sample_entities, manual_config)

        assert [r.key for r in resolved] == [
            "moonbeam|stellaswap|hosts",
            "stellaswap|moonbeam|built_on",
            "acala|moonbeam|integrates",
            "moonbeam|acala|integrates",
            "subscan|unknown-chain|indexes",
        ]

        hosts = resolved[0]
        assert hosts.is_manual
        assert hosts.weight == 9
        assert hosts.category == "business"

    def test_endpoints_not_checked(self, sample_entities, manual_config):
        resolved = resolve_relationships(sample_entities, manual_config)
        assert any(r.target == "unknown-chain" for r in resolved)

    def test_without_manual_config(self, sample_entities):
        resolved = resolve_relationships(sample_entities)
        assert len(resolved) == 2
        assert not any(r.is_manual for r in resolved)


class TestParseManualRelationships:
    def test_skips_malformed_entries(self, caplog):
        document = {
            "relationships": [
                {"source": "a", "target": "b", "type": "uses"},
                {"source": "a", "type": "uses"},
                "not-a-mapping",
            ]
        }
        with caplog.at_level(logging.WARNING):
            config = parse_manual_relationships(document)

        assert len(config.relationships) == 1
        assert "Skipping manual relationship 2" in caplog.text
        assert "Skipping manual relationship 3" in caplog.text

    def test_categories_and_types(self, manual_config):
        assert set(manual_config.categories) == {"technical", "business"}
        assert manual_config.categories["business"].style == "dashed"
        assert manual_config.types["integrates"].default_weight == 5

    def test_invalid_category_skipped(self):
        config = parse_manual_relationships(
            {"categories": {"broken": {"name": "Broken"}, "ok": {"name": "OK", "color": "#000000"}}}
        )
        assert list(config.categories) == ["ok"]

    def test_non_mapping_document(self):
        config = parse_manual_relationships(["a", "b"])
        assert config.relationships == []

    def test_empty_document(self):
        assert parse_manual_relationships(None).relationships == []


class TestLoadManualRelationships:
    def test_loads_from_source(self, data_root):
        config = load_manual_relationships(DirectorySource(data_root))
        assert len(config.relationships) == 3

    def test_missing_document(self, tmp_path):
        config = load_manual_relationships(DirectorySource(tmp_path))
        assert config.relationships == []
        assert config.categories == {}

    def test_broken_document(self, tmp_path):
        (tmp_path / "relationships.yml").write_text("relationships: [")
        config = load_manual_relationships(DirectorySource(tmp_path))
        assert config.relationships == []
