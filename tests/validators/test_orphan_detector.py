"""Tests for orphan entity detector."""

from ecomap.data.dataset import build_dataset
from ecomap.graph.builder import build_graph
from ecomap.schema.models import Entity
from ecomap.validators.orphan_detector import check_orphan_entities


class TestOrphanDetector:
    def test_detects_orphan(self, sample_graph):
        result = check_orphan_entities(sample_graph)

        assert result.is_valid
        assert len(result.warnings) == 0
        assert [i.subject for i in result.infos] == ["subscan"]
        assert result.infos[0].code == "ORPHAN_ENTITY"

    def test_multiple_orphans(self):
        entities = [
            Entity(slug="one", name="One", type="dapp"),
            Entity(slug="two", name="Two", type="dapp"),
        ]
        graph = build_graph(build_dataset(entities))

        result = check_orphan_entities(graph)

        assert {i.subject for i in result.infos} == {"one", "two"}
