"""Tests for the table view."""

from ecomap.config.models import TableConfig
from ecomap.config.resolver import default_config
from ecomap.graph.table import (
    page_count,
    paginate,
    project_row,
    sort_rows,
    table_rows,
    table_view_data,
)


class TestTableRows:
    def test_project_row(self, sample_entities):
        row = project_row(sample_entities[0], default_config().table)

        assert row == {
            "name": "Moonbeam",
            "type": "parachain",
            "description": "EVM-compatible smart contract parachain",
            "metrics.stars": 900,
            "website": "https://moonbeam.network",
        }

    def test_default_sort_missing_last(self, sample_entities):
        rows = table_rows(sample_entities, default_config().table)

        assert [r["name"] for r in rows] == ["Moonbeam", "Acala", "StellaSwap", "Subscan"]

    def test_ascending_sort_missing_last(self, sample_entities):
        rows = table_rows(sample_entities, default_config().table)
        rows = sort_rows(rows, "metrics.stars", "asc")

        assert [r["name"] for r in rows] == ["StellaSwap", "Acala", "Moonbeam", "Subscan"]

    def test_text_sort_is_case_insensitive(self):
        rows = [{"name": "beta"}, {"name": "Alpha"}, {"name": "gamma"}]
        assert [r["name"] for r in sort_rows(rows, "name")] == ["Alpha", "beta", "gamma"]

    def test_no_default_sort(self, sample_entities):
        table = TableConfig.model_validate(
            {"columns": [{"key": "name", "label": "Name", "type": "string"}]}
        )
        rows = table_rows(sample_entities, table)

        assert [r["name"] for r in rows] == ["Moonbeam", "Acala", "StellaSwap", "Subscan"]


class TestPaginate:
    def test_pages(self):
        rows = list(range(10))

        assert paginate(rows, 1, 3) == [0, 1, 2]
        assert paginate(rows, 4, 3) == [9]
        assert paginate(rows, 5, 3) == []

    def test_no_page_size(self):
        assert paginate([1, 2, 3], 2, None) == [1, 2, 3]

    def test_page_count(self):
        assert page_count(10, 3) == 4
        assert page_count(0, 3) == 1
        assert page_count(10, None) == 1


class TestTableViewData:
    def test_payload(self, sample_entities):
        table = default_config().table.model_copy(update={"page_size": 3})
        payload = table_view_data(sample_entities, table, page=2)

        assert payload["total"] == 4
        assert payload["pageCount"] == 2
        assert [r["name"] for r in payload["rows"]] == ["Subscan"]
        assert payload["columns"][0] == {
            "key": "name",
            "label": "Name",
            "type": "string",
            "sortable": True,
            "filterable": True,
        }
