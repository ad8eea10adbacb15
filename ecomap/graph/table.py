"""Row projection for the table view."""

from typing import Any, Iterable

from ..config.models import TableConfig
from ..schema.models import Entity


def project_row(entity: Entity, table: TableConfig) -> dict[str, Any]:
    """Pick the configured columns out of an entity, keyed by column key."""
    return {column.key: entity.lookup(column.key) for column in table.columns}


def _sort_key(value: Any) -> tuple:
    # Missing values sort last, numbers before text
    if value is None:
        return (2, 0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    if isinstance(value, list):
        return (1, 0, ", ".join(str(v) for v in value).lower())
    return (1, 0, str(value).lower())


def sort_rows(rows: list[dict[str, Any]], column: str, direction: str = "asc") -> list[dict[str, Any]]:
    """Sort rows by a column; missing values stay at the end either way."""
    present = [r for r in rows if r.get(column) is not None]
    missing = [r for r in rows if r.get(column) is None]
    present.sort(key=lambda r: _sort_key(r.get(column)), reverse=direction == "desc")
    return present + missing


def table_rows(entities: Iterable[Entity], table: TableConfig) -> list[dict[str, Any]]:
    """Project entities into rows, applying the default sort if configured."""
    rows = [project_row(entity, table) for entity in entities]
    if table.default_sort is not None:
        rows = sort_rows(rows, table.default_sort.column, table.default_sort.direction)
    return rows


def paginate(rows: list[Any], page: int, page_size: int | None) -> list[Any]:
    """Return one page of rows; pages are numbered from 1."""
    if not page_size or page_size <= 0:
        return list(rows)
    start = max(page - 1, 0) * page_size
    return rows[start:start + page_size]


def page_count(total: int, page_size: int | None) -> int:
    if not page_size or page_size <= 0:
        return 1
    return max(1, -(-total // page_size))


def table_view_data(
    entities: Iterable[Entity],
    table: TableConfig,
    page: int = 1,
) -> dict[str, Any]:
    """Build the payload for one page of the table view."""
    rows = table_rows(entities, table)
    return {
        "columns": [c.model_dump(by_alias=True, exclude_none=True) for c in table.columns],
        "rows": paginate(rows, page, table.page_size),
        "page": page,
        "pageCount": page_count(len(rows), table.page_size),
        "total": len(rows),
    }
