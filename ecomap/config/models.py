"""Pydantic models for the render configuration."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ViewType = Literal["table", "graph"]
ColumnType = Literal["string", "number", "date", "link", "tags"]
ScaleType = Literal["linear", "log", "sqrt"]

VIEW_TYPES = ("table", "graph")
COLUMN_TYPES = ("string", "number", "date", "link", "tags")
SCALE_TYPES = ("linear", "log", "sqrt")


class ConfigModel(BaseModel):
    """Base for configuration sections; documents use camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StylingRule(ConfigModel):
    """Maps a data field onto a visual property through a scale."""

    property: str
    field: str
    scale: ScaleType = "linear"
    domain: tuple[float, float] | None = None
    range: list[float] | list[str] | None = None


class TableColumn(ConfigModel):
    """A table column bound to a dotted entity field."""

    key: str
    label: str
    type: ColumnType
    sortable: bool | None = None
    filterable: bool | None = None
    width: int | None = None


class DefaultSort(ConfigModel):
    column: str
    direction: Literal["asc", "desc"] = "asc"


class TableConfig(ConfigModel):
    columns: list[TableColumn] = Field(default_factory=list)
    default_sort: DefaultSort | None = None
    page_size: int | None = None


class NodeStyling(ConfigModel):
    size_by: StylingRule | None = None
    color_by: StylingRule | None = None
    label_field: str | None = None
    show_labels: bool | None = None


class EdgeStyling(ConfigModel):
    width_by: StylingRule | None = None
    color_by: StylingRule | None = None
    show_labels: bool | None = None
    show_manual_relationships: bool | None = None
    show_entity_relationships: bool | None = None
    relationship_types: list[str] | None = None
    relationship_categories: list[str] | None = None
    style_by_category: bool | None = None
    style_by_type: bool | None = None


class GraphConfig(ConfigModel):
    physics: dict[str, float] = Field(default_factory=dict)
    nodes: NodeStyling = Field(default_factory=NodeStyling)
    edges: EdgeStyling = Field(default_factory=EdgeStyling)
    width: int | None = None
    height: int | None = None


class RenderConfig(ConfigModel):
    """Root render configuration."""

    view_type: ViewType
    entity_types: list[str]
    table: TableConfig | None = None
    graph: GraphConfig | None = None

    def to_dict(self) -> dict:
        """Serialize back to document form."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def allows(self, entity_type: str) -> bool:
        """Check whether an entity type is shown."""
        return entity_type in self.entity_types
