"""Pydantic models for ecosystem records."""

import logging
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MetricValue = int | float
ExtraValue = int | float | str | list[str]

# Fields an entity document may carry besides free-form extras
ENTITY_FIELDS = {
    "slug",
    "name",
    "type",
    "description",
    "website",
    "github",
    "twitter",
    "metrics",
    "tags",
    "relationships",
    "extra",
}

REQUIRED_ENTITY_FIELDS = ("slug", "name", "type")

logger = logging.getLogger(__name__)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_extra_value(value: object) -> bool:
    if isinstance(value, str) or _is_number(value):
        return True
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


class EmbeddedRelationship(BaseModel):
    """An outbound relationship declared inside an entity record."""

    model_config = ConfigDict(frozen=True)

    target: str
    type: str
    weight: MetricValue | None = None


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, int, float))


def _embedded_relationships(slug: object, entries: list) -> list[dict]:
    """Keep embedded relationship entries that name a target and a type."""
    kept = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-mapping relationship on %r", slug)
            continue
        target, rel_type = entry.get("target"), entry.get("type")
        if not all(_is_scalar(v) and v != "" for v in (target, rel_type)):
            logger.debug("Skipping relationship without target or type on %r", slug)
            continue
        rel = dict(entry, target=str(target), type=str(rel_type))
        if not _is_number(rel.get("weight")):
            rel.pop("weight", None)
        kept.append(rel)
    return kept


class Entity(BaseModel):
    """A cataloged ecosystem project."""

    model_config = ConfigDict(frozen=True)

    slug: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    description: str | None = None
    website: str | None = None
    github: str | None = None
    twitter: str | None = None
    metrics: dict[str, MetricValue] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    relationships: list[EmbeddedRelationship] = Field(default_factory=list)
    extra: dict[str, ExtraValue] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def normalize_entity(cls, data: dict) -> dict:
        """Collect unknown keys into extra and drop unusable values.

        Scalar identity fields and tags are coerced to strings. Embedded
        relationships without a target or type are skipped rather than
        failing the whole entity.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)

        extra = data.get("extra")
        extra = (
            {str(k): v for k, v in extra.items() if _is_extra_value(v)}
            if isinstance(extra, dict)
            else {}
        )
        for key in [k for k in data if k not in ENTITY_FIELDS]:
            value = data.pop(key)
            if _is_extra_value(value):
                extra[str(key)] = value
        data["extra"] = extra

        for key in ("slug", "name", "type"):
            if _is_scalar(data.get(key)):
                data[key] = str(data[key])

        for key in ("description", "website", "github", "twitter"):
            value = data.get(key)
            if _is_scalar(value):
                data[key] = str(value)
            elif value is not None:
                data.pop(key)

        metrics = data.get("metrics")
        if isinstance(metrics, dict):
            data["metrics"] = {
                str(k): v for k, v in metrics.items() if _is_number(v)
            }
        elif "metrics" in data:
            data.pop("metrics")

        tags = data.get("tags")
        if isinstance(tags, list):
            data["tags"] = [str(tag) for tag in tags if _is_scalar(tag)]
        elif _is_scalar(tags):
            data["tags"] = [str(tags)]
        elif "tags" in data:
            data.pop("tags")

        relationships = data.get("relationships")
        if isinstance(relationships, list):
            data["relationships"] = _embedded_relationships(
                data.get("slug"), relationships
            )
        elif "relationships" in data:
            data.pop("relationships")

        return data

    def lookup(self, path: str) -> object:
        """Resolve a dotted field path such as ``metrics.stars``.

        Returns None when any segment is missing.
        """
        head, _, rest = path.partition(".")
        if head == "metrics":
            return self.metrics.get(rest) if rest else self.metrics
        if head == "extra":
            return self.extra.get(rest) if rest else self.extra
        if rest:
            return None
        if head in ENTITY_FIELDS:
            return getattr(self, head)
        return self.extra.get(head)


class RelationshipMetadata(BaseModel):
    """Provenance details attached to a curated relationship."""

    model_config = ConfigDict(frozen=True)

    notes: str | None = None
    confidence: float | None = None
    established: str | None = None

    @field_validator("established", mode="before")
    @classmethod
    def coerce_date(cls, value: object) -> object:
        """YAML turns bare dates into date objects; keep them as ISO strings."""
        if isinstance(value, date):
            return value.isoformat()
        return value


class Relationship(BaseModel):
    """A resolved, directed relationship between two entity slugs."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str
    target: str
    type: str
    weight: MetricValue = 1
    description: str | None = None
    category: str | None = None
    is_manual: bool = Field(default=False, alias="isManual")
    bidirectional: bool = False
    metadata: RelationshipMetadata | None = None

    @property
    def key(self) -> str:
        """Deduplication key, compared exactly."""
        return f"{self.source}|{self.target}|{self.type}"

    def to_dict(self) -> dict:
        """Serialize with document-style keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ManualRelationship(BaseModel):
    """A relationship authored in the manual relationships document."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(min_length=1)
    target: str = Field(min_length=1)
    type: str = Field(min_length=1)
    weight: MetricValue = 1
    description: str | None = None
    category: str | None = None
    bidirectional: bool = False
    metadata: RelationshipMetadata | None = None


class RelationshipCategory(BaseModel):
    """Styling record for a relationship category."""

    name: str
    color: str
    style: Literal["solid", "dashed", "dotted"] | None = None
    description: str | None = None


class RelationshipType(BaseModel):
    """Styling record for a relationship type."""

    name: str
    description: str | None = None
    default_weight: MetricValue | None = None
    color: str | None = None


class ManualRelationshipsConfig(BaseModel):
    """Root model for the manual relationships document."""

    relationships: list[ManualRelationship] = Field(default_factory=list)
    categories: dict[str, RelationshipCategory] = Field(default_factory=dict)
    types: dict[str, RelationshipType] = Field(default_factory=dict)

    def get_category(self, key: str | None) -> RelationshipCategory | None:
        """Get a category by key."""
        if key is None:
            return None
        return self.categories.get(key)

    def get_type(self, key: str) -> RelationshipType | None:
        """Get a relationship type by key."""
        return self.types.get(key)
