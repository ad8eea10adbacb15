"""The resolved in-memory dataset consumed by the views."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from ..schema.models import (
    Entity,
    ManualRelationshipsConfig,
    Relationship,
    RelationshipCategory,
    RelationshipType,
)
from .loader import DATA_MANIFEST, load_entities
from .relationships import load_manual_relationships, resolve_relationships
from .sources import ResourceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetMetadata:
    """Summary information about a loaded dataset."""

    last_updated: str
    total_entities: int
    entity_type_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class EcosystemDataset:
    """An immutable snapshot of entities and their resolved relationships."""

    entities: tuple[Entity, ...]
    relationships: tuple[Relationship, ...]
    entity_types: tuple[str, ...]
    metadata: DatasetMetadata
    categories: dict[str, RelationshipCategory] = field(default_factory=dict)
    types: dict[str, RelationshipType] = field(default_factory=dict)

    def get_entity(self, slug: str) -> Entity | None:
        """Get an entity by slug."""
        for entity in self.entities:
            if entity.slug == slug:
                return entity
        return None

    def get_all_slugs(self) -> list[str]:
        """Get all entity slugs."""
        return [entity.slug for entity in self.entities]

    def filter_entities(
        self,
        types: Iterable[str] | None = None,
        query: str | None = None,
    ) -> list[Entity]:
        """Filter entities by type and a free-text query.

        Args:
            types: Allowed entity types. None or empty means all types.
            query: Case-insensitive text matched against name, slug,
                description and tags.
        """
        return filter_entities(self.entities, types, query)

    def to_dict(self) -> dict:
        """Serialize to plain data."""
        return {
            "entities": [e.model_dump(exclude_none=True) for e in self.entities],
            "entityTypes": list(self.entity_types),
            "relationships": [r.to_dict() for r in self.relationships],
            "metadata": {
                "lastUpdated": self.metadata.last_updated,
                "totalEntities": self.metadata.total_entities,
                "entityTypeCounts": dict(self.metadata.entity_type_counts),
            },
            "categories": {
                k: v.model_dump(exclude_none=True) for k, v in self.categories.items()
            },
            "types": {k: v.model_dump(exclude_none=True) for k, v in self.types.items()},
        }


def _matches(entity: Entity, query: str) -> bool:
    if query in entity.name.lower() or query in entity.slug.lower():
        return True
    if entity.description and query in entity.description.lower():
        return True
    return any(query in tag.lower() for tag in entity.tags)


def filter_entities(
    entities: Iterable[Entity],
    types: Iterable[str] | None = None,
    query: str | None = None,
) -> list[Entity]:
    """Filter entities by type allow-list and free-text query."""
    selected = list(entities)

    allowed = set(types or [])
    if allowed:
        selected = [e for e in selected if e.type in allowed]

    needle = (query or "").strip().lower()
    if needle:
        selected = [e for e in selected if _matches(e, needle)]

    return selected


def build_metadata(entities: Iterable[Entity]) -> DatasetMetadata:
    """Count entities per type and stamp the load time."""
    entities = list(entities)
    counts = Counter(entity.type for entity in entities)
    return DatasetMetadata(
        last_updated=datetime.now(timezone.utc).isoformat(),
        total_entities=len(entities),
        entity_type_counts=dict(counts),
    )


def build_dataset(
    entities: Iterable[Entity],
    manual_config: ManualRelationshipsConfig | None = None,
) -> EcosystemDataset:
    """Assemble a dataset from loaded entities and the manual relationships."""
    entities = tuple(entities)
    manual_config = manual_config or ManualRelationshipsConfig()

    relationships = resolve_relationships(entities, manual_config)
    metadata = build_metadata(entities)
    entity_types = tuple(dict.fromkeys(entity.type for entity in entities))

    return EcosystemDataset(
        entities=entities,
        relationships=tuple(relationships),
        entity_types=entity_types,
        metadata=metadata,
        categories=dict(manual_config.categories),
        types=dict(manual_config.types),
    )


def load_dataset(
    source: ResourceSource,
    manifest: Iterable[str] = DATA_MANIFEST,
) -> EcosystemDataset:
    """Load entities and manual relationships from a source.

    Raises:
        DataLoadError: If no valid entity could be loaded.
    """
    entities = load_entities(source, manifest)
    manual_config = load_manual_relationships(source)
    dataset = build_dataset(entities, manual_config)

    logger.info("Successfully loaded %d valid entities", dataset.metadata.total_entities)
    logger.info("Entity types: %s", ", ".join(dataset.entity_types))
    logger.debug("Entity counts: %s", dataset.metadata.entity_type_counts)
    return dataset
