"""Relationship resolution.

Relationships come from two places: the outbound links embedded in entity
records, and the manually curated relationships document. Both are folded into
one list keyed by ``source|target|type``. Entity edges are written first and
manual edges second, so a curated entry always replaces an embedded one with
the same key. Within each group the last write wins.
"""

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from ..schema.loader import format_validation_errors
from ..schema.models import (
    Entity,
    ManualRelationship,
    ManualRelationshipsConfig,
    Relationship,
    RelationshipCategory,
    RelationshipType,
)
from .errors import ResourceError, ResourceNotFoundError
from .sources import ResourceSource

logger = logging.getLogger(__name__)

RELATIONSHIPS_RESOURCE = "relationships.yml"


def entity_relationships(entities: Iterable[Entity]) -> list[Relationship]:
    """Emit one edge per relationship embedded in an entity."""
    edges: list[Relationship] = []
    for entity in entities:
        for rel in entity.relationships:
            edges.append(
                Relationship(
                    source=entity.slug,
                    target=rel.target,
                    type=rel.type,
                    weight=rel.weight if rel.weight is not None else 1,
                    is_manual=False,
                )
            )
    return edges


def expand_manual_relationship(manual: ManualRelationship) -> list[Relationship]:
    """Turn a manual entry into one edge, or two when it is bidirectional.

    The mirrored edge has source and target swapped and ``bidirectional``
    cleared so it is never expanded again.
    """
    forward = Relationship(
        source=manual.source,
        target=manual.target,
        type=manual.type,
        weight=manual.weight,
        description=manual.description,
        category=manual.category,
        is_manual=True,
        bidirectional=manual.bidirectional,
        metadata=manual.metadata,
    )
    if not manual.bidirectional:
        return [forward]

    reverse = forward.model_copy(
        update={
            "source": manual.target,
            "target": manual.source,
            "bidirectional": False,
        }
    )
    return [forward, reverse]


def manual_relationships(manual: Iterable[ManualRelationship]) -> list[Relationship]:
    """Expand every manual entry in document order."""
    edges: list[Relationship] = []
    for entry in manual:
        edges.extend(expand_manual_relationship(entry))
    return edges


def merge_relationships(
    entity_edges: Iterable[Relationship],
    manual_edges: Iterable[Relationship],
) -> list[Relationship]:
    """Deduplicate edges by key, entity edges first and manual edges after.

    An overwritten key keeps its original position in the output.
    """
    merged: dict[str, Relationship] = {}

    for edge in list(entity_edges) + list(manual_edges):
        previous = merged.get(edge.key)
        if previous is not None:
            logger.info(
                "Relationship %s (%s) overrides %s entry",
                edge.key,
                "manual" if edge.is_manual else "entity",
                "manual" if previous.is_manual else "entity",
            )
        merged[edge.key] = edge

    return list(merged.values())


def resolve_relationships(
    entities: Iterable[Entity],
    manual_config: ManualRelationshipsConfig | None = None,
) -> list[Relationship]:
    """Produce the deduplicated relationship set for a dataset.

    Endpoints are not checked against the loaded entities.
    """
    entity_edges = entity_relationships(entities)
    manual_edges = (
        manual_relationships(manual_config.relationships) if manual_config else []
    )
    resolved = merge_relationships(entity_edges, manual_edges)
    logger.info(
        "Resolved %d relationships (%d from entities, %d manual)",
        len(resolved),
        len(entity_edges),
        len(manual_edges),
    )
    return resolved


def parse_manual_relationships(data: Any) -> ManualRelationshipsConfig:
    """Parse a manual relationships document leniently.

    Entries are validated one at a time; an entry missing ``source``,
    ``target`` or ``type`` (or failing validation otherwise) is skipped with a
    warning instead of rejecting the whole document. Invalid category and type
    records are skipped the same way.
    """
    if not isinstance(data, dict):
        if data is not None:
            logger.warning(
                "Manual relationships document must be a mapping, got %s",
                type(data).__name__,
            )
        return ManualRelationshipsConfig()

    raw_relationships = data.get("relationships") or []
    if not isinstance(raw_relationships, list):
        logger.warning("'relationships' should be a list; ignoring it")
        raw_relationships = []

    relationships: list[ManualRelationship] = []
    for index, entry in enumerate(raw_relationships, start=1):
        try:
            relationships.append(ManualRelationship.model_validate(entry))
        except ValidationError as e:
            logger.warning(
                "Skipping manual relationship %d: %s",
                index,
                _summarize(e),
            )

    return ManualRelationshipsConfig(
        relationships=relationships,
        categories=_parse_styles(data.get("categories"), RelationshipCategory, "category"),
        types=_parse_styles(data.get("types"), RelationshipType, "type"),
    )


def _parse_styles(raw: Any, model: type, label: str) -> dict:
    if not isinstance(raw, dict):
        return {}

    styles = {}
    for key, value in raw.items():
        try:
            styles[str(key)] = model.model_validate(value)
        except ValidationError as e:
            logger.warning("Skipping relationship %s '%s': %s", label, key, _summarize(e))
    return styles


def _summarize(error: ValidationError) -> str:
    return "; ".join(f"{err['loc']}: {err['msg']}" for err in format_validation_errors(error))


def load_manual_relationships(
    source: ResourceSource,
    name: str = RELATIONSHIPS_RESOURCE,
) -> ManualRelationshipsConfig:
    """Fetch the manual relationships document.

    A missing or unreadable document yields an empty configuration.
    """
    try:
        data = source.fetch_document(name)
    except ResourceNotFoundError:
        logger.info("No manual relationships document at %s", source.describe(name))
        return ManualRelationshipsConfig()
    except ResourceError as e:
        logger.warning("Could not load manual relationships: %s", e)
        return ManualRelationshipsConfig()

    config = parse_manual_relationships(data)
    logger.info(
        "Loaded %d manual relationships, %d categories, %d types",
        len(config.relationships),
        len(config.categories),
        len(config.types),
    )
    return config
