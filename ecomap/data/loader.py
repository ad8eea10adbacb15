"""Entity loading from a manifest of data resources."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable

from ..schema.loader import parse_entity
from ..schema.models import REQUIRED_ENTITY_FIELDS, Entity
from .errors import DataLoadError, ResourceError, ResourceNotFoundError
from .sources import ResourceSource

logger = logging.getLogger(__name__)

DATA_DIRECTORY = "data"

DATA_GROUPS = (
    "parachains",
    "dapps",
    "infrastructure",
    "tools",
    "wallets",
    "bridges",
    "defi",
    "nft",
    "gaming",
)

CATCH_ALL_RESOURCE = "data.yml"

DATA_MANIFEST = tuple(f"{DATA_DIRECTORY}/{group}.yml" for group in DATA_GROUPS) + (
    CATCH_ALL_RESOURCE,
)

MAX_WORKERS = 8


@dataclass(frozen=True)
class ResourceOutcome:
    """Result of fetching one manifest resource."""

    name: str
    value: Any = None
    error: str | None = None
    missing: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_resource(source: ResourceSource, name: str) -> ResourceOutcome:
    """Fetch and parse a single resource, capturing failure as an outcome."""
    try:
        return ResourceOutcome(name=name, value=source.fetch_document(name))
    except ResourceNotFoundError as e:
        return ResourceOutcome(name=name, error=str(e), missing=True)
    except ResourceError as e:
        return ResourceOutcome(name=name, error=str(e))


def fetch_manifest(
    source: ResourceSource,
    manifest: Iterable[str] = DATA_MANIFEST,
    max_workers: int = MAX_WORKERS,
) -> list[ResourceOutcome]:
    """Fetch every manifest resource concurrently.

    Returns:
        One outcome per resource, in manifest order.
    """
    names = list(manifest)
    if not names:
        return []

    with ThreadPoolExecutor(max_workers=min(max_workers, len(names))) as executor:
        return list(executor.map(lambda name: fetch_resource(source, name), names))


def flatten_records(document: Any) -> list[Any]:
    """Collect entity records from a parsed document.

    A list is taken wholesale. A mapping contributes each of its values that
    is itself a list, so both flat and grouped files are supported.
    """
    if isinstance(document, list):
        return list(document)

    records: list[Any] = []
    if isinstance(document, dict):
        for value in document.values():
            if isinstance(value, list):
                records.extend(value)
    return records


def collect_records(outcomes: Iterable[ResourceOutcome]) -> list[Any]:
    """Concatenate the records of all successful outcomes, logging failures."""
    records: list[Any] = []
    for outcome in outcomes:
        if outcome.missing:
            logger.debug("Skipping %s: %s", outcome.name, outcome.error)
            continue
        if not outcome.ok:
            logger.warning("Could not load %s: %s", outcome.name, outcome.error)
            continue
        found = flatten_records(outcome.value)
        logger.debug("Loaded %d record(s) from %s", len(found), outcome.name)
        records.extend(found)
    return records


def has_identity(record: Any) -> bool:
    """Check that a raw record carries a slug, name and type."""
    return isinstance(record, dict) and all(
        isinstance(record.get(key), (str, int, float)) and record.get(key)
        for key in REQUIRED_ENTITY_FIELDS
    )


def select_valid_entities(records: Iterable[Any]) -> list[Entity]:
    """Parse records into entities, dropping ones without identity fields.

    Any other malformed value is normalised away by the model, so a record
    with a slug, name and type always survives.
    """
    records = list(records)
    entities = [parse_entity(record) for record in records if has_identity(record)]

    dropped = len(records) - len(entities)
    if dropped:
        logger.warning("Filtered out %d invalid entities", dropped)

    return entities


def load_entities(
    source: ResourceSource,
    manifest: Iterable[str] = DATA_MANIFEST,
) -> list[Entity]:
    """Load all entities reachable through a manifest.

    Individual resources that are missing or broken are skipped.

    Raises:
        DataLoadError: If no valid entity survives filtering.
    """
    outcomes = fetch_manifest(source, manifest)
    records = collect_records(outcomes)
    logger.info("Loaded %d raw entities from %r", len(records), source)

    entities = select_valid_entities(records)
    if not entities:
        raise DataLoadError(
            "No entities found. Make sure data files are available in the data directory."
        )

    return entities
