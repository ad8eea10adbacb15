"""Data layer: resource sources, entity loading and relationship resolution."""

from .errors import (
    DataLoadError,
    ImportDataError,
    ResourceError,
    ResourceFetchError,
    ResourceNotFoundError,
)
from .sources import DirectorySource, HttpSource, ResourceSource, open_source
from .loader import (
    DATA_MANIFEST,
    ResourceOutcome,
    fetch_manifest,
    flatten_records,
    load_entities,
    select_valid_entities,
)
from .relationships import (
    expand_manual_relationship,
    load_manual_relationships,
    merge_relationships,
    parse_manual_relationships,
    resolve_relationships,
)
from .dataset import (
    DatasetMetadata,
    EcosystemDataset,
    build_dataset,
    filter_entities,
    load_dataset,
)
from .importer import EcosystemDataImporter, ImportSummary

__all__ = [
    "DataLoadError",
    "ImportDataError",
    "ResourceError",
    "ResourceFetchError",
    "ResourceNotFoundError",
    "DirectorySource",
    "HttpSource",
    "ResourceSource",
    "open_source",
    "DATA_MANIFEST",
    "ResourceOutcome",
    "fetch_manifest",
    "flatten_records",
    "load_entities",
    "select_valid_entities",
    "expand_manual_relationship",
    "load_manual_relationships",
    "merge_relationships",
    "parse_manual_relationships",
    "resolve_relationships",
    "DatasetMetadata",
    "EcosystemDataset",
    "build_dataset",
    "filter_entities",
    "load_dataset",
    "EcosystemDataImporter",
    "ImportSummary",
]
