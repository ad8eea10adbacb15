"""Schema layer for parsing and validating ecosystem records."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import (
    EmbeddedRelationship,
    Entity,
    ManualRelationship,
    ManualRelationshipsConfig,
    Relationship,
    RelationshipCategory,
    RelationshipMetadata,
    RelationshipType,
)
from .loader import (
    dump_yaml,
    load_yaml,
    load_yaml_document,
    parse_entity,
    parse_yaml_string,
)
from .validator import FieldError, SchemaValidator, load_schema
from .compatibility import CompatibilityResult, check_compatibility, check_schema_files

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "EmbeddedRelationship",
    "Entity",
    "ManualRelationship",
    "ManualRelationshipsConfig",
    "Relationship",
    "RelationshipCategory",
    "RelationshipMetadata",
    "RelationshipType",
    "dump_yaml",
    "load_yaml",
    "load_yaml_document",
    "parse_entity",
    "parse_yaml_string",
    "FieldError",
    "SchemaValidator",
    "load_schema",
    "CompatibilityResult",
    "check_compatibility",
    "check_schema_files",
]
