"""Field-by-field comparison of two entity schema documents."""

from dataclasses import dataclass, field
from pathlib import Path

from .errors import SchemaLoadError
from .loader import load_yaml

# Fields the loader depends on to identify an entity
CRITICAL_FIELDS = ("slug", "name", "type")


@dataclass
class CompatibilityResult:
    """Outcome of comparing an old schema with a new one."""

    compatible: bool = True
    breaking_changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    new_properties: list[str] = field(default_factory=list)
    removed_properties: list[str] = field(default_factory=list)

    def add_breaking_change(self, message: str) -> None:
        """Record a breaking change, which makes the schemas incompatible."""
        self.breaking_changes.append(message)
        self.compatible = False


def extract_properties(schema: dict, prefix: str = "") -> list[str]:
    """List every property path declared in a schema, depth first.

    Nested ``properties`` blocks contribute dotted paths such as
    ``metrics.stars``.
    """
    found: dict[str, None] = {}

    properties = schema.get("properties")
    if isinstance(properties, dict):
        for key, value in properties.items():
            full_path = f"{prefix}.{key}" if prefix else key
            found[full_path] = None
            if isinstance(value, dict):
                for nested in extract_properties(value, full_path):
                    found[nested] = None

    return list(found)


def extract_required_fields(schema: dict, prefix: str = "") -> list[str]:
    """List every required field path declared in a schema."""
    found: dict[str, None] = {}

    required = schema.get("required")
    if isinstance(required, list):
        for name in required:
            found[f"{prefix}.{name}" if prefix else str(name)] = None

    properties = schema.get("properties")
    if isinstance(properties, dict):
        for key, value in properties.items():
            full_path = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                for nested in extract_required_fields(value, full_path):
                    found[nested] = None

    return list(found)


def check_compatibility(old_schema: dict, new_schema: dict) -> CompatibilityResult:
    """Compare two schemas.

    New required fields and dropped critical required fields are breaking.
    Removed non-critical properties are reported as warnings.
    """
    result = CompatibilityResult()

    old_properties = extract_properties(old_schema)
    new_properties = extract_properties(new_schema)
    old_required = set(extract_required_fields(old_schema))
    new_required = extract_required_fields(new_schema)

    old_property_set = set(old_properties)
    new_property_set = set(new_properties)

    result.new_properties = [p for p in new_properties if p not in old_property_set]
    result.removed_properties = [
        p for p in old_properties if p not in new_property_set
    ]

    for name in new_required:
        if name not in old_required:
            result.add_breaking_change(f"New required field: {name}")

    new_required_set = set(new_required)
    for name in CRITICAL_FIELDS:
        if name in old_required and name not in new_required_set:
            result.add_breaking_change(f"Critical required field removed: {name}")

    for prop in result.removed_properties:
        if prop.split(".")[0] not in CRITICAL_FIELDS:
            result.warnings.append(
                f"Property removed: {prop} (may cause display issues)"
            )

    return result


def check_schema_files(old_path: str | Path, new_path: str | Path) -> CompatibilityResult:
    """Load two schema documents and compare them.

    A document that cannot be loaded is reported as a breaking change rather
    than raised.
    """
    try:
        old_schema = load_yaml(old_path)
        new_schema = load_yaml(new_path)
    except SchemaLoadError as e:
        result = CompatibilityResult()
        result.add_breaking_change(f"Failed to load schemas: {e}")
        return result

    return check_compatibility(old_schema, new_schema)
