"""YAML loading and record parsing."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import Entity


def parse_yaml_string(yaml_string: str, source: str | None = None) -> Any:
    """Parse a YAML string into plain Python data.

    Args:
        yaml_string: The YAML content.
        source: Name of the document, used in error messages.

    Returns:
        The parsed data. An empty document yields None.

    Raises:
        SchemaLoadError: If the YAML cannot be parsed.
    """
    try:
        return yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", source) from e


def load_yaml_document(path: str | Path) -> Any:
    """Load a YAML file of any shape.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    return parse_yaml_string(text, str(path))


def load_yaml(path: str | Path) -> dict:
    """Load a YAML file whose root must be a mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed YAML data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    data = load_yaml_document(path)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected YAML mapping at root, got {type(data).__name__}", str(path)
        )

    return data


def dump_yaml(data: Any) -> str:
    """Serialize data as block-style YAML, keeping key order."""
    return yaml.safe_dump(
        data, default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def format_validation_errors(error: ValidationError) -> list[dict]:
    """Flatten a pydantic ValidationError into loc/msg/type dictionaries."""
    return [
        {
            "loc": ".".join(str(x) for x in err["loc"]),
            "msg": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def parse_entity(data: dict) -> Entity:
    """Parse a raw record into an Entity.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return Entity.model_validate(data)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise SchemaValidationError(
            f"Entity validation failed with {len(errors)} error(s)", errors
        ) from e
