"""JSON-Schema validation of entity records."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from .errors import SchemaLoadError
from .loader import load_yaml


@dataclass(frozen=True)
class FieldError:
    """A single violated schema constraint."""

    field: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class SchemaValidator:
    """A compiled JSON-Schema validator reused across records."""

    def __init__(self, schema: dict):
        """Compile the schema.

        The draft is picked from ``$schema``; Draft 2020-12 when absent.

        Raises:
            SchemaLoadError: If the schema itself is malformed.
        """
        cls = validator_for(schema, default=Draft202012Validator)
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaLoadError(f"Invalid JSON schema: {e.message}") from e

        self.schema = schema
        self._validator = cls(schema, format_checker=cls.FORMAT_CHECKER)

    def validate(self, record: Any) -> list[FieldError]:
        """Check a record, returning one FieldError per violated constraint."""
        errors = sorted(
            self._validator.iter_errors(record),
            key=lambda e: [str(p) for p in e.absolute_path],
        )
        return [
            FieldError(
                field=_error_location(err),
                message=err.message,
                value=err.instance,
            )
            for err in errors
        ]

    def is_valid(self, record: Any) -> bool:
        """Check whether a record conforms to the schema."""
        return self._validator.is_valid(record)


def _error_location(err) -> str:
    if err.absolute_path:
        return "/" + "/".join(str(p) for p in err.absolute_path)
    return "#/" + "/".join(str(p) for p in err.absolute_schema_path)


def load_schema(path: str | Path) -> SchemaValidator:
    """Load a YAML or JSON schema document and compile it.

    Raises:
        SchemaLoadError: If the document cannot be read, parsed or compiled.
    """
    return SchemaValidator(load_yaml(path))
