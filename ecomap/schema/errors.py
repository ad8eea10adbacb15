"""Schema-related exceptions."""


class SchemaLoadError(Exception):
    """Raised when a YAML document cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when a record fails model validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)
