"""Render configuration exceptions."""


class ConfigError(Exception):
    """Base exception for render configuration errors."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when a merged configuration breaks a structural rule."""

    def __init__(
        self,
        message: str,
        code: str,
        path: str | None = None,
        errors: list[dict] | None = None,
    ):
        self.code = code
        self.path = path
        self.errors = errors or []
        super().__init__(message)
