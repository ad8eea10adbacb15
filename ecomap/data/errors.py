"""Data loading exceptions."""


class DataLoadError(Exception):
    """Raised when no usable entities could be loaded."""

    pass


class ResourceError(Exception):
    """Base exception for a single resource that could not be read."""

    def __init__(self, message: str, resource: str | None = None):
        self.resource = resource
        super().__init__(message)


class ResourceNotFoundError(ResourceError):
    """Raised when a resource does not exist."""

    pass


class ResourceFetchError(ResourceError):
    """Raised when a resource exists but cannot be fetched or parsed."""

    pass


class ImportDataError(Exception):
    """Raised when the upstream ecosystem catalog cannot be imported."""

    pass
