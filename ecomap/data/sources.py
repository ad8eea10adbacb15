"""Resource sources: where data, relationship and config documents are read from."""

from pathlib import Path
from typing import Any

import requests

from ..schema.errors import SchemaLoadError
from ..schema.loader import parse_yaml_string
from .errors import ResourceFetchError, ResourceNotFoundError

DEFAULT_TIMEOUT = 10.0


class ResourceSource:
    """Base class for anything that can fetch named text resources."""

    def fetch_text(self, name: str) -> str:
        """Fetch the raw text of a resource.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
            ResourceFetchError: If the resource cannot be read.
        """
        raise NotImplementedError

    def fetch_document(self, name: str) -> Any:
        """Fetch a resource and parse it as YAML.

        Raises:
            ResourceNotFoundError: If the resource does not exist.
            ResourceFetchError: If the resource cannot be read or parsed.
        """
        text = self.fetch_text(name)
        try:
            return parse_yaml_string(text, name)
        except SchemaLoadError as e:
            raise ResourceFetchError(str(e), name) from e

    def describe(self, name: str) -> str:
        """Human-readable location of a resource."""
        return name


class DirectorySource(ResourceSource):
    """Reads resources from files below a root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path(self, name: str) -> Path:
        return self.root / name

    def fetch_text(self, name: str) -> str:
        path = self._path(name)
        if not path.is_file():
            raise ResourceNotFoundError(f"Resource not found: {path}", name)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ResourceFetchError(f"Cannot read {path}: {e}", name) from e

    def describe(self, name: str) -> str:
        return str(self._path(name))

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.root)!r})"


class HttpSource(ResourceSource):
    """Reads resources relative to a base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, name: str) -> str:
        return f"{self.base_url}/{name.lstrip('/')}"

    def fetch_text(self, name: str) -> str:
        url = self._url(name)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ResourceFetchError(f"Request for {url} failed: {e}", name) from e

        if response.status_code == 404:
            raise ResourceNotFoundError(f"Resource not found: {url}", name)
        if not response.ok:
            raise ResourceFetchError(
                f"Request for {url} failed with status {response.status_code}", name
            )
        return response.text

    def describe(self, name: str) -> str:
        return self._url(name)

    def __repr__(self) -> str:
        return f"HttpSource({self.base_url!r})"


def open_source(location: str | Path, timeout: float = DEFAULT_TIMEOUT) -> ResourceSource:
    """Pick a source for a directory path or an http(s) URL."""
    text = str(location)
    if text.startswith(("http://", "https://")):
        return HttpSource(text, timeout=timeout)
    return DirectorySource(location)
