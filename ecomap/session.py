"""Session-scoped ownership of the loaded dataset and render configuration."""

import logging
import threading

from .config.models import RenderConfig
from .config.resolver import load_render_config
from .data.dataset import EcosystemDataset, load_dataset
from .data.sources import ResourceSource

logger = logging.getLogger(__name__)


class DataSession:
    """Owns one dataset snapshot and one configuration snapshot for a source.

    Both are loaded on first access and kept until ``invalidate`` or
    ``reload`` is called. Snapshots are never mutated; a reload builds new
    ones and swaps them in only when loading succeeds.
    """

    def __init__(self, source: ResourceSource):
        self.source = source
        self._dataset: EcosystemDataset | None = None
        self._config: RenderConfig | None = None
        self._lock = threading.Lock()

    @property
    def dataset(self) -> EcosystemDataset:
        """The current dataset, loaded on first access.

        Raises:
            DataLoadError: If no valid entity could be loaded.
        """
        with self._lock:
            if self._dataset is None:
                self._dataset = load_dataset(self.source)
            return self._dataset

    @property
    def config(self) -> RenderConfig:
        """The current render configuration, loaded on first access."""
        with self._lock:
            if self._config is None:
                self._config = load_render_config(self.source)
            return self._config

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    def invalidate(self) -> None:
        """Drop both snapshots; the next access reloads them."""
        with self._lock:
            self._dataset = None
            self._config = None
        logger.debug("Session for %r invalidated", self.source)

    def reload(self) -> EcosystemDataset:
        """Load fresh snapshots and swap them in.

        If loading the dataset fails the previous snapshots stay in place.

        Raises:
            DataLoadError: If no valid entity could be loaded.
        """
        dataset = load_dataset(self.source)
        config = load_render_config(self.source)
        with self._lock:
            self._dataset = dataset
            self._config = config
        logger.info("Session for %r reloaded", self.source)
        return dataset
