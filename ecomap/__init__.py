"""ecomap: ecosystem entity catalog loading, relationship resolution and view configuration."""

__version__ = "0.1.0"
