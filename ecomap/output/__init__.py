"""Output formatting for command results."""

from .formatter import format_compatibility_result, format_validation_result

__all__ = ["format_compatibility_result", "format_validation_result"]
