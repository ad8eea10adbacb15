"""Render configuration: defaults, merging and validation."""

from .errors import ConfigError, ConfigValidationError
from .models import (
    DefaultSort,
    EdgeStyling,
    GraphConfig,
    NodeStyling,
    RenderConfig,
    StylingRule,
    TableColumn,
    TableConfig,
)
from .defaults import DEFAULT_CONFIG, default_config_document
from .resolver import (
    build_config,
    default_config,
    default_config_for_view_type,
    full_graph_config,
    load_render_config,
    merge_configs,
    parachain_table_config,
    resolve_config,
    update_config,
    validate_config,
    validate_styling_rule,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DefaultSort",
    "EdgeStyling",
    "GraphConfig",
    "NodeStyling",
    "RenderConfig",
    "StylingRule",
    "TableColumn",
    "TableConfig",
    "DEFAULT_CONFIG",
    "default_config_document",
    "build_config",
    "default_config",
    "default_config_for_view_type",
    "full_graph_config",
    "load_render_config",
    "merge_configs",
    "parachain_table_config",
    "resolve_config",
    "update_config",
    "validate_config",
    "validate_styling_rule",
]
