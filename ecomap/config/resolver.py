"""Render configuration merging, validation and loading."""

import copy
import logging
from typing import Any

from pydantic import ValidationError

from ..data.errors import ResourceError, ResourceNotFoundError
from ..data.sources import ResourceSource
from ..schema.loader import format_validation_errors
from .defaults import (
    default_config_document,
    default_document_for_view_type,
    full_graph_document,
    parachain_table_document,
)
from .errors import ConfigError, ConfigValidationError
from .models import COLUMN_TYPES, SCALE_TYPES, VIEW_TYPES, RenderConfig

logger = logging.getLogger(__name__)

RENDER_CONFIG_RESOURCE = "render.yaml"

# Styling rules checked after merging, as (section, key, label)
STYLING_RULES = (
    ("nodes", "sizeBy", "node sizeBy"),
    ("nodes", "colorBy", "node colorBy"),
    ("edges", "widthBy", "edge widthBy"),
    ("edges", "colorBy", "edge colorBy"),
)


def _merge_section(base: Any, override: Any) -> Any:
    """Shallow-merge two mappings; anything else is replaced by the override."""
    if override is None:
        return copy.deepcopy(base)
    if isinstance(base, dict) and isinstance(override, dict):
        return {**copy.deepcopy(base), **copy.deepcopy(override)}
    return copy.deepcopy(override)


def merge_configs(defaults: dict, user: dict | None) -> dict:
    """Merge a user configuration document over a base document.

    - ``viewType`` replaces the base value when it is non-empty, and
      ``entityTypes`` replaces it whenever given.
    - ``table`` is shallow-merged, but ``columns`` is replaced wholesale.
    - ``graph`` is shallow-merged, with ``physics``, ``nodes`` and ``edges``
      each shallow-merged over their base counterparts.

    Unknown top-level keys are ignored. Neither input is mutated.
    """
    merged = copy.deepcopy(defaults)
    if not user:
        return merged

    if user.get("viewType"):
        merged["viewType"] = copy.deepcopy(user["viewType"])
    if user.get("entityTypes") is not None:
        merged["entityTypes"] = copy.deepcopy(user["entityTypes"])

    user_table = user.get("table")
    if user_table is not None:
        base_table = merged.get("table") or {}
        table = _merge_section(base_table, user_table)
        if isinstance(table, dict):
            user_columns = user_table.get("columns") if isinstance(user_table, dict) else None
            if user_columns is not None:
                table["columns"] = copy.deepcopy(user_columns)
            else:
                table["columns"] = copy.deepcopy(base_table.get("columns"))
        merged["table"] = table

    user_graph = user.get("graph")
    if user_graph is not None:
        base_graph = merged.get("graph") or {}
        graph = _merge_section(base_graph, user_graph)
        if isinstance(graph, dict) and isinstance(user_graph, dict):
            for section in ("physics", "nodes", "edges"):
                graph[section] = _merge_section(
                    base_graph.get(section) or {}, user_graph.get(section)
                )
        merged["graph"] = graph

    return merged


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_mapping(value: Any, path: str) -> None:
    if not isinstance(value, dict):
        raise ConfigValidationError(
            f"'{path}' must be a mapping, got {type(value).__name__}",
            code="INVALID_SECTION",
            path=path,
        )


def validate_styling_rule(rule: Any, context: str) -> None:
    """Check a styling rule.

    Raises:
        ConfigValidationError: If the rule is incomplete or malformed.
    """
    if not isinstance(rule, dict) or not rule.get("property") or not rule.get("field"):
        raise ConfigValidationError(
            f"{context} must have 'property' and 'field' defined",
            code="INCOMPLETE_STYLING_RULE",
            path=context,
        )

    if rule.get("scale") not in SCALE_TYPES:
        raise ConfigValidationError(
            f"{context} scale must be 'linear', 'log', or 'sqrt'",
            code="INVALID_SCALE",
            path=context,
        )

    domain = rule.get("domain")
    if domain is not None and (
        not isinstance(domain, (list, tuple))
        or len(domain) != 2
        or not all(_is_number(v) for v in domain)
    ):
        raise ConfigValidationError(
            f"{context} domain must be an array of two numbers",
            code="INVALID_DOMAIN",
            path=context,
        )

    range_ = rule.get("range")
    if range_ is not None and not isinstance(range_, (list, tuple)):
        raise ConfigValidationError(
            f"{context} range must be an array",
            code="INVALID_RANGE",
            path=context,
        )


def _validate_table(table: Any) -> None:
    _require_mapping(table, "table")

    columns = table.get("columns")
    if not isinstance(columns, list) or not columns:
        raise ConfigValidationError(
            "Table must have at least one column defined",
            code="EMPTY_COLUMNS",
            path="table.columns",
        )

    for index, column in enumerate(columns):
        if not isinstance(column, dict) or not column.get("key") or not column.get("label"):
            raise ConfigValidationError(
                f"Column {index} must have both 'key' and 'label' properties",
                code="INCOMPLETE_COLUMN",
                path=f"table.columns.{index}",
            )
        if column.get("type") not in COLUMN_TYPES:
            raise ConfigValidationError(
                f"Invalid column type: {column.get('type')}",
                code="INVALID_COLUMN_TYPE",
                path=f"table.columns.{index}.type",
            )


def _validate_graph(graph: Any) -> None:
    _require_mapping(graph, "graph")

    physics = graph.get("physics")
    if physics:
        _require_mapping(physics, "graph.physics")
        for key, value in physics.items():
            if not _is_number(value):
                raise ConfigValidationError(
                    f"Physics parameter {key} must be a number",
                    code="INVALID_PHYSICS_PARAM",
                    path=f"graph.physics.{key}",
                )

    for section, key, label in STYLING_RULES:
        styling = graph.get(section)
        if not styling:
            continue
        _require_mapping(styling, f"graph.{section}")
        if styling.get(key) is not None:
            validate_styling_rule(styling[key], label)


def validate_config(config: dict) -> None:
    """Check a merged configuration document.

    Raises:
        ConfigValidationError: On the first structural rule that fails; the
            ``code`` attribute names the rule.
    """
    view_type = config.get("viewType")
    if view_type not in VIEW_TYPES:
        raise ConfigValidationError(
            f"Invalid viewType: {view_type}. Must be 'table' or 'graph'.",
            code="INVALID_VIEW_TYPE",
            path="viewType",
        )

    entity_types = config.get("entityTypes")
    if not isinstance(entity_types, list) or not entity_types:
        raise ConfigValidationError(
            "entityTypes must be a non-empty array",
            code="EMPTY_ENTITY_TYPES",
            path="entityTypes",
        )

    if not config.get(view_type):
        raise ConfigValidationError(
            f'{view_type.capitalize()} configuration is required when viewType is "{view_type}"',
            code="MISSING_VIEW_CONFIG",
            path=view_type,
        )

    if config.get("table") is not None:
        _validate_table(config["table"])

    if config.get("graph") is not None:
        _validate_graph(config["graph"])


def build_config(document: dict) -> RenderConfig:
    """Validate a merged document and convert it to a RenderConfig.

    Raises:
        ConfigValidationError: If a structural rule fails or the document
            does not fit the configuration model.
    """
    validate_config(document)
    try:
        return RenderConfig.model_validate(document)
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise ConfigValidationError(
            f"Configuration does not match the expected structure ({len(errors)} error(s))",
            code="INVALID_STRUCTURE",
            errors=errors,
        ) from e


def resolve_config(user: Any, defaults: dict | None = None) -> RenderConfig:
    """Merge a user document over the defaults, validate and build it.

    Raises:
        ConfigValidationError: If the document is not a mapping or the merged
            result is invalid.
    """
    if user is not None and not isinstance(user, dict):
        raise ConfigValidationError(
            f"Configuration document must be a mapping, got {type(user).__name__}",
            code="INVALID_DOCUMENT",
        )
    base = defaults if defaults is not None else default_config_document()
    return build_config(merge_configs(base, user))


def default_config() -> RenderConfig:
    """Return the built-in default configuration."""
    return RenderConfig.model_validate(default_config_document())


def default_config_for_view_type(view_type: str) -> RenderConfig:
    """Return the defaults with the given view selected.

    Raises:
        ConfigValidationError: If the view type is not known.
    """
    return build_config(default_document_for_view_type(view_type))


def parachain_table_config() -> RenderConfig:
    """Return a parachain-only table configuration."""
    return build_config(parachain_table_document())


def full_graph_config() -> RenderConfig:
    """Return a full graph configuration with custom physics."""
    return build_config(full_graph_document())


def update_config(current: RenderConfig, partial: dict) -> RenderConfig:
    """Apply a partial update to a live configuration.

    Uses the same merge rules as loading, with the current configuration in
    place of the defaults.

    Raises:
        ConfigValidationError: If the updated configuration is invalid.
    """
    return resolve_config(partial, defaults=current.to_dict())


def load_render_config(
    source: ResourceSource,
    name: str = RENDER_CONFIG_RESOURCE,
) -> RenderConfig:
    """Load the render configuration from a source.

    A missing document yields the defaults. A document that cannot be read,
    parsed or validated is discarded: the cause is logged and the defaults are
    returned.
    """
    try:
        document = source.fetch_document(name)
    except ResourceNotFoundError:
        logger.warning("%s not found, using default configuration", name)
        return default_config()
    except ResourceError as e:
        logger.error("Failed to load render configuration: %s", e)
        logger.warning("Falling back to default configuration")
        return default_config()

    try:
        config = resolve_config(document)
    except ConfigError as e:
        logger.error("Failed to load render configuration: %s", e)
        logger.warning("Falling back to default configuration")
        return default_config()

    logger.info("Render configuration loaded successfully")
    return config
