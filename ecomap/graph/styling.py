"""Styling rules: mapping data fields onto sizes, widths and colours."""

import math
from typing import Any, Sequence

from ..config.models import EdgeStyling, StylingRule
from ..schema.models import Relationship, RelationshipCategory, RelationshipType

DEFAULT_NODE_SIZE = 5.0
DEFAULT_NODE_COLOR = "#69b7d4"
DEFAULT_LINK_WIDTH = 1.0
DEFAULT_LINK_COLOR = "#69b7d4"
MANUAL_LINK_COLOR = "#FF6B6B"

DASH_PATTERNS = {
    "dashed": [5, 5],
    "dotted": [2, 3],
}


def resolve_field(obj: Any, path: str) -> Any:
    """Resolve a dotted field path on an entity, relationship or mapping."""
    lookup = getattr(obj, "lookup", None)
    if callable(lookup):
        return lookup(path)

    current = obj
    for part in path.split("."):
        if current is None:
            return None
        if isinstance(current, dict):
            current = current.get(part)
        else:
            current = getattr(current, part, None)
    return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize(value: float, domain: Sequence[float]) -> float:
    """Position of a value within a domain, clamped to [0, 1].

    A zero-width domain maps everything to 0.
    """
    low, high = domain
    if high == low:
        return 0.0
    return max(0.0, min(1.0, (value - low) / (high - low)))


def apply_scale(normalized: float, scale: str) -> float:
    """Reshape a normalized value; ``log`` and ``sqrt`` keep 0 and 1 fixed."""
    if scale == "log":
        return math.log10(normalized * 9 + 1)
    if scale == "sqrt":
        return math.sqrt(normalized)
    return normalized


def _numeric_range(rule: StylingRule, default: Sequence[float]) -> Sequence[float]:
    if rule.range and len(rule.range) == 2 and all(_is_number(v) for v in rule.range):
        return rule.range
    return default


def scale_value(
    rule: StylingRule,
    value: Any,
    default_domain: Sequence[float],
    default_range: Sequence[float],
    fallback: float,
) -> float:
    """Map a numeric value through a styling rule onto its numeric range."""
    if not _is_number(value):
        return fallback
    domain = rule.domain or default_domain
    low, high = _numeric_range(rule, default_range)
    scaled = apply_scale(normalize(value, domain), rule.scale)
    return low + (high - low) * scaled


def node_size(rule: StylingRule | None, entity: Any) -> float:
    if rule is None:
        return DEFAULT_NODE_SIZE
    return scale_value(
        rule, resolve_field(entity, rule.field), (0, 100), (5, 20), DEFAULT_NODE_SIZE
    )


def link_width(rule: StylingRule | None, relationship: Relationship) -> float:
    if rule is None:
        return DEFAULT_LINK_WIDTH
    value = resolve_field(relationship, rule.field)
    if not _is_number(value):
        value = relationship.weight
    return scale_value(rule, value, (1, 10), (1, 5), DEFAULT_LINK_WIDTH)


def categorical_color(
    rule: StylingRule,
    value: Any,
    categories: Sequence[str],
    fallback: str,
) -> str:
    """Pick a palette colour for a category, cycling through the palette.

    Values not among the categories get the fallback colour.
    """
    palette = [str(c) for c in rule.range or []] or [fallback]
    if value not in categories:
        return fallback
    return palette[list(categories).index(value) % len(palette)]


def numeric_color(rule: StylingRule, value: Any, fallback: str) -> str:
    """Pick a palette colour by where a value falls within the domain."""
    if not _is_number(value):
        return fallback
    palette = [str(c) for c in rule.range or []] or [fallback]
    position = normalize(value, rule.domain or (0, 100))
    return palette[math.floor(position * (len(palette) - 1))]


def node_color(
    rule: StylingRule | None,
    entity: Any,
    entity_types: Sequence[str],
) -> str:
    """Colour an entity node.

    Colouring by ``type`` assigns palette entries in the order types first
    appear; any other field is treated as numeric.
    """
    if rule is None:
        return DEFAULT_NODE_COLOR
    value = resolve_field(entity, rule.field)
    if rule.field == "type":
        return categorical_color(rule, value, entity_types, DEFAULT_NODE_COLOR)
    return numeric_color(rule, value, DEFAULT_NODE_COLOR)


def link_color(
    relationship: Relationship,
    edges: EdgeStyling | None,
    categories: dict[str, RelationshipCategory],
    types: dict[str, RelationshipType],
    relationship_types: Sequence[str] = (),
) -> str:
    """Colour a relationship link.

    Precedence: category colour (with ``styleByCategory``), type colour (with
    ``styleByType``), the edge ``colorBy`` rule, then manual versus embedded
    defaults.
    """
    if edges is not None:
        if edges.style_by_category and relationship.category:
            category = categories.get(relationship.category)
            if category and category.color:
                return category.color

        if edges.style_by_type:
            rel_type = types.get(relationship.type)
            if rel_type and rel_type.color:
                return rel_type.color

        rule = edges.color_by
        if rule is not None:
            value = resolve_field(relationship, rule.field)
            if rule.field == "type":
                return categorical_color(rule, value, relationship_types, DEFAULT_LINK_COLOR)
            if _is_number(value):
                return numeric_color(rule, value, DEFAULT_LINK_COLOR)

    if relationship.is_manual:
        return MANUAL_LINK_COLOR
    return DEFAULT_LINK_COLOR


def link_dash(
    relationship: Relationship,
    edges: EdgeStyling | None,
    categories: dict[str, RelationshipCategory],
) -> list[int] | None:
    """Dash pattern for a link; None means a solid line."""
    if edges is None or not edges.style_by_category or not relationship.category:
        return None
    category = categories.get(relationship.category)
    if category is None or category.style is None:
        return None
    return DASH_PATTERNS.get(category.style)
