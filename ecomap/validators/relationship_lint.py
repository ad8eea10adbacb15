"""Lint checks for the manual relationships document."""

import re
from typing import Any

from .base import ValidationResult

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
LINE_STYLES = ("solid", "dashed", "dotted")
WEIGHT_RANGE = (1, 10)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_weight(
    result: ValidationResult, weight: Any, subject: str, code: str, path: str
) -> None:
    low, high = WEIGHT_RANGE
    if _is_number(weight) and not low <= weight <= high:
        result.add_warning(
            code=code,
            message=f"{path} {weight} outside recommended range {low}-{high}",
            subject=subject,
            path=path,
        )


def _check_relationship(
    result: ValidationResult,
    number: int,
    rel: Any,
    categories: dict | None,
    types: dict | None,
) -> None:
    subject = f"relationship {number}"

    if not isinstance(rel, dict):
        result.add_error(
            code="INVALID_RELATIONSHIP",
            message="Relationship entry must be a mapping",
            subject=subject,
        )
        return

    for key in ("source", "target", "type"):
        if not rel.get(key):
            result.add_error(
                code=f"MISSING_{key.upper()}",
                message=f"Missing '{key}' field",
                subject=subject,
                path=key,
            )

    weight = rel.get("weight")
    if weight is not None and not _is_number(weight):
        result.add_error(
            code="INVALID_WEIGHT",
            message="'weight' must be a number",
            subject=subject,
            path="weight",
        )
    else:
        _check_weight(result, weight, subject, "WEIGHT_OUT_OF_RANGE", "weight")

    if rel.get("source") and rel.get("source") == rel.get("target"):
        result.add_warning(
            code="SELF_REFERENCE",
            message=f"Self-referential relationship ({rel['source']} -> {rel['target']})",
            subject=subject,
        )

    category = rel.get("category")
    if category and categories is not None and category not in categories:
        result.add_warning(
            code="UNDEFINED_CATEGORY",
            message=f"Category '{category}' not defined in categories section",
            subject=subject,
            path="category",
        )

    rel_type = rel.get("type")
    if rel_type and types is not None and rel_type not in types:
        result.add_warning(
            code="UNDEFINED_TYPE",
            message=f"Type '{rel_type}' not defined in types section",
            subject=subject,
            path="type",
        )


def _check_color(result: ValidationResult, color: Any, subject: str) -> None:
    if not COLOR_PATTERN.match(str(color)):
        result.add_error(
            code="INVALID_COLOR",
            message=f"Invalid color format '{color}' (should be #RRGGBB)",
            subject=subject,
            path="color",
        )


def _check_categories(result: ValidationResult, categories: dict) -> None:
    for key, category in categories.items():
        subject = f"category '{key}'"
        if not isinstance(category, dict):
            result.add_error(
                code="INVALID_CATEGORY",
                message="Category must be a mapping",
                subject=subject,
            )
            continue

        if not category.get("name"):
            result.add_error(
                code="CATEGORY_MISSING_NAME",
                message="Missing 'name' field",
                subject=subject,
                path="name",
            )
        if not category.get("color"):
            result.add_error(
                code="CATEGORY_MISSING_COLOR",
                message="Missing 'color' field",
                subject=subject,
                path="color",
            )
        else:
            _check_color(result, category["color"], subject)

        style = category.get("style")
        if style and style not in LINE_STYLES:
            result.add_error(
                code="INVALID_STYLE",
                message=f"Invalid style '{style}' (should be solid, dashed, or dotted)",
                subject=subject,
                path="style",
            )


def _check_types(result: ValidationResult, types: dict) -> None:
    for key, rel_type in types.items():
        subject = f"type '{key}'"
        if not isinstance(rel_type, dict):
            result.add_error(
                code="INVALID_TYPE",
                message="Relationship type must be a mapping",
                subject=subject,
            )
            continue

        if not rel_type.get("name"):
            result.add_error(
                code="TYPE_MISSING_NAME",
                message="Missing 'name' field",
                subject=subject,
                path="name",
            )
        _check_weight(
            result,
            rel_type.get("default_weight"),
            subject,
            "DEFAULT_WEIGHT_OUT_OF_RANGE",
            "default_weight",
        )
        if rel_type.get("color"):
            _check_color(result, rel_type["color"], subject)


def check_manual_relationships(document: Any) -> ValidationResult:
    """Lint a parsed manual relationships document.

    Unlike the resolver, which skips broken entries, this reports every
    problem it finds so authors can fix the document.

    Args:
        document: The parsed YAML document.

    Returns:
        ValidationResult; ``checked`` is the number of relationship entries.
    """
    result = ValidationResult()

    if not isinstance(document, dict):
        result.add_error(
            code="INVALID_DOCUMENT",
            message="Relationships document must be a mapping",
        )
        return result

    categories = document.get("categories")
    if categories is not None and not isinstance(categories, dict):
        result.add_error(
            code="INVALID_CATEGORIES",
            message="'categories' should be a mapping",
        )
        categories = None

    types = document.get("types")
    if types is not None and not isinstance(types, dict):
        result.add_error(code="INVALID_TYPES", message="'types' should be a mapping")
        types = None

    relationships = document.get("relationships")
    if not isinstance(relationships, list):
        result.add_error(
            code="RELATIONSHIPS_NOT_LIST",
            message="'relationships' should be a list",
        )
    else:
        for number, rel in enumerate(relationships, start=1):
            result.checked += 1
            _check_relationship(result, number, rel, categories, types)

    if categories:
        _check_categories(result, categories)
    if types:
        _check_types(result, types)

    return result
