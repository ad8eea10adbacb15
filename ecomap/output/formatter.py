"""Output formatting for validation results."""

import json
from typing import Literal

from ..schema.compatibility import CompatibilityResult
from ..validators.base import Severity, ValidationIssue, ValidationResult


def format_validation_result(
    result: ValidationResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result)
    return _format_text(result)


def _section(title: str, issues: list[ValidationIssue]) -> list[str]:
    lines = [f"{title}:"]
    if issues:
        lines.extend(f"  {_format_issue_text(issue)}" for issue in issues)
    else:
        lines.append("  (none)")
    return lines


def _format_text(result: ValidationResult) -> str:
    """Format result as human-readable text."""
    errors = result.errors
    warnings = result.warnings

    lines = _section("ERRORS", errors)
    lines.append("")
    lines.extend(_section("WARNINGS", warnings))

    if result.infos:
        lines.append("")
        lines.extend(_section("INFO", result.infos))

    lines.append("")
    if result.checked:
        lines.append(f"Checked {result.checked} item(s)")
    if result.is_valid:
        if warnings:
            lines.append(f"Validation passed with {len(warnings)} warning(s)")
        else:
            lines.append("Validation passed")
    else:
        lines.append(
            f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    """Format a single issue as text."""
    location = ""
    if issue.subject:
        location = f"[{issue.subject}"
        if issue.path:
            location += f".{issue.path}"
        location += "] "

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _format_json(result: ValidationResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "checked": result.checked,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "info_count": len(result.infos),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "subject": issue.subject,
                "path": issue.path,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2, default=str)


def format_compatibility_result(result: CompatibilityResult) -> str:
    """Format a schema compatibility check as text."""
    lines: list[str] = []

    if result.breaking_changes:
        lines.append("BREAKING CHANGES:")
        lines.extend(f"  ✘ {change}" for change in result.breaking_changes)
        lines.append("")

    if result.warnings:
        lines.append("WARNINGS:")
        lines.extend(f"  ⚠ {warning}" for warning in result.warnings)
        lines.append("")

    if result.new_properties:
        lines.append("NEW PROPERTIES:")
        lines.extend(f"  + {prop}" for prop in result.new_properties)
        lines.append("")

    if result.removed_properties:
        lines.append("REMOVED PROPERTIES:")
        lines.extend(f"  - {prop}" for prop in result.removed_properties)
        lines.append("")

    if result.compatible:
        lines.append("Schema is compatible")
    else:
        lines.append(
            f"Schema is incompatible: {len(result.breaking_changes)} breaking change(s)"
        )

    return "\n".join(lines)
