"""Reference integrity validator."""

from ..data.dataset import EcosystemDataset
from .base import ValidationResult


def check_reference_integrity(dataset: EcosystemDataset) -> ValidationResult:
    """Check that resolved relationships point at loaded entities.

    This validator checks:
    - Relationship sources and targets reference loaded entities
    - Relationship categories and types are declared, when any are declared

    Dangling references are not fatal: the graph simply omits those edges.

    Args:
        dataset: The resolved dataset.

    Returns:
        ValidationResult with warnings for broken references.
    """
    result = ValidationResult()

    slugs = set(dataset.get_all_slugs())

    for rel in dataset.relationships:
        subject = rel.key
        for end in ("source", "target"):
            slug = getattr(rel, end)
            if slug not in slugs:
                result.add_warning(
                    code="UNDEFINED_ENTITY_REF",
                    message=f"Relationship references undefined entity '{slug}'",
                    subject=subject,
                    path=end,
                    referenced_entity=slug,
                    relationship_type=rel.type,
                )

        if rel.category and dataset.categories and rel.category not in dataset.categories:
            result.add_warning(
                code="UNDEFINED_CATEGORY_REF",
                message=f"Relationship uses undeclared category '{rel.category}'",
                subject=subject,
                path="category",
            )

        if rel.is_manual and dataset.types and rel.type not in dataset.types:
            result.add_warning(
                code="UNDEFINED_TYPE_REF",
                message=f"Relationship uses undeclared type '{rel.type}'",
                subject=subject,
                path="type",
            )

    return result
