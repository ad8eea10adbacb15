"""Node and edge type definitions for the ecosystem graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the ecosystem graph."""

    ENTITY = "entity"


class EdgeOrigin(str, Enum):
    """Where a relationship edge was declared."""

    ENTITY = "entity"  # embedded in an entity record
    MANUAL = "manual"  # curated in the relationships document
