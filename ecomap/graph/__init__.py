"""Graph layer: networkx-backed ecosystem graph and view payloads."""

from .node_types import EdgeOrigin, NodeType
from .ecosystem_graph import EcosystemGraph
from .builder import build_graph, edge_is_shown
from .view import graph_view_data
from .table import page_count, paginate, table_rows, table_view_data

__all__ = [
    "EdgeOrigin",
    "NodeType",
    "EcosystemGraph",
    "build_graph",
    "edge_is_shown",
    "graph_view_data",
    "page_count",
    "paginate",
    "table_rows",
    "table_view_data",
]
