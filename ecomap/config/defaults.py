"""Built-in render configuration defaults and presets.

All presets are kept in document form (camelCase keys) so they can be merged
with user documents before validation.
"""

import copy

DEFAULT_CONFIG: dict = {
    "viewType": "table",
    "entityTypes": ["parachain", "dapp", "infrastructure"],
    "table": {
        "columns": [
            {"key": "name", "label": "Name", "type": "string", "sortable": True, "filterable": True},
            {"key": "type", "label": "Type", "type": "string", "sortable": True, "filterable": True},
            {"key": "description", "label": "Description", "type": "string", "filterable": True},
            {"key": "metrics.stars", "label": "Stars", "type": "number", "sortable": True},
            {"key": "website", "label": "Website", "type": "link"},
        ],
        "defaultSort": {"column": "metrics.stars", "direction": "desc"},
        "pageSize": 25,
    },
    "graph": {
        "physics": {
            "alphaDecay": 0.0228,
            "chargeStrength": -30,
            "linkDistance": 30,
            "linkStrength": 1,
            "velocityDecay": 0.4,
        },
        "nodes": {
            "sizeBy": {
                "property": "size",
                "field": "metrics.stars",
                "scale": "sqrt",
                "domain": [0, 1000],
                "range": [5, 20],
            },
            "colorBy": {
                "property": "color",
                "field": "type",
                "scale": "linear",
                "range": ["#ff6b6b", "#4ecdc4", "#45b7d1", "#96ceb4", "#fecca7", "#ff9999"],
            },
            "labelField": "name",
            "showLabels": True,
        },
        "edges": {
            "widthBy": {
                "property": "width",
                "field": "weight",
                "scale": "linear",
                "domain": [1, 10],
                "range": [1, 5],
            },
            "showLabels": False,
        },
        "width": 800,
        "height": 600,
    },
}

PARACHAIN_TABLE_CONFIG: dict = {
    "viewType": "table",
    "entityTypes": ["parachain"],
    "table": {
        "columns": [
            {"key": "name", "label": "Parachain Name", "type": "string", "sortable": True, "filterable": True},
            {"key": "description", "label": "Description", "type": "string", "filterable": True},
            {"key": "metrics.tx_count", "label": "Transactions", "type": "number", "sortable": True},
            {"key": "metrics.tvl", "label": "TVL", "type": "number", "sortable": True},
            {"key": "website", "label": "Website", "type": "link"},
            {"key": "github", "label": "GitHub", "type": "link"},
        ],
        "defaultSort": {"column": "metrics.tvl", "direction": "desc"},
        "pageSize": 50,
    },
}

FULL_GRAPH_CONFIG: dict = {
    "viewType": "graph",
    "entityTypes": ["parachain", "dapp", "infrastructure", "defi", "wallet", "bridge"],
    "graph": {
        "physics": {
            "alphaDecay": 0.02,
            "chargeStrength": -100,
            "linkDistance": 50,
            "linkStrength": 0.5,
            "velocityDecay": 0.3,
            "gravity": 0.1,
        },
        "nodes": {
            "sizeBy": {
                "property": "size",
                "field": "metrics.stars",
                "scale": "log",
                "domain": [1, 10000],
                "range": [8, 30],
            },
            "colorBy": {
                "property": "color",
                "field": "type",
                "scale": "linear",
                # parachain, dapp, infrastructure, defi, wallet, bridge
                "range": ["#e74c3c", "#3498db", "#2ecc71", "#f39c12", "#9b59b6", "#1abc9c"],
            },
            "labelField": "name",
            "showLabels": True,
        },
        "edges": {
            "widthBy": {
                "property": "width",
                "field": "weight",
                "scale": "sqrt",
                "domain": [1, 20],
                "range": [1, 8],
            },
            "colorBy": {
                "property": "color",
                "field": "type",
                "scale": "linear",
                "range": ["#95a5a6", "#34495e", "#7f8c8d"],
            },
            "showLabels": False,
        },
        "width": 1200,
        "height": 800,
    },
}


def default_config_document() -> dict:
    """Return a fresh copy of the built-in defaults."""
    return copy.deepcopy(DEFAULT_CONFIG)


def default_document_for_view_type(view_type: str) -> dict:
    """Return the defaults with a different view selected."""
    document = default_config_document()
    document["viewType"] = view_type
    return document


def parachain_table_document() -> dict:
    """Return a parachain-only table preset."""
    return copy.deepcopy(PARACHAIN_TABLE_CONFIG)


def full_graph_document() -> dict:
    """Return a graph preset covering most entity types with custom physics."""
    return copy.deepcopy(FULL_GRAPH_CONFIG)
