"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from ecomap.data.dataset import build_dataset
from ecomap.data.relationships import parse_manual_relationships
from ecomap.graph.builder import build_graph
from ecomap.schema.loader import parse_entity, parse_yaml_string

PARACHAINS_YAML = """
parachains:
  - slug: moonbeam
    name: Moonbeam
    type: parachain
    description: EVM-compatible smart contract parachain
    website: https://moonbeam.network
    metrics:
      stars: 900
      tvl: 50000000
    tags: [evm, smart-contracts]
    relationships:
      - target: stellaswap
        type: hosts
        weight: 5
  - slug: acala
    name: Acala
    type: parachain
    description: DeFi hub
    metrics:
      stars: 400
    tags: [defi]
"""

DAPPS_YAML = """
- slug: stellaswap
  name: StellaSwap
  type: dapp
  metrics:
    stars: 120
  relationships:
    - target: moonbeam
      type: built_on
- slug: subscan
  name: Subscan
  type: infrastructure
  description: Block explorer
"""

RELATIONSHIPS_YAML = """
categories:
  technical:
    name: Technical
    color: "#4ECDC4"
    style: solid
  business:
    name: Business
    color: "#FFB347"
    style: dashed
types:
  integrates:
    name: Integrates
    default_weight: 5
    color: "#FF6B6B"
relationships:
  - source: acala
    target: moonbeam
    type: integrates
    weight: 7
    category: technical
    bidirectional: true
  - source: moonbeam
    target: stellaswap
    type: hosts
    weight: 9
    category: business
  - source: subscan
    target: unknown-chain
    type: indexes
"""

ENTITY_SCHEMA_YAML = """
$schema: https://json-schema.org/draft/2020-12/schema
type: object
required: [slug, name, type]
properties:
  slug:
    type: string
    pattern: "^[a-z0-9-]+$"
  name:
    type: string
    minLength: 1
  type:
    type: string
    enum: [parachain, dapp, infrastructure, tool, wallet, bridge, defi, nft, gaming]
  description:
    type: string
  website:
    type: string
  metrics:
    type: object
    properties:
      stars:
        type: number
  tags:
    type: array
    items:
      type: string
  relationships:
    type: array
    items:
      type: object
      required: [target, type]
      properties:
        target:
          type: string
        type:
          type: string
        weight:
          type: number
"""


def write_data_root(
    root: Path,
    parachains: str | None = PARACHAINS_YAML,
    dapps: str | None = DAPPS_YAML,
    relationships: str | None = RELATIONSHIPS_YAML,
    render: str | None = None,
) -> Path:
    """Lay out a site root with data files, relationships and render config."""
    data_dir = root / "data"
    data_dir.mkdir(parents=True, exist_ok=True)
    if parachains is not None:
        (data_dir / "parachains.yml").write_text(parachains)
    if dapps is not None:
        (data_dir / "dapps.yml").write_text(dapps)
    if relationships is not None:
        (root / "relationships.yml").write_text(relationships)
    if render is not None:
        (root / "render.yaml").write_text(render)
    return root


@pytest.fixture
def data_root(tmp_path) -> Path:
    """Return a site root holding the sample ecosystem."""
    return write_data_root(tmp_path / "site")


@pytest.fixture
def schema_file(tmp_path) -> Path:
    """Return the path to the sample entity schema."""
    path = tmp_path / "entity.schema.yml"
    path.write_text(ENTITY_SCHEMA_YAML)
    return path


@pytest.fixture
def entity_schema() -> dict:
    return parse_yaml_string(ENTITY_SCHEMA_YAML)


@pytest.fixture
def sample_entities():
    """Return the sample entities, parachains first."""
    records = parse_yaml_string(PARACHAINS_YAML)["parachains"]
    records += parse_yaml_string(DAPPS_YAML)
    return [parse_entity(record) for record in records]


@pytest.fixture
def manual_config():
    """Return the parsed sample relationships document."""
    return parse_manual_relationships(parse_yaml_string(RELATIONSHIPS_YAML))


@pytest.fixture
def sample_dataset(sample_entities, manual_config):
    return build_dataset(sample_entities, manual_config)


@pytest.fixture
def sample_graph(sample_dataset):
    """Return a graph built from the sample dataset without a render config."""
    return build_graph(sample_dataset)


@pytest.fixture
def make_data_root(tmp_path):
    """Return a factory laying out a custom site root under tmp_path."""
    counter = iter(range(1000))

    def make(**files) -> Path:
        return write_data_root(tmp_path / f"custom-{next(counter)}", **files)

    return make


@pytest.fixture
def relationships_document() -> dict:
    """Return the raw sample relationships document."""
    return parse_yaml_string(RELATIONSHIPS_YAML)
