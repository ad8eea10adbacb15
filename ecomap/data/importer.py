"""Importer for the upstream ecosystem catalog.

The upstream catalog keeps one YAML file per project in its own format. The
importer downloads those files, converts each into an entity record and writes
the records, grouped, into a temporary directory. Deploying copies the grouped
files into the data directory the loader reads from.
"""

import logging
import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import requests

from ..schema.errors import SchemaLoadError
from ..schema.loader import dump_yaml, parse_yaml_string
from .errors import ImportDataError

logger = logging.getLogger(__name__)

UPSTREAM_REF = "20250623"
UPSTREAM_REPO = "OpenGov-Watch/polkadot-ecosystem-data"
UPSTREAM_BASE_URL = f"https://raw.githubusercontent.com/{UPSTREAM_REPO}/{UPSTREAM_REF}"
UPSTREAM_CONTENTS_URL = (
    f"https://api.github.com/repos/{UPSTREAM_REPO}/contents/data?ref={UPSTREAM_REF}"
)

DEFAULT_TIMEOUT = 30.0

# Output file for each entity type; anything else lands in infrastructure
OUTPUT_GROUPS = ("parachains", "dapps", "infrastructure")
TYPE_GROUPS = {
    "parachain": "parachains",
    "dapp": "dapps",
    "defi": "dapps",
    "nft": "dapps",
    "gaming": "dapps",
}

PROGRESS_INTERVAL = 10


@dataclass
class ImportSummary:
    """Counts gathered while importing."""

    total_files: int = 0
    processed: int = 0
    failed: list[str] = field(default_factory=list)
    group_counts: dict[str, int] = field(default_factory=dict)


def generate_slug(name: str) -> str:
    """Derive a slug from a display name."""
    slug = name.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()


def categorize_entity(item: dict) -> str:
    """Map an upstream record's categories onto an entity type."""
    categories = [str(c).lower() for c in item.get("category") or []]
    if not categories:
        return "infrastructure"

    if "wallet" in categories:
        return "wallet"
    if "defi" in categories or "exchange" in categories:
        return "defi"
    if "dapp" in categories or "game" in categories:
        return "dapp"
    if "bridge" in categories:
        return "bridge"
    if "nft" in categories:
        return "nft"
    if any(c in categories for c in ("oracle", "api", "infra")):
        return "infrastructure"

    if "Layer-1" in (item.get("layer") or []):
        return "parachain"
    technology = (item.get("readiness") or {}).get("technology")
    if technology in ("Connected to Parachain", "Connected to Relay chain"):
        return "parachain"

    return "infrastructure"


def _latest_value(series: Any) -> Any:
    if isinstance(series, list) and series:
        latest = series[-1]
        if isinstance(latest, dict):
            return latest.get("value")
    return None


def _to_tag(value: Any) -> str:
    return re.sub(r"\s+", "-", str(value).lower())


def transform_entity(item: dict) -> dict:
    """Convert an upstream project record into an entity record."""
    name = str(item.get("name", ""))
    record: dict[str, Any] = {
        "slug": generate_slug(name),
        "name": name,
        "type": categorize_entity(item),
    }
    if item.get("description") is not None:
        record["description"] = item["description"]

    web = item.get("web") or {}
    if web.get("site"):
        website = str(web["site"])
        if not website.startswith(("http://", "https://")):
            website = f"https://{website}"
        record["website"] = website
    if web.get("github"):
        record["github"] = web["github"]
    if web.get("twitter"):
        twitter = str(web["twitter"])
        record["twitter"] = (
            twitter if twitter.startswith("http") else f"https://twitter.com/{twitter}"
        )

    upstream_metrics = item.get("metrics")
    if isinstance(upstream_metrics, dict):
        metrics: dict[str, Any] = {}
        stars = _latest_value(upstream_metrics.get("github"))
        if stars is not None:
            metrics["stars"] = stars
        followers = _latest_value(upstream_metrics.get("twitter"))
        if followers is not None:
            metrics["twitter_followers"] = followers
        record["metrics"] = metrics

    tags = [_to_tag(c) for c in item.get("category") or []]
    tags += [_to_tag(e) for e in item.get("ecosystem") or []]
    if item.get("category") is not None or item.get("ecosystem") is not None:
        record["tags"] = list(dict.fromkeys(tags))

    record["relationships"] = []
    return record


def output_group(entity_type: str) -> str:
    """Name of the data file an entity type is written to."""
    return TYPE_GROUPS.get(entity_type, "infrastructure")


class EcosystemDataImporter:
    """Downloads, converts and deploys the upstream ecosystem catalog."""

    def __init__(
        self,
        output_dir: str | Path,
        temp_dir: str | Path | None = None,
        base_url: str = UPSTREAM_BASE_URL,
        contents_url: str = UPSTREAM_CONTENTS_URL,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.output_dir = Path(output_dir)
        self.temp_dir = Path(temp_dir) if temp_dir else Path.cwd() / "temp-ecosystem-data"
        self.base_url = base_url.rstrip("/")
        self.contents_url = contents_url
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def temp_data_dir(self) -> Path:
        return self.temp_dir / "data"

    def download_file(self, url: str) -> str:
        """Download a text file.

        Raises:
            ImportDataError: If the request fails.
        """
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImportDataError(f"Failed to download {url}: {e}") from e
        return response.text

    def download_schema(self) -> str:
        url = f"{self.base_url}/data.schema.yml"
        logger.info("Downloading schema from %s", url)
        return self.download_file(url)

    def get_data_file_list(self) -> list[str]:
        """List the upstream project files.

        Raises:
            ImportDataError: If the listing cannot be fetched.
        """
        try:
            response = self.session.get(self.contents_url, timeout=self.timeout)
            response.raise_for_status()
            files = response.json()
        except (requests.RequestException, ValueError) as e:
            raise ImportDataError(f"Failed to get file list: {e}") from e

        return [
            f["name"]
            for f in files
            if f.get("type") == "file" and str(f.get("name", "")).endswith(".yaml")
        ]

    def download_data_file(self, filename: str) -> dict:
        """Download and parse one upstream project file.

        Raises:
            ImportDataError: If the file cannot be downloaded or parsed.
        """
        logger.debug("Downloading %s", filename)
        content = self.download_file(f"{self.base_url}/data/{filename}")
        try:
            data = parse_yaml_string(content, filename)
        except SchemaLoadError as e:
            raise ImportDataError(str(e)) from e
        if not isinstance(data, dict):
            raise ImportDataError(f"{filename} does not contain a project record")
        return data

    def import_data(self) -> ImportSummary:
        """Download the catalog and write converted records to the temp directory.

        Files that fail individually are skipped and listed in the summary.

        Raises:
            ImportDataError: If the schema or the file listing cannot be fetched.
        """
        logger.info("Starting ecosystem data import")
        self.temp_dir.mkdir(parents=True, exist_ok=True)

        (self.temp_dir / "data.schema.yml").write_text(
            self.download_schema(), encoding="utf-8"
        )

        data_files = self.get_data_file_list()
        summary = ImportSummary(total_files=len(data_files))
        logger.info("Found %d data files", len(data_files))

        groups: dict[str, list[dict]] = {name: [] for name in OUTPUT_GROUPS}
        for filename in data_files:
            try:
                record = transform_entity(self.download_data_file(filename))
            except ImportDataError as e:
                logger.warning("Failed to process %s: %s", filename, e)
                summary.failed.append(filename)
                continue

            groups[output_group(record["type"])].append(record)
            summary.processed += 1
            if summary.processed % PROGRESS_INTERVAL == 0:
                logger.info("Processed %d/%d files", summary.processed, summary.total_files)

        self.temp_data_dir.mkdir(parents=True, exist_ok=True)
        for group, records in groups.items():
            path = self.temp_data_dir / f"{group}.yml"
            path.write_text(dump_yaml(records), encoding="utf-8")
            summary.group_counts[group] = len(records)
            logger.info("Wrote %d items to %s", len(records), path.name)

        logger.info(
            "Successfully processed %d/%d files", summary.processed, summary.total_files
        )
        return summary

    def copy_to_production(self) -> list[Path]:
        """Copy converted data files into the output directory.

        The downloaded schema describes the upstream format, so it is not
        copied.

        Raises:
            ImportDataError: If there is nothing to deploy.
        """
        if not self.temp_data_dir.is_dir():
            raise ImportDataError(
                f"Temp data directory not found: {self.temp_data_dir}. Run the download first."
            )

        self.output_dir.mkdir(parents=True, exist_ok=True)
        copied = []
        for path in sorted(self.temp_data_dir.iterdir()):
            if path.is_file():
                destination = self.output_dir / path.name
                shutil.copyfile(path, destination)
                copied.append(destination)
                logger.info("Copied %s", path.name)
        return copied

    def cleanup(self) -> None:
        """Remove the temp directory."""
        try:
            shutil.rmtree(self.temp_dir)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to clean up temp files: %s", e)
        else:
            logger.info("Temporary files cleaned up")
