"""Shared constants used across the catalog packages."""
from __future__ import annotations

from pathlib import Path

# Application version
VERSION: str = "1.0.0"

# Service names
SERVICE_CATALOG_SERVICE_NAME: str = "service-catalog"
CATALOG_GRAPH_LOGGER_NAME: str = "catalog-graph"

# Port numbers
SERVICE_CATALOG_PORT: int = 8000

# Default dataset bundled with the repository, independent of the working directory
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]
DEFAULT_METADATA_PATH: str = str(PROJECT_ROOT / "sample_data" / "service-metadata.json")

# Remote metadata fetch timeout (seconds)
DEFAULT_FETCH_TIMEOUT_S: float = 7.0

# Analytics
DEFAULT_TOP_N: int = 5

# Staleness bands (days since metadata.updatedAt)
FRESH_MAX_DAYS: int = 31
STALE_AFTER_DAYS: int = 183

# Node sizing (pixels)
NODE_SIZE_MIN: float = 40.0
NODE_SIZE_MAX: float = 110.0

# Force layout
LAYOUT_ITERATIONS: int = 150
LAYOUT_SEED: int = 42
LAYOUT_CENTER: tuple[float, float] = (800.0, 500.0)
LAYOUT_SCALE: float = 500.0

# Dependency classes
CRITICAL: str = "critical"
NON_CRITICAL: str = "non-critical"

# Reference data served by the /reference routes
PILLARS: dict[str, list[str]] = {
    "Account": ["Newton", "Einstein", "Curie", "Darwin", "Fermi"],
    "Data": ["Data Science", "Data Insights", "Data Platforms", "Data Governance"],
}
SERVICE_NAME_DOMAINS: list[str] = ["domaina", "domainb", "engineering"]
