"""Shared test fixtures for the service catalog test suite."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from src.service_catalog.services.catalog_store import CatalogStore
from src.shared.config import CatalogConfig


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed 'current time' for staleness calculations."""
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_services() -> list[dict[str, Any]]:
    """A small catalog exercising dependencies, events and inferred nodes."""
    return [
        {
            "name": "gateway",
            "contracts": [{"role": "edge", "protocol": "https"}],
            "dependencies": {
                "critical": [{"name": "auth", "role": "authn", "protocol": "grpc"}],
                "non-critical": [{"name": "metrics-sink"}],
            },
            "metadata": {"updatedAt": "2026-10-01"},
        },
        {
            "name": "auth",
            "dependencies": {"critical": [{"name": "user-db", "role": "storage"}]},
            "events": {"producing": [{"name": "UserLoggedIn"}]},
            "metadata": {"updatedAt": "2026-01-01"},
        },
        {
            "name": "profile",
            "dependencies": {"critical": [{"name": "auth"}]},
            "events": {
                "producing": [{"name": "ProfileUpdated"}],
                "consuming": [{"name": "UserLoggedIn"}],
            },
            "metadata": {"updatedAt": "2025-01-01"},
        },
        {
            "name": "analytics",
            "events": {
                "consuming": [{"name": "UserLoggedIn"}, {"name": "ProfileUpdated"}],
            },
        },
    ]


@pytest.fixture
def metadata_file(tmp_path: Path, sample_services: list[dict[str, Any]]) -> Path:
    """Write the sample catalog to a temporary metadata file."""
    path = tmp_path / "service-metadata.json"
    path.write_text(json.dumps(sample_services), encoding="utf-8")
    return path


@pytest.fixture
def catalog_config(metadata_file: Path, monkeypatch: pytest.MonkeyPatch) -> CatalogConfig:
    """Config pointing at the temporary metadata file, with no remote URL."""
    monkeypatch.delenv("SERVICE_METADATA_URL", raising=False)
    return CatalogConfig(metadata_path=str(metadata_file))


@pytest.fixture
def store() -> CatalogStore:
    """A CatalogStore whose clock is pinned."""
    return CatalogStore(today=lambda: "2026-10-19")
