"""Fixtures for Service Catalog API tests."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.service_catalog.main import create_app


@pytest.fixture
def client(catalog_config):
    """TestClient over a fresh app whose metadata comes from a temp file."""
    app = create_app(catalog_config)
    with TestClient(app) as c:
        yield c
