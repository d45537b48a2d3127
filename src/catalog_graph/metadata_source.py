"""Service metadata source: bundled dataset plus optional remote override.

The bundled ``service-metadata.json`` is loaded first and becomes the
last-known-good dataset.  A remote URL can be supplied per call, as a
runtime override, or through configuration (checked in that order).  A
failed fetch never clears the current dataset; it records the error and
reports the data as ``local`` again.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from src.shared.config import CatalogConfig
from src.shared.errors import MetadataFetchError
from src.shared.models.graph import DataSource, SourceStatus

logger = logging.getLogger(__name__)


def load_metadata_file(path: Path | str) -> list[Any]:
    """Read a metadata array from disk.

    Raises:
        MetadataFetchError: the file is unreadable, not JSON, or not an array.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise MetadataFetchError(detail=f"Cannot read {path}: {exc}") from exc
    if not isinstance(data, list):
        raise MetadataFetchError(detail=f"{path}: expected JSON array")
    return data


async def fetch_metadata(url: str, timeout_s: float) -> list[Any]:
    """GET *url* and return its JSON array body.

    Raises:
        MetadataFetchError: with a short reason suitable for display.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout_s) as client:
            resp = await client.get(url)
    except httpx.TimeoutException as exc:
        raise MetadataFetchError(detail="Request timed out") from exc
    except httpx.HTTPError as exc:
        raise MetadataFetchError(detail=str(exc) or type(exc).__name__) from exc

    if not 200 <= resp.status_code < 300:
        raise MetadataFetchError(detail=f"HTTP {resp.status_code}")
    try:
        data = resp.json()
    except ValueError as exc:
        raise MetadataFetchError(detail="expected JSON array") from exc
    if not isinstance(data, list):
        raise MetadataFetchError(detail="expected JSON array")
    return data


class MetadataSource:
    """Holds the current service metadata array and where it came from."""

    def __init__(
        self,
        services: list[Any] | None = None,
        configured_url: str | None = None,
        timeout_s: float = 7.0,
    ) -> None:
        self._services: list[Any] = list(services or [])
        self._configured_url = configured_url
        self._runtime_url: str | None = None
        self._timeout_s = timeout_s
        self.data_source = DataSource.LOCAL
        self.fetch_error: str | None = None

    @classmethod
    def from_config(cls, config: CatalogConfig) -> MetadataSource:
        """Load the bundled dataset named by *config*.

        A missing or malformed bundled file leaves the source empty and
        records the problem as ``fetch_error``.
        """
        services: list[Any] = []
        error: str | None = None
        try:
            services = load_metadata_file(config.metadata_path)
        except MetadataFetchError as exc:
            logger.warning("Bundled metadata unavailable: %s", exc.detail)
            error = exc.detail
        source = cls(
            services=services,
            configured_url=config.metadata_url,
            timeout_s=config.fetch_timeout_s,
        )
        source.fetch_error = error
        return source

    @property
    def services(self) -> list[Any]:
        return self._services

    @property
    def runtime_url(self) -> str | None:
        return self._runtime_url

    def resolve_url(self, url: str | None = None) -> str | None:
        """Pick the URL to fetch: explicit, then runtime override, then config."""
        return url or self._runtime_url or self._configured_url

    async def refresh(self, url: str | None = None) -> bool:
        """Fetch remote metadata, falling back to the current dataset on error.

        Returns ``True`` when remote data was loaded.  Without any URL this
        is a no-op returning ``False``.
        """
        target = self.resolve_url(url)
        if not target:
            return False

        try:
            services = await fetch_metadata(target, self._timeout_s)
        except MetadataFetchError as exc:
            logger.warning("Metadata fetch from %s failed: %s", target, exc.detail)
            self.fetch_error = exc.detail
            self.data_source = DataSource.LOCAL
            return False

        self._services = services
        self.data_source = DataSource.REMOTE
        self.fetch_error = None
        logger.info("Loaded %d service records from %s", len(services), target)
        return True

    async def apply_runtime_url(self, url: str) -> bool:
        """Remember *url* as the runtime override and fetch from it."""
        self._runtime_url = url
        return await self.refresh(url)

    async def clear_runtime_url(self) -> bool:
        """Drop the runtime override and refetch from configuration, if any."""
        self._runtime_url = None
        return await self.refresh()

    def status(self) -> SourceStatus:
        return SourceStatus(
            data_source=self.data_source,
            runtime_url=self._runtime_url,
            configured_url=self._configured_url,
            fetch_error=self.fetch_error,
            service_count=len(self._services),
        )
