"""Shared infrastructure for market data API clients."""

from __future__ import annotations

from typing import Any, Mapping

import requests
from loguru import logger

from chart_snapshots.errors import UpstreamListingError


class APIClientError(UpstreamListingError):
    """Raised when an upstream API call fails or returns an unexpected payload."""


class BaseClient:
    """Base functionality for REST client implementations."""

    def __init__(
        self,
        name: str,
        base_url: str,
        *,
        timeout: float = 10.0,
        headers: Mapping[str, str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json", **dict(headers or {})})

    def _log(self, message: str, **kwargs: Any) -> None:
        """Convenience logger hook."""

        logger.bind(client=self.name, **kwargs).debug(message)

    def _get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.exception("Upstream request failed", client=self.name, path=path)
            raise APIClientError(f"{self.name} request to {path} failed: {exc}") from exc
