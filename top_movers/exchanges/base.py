from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from top_movers.config.settings import settings
from top_movers.errors import UpstreamTransportError

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """One upstream data provider. Subclasses fetch and normalize a single feed."""

    name: str
    display_name: str

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    async def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=settings.request_timeout_seconds,
                headers={"User-Agent": f"top-movers/{settings.app_version}"},
            ) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamTransportError(self.name, f"{self.display_name} request failed: {exc}") from exc

        if not response.is_success:
            raise UpstreamTransportError(
                self.name,
                f"{self.display_name} request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamTransportError(
                self.name, f"{self.display_name} returned a malformed response body"
            ) from exc

    @abstractmethod
    async def fetch(self, limit: int) -> Any:
        raise NotImplementedError
