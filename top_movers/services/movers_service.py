from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from top_movers.errors import MoversError
from top_movers.exchanges.alpha_vantage_adapter import AlphaVantageAdapter
from top_movers.exchanges.base import ProviderAdapter
from top_movers.exchanges.yahoo_adapter import YahooScreenerAdapter
from top_movers.observability import observability
from top_movers.schemas.movers import TopMoversSchema
from top_movers.schemas.quote import YahooQuoteSchema
from top_movers.utils.validators import resolve_limit

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ProviderOutcome(Generic[T]):
    """Result of one provider call: either data or a display message, never both."""

    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DashboardData:
    limit: int
    movers: ProviderOutcome[TopMoversSchema]
    yahoo: ProviderOutcome[list[YahooQuoteSchema]]


class MoversService:
    def __init__(self, alpha_vantage: ProviderAdapter, yahoo: ProviderAdapter):
        self.alpha_vantage = alpha_vantage
        self.yahoo = yahoo

    async def _call(self, adapter: ProviderAdapter, limit: int) -> Any:
        try:
            data = await adapter.fetch(limit)
        except MoversError as exc:
            observability.mark_provider_failure(adapter.name, str(exc))
            raise
        observability.mark_provider_success(adapter.name)
        return data

    async def get_top_movers(self, limit: Any = None) -> TopMoversSchema:
        """Fetch Alpha Vantage movers. Any failure propagates; there is no partial result."""
        return await self._call(self.alpha_vantage, resolve_limit(limit))

    async def get_yahoo_gainers(self, limit: Any = None) -> list[YahooQuoteSchema]:
        return await self._call(self.yahoo, resolve_limit(limit))

    async def _outcome(self, coro, label: str) -> ProviderOutcome:
        try:
            return ProviderOutcome(data=await coro)
        except MoversError as exc:
            logger.error(f"Failed to load {label}: {exc}", exc_info=True)
            return ProviderOutcome(error=str(exc) or f"Failed to load {label}.")

    async def load_dashboard(self, limit: Any = None) -> DashboardData:
        """Query both providers concurrently; each failure is contained in its own outcome."""
        resolved = resolve_limit(limit)
        movers, yahoo = await asyncio.gather(
            self._outcome(self.get_top_movers(resolved), "top movers"),
            self._outcome(self.get_yahoo_gainers(resolved), "Yahoo gainers"),
        )
        return DashboardData(limit=resolved, movers=movers, yahoo=yahoo)


def build_movers_service() -> MoversService:
    return MoversService(AlphaVantageAdapter(), YahooScreenerAdapter())
