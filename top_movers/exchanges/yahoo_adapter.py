from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from top_movers.config.settings import settings
from top_movers.errors import UpstreamTransportError
from top_movers.exchanges.base import ProviderAdapter
from top_movers.schemas.quote import YahooQuoteSchema
from top_movers.utils.validators import is_valid_symbol

logger = logging.getLogger(__name__)

_MALFORMED = "Yahoo Finance returned a malformed response body"


def _finite(value: Any) -> Optional[float]:
    """Return the value if it is a real finite number, else None. Zero stays zero."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # JSON integers are unbounded; anything past float range is not a price.
        return None
    if not math.isfinite(number):
        return None
    return number


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_yahoo_quote(quote: Mapping[str, Any]) -> YahooQuoteSchema:
    return YahooQuoteSchema(
        symbol=_trimmed(quote.get("symbol")) if quote.get("symbol") is not None else "N/A",
        name=_trimmed(quote.get("shortName")) or _trimmed(quote.get("longName")) or "Unknown Company",
        price=_finite(quote.get("regularMarketPrice")),
        previousClose=_finite(quote.get("regularMarketPreviousClose")),
        change=_finite(quote.get("regularMarketChange")),
        changePercent=_finite(quote.get("regularMarketChangePercent")),
    )


def normalize_yahoo_quotes(quotes: Iterable[Any]) -> list[YahooQuoteSchema]:
    """Normalize screener quotes, dropping any without an addressable symbol."""
    normalized = [normalize_yahoo_quote(quote) for quote in quotes if isinstance(quote, Mapping)]
    return [quote for quote in normalized if is_valid_symbol(quote.symbol)]


def _extract_quotes(payload: Any) -> list[Any]:
    """Pull the quote rows out of a screener body.

    A body without ``finance`` carries no screener at all and yields no rows.
    Once ``finance`` is present, every level down to the rows must have the
    documented shape, otherwise the body is malformed.
    """
    finance = payload.get("finance") if isinstance(payload, Mapping) else None
    if finance is None:
        return []
    if not isinstance(finance, Mapping):
        raise UpstreamTransportError("yahoo", _MALFORMED)
    results = finance.get("result") or []
    if not isinstance(results, list):
        raise UpstreamTransportError("yahoo", _MALFORMED)
    if not results:
        return []
    if not isinstance(results[0], Mapping):
        raise UpstreamTransportError("yahoo", _MALFORMED)
    quotes = results[0].get("quotes") or []
    if not isinstance(quotes, list):
        raise UpstreamTransportError("yahoo", _MALFORMED)
    return quotes


class YahooScreenerAdapter(ProviderAdapter):
    name = "yahoo"
    display_name = "Yahoo Finance"

    async def fetch(self, limit: int) -> list[YahooQuoteSchema]:
        payload = await self._get_json(
            settings.yahoo_screener_url,
            {
                "scrIds": settings.yahoo_screener_id,
                "count": settings.yahoo_screener_count,
                "start": 0,
                "lang": "en-US",
            },
        )
        raw_quotes = _extract_quotes(payload)
        quotes = normalize_yahoo_quotes(raw_quotes)
        if len(quotes) < len(raw_quotes):
            logger.warning("Dropped %d Yahoo quotes without a symbol", len(raw_quotes) - len(quotes))
        return quotes[:limit]
