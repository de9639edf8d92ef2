from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from top_movers.config.settings import settings
from top_movers.errors import ConfigurationError, UpstreamBusinessError, UpstreamTransportError
from top_movers.exchanges.base import ProviderAdapter
from top_movers.schemas.movers import MoverSchema, TopMoversSchema
from top_movers.utils.parsing import parse_numeric_string

logger = logging.getLogger(__name__)

# Alpha Vantage reports throttling and bad requests in-band with a 200 status.
_NOTICE_FIELDS = ("message", "note", "Note", "Information", "Error Message")

_LIST_FIELDS = {
    "gainers": "top_gainers",
    "losers": "top_losers",
    "mostActive": "top_most_actively_traded",
}


def _resolve_volume(entry: Mapping[str, Any]) -> Optional[float]:
    raw_volume = parse_numeric_string(entry.get("volume"))
    if raw_volume is not None:
        return raw_volume
    # Abbreviated feeds report volume in millions of shares.
    volume_millions = parse_numeric_string(entry.get("volume_millions"))
    if volume_millions is not None:
        return round(volume_millions * 1_000_000)
    return None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def normalize_entry(entry: Mapping[str, Any]) -> MoverSchema:
    """Map one raw Alpha Vantage mover onto the shared movers record.

    A non-string ticker is field-level noise and falls through to the sentinel.
    """
    return MoverSchema(
        ticker=_text(entry.get("ticker")) or _text(entry.get("symbol")) or "N/A",
        price=parse_numeric_string(entry.get("price")) or 0.0,
        change=parse_numeric_string(entry.get("change_amount")) or 0.0,
        changePercent=parse_numeric_string(entry.get("change_percentage")) or 0.0,
        volume=_resolve_volume(entry),
    )


def _upstream_notice(payload: Mapping[str, Any]) -> Optional[str]:
    for field in _NOTICE_FIELDS:
        value = payload.get(field)
        if value:
            return str(value)
    return None


class AlphaVantageAdapter(ProviderAdapter):
    name = "alpha_vantage"
    display_name = "Alpha Vantage"

    async def fetch(self, limit: int) -> TopMoversSchema:
        api_key = settings.alpha_vantage_api_key
        if not api_key:
            raise ConfigurationError("Missing ALPHA_VANTAGE_API_KEY environment variable.")

        payload = await self._get_json(
            settings.alpha_vantage_url,
            {"function": "TOP_GAINERS_LOSERS", "apikey": api_key},
        )
        if not isinstance(payload, Mapping):
            raise UpstreamTransportError(self.name, "Unexpected response from Alpha Vantage.")

        notice = _upstream_notice(payload)
        if notice:
            raise UpstreamBusinessError(self.name, notice)

        lists = {}
        for key, field in _LIST_FIELDS.items():
            items = payload.get(field) or []
            if not isinstance(items, list) or not all(isinstance(item, Mapping) for item in items):
                raise UpstreamTransportError(self.name, f"Alpha Vantage returned a malformed {field} list")
            try:
                lists[key] = [normalize_entry(item) for item in items[:limit]]
            except ValidationError as exc:
                raise UpstreamTransportError(self.name, f"Alpha Vantage returned a malformed {field} row") from exc

        logger.debug(
            "Fetched Alpha Vantage movers",
            extra={"limit": limit, **{key: len(rows) for key, rows in lists.items()}},
        )
        return TopMoversSchema(**lists)
