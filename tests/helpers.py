"""Shared test helpers: canned upstream payloads and fake transports."""

import json

import httpx

from top_movers.exchanges.alpha_vantage_adapter import AlphaVantageAdapter
from top_movers.exchanges.yahoo_adapter import YahooScreenerAdapter
from top_movers.services.movers_service import MoversService


def alpha_vantage_payload(**overrides):
    payload = {
        "metadata": "Top gainers, losers, and most actively traded US tickers",
        "top_gainers": [
            {
                "ticker": "ABC",
                "price": "12.50",
                "change_amount": "+1.25",
                "change_percentage": "11.11%",
                "volume": "1000000",
            }
        ],
        "top_losers": [
            {
                "ticker": "XYZ",
                "price": "3.10",
                "change_amount": "-0.90",
                "change_percentage": "-22.5%",
                "volume": "250000",
            }
        ],
        "top_most_actively_traded": [
            {
                "ticker": "SPY",
                "price": "$512.30",
                "change_amount": "2.10",
                "change_percentage": "0.41%",
                "volume_millions": "85.2M",
            }
        ],
    }
    payload.update(overrides)
    return payload


def yahoo_payload(quotes):
    return {"finance": {"result": [{"quotes": quotes}], "error": None}}


def json_transport(payload, status_code=200, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        # Encoded by hand so NaN and Infinity survive, as they do in Yahoo bodies.
        body = json.dumps(payload).encode("utf-8")
        return httpx.Response(status_code, content=body, headers={"content-type": "application/json"})

    return httpx.MockTransport(handler)


def failing_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


def make_service(alpha_transport=None, yahoo_transport=None):
    return MoversService(
        AlphaVantageAdapter(transport=alpha_transport or json_transport(alpha_vantage_payload())),
        YahooScreenerAdapter(transport=yahoo_transport or json_transport(yahoo_payload([]))),
    )
