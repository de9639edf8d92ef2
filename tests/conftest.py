import pytest

from top_movers.config.settings import settings


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "alpha_vantage_api_key", "demo-key")
    return "demo-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.setattr(settings, "alpha_vantage_api_key", None)


@pytest.fixture
def yahoo_quotes():
    return [
        {
            "symbol": "NVDA",
            "shortName": "NVIDIA Corporation",
            "regularMarketPrice": 120.5,
            "regularMarketPreviousClose": 110.0,
            "regularMarketChange": 10.5,
            "regularMarketChangePercent": 9.545,
        },
        {
            "symbol": "  AMD ",
            "shortName": "   ",
            "longName": "Advanced Micro Devices, Inc.",
            "regularMarketPrice": float("nan"),
            "regularMarketPreviousClose": 150.0,
            "regularMarketChange": 0,
            "regularMarketChangePercent": float("inf"),
        },
        {"shortName": "No Symbol Inc."},
    ]
