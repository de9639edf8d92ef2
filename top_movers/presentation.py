"""
Server-side rendering of the movers tables.
Mirrors the browser widget: one card per list, currency and percent formatting,
and an inline message in place of a table when a provider failed.
"""
from __future__ import annotations

import html
import math
from datetime import datetime, timezone
from typing import Optional, Sequence
from urllib.parse import quote

from top_movers.schemas.movers import MoverSchema
from top_movers.schemas.quote import YahooQuoteSchema
from top_movers.services.movers_service import DashboardData
from top_movers.utils.validators import MAX_LIMIT, MIN_LIMIT

PLACEHOLDER = "–"
EMPTY_MESSAGE = "No data available right now."

MOVER_SECTIONS = (
    ("gainers", "Top Gainers"),
    ("losers", "Top Losers"),
    ("mostActive", "Most Active"),
)


def _is_number(value: Optional[float]) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def format_currency(value: Optional[float]) -> str:
    if not _is_number(value):
        return PLACEHOLDER
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_signed_currency(value: Optional[float]) -> str:
    if not _is_number(value):
        return PLACEHOLDER
    return f"{'+' if value >= 0 else '-'}${abs(value):,.2f}"


def format_volume(value: Optional[float]) -> str:
    if not _is_number(value):
        return PLACEHOLDER
    return f"{value:,.0f}"


def symbol_url(symbol: Optional[str]) -> str:
    normalized = (symbol or "").strip()
    if not normalized:
        return "#"
    return f"https://finance.yahoo.com/quote/{quote(normalized, safe='')}"


def change_badge(value: Optional[float]) -> str:
    percent = value if _is_number(value) else 0.0
    positive = percent >= 0
    return (
        f'<span class="badge {"gain" if positive else "loss"}">'
        f'<span>{"▲" if positive else "▼"}</span>{abs(percent):,.2f}%</span>'
    )


def _symbol_cell(symbol: Optional[str]) -> str:
    if not symbol:
        return "<td>—</td>"
    return (
        f'<td><a class="symbol-link" href="{html.escape(symbol_url(symbol))}" '
        f'target="_blank" rel="noopener noreferrer">{html.escape(symbol)}</a></td>'
    )


def _table(headers: Sequence[str], rows: Sequence[str]) -> str:
    head = "".join(f"<th>{html.escape(h)}</th>" for h in headers)
    return f"<table><thead><tr>{head}</tr></thead><tbody>{''.join(rows)}</tbody></table>"


def _card(title: str, body: str) -> str:
    return f'<article class="table-card"><h2>{html.escape(title)}</h2>{body}</article>'


def _message(text: str) -> str:
    return f"<p>{html.escape(text)}</p>"


def render_movers_section(title: str, rows: Sequence[MoverSchema]) -> str:
    if not rows:
        return _card(title, _message(EMPTY_MESSAGE))

    body_rows = [
        "<tr>"
        + _symbol_cell(row.ticker)
        + f"<td>{format_currency(row.price)}</td>"
        + f"<td>{format_signed_currency(row.change)}</td>"
        + f"<td>{change_badge(row.changePercent)}</td>"
        + f"<td>{format_volume(row.volume)}</td>"
        + "</tr>"
        for row in rows
    ]
    return _card(title, _table(["Symbol", "Price", "Change", "% Change", "Volume"], body_rows))


def render_yahoo_section(quotes: Sequence[YahooQuoteSchema], error: Optional[str] = None) -> str:
    title = "Yahoo Gainers"
    if error:
        return _card(title, _message(error))
    if not quotes:
        return _card(title, _message(EMPTY_MESSAGE))

    body_rows = []
    for item in quotes:
        if _is_number(item.changePercent):
            percent = change_badge(item.changePercent)
        else:
            percent = PLACEHOLDER
        body_rows.append(
            "<tr>"
            + _symbol_cell(item.symbol)
            + f"<td>{html.escape(item.name or '—')}</td>"
            + f"<td>{format_currency(item.price)}</td>"
            + f"<td>{format_currency(item.previousClose)}</td>"
            + f"<td>{format_signed_currency(item.change)}</td>"
            + f"<td>{percent}</td>"
            + "</tr>"
        )
    headers = ["Symbol", "Company Name", "Current Price", "Previous Close", "Price Change ($)", "% Change"]
    return _card(title, _table(headers, body_rows))


def render_tables(data: DashboardData) -> str:
    """Render every section. A movers failure leaves only the Yahoo section."""
    sections = [render_yahoo_section(data.yahoo.data or [], data.yahoo.error)]
    if data.movers.ok and data.movers.data is not None:
        for key, title in MOVER_SECTIONS:
            sections.append(render_movers_section(title, getattr(data.movers.data, key)))
    return "".join(sections)


def render_status(data: DashboardData, now: Optional[datetime] = None) -> tuple[str, str]:
    if not data.movers.ok:
        return data.movers.error or "Failed to load top movers.", "error"
    timestamp = (now or datetime.now(timezone.utc)).strftime("%H:%M:%S")
    return f"Updated at {timestamp} UTC.", "info"


def render_dashboard(data: DashboardData, title: str = "Top Movers") -> str:
    status, tone = render_status(data)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>{html.escape(title)}</title>
<link rel="stylesheet" href="/styles.css" />
</head>
<body>
<main>
<header>
<h1>{html.escape(title)}</h1>
<form method="get" action="/dashboard" class="controls">
<label for="limit">Rows</label>
<input id="limit" name="limit" type="number" min="{MIN_LIMIT}" max="{MAX_LIMIT}" value="{data.limit}" />
<button type="submit">Refresh</button>
</form>
</header>
<p id="status" data-tone="{tone}">{html.escape(status)}</p>
<section id="tables">{render_tables(data)}</section>
</main>
</body>
</html>
"""
