from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, List

from models import Cluster, IndexQuote, LevelSet, MarketSnapshot, SymbolMatch
from utils.rounding import round_to_integer

DIVIDER = "⎯" * 15

CURRENCY_SYMBOLS = {
    "THB": "฿",
    "EUR": "€",
    "GBP": "£",
}


def strength_icon(strength: float) -> str:
    if strength >= 8:
        return "🟢🔴"
    if strength >= 5:
        return "🟢"
    if strength >= 3:
        return "🟡"
    return "⚪"


def format_currency(value: float, currency: str) -> str:
    if currency == "JPY":
        return f"¥{int(round_to_integer(value))}"
    symbol = CURRENCY_SYMBOLS.get(currency, "$")
    return f"{symbol}{value:.2f}"


def format_market_cap(market_cap: float) -> str:
    if not market_cap:
        return "N/A"
    if market_cap >= 1e12:
        return f"{market_cap / 1e12:.2f}T"
    if market_cap >= 1e9:
        return f"{market_cap / 1e9:.2f}B"
    if market_cap >= 1e6:
        return f"{market_cap / 1e6:.2f}M"
    return f"{market_cap:,.0f}"


def _format_side(
    title: str, clusters: List[Cluster], current_price: float, currency: str, empty: str
) -> List[str]:
    lines = [title]
    if not clusters:
        lines.append(f"├ ⚪ {empty}")
        return lines

    # Distances need a positive finite price to divide by.
    show_distance = math.isfinite(current_price) and current_price > 0
    for i, level in enumerate(clusters, start=1):
        line = (
            f"├ {strength_icon(level.strength)} Level {i}: "
            f"{format_currency(level.price, currency)}"
        )
        if show_distance:
            distance_pct = abs(current_price - level.price) / current_price * 100
            line += f" ({distance_pct:.1f}%)"
        lines.append(line)
    return lines


def format_levels(levels: LevelSet, current_price: float, currency: str) -> str:
    """Render support and resistance blocks with distance to the current price."""

    lines = _format_side(
        "🛡️ Support", levels.support, current_price, currency, "No clear support"
    )
    lines.append(DIVIDER)
    lines += _format_side(
        "🎯 Resistance", levels.resistance, current_price, currency, "No clear resistance"
    )
    return "\n".join(lines)


def format_snapshot(snapshot: MarketSnapshot, now: datetime | None = None) -> str:
    currency = snapshot.currency
    sign = "+" if snapshot.change_pct > 0 else ""
    hint = "🟢 Consider buying / holding" if snapshot.change_pct >= 0 else "🔴 Caution / reduce exposure"
    note = " (basic levels)" if snapshot.levels_fallback else ""
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")

    return "\n".join(
        [
            f"🏢 {snapshot.symbol} - {snapshot.company_name}",
            f"📍 Exchange: {snapshot.exchange} | 💰 Currency: {currency}",
            DIVIDER,
            "💹 Price",
            f"├ 💰 Current: {format_currency(snapshot.current_price, currency)}",
            f"├ 📊 Change: {format_currency(snapshot.change, currency)} "
            f"({sign}{snapshot.change_pct:.2f}%)",
            f"├ 📈 Day high: {format_currency(snapshot.day_high, currency)}",
            f"├ 📉 Day low: {format_currency(snapshot.day_low, currency)}",
            f"└ 💼 Market cap: {format_market_cap(snapshot.market_cap)}",
            "",
            f"📦 Volume: {snapshot.volume:,.0f}",
            "",
            f"{format_levels(snapshot.levels, snapshot.current_price, currency)}{note}",
            "",
            f"💡 Hint: {hint}",
            f"⏰ Updated: {timestamp}",
        ]
    )


def format_search_results(query: str, matches: Iterable[SymbolMatch]) -> str:
    matches = list(matches)
    if not matches:
        return f"❌ No results for '{query}'"

    lines = [f"✨ Search results: '{query}'", ""]
    for i, match in enumerate(matches, start=1):
        lines += [f"{i}. 🏢 {match.symbol}", f"   {match.name}", f"   📍 {match.exchange}", ""]
    return "\n".join(lines).rstrip()


def format_world_indices(quotes: Iterable[IndexQuote]) -> str:
    quotes = list(quotes)
    if not quotes:
        return "❌ Could not load index data right now"

    lines = ["🌐 World market indices", DIVIDER]
    for quote in quotes:
        arrow = "🟢" if quote.is_up else "🔴"
        trend = "📈" if quote.is_up else "📉"
        sign = "+" if quote.change_pct > 0 else ""
        lines.append(
            f"{trend} {quote.name}: {arrow} {format_currency(quote.price, quote.currency)} "
            f"({sign}{quote.change_pct:.2f}%)"
        )
    return "\n".join(lines)


def print_status(message: str) -> None:
    """Prints a report or status line as-is."""
    print(message)


def print_error(message: str) -> None:
    """Prints an error banner for the CLI."""
    print(f"--- ❌ {message} ---")
