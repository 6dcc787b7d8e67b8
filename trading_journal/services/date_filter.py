"""Date-range and calendar-year filtering of trade collections."""

from datetime import date, timedelta
from typing import Any, Iterable

from trading_journal.services.analytics import trade_date


def resolve_range(
    mode: str,
    custom_from: str | None = None,
    custom_to: str | None = None,
    today: date | None = None,
) -> tuple[str, str] | None:
    """Inclusive (from, to) date strings for a filter mode, or None for no filtering.

    Weeks start on Monday. A custom range given in reverse is swapped; a custom
    range missing either bound resolves to None.
    """
    today = today or date.today()
    if mode == "today":
        return today.isoformat(), today.isoformat()
    if mode == "week":
        monday = today - timedelta(days=today.weekday())
        return monday.isoformat(), today.isoformat()
    if mode == "month":
        return today.replace(day=1).isoformat(), today.isoformat()
    if mode == "custom":
        if not custom_from or not custom_to:
            return None
        if custom_from > custom_to:
            custom_from, custom_to = custom_to, custom_from
        return custom_from, custom_to
    return None


def get_filtered_trades(
    trades: Iterable[Any],
    mode: str = "all",
    custom_from: str | None = None,
    custom_to: str | None = None,
    today: date | None = None,
) -> list[Any]:
    """Trades whose date lies in the resolved range, as a new list in input order.

    YYYY-MM-DD strings are fixed width, so lexical comparison is date comparison.
    Undated trades only survive the "all" mode.
    """
    bounds = resolve_range(mode, custom_from, custom_to, today)
    if bounds is None:
        return list(trades)
    lo, hi = bounds
    result = []
    for t in trades:
        d = trade_date(t)
        if d is not None and lo <= d <= hi:
            result.append(t)
    return result


def filter_by_year(trades: Iterable[Any], year: int | str = "all") -> list[Any]:
    """Trades dated in the given calendar year; "all" keeps everything."""
    if year == "all":
        return list(trades)
    prefix = f"{int(year):04d}-"
    return [t for t in trades if (trade_date(t) or "").startswith(prefix)]
