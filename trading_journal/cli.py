"""CLI for working with an exported journal file.

Usage:
    python -m trading_journal.cli stats [journal.json] [all|today|week|month]
    python -m trading_journal.cli breakdown [journal.json]
    python -m trading_journal.cli mistakes [journal.json]
    python -m trading_journal.cli import [journal.json]
"""

import math
import sys

from sqlmodel import Session

from trading_journal.config import settings
from trading_journal.database import engine, create_db_and_tables
from trading_journal.services.analytics import (
    get_performance_by_day_of_week,
    get_performance_by_session,
    get_strategy_performance,
)
from trading_journal.services.journal import Journal
from trading_journal.services.journal_store import JsonFileStore
from trading_journal.services.mistakes import calculate_mistake_stats
from trading_journal.utils.constants import FILTER_MODES
from trading_journal.utils.formatting import format_r
from trading_journal.utils.logging import setup_logging


def _open_journal(args: list[str]) -> Journal:
    path = args[0] if args else settings.journal_path
    return Journal(JsonFileStore(path))


def _format_pf(pf: float) -> str:
    return "∞" if math.isinf(pf) else f"{pf:.2f}"


def show_stats(args: list[str]):
    """Print the summary block for one filter mode."""
    if args and args[0] in FILTER_MODES:
        args = [settings.journal_path, *args]
    journal = _open_journal(args[:1])
    mode = args[1] if len(args) > 1 else "all"
    if mode not in FILTER_MODES or mode == "custom":
        print(f"Unknown filter: {mode}")
        sys.exit(1)

    stats = journal.stats(mode)
    streak = stats.current_streak
    print(f"Trades:         {stats.n} ({stats.wins}W / {stats.losses}L / {stats.break_evens}BE)")
    print(f"Total:          {format_r(stats.total_r)}")
    print(f"Win rate:       {stats.winrate:.1f}%")
    print(f"Avg R:          {format_r(stats.avg_r)}")
    print(f"Expectancy:     {format_r(stats.exp_r)}")
    print(f"Profit factor:  {_format_pf(stats.profit_factor)}")
    print(f"Max drawdown:   {stats.max_drawdown:.2f}R")
    print(f"Best/worst day: {format_r(stats.best_day)} / {format_r(stats.worst_day)}")
    print(f"Sharpe:         {stats.sharpe_ratio:.2f}")
    print(f"Streaks:        best {stats.best_win_streak}W, worst {stats.worst_loss_streak}L, "
          f"current {streak.count} {streak.type}")


def show_breakdown(args: list[str]):
    """Print day-of-week, session and strategy tables."""
    journal = _open_journal(args)
    for title, rows in (
        ("Day of week", get_performance_by_day_of_week(journal.trades)),
        ("Session", get_performance_by_session(journal.trades)),
    ):
        print(f"\n{title}")
        for row in rows:
            print(f"  {row.label:<16} {row.trades:>4}  {format_r(row.total_r):>9}  {row.win_rate:5.1f}%")

    print("\nStrategy")
    for row in get_strategy_performance(journal.trades):
        print(f"  {row.name:<16} {row.trades:>4}  {format_r(row.total_r):>9}  "
              f"PF {_format_pf(row.profit_factor):>5}  exp {format_r(row.expectancy)}")


def show_mistakes(args: list[str]):
    journal = _open_journal(args)
    for row in calculate_mistake_stats(journal.trades):
        print(f"  {row.mistake:<32} {row.trades:>4}  {format_r(row.total_r):>9}  exp {format_r(row.expectancy)}")


def import_journal(args: list[str]):
    """Copy every trade from the journal file into the configured database."""
    journal = _open_journal(args)
    create_db_and_tables()
    with Session(engine) as session:
        for trade in journal.trades:
            session.merge(trade)
        session.commit()
    print(f"Imported {len(journal.trades)} trades into {settings.database_url}")


COMMANDS = {
    "stats": show_stats,
    "breakdown": show_breakdown,
    "mistakes": show_mistakes,
    "import": import_journal,
}


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m trading_journal.cli <command> [journal.json]")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    command = sys.argv[1]
    handler = COMMANDS.get(command)
    if handler is None:
        print(f"Unknown command: {command}")
        sys.exit(1)

    setup_logging()
    handler(sys.argv[2:])


if __name__ == "__main__":
    main()
