"""Database models."""

from trading_journal.models.trade import Trade
from trading_journal.models.settings import JournalSettings

__all__ = [
    "Trade",
    "JournalSettings",
]
