"""Journal — owns the current trade collection and settings for one user.

State is read from and written through an injected JournalStore; analytics
are computed from the in-memory collection on demand and never cached.
"""

import logging
from datetime import date
from typing import Any

from trading_journal.models.settings import JournalSettings
from trading_journal.models.trade import Trade
from trading_journal.services.analytics import TradeStats, compute_stats
from trading_journal.services.date_filter import get_filtered_trades
from trading_journal.services.journal_store import JournalStore, default_settings

logger = logging.getLogger(__name__)


class Journal:
    def __init__(self, store: JournalStore):
        self.store = store
        self.trades: list[Trade] = []
        self.settings: JournalSettings = default_settings()
        self.refresh()

    def refresh(self):
        self.trades = self.store.load_trades()
        self.settings = self.store.load_settings()

    def add_trade(self, **fields: Any) -> Trade:
        trade = Trade(**fields)
        if trade.max_r is None:
            trade.max_r = trade.realised_r
        self.trades.append(trade)
        self.store.save_trades(self.trades)
        logger.info(f"Added trade {trade.id} ({trade.symbol} {trade.realised_r:+.2f}R)")
        return trade

    def update_trade(self, trade_id: str, **updates: Any) -> Trade | None:
        for trade in self.trades:
            if trade.id == trade_id:
                for key, value in updates.items():
                    if key != "id":
                        setattr(trade, key, value)
                self.store.save_trades(self.trades)
                return trade
        return None

    def delete_trade(self, trade_id: str) -> bool:
        remaining = [t for t in self.trades if t.id != trade_id]
        if len(remaining) == len(self.trades):
            return False
        self.trades = remaining
        self.store.save_trades(self.trades)
        logger.info(f"Deleted trade {trade_id}")
        return True

    def clear_all_trades(self):
        self.trades = []
        self.store.save_trades(self.trades)

    def update_settings(self, **updates: Any) -> JournalSettings:
        merged = {**self.settings.model_dump(exclude={"id"}), **updates}
        self.settings = JournalSettings(**merged)
        self.store.save_settings(self.settings)
        return self.settings

    def reset_settings(self) -> JournalSettings:
        self.settings = default_settings()
        self.store.save_settings(self.settings)
        return self.settings

    def full_reset(self):
        self.store.clear()
        self.trades = []
        self.settings = default_settings()
        logger.info("Journal reset")

    def filtered(
        self,
        mode: str = "all",
        custom_from: str | None = None,
        custom_to: str | None = None,
        today: date | None = None,
    ) -> list[Trade]:
        return get_filtered_trades(self.trades, mode, custom_from, custom_to, today)

    def stats(self, mode: str = "all", **kwargs: Any) -> TradeStats:
        return compute_stats(self.filtered(mode, **kwargs))
