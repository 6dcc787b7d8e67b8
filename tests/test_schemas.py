"""Schema validation tests for trade and settings payloads."""

import math

import pytest
from pydantic import ValidationError

from trading_journal.models.trade import Trade
from trading_journal.schemas.analytics import StrategyPerformanceRead, TradeStatsRead
from trading_journal.schemas.settings import JournalSettingsIn
from trading_journal.schemas.trade import TradeCreate, TradeUpdate
from trading_journal.services.analytics import StrategyPerformance, compute_stats


class TestTradeCreateSchema:
    def test_defaults(self):
        schema = TradeCreate(date="2024-01-02", symbol="ES", realised_r=1)
        assert schema.position == "Long"
        assert schema.mistakes == []
        assert schema.max_r is None

    def test_symbol_is_trimmed(self):
        assert TradeCreate(date="", symbol="  ES ", realised_r=0).symbol == "ES"

    @pytest.mark.parametrize("symbol", ["", "   "])
    def test_blank_symbol_rejected(self, symbol):
        with pytest.raises(ValidationError):
            TradeCreate(date="2024-01-02", symbol=symbol, realised_r=1)

    def test_impossible_date_rejected(self):
        with pytest.raises(ValidationError):
            TradeCreate(date="2024-02-30", symbol="ES", realised_r=1)

    def test_non_finite_r_rejected(self):
        with pytest.raises(ValidationError):
            TradeCreate(date="2024-01-02", symbol="ES", realised_r=math.inf)

    def test_unknown_position_rejected(self):
        with pytest.raises(ValidationError):
            TradeCreate(date="2024-01-02", symbol="ES", realised_r=1, position="Flat")


class TestTradeUpdateSchema:
    def test_empty_update(self):
        assert TradeUpdate().model_dump(exclude_unset=True) == {}

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            TradeUpdate(id="other")

    def test_null_required_field_rejected(self):
        with pytest.raises(ValidationError, match="may not be null: realised_r"):
            TradeUpdate(realised_r=None)

    def test_null_optional_field_allowed(self):
        assert TradeUpdate(max_r=None).model_dump(exclude_unset=True) == {"max_r": None}


def test_settings_negative_tilt_threshold_rejected():
    with pytest.raises(ValidationError):
        JournalSettingsIn(tilt_threshold=-1)


def test_trade_model_defaults():
    trade = Trade(symbol="ES", realised_r=1.0)
    assert trade.position == "Long"
    assert trade.key_levels == []
    assert len(trade.id) == 36


class TestProfitFactorBoundary:
    def test_infinite_profit_factor_becomes_flag(self):
        stats = compute_stats([Trade(symbol="ES", realised_r=1.0, date="2024-01-02")])
        read = TradeStatsRead.model_validate(stats)
        assert read.profit_factor is None
        assert read.profit_factor_unbounded is True
        assert read.current_streak.type == "win"

    def test_finite_profit_factor_passes_through(self):
        row = StrategyPerformance("X", 2, 1.0, 50.0, 0.5, 2.0, 0.5)
        read = StrategyPerformanceRead.model_validate(row)
        assert read.profit_factor == 2.0
        assert read.profit_factor_unbounded is False
