"""Shared fixtures: trade factory and an API client on an isolated database."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from trading_journal.database import build_engine, get_session
from trading_journal.main import app
from trading_journal.models.trade import Trade


def make_trade(realised_r=0.0, date="2024-01-02", created_at=None, **fields) -> Trade:
    """Trade with sensible defaults; created_at defaults to insertion order."""
    make_trade.counter += 1
    return Trade(
        realised_r=realised_r,
        date=date,
        created_at=created_at if created_at is not None else make_trade.counter,
        symbol=fields.pop("symbol", "EURUSD"),
        **fields,
    )


make_trade.counter = 0


def trades_from_rs(rs, date="2024-01-02"):
    return [make_trade(r, date=date) for r in rs]


@pytest.fixture
def client():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)

    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()
