"""CRUD API for journal trades."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from trading_journal.database import get_session
from trading_journal.models.trade import Trade, now_ms
from trading_journal.schemas.trade import TradeCreate, TradeRead, TradeUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trades", tags=["trades"])


def load_trades(session: Session) -> list[Trade]:
    """All trades in (date, created_at) order."""
    stmt = select(Trade).order_by(Trade.date, Trade.created_at)
    return list(session.exec(stmt).all())


@router.get("", response_model=list[TradeRead])
def list_trades(session: Session = Depends(get_session)):
    return load_trades(session)


@router.post("", response_model=TradeRead, status_code=201)
def create_trade(data: TradeCreate, session: Session = Depends(get_session)):
    payload = data.model_dump()
    if payload["max_r"] is None:
        payload["max_r"] = payload["realised_r"]
    if payload["created_at"] is None:
        payload["created_at"] = now_ms()
    trade = Trade(**payload)
    session.add(trade)
    session.commit()
    session.refresh(trade)
    logger.info(f"Created trade {trade.id} ({trade.symbol} {trade.realised_r:+.2f}R)")
    return trade


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(trade_id: str, session: Session = Depends(get_session)):
    trade = session.get(Trade, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade


@router.patch("/{trade_id}", response_model=TradeRead)
def update_trade(
    trade_id: str,
    data: TradeUpdate,
    session: Session = Depends(get_session),
):
    trade = session.get(Trade, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(trade, key, value)

    session.add(trade)
    session.commit()
    session.refresh(trade)
    return trade


@router.delete("/{trade_id}", status_code=204)
def delete_trade(trade_id: str, session: Session = Depends(get_session)):
    trade = session.get(Trade, trade_id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    session.delete(trade)
    session.commit()
    logger.info(f"Deleted trade {trade_id}")
    return Response(status_code=204)


@router.delete("", status_code=204)
def delete_all_trades(session: Session = Depends(get_session)):
    for trade in session.exec(select(Trade)).all():
        session.delete(trade)
    session.commit()
    logger.info("Deleted all trades")
    return Response(status_code=204)
