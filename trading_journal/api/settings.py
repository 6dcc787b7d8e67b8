"""Journal settings API — label lists for the trade entry form."""

import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from trading_journal.database import get_session
from trading_journal.models.settings import JournalSettings
from trading_journal.schemas.settings import JournalSettingsIn, JournalSettingsRead
from trading_journal.services.journal_store import default_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=JournalSettingsRead)
def get_settings(session: Session = Depends(get_session)):
    stored = session.exec(select(JournalSettings)).first()
    return stored or default_settings()


@router.post("", response_model=JournalSettingsRead)
def save_settings(data: JournalSettingsIn, session: Session = Depends(get_session)):
    values = default_settings().model_dump(exclude={"id"})
    values.update(data.model_dump(exclude_none=True))

    stored = session.exec(select(JournalSettings)).first()
    if stored is None:
        stored = JournalSettings(**values)
    else:
        for key, value in values.items():
            setattr(stored, key, value)

    session.add(stored)
    session.commit()
    session.refresh(stored)
    logger.info("Saved journal settings")
    return stored
