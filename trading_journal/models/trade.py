"""Trade model — one discretionary trade logged in the journal."""

import time
import uuid

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON


def _new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=36)
    date: str = Field(default="", index=True)  # YYYY-MM-DD, no timezone
    symbol: str = ""
    account: str = ""
    model: str = ""  # strategy name
    session: str = ""  # "London", "NY", ...
    entry_tf: str = ""
    position: str = "Long"  # "Long" or "Short"
    risk_percent: float | None = None
    realised_r: float = 0.0
    max_r: float | None = None
    setup_grade: str = ""
    key_levels: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    mistakes: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    screenshots: str = ""
    notes: str = ""
    created_at: int = Field(default_factory=now_ms)  # epoch ms, tie-break within a date
