"""Journal persistence port.

The browser app keeps its journal in local storage under two fixed keys.
`JsonFileStore` reads and writes the same layout from a JSON file so an
exported journal can be analysed offline; `MemoryStore` keeps it in a dict.
Records are normalised to the current Trade shape on load, including the
field names used by older versions of the app.
"""

import json
import logging
import math
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Protocol

from trading_journal.models.settings import JournalSettings
from trading_journal.models.trade import Trade, now_ms
from trading_journal.utils.constants import (
    DEFAULT_SETTINGS,
    SETTINGS_STORAGE_KEY,
    TRADES_STORAGE_KEY,
)

logger = logging.getLogger(__name__)

# snake_case field -> key used in the stored documents
_SETTINGS_KEYS = {
    "accounts": "accounts",
    "models": "models",
    "sessions": "sessions",
    "entry_tfs": "entryTFs",
    "setup_grades": "setupGrades",
    "key_levels": "keyLevels",
    "mistakes": "mistakes",
    "tilt_threshold": "tiltThreshold",
}


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _tags(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def normalize_trade(raw: dict[str, Any]) -> Trade:
    """Build a Trade from a stored record, current or legacy shaped.

    Legacy records used rr, risk, direction and setup for what are now
    realisedR, riskPercent, position and setupGrade.
    """
    r = _number(raw.get("realisedR"))
    if r is None:
        r = _number(raw.get("rr"))
    if r is None:
        r = 0.0

    max_r = _number(raw.get("maxR"))
    risk = _number(raw.get("riskPercent"))
    if risk is None:
        risk = _number(raw.get("risk"))

    created_at = raw.get("createdAt")
    if isinstance(created_at, bool) or not isinstance(created_at, (int, float)) or not created_at:
        created_at = now_ms()

    return Trade(
        id=_text(raw.get("id")) or str(uuid.uuid4()),
        date=_text(raw.get("date")),
        symbol=_text(raw.get("symbol")),
        account=_text(raw.get("account")),
        model=_text(raw.get("model")),
        session=_text(raw.get("session")),
        entry_tf=_text(raw.get("entryTF")),
        position=_text(raw.get("position")) or _text(raw.get("direction")) or "Long",
        risk_percent=risk,
        realised_r=r,
        max_r=max_r if max_r is not None else r,
        setup_grade=_text(raw.get("setupGrade")) or _text(raw.get("setup")),
        key_levels=_tags(raw.get("keyLevels")),
        mistakes=_tags(raw.get("mistakes")),
        screenshots=_text(raw.get("screenshots")),
        notes=_text(raw.get("notes")),
        created_at=int(created_at),
    )


def trade_to_record(trade: Trade) -> dict[str, Any]:
    """Serialise a Trade back to the stored camelCase record."""
    return {
        "id": trade.id,
        "date": trade.date,
        "symbol": trade.symbol,
        "account": trade.account,
        "model": trade.model,
        "session": trade.session,
        "entryTF": trade.entry_tf,
        "position": trade.position,
        "riskPercent": trade.risk_percent,
        "realisedR": trade.realised_r,
        "maxR": trade.max_r,
        "setupGrade": trade.setup_grade,
        "keyLevels": list(trade.key_levels or []),
        "mistakes": list(trade.mistakes or []),
        "screenshots": trade.screenshots,
        "notes": trade.notes,
        "createdAt": trade.created_at,
    }


def default_settings() -> JournalSettings:
    return JournalSettings(**{k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_SETTINGS.items()})


def merge_settings(stored: dict[str, Any]) -> JournalSettings:
    """Stored settings over the defaults; unknown keys are ignored."""
    values = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_SETTINGS.items()}
    for field, key in _SETTINGS_KEYS.items():
        value = stored.get(key)
        if field == "tilt_threshold":
            if isinstance(value, int) and not isinstance(value, bool):
                values[field] = value
        elif isinstance(value, list):
            values[field] = [str(v) for v in value]
    return JournalSettings(**values)


def settings_to_record(journal_settings: JournalSettings) -> dict[str, Any]:
    return {key: getattr(journal_settings, field) for field, key in _SETTINGS_KEYS.items()}


class JournalStore(Protocol):
    """Where a journal's trades and settings live between runs."""

    def load_trades(self) -> list[Trade]: ...

    def save_trades(self, trades: list[Trade]) -> None: ...

    def load_settings(self) -> JournalSettings: ...

    def save_settings(self, journal_settings: JournalSettings) -> None: ...

    def clear(self) -> None: ...


class _DocumentStore(ABC):
    """Shared load/save logic over a keyed document."""

    @abstractmethod
    def _read(self) -> dict[str, Any]: ...

    @abstractmethod
    def _write(self, document: dict[str, Any]): ...

    def load_trades(self) -> list[Trade]:
        try:
            raw = self._read().get(TRADES_STORAGE_KEY)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load trades: {e}")
            return []
        if not isinstance(raw, list):
            return []
        return [normalize_trade(r) for r in raw if isinstance(r, dict)]

    def save_trades(self, trades: list[Trade]):
        document = self._read_or_empty()
        document[TRADES_STORAGE_KEY] = [trade_to_record(t) for t in trades]
        self._write(document)

    def load_settings(self) -> JournalSettings:
        try:
            raw = self._read().get(SETTINGS_STORAGE_KEY)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load settings: {e}")
            return default_settings()
        if not isinstance(raw, dict):
            return default_settings()
        return merge_settings(raw)

    def save_settings(self, journal_settings: JournalSettings):
        document = self._read_or_empty()
        document[SETTINGS_STORAGE_KEY] = settings_to_record(journal_settings)
        self._write(document)

    def clear(self):
        self._write({})

    def _read_or_empty(self) -> dict[str, Any]:
        try:
            return self._read()
        except (OSError, ValueError) as e:
            logger.warning(f"Overwriting unreadable journal document: {e}")
            return {}


class JsonFileStore(_DocumentStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        document = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return document

    def _write(self, document: dict[str, Any]):
        try:
            self.path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write journal {self.path}: {e}")
            raise


class MemoryStore(_DocumentStore):
    def __init__(self, document: dict[str, Any] | None = None):
        self.document = document if document is not None else {}

    def _read(self) -> dict[str, Any]:
        return self.document

    def _write(self, document: dict[str, Any]):
        self.document = json.loads(json.dumps(document))
