"""Pydantic schemas for the Trade API."""

from pydantic import BaseModel, Field, field_validator, model_validator

from trading_journal.services.analytics import parse_trade_date

POSITIONS = ("Long", "Short")
NULLABLE_FIELDS = ("risk_percent", "max_r")


def _check_date(value: str | None) -> str | None:
    if value is None or value == "":
        return value
    if parse_trade_date(value) is None:
        raise ValueError("must be a YYYY-MM-DD date")
    return value


def _check_position(value: str | None) -> str | None:
    if value is None:
        return None
    if value not in POSITIONS:
        raise ValueError(f"must be one of: {', '.join(POSITIONS)}")
    return value


class TradeCreate(BaseModel):
    date: str
    symbol: str = Field(min_length=1, max_length=32)
    account: str = ""
    model: str = ""
    session: str = ""
    entry_tf: str = ""
    position: str = "Long"
    risk_percent: float | None = Field(default=None, ge=0)
    realised_r: float = Field(allow_inf_nan=False)
    max_r: float | None = Field(default=None, allow_inf_nan=False)
    setup_grade: str = ""
    key_levels: list[str] = []
    mistakes: list[str] = []
    screenshots: str = ""
    notes: str = ""
    created_at: int | None = Field(default=None, ge=0)

    @field_validator("symbol")
    @classmethod
    def _trim_symbol(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("date")
    @classmethod
    def _validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("position")
    @classmethod
    def _validate_position(cls, value: str) -> str:
        return _check_position(value)


class TradeUpdate(BaseModel):
    date: str | None = None
    symbol: str | None = Field(default=None, min_length=1, max_length=32)
    account: str | None = None
    model: str | None = None
    session: str | None = None
    entry_tf: str | None = None
    position: str | None = None
    risk_percent: float | None = Field(default=None, ge=0)
    realised_r: float | None = Field(default=None, allow_inf_nan=False)
    max_r: float | None = Field(default=None, allow_inf_nan=False)
    setup_grade: str | None = None
    key_levels: list[str] | None = None
    mistakes: list[str] | None = None
    screenshots: str | None = None
    notes: str | None = None

    model_config = {"extra": "forbid"}

    @field_validator("date")
    @classmethod
    def _validate_optional_date(cls, value: str | None) -> str | None:
        return _check_date(value)

    @field_validator("position")
    @classmethod
    def _validate_optional_position(cls, value: str | None) -> str | None:
        return _check_position(value)

    @model_validator(mode="after")
    def _reject_null_required(self) -> "TradeUpdate":
        nulled = sorted(
            name for name in self.model_fields_set
            if name not in NULLABLE_FIELDS and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"may not be null: {', '.join(nulled)}")
        return self


class TradeRead(BaseModel):
    id: str
    date: str
    symbol: str
    account: str
    model: str
    session: str
    entry_tf: str
    position: str
    risk_percent: float | None
    realised_r: float
    max_r: float | None
    setup_grade: str
    key_levels: list[str]
    mistakes: list[str]
    screenshots: str
    notes: str
    created_at: int

    model_config = {"from_attributes": True}
