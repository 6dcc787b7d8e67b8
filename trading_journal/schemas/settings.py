"""Pydantic schemas for the journal settings API."""

from pydantic import BaseModel, Field


class JournalSettingsIn(BaseModel):
    """Label lists; any list left out falls back to its default."""
    accounts: list[str] | None = None
    models: list[str] | None = None
    sessions: list[str] | None = None
    entry_tfs: list[str] | None = None
    setup_grades: list[str] | None = None
    key_levels: list[str] | None = None
    mistakes: list[str] | None = None
    tilt_threshold: int | None = Field(default=None, ge=0)


class JournalSettingsRead(BaseModel):
    accounts: list[str]
    models: list[str]
    sessions: list[str]
    entry_tfs: list[str]
    setup_grades: list[str]
    key_levels: list[str]
    mistakes: list[str]
    tilt_threshold: int

    model_config = {"from_attributes": True}
