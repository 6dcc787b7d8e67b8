"""JournalSettings model — dropdown label lists used when logging trades."""

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON


class JournalSettings(SQLModel, table=True):
    __tablename__ = "settings"

    id: int | None = Field(default=None, primary_key=True)
    accounts: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    models: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    sessions: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    entry_tfs: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    setup_grades: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    key_levels: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    mistakes: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    tilt_threshold: int = 2
