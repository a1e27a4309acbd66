"""Database models for saved games."""

import datetime as dt

from sqlmodel import Field, SQLModel, UniqueConstraint


class Player(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
    last_seen: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )


class SavedGame(SQLModel, table=True):
    """One save slot per player and adventure."""

    __table_args__ = (UniqueConstraint("player_id", "adventure_number"),)

    id: int | None = Field(default=None, primary_key=True)
    player_id: int = Field(foreign_key="player.id", index=True)
    adventure_number: int
    state_text: str  # saved game codec text
    turns: int = 0
    score: int = 0
    is_finished: bool = False
    started_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
    last_played: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
