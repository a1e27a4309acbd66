"""Player lookup."""

import datetime as dt

from sqlmodel import Session, select

from .logging import get_logger
from .models import Player

logger = get_logger(__name__)


def get_or_create_player(session: Session, name: str) -> Player:
    """Get an existing player by name or create one."""
    statement = select(Player).where(Player.name == name)
    player = session.exec(statement).first()

    if player:
        player.last_seen = dt.datetime.now(dt.UTC)
        logger.debug("player_accessed", player=name)
    else:
        player = Player(name=name)
        session.add(player)
        logger.info("player_created", player=name)

    session.commit()
    session.refresh(player)
    return player
