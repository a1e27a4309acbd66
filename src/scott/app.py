"""Application factory: configuration, adventure data and save database."""

import random
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from .config import Config
from .engine.loader import load_world
from .engine.world import World
from .logging import get_logger
from .session import AdventureSession
from .users import get_or_create_player

logger = get_logger(__name__)


def _get_data_path() -> Traversable:
    """Locate the bundled adventure via importlib.resources."""
    return resources.files("scott.data").joinpath("lighthouse.dat")


@dataclass
class AdventureApp:
    config: Config
    world: World
    engine: Engine
    rng: random.Random


def create_app(config: Config | None = None) -> AdventureApp:
    """Load the adventure and set up the save database."""
    config = config or Config.from_env()

    engine = create_engine(config.database_url)
    SQLModel.metadata.create_all(engine)
    logger.debug("database_setup_complete")

    data_path = config.adventure_file or _get_data_path()
    world = load_world(data_path)
    logger.info(
        "world_loaded",
        adventure=world.adventure_number,
        rooms=len(world.rooms),
        items=len(world.items),
        words=len(world.words),
    )

    return AdventureApp(
        config=config, world=world, engine=engine, rng=random.Random(config.seed)
    )


def get_session(app: AdventureApp) -> Session:
    """Get a database session from the app."""
    return Session(app.engine)


@contextmanager
def open_session(app: AdventureApp, player_name: str) -> Iterator[AdventureSession]:
    """Open a player's game for the duration of a ``with`` block."""
    with get_session(app) as db:
        player = get_or_create_player(db, player_name)
        yield AdventureSession.load_or_create(
            db,
            player,
            app.world,
            settings=app.config.engine_settings(),
            rng=app.rng,
        )
