"""Shared test fixtures for the scott engine."""

import dataclasses
import random
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from scott.app import _get_data_path, create_app
from scott.config import Config
from scott.engine.codec import encode_command_pair, encode_condition, encode_vocab
from scott.engine.context import TurnContext
from scott.engine.loader import load_world
from scott.engine.settings import EngineSettings
from scott.engine.state import new_game_state
from scott.engine.world import Action, Header, Item, Room, Word, World
from scott.models import Player

VERBS = ["AUT", "GO", "*WALK", ".", ".", "JUMP", "SCORE", ".", ".", ".",
         "GET", "*TAKE", ".", ".", ".", ".", ".", ".", "DROP", "."]
NOUNS = ["ANY", "NORTH", "SOUTH", "EAST", "WEST", "UP", "DOWN", "KEY", "COIN",
         "LAMP", "*LANTERN", "ROCK", ".", ".", ".", ".", ".", ".", ".", "."]


def _words(texts: list[str], kind: str) -> list[Word]:
    return [
        Word(text=t.lstrip("*"), kind=kind, number=n, is_synonym=t.startswith("*"))
        for n, t in enumerate(texts)
    ]


def build_action(verb=0, noun=0, conditions=(), commands=()) -> Action:
    """Pack an action from (code, parameter) conditions and a list of opcodes."""
    packed = [encode_condition(code, param) for code, param in conditions]
    packed += [0] * (5 - len(packed))
    opcodes = list(commands) + [0] * (4 - len(commands))
    return Action(
        vocab=encode_vocab(verb, noun),
        conditions=tuple(packed),
        commands=(
            encode_command_pair(opcodes[0], opcodes[1]),
            encode_command_pair(opcodes[2], opcodes[3]),
        ),
    )


def default_items() -> list[Item]:
    items = [Item(f"Thing {i}", 0) for i in range(10)]
    items[1] = Item("Brass key", 1, "KEY")
    items[2] = Item("*Gold coin*", 2, "COIN")
    items[3] = Item("Big rock", 2)
    items[9] = Item("Lamp", 1, "LAMP")
    return items


def build_world(
    actions=(),
    items=None,
    rooms=None,
    messages=None,
    **header_fields,
) -> World:
    """A small world: four rooms, ten items, sixty numbered messages."""
    actions = list(actions) or [build_action()]
    items = items if items is not None else default_items()
    rooms = rooms or [
        Room((0, 0, 0, 0, 0, 0), ""),
        Room((2, 0, 0, 0, 0, 0), "meadow"),
        Room((0, 1, 0, 0, 0, 3), "*I'm on a hill."),
        Room((0, 0, 0, 0, 2, 0), "pit"),
    ]
    messages = messages or ["", *(f"Message {i}" for i in range(1, 60))]
    header = Header(
        text_size=0,
        num_items=len(items) - 1,
        num_actions=len(actions) - 1,
        num_words=len(VERBS) - 1,
        num_rooms=len(rooms) - 1,
        max_carry=3,
        player_room=1,
        treasures=1,
        word_length=4,
        light_time=100,
        num_messages=len(messages) - 1,
        treasure_room=1,
        version=1,
        adventure_number=7,
    )
    header = dataclasses.replace(header, **header_fields)
    return World(
        header=header,
        rooms=tuple(rooms),
        items=tuple(items),
        actions=tuple(actions),
        words=tuple(_words(VERBS, "verb") + _words(NOUNS, "noun")),
        messages=tuple(messages),
    )


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def make_world():
    return build_world


@pytest.fixture
def make_action():
    return build_action


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_context(rng):
    """Build a TurnContext over a fresh game state for the given world."""

    def _make(world: World, **settings) -> TurnContext:
        return TurnContext(
            world=world,
            state=new_game_state(world),
            settings=EngineSettings(**settings),
            rng=rng,
            sleep=lambda seconds: None,
        )

    return _make


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine):
    with Session(db_engine) as session:
        yield session


@pytest.fixture
def test_player(db_session: Session) -> Player:
    player = Player(name="ada")
    db_session.add(player)
    db_session.commit()
    db_session.refresh(player)
    return player


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db", seed=42)


@pytest.fixture
def app(test_config: Config):
    return create_app(test_config)
