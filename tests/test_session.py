"""Tests for persistent save slots."""

from pathlib import Path

import structlog
from sqlmodel import Session, select

from scott import main
from scott.app import _get_data_path, create_app, open_session
from scott.config import Config
from scott.engine.errors import SaveFailure
from scott.engine.events import EventKind
from scott.engine.settings import EngineSettings
from scott.engine.state import CARRIED
from scott.engine.world import World
from scott.models import Player, SavedGame
from scott.session import RESTORE_FAILED, AdventureSession
from scott.users import get_or_create_player


def test_get_or_create_player(db_session: Session):
    first = get_or_create_player(db_session, "ada")
    second = get_or_create_player(db_session, "ada")
    assert first.id == second.id
    assert len(db_session.exec(select(Player)).all()) == 1


def test_new_session(db_session: Session, test_player: Player, world: World):
    session = AdventureSession.load_or_create(db_session, test_player, world)
    assert session.is_new
    assert session.saved_game is None
    result = session.begin()
    assert "Welcome to Lighthouse Point!" in result.text


def test_save_and_resume(db_session: Session, test_player: Player, world: World):
    session = AdventureSession.load_or_create(db_session, test_player, world)
    session.begin()
    session.process_command("get lamp")
    session.process_command("n")
    session.save()

    resumed = AdventureSession.load_or_create(db_session, test_player, world)
    assert not resumed.is_new
    assert resumed.turns == 2
    assert resumed.state == session.state
    assert resumed.state.item_locations[9] == CARRIED
    result = resumed.begin()
    assert [e.kind for e in result.events] == [EventKind.ROOM]
    assert "foot of an old lighthouse" in result.text


def test_save_command_persists(db_session: Session, test_player: Player, world: World):
    session = AdventureSession.load_or_create(db_session, test_player, world)
    session.process_command("get lamp")
    result = session.process_command("save game")
    assert result.save_requested

    saved = db_session.exec(select(SavedGame)).one()
    assert saved.adventure_number == 99
    assert saved.turns == 2
    assert "item.9:255" in saved.state_text


def test_finished_game_starts_over(
    db_session: Session, test_player: Player, world: World
):
    session = AdventureSession.load_or_create(db_session, test_player, world)
    session.process_command("get lamp")
    result = session.process_command("quit")
    assert result.halted
    assert session.saved_game.is_finished

    fresh = AdventureSession.load_or_create(db_session, test_player, world)
    assert fresh.is_new
    assert fresh.state.item_locations[9] == 1
    assert db_session.exec(select(SavedGame)).first() is None


def test_reset(db_session: Session, test_player: Player, world: World):
    session = AdventureSession.load_or_create(db_session, test_player, world)
    session.process_command("get lamp")
    session.save()
    session.reset()
    assert session.turns == 0
    assert session.state.item_locations[9] == 1
    assert db_session.exec(select(SavedGame)).first() is None


def test_open_session_round_trip(app):
    with open_session(app, "grace") as session:
        session.begin()
        session.process_command("get rope")
        session.save()

    with open_session(app, "grace") as session:
        assert session.state.item_locations[7] == CARRIED
        assert session.settings == app.config.engine_settings()

    with open_session(app, "linus") as session:
        assert session.is_new


def test_create_app_with_adventure_file(tmp_path: Path, world: World):
    path = tmp_path / "copy.dat"
    path.write_bytes(_get_data_path().read_bytes())
    app = create_app(
        Config(database_url=f"sqlite:///{tmp_path}/other.db", adventure_file=path)
    )
    assert app.world == world


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SCOTT_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("SCOTT_LIGHT_WARNING", "10")
    monkeypatch.setenv("SCOTT_DESTROY_EXHAUSTED_LIGHT", "no")
    monkeypatch.setenv("SCOTT_DARK_FALL_CHANCE", "0")
    monkeypatch.setenv("SCOTT_SEED", "7")
    monkeypatch.delenv("SCOTT_ADVENTURE_FILE", raising=False)

    config = Config.from_env()
    assert config.database_url == "sqlite:///:memory:"
    assert config.adventure_file is None
    assert config.seed == 7
    assert config.engine_settings() == EngineSettings(
        light_warning_threshold=10,
        destroy_exhausted_light=False,
        dark_fall_chance=0,
        delay_seconds=2.0,
    )


def test_main_plays_until_quit(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setenv("SCOTT_DATABASE_URL", f"sqlite:///{tmp_path}/main.db")
    monkeypatch.setenv("SCOTT_LOG_FILE", str(tmp_path / "main.log"))
    monkeypatch.setenv("SCOTT_PLAYER", "ada")
    lines = iter(["get lamp", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt: next(lines))

    try:
        main()
    finally:
        structlog.reset_defaults()

    output = capsys.readouterr().out
    assert "Welcome to Lighthouse Point!" in output
    assert "The game is now over." in output
    assert "application_starting" in (tmp_path / "main.log").read_text()


def test_unreadable_slot_starts_new_game(
    db_session: Session, test_player: Player, world: World
):
    db_session.add(
        SavedGame(
            player_id=test_player.id,
            adventure_number=99,
            state_text="adventure:99\ncounter:0\n",
            turns=5,
        )
    )
    db_session.commit()

    session = AdventureSession.load_or_create(db_session, test_player, world)
    assert session.is_new
    assert session.load_error is not None
    assert session.load_error.reason == SaveFailure.MALFORMED
    assert db_session.exec(select(SavedGame)).first() is None

    result = session.begin()
    assert result.events[0].text == RESTORE_FAILED
    assert "Welcome to Lighthouse Point!" in result.text


def test_slot_from_changed_world_starts_new_game(
    db_session: Session, test_player: Player, make_world
):
    original = make_world()
    session = AdventureSession.load_or_create(db_session, test_player, original)
    session.process_command("get key")
    session.save()

    changed = make_world(items=list(original.items[:6]))
    resumed = AdventureSession.load_or_create(db_session, test_player, changed)
    assert resumed.is_new
    assert resumed.load_error.reason == SaveFailure.OUT_OF_RANGE
    assert resumed.state.item_locations[1] == 1

    resumed.process_command("get key")
    resumed.save()
    saved = db_session.exec(select(SavedGame)).one()
    assert "item.1:255" in saved.state_text


def test_resumed_game_runs_automatic_actions(
    db_session: Session, test_player: Player, make_world, make_action
):
    world = make_world([make_action(commands=[5])])
    session = AdventureSession.load_or_create(db_session, test_player, world)
    session.process_command("jump")
    session.save()

    resumed = AdventureSession.load_or_create(db_session, test_player, world)
    assert not resumed.is_new
    result = resumed.begin()
    assert [e.kind for e in result.events] == [EventKind.MESSAGE, EventKind.ROOM]
    assert result.events[0].text == "Message 5"
