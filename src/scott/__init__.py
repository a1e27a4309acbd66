"""Interpreter for classic table-driven two-word adventure games."""

from .app import AdventureApp, create_app, open_session
from .config import Config
from .engine.errors import AdventureLoadError, SaveFileError
from .engine.loader import load_adventure
from .engine.savegame import load_state, save_state
from .engine.turn import process_turn, start_game
from .logging import configure_logging, get_logger

__all__ = [
    "main",
    "AdventureApp",
    "AdventureLoadError",
    "Config",
    "SaveFileError",
    "configure_logging",
    "create_app",
    "get_logger",
    "load_adventure",
    "load_state",
    "open_session",
    "process_turn",
    "save_state",
    "start_game",
]


def main() -> None:
    """Play the configured adventure in the terminal."""
    config = Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
        hash_player_names=config.hash_player_names,
    )

    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        database=config.database_url,
        log_level=config.log_level,
    )

    app = create_app(config)
    with open_session(app, config.player_name) as session:
        print(session.begin().text)
        while not session.is_finished:
            try:
                line = input("> ")
            except EOFError:
                session.save()
                break
            print(session.process_command(line).text)
