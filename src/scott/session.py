"""Session layer bridging the game engine and database."""

import datetime as dt
import random
import time
from collections.abc import Callable

from sqlmodel import Session, select

from .engine.describe import calculate_score, get_room_description
from .engine.errors import SaveFileError
from .engine.events import EventKind, OutputEvent
from .engine.savegame import dump_state, parse_state
from .engine.settings import EngineSettings
from .engine.state import GameState, new_game_state
from .engine.turn import TurnResult, process_turn, start_game
from .engine.vocabulary import Vocabulary
from .engine.world import World
from .logging import get_logger
from .models import Player, SavedGame

logger = get_logger(__name__)

RESTORE_FAILED = "I couldn't restore your saved game, so a new one begins."


class AdventureSession:
    """Wraps a Player + SavedGame + in-memory GameState."""

    def __init__(
        self,
        db_session: Session,
        player: Player,
        saved_game: SavedGame | None,
        game_state: GameState,
        world: World,
        settings: EngineSettings | None = None,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.db_session = db_session
        self.player = player
        self.saved_game = saved_game
        self.state = game_state
        self.world = world
        self.settings = settings or EngineSettings()
        self.rng = rng or random.Random()
        self.sleep = sleep
        self.vocabulary = Vocabulary(world)
        self.turns = saved_game.turns if saved_game else 0
        self.is_finished = False
        self.load_error: SaveFileError | None = None

    @classmethod
    def load_or_create(
        cls,
        db_session: Session,
        player: Player,
        world: World,
        **engine_options,
    ) -> "AdventureSession":
        """Load existing save or create a fresh game.

        A finished game, or a slot that no longer matches the world, is
        dropped and a new game takes its place.
        """
        statement = select(SavedGame).where(
            SavedGame.player_id == player.id,
            SavedGame.adventure_number == world.adventure_number,
        )
        saved_game = db_session.exec(statement).first()
        game_state = None
        load_error = None

        if saved_game and not saved_game.is_finished:
            try:
                game_state = parse_state(world, saved_game.state_text)
            except SaveFileError as e:
                load_error = e
                logger.warning(
                    "game_load_failed",
                    player=player.name,
                    adventure=world.adventure_number,
                    reason=e.reason,
                    detail=e.detail,
                )
            else:
                logger.debug(
                    "game_loaded",
                    player=player.name,
                    adventure=world.adventure_number,
                    turns=saved_game.turns,
                )

        if game_state is None:
            if saved_game:
                db_session.delete(saved_game)
                db_session.commit()
            game_state = new_game_state(world)
            saved_game = None
            logger.info(
                "new_game_started", player=player.name, adventure=world.adventure_number
            )

        session = cls(db_session, player, saved_game, game_state, world, **engine_options)
        session.load_error = load_error
        return session

    @property
    def is_new(self) -> bool:
        return self.saved_game is None and self.turns == 0

    def begin(self) -> TurnResult:
        """Opening output before the first command.

        The automatic pass runs for new and resumed games alike, then the
        room is shown. A slot that failed to restore is reported first.
        """
        result = start_game(
            self.world,
            self.state,
            settings=self.settings,
            rng=self.rng,
            sleep=self.sleep,
        )
        if self.load_error is not None:
            result.events.insert(0, OutputEvent(EventKind.MESSAGE, RESTORE_FAILED))
        return result

    def process_command(self, raw_input: str) -> TurnResult:
        """Run one turn, saving when the game asks to or ends."""
        result = process_turn(
            self.world,
            self.state,
            raw_input,
            settings=self.settings,
            rng=self.rng,
            sleep=self.sleep,
            vocabulary=self.vocabulary,
        )
        self.turns += 1
        if result.halted:
            self.is_finished = True
        if result.save_requested or result.halted:
            self.save()
        return result

    def save(self) -> None:
        """Serialize state back to the database."""
        now = dt.datetime.now(dt.UTC)
        text = dump_state(self.world, self.state)
        score = calculate_score(self.world, self.state)

        if self.saved_game is None:
            self.saved_game = SavedGame(
                player_id=self.player.id,
                adventure_number=self.world.adventure_number,
                state_text=text,
                turns=self.turns,
                score=score,
                is_finished=self.is_finished,
                started_at=now,
                last_played=now,
            )
            self.db_session.add(self.saved_game)
        else:
            self.saved_game.state_text = text
            self.saved_game.turns = self.turns
            self.saved_game.score = score
            self.saved_game.is_finished = self.is_finished
            self.saved_game.last_played = now

        self.db_session.commit()
        logger.debug(
            "game_saved",
            player=self.player.name,
            turns=self.turns,
            score=score,
        )

    def get_room_description(self) -> str:
        return get_room_description(self.world, self.state)

    def reset(self) -> None:
        """Reset to a fresh game."""
        self.state = new_game_state(self.world)
        self.turns = 0
        self.is_finished = False
        self.load_error = None
        if self.saved_game:
            self.db_session.delete(self.saved_game)
            self.db_session.commit()
            self.saved_game = None
        logger.info("game_reset", player=self.player.name)
