"""Parse an adventure data file into a World.

The file is read in a fixed order: header, actions, vocabulary, rooms,
messages, items, action titles, trailer. Action fields are kept packed;
they are decoded where they are evaluated.
"""

import re
from importlib.resources.abc import Traversable
from pathlib import Path

from ..logging import get_logger
from .codec import decode_condition
from .errors import AdventureLoadError, LoadFailure
from .state import CARRIED, NUM_FLAGS, GameState, new_game_state
from .tokenizer import Token, tokenize
from .world import Action, Header, Item, Room, Word, World

logger = get_logger(__name__)

HEADER_FIELDS = (
    "text_size",
    "num_items",
    "num_actions",
    "num_words",
    "num_rooms",
    "max_carry",
    "player_room",
    "treasures",
    "word_length",
    "light_time",
    "num_messages",
    "treasure_room",
)

# Item location written in data files for "starts carried"
_FILE_CARRIED = -1

_AUTOGET = re.compile(r"(.*)/([^/]*)/", re.DOTALL)

# Condition opcodes whose parameter names an item, a room or a flag
_ITEM_CONDITIONS = frozenset({1, 2, 3, 5, 6, 12, 13, 14, 17, 18})
_ROOM_CONDITIONS = frozenset({4, 7})
_FLAG_CONDITIONS = frozenset({8, 9})


class _TokenStream:
    """Cursor over the token list that enforces field types."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def _next(self, what: str) -> Token:
        if self.pos >= len(self.tokens):
            raise AdventureLoadError(
                LoadFailure.TRUNCATED_DATA, f"data ended while reading {what}"
            )
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def number(self, what: str) -> int:
        token = self._next(what)
        if token.is_string:
            raise AdventureLoadError(
                LoadFailure.TYPE_MISMATCH,
                f"line {token.line}: {what} must be a number, got a string",
            )
        return token.value

    def string(self, what: str) -> str:
        token = self._next(what)
        if not token.is_string:
            raise AdventureLoadError(
                LoadFailure.TYPE_MISMATCH,
                f"line {token.line}: {what} must be a quoted string, "
                f"got {token.value}",
            )
        return token.value

    def at_string(self) -> bool:
        return self.pos < len(self.tokens) and self.tokens[self.pos].is_string

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.pos


def expected_checksum(num_actions: int, num_items: int, version: int) -> int:
    """The trailer checksum a well formed file carries."""
    return 2 * num_actions + num_items + version


def _read_header(stream: _TokenStream) -> dict[str, int]:
    values = {name: stream.number(f"header field {name}") for name in HEADER_FIELDS}
    for name, value in values.items():
        if value < 0:
            raise AdventureLoadError(
                LoadFailure.MALFORMED_INPUT, f"header field {name} is negative"
            )
    return values


def _read_actions(stream: _TokenStream, count: int) -> list[Action]:
    actions = []
    for i in range(count):
        vocab = stream.number(f"action {i} vocabulary")
        conditions = tuple(
            stream.number(f"action {i} condition {j}") for j in range(5)
        )
        commands = tuple(stream.number(f"action {i} command {j}") for j in range(2))
        actions.append(Action(vocab=vocab, conditions=conditions, commands=commands))
    return actions


def _split_vocabulary(
    texts: list[str], num_words: int
) -> tuple[list[str], list[str]]:
    """Separate verbs from nouns.

    Files either interleave verb/noun pairs (``2 * (num_words + 1)``
    strings) or list all verbs followed by all nouns.
    """
    if len(texts) == 2 * (num_words + 1):
        logger.debug("vocabulary_layout", layout="interleaved", words=len(texts))
        return texts[0::2], texts[1::2]
    half = (len(texts) + 1) // 2
    logger.debug("vocabulary_layout", layout="split", words=len(texts))
    return texts[:half], texts[half:]


def _build_words(texts: list[str], kind: str) -> list[Word]:
    words = []
    for number, text in enumerate(texts):
        is_synonym = text.startswith("*")
        if is_synonym:
            text = text[1:]
        words.append(
            Word(text=text.upper(), kind=kind, number=number, is_synonym=is_synonym)
        )
    return words


def _read_vocabulary(stream: _TokenStream, num_words: int) -> list[Word]:
    texts = []
    while stream.at_string():
        texts.append(stream.string("vocabulary word"))
    if not texts:
        raise AdventureLoadError(
            LoadFailure.TRUNCATED_DATA, "no vocabulary words after the actions"
        )
    verbs, nouns = _split_vocabulary(texts, num_words)
    return _build_words(verbs, "verb") + _build_words(nouns, "noun")


def _read_rooms(stream: _TokenStream, count: int) -> list[Room]:
    rooms = []
    for i in range(count):
        exits = tuple(stream.number(f"room {i} exit {j}") for j in range(6))
        description = stream.string(f"room {i} description")
        rooms.append(Room(exits=exits, description=description))
    return rooms


def _parse_item(description: str, location: int) -> Item:
    autoget = None
    match = _AUTOGET.fullmatch(description)
    if match:
        description = match.group(1)
        autoget = match.group(2).upper() or None
    if location == _FILE_CARRIED:
        location = CARRIED
    return Item(description=description, location=location, autoget=autoget)


def _read_items(stream: _TokenStream, count: int) -> list[Item]:
    items = []
    for i in range(count):
        description = stream.string(f"item {i} description")
        location = stream.number(f"item {i} location")
        items.append(_parse_item(description, location))
    return items


def _read_action_titles(stream: _TokenStream, count: int) -> list[str]:
    titles = []
    while len(titles) < count and stream.at_string():
        titles.append(stream.string("action title"))
    return titles


def _check_reference(kind: str, value: int, limit: int, where: str) -> None:
    if not 0 <= value <= limit:
        raise AdventureLoadError(
            LoadFailure.INVALID_REFERENCE,
            f"{where} refers to {kind} {value}, highest is {limit}",
        )


def _validate(header: Header, actions: list[Action], items: list[Item]) -> None:
    """Reject references to items, rooms and flags the adventure lacks."""
    for i, action in enumerate(actions):
        for slot, raw in enumerate(action.conditions):
            condition = decode_condition(raw)
            where = f"action {i} condition {slot}"
            if condition.code in _ITEM_CONDITIONS:
                _check_reference("item", condition.parameter, header.num_items, where)
            elif condition.code in _ROOM_CONDITIONS:
                _check_reference("room", condition.parameter, header.num_rooms, where)
            elif condition.code in _FLAG_CONDITIONS:
                _check_reference("flag", condition.parameter, NUM_FLAGS - 1, where)

    for i, item in enumerate(items):
        if item.location != CARRIED:
            _check_reference("room", item.location, header.num_rooms, f"item {i}")

    _check_reference("room", header.player_room, header.num_rooms, "player room")
    _check_reference("room", header.treasure_room, header.num_rooms, "treasure room")


def parse_world(text: str) -> World:
    """Build a World from the text of an adventure data file."""
    stream = _TokenStream(tokenize(text))

    fields = _read_header(stream)
    actions = _read_actions(stream, fields["num_actions"] + 1)
    words = _read_vocabulary(stream, fields["num_words"])
    rooms = _read_rooms(stream, fields["num_rooms"] + 1)
    messages = [
        stream.string(f"message {i}") for i in range(fields["num_messages"] + 1)
    ]
    items = _read_items(stream, fields["num_items"] + 1)
    titles = _read_action_titles(stream, fields["num_actions"] + 1)

    version = stream.number("adventure version")
    adventure_number = stream.number("adventure number")
    checksum = stream.number("checksum")
    expected = expected_checksum(fields["num_actions"], fields["num_items"], version)
    if checksum != expected:
        raise AdventureLoadError(
            LoadFailure.CHECKSUM_MISMATCH,
            f"checksum is {checksum}, expected {expected}",
        )
    if stream.remaining:
        logger.debug("trailing_tokens_ignored", count=stream.remaining)

    header = Header(**fields, version=version, adventure_number=adventure_number)
    _validate(header, actions, items)

    return World(
        header=header,
        rooms=tuple(rooms),
        items=tuple(items),
        actions=tuple(actions),
        words=tuple(words),
        messages=tuple(messages),
        action_titles=tuple(titles),
    )


def load_world(data_path: str | Path | Traversable) -> World:
    """Read and parse an adventure data file."""
    try:
        if isinstance(data_path, str):
            data_path = Path(data_path)
        text = data_path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise AdventureLoadError(LoadFailure.UNREADABLE, str(exc)) from exc

    world = parse_world(text)
    logger.info(
        "adventure_loaded",
        path=str(data_path),
        adventure=world.adventure_number,
        version=world.header.version,
        rooms=len(world.rooms),
        items=len(world.items),
        actions=len(world.actions),
    )
    return world


def load_adventure(data_path: str | Path) -> tuple[World, GameState]:
    """Load an adventure and its initial game state."""
    world = load_world(data_path)
    return world, new_game_state(world)
