"""Immutable data structures for an adventure.

Built once by the loader and never mutated. Player progress lives in
GameState; nothing here changes while a game is played.
"""

from dataclasses import dataclass

# Exit slots, in data file order
DIRECTIONS = ("North", "South", "East", "West", "Up", "Down")


@dataclass(frozen=True)
class Header:
    """The 12 leading integers plus the trailer's version and number.

    The ``num_*`` fields hold the highest index, so tables have
    ``num_* + 1`` entries.
    """

    text_size: int
    num_items: int
    num_actions: int
    num_words: int
    num_rooms: int
    max_carry: int
    player_room: int
    treasures: int
    word_length: int
    light_time: int
    num_messages: int
    treasure_room: int
    version: int = 0
    adventure_number: int = 0


@dataclass(frozen=True)
class Room:
    exits: tuple[int, int, int, int, int, int]
    description: str = ""

    @property
    def is_verbatim(self) -> bool:
        """A leading ``*`` means print the description as written."""
        return self.description.startswith("*")


@dataclass(frozen=True)
class Item:
    description: str
    location: int
    autoget: str | None = None

    @property
    def is_treasure(self) -> bool:
        return self.description.startswith("*")


@dataclass(frozen=True)
class Action:
    """One row of the action table, fields still packed."""

    vocab: int
    conditions: tuple[int, int, int, int, int]
    commands: tuple[int, int]


@dataclass(frozen=True)
class Word:
    """A vocabulary entry. ``number`` is its index within its kind."""

    text: str
    kind: str  # "verb" or "noun"
    number: int
    is_synonym: bool = False


@dataclass(frozen=True)
class World:
    header: Header
    rooms: tuple[Room, ...]
    items: tuple[Item, ...]
    actions: tuple[Action, ...]
    words: tuple[Word, ...]
    messages: tuple[str, ...]
    action_titles: tuple[str, ...] = ()

    @property
    def adventure_number(self) -> int:
        return self.header.adventure_number

    def action_title(self, index: int) -> str:
        if 0 <= index < len(self.action_titles):
            return self.action_titles[index]
        return ""
