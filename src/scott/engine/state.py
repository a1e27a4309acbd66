"""Mutable per-game state.

All values are ints, bools and lists of them, with no World references, so
the save codec can write and restore every field.
"""

from dataclasses import dataclass, field

from .world import World

# Special item locations
DESTROYED = 0
CARRIED = 255

# The item whose presence lights dark rooms
LIGHT_SOURCE = 9

# Reserved flags
DARK_FLAG = 15
LIGHT_OUT_FLAG = 16

NUM_FLAGS = 32
NUM_ALT_COUNTERS = 9
NUM_ALT_ROOMS = 6

# Alternate counter slot that doubles as the remaining light
LIGHT_COUNTER = 8


@dataclass
class GameState:
    """All mutable game state. Holds only primitive types."""

    current_room: int = 0
    item_locations: list[int] = field(default_factory=list)
    flags: list[bool] = field(default_factory=lambda: [False] * NUM_FLAGS)
    counter: int = 0
    alt_counters: list[int] = field(default_factory=lambda: [0] * NUM_ALT_COUNTERS)
    alt_rooms: list[int] = field(default_factory=lambda: [0] * NUM_ALT_ROOMS)

    # Only true while a CONT chain is being followed
    continuation: bool = False

    @property
    def light_remaining(self) -> int:
        return self.alt_counters[LIGHT_COUNTER]

    @light_remaining.setter
    def light_remaining(self, value: int) -> None:
        self.alt_counters[LIGHT_COUNTER] = value

    def flag(self, number: int) -> bool:
        return 0 <= number < NUM_FLAGS and self.flags[number]

    def set_flag(self, number: int, value: bool = True) -> None:
        if 0 <= number < NUM_FLAGS:
            self.flags[number] = value

    def has_item(self, index: int) -> bool:
        return 0 <= index < len(self.item_locations)

    def location_of(self, index: int) -> int | None:
        """Where an item is, or None for an index the adventure lacks."""
        if self.has_item(index):
            return self.item_locations[index]
        return None

    def is_carrying(self, index: int) -> bool:
        return self.location_of(index) == CARRIED

    def is_here(self, index: int) -> bool:
        """True if the item is carried or in the current room."""
        return self.location_of(index) in (CARRIED, self.current_room)

    def carried_count(self) -> int:
        return sum(1 for loc in self.item_locations if loc == CARRIED)

    def is_dark(self) -> bool:
        """Dark flag set and no light source at hand."""
        return self.flag(DARK_FLAG) and not self.is_here(LIGHT_SOURCE)


def new_game_state(world: World) -> GameState:
    """Create a fresh game state with items at their starting locations."""
    state = GameState(
        current_room=world.header.player_room,
        item_locations=[item.location for item in world.items],
    )
    state.light_remaining = world.header.light_time
    return state
