"""Text the engine shows for rooms, inventory and score."""

from .state import CARRIED, GameState
from .world import DIRECTIONS, World

TOO_DARK = "I can't see. It is too dark!"


def get_room_description(world: World, state: GameState) -> str:
    """Describe the current room, its exits and visible items."""
    if state.is_dark():
        return TOO_DARK

    if not 0 <= state.current_room < len(world.rooms):
        return "I'm nowhere I recognise."
    room = world.rooms[state.current_room]

    if room.is_verbatim:
        lines = [room.description[1:]]
    else:
        lines = [f"I'm in a {room.description}"]

    exits = get_exits(world, state)
    lines.append("")
    lines.append("Obvious exits: " + (", ".join(exits) if exits else "none") + ".")

    visible = get_visible_items(world, state)
    if visible:
        lines.append("")
        lines.append("I can also see: " + " - ".join(visible))

    return "\n".join(lines)


def get_exits(world: World, state: GameState) -> list[str]:
    if not 0 <= state.current_room < len(world.rooms):
        return []
    room = world.rooms[state.current_room]
    return [name for name, dest in zip(DIRECTIONS, room.exits) if dest]


def get_visible_items(world: World, state: GameState) -> list[str]:
    """Descriptions of items lying in the current room."""
    return [
        world.items[i].description
        for i, loc in enumerate(state.item_locations)
        if loc == state.current_room and i < len(world.items)
    ]


def get_inventory(world: World, state: GameState) -> list[str]:
    return [
        world.items[i].description
        for i, loc in enumerate(state.item_locations)
        if loc == CARRIED and i < len(world.items)
    ]


def inventory_text(world: World, state: GameState) -> str:
    items = get_inventory(world, state)
    if not items:
        return "I'm carrying:\nNothing."
    return "I'm carrying:\n" + " - ".join(items)


def stored_treasures(world: World, state: GameState) -> int:
    """Count treasures lying in the treasure room."""
    room = world.header.treasure_room
    return sum(
        1
        for i, item in enumerate(world.items)
        if item.is_treasure and state.location_of(i) == room
    )


def calculate_score(world: World, state: GameState) -> int:
    """Score on a 0..100 scale."""
    total = world.header.treasures
    if total <= 0:
        return 0
    return stored_treasures(world, state) * 100 // total
