"""Per-turn light source depletion."""

from .context import TurnContext
from .state import DESTROYED, LIGHT_OUT_FLAG, LIGHT_SOURCE

LIGHT_LOW = "Your light is growing dim."
LIGHT_OUT = "Your light has run out!"


def tick_light(ctx: TurnContext) -> None:
    """Burn one turn of light if the light source is carried and still lit."""
    state = ctx.state
    if not state.is_carrying(LIGHT_SOURCE) or state.flag(LIGHT_OUT_FLAG):
        return

    before = state.light_remaining
    state.light_remaining = before - 1

    if state.light_remaining <= 0:
        state.light_remaining = 0
        state.set_flag(LIGHT_OUT_FLAG, True)
        ctx.say(LIGHT_OUT)
        if ctx.settings.destroy_exhausted_light:
            state.item_locations[LIGHT_SOURCE] = DESTROYED
        return

    threshold = ctx.settings.light_warning_threshold
    if state.light_remaining < threshold <= before:
        ctx.say(LIGHT_LOW)
