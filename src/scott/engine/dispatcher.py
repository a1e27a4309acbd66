"""Select and run actions, following CONT chains.

Two scans walk the action table:

* the automatic pass runs every action with verb 0, noun 0 always and
  noun 1..100 as a percent chance;
* the player scan runs the first action matching the typed verb/noun
  whose conditions hold.

Either scan hands over to the continuation chain when an action issues
CONT. The chain runs the verb 0 / noun 0 actions that immediately follow,
and ends when one of them does not re-issue CONT, at the end of the
table, or at the first action that is not a continuation.
"""

from enum import StrEnum

from ..logging import get_logger
from .codec import decode_vocab
from .commands import execute_action
from .conditions import conditions_pass
from .context import TurnContext

logger = get_logger(__name__)


class DispatchPhase(StrEnum):
    IDLE = "idle"
    SCANNING_AUTOMATIC = "scanning_automatic"
    SCANNING_PLAYER_VERB = "scanning_player_verb"
    CHAINING_CONTINUATION = "chaining_continuation"
    HALTED = "halted"


class ScanResult(StrEnum):
    EXECUTED = "executed"
    BLOCKED = "blocked"  # matching actions exist, none had its conditions met
    NO_MATCH = "no_match"


def _run(ctx: TurnContext, index: int, phase: DispatchPhase) -> None:
    ctx.state.continuation = False
    execute_action(ctx, index)
    logger.debug(
        "action_executed",
        action=index,
        title=ctx.world.action_title(index),
        phase=phase,
        cont=ctx.state.continuation,
    )


def run_continuation_chain(ctx: TurnContext, start: int) -> int:
    """Follow a CONT chain from ``start``; return where scanning may resume."""
    actions = ctx.world.actions
    index = start
    while index < len(actions) and not ctx.halted:
        vocab = decode_vocab(actions[index].vocab)
        if vocab.verb != 0 or vocab.noun != 0:
            break
        if not conditions_pass(ctx.world, ctx.state, actions[index].conditions):
            index += 1
            continue
        _run(ctx, index, DispatchPhase.CHAINING_CONTINUATION)
        index += 1
        if not ctx.state.continuation:
            break
    ctx.state.continuation = False
    return index


def run_automatic_actions(ctx: TurnContext) -> DispatchPhase:
    """The per-turn pass over verb 0 actions."""
    actions = ctx.world.actions
    index = 0
    while index < len(actions):
        if ctx.halted:
            return DispatchPhase.HALTED
        action = actions[index]
        vocab = decode_vocab(action.vocab)
        index += 1
        if vocab.verb != 0:
            continue
        if vocab.noun > 0 and ctx.rng.randint(1, 100) > vocab.noun:
            continue
        if not conditions_pass(ctx.world, ctx.state, action.conditions):
            continue
        _run(ctx, index - 1, DispatchPhase.SCANNING_AUTOMATIC)
        if ctx.state.continuation:
            index = run_continuation_chain(ctx, index)
    return DispatchPhase.HALTED if ctx.halted else DispatchPhase.IDLE


def run_player_actions(ctx: TurnContext, verb: int, noun: int) -> ScanResult:
    """Run the first action matching the player's verb and noun."""
    matched = False
    for index, action in enumerate(ctx.world.actions):
        vocab = decode_vocab(action.vocab)
        if vocab.verb != verb or vocab.noun not in (0, noun):
            continue
        matched = True
        if not conditions_pass(ctx.world, ctx.state, action.conditions):
            continue
        _run(ctx, index, DispatchPhase.SCANNING_PLAYER_VERB)
        if ctx.state.continuation:
            run_continuation_chain(ctx, index + 1)
        return ScanResult.EXECUTED
    return ScanResult.BLOCKED if matched else ScanResult.NO_MATCH
