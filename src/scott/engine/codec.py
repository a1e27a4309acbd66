"""Packed integer fields of the action table.

Actions store their trigger, conditions and commands as packed integers.
These helpers turn them into small value objects at the point of use, so
nothing past the loader handles the raw arithmetic.
"""

from dataclasses import dataclass

VOCAB_BASE = 150
CONDITION_BASE = 20
COMMAND_BASE = 150


@dataclass(frozen=True)
class VocabCode:
    verb: int
    noun: int


@dataclass(frozen=True)
class Condition:
    code: int
    parameter: int


@dataclass(frozen=True)
class CommandPair:
    first: int
    second: int

    def __iter__(self):
        yield self.first
        yield self.second


def decode_vocab(raw: int) -> VocabCode:
    verb, noun = divmod(raw, VOCAB_BASE)
    return VocabCode(verb=verb, noun=noun)


def decode_condition(raw: int) -> Condition:
    parameter, code = divmod(raw, CONDITION_BASE)
    return Condition(code=code, parameter=parameter)


def decode_command_pair(raw: int) -> CommandPair:
    first, second = divmod(raw, COMMAND_BASE)
    return CommandPair(first=first, second=second)


def encode_vocab(verb: int, noun: int) -> int:
    return verb * VOCAB_BASE + noun


def encode_condition(code: int, parameter: int = 0) -> int:
    return parameter * CONDITION_BASE + code


def encode_command_pair(first: int, second: int = 0) -> int:
    return first * COMMAND_BASE + second
