"""Tests for word lookup and command parsing."""

import pytest

from scott.engine.turn import parse_command
from scott.engine.vocabulary import GO_VERB, Vocabulary, is_direction
from scott.engine.world import World


@pytest.fixture
def vocabulary(world: World) -> Vocabulary:
    return Vocabulary(world)


def test_exact_words(vocabulary: Vocabulary):
    assert vocabulary.verb("GO") == 1
    assert vocabulary.verb("look") == 3
    assert vocabulary.noun("DOOR") == 10


def test_words_truncated_to_word_length(vocabulary: Vocabulary):
    assert vocabulary.verb("INVENTORY") == 4
    assert vocabulary.verb("LOOKING") == 3


def test_prefix_match(vocabulary: Vocabulary):
    assert vocabulary.verb("LO") == 3
    assert vocabulary.noun("ST") == 15


def test_synonyms_resolve_to_base_word(vocabulary: Vocabulary):
    assert vocabulary.verb("WALK") == 1
    assert vocabulary.verb("I") == 4
    assert vocabulary.verb("UNLOCK") == 12
    assert vocabulary.verb("LEAVE") == 18
    assert vocabulary.noun("LANTERN") == 7


def test_direction_aliases(vocabulary: Vocabulary):
    assert vocabulary.noun("N") == 1
    assert vocabulary.noun("d") == 6
    assert is_direction(vocabulary.noun("WEST"))
    assert not is_direction(vocabulary.noun("LAMP"))


def test_unknown_and_padding(vocabulary: Vocabulary):
    assert vocabulary.verb("XYZZY") is None
    assert vocabulary.noun(".") is None
    assert vocabulary.noun("") is None


def test_parse_two_words(vocabulary: Vocabulary):
    command = parse_command(vocabulary, "get lantern")
    assert (command.verb, command.noun) == (10, 7)
    assert command.noun_text == "LANTERN"


def test_parse_bare_direction(vocabulary: Vocabulary):
    assert parse_command(vocabulary, "n").verb == GO_VERB
    assert parse_command(vocabulary, "n").noun == 1
    up = parse_command(vocabulary, "up")
    assert (up.verb, up.noun) == (GO_VERB, 5)


def test_parse_single_verb(vocabulary: Vocabulary):
    command = parse_command(vocabulary, "score")
    assert (command.verb, command.noun) == (6, 0)


@pytest.mark.parametrize("line", ["", "   ", "xyzzy", "get the lamp", "get xyzzy"])
def test_parse_rejects(vocabulary: Vocabulary, line: str):
    assert parse_command(vocabulary, line) is None
