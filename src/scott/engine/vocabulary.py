"""Resolve typed words to verb and noun numbers."""

from .world import World

GO_VERB = 1
GET_VERB = 10
DROP_VERB = 18

# Nouns 1..6 are the directions, in exit order
FIRST_DIRECTION = 1
LAST_DIRECTION = 6

DIRECTION_ALIASES = {"N": 1, "S": 2, "E": 3, "W": 4, "U": 5, "D": 6}

# Filler entries some files use to pad the word lists
_PADDING = {"", "."}


class Vocabulary:
    """Word lookup for one adventure.

    Matching tries, in order: exact word, exact synonym, then a word or
    synonym that starts with the (shorter) input. Synonyms resolve to the
    nearest preceding non-synonym word of the same kind.
    """

    def __init__(self, world: World):
        self.word_length = max(world.header.word_length, 1)
        self._words = {"verb": [], "noun": []}
        for kind in self._words:
            base = 0
            for word in world.words:
                if word.kind != kind or word.text in _PADDING:
                    continue
                if not word.is_synonym:
                    base = word.number
                self._words[kind].append((self.normalize(word.text), word, base))

    def normalize(self, text: str) -> str:
        """Upper-case and truncate to the adventure's word length."""
        return text.upper()[: self.word_length]

    def _lookup(self, kind: str, text: str) -> int | None:
        wanted = self.normalize(text)
        if not wanted:
            return None
        entries = self._words[kind]
        tiers = (
            lambda key, word: not word.is_synonym and key == wanted,
            lambda key, word: word.is_synonym and key == wanted,
            lambda key, word: not word.is_synonym and key.startswith(wanted),
            lambda key, word: word.is_synonym and key.startswith(wanted),
        )
        for matches in tiers:
            for key, word, base in entries:
                if matches(key, word):
                    return word.number if not word.is_synonym else base
        return None

    def verb(self, text: str) -> int | None:
        return self._lookup("verb", text)

    def noun(self, text: str) -> int | None:
        alias = DIRECTION_ALIASES.get(text.upper())
        if alias is not None:
            return alias
        return self._lookup("noun", text)


def is_direction(noun: int | None) -> bool:
    return noun is not None and FIRST_DIRECTION <= noun <= LAST_DIRECTION
