"""Split adventure data text into integer and string tokens.

The data file is a stream of whitespace separated integers and double
quoted strings. Strings may span lines and keep every character verbatim.
Outside quotes, ``//`` starts a comment that runs to the end of the line.
"""

import re
from dataclasses import dataclass

from .errors import AdventureLoadError, LoadFailure

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Token:
    """One atom of the data file, with the line it started on."""

    value: int | str
    line: int

    @property
    def is_string(self) -> bool:
        return isinstance(self.value, str)


def _bare_token(text: str, line: int) -> Token:
    if not _INTEGER.fullmatch(text):
        raise AdventureLoadError(
            LoadFailure.MALFORMED_INPUT,
            f"line {line}: expected a number or quoted string, got {text!r}",
        )
    return Token(int(text), line)


def tokenize(text: str) -> list[Token]:
    """Convert raw data text into an ordered token list."""
    tokens: list[Token] = []
    bare: list[str] = []
    bare_line = 1
    line = 1
    i = 0
    n = len(text)

    def flush() -> None:
        if bare:
            tokens.append(_bare_token("".join(bare), bare_line))
            bare.clear()

    while i < n:
        char = text[i]

        if char == '"':
            flush()
            end = text.find('"', i + 1)
            if end < 0:
                raise AdventureLoadError(
                    LoadFailure.MALFORMED_INPUT,
                    f"line {line}: unterminated quoted string",
                )
            body = text[i + 1 : end]
            tokens.append(Token(body, line))
            line += body.count("\n")
            i = end + 1
            continue

        if char == "/" and text.startswith("//", i):
            flush()
            newline = text.find("\n", i)
            i = n if newline < 0 else newline
            continue

        if char.isspace():
            flush()
            if char == "\n":
                line += 1
        else:
            if not bare:
                bare_line = line
            bare.append(char)
        i += 1

    flush()
    return tokens
