"""Movetext lexer.

Turns raw PGN movetext into a flat stream of typed tokens. Whitespace only
separates tokens and is never emitted.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from pgnscope.core.notation.san import is_move_token, strip_glyphs

# "12." / "12..." / "12...." / "12", optionally glued to the move that follows.
_MOVE_NUMBER_RE = re.compile(r"^(?P<number>\d+)(?:(?P<black>\.\.\.)\.?|\.)(?P<rest>.*)$")
_BARE_NUMBER_RE = re.compile(r"^\d+$")
_DELIMITERS = "{}();"


class TokenKind(Enum):
    COMMENT = auto()
    OPEN_VARIATION = auto()
    CLOSE_VARIATION = auto()
    MOVE_NUMBER = auto()
    MOVE = auto()
    DISCARD = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexical unit of movetext."""

    kind: TokenKind
    text: str = ""
    number: int = 0
    black_to_move: bool = False


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _classify_word(word: str) -> Iterator[Token]:
    match = _MOVE_NUMBER_RE.match(word)
    if match is not None:
        yield Token(
            TokenKind.MOVE_NUMBER,
            text=word,
            number=int(match.group("number")),
            black_to_move=match.group("black") is not None,
        )
        rest = match.group("rest").lstrip(".")
        if rest:
            yield from _classify_word(rest)
        return

    if _BARE_NUMBER_RE.match(word):
        yield Token(TokenKind.MOVE_NUMBER, text=word, number=int(word))
        return

    san = strip_glyphs(word)
    if san and is_move_token(san):
        yield Token(TokenKind.MOVE, text=san)
        return

    yield Token(TokenKind.DISCARD, text=word)


def iter_tokens(movetext: str) -> Iterator[Token]:
    """Lazily tokenize *movetext*."""
    text = normalize_newlines(movetext)
    idx = 0
    total = len(text)

    while idx < total:
        ch = text[idx]

        if ch.isspace():
            idx += 1
            continue

        if ch == "{":
            end = text.find("}", idx + 1)
            if end < 0:
                end = total
            yield Token(TokenKind.COMMENT, text=text[idx + 1 : end].strip())
            idx = end + 1
            continue

        if ch == ";":
            end = text.find("\n", idx + 1)
            if end < 0:
                end = total
            yield Token(TokenKind.COMMENT, text=text[idx + 1 : end].strip())
            idx = end
            continue

        if ch == "(":
            yield Token(TokenKind.OPEN_VARIATION, text=ch)
            idx += 1
            continue

        if ch == ")":
            yield Token(TokenKind.CLOSE_VARIATION, text=ch)
            idx += 1
            continue

        if ch == "}":
            # Stray closing brace without an opener.
            yield Token(TokenKind.DISCARD, text=ch)
            idx += 1
            continue

        token_end = idx
        while (
            token_end < total
            and not text[token_end].isspace()
            and text[token_end] not in _DELIMITERS
        ):
            token_end += 1
        yield from _classify_word(text[idx:token_end])
        idx = token_end


def tokenize(movetext: str) -> list[Token]:
    """Tokenize *movetext* into a list of :class:`Token`."""
    return list(iter_tokens(movetext))
