"""Atomic patterns: a local view of a flexagon strip around one hinge.

Written form::

    a 1 > / [-3,2] > b

The tokens before ``/`` are the pats to the left of the hinge, the tokens
after it the pats to the right, each followed by the direction (``<`` or
``>``) it is connected to its neighbour with. ``a`` and ``b`` stand for the
rest of the strip on either side; a leading ``-`` means that remainder is
flipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .errors import AtomicParseError, ParseCode
from .pat import Leaf, Pair, Pat

DIRECTIONS = ("<", ">")
REMAINDERS = ("a", "-a", "b", "-b")


def toggle_direction(direction: str) -> str:
    return "<" if direction == ">" else ">"


def negate_remainder(label: str) -> str:
    return label[1:] if label.startswith("-") else "-" + label


@dataclass(frozen=True)
class ConnectedPat:
    pat: Pat
    direction: str

    def flipped(self) -> "ConnectedPat":
        return ConnectedPat(self.pat.flipped(), toggle_direction(self.direction))

    def toggled(self) -> "ConnectedPat":
        return ConnectedPat(self.pat, toggle_direction(self.direction))


@dataclass(frozen=True)
class AtomicPattern:
    other_left: str
    left: Tuple[ConnectedPat, ...]
    right: Tuple[ConnectedPat, ...]
    other_right: str

    def __str__(self) -> str:
        return atomic_pattern_to_string(self)


# --- printing ---


def atomic_pattern_to_string(pattern: AtomicPattern) -> str:
    tokens: List[str] = [pattern.other_left]
    for cp in pattern.left:
        tokens += [str(cp.pat), cp.direction]
    tokens.append("/")
    for cp in pattern.right:
        tokens += [str(cp.pat), cp.direction]
    tokens.append(pattern.other_right)
    return " ".join(tokens)


# --- parsing ---


@dataclass(frozen=True)
class _Token:
    kind: str  # "pat", "dir", "slash", "rem"
    value: object
    position: int


class _Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_spaces(self) -> None:
        while self.peek().isspace():
            self.pos += 1

    def read_int(self) -> Optional[int]:
        start = self.pos
        if self.peek() == "-":
            self.pos += 1
        while self.peek().isdigit():
            self.pos += 1
        digits = self.text[start:self.pos]
        if digits in ("", "-"):
            self.pos = start
            return None
        return int(digits)

    def read_pat(self) -> Union[Pat, AtomicParseError]:
        self.skip_spaces()
        start = self.pos
        if self.peek() == "[":
            self.pos += 1
            left = self.read_pat()
            if isinstance(left, AtomicParseError):
                return left
            self.skip_spaces()
            if self.peek() == "":
                return AtomicParseError(ParseCode.UNBALANCED_BRACKETS, self.text, start)
            if self.peek() != ",":
                return AtomicParseError(ParseCode.BAD_PAIR, self.text, self.pos)
            self.pos += 1
            right = self.read_pat()
            if isinstance(right, AtomicParseError):
                return right
            self.skip_spaces()
            if self.peek() == "":
                return AtomicParseError(ParseCode.UNBALANCED_BRACKETS, self.text, start)
            if self.peek() != "]":
                return AtomicParseError(ParseCode.BAD_PAIR, self.text, self.pos)
            self.pos += 1
            return Pair(left, right)
        if self.peek() == "":
            return AtomicParseError(ParseCode.UNBALANCED_BRACKETS, self.text, start)
        value = self.read_int()
        if value is None or value == 0:
            return AtomicParseError(ParseCode.BAD_TOKEN, self.text, start)
        return Leaf(value)


def _tokenize(text: str) -> Union[List[_Token], AtomicParseError]:
    scanner = _Scanner(text)
    tokens: List[_Token] = []
    while True:
        scanner.skip_spaces()
        c = scanner.peek()
        if not c:
            return tokens
        start = scanner.pos
        if c in DIRECTIONS:
            tokens.append(_Token("dir", c, start))
            scanner.pos += 1
        elif c == "/":
            tokens.append(_Token("slash", c, start))
            scanner.pos += 1
        elif c == "]":
            return AtomicParseError(ParseCode.UNBALANCED_BRACKETS, text, start)
        elif c == "[" or c.isdigit() or (c == "-" and text[start + 1:start + 2].isdigit()):
            pat = scanner.read_pat()
            if isinstance(pat, AtomicParseError):
                return pat
            tokens.append(_Token("pat", pat, start))
        else:
            end = start
            while end < len(text) and not text[end].isspace() and text[end] not in "[]/<>":
                end += 1
            word = text[start:end] or c
            if word not in REMAINDERS:
                return AtomicParseError(ParseCode.BAD_TOKEN, text, start)
            tokens.append(_Token("rem", word, start))
            scanner.pos = start + len(word)


def string_to_atomic_pattern(text: str) -> Union[AtomicPattern, AtomicParseError]:
    """Parse ``"a 1 > / [-3,2] > b"`` into an AtomicPattern."""
    tokens = _tokenize(text)
    if isinstance(tokens, AtomicParseError):
        return tokens

    if len(tokens) < 2 or tokens[0].kind != "rem" or tokens[-1].kind != "rem":
        return AtomicParseError(ParseCode.MISSING_REMAINDER, text)

    body = tokens[1:-1]
    if sum(1 for t in body if t.kind == "slash") != 1:
        return AtomicParseError(ParseCode.SLASH_COUNT, text)

    left: List[ConnectedPat] = []
    right: List[ConnectedPat] = []
    current = left
    i = 0
    while i < len(body):
        token = body[i]
        if token.kind == "slash":
            current = right
            i += 1
            continue
        if token.kind != "pat":
            return AtomicParseError(ParseCode.BAD_TOKEN, text, token.position)
        if i + 1 >= len(body) or body[i + 1].kind != "dir":
            return AtomicParseError(ParseCode.MISSING_DIRECTION, text, token.position)
        current.append(ConnectedPat(token.value, body[i + 1].value))
        i += 2

    return AtomicPattern(tokens[0].value, tuple(left), tuple(right), tokens[-1].value)
