"""Flex sequence parser.

Grammar::

    sequence := item*
    item     := ( "(" sequence ")" | flex ) repeat?
    flex     := ( "<" | ">" | "^" | "~" | NAME ) modifier*
    NAME     := upper-case letter followed by lower-case letters
    modifier := "'" | "+" | "*"
    repeat   := digits

Whitespace between items is optional, so ``"Ur>"``, ``"^Ur'^"`` and
``"(K^)3 (<)5"`` are all valid.

``'`` selects the inverse flex, ``+`` asks for the flexagon's structure to be
generated before applying, and ``*`` is shorthand for ``X+ > ^``.
Modifiers combine, so ``"P'+"`` generates structure for the inverse
pinch and then applies it; ``*`` must come last.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from .errors import AtomicParseError, ParseCode

SINGLE_CHAR_FLEXES = "<>^~"
MODIFIERS = ("'", "+", "*")


@dataclass(frozen=True)
class FlexName:
    base_name: str
    is_inverse: bool = False
    should_generate: bool = False

    @property
    def full_name(self) -> str:
        return self.base_name + "'" if self.is_inverse else self.base_name

    def __str__(self) -> str:
        return self.full_name + ("+" if self.should_generate else "")


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def error(self, code: ParseCode) -> AtomicParseError:
        return AtomicParseError(code, self.text, self.pos)

    def repeat(self) -> int:
        start = self.pos
        while self.peek().isdigit():
            self.pos += 1
        return int(self.text[start:self.pos]) if self.pos > start else 1

    def sequence(self, nested: bool) -> Union[List[FlexName], AtomicParseError]:
        names: List[FlexName] = []
        while True:
            c = self.peek()
            if not c:
                if nested:
                    return self.error(ParseCode.UNBALANCED_PARENS)
                return names
            if c.isspace():
                self.pos += 1
            elif c == ")":
                if not nested:
                    return self.error(ParseCode.UNBALANCED_PARENS)
                self.pos += 1
                return names
            elif c == "(":
                self.pos += 1
                inner = self.sequence(nested=True)
                if isinstance(inner, AtomicParseError):
                    return inner
                names.extend(inner * self.repeat())
            else:
                flex = self.flex()
                if isinstance(flex, AtomicParseError):
                    return flex
                names.extend(flex * self.repeat())

    def flex(self) -> Union[List[FlexName], AtomicParseError]:
        c = self.peek()
        if c in SINGLE_CHAR_FLEXES:
            name = c
            self.pos += 1
        elif c.isupper():
            start = self.pos
            self.pos += 1
            while self.peek().islower():
                self.pos += 1
            name = self.text[start:self.pos]
        else:
            return self.error(ParseCode.BAD_TOKEN)

        is_inverse = should_generate = star = False
        while not star and self.peek() in MODIFIERS:
            modifier = self.peek()
            self.pos += 1
            if modifier == "'":
                is_inverse = True
            else:
                should_generate = True
                star = modifier == "*"

        flex = FlexName(name, is_inverse=is_inverse, should_generate=should_generate)
        if star:
            return [flex, FlexName(">"), FlexName("^")]
        return [flex]


def parse_flex_sequence(text: str) -> Union[List[FlexName], AtomicParseError]:
    """Parse a flex formula such as ``"Xr >> Xl (K^)2"`` into flex names."""
    return _Parser(text).sequence(nested=False)


def flex_sequence_to_string(names: List[FlexName]) -> str:
    return " ".join(str(n) for n in names)
