"""A reader for the subset of Rusty Object Notation used by the data files."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Union

_SKIP = re.compile(r"(?:\s+|//[^\n]*|/\*.*?\*/|#!\[[^\]]*\])+", re.S)
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(r"[+-]?(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d+)?")
_SPECIAL = re.compile(r"[+-]?(?:inf|NaN)\b")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\", '"': '"', "'": "'"}


class RonError(ValueError):
    """Raised for text that is not valid RON."""


@dataclass(frozen=True)
class Named:
    """A named value: a unit variant (no args), a tuple variant or a named struct."""

    name: str
    args: Union[tuple, dict, None] = None


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> RonError:
        line = self.text.count("\n", 0, self.pos) + 1
        column = self.pos - (self.text.rfind("\n", 0, self.pos) + 1) + 1
        return RonError(f"{message} at line {line}, column {column}")

    def skip(self) -> None:
        match = _SKIP.match(self.text, self.pos)
        if match:
            self.pos = match.end()

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if not self.at_end() else ""

    def expect(self, char: str) -> None:
        self.skip()
        if self.peek() != char:
            raise self.error(f"expected {char!r}")
        self.pos += 1

    def value(self) -> Any:
        self.skip()
        if self.at_end():
            raise self.error("unexpected end of input")
        char = self.peek()
        if char == '"':
            return self.string()
        if char == "[":
            self.pos += 1
            return self.items("]", self.value)
        if char == "{":
            self.pos += 1
            return self.mapping()
        if char == "(":
            return self.paren()
        special = _SPECIAL.match(self.text, self.pos)
        if special:
            self.pos = special.end()
            word = special.group()
            sign = -1.0 if word.startswith("-") else 1.0
            return sign * math.inf if word.lstrip("+-") == "inf" else math.nan
        if char in "+-.0123456789":
            return self.number()
        ident = _IDENT.match(self.text, self.pos)
        if ident is None:
            raise self.error(f"unexpected character {char!r}")
        self.pos = ident.end()
        word = ident.group()
        if word in ("true", "false"):
            return word == "true"
        self.skip()
        if self.peek() == "(":
            return Named(word, self.paren())
        return Named(word)

    def number(self) -> int | float:
        match = _NUMBER.match(self.text, self.pos)
        if match is None:
            raise self.error("malformed number")
        self.pos = match.end()
        literal = match.group().replace("_", "")
        if any(c in literal for c in ".eE"):
            return float(literal)
        return int(literal)

    def string(self) -> str:
        self.pos += 1
        out: list[str] = []
        while True:
            if self.at_end():
                raise self.error("unterminated string")
            char = self.text[self.pos]
            self.pos += 1
            if char == '"':
                return "".join(out)
            if char != "\\":
                out.append(char)
                continue
            if self.at_end():
                raise self.error("unterminated escape")
            code = self.text[self.pos]
            self.pos += 1
            if code in _ESCAPES:
                out.append(_ESCAPES[code])
            elif code == "u":
                match = re.compile(r"\{([0-9a-fA-F]{1,6})\}").match(self.text, self.pos)
                if match is None:
                    raise self.error("malformed unicode escape")
                self.pos = match.end()
                out.append(chr(int(match.group(1), 16)))
            else:
                raise self.error(f"unknown escape \\{code}")

    def items(self, close: str, item: Callable[[], Any]) -> list:
        result = []
        while True:
            self.skip()
            if self.peek() == close:
                self.pos += 1
                return result
            if self.at_end():
                raise self.error(f"expected {close!r}")
            result.append(item())
            self.skip()
            if self.peek() != close:
                self.expect(",")

    def mapping(self) -> dict:
        def entry() -> tuple:
            key = self.value()
            self.expect(":")
            return key, self.value()

        pairs = self.items("}", entry)
        try:
            return dict(pairs)
        except TypeError as exc:
            raise self.error("unhashable map key") from exc

    def is_struct(self) -> bool:
        start = self.pos
        self.skip()
        ident = _IDENT.match(self.text, self.pos)
        found = False
        if ident:
            self.pos = ident.end()
            self.skip()
            found = self.text.startswith(":", self.pos) and not self.text.startswith("::", self.pos)
        self.pos = start
        return found

    def paren(self) -> tuple | dict:
        self.expect("(")
        if self.is_struct():
            def field() -> tuple:
                self.skip()
                ident = _IDENT.match(self.text, self.pos)
                if ident is None:
                    raise self.error("expected field name")
                self.pos = ident.end()
                self.expect(":")
                return ident.group(), self.value()

            return dict(self.items(")", field))
        return tuple(self.items(")", self.value))


def loads(text: str) -> Any:
    """Parse a RON document into Python values and :class:`Named` items."""
    parser = _Parser(text)
    result = parser.value()
    parser.skip()
    if not parser.at_end():
        raise parser.error("trailing characters")
    return result