"""Lexical analysis for the small teaching language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional


class LexType(IntEnum):
    """Kinds of lexemes, including the extra kinds used in reverse Polish code."""

    PROGRAM = 0
    INTEGER = 1
    STRING = 2
    REAL = 3
    IF = 4
    ELSE = 5
    WHILE = 6
    READ = 7
    WRITE = 8
    AND = 9
    OR = 10
    FOR = 11
    NOT = 12
    CONTINUE = 13
    FIN = 14
    SEMICOLON = 15
    COMMA = 16
    LPAREN = 17
    RPAREN = 18
    LQPAREN = 19
    RQPAREN = 20
    BEGIN = 21
    END = 22
    EQ = 23
    PLUS = 24
    MINUS = 25
    TIMES_EQ = 26
    STAR = 27
    LEQ = 28
    GEQ = 29
    NOTEQ = 30
    DPLUS = 31
    DMINUS = 32
    SLASH = 33
    ID = 34
    NUMB_CONST = 35
    STR_CONST = 36
    REAL_CONST = 37
    NULL = 38
    POLIZ_GO = 39
    POLIZ_FGO = 40
    POLIZ_LABEL = 41
    POLIZ_ADDRESS = 42


KEYWORDS = (
    "program", "int", "string", "real", "if", "else", "while",
    "read", "write", "and", "or", "for", "not", "continue",
)

DELIMITERS = (
    "EOF", ";", ",", "(", ")", "<", ">", "{", "}", "=", "+", "-",
    "==", "*", "<=", ">=", "!=", "++", "--", "/",
)

_WHITESPACE = " \n\r\t"
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")


class LexError(Exception):
    """Raised when the input cannot be split into lexemes."""

    def __init__(self, char: str, message: str) -> None:
        super().__init__(message)
        self.char = char


@dataclass(frozen=True)
class Lex:
    """One lexeme: its kind and the value that goes with it."""

    type: LexType
    value: int = 0
    real: float = 0.0
    text: str = ""

    def __str__(self) -> str:
        if self.type in (LexType.ID, LexType.NUMB_CONST):
            shown = str(self.value)
        elif self.type is LexType.STR_CONST:
            shown = self.text
        elif self.type is LexType.REAL_CONST:
            shown = format(self.real, "g")
        else:
            shown = str(int(self.type))
        return f"{shown};{int(self.type)}"


@dataclass
class Ident:
    """An entry of the identifier table."""

    name: str
    type: LexType = LexType.NULL
    value: int = 0

    @property
    def declared(self) -> bool:
        return self.type is not LexType.NULL


class IdentTable:
    """Identifiers in order of first appearance."""

    def __init__(self) -> None:
        self._items: list[Ident] = []
        self._positions: dict[str, int] = {}

    def add(self, name: str) -> int:
        """Return the index of ``name``, adding it if it is new."""
        if name not in self._positions:
            self._positions[name] = len(self._items)
            self._items.append(Ident(name))
        return self._positions[name]

    def __getitem__(self, index: int) -> Ident:
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Ident]:
        return iter(self._items)


def _delimiter(text: str) -> Lex:
    try:
        index = DELIMITERS.index(text)
    except ValueError:
        raise LexError(text[-1], f"unknown operator {text!r}") from None
    return Lex(LexType(index + LexType.FIN), index)


class Scanner:
    """Splits program text into lexemes, one call of ``get_lex`` at a time."""

    def __init__(self, text: str, idents: Optional[IdentTable] = None) -> None:
        self._text = text
        self._pos = 0
        self.idents = idents if idents is not None else IdentTable()

    def _peek(self) -> Optional[str]:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return None

    def _next(self) -> Optional[str]:
        c = self._peek()
        if c is not None:
            self._pos += 1
        return c

    def _take_if(self, expected: str) -> bool:
        if self._peek() == expected:
            self._pos += 1
            return True
        return False

    def _skip_line_comment(self) -> None:
        while True:
            c = self._next()
            if c is None:
                raise LexError("", "unterminated comment")
            if c == "\n":
                return

    def _skip_block_comment(self) -> None:
        after_star = False
        while True:
            c = self._next()
            if c is None:
                raise LexError("", "unterminated comment")
            if after_star:
                if c == "/":
                    return
                after_star = False
            elif c == "*":
                after_star = True

    def _word(self, first: str) -> Lex:
        chars = [first]
        while (c := self._peek()) is not None and (c in _LETTERS or c in _DIGITS):
            chars.append(c)
            self._pos += 1
        word = "".join(chars)
        if word in KEYWORDS:
            index = KEYWORDS.index(word)
            return Lex(LexType(index), index)
        return Lex(LexType.ID, self.idents.add(word))

    def _number(self, first: str) -> Lex:
        whole = int(first)
        fraction: Optional[str] = None
        while (c := self._peek()) is not None:
            if c in _DIGITS:
                if fraction is None:
                    whole = whole * 10 + int(c)
                else:
                    fraction += c
            elif c == ".":
                fraction = ""
            elif c in _LETTERS:
                raise LexError(c, f"letter {c!r} inside a number")
            else:
                break
            self._pos += 1
        if fraction is None:
            return Lex(LexType.NUMB_CONST, whole)
        return Lex(LexType.REAL_CONST, 0, float(f"{whole}.{fraction}"))

    def _string(self) -> Lex:
        chars = []
        while True:
            c = self._next()
            if c is None:
                raise LexError("", "unterminated string constant")
            if c == '"':
                return Lex(LexType.STR_CONST, text="".join(chars))
            chars.append(c)

    def get_lex(self) -> Lex:
        """Return the next lexeme; at the end of input, FIN every time."""
        while True:
            c = self._next()
            if c is None:
                return Lex(LexType.FIN)
            if c in _WHITESPACE:
                continue
            if c in _LETTERS:
                return self._word(c)
            if c in _DIGITS:
                return self._number(c)
            if c == '"':
                return self._string()
            if c in "+-":
                return _delimiter(c + c if self._take_if(c) else c)
            if c == "/":
                if self._take_if("/"):
                    self._skip_line_comment()
                    continue
                if self._take_if("*"):
                    self._skip_block_comment()
                    continue
                return _delimiter("/=" if self._take_if("=") else "/")
            if c in "!=":
                if not self._take_if("="):
                    return _delimiter(c)
                c += "="
                return _delimiter(c + "=" if self._take_if("=") else c)
            if c in "*<>":
                return _delimiter(c + "=" if self._take_if("=") else c)
            return _delimiter(c)

    def __iter__(self) -> Iterator[Lex]:
        """Yield lexemes up to and including the final FIN."""
        while True:
            lex = self.get_lex()
            yield lex
            if lex.type is LexType.FIN:
                return


def tokenize(text: str, idents: Optional[IdentTable] = None) -> list[Lex]:
    """Return every lexeme of ``text``, ending with FIN."""
    return list(Scanner(text, idents))