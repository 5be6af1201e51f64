"""Numbered dump of the lexemes of a program text, tagged by table."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from minitools.lang.lexer import LexError

KEYWORDS = (
    "program", "int", "string", "real", "if", "else", "while",
    "read", "write", "and", "or", "for", "not", "continue",
)

DELIMITERS = (
    "EOF", "*", "/", "+", "-", "==", "<", ">", "<=", ">=", "!=",
    ";", "{", "}", "=", ",", "(", ")",
)

_WHITESPACE = frozenset(" \n\r\t")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_DIGITS = frozenset("0123456789")
_ALNUM = _LETTERS | _DIGITS


@dataclass(frozen=True)
class DumpToken:
    """A lexeme of the dump.

    ``kind`` is one of ``"keyword"``, ``"delimiter"``, ``"ident"``,
    ``"number"`` or ``"string"``.  For keywords and delimiters ``value`` is
    the index in the matching table, for identifiers the index in the
    identifier table, for numbers the number itself.  The end of input is
    the delimiter with index 0.
    """

    kind: str
    value: int = 0
    text: str = ""


class _Reader:
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def peek(self) -> Optional[str]:
        if self._pos < len(self._text):
            return self._text[self._pos]
        return None

    def next(self) -> Optional[str]:
        c = self.peek()
        if c is not None:
            self._pos += 1
        return c

    def take_if(self, expected: str) -> bool:
        if self.peek() == expected:
            self._pos += 1
            return True
        return False

    def take_while(self, allowed: frozenset) -> str:
        start = self._pos
        while (c := self.peek()) is not None and c in allowed:
            self._pos += 1
        return self._text[start:self._pos]

    def until_quote(self) -> str:
        end = self._text.find('"', self._pos)
        if end < 0:
            raise LexError("", "unterminated string constant")
        body = self._text[self._pos:end]
        self._pos = end + 1
        return body

    def skip_line_comment(self) -> None:
        end = self._text.find("\n", self._pos)
        if end < 0:
            raise LexError("", "unterminated comment")
        self._pos = end + 1

    def skip_block_comment(self) -> None:
        after_star = False
        while True:
            c = self.next()
            if c is None:
                raise LexError("", "unterminated comment")
            if after_star:
                if c == "/":
                    return
                after_star = False
            elif c == "*":
                after_star = True


def _delimiter(text: str) -> DumpToken:
    try:
        index = DELIMITERS.index(text)
    except ValueError:
        raise LexError(text[-1], f"unknown operator {text!r}") from None
    return DumpToken("delimiter", index, text)


def scan(text: str) -> Iterator[DumpToken]:
    """Yield the lexemes of ``text``, ending with the end-of-input delimiter.

    Raises ``LexError`` on a character or operator that has no lexeme.
    """
    reader = _Reader(text)
    names: dict[str, int] = {}
    while True:
        c = reader.next()
        if c is None:
            yield DumpToken("delimiter", 0, DELIMITERS[0])
            return
        if c in _WHITESPACE:
            continue
        if c in _LETTERS:
            word = c + reader.take_while(_ALNUM)
            if word in KEYWORDS:
                yield DumpToken("keyword", KEYWORDS.index(word), word)
            else:
                yield DumpToken("ident", names.setdefault(word, len(names)), word)
        elif c in _DIGITS:
            digits = c + reader.take_while(_DIGITS)
            follower = reader.peek()
            if follower is not None and follower in _LETTERS:
                raise LexError(follower, f"letter {follower!r} inside a number")
            yield DumpToken("number", int(digits), digits)
        elif c == '"':
            yield DumpToken("string", 0, reader.until_quote())
        elif c in "+-":
            yield _delimiter(c + c if reader.take_if(c) else c)
        elif c == "/":
            if reader.take_if("/"):
                reader.skip_line_comment()
            elif reader.take_if("*"):
                reader.skip_block_comment()
            else:
                yield _delimiter("/=" if reader.take_if("=") else "/")
        elif c in "!=":
            if reader.take_if("="):
                c += "="
                if reader.take_if("="):
                    c += "="
            yield _delimiter(c)
        elif c in "*<>%":
            yield _delimiter(c + "=" if reader.take_if("=") else c)
        else:
            yield _delimiter(c)


def format_token(token: DumpToken, number: int, names: Sequence[str]) -> str:
    """Render one numbered dump line; ``names`` is the identifier table."""
    if token.kind == "keyword":
        return f"{number} {KEYWORDS[token.value]} == TW:{token.value}"
    if token.kind == "delimiter":
        return f"{number} {DELIMITERS[token.value]} == TD:{token.value}"
    if token.kind == "ident":
        return f"{number} {names[token.value]} << TID:{token.value}"
    if token.kind == "string":
        return f"{number} String >> {token.text}"
    return f"{number}  == {token.value}"


def _numbered_lines(text: str) -> Iterator[str]:
    names: list[str] = []
    for number, token in enumerate(scan(text), start=1):
        if token.kind == "ident" and token.value == len(names):
            names.append(token.text)
        yield format_token(token, number, names)


def dump(text: str) -> str:
    """Return the whole dump of ``text``, one line per lexeme."""
    return "".join(f"{line}\n" for line in _numbered_lines(text))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Dump the lexemes of the file named in ``argv``, or of standard input."""
    args = list(sys.argv[1:] if argv is None else argv)
    print("begin LexAnalis ")
    try:
        if len(args) == 1:
            with open(args[0], encoding="utf-8") as source:
                text = source.read()
        else:
            text = sys.stdin.read()
    except OSError as exc:
        print(f"ERROR: {exc}")
        return 1
    try:
        for line in _numbered_lines(text):
            print(line)
    except LexError as exc:
        print(f"ERROR: {exc.char or exc}")
        return 1
    print("end")
    return 0


if __name__ == "__main__":
    sys.exit(main())