"""Splitting of shell command lines into words and control operators."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import IO, Iterator, Optional, Sequence

_SPACE = frozenset(" \t\r\v\f\n")
_DOUBLABLE = frozenset("&|>")
_CONTROL_PLAIN = frozenset(";<()&|")
_CONTROL_REDIRECT = frozenset(";<()&|>")

QUOTE_ERROR = "Error:odd number of quotes"


@dataclass
class TokenizedLine:
    """Words of one input line.

    The last word is whatever was being collected at the end of the line,
    so it is empty when the line ends with a space or a control operator.
    ``unbalanced`` is true when a quote is still open at the end of the line.
    """

    words: list[str] = field(default_factory=list)
    unbalanced: bool = False


def _split(line: str, redirect_special: bool, in_quote: bool) -> TokenizedLine:
    control = _CONTROL_REDIRECT if redirect_special else _CONTROL_PLAIN
    words: list[str] = []
    current: list[str] = []
    pending: Optional[str] = None

    def flush() -> None:
        if current:
            words.append("".join(current))
            current.clear()

    for c in line:
        if pending is not None:
            held, pending = pending, None
            if c == held:
                words.append(held + c)
                continue
            words.append(held)
        if c == '"':
            in_quote = not in_quote
        elif c in _SPACE and not in_quote:
            flush()
        elif c in control and not (in_quote and redirect_special):
            flush()
            if c in _DOUBLABLE:
                pending = c
            else:
                words.append(c)
        else:
            current.append(c)
    if pending is not None:
        words.append(pending)
    words.append("".join(current))
    return TokenizedLine(words, in_quote)


def split_line(line: str, redirect_special: bool = True) -> TokenizedLine:
    """Split one line (without its newline) into words.

    With ``redirect_special`` the characters ``>`` and ``>>`` are operators
    and quotes protect control characters; without it ``>`` is an ordinary
    character and control characters split words even inside quotes.
    """
    return _split(line, redirect_special, False)


def read_lines(stream: IO[str], redirect_special: bool = True) -> Iterator[TokenizedLine]:
    """Yield the split lines of ``stream``; an open quote carries to the next line.

    After a final newline, and for empty input, one more empty line follows.
    """
    in_quote = False
    for raw in stream:
        body = raw[:-1] if raw.endswith("\n") else raw
        result = _split(body, redirect_special, in_quote)
        in_quote = result.unbalanced
        yield result
        if not raw.endswith("\n"):
            return
    yield _split("", redirect_special, in_quote)


def _open_input(args: Sequence[str]) -> Optional[IO[str]]:
    stream: IO[str] = sys.stdin
    followers = list(args[1:]) + [None]
    for flag, path in zip(args, followers):
        if flag != "-i":
            continue
        if stream is not sys.stdin:
            stream.close()
        if path is None:
            return None
        try:
            stream = open(path, encoding="utf-8")
        except OSError:
            return None
    return stream


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print every word of every input line, one per line."""
    args = list(sys.argv[1:] if argv is None else argv)
    stream = _open_input(args)
    if stream is None:
        sys.stderr.write("Error:file doesn't open")
        return 0
    try:
        for line in read_lines(stream, redirect_special=False):
            for word in line.words:
                print(word)
            if line.unbalanced:
                print(QUOTE_ERROR, file=sys.stderr)
    finally:
        if stream is not sys.stdin:
            stream.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())