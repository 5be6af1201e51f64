"""Recursive-descent syntax check of programs in the small teaching language."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from minitools.lang.lexer import IdentTable, Lex, LexError, LexType, Scanner

_DECLARED_TYPES = frozenset({LexType.INTEGER, LexType.STRING, LexType.REAL})
_CONSTANTS = frozenset({LexType.STR_CONST, LexType.NUMB_CONST})
_RELATIONS = frozenset({
    LexType.LEQ, LexType.GEQ, LexType.LQPAREN,
    LexType.RQPAREN, LexType.NOTEQ, LexType.TIMES_EQ,
})
_ADDITIVE = frozenset({
    LexType.PLUS, LexType.MINUS, LexType.OR, LexType.STAR, LexType.SLASH,
})
_MULTIPLICATIVE = frozenset({LexType.STAR, LexType.SLASH, LexType.AND})
_OPERANDS = frozenset({LexType.ID, LexType.NUMB_CONST, LexType.STR_CONST})

DEFAULT_SOURCE = "1.txt"


class UnexpectedLexeme(Exception):
    """Raised when a lexeme does not fit the grammar at its place."""

    def __init__(self, lex: Lex) -> None:
        super().__init__(f"Unexpected lexem: {int(lex.type)}")
        self.lex = lex


class SyntaxChecker:
    """Checks that a program text follows the grammar of the language."""

    def __init__(self, text: str) -> None:
        self.idents = IdentTable()
        self._scanner = Scanner(text, self.idents)
        self._lex = Lex(LexType.NULL)

    @property
    def _type(self) -> LexType:
        return self._lex.type

    def _advance(self) -> None:
        self._lex = self._scanner.get_lex()

    def _fail(self) -> UnexpectedLexeme:
        return UnexpectedLexeme(self._lex)

    def _expect(self, kind: LexType) -> None:
        if self._type is not kind:
            raise self._fail()
        self._advance()

    def analyze(self) -> None:
        """Check the whole program; raise on the first error."""
        self._advance()
        self._program()

    def _program(self) -> None:
        self._expect(LexType.PROGRAM)
        self._expect(LexType.BEGIN)
        self._declarations()
        self._operators()
        self._expect(LexType.END)

    def _declarations(self) -> None:
        while self._type in _DECLARED_TYPES:
            self._declaration()

    def _declaration(self) -> None:
        self._advance()
        if self._type is not LexType.ID:
            return
        self._advance()
        if self._type is LexType.EQ:
            self._advance()
            if self._type in (LexType.MINUS, LexType.PLUS):
                self._advance()
            if self._type not in _CONSTANTS:
                raise self._fail()
            self._advance()
            if self._type is LexType.SEMICOLON:
                self._advance()
            elif self._type is LexType.COMMA:
                self._declaration()
            else:
                raise self._fail()
        elif self._type is LexType.SEMICOLON:
            self._advance()
        else:
            raise self._fail()

    def _operators(self) -> None:
        while self._operator():
            pass

    def _operator(self) -> bool:
        done = False
        if self._type is LexType.IF:
            self._advance()
            self._expr()
            self._operator()
            if self._type is LexType.ELSE:
                self._advance()
                self._operator()
            done = True
        kind = self._type
        if kind is LexType.WHILE:
            self._advance()
            self._expr()
            self._operator()
            done = True
        elif kind is LexType.READ:
            self._read()
        elif kind is LexType.ID:
            self._assign()
            self._expect(LexType.SEMICOLON)
            done = True
        elif kind is LexType.WRITE:
            done = self._write() or done
        elif kind is LexType.BEGIN:
            self._advance()
            self._operators()
            self._expect(LexType.END)
        elif kind is LexType.CONTINUE:
            self._advance()
            self._expect(LexType.SEMICOLON)
            done = True
        elif kind is LexType.FOR:
            self._for()
            done = True
        return done

    def _read(self) -> None:
        self._advance()
        if self._type is not LexType.LPAREN:
            return
        self._advance()
        self._expect(LexType.ID)
        self._expect(LexType.RPAREN)
        self._expect(LexType.SEMICOLON)

    def _write(self) -> bool:
        self._advance()
        if self._type is not LexType.LPAREN:
            return False
        self._advance()
        self._expr()
        if self._type is LexType.COMMA:
            self._advance()
            self._expr()
            while self._type is not LexType.RPAREN:
                self._advance()
                self._expr()
        if self._type is not LexType.RPAREN:
            return False
        self._advance()
        self._expect(LexType.SEMICOLON)
        return True

    def _for(self) -> None:
        self._advance()
        self._expect(LexType.LPAREN)
        self._assign()
        self._expect(LexType.SEMICOLON)
        self._expr()
        self._expect(LexType.SEMICOLON)
        self._assign()
        self._expect(LexType.RPAREN)
        self._operator()

    def _assign(self) -> None:
        if self._type is not LexType.ID:
            return
        self._advance()
        if self._type is LexType.EQ:
            self._advance()
            self._ex1()
        elif self._type in (LexType.DMINUS, LexType.DPLUS):
            self._advance()
        else:
            raise self._fail()

    def _expr(self) -> None:
        self._ex1()
        if self._type in _RELATIONS:
            self._advance()
            self._ex1()

    def _ex1(self) -> None:
        self._term()
        while self._type in _ADDITIVE:
            self._advance()
            self._term()

    def _term(self) -> None:
        self._factor()
        while self._type in _MULTIPLICATIVE:
            self._advance()
            self._factor()

    def _factor(self) -> None:
        if self._type in _OPERANDS:
            self._advance()
        elif self._type is LexType.NOT:
            self._advance()
            self._factor()
        elif self._type is LexType.LPAREN:
            self._advance()
            self._expr()
            self._expect(LexType.RPAREN)
        else:
            raise self._fail()


def check(text: str) -> IdentTable:
    """Check ``text`` and return the identifiers it uses.

    Raises ``UnexpectedLexeme`` or ``LexError`` on the first error.
    """
    checker = SyntaxChecker(text)
    checker.analyze()
    return checker.idents


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Check the program in the named file, ``1.txt`` by default."""
    args = list(sys.argv[1:] if argv is None else argv)
    path = args[0] if args else DEFAULT_SOURCE
    try:
        with open(path, encoding="utf-8") as source:
            text = source.read()
    except OSError as exc:
        print(f"Error{exc}")
        return 1
    try:
        check(text)
    except LexError as exc:
        print(f"Error{exc.char or exc}")
        return 1
    except UnexpectedLexeme as exc:
        print(exc)
        return 1
    print("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())