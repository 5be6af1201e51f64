"""Type checking and translation of programs into reverse Polish code."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from minitools.lang.lexer import IdentTable, Lex, LexError, LexType, Scanner
from minitools.lang.poliz import PolizItem, format_poliz
from minitools.lang.syntax import UnexpectedLexeme

DEFAULT_SOURCE = "1.txt"
TYPE_STACK_SIZE = 1000

_DECLARED_TYPES = frozenset({LexType.INTEGER, LexType.STRING, LexType.REAL})
_RELATIONS = frozenset({
    LexType.TIMES_EQ, LexType.NOTEQ, LexType.LEQ,
    LexType.GEQ, LexType.LQPAREN, LexType.RQPAREN,
})
_ARITHMETIC = frozenset({LexType.PLUS, LexType.MINUS, LexType.STAR, LexType.SLASH})
_LOGICAL = frozenset({LexType.AND, LexType.OR})
_ADDITIVE = frozenset({
    LexType.PLUS, LexType.MINUS, LexType.OR, LexType.STAR, LexType.SLASH,
})
_MULTIPLICATIVE = frozenset({LexType.STAR, LexType.SLASH, LexType.AND})
_CONST_TYPES = {
    LexType.STR_CONST: LexType.STRING,
    LexType.NUMB_CONST: LexType.INTEGER,
    LexType.REAL_CONST: LexType.REAL,
}
_NUMERIC_PAIR = frozenset({LexType.INTEGER, LexType.REAL})


class SemanticError(Exception):
    """Raised on a declaration or type error in the program."""


class _TypeStack:
    def __init__(self, capacity: int) -> None:
        self._items: list[LexType] = []
        self._capacity = capacity

    def push(self, item: LexType) -> None:
        if len(self._items) >= self._capacity:
            raise SemanticError("Full stack")
        self._items.append(item)

    def pop(self) -> LexType:
        if not self._items:
            raise SemanticError("Empty stack")
        return self._items.pop()


class Translator:
    """Checks a program and builds its reverse Polish code."""

    def __init__(self, text: str) -> None:
        self.idents = IdentTable()
        self.poliz: list[PolizItem] = []
        self._scanner = Scanner(text, self.idents)
        self._lex = Lex(LexType.NULL)
        self._types = _TypeStack(TYPE_STACK_SIZE)
        self._continue_targets: list[int] = []

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

    def _emit(self, item: PolizItem) -> None:
        self.poliz.append(item)

    def _reserve(self) -> int:
        self.poliz.append(PolizItem.blank())
        return len(self.poliz) - 1

    def _patch(self, place: int, target: int) -> None:
        self.poliz[place] = PolizItem.label(target)

    def analyze(self) -> list[PolizItem]:
        """Translate the whole program and return its code."""
        self._advance()
        self._program()
        return self.poliz

    def _program(self) -> None:
        self._expect(LexType.PROGRAM)
        self._expect(LexType.BEGIN)
        self._declarations()
        self._operators()
        self._expect(LexType.END)

    # declarations

    def _declarations(self) -> None:
        while self._type in _DECLARED_TYPES:
            self._declaration(self._type)
            self._expect(LexType.SEMICOLON)

    def _declaration(self, declared: LexType) -> None:
        self._advance()
        if self._type is not LexType.ID:
            raise self._fail()
        index = self._lex.value
        ident = self.idents[index]
        if ident.declared:
            raise SemanticError("twice")
        ident.type = declared
        self._types.push(declared)
        self._emit(PolizItem.address(index))
        self._advance()
        if self._type is LexType.EQ:
            self._advance()
            if self._type is LexType.PLUS:
                self._advance()
            if self._type is LexType.MINUS:
                self._advance()
            self._initializer()
            if self._type is LexType.COMMA:
                self._declaration(declared)
        else:
            self.poliz.pop()

    def _initializer(self) -> None:
        const_type = _CONST_TYPES.get(self._type)
        if const_type is None:
            return
        self._types.push(const_type)
        self._emit(PolizItem.from_lex(self._lex))
        self._check_assignment()
        self._advance()

    # type checks

    def _check_ident(self) -> None:
        ident = self.idents[self._lex.value]
        if not ident.declared:
            raise SemanticError("not declared")
        self._types.push(ident.type)

    def _check_assignment(self) -> None:
        if self._types.pop() != self._types.pop():
            raise SemanticError("error types =")
        self._emit(PolizItem.operation(LexType.EQ))

    def _check_not(self) -> None:
        if self._types.pop() != LexType.NUMB_CONST:
            raise SemanticError("error types not")
        self._types.push(LexType.NUMB_CONST)
        self._emit(PolizItem.operation(LexType.NOT))

    def _check_operation(self) -> None:
        right = self._types.pop()
        op = self._types.pop()
        left = self._types.pop()
        mixed = right != left and {right, left} == _NUMERIC_PAIR
        if op in _ARITHMETIC:
            if right == left:
                if right in (LexType.INTEGER, LexType.REAL, LexType.STRING):
                    self._types.push(right)
            elif mixed:
                self._types.push(right)
            else:
                raise SemanticError("error types + | - | * | /")
        elif op in _LOGICAL:
            if right == left == LexType.INTEGER:
                self._types.push(LexType.INTEGER)
            else:
                raise SemanticError("error types and|or")
        elif op in _RELATIONS:
            if right == left:
                if right in _NUMERIC_PAIR:
                    self._types.push(right)
            elif mixed:
                self._types.push(right)
            else:
                raise SemanticError("error types == | != | < | > | <= | >=")
        self._emit(PolizItem.operation(op))

    # operators

    def _operators(self) -> None:
        while self._operator():
            pass

    def _operator(self) -> bool:
        done = False
        if self._type is LexType.IF:
            self._if()
            done = True
        kind = self._type
        if kind is LexType.WHILE:
            self._while()
            done = True
        elif kind is LexType.FOR:
            self._for()
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
            self._continue()
            done = True
        return done

    def _if(self) -> None:
        self._advance()
        self._expr()
        false_jump = self._reserve()
        self._emit(PolizItem.false_go())
        self._operator()
        after_then = len(self.poliz)
        self._patch(false_jump, len(self.poliz))
        if self._type is LexType.ELSE:
            self._reserve()
            self._emit(PolizItem.go())
            self._patch(false_jump, len(self.poliz))
            self._advance()
            self._operator()
            self._patch(after_then, len(self.poliz))

    def _while(self) -> None:
        start = len(self.poliz)
        self._advance()
        self._expr()
        exit_jump = self._reserve()
        self._emit(PolizItem.false_go())
        self._continue_targets.append(start)
        try:
            self._operator()
        finally:
            self._continue_targets.pop()
        self._emit(PolizItem.label(start))
        self._emit(PolizItem.go())
        self._patch(exit_jump, len(self.poliz))

    def _for(self) -> None:
        self._advance()
        self._expect(LexType.LPAREN)
        self._assign()
        if self._type is not LexType.SEMICOLON:
            raise self._fail()
        condition = len(self.poliz)
        self._advance()
        self._expr()
        if self._type is not LexType.SEMICOLON:
            raise self._fail()
        exit_jump = self._reserve()
        self._emit(PolizItem.false_go())
        self._advance()
        body_jump = self._reserve()
        self._emit(PolizItem.go())
        step = len(self.poliz)
        self._assign()
        self._emit(PolizItem.label(condition))
        self._emit(PolizItem.go())
        self._expect(LexType.RPAREN)
        self._patch(body_jump, len(self.poliz))
        self._continue_targets.append(step)
        try:
            self._operator()
        finally:
            self._continue_targets.pop()
        self._emit(PolizItem.label(step))
        self._emit(PolizItem.go())
        self._patch(exit_jump, len(self.poliz))

    def _read(self) -> None:
        self._advance()
        if self._type is not LexType.LPAREN:
            return
        self._advance()
        if self._type is not LexType.ID:
            raise self._fail()
        self._check_ident()
        self._emit(PolizItem.address(self._lex.value))
        self._advance()
        self._expect(LexType.RPAREN)
        self._emit(PolizItem.operation(LexType.READ))
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
        self._emit(PolizItem.operation(LexType.WRITE))
        self._expect(LexType.SEMICOLON)
        return True

    def _continue(self) -> None:
        if not self._continue_targets:
            raise SemanticError("continue outside a loop")
        self._emit(PolizItem.label(self._continue_targets[-1]))
        self._emit(PolizItem.go())
        self._advance()
        self._expect(LexType.SEMICOLON)

    def _assign(self) -> None:
        if self._type is not LexType.ID:
            return
        self._check_ident()
        index = self._lex.value
        self._advance()
        if self._type is LexType.EQ:
            self._emit(PolizItem.address(index))
            self._advance()
            self._ex1()
            self._emit(PolizItem.operation(LexType.EQ))
        elif self._type in (LexType.DMINUS, LexType.DPLUS):
            self._emit(PolizItem.ident(index))
            self._emit(PolizItem.operation(self._type))
            self._advance()
        else:
            raise self._fail()

    # expressions

    def _expr(self) -> None:
        self._ex1()
        if self._type in _RELATIONS:
            self._types.push(self._type)
            self._advance()
            self._ex1()
            self._check_operation()

    def _ex1(self) -> None:
        self._term()
        while self._type in _ADDITIVE:
            self._types.push(self._type)
            self._advance()
            self._term()
            self._check_operation()

    def _term(self) -> None:
        self._factor()
        while self._type in _MULTIPLICATIVE:
            self._types.push(self._type)
            self._advance()
            self._factor()

    def _factor(self) -> None:
        kind = self._type
        if kind is LexType.ID:
            self._check_ident()
            self._emit(PolizItem.ident(self._lex.value))
            self._advance()
        elif kind in (LexType.NUMB_CONST, LexType.REAL_CONST):
            self._types.push(_CONST_TYPES[kind])
            self._emit(PolizItem.from_lex(self._lex))
            self._advance()
        elif kind is LexType.NOT:
            self._advance()
            self._factor()
            self._check_not()
        elif kind is LexType.LPAREN:
            self._advance()
            self._expr()
            self._expect(LexType.RPAREN)
        else:
            raise self._fail()


def translate(text: str) -> list[PolizItem]:
    """Return the reverse Polish code of ``text``.

    Raises ``LexError``, ``UnexpectedLexeme`` or ``SemanticError``.
    """
    return Translator(text).analyze()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Translate the program in the named file, ``1.txt`` by default."""
    args = list(sys.argv[1:] if argv is None else argv)
    path = args[0] if args else DEFAULT_SOURCE
    try:
        with open(path, encoding="utf-8") as source:
            text = source.read()
    except OSError as exc:
        print(f"Error{exc}")
        return 1
    try:
        poliz = translate(text)
    except LexError as exc:
        print(f"Error{exc.char or exc}")
        return 1
    except (UnexpectedLexeme, SemanticError) as exc:
        print(exc)
        return 1
    print(format_poliz(poliz), end="")
    print("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())