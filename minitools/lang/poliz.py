"""Items of reverse Polish (POLIZ) code and their printed form."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from minitools.lang.lexer import Lex, LexType

_CONSTANTS = frozenset({LexType.NUMB_CONST, LexType.STR_CONST, LexType.REAL_CONST})


class PolizKind(Enum):
    """What role an item plays in reverse Polish code."""

    OPERATION = "operation"
    IDENT = "ident"
    ADDRESS = "address"
    CONSTANT = "constant"
    LABEL = "label"
    GO = "go"
    FALSE_GO = "false_go"
    BLANK = "blank"


_KINDS = {
    LexType.ID: PolizKind.IDENT,
    LexType.POLIZ_ADDRESS: PolizKind.ADDRESS,
    LexType.POLIZ_LABEL: PolizKind.LABEL,
    LexType.POLIZ_GO: PolizKind.GO,
    LexType.POLIZ_FGO: PolizKind.FALSE_GO,
    LexType.NULL: PolizKind.BLANK,
}


@dataclass(frozen=True)
class PolizItem:
    """One element of reverse Polish code."""

    type: LexType
    value: int = 0
    real: float = 0.0
    text: str = ""

    @classmethod
    def from_lex(cls, lex: Lex) -> PolizItem:
        """Item carrying a lexeme as it came from the scanner."""
        return cls(lex.type, lex.value, lex.real, lex.text)

    @classmethod
    def operation(cls, kind: LexType) -> PolizItem:
        return cls(kind)

    @classmethod
    def ident(cls, index: int) -> PolizItem:
        """Value of the identifier with this table index."""
        return cls(LexType.ID, index)

    @classmethod
    def address(cls, index: int) -> PolizItem:
        """Address of the identifier with this table index."""
        return cls(LexType.POLIZ_ADDRESS, index)

    @classmethod
    def label(cls, target: int) -> PolizItem:
        """Position in the code that a jump goes to."""
        return cls(LexType.POLIZ_LABEL, target)

    @classmethod
    def go(cls) -> PolizItem:
        """Unconditional jump to the preceding label."""
        return cls(LexType.POLIZ_GO)

    @classmethod
    def false_go(cls) -> PolizItem:
        """Jump to the preceding label when the condition is false."""
        return cls(LexType.POLIZ_FGO)

    @classmethod
    def blank(cls) -> PolizItem:
        """Placeholder to be filled with a label later."""
        return cls(LexType.NULL)

    @property
    def kind(self) -> PolizKind:
        if self.type in _CONSTANTS:
            return PolizKind.CONSTANT
        return _KINDS.get(self.type, PolizKind.OPERATION)

    def __str__(self) -> str:
        kind = self.type
        if kind in (LexType.ID, LexType.POLIZ_ADDRESS, LexType.NUMB_CONST):
            shown = str(self.value)
        elif kind is LexType.STR_CONST:
            shown = self.text
        elif kind is LexType.REAL_CONST:
            shown = format(self.real, "g")
        elif kind is LexType.POLIZ_GO:
            shown = "!"
        elif kind is LexType.POLIZ_FGO:
            shown = "!F"
        elif kind is LexType.POLIZ_LABEL:
            shown = f"L{self.value}"
        else:
            shown = str(int(kind))
        return f"{shown};{int(kind)}"


def format_poliz(poliz: Iterable[PolizItem]) -> str:
    """Render the code one numbered item per line."""
    return "".join(f"{index}: {item}\n" for index, item in enumerate(poliz))