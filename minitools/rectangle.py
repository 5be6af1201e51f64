"""Axis-aligned rectangles with an interactive command loop."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

MENU = (
    "Вывести координаты прямоугольников: see\n"
    "Переместить прямоугольник на плоскости: move\n"
    "Изменить размер прямоугольника: change\n"
    "Построить наименьший прямоугольник, содержащий 2 заданных: union\n"
    "Построить прямоугольник, являющийся пересечением: cross\n"
    "------------------------------------------------------------------"
)


@dataclass
class Rectangle:
    """A rectangle given by two corner points."""

    x1: int
    y1: int
    x2: int
    y2: int

    def move(self, dx: int, dy: int) -> None:
        """Shift both corners."""
        self.x1 += dx
        self.x2 += dx
        self.y1 += dy
        self.y2 += dy

    def resize(self, dw: int, dh: int) -> None:
        """Move the second corner, changing width and height."""
        self.x2 += dw
        self.y2 += dh

    def union(self, other: Rectangle) -> Rectangle:
        """Smallest rectangle holding both rectangles."""
        xs = (self.x1, self.x2, other.x1, other.x2)
        ys = (self.y1, self.y2, other.y1, other.y2)
        return Rectangle(min(xs), min(ys), max(xs), max(ys))

    def cross(self, other: Rectangle) -> Rectangle:
        """Rectangle spanned by the inner coordinates of both rectangles."""
        x_far, x_near = _inner_pair((self.x1, self.x2, other.x1, other.x2))
        y_far, y_near = _inner_pair((self.y1, self.y2, other.y1, other.y2))
        return Rectangle(x_near, y_near, x_far, y_far)

    def __str__(self) -> str:
        return (
            f"1-ая координата: ({self.x1},{self.y1}); "
            f"2-ая координата: ({self.x2},{self.y2})"
        )


def _inner_pair(values: Sequence[int]) -> tuple[int, int]:
    """The last two distinct values lying strictly between the extremes."""
    low, high = min(values), max(values)
    inner = [v for v in values if v not in (low, high)]
    last = inner[-1] if inner else 0
    rest = [v for v in inner if v != last]
    return last, (rest[-1] if rest else 0)


def _words(stream) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _read_ints(words: Iterator[str], count: int) -> list[int]:
    values = []
    for _ in range(count):
        word = next(words, None)
        if word is None:
            raise ValueError("unexpected end of input")
        values.append(int(word))
    return values


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interactive rectangle session on standard input."""
    words = _words(sys.stdin)
    print(MENU)
    try:
        print("Введите координаты 1-го прямоугольника: ", end="")
        first = Rectangle(*_read_ints(words, 4))
        print("Введите координаты 2-го прямоугольника: ", end="")
        second = Rectangle(*_read_ints(words, 4))
        print(first)
        print(second)
        rects = {"1": first, "2": second}
        for command in words:
            if command == "see":
                print(first)
                print(second)
            elif command in ("move1", "move2"):
                print("Введите расстояния по x и y:", end="")
                rects[command[-1]].move(*_read_ints(words, 2))
            elif command in ("change1", "change2"):
                print("Введите длину и ширину:", end="")
                rects[command[-1]].resize(*_read_ints(words, 2))
            elif command == "union":
                print(first.union(second))
            elif command == "cross":
                print(first.cross(second))
            elif command == "end":
                break
            else:
                print("ERROR")
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())