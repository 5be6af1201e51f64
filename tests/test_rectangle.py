import io
import sys

import pytest

from minitools.rectangle import Rectangle, main


def test_str_format():
    assert str(Rectangle(1, 2, 3, 4)) == "1-ая координата: (1,2); 2-ая координата: (3,4)"


def test_move_shifts_both_corners():
    r = Rectangle(1, 2, 3, 4)
    r.move(10, 20)
    assert r == Rectangle(11, 22, 13, 24)


def test_move_keeps_size():
    r = Rectangle(1, 2, 5, 9)
    r.move(-3, 7)
    assert (r.x2 - r.x1, r.y2 - r.y1) == (4, 7)


def test_resize_moves_second_corner():
    r = Rectangle(1, 2, 3, 4)
    r.resize(5, 6)
    assert r == Rectangle(1, 2, 8, 10)


def test_union_covers_both():
    a = Rectangle(0, 0, 4, 4)
    b = Rectangle(2, 2, 6, 6)
    assert a.union(b) == Rectangle(0, 0, 6, 6)


@pytest.mark.parametrize(
    "a, b",
    [
        (Rectangle(0, 0, 4, 4), Rectangle(2, 2, 6, 6)),
        (Rectangle(-5, 3, 1, 8), Rectangle(2, -1, 7, 0)),
    ],
)
def test_union_is_symmetric_and_contains(a, b):
    u = a.union(b)
    assert u == b.union(a)
    for r in (a, b):
        assert u.x1 <= min(r.x1, r.x2) and u.x2 >= max(r.x1, r.x2)
        assert u.y1 <= min(r.y1, r.y2) and u.y2 >= max(r.y1, r.y2)


def test_union_does_not_change_operands():
    a = Rectangle(0, 0, 4, 4)
    b = Rectangle(2, 2, 6, 6)
    a.union(b)
    assert a == Rectangle(0, 0, 4, 4)
    assert b == Rectangle(2, 2, 6, 6)


def test_cross_of_overlapping():
    a = Rectangle(0, 0, 4, 4)
    b = Rectangle(2, 2, 6, 6)
    assert a.cross(b) == Rectangle(4, 4, 2, 2)


def test_cross_uses_inner_coordinates():
    a = Rectangle(0, 1, 10, 11)
    b = Rectangle(3, 4, 7, 8)
    c = a.cross(b)
    assert {c.x1, c.x2} == {3, 7}
    assert {c.y1, c.y2} == {4, 8}


def test_cross_of_identical_has_no_inner_values():
    a = Rectangle(0, 0, 1, 1)
    assert a.cross(Rectangle(0, 0, 1, 1)) == Rectangle(0, 0, 0, 0)


def run_session(monkeypatch, capsys, text):
    monkeypatch.setattr(sys, "stdin", io.StringIO(text))
    code = main([])
    return code, capsys.readouterr()


def test_main_session(monkeypatch, capsys):
    code, captured = run_session(
        monkeypatch, capsys, "0 0 4 4\n2 2 6 6\nmove1 1 1\nsee\nunion\nbogus\nend\n"
    )
    assert code == 0
    assert str(Rectangle(1, 1, 5, 5)) in captured.out
    assert str(Rectangle(1, 1, 6, 6)) in captured.out
    assert "ERROR" in captured.out


def test_main_change(monkeypatch, capsys):
    code, captured = run_session(monkeypatch, capsys, "0 0 1 1 5 5 6 6 change2 2 3 see end")
    assert code == 0
    assert str(Rectangle(5, 5, 8, 9)) in captured.out


def test_main_bad_number(monkeypatch, capsys):
    code, captured = run_session(monkeypatch, capsys, "0 0 x 1\n")
    assert code == 1
    assert "ERROR" in captured.err


def test_main_short_input(monkeypatch, capsys):
    code, _ = run_session(monkeypatch, capsys, "0 0 1\n")
    assert code == 1