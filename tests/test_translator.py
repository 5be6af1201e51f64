import pytest

from minitools.lang.lexer import LexError, LexType
from minitools.lang.poliz import PolizItem, PolizKind
from minitools.lang.syntax import UnexpectedLexeme
from minitools.lang.translator import SemanticError, Translator, main, translate


def _check_jumps(poliz):
    assert all(item.kind is not PolizKind.BLANK for item in poliz)
    for index, item in enumerate(poliz):
        if item.kind in (PolizKind.GO, PolizKind.FALSE_GO):
            assert poliz[index - 1].kind is PolizKind.LABEL
        if item.kind is PolizKind.LABEL:
            assert 0 <= item.value <= len(poliz)


def test_declaration_and_assignment():
    poliz = translate("program { int a = 5; a = a + 1; }")
    assert poliz == [
        PolizItem.address(0),
        PolizItem(LexType.NUMB_CONST, 5),
        PolizItem.operation(LexType.EQ),
        PolizItem.address(0),
        PolizItem.ident(0),
        PolizItem(LexType.NUMB_CONST, 1),
        PolizItem.operation(LexType.PLUS),
        PolizItem.operation(LexType.EQ),
    ]


def test_read_statement():
    poliz = translate("program { int a; read(a); }")
    assert poliz == [PolizItem.address(0), PolizItem.operation(LexType.READ)]


def test_declared_types_recorded():
    translator = Translator('program { int a; real b = 1.5; string s = "x"; }')
    translator.analyze()
    assert [ident.name for ident in translator.idents] == ["a", "b", "s"]
    assert translator.idents[0].type is LexType.INTEGER
    assert translator.idents[1].type is LexType.REAL
    assert translator.idents[2].type is LexType.STRING


def test_while_loop_structure():
    poliz = translate("program { int i = 0; while i < 3 i++; }")
    _check_jumps(poliz)
    fgo = next(i for i, item in enumerate(poliz) if item.kind is PolizKind.FALSE_GO)
    assert poliz[fgo - 1] == PolizItem.label(len(poliz))
    assert poliz[-1] == PolizItem.go()
    start = poliz[-2].value
    assert start < fgo
    assert poliz[start] == PolizItem.ident(0)
    assert PolizItem.operation(LexType.DPLUS) in poliz


def test_if_else_structure():
    poliz = translate("program { int a = 1; if a a = 2; else a = 3; }")
    _check_jumps(poliz)
    fgo = next(i for i, item in enumerate(poliz) if item.kind is PolizKind.FALSE_GO)
    go = next(i for i, item in enumerate(poliz) if item.kind is PolizKind.GO)
    assert fgo < go
    assert poliz[fgo - 1] == PolizItem.label(go + 1)
    assert poliz[go - 1] == PolizItem.label(len(poliz))


def test_if_without_else_jumps_past_branch():
    poliz = translate("program { int a = 1; if a a = 2; }")
    _check_jumps(poliz)
    fgo = next(i for i, item in enumerate(poliz) if item.kind is PolizKind.FALSE_GO)
    assert poliz[fgo - 1] == PolizItem.label(len(poliz))


def test_for_loop_structure():
    poliz = translate("program { int i; for (i = 0; i < 2; i++) write(i); }")
    _check_jumps(poliz)
    gos = [i for i, item in enumerate(poliz) if item.kind is PolizKind.GO]
    assert len(gos) == 3
    fgo = next(i for i, item in enumerate(poliz) if item.kind is PolizKind.FALSE_GO)
    assert poliz[fgo - 1] == PolizItem.label(len(poliz))
    body = poliz[gos[0] - 1].value
    assert poliz[body] == PolizItem.ident(0)
    assert poliz[body + 1] == PolizItem.operation(LexType.WRITE)
    step = poliz[-2].value
    assert poliz[step + 1] == PolizItem.operation(LexType.DPLUS)


def test_continue_jumps_to_loop_start():
    poliz = translate("program { int i = 0; while i < 3 { continue; } }")
    _check_jumps(poliz)
    gos = [i for i, item in enumerate(poliz) if item.kind is PolizKind.GO]
    assert len(gos) == 2
    assert poliz[gos[0] - 1] == poliz[gos[1] - 1]


def test_mixed_numeric_arithmetic_allowed():
    poliz = translate("program { int a = 1; real r = 1.5; a = a + r; }")
    assert poliz[-2:] == [
        PolizItem.operation(LexType.PLUS),
        PolizItem.operation(LexType.EQ),
    ]


def test_undeclared_identifier():
    with pytest.raises(SemanticError, match="not declared"):
        translate("program { a = 1; }")


def test_declared_twice():
    with pytest.raises(SemanticError, match="twice"):
        translate("program { int a; int a; }")


def test_initializer_of_wrong_type():
    with pytest.raises(SemanticError, match="error types ="):
        translate("program { real x = 5; }")


def test_not_operator_rejected():
    with pytest.raises(SemanticError, match="error types not"):
        translate("program { int a = 1; a = not a; }")


def test_string_plus_integer_rejected():
    with pytest.raises(SemanticError) as info:
        translate('program { int a = 1; string s = "x"; a = a + s; }')
    assert str(info.value) == "error types + | - | * | /"


def test_continue_outside_loop():
    with pytest.raises(SemanticError):
        translate("program { continue; }")


def test_type_stack_overflow():
    text = "program { int a; " + "a = 1; " * 1000 + "}"
    with pytest.raises(SemanticError, match="Full stack"):
        translate(text)


def test_string_in_expression_is_unexpected():
    with pytest.raises(UnexpectedLexeme) as info:
        translate('program { write("x"); }')
    assert info.value.lex.type is LexType.STR_CONST


def test_list_declaration_is_unexpected():
    with pytest.raises(UnexpectedLexeme) as info:
        translate("program { int a, b; }")
    assert info.value.lex.type is LexType.COMMA


def test_missing_program_keyword():
    with pytest.raises(UnexpectedLexeme) as info:
        translate("{ }")
    assert info.value.lex.type is LexType.BEGIN


def test_lexical_error_propagates():
    with pytest.raises(LexError):
        translate("program { int a = 5x; }")


def test_main_prints_code_and_ok(tmp_path, capsys):
    text = "program { int a = 5; a = a + 1; }"
    path = tmp_path / "prog.txt"
    path.write_text(text, encoding="utf-8")
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[-1] == "OK"
    assert len(lines) == len(translate(text)) + 1
    assert lines[0].startswith("0: ")


def test_main_reports_semantic_error(tmp_path, capsys):
    path = tmp_path / "prog.txt"
    path.write_text("program { a = 1; }", encoding="utf-8")
    assert main([str(path)]) == 1
    assert capsys.readouterr().out.strip() == "not declared"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.txt")]) == 1
    assert capsys.readouterr().out.startswith("Error")