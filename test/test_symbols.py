"""Test parse-time scopes"""

import pytest

from wordlang.exceptions import InternalError, WordLangSyntaxError
from wordlang.word_parser.symbols import SymbolTable


def test_slots_are_dense():
    table = SymbolTable()
    assert table.declare(1, "a") == 0
    assert table.declare(2, "b") == 1
    table.push_scope()
    assert table.declare(3, "c") == 2
    table.pop_scope()
    assert table.declare(4, "d") == 3
    assert table.num_slots == 4
    assert [s.name for s in table.slots] == ["a", "b", "c", "d"]


def test_redeclaration():
    table = SymbolTable()
    table.declare(1, "a")
    with pytest.raises(WordLangSyntaxError) as exc:
        table.declare(7, "a")
    assert exc.value.line == 7
    assert "Redeclaration of variable 'a'" in exc.value.msg


def test_shadowing():
    table = SymbolTable()
    outer = table.declare(1, "a")
    table.push_scope()
    assert table.lookup("a") == outer
    inner = table.declare(2, "a")
    assert inner != outer
    assert table.lookup("a") == inner
    table.pop_scope()
    assert table.lookup("a") == outer


def test_names_go_out_of_scope():
    table = SymbolTable()
    table.push_scope()
    table.declare(1, "tmp")
    table.pop_scope()
    assert table.lookup("tmp") is None
    assert not table.has_var("tmp")
    # ...but the slot is kept
    assert table.num_slots == 1


def test_cannot_pop_outermost():
    table = SymbolTable()
    with pytest.raises(InternalError):
        table.pop_scope()
