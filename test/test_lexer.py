"""Test the table-driven lexer"""

import pytest

from wordlang.word_parser.lexer import Lexer, Token, TokenKind, token_name, tokenize


def kinds(text):
    return [t.kind for t in tokenize(text)]


def texts(text):
    return [t.text for t in tokenize(text)]


@pytest.mark.parametrize(
    "source, kind",
    [
        ("List", TokenKind.TYPE),
        ("print", TokenKind.PRINT),
        ("foreach", TokenKind.FOREACH),
        ("load", TokenKind.LOAD),
        ("filter", TokenKind.FILTER),
        ("filter_out", TokenKind.FILTER_OUT),
        ("in", TokenKind.IN),
        ("x", TokenKind.ID),
        ("_x9", TokenKind.ID),
        ("Lists", TokenKind.ID),
        ("printer", TokenKind.ID),
        ("int", TokenKind.ID),
        ("filter_outs", TokenKind.ID),
        ("filters", TokenKind.ID),
        ('"hello world"', TokenKind.STRING),
    ],
)
def test_single_token(source, kind):
    tokens = tokenize(source)
    assert len(tokens) == 1
    assert tokens[0].kind == kind
    assert tokens[0].text == source


def test_punctuation_is_its_own_kind():
    assert kinds("{}();=+-|,") == [ord(c) for c in "{}();=+-|,"]


def test_statement():
    source = 'List a = "cat" + b | filter("x");'
    assert texts(source) == [
        "List", "a", "=", '"cat"', "+", "b", "|", "filter", "(", '"x"', ")", ";",
    ]


def test_comments_and_whitespace_are_dropped():
    source = "// a comment\nprint // another\n\t(x);\n"
    assert texts(source) == ["print", "(", "x", ")", ";"]


def test_comment_at_end_of_input():
    assert texts("x // trailing") == ["x"]


def test_string_does_not_span_lines():
    # the quote falls back to a single-character token
    tokens = tokenize('"abc\ndef"')
    assert tokens[0].kind == ord('"')
    assert tokens[1].text == "abc"


def test_string_with_escaped_quote():
    tokens = tokenize(r'"a\"b" x')
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].text == r'"a\"b"'


def test_line_numbers():
    tokens = tokenize('List a;\n\n// comment\nprint(a);\n{\n}')
    assert [(t.text, t.line) for t in tokens] == [
        ("List", 1), ("a", 1), (";", 1),
        ("print", 4), ("(", 4), ("a", 4), (")", 4), (";", 4),
        ("{", 5), ("}", 6),
    ]


def test_unknown_characters_fall_back():
    tokens = tokenize("a @ é")
    assert [t.kind for t in tokens] == [TokenKind.ID, ord("@"), TokenKind.ERROR]
    assert tokens[-1].text == "é"


@pytest.mark.parametrize("char", ["ö", "ø", "ú", "ÿ", "é", "λ"])
def test_non_ascii_never_looks_like_a_named_kind(char):
    tokens = tokenize(f"List {char};")
    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.TYPE, "List"),
        (TokenKind.ERROR, char),
        (ord(";"), ";"),
    ]


def test_non_ascii_inside_a_word():
    tokens = tokenize("printö")
    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.PRINT, "print"),
        (TokenKind.ERROR, "ö"),
    ]


def test_next_token_is_incremental():
    lexer = Lexer()
    text = "List x;"
    assert lexer.next_token(text) == Token(TokenKind.TYPE, "List", 1)
    assert lexer.next_token(text) == Token(TokenKind.WHITESPACE, " ", 1)
    assert lexer.next_token(text) == Token(TokenKind.ID, "x", 1)
    assert lexer.next_token(text) == Token(ord(";"), ";", 1)
    assert lexer.next_token(text).kind == TokenKind.EOF
    assert lexer.next_token(text).kind == TokenKind.EOF


def test_empty_input():
    assert tokenize("") == []
    assert tokenize("  \n // nothing\n") == []


@pytest.mark.parametrize(
    "kind, name",
    [
        (TokenKind.EOF, "end of input"),
        (TokenKind.ERROR, "unrecognised character"),
        (TokenKind.ID, "ID"),
        (TokenKind.FILTER_OUT, "FILTER_OUT"),
        (ord(";"), "';'"),
        (ord("\t"), "'\\t'"),
    ],
)
def test_token_name(kind, name):
    assert token_name(kind) == name
