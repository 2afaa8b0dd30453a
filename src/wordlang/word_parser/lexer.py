"""Table-driven lexer for WordLang source"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List

from .dfa import ALPHABET_SIZE, SYMBOL_START, SYMBOL_STOP, build_dfa

LOG = logging.getLogger(__name__)


class TokenKind(IntEnum):
    """Named token kinds. Any other kind is the code of a single character."""

    ERROR = -1  # a character outside the ASCII alphabet
    EOF = 0
    COMMENT = 245
    WHITESPACE = 246
    STRING = 247
    ID = 248
    # keywords
    IN = 249
    PRINT = 250
    FOREACH = 251
    FILTER_OUT = 252
    FILTER = 253
    LOAD = 254
    TYPE = 255


TOKEN_PATTERNS = {
    TokenKind.COMMENT: r"//.*",
    TokenKind.WHITESPACE: r"\s",
    TokenKind.STRING: r'"([^"\n]|\\.)*"',
    TokenKind.ID: r"[a-zA-Z_]\w*",
    TokenKind.IN: r"in",
    TokenKind.PRINT: r"print",
    TokenKind.FOREACH: r"foreach",
    TokenKind.FILTER_OUT: r"filter_out",
    TokenKind.FILTER: r"filter",
    TokenKind.LOAD: r"load",
    TokenKind.TYPE: r"List",
}

IGNORED = frozenset({TokenKind.EOF, TokenKind.COMMENT, TokenKind.WHITESPACE})


@dataclass(frozen=True)
class Token:
    kind: int
    text: str
    line: int

    def __str__(self):
        return f"{self.line}: {token_name(self.kind)} {self.text!r}"


def token_name(kind: int) -> str:
    """Human-readable name of a token kind, for error messages"""
    if kind == TokenKind.EOF:
        return "end of input"
    if kind == TokenKind.ERROR:
        return "unrecognised character"
    try:
        return TokenKind(kind).name
    except ValueError:
        pass
    char = chr(kind)
    if char.isprintable() and not char.isspace():
        return f"'{char}'"
    return repr(char)


class Lexer:
    dfa = build_dfa(TOKEN_PATTERNS)

    def __init__(self):
        self.reset()

    def reset(self):
        self.line = 1  # line the next lexeme starts on
        self.pos = 0  # index of the start of the next lexeme

    def next_token(self, text: str) -> Token:
        """Scan the longest token starting at the current position"""
        if self.pos >= len(text):
            return Token(TokenKind.EOF, "", self.line)

        dfa = self.dfa
        start = self.pos
        cur = start
        best_pos = start
        best_kind = 0
        state = 0

        if start == 0 or text[start - 1] == "\n":
            state = dfa.next_state(0, SYMBOL_START)

        while state >= 0 and cur < len(text):
            state = dfa.next_state(state, ord(text[cur]))
            cur += 1
            kind = dfa.stop(state)
            if kind:
                best_pos, best_kind = cur, kind
            # Look ahead for an end of line that can finish the token
            if cur == len(text) or text[cur] == "\n":
                eol_kind = dfa.stop(dfa.next_state(state, SYMBOL_STOP))
                if eol_kind:
                    best_pos, best_kind = cur, eol_kind

        # Nothing matched: the character is a token by itself
        if best_pos == start:
            code = ord(text[start])
            best_kind = code if code < ALPHABET_SIZE else TokenKind.ERROR
            best_pos = start + 1

        lexeme = text[start:best_pos]
        self.pos = best_pos

        line = self.line
        self.line += lexeme.count("\n")
        return Token(best_kind, lexeme, line)

    def tokenize(self, text: str) -> List[Token]:
        """Convert source text into the list of tokens the parser sees"""
        self.reset()
        tokens = []
        while True:
            token = self.next_token(text)
            if token.kind == TokenKind.EOF:
                break
            if token.kind not in IGNORED:
                tokens.append(token)
        LOG.debug("Lexed %d tokens over %d lines", len(tokens), self.line)
        return tokens


def tokenize(text: str) -> List[Token]:
    return Lexer().tokenize(text)
