"""Recursive-descent parser for WordLang.

Grammar (loosest binding first):

```
program    := statement*
statement  := declaration | printStmt | block | ';' | expression ';'
declaration:= 'List' IDENT ( '=' expression )? ';'
printStmt  := 'print' '(' expression (',' expression)* ')' ';'
block      := '{' statement* '}'
expression := assignExpr
assignExpr := addExpr ( '=' assignExpr )?
addExpr    := pipeExpr ( ('+'|'-') pipeExpr )*
pipeExpr   := term ( '|' ('filter'|'filter_out') '(' expression ')' )*
term       := IDENT | 'load' '(' expression ')' | STRING | '(' expression ')'
```

Identifiers are resolved to slots as they are parsed, so using a variable
before its declaration is a syntax error.
"""

import logging
import warnings
from ast import literal_eval
from typing import List, Optional

from ..config_classes import Settings
from ..exceptions import WordLangSyntaxError
from . import nodes as n
from .lexer import Token, TokenKind, token_name, tokenize
from .symbols import SymbolTable

LOG = logging.getLogger(__name__)


class WordParser:
    def __init__(self, tokens: List[Token], settings: Settings = None):
        self.tokens = list(tokens)
        self.token_id = 0
        self.settings = settings or Settings()
        self.symbols = SymbolTable()

    ## Token helpers

    def cur_token(self) -> Token:
        if self.token_id < len(self.tokens):
            return self.tokens[self.token_id]
        line = self.tokens[-1].line if self.tokens else 1
        return Token(TokenKind.EOF, "", line)

    def error(self, token: Token, msg: str):
        raise WordLangSyntaxError(msg, token.line)

    def use_token(self, required: Optional[int] = None, err_message="") -> Token:
        token = self.cur_token()
        if required is not None and token.kind != required:
            if not err_message:
                err_message = (
                    f"Expected token type {token_name(required)}, "
                    f"but found {token_name(token.kind)}"
                )
            self.error(token, err_message)
        if token.kind != TokenKind.EOF:
            self.token_id += 1
        return token

    def use_token_if(self, kind: int) -> bool:
        if self.cur_token().kind == kind:
            self.token_id += 1
            return True
        return False

    def make_var_node(self, token: Token) -> n.N_VariableRef:
        slot = self.symbols.lookup(token.text)
        if slot is None:
            self.error(token, f"Unknown variable '{token.text}'.")
        return n.N_VariableRef(token.line, slot, token.text)

    ## Statements

    def parse(self) -> n.Program:
        statements = []
        while self.cur_token().kind != TokenKind.EOF:
            node = self.parse_statement()
            if node is not None:
                statements.append(node)
        LOG.debug(
            "Parsed %d top-level statements, %d slots",
            len(statements),
            self.symbols.num_slots,
        )
        root = n.N_StatementBlock(1, tuple(statements))
        return n.Program(root, tuple(self.symbols.slots))

    def parse_statement(self) -> Optional[n.Node]:
        kind = self.cur_token().kind
        if kind == TokenKind.PRINT:
            return self.parse_print()
        if kind == TokenKind.TYPE:
            return self.parse_declare()
        if kind == TokenKind.FOREACH:
            return self.parse_foreach()
        if kind == ord("{"):
            return self.parse_statement_block()
        if kind == ord(";"):
            self.use_token()
            return None
        node = self.parse_expression()
        self.use_token(ord(";"))
        return node

    def parse_print(self) -> n.N_Print:
        token = self.use_token(TokenKind.PRINT)
        self.use_token(ord("("))
        args = [self.parse_expression()]
        while self.use_token_if(ord(",")):
            args.append(self.parse_expression())
        self.use_token(ord(")"))
        self.use_token(ord(";"))
        return n.N_Print(token.line, tuple(args))

    def parse_declare(self) -> Optional[n.N_Assign]:
        self.use_token(TokenKind.TYPE)
        var_token = self.use_token(TokenKind.ID)
        self.symbols.declare(var_token.line, var_token.text)

        if self.use_token_if(ord(";")):
            return None

        eq_token = self.use_token(ord("="), "Expected ';' or '='.")
        target = self.make_var_node(var_token)
        value = self.parse_expression()
        self.use_token(ord(";"))
        return n.N_Assign(eq_token.line, target, value)

    def parse_foreach(self):
        self.error(self.cur_token(), "'foreach' loops are not supported yet.")

    def parse_statement_block(self) -> n.N_StatementBlock:
        token = self.use_token(ord("{"))
        self.symbols.push_scope()
        statements = []
        while self.cur_token().kind not in (ord("}"), TokenKind.EOF):
            node = self.parse_statement()
            if node is not None:
                statements.append(node)
        self.symbols.pop_scope()
        self.use_token(ord("}"))
        return n.N_StatementBlock(token.line, tuple(statements))

    ## Expressions

    def parse_expression(self) -> n.Node:
        return self.parse_expression_assign()

    def parse_expression_assign(self) -> n.Node:
        lhs = self.parse_expression_add_sub()
        eq_token = self.cur_token()
        if self.use_token_if(ord("=")):
            if not isinstance(lhs, n.N_VariableRef):
                self.error(eq_token, "Left side of assignment must be a variable.")
            rhs = self.parse_expression_assign()  # right associative
            return n.N_Assign(eq_token.line, lhs, rhs)
        return lhs

    def parse_expression_add_sub(self) -> n.Node:
        lhs = self.parse_expression_pipe()
        while self.cur_token().kind in (ord("+"), ord("-")):
            op_token = self.use_token()
            rhs = self.parse_expression_pipe()
            lhs = n.N_BinarySetOp(op_token.line, lhs, op_token.text, rhs)
        return lhs

    def parse_expression_pipe(self) -> n.Node:
        lhs = self.parse_term()
        while self.use_token_if(ord("|")):
            token = self.use_token()
            if token.kind == TokenKind.FILTER:
                node_cls = n.N_Filter
            elif token.kind == TokenKind.FILTER_OUT:
                node_cls = n.N_FilterOut
            else:
                self.error(token, f"Unexpected symbol {token_name(token.kind)}")
            self.use_token(ord("("))
            patterns = self.parse_expression()
            self.use_token(ord(")"))
            lhs = node_cls(token.line, lhs, patterns)
        return lhs

    def parse_term(self) -> n.Node:
        token = self.use_token()

        if token.kind == TokenKind.ID:
            return self.make_var_node(token)

        if token.kind == TokenKind.LOAD:
            self.use_token(ord("("))
            arg = self.parse_expression()
            self.use_token(ord(")"))
            return n.N_Load(token.line, arg)

        if token.kind == TokenKind.STRING:
            return n.N_Literal(token.line, frozenset([self.string_value(token)]))

        if token.kind == ord("("):
            node = self.parse_expression()
            self.use_token(ord(")"))
            return node

        self.error(token, f"Expected expression. Found {token_name(token.kind)}.")

    def string_value(self, token: Token) -> str:
        """The word in a string literal, without its quotes"""
        if not self.settings.decode_escapes:
            return token.text[1:-1]
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                return literal_eval(token.text)
        except (SyntaxError, ValueError):
            self.error(token, f"Invalid escape sequence in string {token.text}")


def wl_parse(text: str, settings: Settings = None) -> n.Program:
    """Tokenize and parse WordLang source text"""
    return WordParser(tokenize(text), settings).parse()
