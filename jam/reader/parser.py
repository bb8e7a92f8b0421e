"""
  Jam Lexer and Parser

- Streaming lexer: `lex` yields (token_type, token_value) tuples lazily
- Recursive-descent parser over a TokenStream, producing jam.types.ast_nodes

    - integers       -> IntConstant
    - true / false   -> BoolConstant
    - null           -> NullConstant
    - cons, first .. -> the shared PrimFun from jam.builtin.primitives
    - identifiers    -> interned Variable
    - binary ops     -> BinOpApp, by precedence: | < & < comparisons < + - < * /
    - unary ops      -> UnOpApp (+, -, ~)
    - f(a, b)        -> App
    - if/let/map     -> If, Let, Map

Comments are `// to end of line` and `/* ... */`.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, TextIO

from jam import AST
from jam.builtin.primitives import PRIM_FUNS
from jam.errors import JamSyntaxError
from jam.types.ast_nodes import (
    App, BinOpApp, BoolConstant, If, IntConstant, Let, Map, NullConstant, UnOpApp,
)
from jam.types.variable import Variable


TOKEN_RE = re.compile(
    r"(?P<int>\d+)"  # integer literal
    r"|(?P<op>:=|!=|<=|>=|[-+*/=<>&|~;,()])"  # operators and delimiters
    r"|(?P<name>[A-Za-z_?][A-Za-z0-9_?]*)"  # identifiers, keywords, primitives
)

KEYWORDS = frozenset({"if", "then", "else", "let", "in", "map", "to"})
LITERALS = frozenset({"true", "false", "null"})

UNARY_OPS = frozenset({"+", "-", "~"})

BINARY_PRECEDENCE: dict[str, int] = {
    "|": 1,
    "&": 2,
    "=": 3, "!=": 3, "<": 3, ">": 3, "<=": 3, ">=": 3,
    "+": 4, "-": 4,
    "*": 5, "/": 5,
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples.

    Token types are "int", "op", "keyword", "literal", "prim" and "id".
    """
    pos = 0
    n = len(source)

    def skip_whitespace_and_comments():
        nonlocal pos
        while pos < n:
            if source[pos].isspace():
                pos += 1
            elif source.startswith("//", pos):
                end = source.find("\n", pos)
                pos = n if end == -1 else end + 1
            elif source.startswith("/*", pos):
                end = source.find("*/", pos + 2)
                if end == -1:
                    raise JamSyntaxError(f"Unterminated comment starting at {pos}")
                pos = end + 2
            else:
                break

    while True:
        skip_whitespace_and_comments()
        if pos >= n:
            return

        m = TOKEN_RE.match(source, pos)
        if not m:
            raise JamSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()

        kind = m.lastgroup
        text = m.group()
        if kind == "name":
            if text in KEYWORDS:
                kind = "keyword"
            elif text in LITERALS:
                kind = "literal"
            elif text in PRIM_FUNS:
                kind = "prim"
            else:
                kind = "id"
        yield kind, text


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def at(self, tok_type: str, tok_val: str | None = None) -> bool:
        t, v = self.peek()
        return t == tok_type and (tok_val is None or v == tok_val)

    def expect(self, tok_type: str, tok_val: str | None = None) -> str:
        t, v = self.advance()
        if t != tok_type or (tok_val is not None and v != tok_val):
            wanted = repr(tok_val) if tok_val is not None else tok_type
            found = "end of input" if t is None else repr(v)
            raise JamSyntaxError(f"Expected {wanted} but found {found}")
        return v

    # ------------------------
    # Grammar
    # ------------------------
    def parse_program(self) -> AST:
        expr = self.parse_exp()
        tok_type, tok_val = self.peek()
        if tok_type is not None:
            raise JamSyntaxError(f"Unexpected {tok_val!r} after end of program")
        return expr

    def parse_exp(self) -> AST:
        if self.at("keyword", "if"):
            self.advance()
            test = self.parse_exp()
            self.expect("keyword", "then")
            conseq = self.parse_exp()
            self.expect("keyword", "else")
            alt = self.parse_exp()
            return If(test, conseq, alt)

        if self.at("keyword", "let"):
            self.advance()
            variables: list[Variable] = []
            exps: list[AST] = []
            while self.at("id"):
                var = self._new_variable(self.advance()[1], variables, "let")
                self.expect("op", ":=")
                exps.append(self.parse_exp())
                self.expect("op", ";")
                variables.append(var)
            if not variables:
                raise JamSyntaxError("let requires at least one definition")
            self.expect("keyword", "in")
            return Let(tuple(variables), tuple(exps), self.parse_exp())

        if self.at("keyword", "map"):
            self.advance()
            params: list[Variable] = []
            if self.at("id"):
                params.append(self._new_variable(self.advance()[1], params, "map"))
                while self.at("op", ","):
                    self.advance()
                    params.append(self._new_variable(self.expect("id"), params, "map"))
            self.expect("keyword", "to")
            return Map(tuple(params), self.parse_exp())

        return self.parse_binary(1)

    def parse_binary(self, min_prec: int) -> AST:
        left = self.parse_term()
        while True:
            tok_type, op = self.peek()
            prec = BINARY_PRECEDENCE.get(op) if tok_type == "op" else None
            if prec is None or prec < min_prec:
                return left
            self.advance()
            left = BinOpApp(op, left, self._parse_operand(prec + 1))

    def _at_block(self) -> bool:
        return self.at("keyword", "if") or self.at("keyword", "let") or self.at("keyword", "map")

    def _parse_operand(self, min_prec: int) -> AST:
        # if/let/map may follow an operator and extend as far as possible
        if self._at_block():
            return self.parse_exp()
        return self.parse_binary(min_prec)

    def _parse_unary_operand(self) -> AST:
        if self._at_block():
            return self.parse_exp()
        return self.parse_term()

    def parse_term(self) -> AST:
        tok_type, tok_val = self.peek()
        if tok_type == "op" and tok_val in UNARY_OPS:
            self.advance()
            return UnOpApp(tok_val, self._parse_unary_operand())

        expr = self.parse_factor()
        while self.at("op", "("):
            self.advance()
            expr = App(expr, self._parse_args())
        return expr

    def _parse_args(self) -> tuple[AST, ...]:
        args: list[AST] = []
        if self.at("op", ")"):
            self.advance()
            return ()
        args.append(self.parse_exp())
        while self.at("op", ","):
            self.advance()
            args.append(self.parse_exp())
        self.expect("op", ")")
        return tuple(args)

    def parse_factor(self) -> AST:
        tok_type, tok_val = self.advance()

        if tok_type == "op" and tok_val == "(":
            expr = self.parse_exp()
            self.expect("op", ")")
            return expr

        if tok_type == "int":
            return IntConstant(int(tok_val))

        if tok_type == "literal":
            if tok_val == "null":
                return NullConstant()
            return BoolConstant(tok_val == "true")

        if tok_type == "prim":
            return PRIM_FUNS[tok_val]

        if tok_type == "id":
            return Variable(tok_val)

        if tok_type is None:
            raise JamSyntaxError("Unexpected end of input")
        raise JamSyntaxError(f"Unexpected token: {tok_type} {tok_val!r}")

    @staticmethod
    def _new_variable(name: str, seen: list[Variable], construct: str) -> Variable:
        var = Variable(name)
        if var in seen:
            raise JamSyntaxError(f"Duplicate variable {name} in {construct}")
        return var


def parse(source: str) -> AST:
    """Parse a complete Jam program."""
    return TokenStream(lex(source)).parse_program()


def parse_stream(reader: TextIO) -> AST:
    """Parse a complete Jam program read from a text stream."""
    return parse(reader.read())
