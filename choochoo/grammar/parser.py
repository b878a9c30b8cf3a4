# choochoo/grammar/parser.py
"""WSN 재귀 하강 파서 (LL(1))

    Syntax      = { Production } .
    Production  = Identifier "=" Expression "." .
    Expression  = Term { "|" Term } .
    Term        = Factor { Factor } .
    Factor      = Identifier | Literal
                | "(" Expression ")" | "{" Expression "}" | "[" Expression "]" .
    Literal     = '"' character { character } '"' .
    Identifier  = letter { letter } .

- 비단말 하나당 메서드 하나, 각 메서드는 자신이 맞춘 토큰만 소비한다.
- 노드 id는 파서 인스턴스가 소유한 카운터에서 나온다(전역 상태 없음).
  메서드에 들어가는 시점에 id를 예약하므로 루트→잎 방향으로 id가 증가한다.
- 기대와 다른 토큰이면 GrammarSyntaxError("expected X but found Y").
"""

from __future__ import annotations
import itertools
from typing import List

from ..errors import GrammarSyntaxError
from .scanner import Scanner, Token, Kind
from .ast import (
    Syntax, Production, Expression, Term, Factor, FactorKind, Identifier, Literal,
)

# Factor를 시작할 수 있는 토큰
_FACTOR_START = (Kind.IDENT, Kind.QUOTE, Kind.LPAR, Kind.LBRACE, Kind.LBRACK)

# 괄호 종류 → (닫는 토큰, FactorKind)
_BRACKETS = {
    Kind.LPAR: (Kind.RPAR, FactorKind.GROUP),
    Kind.LBRACE: (Kind.RBRACE, FactorKind.REPETITION),
    Kind.LBRACK: (Kind.RBRACK, FactorKind.OPTIONALLY),
}


# ---------- error handling utils ----------
def _snippet_with_caret(src: str, line: int, col: int) -> str:
    """line:col 위치에 캐럿(^)을 찍은 한 줄 스니펫"""
    lines = src.split("\n")
    if not 1 <= line <= len(lines):
        return ""
    caret = " " * (col - 1) + "^"
    return f"{lines[line - 1]}\n{caret}"


class Parser:
    def __init__(self, src: str):
        self.src = src
        self.scanner = Scanner(src)
        self.la: Token = Token(Kind.EOF, "", 1, 1)
        self._ids = itertools.count(1)
        self._done = False

    def parse(self) -> Syntax:
        if self._done:
            raise RuntimeError("Parser.parse() can only be called once")
        self._done = True
        self._scan()
        return self._syntax()

    # ---- 문법 규칙 ----
    def _syntax(self) -> Syntax:
        node_id = self._next_id()
        productions: List[Production] = []
        while self.la.kind == Kind.IDENT:
            productions.append(self._production())
        if self.la.kind != Kind.EOF:
            self._fail(Kind.IDENT)
        return Syntax(tuple(productions), id=node_id)

    def _production(self) -> Production:
        node_id = self._next_id()
        ident = self._identifier()
        self.check(Kind.ASSIGN)
        expr = self._expression()
        self.check(Kind.PERIOD)
        return Production(ident, expr, id=node_id)

    def _expression(self) -> Expression:
        node_id = self._next_id()
        terms = [self._term()]
        while self.la.kind == Kind.PIPE:
            self._scan()
            terms.append(self._term())
        return Expression(tuple(terms), id=node_id)

    def _term(self) -> Term:
        node_id = self._next_id()
        factors = [self._factor()]
        while self.la.kind in _FACTOR_START:
            factors.append(self._factor())
        return Term(tuple(factors), id=node_id)

    def _factor(self) -> Factor:
        node_id = self._next_id()
        kind = self.la.kind
        if kind == Kind.IDENT:
            return Factor(FactorKind.IDENTIFIER, self._identifier(), id=node_id)
        if kind == Kind.QUOTE:
            return Factor(FactorKind.LITERAL, self._literal(), id=node_id)
        if kind in _BRACKETS:
            closing, factor_kind = _BRACKETS[kind]
            self._scan()
            expr = self._expression()
            self.check(closing)
            return Factor(factor_kind, expr, id=node_id)
        self._fail("factor (identifier, literal, '(', '{' or '[')")

    def _identifier(self) -> Identifier:
        node_id = self._next_id()
        tok = self.check(Kind.IDENT)
        return Identifier(tok.text, id=node_id)

    def _literal(self) -> Literal:
        node_id = self._next_id()
        self.check(Kind.QUOTE)
        tok = self.check(Kind.LITERAL)
        self.check(Kind.QUOTE)
        return Literal(tok.text, id=node_id)

    # ---- 토큰 처리 ----
    def check(self, expected: str) -> Token:
        """lookahead가 expected 종류면 소비하고 돌려준다. 아니면 GrammarSyntaxError."""
        if self.la.kind != expected:
            self._fail(expected)
        tok = self.la
        self._scan()
        return tok

    def _scan(self) -> None:
        self.la = self.scanner.next()

    def _next_id(self) -> int:
        return next(self._ids)

    def _fail(self, expected: str) -> None:
        t = self.la
        raise GrammarSyntaxError(
            f"expected {Kind.display(expected)} but found {t.describe()}",
            t.line, t.col,
            _snippet_with_caret(self.src, t.line, t.col),
        )


def parse_syntax(src: str) -> Syntax:
    """문법 텍스트 → Syntax(AST)"""
    return Parser(src).parse()
