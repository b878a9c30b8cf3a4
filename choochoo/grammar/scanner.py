# choochoo/grammar/scanner.py
"""WSN 문법 스캐너

문법 텍스트를 **지연(lazy) 토큰 스트림**으로 바꾼다.

규칙
----
- 공백(스페이스/탭/개행)은 리터럴 밖에서 모두 같은 취급으로 건너뛴다.
- 한 글자 토큰: ( ) [ ] { } . | =
- 따옴표: 곧은 따옴표(")와 타이포그래피 따옴표 두 종류(“ ”)를 모두 인정하며,
  만날 때마다 리터럴 모드를 토글한다.
- 리터럴 모드에서는 다음 따옴표 직전까지 전부 LITERAL 토큰 하나가 된다.
  공백은 화면에서 보이도록 SPACE_GLYPH(␣)로 바꾼다.
- 리터럴 밖에서는 유니코드 문자(\\p{L})의 최장 연속이 IDENT 토큰이 된다.
- 그 외 문자는 LexError(line, column).
- 텍스트 끝을 넘으면 EOF 토큰을 계속 돌려준다.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Tuple
import regex as re

from ..errors import LexError

SPACE_GLYPH = "␣"
QUOTES = frozenset({'"', "“", "”"})

_LETTERS_RE = re.compile(r"\p{L}+")
_NON_SPACE_RE = re.compile(r"\S")


class Kind:
    IDENT   = "IDENT"
    LITERAL = "LITERAL"
    QUOTE   = "QUOTE"
    LPAR    = "LPAR"
    RPAR    = "RPAR"
    LBRACK  = "LBRACK"
    RBRACK  = "RBRACK"
    LBRACE  = "LBRACE"
    RBRACE  = "RBRACE"
    PERIOD  = "PERIOD"
    PIPE    = "PIPE"
    ASSIGN  = "ASSIGN"
    EOF     = "EOF"

    # 오류 메시지용 표기
    _DISPLAY = {
        IDENT: "identifier",
        LITERAL: "literal",
        QUOTE: "'\"'",
        LPAR: "'('",
        RPAR: "')'",
        LBRACK: "'['",
        RBRACK: "']'",
        LBRACE: "'{'",
        RBRACE: "'}'",
        PERIOD: "'.'",
        PIPE: "'|'",
        ASSIGN: "'='",
        EOF: "end of input",
    }

    @classmethod
    def display(cls, kind: str) -> str:
        return cls._DISPLAY.get(kind, kind)


_SINGLE_CHARS = {
    "(": Kind.LPAR,
    ")": Kind.RPAR,
    "[": Kind.LBRACK,
    "]": Kind.RBRACK,
    "{": Kind.LBRACE,
    "}": Kind.RBRACE,
    ".": Kind.PERIOD,
    "|": Kind.PIPE,
    "=": Kind.ASSIGN,
}


@dataclass(frozen=True)
class Token:
    kind: str
    text: str   # IDENT/LITERAL이면 원문(리터럴은 공백 치환 후), 나머지는 기호 자체
    line: int   # 1-based
    col: int    # 1-based

    def describe(self) -> str:
        """'expected X but found Y'의 Y 부분."""
        if self.kind == Kind.IDENT:
            return f"identifier '{self.text}'"
        if self.kind == Kind.LITERAL:
            return f"literal '{self.text}'"
        return Kind.display(self.kind)


class Scanner:
    """
    Scanner
    =======
    `next()`를 부를 때마다 토큰 하나를 읽는다. 전체 토큰 리스트를 미리 만들지 않는다.

    - next()         -> Token
    - has_next()     -> bool   (EOF 외의 토큰이 남아 있는지)
    - get_position() -> (line, column)  다음에 읽을 문자의 1-based 위치
    """

    def __init__(self, src: str):
        self._src = src
        self._n = len(src)
        self._i = 0
        self._line = 1
        self._col = 1
        self._in_literal = False
        self._literal_open: Tuple[int, int] = (1, 1)

    # ---- Public API ----
    def get_position(self) -> Tuple[int, int]:
        return self._line, self._col

    def has_next(self) -> bool:
        if self._in_literal:
            return self._i < self._n
        return _NON_SPACE_RE.search(self._src, self._i) is not None

    def next(self) -> Token:
        if self._in_literal:
            return self._next_in_literal()

        self._skip_whitespace()
        if self._i >= self._n:
            return Token(Kind.EOF, "", self._line, self._col)

        ch = self._src[self._i]
        line, col = self._line, self._col

        kind = _SINGLE_CHARS.get(ch)
        if kind is not None:
            self._advance(1)
            return Token(kind, ch, line, col)

        if ch in QUOTES:
            self._advance(1)
            self._in_literal = True
            self._literal_open = (line, col)
            return Token(Kind.QUOTE, ch, line, col)

        m = _LETTERS_RE.match(self._src, self._i)
        if m:
            word = m.group(0)
            self._advance(len(word))
            return Token(Kind.IDENT, word, line, col)

        raise LexError(f"Unknown character {ch!r}", line, col)

    def __iter__(self) -> Iterator[Token]:
        """EOF 토큰까지(포함) 차례로 내보낸다."""
        while True:
            tok = self.next()
            yield tok
            if tok.kind == Kind.EOF:
                return

    # ---- Internals ----
    def _next_in_literal(self) -> Token:
        line, col = self._line, self._col
        if self._i >= self._n:
            raise LexError("Unterminated literal", *self._literal_open)

        ch = self._src[self._i]
        if ch in QUOTES:
            # 닫는 따옴표
            self._advance(1)
            self._in_literal = False
            return Token(Kind.QUOTE, ch, line, col)

        j = self._i
        while j < self._n and self._src[j] not in QUOTES:
            j += 1
        if j >= self._n:
            raise LexError("Unterminated literal", *self._literal_open)
        chars = self._src[self._i:j]
        self._advance(len(chars))
        return Token(Kind.LITERAL, chars.replace(" ", SPACE_GLYPH), line, col)

    def _skip_whitespace(self) -> None:
        while self._i < self._n and self._src[self._i].isspace():
            self._advance(1)

    def _advance(self, n: int) -> None:
        """n 글자를 소비하면서 line/col을 갱신."""
        for ch in self._src[self._i:self._i + n]:
            if ch == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        self._i += n


def tokenize(src: str) -> List[Token]:
    """디버깅/CLI용: 전체 토큰 리스트(EOF 포함)."""
    return list(Scanner(src))
