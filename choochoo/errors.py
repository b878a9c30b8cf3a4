# choochoo/errors.py
"""choochoo 오류 타입

- GrammarError          : 위치(line, column)를 가진 문법 오류의 공통 부모 (SyntaxError 하위)
- LexError              : 스캐너가 알 수 없는 문자/닫히지 않은 리터럴을 만났을 때
- GrammarSyntaxError    : 파서가 기대한 토큰을 찾지 못했을 때 ("expected X but found Y")
- ProductionNotFoundError: 이름으로 프로덕션을 찾지 못했을 때 (다이어그램 확장 시점에만 발생)

GrammarError는 내장 SyntaxError를 상속하므로,
호출 측에서 `except SyntaxError`로 스캔/파싱 오류를 한 번에 잡을 수 있다.
"""

from __future__ import annotations
from typing import Optional


class GrammarError(SyntaxError):
    """위치 정보를 가진 문법 오류."""

    def __init__(self, message: str, line: int, column: int, snippet: Optional[str] = None):
        text = f"{message} at {line}:{column}"
        if snippet:
            text = f"{text}\n{snippet}"
        super().__init__(text)
        self.message = message
        self.line = line
        self.column = column
        self.snippet = snippet


class LexError(GrammarError):
    pass


class GrammarSyntaxError(GrammarError):
    pass


class ProductionNotFoundError(LookupError):
    """`name`에 해당하는 프로덕션이 문법에 없음."""

    def __init__(self, name: str):
        super().__init__(f"Production '{name}' not found")
        self.name = name
