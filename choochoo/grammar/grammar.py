# choochoo/grammar/grammar.py
"""Grammar: 파싱된 Syntax(AST)를 감싸는 얇은 컨테이너."""

from __future__     import annotations
from dataclasses    import dataclass
from typing         import List

from ..errors import ProductionNotFoundError
from .ast import Syntax, Production
from .loader import load_grammar_text
from .parser import parse_syntax


@dataclass(frozen=True)
class Grammar:
    syntax: Syntax

    @classmethod
    def from_string(cls, text: str) -> "Grammar":
        """문법 텍스트를 파싱한다. LexError / GrammarSyntaxError를 그대로 전파."""
        return cls(parse_syntax(text))

    @classmethod
    def from_file(cls, path: str) -> "Grammar":
        return cls.from_string(load_grammar_text(path))

    @property
    def productions(self) -> List[Production]:
        return list(self.syntax.productions)

    def get_production_from_name(self, name: str) -> Production:
        """
        좌변 이름으로 프로덕션을 찾는다(선형 탐색, **첫 번째 일치**).
        같은 이름의 프로덕션이 여러 개면 뒤의 것은 이름으로 도달할 수 없다.
        """
        for prod in self.syntax.productions:
            if prod.ident.letters == name:
                return prod
        raise ProductionNotFoundError(name)

    def get_start_symbols(self) -> List[str]:
        """선언 순서대로 모든 좌변 이름(중복 포함)."""
        return [prod.ident.letters for prod in self.syntax.productions]

    def __str__(self) -> str:
        return str(self.syntax)
