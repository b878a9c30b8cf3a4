# choochoo/grammar/ast.py
"""WSN 문법 AST (심볼 모델)

    Syntax      = { Production } .
    Production  = Identifier "=" Expression "." .
    Expression  = Term { "|" Term } .
    Term        = Factor { Factor } .
    Factor      = Identifier | Literal | "(" Expression ")" | "{" Expression "}" | "[" Expression "]" .

공통 규약
--------
- 모든 노드는 `name`(심볼 이름)과 `id`(파서가 부여하는 정수)를 가진다.
- `name`은 str(node)와 같되 리터럴만 따옴표 없이 글자 그대로 쓴다.
  str(node)는 다시 파싱할 수 있는 정규 표기(리터럴은 따옴표 포함)다.
- `id`는 다이어그램 경로(path) 구성에만 쓰며 **동등성 비교에서 제외**한다.
- 노드는 생성 후 변경되지 않는다(frozen). 재귀는 이름 참조로만 표현된다.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Tuple, Union
import regex as re

_UPPER_RE = re.compile(r"\p{Lu}")


def is_uppercase(word: str) -> bool:
    """word가 유니코드 대문자로 시작하면 True."""
    return bool(word) and _UPPER_RE.match(word) is not None


class Sym:
    """AST 노드 공통 동작."""

    @property
    def name(self) -> str:
        return str(self)

    def equals(self, other: "Sym") -> bool:
        """이름만 비교한다(id와 노드 종류 무시). 식별자 a와 리터럴 "a"는 같다."""
        return other is not None and self.name == other.name

    def is_terminal(self) -> bool:
        return is_terminal_symbol(self)


@dataclass(frozen=True)
class Identifier(Sym):
    letters: str
    id: int = field(default=-1, compare=False)

    def __post_init__(self):
        if not self.letters:
            raise ValueError("An identifier must have at least one letter")

    def __str__(self) -> str:
        return self.letters


@dataclass(frozen=True)
class Literal(Sym):
    text: str   # 따옴표 제외, 공백은 ␣로 치환된 상태
    id: int = field(default=-1, compare=False)

    def __post_init__(self):
        if not self.text:
            raise ValueError("A literal must have at least one character")

    @property
    def name(self) -> str:
        return self.text

    def __str__(self) -> str:
        return f'"{self.text}"'


class FactorKind:
    IDENTIFIER = "identifier"
    LITERAL    = "literal"
    GROUP      = "group"
    REPETITION = "repetition"
    OPTIONALLY = "optionally"


@dataclass(frozen=True)
class Factor(Sym):
    """
    kind에 따라 value가 달라진다.
    - IDENTIFIER → Identifier, LITERAL → Literal
    - GROUP / REPETITION / OPTIONALLY → Expression
    """
    kind: str
    value: Union["Expression", Identifier, Literal]
    id: int = field(default=-1, compare=False)

    def __post_init__(self):
        expected = {
            FactorKind.IDENTIFIER: Identifier,
            FactorKind.LITERAL: Literal,
            FactorKind.GROUP: Expression,
            FactorKind.REPETITION: Expression,
            FactorKind.OPTIONALLY: Expression,
        }.get(self.kind)
        if expected is None:
            raise ValueError(f"unknown factor kind: {self.kind}")
        if not isinstance(self.value, expected):
            raise TypeError(f"{self.kind} factor expects {expected.__name__}, got {type(self.value).__name__}")

    def __str__(self) -> str:
        if self.kind == FactorKind.GROUP:
            return f"({self.value})"
        if self.kind == FactorKind.REPETITION:
            return f"{{{self.value}}}"
        if self.kind == FactorKind.OPTIONALLY:
            return f"[{self.value}]"
        return str(self.value)

    @property
    def name(self) -> str:
        inner = self.value.name
        if self.kind == FactorKind.GROUP:
            return f"({inner})"
        if self.kind == FactorKind.REPETITION:
            return f"{{{inner}}}"
        if self.kind == FactorKind.OPTIONALLY:
            return f"[{inner}]"
        return inner


@dataclass(frozen=True)
class Term(Sym):
    factors: Tuple[Factor, ...]
    id: int = field(default=-1, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "factors", tuple(self.factors))
        if not self.factors:
            raise ValueError("A term must have at least one factor")

    def __str__(self) -> str:
        return " ".join(str(f) for f in self.factors)

    @property
    def name(self) -> str:
        return " ".join(f.name for f in self.factors)


@dataclass(frozen=True)
class Expression(Sym):
    terms: Tuple[Term, ...]
    id: int = field(default=-1, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "terms", tuple(self.terms))
        if not self.terms:
            raise ValueError("An expression must have at least one term")

    def __str__(self) -> str:
        return " | ".join(str(t) for t in self.terms)

    @property
    def name(self) -> str:
        return " | ".join(t.name for t in self.terms)


@dataclass(frozen=True)
class Production(Sym):
    ident: Identifier
    expr: Expression
    id: int = field(default=-1, compare=False)

    def __str__(self) -> str:
        return f"{self.ident} = {self.expr} ."


@dataclass(frozen=True)
class Syntax(Sym):
    productions: Tuple[Production, ...] = ()
    id: int = field(default=-1, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "productions", tuple(self.productions))

    def __str__(self) -> str:
        return "\n".join(str(p) for p in self.productions)


Node = Union[Syntax, Production, Expression, Term, Factor, Identifier, Literal]


def is_terminal_symbol(node: Node) -> bool:
    """
    단말 판정(이름 기반).
    - Literal      : 내용과 상관없이 항상 단말
    - 식별자/리터럴을 감싼 Factor : 감싼 값의 판정을 따른다
    - 그 밖의 심볼 : 이름이 대문자로 시작하지 않으면 단말
      (`(Sep)`, `{a}`처럼 괄호로 시작하는 이름은 단말이다)
    - Production/Syntax : 심볼이 아니므로 단말 아님
    """
    if isinstance(node, Literal):
        return True
    if isinstance(node, Factor) and node.kind in (FactorKind.IDENTIFIER, FactorKind.LITERAL):
        return is_terminal_symbol(node.value)
    if isinstance(node, (Identifier, Factor, Term, Expression)):
        return not is_uppercase(node.name)
    if isinstance(node, (Production, Syntax)):
        return False
    raise TypeError(f"unknown AST node: {node!r}")


def symbols_equal(a: Node, b: Node) -> bool:
    return a.equals(b)
