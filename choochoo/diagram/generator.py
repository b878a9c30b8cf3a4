# choochoo/diagram/generator.py
"""AST → 레일로드 다이어그램 IR 생성기

경로(path)
---------
같은 프로덕션이 다이어그램의 여러 위치에서 나타날 수 있으므로, "이 출현을 펼칠까?"의
단위는 AST 노드가 아니라 **다이어그램 루트에서 그 노드까지의 id 사슬**이다.
경로 키는 id들을 '-'로 이은 문자열(예: "1-3-7")이며, 호출 측은 펼칠 경로 키 집합을 넘긴다.

경로는 재귀 호출마다 새 튜플로 넘기고(불변), 한 번의 생성 패스에 필요한 상태
(펼칠 경로 집합, 수집 모드, 발견한 경로)는 호출마다 새로 만드는 `_Pass`에 둔다.

무한 재귀 방지
-------------
경로 기반 검사는 "같은 경로를 두 번 펼치지 않음"만 보장한다. 재귀 문법은 계속 새로운
경로를 만들어 내므로, 실제 안전장치는 MAX_EXPANSION_DEPTH 상한이다. 상한에 도달한 경로는
오류 없이 접힌(NonTerminal) 상태로 그린다.

Term 압축(compaction) 순서
-------------------------
1) full match      : `a b C { b C }` → `a OneOrMore(b C)`
2) separator       : `Item { "," Item }` → `OneOrMore(Item, ",")` (구분자는 되돌아가는 경로에)
3) parallel terminal: 단말만으로 된 대안 여러 개를 가진 반복 → `OneOrMore(Skip, Choice(...))`
4) 압축 없음       : 평범한 Sequence (반복은 ZeroOrMore)
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Set, Tuple

from ..grammar.ast import (
    Production, Expression, Term, Factor, FactorKind, Identifier, Literal, Node,
    is_terminal_symbol, is_uppercase,
)
from ..grammar.grammar import Grammar
from . import ir

log = logging.getLogger(__name__)

MAX_EXPANSION_DEPTH = 30
PATH_SEPARATOR = "-"

Path = Tuple[int, ...]


def path_key(path: Path) -> str:
    return PATH_SEPARATOR.join(str(i) for i in path)


def parse_path_key(key: str) -> Path:
    if not key:
        return ()
    return tuple(int(part) for part in key.split(PATH_SEPARATOR))


class _Pass:
    """생성 패스 한 번 동안만 쓰는 상태."""

    def __init__(self, expanding: Iterable[str] = (), collect: bool = False):
        self.expanding = frozenset(expanding)
        self.collect = collect
        self.discovered: Set[str] = set()

    def should_expand(self, key: str) -> bool:
        return self.collect or key in self.expanding


def _sequence(items: List[ir.Item]) -> ir.Item:
    """항목이 하나면 그대로, 여럿이면 Sequence로 묶는다."""
    if len(items) == 1:
        return items[0]
    return ir.Sequence(tuple(items))


class Diagram:
    MAX_EXPANSION_DEPTH = MAX_EXPANSION_DEPTH

    def __init__(self, grammar: Grammar, start_symbol_name: Optional[str] = None):
        self.grammar = grammar
        self.start_symbol_name = start_symbol_name or ""

    # ---- Constructors ----
    @classmethod
    def from_grammar(cls, grammar: Grammar, start_symbol_name: Optional[str] = None) -> "Diagram":
        return cls(grammar, start_symbol_name)

    @classmethod
    def from_string(cls, text: str, start_symbol_name: Optional[str] = None) -> "Diagram":
        return cls(Grammar.from_string(text), start_symbol_name)

    # ---- Public API ----
    def start_production(self) -> Production:
        """명시된 시작 기호의 프로덕션, 없으면 첫 번째 프로덕션."""
        if self.start_symbol_name:
            return self.grammar.get_production_from_name(self.start_symbol_name)
        if not self.grammar.syntax.productions:
            raise ValueError("Grammar has no productions")
        return self.grammar.syntax.productions[0]

    def generate_diagram(self, expanding_paths: Iterable[str] = ()) -> ir.Item:
        """expanding_paths에 든 경로의 비단말만 펼쳐서 IR을 만든다."""
        p = _Pass(expanding_paths)
        return self._generate(self.start_production(), (), p)

    def get_all_expandable_paths(self) -> Set[str]:
        """
        수집 모드로 전체를 순회해 모든 비단말 출현 경로를 모은다("expand all").
        수집 중에는 발견한 경로를 바로 펼치므로 깊이 상한까지 내려간다.
        """
        p = _Pass(collect=True)
        self._generate(self.start_production(), (), p)
        log.debug("collected %d expandable path(s)", len(p.discovered))
        return set(p.discovered)

    # ---- Dispatch ----
    def _generate(self, node: Node, path: Path, p: _Pass) -> ir.Item:
        path = path + (node.id,)
        if isinstance(node, Production):
            return ir.Sequence((self._generate(node.expr, path, p),))
        if isinstance(node, Expression):
            return self._for_expression(node, path, p)
        if isinstance(node, Term):
            return self._for_term(node, path, p)
        if isinstance(node, Factor):
            return self._for_factor(node, path, p)
        if isinstance(node, Identifier):
            return self._for_identifier(node, path, p)
        if isinstance(node, Literal):
            return ir.Terminal(node.text, path_key(path))
        raise AssertionError(f"unknown AST node: {node!r}")

    def _for_expression(self, expr: Expression, path: Path, p: _Pass) -> ir.Item:
        items = [self._generate(t, path, p) for t in expr.terms]
        if len(items) == 1:
            return items[0]
        return ir.Choice(len(items) // 2, tuple(items))

    def _for_factor(self, factor: Factor, path: Path, p: _Pass, compacted: bool = False) -> ir.Item:
        kind = factor.kind
        if kind in (FactorKind.IDENTIFIER, FactorKind.LITERAL):
            return self._generate(factor.value, path, p)
        if kind == FactorKind.GROUP:
            return ir.Sequence((self._generate(factor.value, path, p),))
        if kind == FactorKind.OPTIONALLY:
            return ir.Optional(self._generate(factor.value, path, p))
        if kind == FactorKind.REPETITION:
            if compacted:
                return ir.OneOrMore(self._generate(factor.value, path, p))
            body = factor.value
            if len(body.terms) > 1 and is_terminal_symbol(body):
                return self._parallel_terminals(body, path, p)
            return ir.ZeroOrMore(self._generate(body, path, p))
        raise AssertionError(f"unknown factor kind: {kind}")

    def _for_identifier(self, ident: Identifier, path: Path, p: _Pass) -> ir.Item:
        key = path_key(path)
        if not is_uppercase(ident.letters):
            return ir.Terminal(ident.letters, key)

        if p.collect:
            p.discovered.add(key)
        if len(path) < MAX_EXPANSION_DEPTH and p.should_expand(key):
            prod = self.grammar.get_production_from_name(ident.letters)
            return ir.Group(self._generate(prod.expr, path, p), ident.letters, key)
        return ir.NonTerminal(ident.letters, key)

    # ---- Term compaction ----
    def _for_term(self, term: Term, path: Path, p: _Pass) -> ir.Item:
        factors = term.factors
        if len(factors) == 1:
            return self._generate(factors[0], path, p)

        r = next((k for k, f in enumerate(factors) if f.kind == FactorKind.REPETITION), None)
        if r is None:
            log.debug("term %d: no repetition, basic sequence", term.id)
            return self._basic_sequence(term, path, p)

        rep = factors[r]
        body = rep.value
        if len(body.terms) != 1:
            log.debug("term %d: repetition has alternatives, not compacted", term.id)
            return self._basic_sequence(term, path, p)

        inner_term = body.terms[0]
        inner = inner_term.factors
        m = len(inner)

        # 반복 직전의 바깥 factor와 반복 안쪽 factor를 뒤에서부터 비교
        i, j = r - 1, m - 1
        while i >= 0 and j >= 0 and factors[i].equals(inner[j]):
            i -= 1
            j -= 1
        matched = (m - 1) - j

        if j < 0:
            log.debug("term %d: full match, OneOrMore loop", term.id)
            items: List[ir.Item] = []
            for h, f in enumerate(factors):
                if r - m <= h < r:
                    continue
                if h == r:
                    items.append(self._for_factor(f, path + (f.id,), p, compacted=True))
                else:
                    items.append(self._generate(f, path, p))
            return _sequence(items)

        remaining = inner[:j + 1]
        if matched > 0 and all(is_terminal_symbol(f) for f in remaining):
            log.debug("term %d: separator compaction, %d factor(s) on back edge", term.id, len(remaining))
            inner_path = path + (rep.id, body.id, inner_term.id)
            forward = [self._generate(f, inner_path, p) for f in inner[j + 1:]]
            back = [self._generate(f, inner_path, p) for f in reversed(remaining)]
            loop = ir.OneOrMore(_sequence(forward), _sequence(back))
            items = []
            for h, f in enumerate(factors):
                if h == r:
                    items.append(loop)
                elif r - matched <= h < r:
                    continue
                else:
                    items.append(self._generate(f, path, p))
            return _sequence(items)

        log.debug("term %d: cannot be compacted, basic sequence", term.id)
        return self._basic_sequence(term, path, p)

    def _basic_sequence(self, term: Term, path: Path, p: _Pass) -> ir.Item:
        return ir.Sequence(tuple(self._generate(f, path, p) for f in term.factors))

    def _parallel_terminals(self, body: Expression, path: Path, p: _Pass) -> ir.Item:
        """
        단말만 있는 대안들을 되돌아가는 경로에 나란히 그린다.
        되돌아가는 경로는 오른쪽→왼쪽으로 읽히므로 각 대안의 factor 순서를 뒤집는다.
        """
        log.debug("expression %d: parallel terminal loop", body.id)
        expr_path = path + (body.id,)
        alternatives = []
        for t in body.terms:
            term_path = expr_path + (t.id,)
            alternatives.append(_sequence([self._generate(f, term_path, p) for f in reversed(t.factors)]))
        return ir.OneOrMore(ir.Skip(), ir.Choice(len(alternatives) // 2, tuple(alternatives)))
