"""
choochoo 레일로드 다이어그램 IR
=======

이 모듈은 다이어그램 생성기(generator)가 만들고 렌더러(render)가 소비하는
**중간표현(IR)** 노드 어휘를 정의한다.

설계 포인트
-----------
- 노드는 모두 frozen dataclass → 같은 입력이면 구조적으로 같은 트리(== 비교 가능).
- 노드 종류: Sequence, Choice, Optional, ZeroOrMore, OneOrMore,
  Terminal, NonTerminal, Group, Skip
- Terminal/NonTerminal/Group은 `path`(경로 키, 예: "1-3-7")를 들고 다닌다.
  렌더러는 이를 이용해 특정 출현(occurrence)을 펼치기/접기 대상으로 삼는다.

주의
----
- 이 모듈의 `Optional`은 IR 노드다(typing.Optional과 다름).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union


@dataclass(frozen=True)
class Sequence:
    items: Tuple["Item", ...]


@dataclass(frozen=True)
class Choice:
    """default: 렌더러가 '직진' 경로로 그릴 분기 인덱스 힌트"""
    default: int
    items: Tuple["Item", ...]


@dataclass(frozen=True)
class Optional:
    item: "Item"


@dataclass(frozen=True)
class ZeroOrMore:
    item: "Item"


@dataclass(frozen=True)
class OneOrMore:
    """item: 정방향 경로, repeat: 되돌아가는 경로(없으면 None)"""
    item: "Item"
    repeat: Union["Item", None] = None


@dataclass(frozen=True)
class Terminal:
    text: str
    path: str = ""


@dataclass(frozen=True)
class NonTerminal:
    text: str
    path: str = ""


@dataclass(frozen=True)
class Group:
    """펼쳐진 비단말. label은 비단말 이름."""
    item: "Item"
    label: str
    path: str = ""


@dataclass(frozen=True)
class Skip:
    pass


Item = Union[Sequence, Choice, Optional, ZeroOrMore, OneOrMore, Terminal, NonTerminal, Group, Skip]


def walk(item: Item):
    """전위 순회로 모든 IR 노드를 내보낸다."""
    yield item
    for child in children_of(item):
        yield from walk(child)


def children_of(item: Item) -> List[Item]:
    if isinstance(item, (Sequence, Choice)):
        return list(item.items)
    if isinstance(item, (Optional, ZeroOrMore, Group)):
        return [item.item]
    if isinstance(item, OneOrMore):
        return [item.item] if item.repeat is None else [item.item, item.repeat]
    return []


def ir_to_dict(item: Item) -> Dict[str, Any]:
    """
    ir_to_dict(item) -> dict
    ------------------------
    JSON 직렬화용 딕셔너리. 모든 노드에 "type" 태그가 붙는다.
    """
    kind = type(item).__name__
    if isinstance(item, Sequence):
        return {"type": kind, "items": [ir_to_dict(i) for i in item.items]}
    if isinstance(item, Choice):
        return {"type": kind, "default": item.default, "items": [ir_to_dict(i) for i in item.items]}
    if isinstance(item, (Optional, ZeroOrMore)):
        return {"type": kind, "item": ir_to_dict(item.item)}
    if isinstance(item, OneOrMore):
        out: Dict[str, Any] = {"type": kind, "item": ir_to_dict(item.item)}
        if item.repeat is not None:
            out["repeat"] = ir_to_dict(item.repeat)
        return out
    if isinstance(item, (Terminal, NonTerminal)):
        return {"type": kind, "text": item.text, "path": item.path}
    if isinstance(item, Group):
        return {"type": kind, "label": item.label, "path": item.path, "item": ir_to_dict(item.item)}
    if isinstance(item, Skip):
        return {"type": kind}
    raise TypeError(f"unknown IR node: {item!r}")


def format_ir(item: Item, indent: int = 0) -> str:
    """디버그용 들여쓰기 덤프."""
    pad = "  " * indent
    if isinstance(item, (Terminal, NonTerminal)):
        return f"{pad}{type(item).__name__}({item.text!r}) @{item.path}"
    if isinstance(item, Skip):
        return f"{pad}Skip"
    if isinstance(item, Group):
        head = f"{pad}Group({item.label!r}) @{item.path}"
    elif isinstance(item, Choice):
        head = f"{pad}Choice(default={item.default})"
    else:
        head = f"{pad}{type(item).__name__}"
    lines = [head]
    for child in children_of(item):
        lines.append(format_ir(child, indent + 1))
    return "\n".join(lines)
