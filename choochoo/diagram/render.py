# choochoo/diagram/render.py
"""IR → railroad-diagrams 변환기 (얇은 렌더링 어댑터)

- 레이아웃/SVG 작성은 전부 `railroad` 라이브러리에 맡긴다.
- 경로 키는 Terminal/NonTerminal 상자의 title로, 비단말 이름은 Group 라벨로 옮긴다.
- 루프 화살표 마커 주입, PNG 변환, 텍스트 다이어그램 등은 여기서 다루지 않는다.
"""

from __future__ import annotations
import io

import railroad

from . import ir


def to_railroad_item(item: ir.Item):
    """IR 노드 하나를 railroad 노드로 변환(재귀)."""
    if isinstance(item, ir.Sequence):
        return railroad.Sequence(*[to_railroad_item(i) for i in item.items])
    if isinstance(item, ir.Choice):
        return railroad.Choice(item.default, *[to_railroad_item(i) for i in item.items])
    if isinstance(item, ir.Optional):
        return railroad.Optional(to_railroad_item(item.item))
    if isinstance(item, ir.ZeroOrMore):
        return railroad.ZeroOrMore(to_railroad_item(item.item))
    if isinstance(item, ir.OneOrMore):
        repeat = None if item.repeat is None else to_railroad_item(item.repeat)
        return railroad.OneOrMore(to_railroad_item(item.item), repeat)
    if isinstance(item, ir.Terminal):
        return railroad.Terminal(item.text, title=item.path or None)
    if isinstance(item, ir.NonTerminal):
        return railroad.NonTerminal(item.text, title=item.path or None)
    if isinstance(item, ir.Group):
        return railroad.Group(to_railroad_item(item.item), item.label)
    if isinstance(item, ir.Skip):
        return railroad.Skip()
    raise TypeError(f"unknown IR node: {item!r}")


def to_railroad(item: ir.Item) -> railroad.Diagram:
    return railroad.Diagram(to_railroad_item(item))


def to_svg(item: ir.Item, standalone: bool = False) -> str:
    """SVG 문자열. standalone=True면 xmlns와 기본 CSS를 포함한 단독 파일 형태."""
    buf = io.StringIO()
    diagram = to_railroad(item)
    if standalone:
        diagram.writeStandalone(buf.write)
    else:
        diagram.writeSvg(buf.write)
    return buf.getvalue()

