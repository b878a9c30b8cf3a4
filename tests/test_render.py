import pytest

from choochoo.diagram import Diagram
from choochoo.diagram.ir import Sequence, Terminal, NonTerminal, Group
from choochoo.diagram.render import to_railroad, to_svg

railroad = pytest.importorskip("railroad")


def test_svg_contains_box_text_and_path_titles():
    item = Diagram.from_string("A = B c .\nB = x .").generate_diagram()
    svg = to_svg(item)
    assert svg.startswith("<svg")
    assert ">B<" in svg
    assert ">c<" in svg
    assert "<title>2-4-5-6-7</title>" in svg


def test_standalone_svg_has_namespace_and_style():
    svg = to_svg(Sequence((Terminal("a"),)), standalone=True)
    assert 'xmlns="http://www.w3.org/2000/svg"' in svg
    assert "<style>" in svg


def test_group_label_is_nonterminal_name():
    item = Diagram.from_string("A = B .\nB = x .").generate_diagram({"2-4-5-6-7"})
    rr = to_railroad(item)
    assert isinstance(rr, railroad.Diagram)
    assert ">B<" in to_svg(item)


def test_unknown_node_is_rejected():
    with pytest.raises(TypeError):
        to_svg(Group(object(), "X"))
