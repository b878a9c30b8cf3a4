import pytest

from choochoo.errors import GrammarSyntaxError, LexError
from choochoo.grammar.ast import (
    Syntax, Production, Expression, Term, Factor, FactorKind, Identifier, Literal,
    is_terminal_symbol, is_uppercase,
)
from choochoo.grammar.parser import Parser, parse_syntax


def _children(node):
    if isinstance(node, Syntax):
        return list(node.productions)
    if isinstance(node, Production):
        return [node.ident, node.expr]
    if isinstance(node, Expression):
        return list(node.terms)
    if isinstance(node, Term):
        return list(node.factors)
    if isinstance(node, Factor):
        return [node.value]
    return []


def _all_nodes(node):
    yield node
    for child in _children(node):
        yield from _all_nodes(child)


def test_simple_production_structure():
    syn = parse_syntax('A = b "c" .')
    assert len(syn.productions) == 1
    prod = syn.productions[0]
    assert prod.ident.letters == "A"
    term = prod.expr.terms[0]
    assert [f.kind for f in term.factors] == [FactorKind.IDENTIFIER, FactorKind.LITERAL]
    assert term.factors[0].value == Identifier("b")
    assert term.factors[1].value == Literal("c")


def test_brackets_build_nested_expressions():
    syn = parse_syntax("A = ( a | b ) { c } [ d ] .")
    factors = syn.productions[0].expr.terms[0].factors
    assert [f.kind for f in factors] == [
        FactorKind.GROUP, FactorKind.REPETITION, FactorKind.OPTIONALLY,
    ]
    assert len(factors[0].value.terms) == 2
    assert str(factors[1].value) == "c"


def test_alternatives_split_terms():
    syn = parse_syntax("A = a b | c | D .")
    assert [str(t) for t in syn.productions[0].expr.terms] == ["a b", "c", "D"]


def test_empty_grammar_is_valid():
    syn = parse_syntax("  \n ")
    assert syn.productions == ()


def test_ids_are_unique_and_grow_towards_leaves():
    syn = parse_syntax('A = b { "c" | D } .\nD = [ e ] .')
    ids = [n.id for n in _all_nodes(syn)]
    assert len(ids) == len(set(ids))
    assert syn.id == 1

    def check(node):
        for child in _children(node):
            assert child.id > node.id
            check(child)

    check(syn)


def test_ids_follow_reservation_order():
    syn = parse_syntax("A = B .")
    prod = syn.productions[0]
    term = prod.expr.terms[0]
    factor = term.factors[0]
    assert (syn.id, prod.id, prod.ident.id, prod.expr.id, term.id, factor.id, factor.value.id) == (
        1, 2, 3, 4, 5, 6, 7,
    )


def test_ids_restart_per_parser():
    a = parse_syntax("A = b .")
    b = parse_syntax("A = b .")
    assert a.productions[0].id == b.productions[0].id


def test_round_trip_through_str():
    src = 'A = "x y" { B | c } [ ( d ) ] .\nB = e .'
    syn = parse_syntax(src)
    again = parse_syntax(str(syn))
    assert again == syn
    assert str(again) == str(syn)
    assert str(syn.productions[0]) == 'A = "x␣y" {B | c} [(d)] .'


def test_equality_ignores_ids():
    assert Identifier("a", id=1) == Identifier("a", id=2)
    assert Identifier("a", id=1).equals(Identifier("a", id=9))
    assert Identifier("a").equals(Literal("a"))
    assert Identifier("a") != Literal("a")
    assert Literal("a").name == "a"
    assert str(Literal("a")) == '"a"'


def test_names_drop_literal_quotes():
    prod = parse_syntax('A = ( "x" b ) { "Y" } [ c ] | d .').productions[0]
    assert prod.expr.name == "(x b) {Y} [c] | d"
    assert str(prod.expr) == '("x" b) {"Y"} [c] | d'


def test_parse_only_once():
    p = Parser("A = b .")
    p.parse()
    with pytest.raises(RuntimeError):
        p.parse()


@pytest.mark.parametrize("src, expected, pos", [
    ("X = .", "expected factor", (1, 5)),
    ("X = a", "expected '.' but found end of input", (1, 6)),
    ("X a .", "expected '=' but found identifier 'a'", (1, 3)),
    ('X = "" .', "expected literal but found '\"'", (1, 6)),
    ("X = a . )", "expected identifier but found ')'", (1, 9)),
    ("X = ( a .", "expected ')' but found '.'", (1, 9)),
])
def test_syntax_errors(src, expected, pos):
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_syntax(src)
    assert expected in exc.value.message
    assert (exc.value.line, exc.value.column) == pos


def test_syntax_error_carries_snippet():
    with pytest.raises(GrammarSyntaxError) as exc:
        parse_syntax("A = a .\nB = = .")
    assert exc.value.snippet == "B = = .\n    ^"
    assert "at 2:5" in str(exc.value)


def test_lex_errors_propagate_through_parser():
    with pytest.raises(LexError):
        parse_syntax("A = a ; .")


def test_uppercase_detection_is_unicode_aware():
    assert is_uppercase("Ärger")
    assert is_uppercase("A")
    assert not is_uppercase("ärger")
    assert not is_uppercase("")


def test_terminal_classification():
    syn = parse_syntax('A = a "B" Cd .\nE = ( a | "b" ) { c } .')
    a_factors = syn.productions[0].expr.terms[0].factors
    assert is_terminal_symbol(a_factors[0].value)
    assert is_terminal_symbol(a_factors[1].value)
    assert is_terminal_symbol(a_factors[1])
    assert not is_terminal_symbol(a_factors[2].value)
    assert not a_factors[2].is_terminal()
    assert is_terminal_symbol(syn.productions[0].expr.terms[0])
    assert is_terminal_symbol(syn.productions[1].expr)
    assert not is_terminal_symbol(syn.productions[1])


def test_terminal_classification_goes_by_name():
    f_factors = parse_syntax('F = ( Sep ) { "Q" } Cd a .').productions[0].expr.terms[0].factors
    # 괄호로 시작하는 이름은 대문자로 시작하지 않는다
    assert f_factors[0].name == "(Sep)"
    assert is_terminal_symbol(f_factors[0])
    assert is_terminal_symbol(f_factors[1])
    term = parse_syntax("T = Cd a .").productions[0].expr.terms[0]
    assert not is_terminal_symbol(term)
    alts = parse_syntax("T = { A | b } .").productions[0].expr.terms[0].factors[0].value
    assert not is_terminal_symbol(alts)


def test_constructors_reject_empty_nodes():
    with pytest.raises(ValueError):
        Identifier("")
    with pytest.raises(ValueError):
        Literal("")
    with pytest.raises(ValueError):
        Term(())
    with pytest.raises(ValueError):
        Expression(())
    with pytest.raises(TypeError):
        Factor(FactorKind.GROUP, Identifier("a"))
