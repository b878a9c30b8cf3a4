"""WSN 문법 프런트엔드: 스캐너 → 파서 → AST(Grammar)."""

from .ast import (
    Syntax, Production, Expression, Term, Factor, FactorKind, Identifier, Literal,
    Node, is_terminal_symbol, is_uppercase, symbols_equal,
)
from .scanner import Scanner, Token, Kind, tokenize, SPACE_GLYPH, QUOTES
from .parser import Parser, parse_syntax
from .grammar import Grammar
from .loader import load_grammar_text
