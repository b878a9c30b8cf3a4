"""choochoo: WSN(EBNF) 문법을 레일로드 다이어그램 IR로 바꾸는 도구.

    text → Scanner → Parser → Grammar(AST) → Diagram → IR → (render) SVG
"""

from .errors import GrammarError, LexError, GrammarSyntaxError, ProductionNotFoundError
from .grammar import Grammar
from .diagram import Diagram, MAX_EXPANSION_DEPTH

__version__ = "0.1.0"
