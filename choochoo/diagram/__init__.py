"""AST → 레일로드 다이어그램 IR 생성과 렌더링 어댑터."""

from . import ir
from .generator import (
    Diagram, MAX_EXPANSION_DEPTH, PATH_SEPARATOR, path_key, parse_path_key,
)
