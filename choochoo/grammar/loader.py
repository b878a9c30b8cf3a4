# choochoo/grammar/loader.py
"""WSN 문법 파일 로더

- UTF-8로 읽되, 편집기가 붙인 BOM(U+FEFF)은 버린다. 스캐너는 BOM을 알 수 없는 문자로 본다.
- 개행은 \\n 하나로 통일해서 오류 위치(line:col)가 OS와 무관하게 같게 나온다.
"""

from __future__ import annotations
import os
from pathlib    import Path
from typing     import Union

_BOM = "\ufeff"


def load_grammar_text(path: Union[str, "os.PathLike[str]"]) -> str:
    text = Path(path).read_text(encoding="utf-8")
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return text.replace("\r\n", "\n").replace("\r", "\n")
