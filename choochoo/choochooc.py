# choochoo/choochooc.py
"""choochooc – choochoo CLI

사용 예)
    $ python -m choochoo.choochooc check tests/grammar_test/path.wsn -D
    $ python -m choochoo.choochooc tokens tests/grammar_test/path.wsn
    $ python -m choochoo.choochooc paths tests/grammar_test/path.wsn --start Path
    $ python -m choochoo.choochooc ir tests/grammar_test/path.wsn --expand 1-2-3-4-5 --json
    $ python -m choochoo.choochooc svg tests/grammar_test/path.wsn --expand-all -o tests/tmp/path.svg --standalone

기능
----
- check  : 문법을 읽어 파이프라인(텍스트→토큰→AST→IR) 검증 및 요약 출력
- tokens : 스캐너가 만든 토큰 스트림 출력
- paths  : 펼칠 수 있는 모든 비단말 출현 경로(path key) 출력
- ir     : 다이어그램 IR을 들여쓰기 덤프 또는 JSON으로 출력
- svg    : IR을 railroad-diagrams로 렌더링해 SVG로 저장

디버그 모드(-D/--debug)를 켜면 단계별 요약과 압축(compaction) 판단 로그를 출력합니다.
"""

from __future__ import annotations
import argparse
import json
import logging
import pathlib
import sys
from typing import Optional

from .errors import ProductionNotFoundError

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _setup_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.WARNING, format="[DEBUG] %(name)s: %(message)s")
        logging.getLogger("choochoo").setLevel(logging.DEBUG)


def _write_output(text: str, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(text if text.endswith("\n") else text + "\n")
        return
    out_path = pathlib.Path(output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_pipeline(grammar_path: str, debug: bool, start: Optional[str]):
    """문법 파일을 읽어 Grammar와 Diagram까지 만든다."""
    from .grammar.loader import load_grammar_text
    from .grammar.grammar import Grammar
    from .diagram.generator import Diagram

    src = load_grammar_text(grammar_path)
    g = Grammar.from_string(src)
    if debug: _eprint("[DEBUG] AST ready | productions=%d" % len(g.syntax.productions))

    d = Diagram.from_grammar(g, start)
    prod = d.start_production()
    if debug: _eprint("[DEBUG] start symbol=%s (id=%d)" % (prod.ident.letters, prod.id))
    return g, d


def _expanding_paths(args, d) -> set:
    paths = set(args.expand or [])
    if getattr(args, "expand_all", False):
        paths |= d.get_all_expandable_paths()
    return paths


def _guarded(fn):
    """문법/조회 오류를 [SYNTAX ERROR]/[ERROR] 형식으로 보고하고 종료 코드 2를 돌려준다."""
    def wrapper(args) -> int:
        try:
            return fn(args)
        except SyntaxError as e:
            _eprint("[SYNTAX ERROR]")
            _eprint(str(e))
            return 2
        except (ProductionNotFoundError, ValueError, OSError) as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2
    wrapper.__name__ = fn.__name__
    wrapper.__doc__ = fn.__doc__
    return wrapper

# ------------------------------
# 커맨드 구현
# ------------------------------

@_guarded
def cmd_check(args) -> int:
    g, d = _load_pipeline(args.file, debug=args.debug, start=args.start)
    item = d.generate_diagram()
    if args.debug:
        from .diagram.ir import format_ir
        _eprint("\n[AST]\n" + str(g))
        _eprint("\n[IR]\n" + format_ir(item))
    starts = g.get_start_symbols()
    dupes = sorted({s for s in starts if starts.count(s) > 1})
    if dupes:
        _eprint("[WARN] Duplicate productions (only the first is reachable by name): " + ", ".join(dupes))
    print(f"[CHECK OK] productions={len(starts)} start={d.start_production().ident.letters}")
    return 0


@_guarded
def cmd_tokens(args) -> int:
    """스캐너 토큰을 한 줄에 하나씩 출력합니다."""
    from .grammar.loader import load_grammar_text
    from .grammar.scanner import Scanner
    src = load_grammar_text(args.file)
    for i, tok in enumerate(Scanner(src)):
        print(f"{i:03d}: {tok.kind:<8} {tok.text!r}  @{tok.line}:{tok.col}")
    return 0


@_guarded
def cmd_paths(args) -> int:
    g, d = _load_pipeline(args.file, debug=args.debug, start=args.start)
    paths = d.get_all_expandable_paths()
    for key in sorted(paths, key=lambda k: [int(x) for x in k.split("-")]):
        print(key)
    if args.debug: _eprint(f"[DEBUG] {len(paths)} path(s)")
    return 0


@_guarded
def cmd_ir(args) -> int:
    from .diagram.ir import format_ir, ir_to_dict
    g, d = _load_pipeline(args.file, debug=args.debug, start=args.start)
    item = d.generate_diagram(_expanding_paths(args, d))
    if args.json:
        text = json.dumps(ir_to_dict(item), indent=2, ensure_ascii=False)
    else:
        text = format_ir(item)
    _write_output(text, args.output)
    return 0


@_guarded
def cmd_svg(args) -> int:
    from .diagram.render import to_svg
    g, d = _load_pipeline(args.file, debug=args.debug, start=args.start)
    item = d.generate_diagram(_expanding_paths(args, d))
    text = to_svg(item, standalone=args.standalone)
    _write_output(text, args.output)
    if args.output:
        print(f"[EMIT] svg -> {args.output}")
    if args.debug: _eprint(f"[DEBUG] bytes={len(text)}")
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="WSN 문법 파일")
    p.add_argument("--start", help="시작 기호(미지정시 첫 번째 프로덕션)")
    p.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")


def _add_expansion(p: argparse.ArgumentParser) -> None:
    p.add_argument("--expand", action="append", metavar="PATH", help="펼칠 경로 키(여러 번 지정 가능)")
    p.add_argument("--expand-all", action="store_true", help="펼칠 수 있는 모든 경로를 펼침")
    p.add_argument("-o", "--output", help="출력 파일 경로(미지정시 표준출력)")


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="choochooc", description="choochoo railroad diagram CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 검사하고 다이어그램 IR 생성까지 확인합니다")
    _add_common(p_check)
    p_check.set_defaults(func=cmd_check)

    p_tokens = sub.add_parser("tokens", help="스캐너 토큰 스트림을 출력합니다")
    p_tokens.add_argument("file", help="WSN 문법 파일")
    p_tokens.set_defaults(func=cmd_tokens, debug=False)

    p_paths = sub.add_parser("paths", help="펼칠 수 있는 비단말 경로 키를 모두 출력합니다")
    _add_common(p_paths)
    p_paths.set_defaults(func=cmd_paths)

    p_ir = sub.add_parser("ir", help="다이어그램 IR을 출력합니다")
    _add_common(p_ir)
    _add_expansion(p_ir)
    p_ir.add_argument("--json", action="store_true", help="JSON으로 출력")
    p_ir.set_defaults(func=cmd_ir)

    p_svg = sub.add_parser("svg", help="railroad-diagrams로 SVG를 생성합니다")
    _add_common(p_svg)
    _add_expansion(p_svg)
    p_svg.add_argument("--standalone", action="store_true", help="xmlns/CSS를 포함한 단독 SVG")
    p_svg.set_defaults(func=cmd_svg)

    args = ap.parse_args(argv)
    _setup_logging(args.debug)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
