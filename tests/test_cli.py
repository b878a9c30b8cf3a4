import json
from pathlib import Path

import pytest

from choochoo.choochooc import main

GRAMMARS = Path(__file__).parent / "grammar_test"
PATH_G = str(GRAMMARS / "path.wsn")


def test_check_reports_summary(capsys):
    assert main(["check", PATH_G]) == 0
    out = capsys.readouterr().out
    assert "[CHECK OK] productions=3 start=Path" in out


def test_check_with_explicit_start(capsys):
    assert main(["check", str(GRAMMARS / "expr.wsn"), "--start", "Factor"]) == 0
    assert "start=Factor" in capsys.readouterr().out


def test_check_warns_about_duplicates(tmp_path, capsys):
    f = tmp_path / "dup.wsn"
    f.write_text("A = a .\nA = b .\n", encoding="utf-8")
    assert main(["check", str(f)]) == 0
    assert "Duplicate productions" in capsys.readouterr().err


def test_syntax_error_exit_code(tmp_path, capsys):
    f = tmp_path / "bad.wsn"
    f.write_text("A = a\n", encoding="utf-8")
    assert main(["check", str(f)]) == 2
    err = capsys.readouterr().err
    assert "[SYNTAX ERROR]" in err
    assert "expected '.'" in err


def test_unknown_start_symbol(capsys):
    assert main(["check", PATH_G, "--start", "Nope"]) == 2
    assert "ProductionNotFoundError" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "none.wsn")]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_tokens(capsys):
    assert main(["tokens", PATH_G]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("000: IDENT")
    assert "'Path'" in lines[0]
    assert lines[-1].split()[1] == "EOF"


def test_paths(capsys):
    assert main(["paths", PATH_G]) == 0
    assert len(capsys.readouterr().out.split()) == 3


def test_ir_json_with_expansion(capsys):
    assert main(["ir", PATH_G, "--expand-all", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["type"] == "Sequence"
    assert '"Group"' in json.dumps(data)


def test_ir_text_dump(capsys):
    assert main(["ir", str(GRAMMARS / "list.wsn")]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Sequence")
    assert "NonTerminal('Item')" in out


def test_svg_to_file(tmp_path, capsys):
    out_file = tmp_path / "out" / "path.svg"
    assert main(["svg", PATH_G, "--standalone", "-o", str(out_file)]) == 0
    assert out_file.read_text(encoding="utf-8").startswith("<svg")
    assert "[EMIT] svg ->" in capsys.readouterr().out



def test_svg_to_stdout(capsys):
    assert main(["svg", PATH_G]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<svg")
    assert ">Dir<" in out


def test_svg_has_no_text_mode():
    with pytest.raises(SystemExit):
        main(["svg", PATH_G, "--text"])
