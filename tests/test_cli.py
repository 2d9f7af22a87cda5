import builtins

import pytest

from star.__main__ import main


def write_program(tmp_path, source, name='code.sta'):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_runs_program(tmp_path, capsys):
    path = write_program(tmp_path, 'int x is 2. x is x * 21. write "x=", x. newLine.')
    main([str(path)])
    assert capsys.readouterr().out == 'x=42\n'


def test_runs_program_with_input(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'Bo')
    path = write_program(tmp_path, 'text who. read who. write "hello ", who.')
    main([str(path)])
    assert capsys.readouterr().out == 'hello Bo'


def test_runtime_error_exits_with_status_1(tmp_path, capsys):
    path = write_program(tmp_path, 'int x. write "before". x is x / 0. write "after".')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == 'before'
    assert 'RuntimeError: division by zero' in captured.err


def test_lexical_error_exits_with_status_1(tmp_path, capsys):
    path = write_program(tmp_path, 'int waytoolongname.')
    with pytest.raises(SystemExit) as exc:
        main([str(path)])
    assert exc.value.code == 1
    assert 'LexicalError: identifier exceeds maximum length' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / 'absent.sta')])
    assert exc.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_missing_program_argument():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_emit_tokens(tmp_path, capsys):
    path = write_program(tmp_path, 'write "hi", x.')
    main(['--emit-tokens', str(path)])
    out_path = tmp_path / 'code.sta.lex'
    assert capsys.readouterr().out.strip() == str(out_path)
    assert out_path.read_text(encoding='utf-8').splitlines() == [
        'Keyword(write)', 'String("hi")', 'Comma', 'Identifier(x)', 'EndOfLine',
    ]


def test_check_valid(tmp_path, capsys):
    path = write_program(tmp_path, 'int x. loop 2 times { x is x + 1. }')
    main(['--check', str(path)])
    assert capsys.readouterr().out.strip() == f'{path}: ok'


def test_check_invalid(tmp_path, capsys):
    path = write_program(tmp_path, 'int x is 1 write x.')
    with pytest.raises(SystemExit) as exc:
        main(['--check', str(path)])
    assert exc.value.code == 1
    assert 'SyntaxError' in capsys.readouterr().err


def test_verbose_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = write_program(tmp_path, 'int x is 1.')
    main(['-vv', str(path)])
    assert 'declare x: Integer' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')
