from pathlib import Path

from star.interpreter import Interpreter
from star.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_counting_loop(capsys):
    with open(EXAMPLES / 'program_3.sta', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['x=1', 'x=2', 'x=3', 'done 3']
    assert interp.symbols.get('x').value == 3
