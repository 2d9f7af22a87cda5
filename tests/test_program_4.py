import builtins
from pathlib import Path

from star.interpreter import Interpreter
from star.lexer import tokenize

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_greets(monkeypatch, capsys):
    """Test program 4: reads a name and a count.

    Each answer is supplied on its own input line, so both prompts go
    through input() and nothing but the program output reaches stdout.
    """
    answers = iter(['Ann', '7'])
    prompts = []

    def fake_input(prompt=''):
        prompts.append(prompt)
        return next(answers)

    monkeypatch.setattr(builtins, 'input', fake_input)
    with open(EXAMPLES / 'program_4.sta', 'r', encoding='utf-8') as f:
        source = f.read()
    tokens = tokenize(source)
    interp = Interpreter()
    interp.run(tokens)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['Hi Ann', 'Hi Ann', 'double 14']
    assert prompts == ['Enter string value for who: ', 'Enter integer value for n: ']
