import builtins
from typing import List

from star.errors import StarError
from star.types import ErrorVal


class Console:
    """Console collaborator for the read and write statements.

    Input is consumed one whitespace-delimited word at a time. Words left
    over on an input line are kept for the following reads.
    """
    def __init__(self):
        self.pending: List[str] = []

    def read_word(self, prompt: str) -> str:
        if self.pending:
            print(prompt, end='', flush=True)
            return self.pending.pop(0)
        while not self.pending:
            try:
                line = builtins.input(prompt)
            except EOFError:
                raise StarError(ErrorVal('InputError', 'unexpected end of input'))
            self.pending = line.split()
        return self.pending.pop(0)

    def write(self, text: str) -> None:
        print(text, end='', flush=True)

    def newline(self) -> None:
        print()
