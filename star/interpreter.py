"""Interpreter for the Star language.

The interpreter executes the token sequence produced by the lexer
directly; no syntax tree is built. A cursor walks the tokens and every
call to `Interpreter.execute_statement` consumes exactly one statement.
Loop bodies are located once and replayed by resetting the cursor to the
start of the body.

All state of a run (tokens, cursor, symbol table) belongs to a single
`Interpreter` instance. Fatal errors are raised as `StarError` and stop
the run at the failing statement.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from .console import Console
from .errors import StarError, WarningHandler, report_warning, runtime_error, semantic_error
from .expression import evaluate
from .grammar import check_program
from .lexer import tokenize
from .symbol_table import SymbolTable
from .types import ErrorVal, Limits, Token, TokenKind, VarKind

###############################################################################
# Cursor
###############################################################################


class Cursor:
    """Read position within a token sequence ending with an END token."""
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].kind is not TokenKind.END:
            tokens = list(tokens) + [Token(TokenKind.END, '', tokens[-1].line if tokens else 0)]
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def advance(self) -> Token:
        token = self.peek()
        if token.kind is not TokenKind.END:
            self.pos += 1
        return token

    def at(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        token = self.peek()
        return token.kind is kind and (text is None or token.text == text)

    def accept(self, kind: TokenKind, text: Optional[str] = None) -> bool:
        if self.at(kind, text):
            self.advance()
            return True
        return False


###############################################################################
# Interpreter
###############################################################################

VALUE_TAIL = (TokenKind.OPERATOR, TokenKind.IDENTIFIER, TokenKind.INTEGER)

INTEGER_INPUT = re.compile(r'-?[0-9]+')


class Interpreter:
    """Statement executor driving a cursor over the token sequence."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 limits: Optional[Limits] = None, console: Optional[Console] = None,
                 warn: Optional[WarningHandler] = None):
        self.limits = limits
        self.warn = warn or report_warning
        self.symbols = SymbolTable(limits, warn=self.warning)
        self.console = console or Console()
        self.cursor = Cursor([])
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def warning(self, message: str):
        self.warn(message)
        self.debug(f"warning: {message}")

    # Public API
    def run(self, tokens: List[Token]) -> None:
        self.cursor = Cursor(tokens)
        self.debug(f"run: {len(self.cursor.tokens)} tokens")
        try:
            while not self.cursor.at(TokenKind.END):
                if not self.execute_statement():
                    self.debug(f"stopped at token {self.cursor.pos}: {self.cursor.peek()!r}")
                    break
            self.debug(f"run finished: {len(self.symbols)} variables")
        finally:
            self.close()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def execute_statement(self) -> bool:
        """Execute the statement at the cursor.

        Returns False when the leading token starts no statement and the
        cursor did not move.
        """
        cursor = self.cursor
        start = cursor.pos
        token = cursor.peek()
        if self.debug_level >= 4:
            self.debug(f"[{start}] line {token.line}: {token!r}")
        if token.kind is TokenKind.KEYWORD:
            if token.text in ('int', 'text'):
                self.execute_declaration()
            elif token.text == 'read':
                self.handle_read()
            elif token.text in ('write', 'newLine'):
                self.handle_write()
            elif token.text == 'loop':
                self.handle_loop()
        elif token.kind is TokenKind.IDENTIFIER:
            self.execute_assignment()
        cursor.accept(TokenKind.STATEMENT_END)
        return cursor.pos != start

    # Statements
    def execute_declaration(self):
        cursor = self.cursor
        kind = VarKind.INTEGER if cursor.advance().text == 'int' else VarKind.TEXT
        while cursor.at(TokenKind.IDENTIFIER):
            name = cursor.advance().text
            self.symbols.declare(name, kind)
            if self.debug_level >= 2:
                self.debug(f"declare {name}: {kind.value}")
            if cursor.accept(TokenKind.KEYWORD, 'is'):
                self.assign_value(name, self.collect_value())
            if not cursor.accept(TokenKind.COMMA):
                break

    def execute_assignment(self):
        cursor = self.cursor
        target = cursor.advance()
        if not cursor.accept(TokenKind.KEYWORD, 'is'):
            raise runtime_error(f"expected 'is' after {target.text} on line {target.line}")
        self.assign_value(target.text, self.collect_value())

    def collect_value(self) -> List[Token]:
        """Collect the value following `is`: a string literal or an expression."""
        cursor = self.cursor
        first = cursor.peek()
        if first.kind is TokenKind.STRING:
            return [cursor.advance()]
        if first.kind not in (TokenKind.IDENTIFIER, TokenKind.INTEGER):
            raise runtime_error(f"expected a value after 'is' on line {first.line}, got {first!r}")
        value = [cursor.advance()]
        while cursor.peek().kind in VALUE_TAIL:
            value.append(cursor.advance())
        return value

    def assign_value(self, name: str, tokens: List[Token]):
        var = self.symbols.get(name)
        first = tokens[0]
        if first.kind is TokenKind.STRING:
            if var.kind is VarKind.INTEGER:
                raise semantic_error(f'cannot assign text to integer variable {name}')
            value = first.value
        else:
            source = self.symbols.lookup(first.text) if first.kind is TokenKind.IDENTIFIER else None
            if var.kind is VarKind.TEXT and len(tokens) == 1 and source is not None and source.kind is VarKind.TEXT:
                value = source.value
            else:
                value = evaluate(tokens, self.symbols)
        self.symbols.assign(name, value)
        if self.debug_level >= 2:
            self.debug(f"assign {name} = {var.value!r}")

    def handle_read(self):
        cursor = self.cursor
        cursor.advance()
        while cursor.at(TokenKind.IDENTIFIER):
            name = cursor.advance().text
            var = self.symbols.get(name)
            if var.kind is VarKind.INTEGER:
                word = self.console.read_word(f"Enter integer value for {name}: ")
                if not INTEGER_INPUT.fullmatch(word):
                    raise StarError(ErrorVal('InputError', f'expected an integer for {name}, got {word!r}'))
                var.value = int(word)
            else:
                word = self.console.read_word(f"Enter string value for {name}: ")
                var.value = self.symbols.clip_text(word)
            if self.debug_level >= 2:
                self.debug(f"read {name} = {var.value!r}")
            if not cursor.accept(TokenKind.COMMA):
                break

    def handle_write(self):
        cursor = self.cursor
        if cursor.advance().text == 'newLine':
            self.console.newline()
            return
        while cursor.at(TokenKind.IDENTIFIER) or cursor.at(TokenKind.STRING):
            token = cursor.advance()
            if token.kind is TokenKind.IDENTIFIER:
                self.console.write(self.symbols.get(token.text).render())
            else:
                self.console.write(token.value)
            if not cursor.accept(TokenKind.COMMA):
                break

    # Loops
    def handle_loop(self):
        cursor = self.cursor
        loop_token = cursor.advance()
        count_token = cursor.peek()
        if not cursor.accept(TokenKind.INTEGER):
            raise runtime_error(f"malformed loop on line {loop_token.line}: expected a repeat count")
        if not cursor.accept(TokenKind.KEYWORD, 'times'):
            raise runtime_error(f"malformed loop on line {loop_token.line}: expected 'times'")
        if not cursor.accept(TokenKind.BLOCK_OPEN):
            raise runtime_error(f"malformed loop on line {loop_token.line}: expected '{{'")
        count = int(count_token.text)
        body_start = cursor.pos
        body_end = self.find_block_end(body_start, loop_token)
        if self.debug_level >= 3:
            self.debug(f"loop {count} times over tokens {body_start}..{body_end}")
        for iteration in range(count):
            if self.debug_level >= 3:
                self.debug(f"loop iteration {iteration + 1}/{count}")
            cursor.pos = body_start
            while cursor.pos < body_end:
                if not self.execute_statement():
                    # a stalled statement ends the current iteration
                    self.debug(f"loop body stopped at token {cursor.pos}: {cursor.peek()!r}")
                    break
        cursor.pos = body_end + 1

    def find_block_end(self, start: int, loop_token: Token) -> int:
        """Index of the `}` closing the block whose body starts at `start`."""
        depth = 1
        tokens = self.cursor.tokens
        for index in range(start, len(tokens)):
            kind = tokens[index].kind
            if kind is TokenKind.BLOCK_OPEN:
                depth += 1
            elif kind is TokenKind.BLOCK_CLOSE:
                depth -= 1
                if depth == 0:
                    return index
        raise runtime_error(f"malformed loop on line {loop_token.line}: missing '}}'")


def run_program(source: str, debug_level: int = 0, strict: bool = False,
                limits: Optional[Limits] = None) -> Interpreter:
    """Tokenize and run a Star program, returning the finished interpreter.

    With `strict` the token sequence is validated against the grammar
    before anything executes.
    """
    interpreter = Interpreter(debug_level=debug_level, limits=limits)
    try:
        tokens = tokenize(source, limits=limits, warn=interpreter.warning)
        if strict:
            check_program(tokens)
    except StarError:
        interpreter.close()
        raise
    interpreter.run(tokens)
    return interpreter


def run_file(file_path: str, debug_level: int = 0, strict: bool = False,
             limits: Optional[Limits] = None) -> Interpreter:
    """Run a Star program file, returning the finished interpreter."""
    source = Path(file_path).read_text(encoding='utf-8')
    return run_program(source, debug_level=debug_level, strict=strict, limits=limits)
