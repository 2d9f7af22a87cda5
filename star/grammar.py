"""Grammar validation for Star token sequences.

The interpreter consumes tokens directly and is lenient about malformed
statements. This module offers a strict check of a whole program before
it runs:

1. **Encoding**: every token is replaced by a terminal word (`ID`, `NUM`,
   `STR`, `OP`, the keyword itself or the punctuation character) and the
   words are joined with spaces. Identifier spellings therefore never
   clash with keywords.

2. **Parsing**: the encoded program is fed into a Lark LALR parser built
   from the grammar below. A parse failure is mapped back to the
   offending token and raised as a `SyntaxError` category `StarError`.
"""

from __future__ import annotations

from typing import List, Sequence

from lark import Lark
from lark.exceptions import UnexpectedInput

from .errors import StarError
from .types import ErrorVal, Token, TokenKind


STAR_GRAMMAR = r"""
    start: statement*

    ?statement: declaration
              | assignment
              | read_stmt
              | write_stmt
              | newline_stmt
              | loop_stmt

    declaration: ("int" | "text") decl_item ("," decl_item)* "."
    decl_item: "ID" ("is" value)?
    assignment: "ID" "is" value "."
    value: "STR" | expression
    expression: operand ("OP" operand)*
    operand: "ID" | "NUM"

    read_stmt: "read" "ID" ("," "ID")* "."
    write_stmt: "write" write_item ("," write_item)* "."
    write_item: "ID" | "STR"
    newline_stmt: "newLine" "."

    loop_stmt: "loop" "NUM" "times" "{" statement* "}"

    %ignore " "
"""


STAR_PARSER = Lark(
    STAR_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


TERMINAL_WORDS = {
    TokenKind.IDENTIFIER: 'ID',
    TokenKind.INTEGER: 'NUM',
    TokenKind.STRING: 'STR',
    TokenKind.OPERATOR: 'OP',
    TokenKind.STATEMENT_END: '.',
    TokenKind.COMMA: ',',
    TokenKind.BLOCK_OPEN: '{',
    TokenKind.BLOCK_CLOSE: '}',
}


def encode_tokens(tokens: Sequence[Token]) -> str:
    """Render a token sequence as the space separated terminal words."""
    words: List[str] = []
    for token in tokens:
        if token.kind is TokenKind.END:
            break
        if token.kind is TokenKind.KEYWORD:
            words.append(token.text)
        else:
            words.append(TERMINAL_WORDS[token.kind])
    return ' '.join(words)


def check_program(tokens: Sequence[Token]) -> None:
    """Raise a SyntaxError `StarError` unless `tokens` form a valid program."""
    encoded = encode_tokens(tokens)
    try:
        STAR_PARSER.parse(encoded)
    except UnexpectedInput as e:
        raise StarError(ErrorVal('SyntaxError', describe_failure(tokens, encoded, e)))


def describe_failure(tokens: Sequence[Token], encoded: str, error: UnexpectedInput) -> str:
    pos = getattr(error, 'pos_in_stream', None)
    at_end = getattr(getattr(error, 'token', None), 'type', None) == '$END'
    if at_end or pos is None or pos < 0 or pos >= len(encoded):
        last = tokens[-1] if tokens else None
        line = last.line if last is not None else 0
        return f"unexpected end of program on line {line}"
    index = encoded[:pos].count(' ')
    token = tokens[index]
    return f"unexpected {token!r} on line {token.line}"
