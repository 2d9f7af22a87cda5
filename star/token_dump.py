"""Human readable token dumps.

One line per token, `Label(text)` for tokens carrying text and the bare
label for the punctuation tokens that do not. Labels are the classic
`.lex` file names (`IntConst`, `EndOfLine`, ...). The END sentinel is
never written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from .types import Token, TokenKind


DUMP_LABELS = {
    TokenKind.IDENTIFIER: 'Identifier',
    TokenKind.INTEGER: 'IntConst',
    TokenKind.OPERATOR: 'Operator',
    TokenKind.STRING: 'String',
    TokenKind.KEYWORD: 'Keyword',
    TokenKind.STATEMENT_END: 'EndOfLine',
    TokenKind.COMMA: 'Comma',
    TokenKind.BLOCK_OPEN: 'LeftCurlyBracket',
    TokenKind.BLOCK_CLOSE: 'RightCurlyBracket',
}

BARE_KINDS = (TokenKind.STATEMENT_END, TokenKind.COMMA)


def format_token(token: Token) -> str:
    label = DUMP_LABELS[token.kind]
    if token.kind in BARE_KINDS:
        return label
    return f"{label}({token.text})"


def format_tokens(tokens: Iterable[Token]) -> str:
    lines: List[str] = []
    for token in tokens:
        if token.kind is TokenKind.END:
            break
        lines.append(format_token(token))
    return ''.join(line + '\n' for line in lines)


def dump_path(program_file: Union[str, Path]) -> Path:
    """`code.sta` -> `code.sta.lex`, `code` -> `code.lex`."""
    program_file = Path(program_file)
    if program_file.suffix != '':
        return program_file.with_suffix(program_file.suffix + '.lex')
    return program_file.with_name(program_file.name + '.lex')


def write_tokens(tokens: Iterable[Token], path: Union[str, Path]) -> Path:
    path = Path(path)
    with open(path, 'w', encoding='utf-8') as out:
        out.write(format_tokens(tokens))
    return path
