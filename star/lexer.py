"""Lexical analyzer for the Star language.

The lexer performs a single left-to-right scan over the source text with
one character of lookahead and dispatches on the class of the current
character. The whole token sequence is produced before execution starts
and always ends with an END sentinel token.

Lexical errors are fatal and raised as `StarError`; negative integer
literals are clamped to zero and reported through the warning handler.
"""

from __future__ import annotations

from typing import List, Optional

from .errors import WarningHandler, lexical_error, report_warning
from .types import DEFAULT_LIMITS, KEYWORDS, OPERATORS, Limits, Token, TokenKind


def is_letter(c: str) -> bool:
    return c.isascii() and c.isalpha()


def is_digit(c: str) -> bool:
    return c.isascii() and c.isdigit()


def is_identifier_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == '_')


PUNCTUATION = {
    '.': TokenKind.STATEMENT_END,
    ',': TokenKind.COMMA,
    '{': TokenKind.BLOCK_OPEN,
    '}': TokenKind.BLOCK_CLOSE,
}


def tokenize(source: str, limits: Optional[Limits] = None,
             warn: Optional[WarningHandler] = None) -> List[Token]:
    """Convert source text into a list of tokens terminated by END.

    Characters that start no token are skipped silently. Comments are
    delimited by `/*` and `*/` and do not nest.
    """
    limits = limits or DEFAULT_LIMITS
    warn = warn or report_warning
    tokens: List[Token] = []
    i = 0
    line = 1
    length = len(source)

    def peek(offset: int = 0) -> str:
        j = i + offset
        return source[j] if j < length else ''

    def advance(n: int = 1):
        nonlocal i, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
            i += 1

    while i < length:
        c = source[i]
        # Skip whitespace
        if c.isspace():
            advance()
            continue
        # Block comment
        if c == '/' and peek(1) == '*':
            start_line = line
            advance(2)
            while not (peek() == '*' and peek(1) == '/'):
                if i >= length:
                    raise lexical_error(f"unterminated comment starting on line {start_line}")
                advance()
            advance(2)
            continue
        # Identifiers and keywords
        if is_letter(c):
            start = i
            while i < length and is_identifier_char(source[i]) and i - start < limits.max_identifier_length:
                advance()
            word = source[start:i]
            if word in KEYWORDS:
                tokens.append(Token(TokenKind.KEYWORD, word, line))
                continue
            if is_identifier_char(peek()):
                raise lexical_error(
                    f"identifier exceeds maximum length of {limits.max_identifier_length} "
                    f"characters on line {line}: {word}{peek()}...")
            tokens.append(Token(TokenKind.IDENTIFIER, word, line))
            continue
        # Integer literal, optionally signed
        if is_digit(c) or (c == '-' and is_digit(peek(1))):
            start = i
            if c == '-':
                advance()
            digits_start = i
            while is_digit(peek()) and i - digits_start < limits.max_integer_digits:
                advance()
            if is_digit(peek()):
                raise lexical_error(
                    f"integer exceeds maximum length of {limits.max_integer_digits} digits on line {line}")
            value = int(source[start:i])
            if value < 0:
                warn(f"integer constant {value} on line {line} forced to zero")
                value = 0
            tokens.append(Token(TokenKind.INTEGER, str(value), line))
            continue
        # String literal, quotes are kept in the token text
        if c == '"':
            start_line = line
            chars = [c]
            advance()
            escape = False
            while True:
                if i >= length:
                    raise lexical_error(f"unterminated string starting on line {start_line}")
                ch = source[i]
                chars.append(ch)
                advance()
                if escape:
                    escape = False
                elif ch == '\\':
                    escape = True
                elif ch == '"':
                    break
                if len(chars) >= limits.max_string_length:
                    raise lexical_error(
                        f"string exceeds maximum length of {limits.max_string_length - 1} "
                        f"characters on line {start_line}")
            if len(chars) >= limits.max_string_length:
                raise lexical_error(
                    f"string exceeds maximum length of {limits.max_string_length - 1} "
                    f"characters on line {start_line}")
            tokens.append(Token(TokenKind.STRING, ''.join(chars), start_line))
            continue
        if c in ('.', ','):
            tokens.append(Token(PUNCTUATION[c], '', line))
            advance()
            continue
        if c in OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, c, line))
            advance()
            continue
        if c in ('{', '}'):
            tokens.append(Token(PUNCTUATION[c], c, line))
            advance()
            continue
        # anything else is ignored
        advance()
    tokens.append(Token(TokenKind.END, '', line))
    return tokens
