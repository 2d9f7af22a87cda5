"""Type definitions for the Star language.

This module defines the token and variable records shared by the lexer,
the symbol table and the interpreter, together with the configurable
capacity limits of a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re
from typing import Union


class TokenKind(Enum):
    IDENTIFIER = 'Identifier'
    INTEGER = 'IntegerLiteral'
    OPERATOR = 'Operator'
    STRING = 'StringLiteral'
    KEYWORD = 'Keyword'
    STATEMENT_END = 'StatementEnd'
    COMMA = 'Comma'
    BLOCK_OPEN = 'BlockOpen'
    BLOCK_CLOSE = 'BlockClose'
    END = 'End'


class VarKind(Enum):
    INTEGER = 'Integer'
    TEXT = 'Text'


KEYWORDS = frozenset({'int', 'text', 'is', 'loop', 'times', 'read', 'write', 'newLine'})

OPERATORS = frozenset('+-*/')

ESCAPE = re.compile(r'\\(.)', re.DOTALL)


@dataclass(frozen=True)
class Token:
    """A lexical unit.

    `text` holds the literal spelling. String literals keep their
    surrounding quotes; `value` gives the content alone with backslash
    escapes resolved.
    """
    kind: TokenKind
    text: str = ''
    line: int = 0

    @property
    def value(self) -> str:
        if self.kind is TokenKind.STRING and len(self.text) >= 2:
            return ESCAPE.sub(r"\1", self.text[1:-1])
        return self.text

    def is_keyword(self, word: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.text == word

    def __repr__(self) -> str:
        if self.text:
            return f"{self.kind.value}({self.text})"
        return self.kind.value


@dataclass
class Variable:
    name: str
    kind: VarKind
    value: Union[int, str]

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Limits:
    """Capacity limits of a run.

    The defaults are the caps of the language: identifiers of at most 10
    characters, integer literals of at most 8 digits, string literals
    shorter than 256 characters (quotes included) and 100 variables.
    """
    max_identifier_length: int = 10
    max_integer_digits: int = 8
    max_string_length: int = 256
    max_variables: int = 100


DEFAULT_LIMITS = Limits()


@dataclass
class ErrorVal:
    """Describes a fatal error: its category and a human readable message.

    Categories are 'LexicalError', 'SemanticError', 'RuntimeError',
    'SyntaxError' and 'InputError'.
    """
    name: str
    message: str

    def __str__(self) -> str:
        return f"{self.name}: {self.message}"


def zero_value(kind: VarKind) -> Union[int, str]:
    if kind is VarKind.INTEGER:
        return 0
    return ''
