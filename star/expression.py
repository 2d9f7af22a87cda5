"""Expression evaluation for the Star language.

Expressions are flat sequences of operands (identifiers or integer
literals) separated by operators. They are folded strictly from left to
right: there is no operator precedence, so `2 + 3 * 4` is 20.
"""

from __future__ import annotations

from typing import Sequence

from .errors import runtime_error, semantic_error
from .symbol_table import SymbolTable
from .types import Token, TokenKind, VarKind


def operand_value(token: Token, symbols: SymbolTable) -> int:
    if token.kind is TokenKind.INTEGER:
        return int(token.text)
    if token.kind is TokenKind.IDENTIFIER:
        var = symbols.lookup(token.text)
        if var is None:
            raise semantic_error(f'undefined variable {token.text}')
        if var.kind is not VarKind.INTEGER:
            raise semantic_error(f'variable {token.text} is not an integer')
        return var.value
    raise runtime_error(f'expected an operand, got {token!r}')


def divide(a: int, b: int) -> int:
    # integer division truncating toward zero
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def apply_operator(op: str, a: int, b: int) -> int:
    if op == '+':
        return a + b
    if op == '-':
        return a - b
    if op == '*':
        return a * b
    if op == '/':
        if b == 0:
            raise runtime_error('division by zero')
        return divide(a, b)
    raise runtime_error(f'unknown operator {op}')


def evaluate(tokens: Sequence[Token], symbols: SymbolTable) -> int:
    """Reduce `operand (operator operand)*` to a single integer."""
    if not tokens:
        raise runtime_error('empty expression')
    result = operand_value(tokens[0], symbols)
    i = 1
    while i < len(tokens):
        op = tokens[i]
        if op.kind is not TokenKind.OPERATOR:
            raise runtime_error(f'unknown operator {op.text or op.kind.value}')
        if i + 1 >= len(tokens):
            raise runtime_error(f'missing operand after {op.text}')
        result = apply_operator(op.text, result, operand_value(tokens[i + 1], symbols))
        i += 2
    return result
