"""rdcalc: recursive-descent evaluator for single-digit arithmetic.

Parses expressions over the digits 0-9 with + - * / and parentheses,
builds the binary expression tree of the derivation and evaluates it to an
integer.

Usage:
    python -m rdcalc eval "(2+3)*4"            # Result and vertical tree
    python -m rdcalc eval "9-3-2" --tree matrix
    python -m rdcalc eval "8/4/2" --json       # Machine-readable result
    python -m rdcalc repl                      # Interactive prompt
    python -m rdcalc grammar                   # Show the grammar

Embedding:
    >>> from rdcalc import parse_and_evaluate
    >>> value, tree, _ = parse_and_evaluate("2+3*4")
    >>> value
    14
"""

from rdcalc.errors import (
    CalcError,
    DivisionByZero,
    ErrorKind,
    ExpressionSyntaxError,
    InvalidLiteral,
    NestingTooDeep,
    TrailingInput,
    UnmatchedParenthesis,
)
from rdcalc.models import BinaryOp, ExpressionNode, Leaf, Operator, ParseResult
from rdcalc.parser import parse_and_evaluate

__all__ = [
    "BinaryOp",
    "CalcError",
    "DivisionByZero",
    "ErrorKind",
    "ExpressionNode",
    "ExpressionSyntaxError",
    "InvalidLiteral",
    "Leaf",
    "NestingTooDeep",
    "Operator",
    "ParseResult",
    "TrailingInput",
    "UnmatchedParenthesis",
    "parse_and_evaluate",
]
