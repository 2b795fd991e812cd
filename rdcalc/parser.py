"""Recursive-descent parser and evaluator.

Grammar:

    expression := term { ('+' | '-') term }
    term       := factor { ('*' | '/') factor }
    factor     := '(' expression ')' | digit
    digit      := '0'..'9'

Each nonterminal returns ``(value, node)``: parsing and evaluation are fused,
and a child is fully parsed, evaluated and built before its parent. The
repetition rules fold left to right, so same-precedence chains are
left-associative (``9-3-2`` is ``(9-3)-2``).
"""

from __future__ import annotations

from typing import Optional

from rdcalc.config import max_depth_from_env
from rdcalc.cursor import Cursor
from rdcalc.errors import (
    DivisionByZero,
    InvalidLiteral,
    NestingTooDeep,
    TrailingInput,
    UnmatchedParenthesis,
)
from rdcalc.models import (
    ADDITIVE,
    MULTIPLICATIVE,
    BinaryOp,
    ExpressionNode,
    Leaf,
    Operator,
    ParseResult,
)

DIGITS = "0123456789"

# (rule, definition) pairs, for display
GRAMMAR = (
    ("expression", "term { ('+' | '-') term }"),
    ("term", "factor { ('*' | '/') factor }"),
    ("factor", "'(' expression ')' | digit"),
    ("digit", "'0' | '1' | ... | '9'"),
)


class Parser:
    """One parse over one input. Not reusable; build a new one per input."""

    def __init__(self, text: str, max_depth: int) -> None:
        self._cursor = Cursor(text)
        self._max_depth = max_depth
        # Positions of the '(' currently awaiting their ')'
        self._open_parens: list[int] = []

    def parse(self) -> ParseResult:
        """Parse a complete expression; anything left over is an error."""
        value, tree = self.expression()
        char = self._cursor.skip_whitespace_and_peek()
        if char is not None:
            raise TrailingInput(self._cursor.position, char)
        return ParseResult(value=value, tree=tree, source=self._cursor.text)

    def expression(self) -> tuple[int, ExpressionNode]:
        value, node = self.term()

        while True:
            op = self._match(ADDITIVE)
            if op is None:
                break
            rhs_value, rhs = self.term()
            value = op.apply(value, rhs_value)
            node = BinaryOp(op, node, rhs)

        return value, node

    def term(self) -> tuple[int, ExpressionNode]:
        value, node = self.factor()

        while True:
            op = self._match(MULTIPLICATIVE)
            if op is None:
                break
            op_position = self._cursor.position - 1
            rhs_value, rhs = self.factor()
            if op is Operator.DIV and rhs_value == 0:
                raise DivisionByZero(op_position)
            value = op.apply(value, rhs_value)
            node = BinaryOp(op, node, rhs)

        return value, node

    def factor(self) -> tuple[int, ExpressionNode]:
        if not self._cursor.try_consume("("):
            return self.digit()

        open_position = self._cursor.position - 1
        if len(self._open_parens) >= self._max_depth:
            raise NestingTooDeep(open_position, self._max_depth)
        self._open_parens.append(open_position)

        value, node = self.expression()
        if not self._cursor.try_consume(")"):
            raise UnmatchedParenthesis(
                self._cursor.position, self._cursor.peek(), open_position,
            )
        self._open_parens.pop()
        return value, node

    def digit(self) -> tuple[int, Leaf]:
        char = self._cursor.skip_whitespace_and_peek()
        position = self._cursor.position

        if char is None and self._open_parens:
            # Input ran out inside a group: the missing ')' is the real problem
            raise UnmatchedParenthesis(position, None, self._open_parens[-1])
        if char is None or char not in DIGITS:
            raise InvalidLiteral(position, char)

        self._cursor.try_consume(char)
        value = ord(char) - ord("0")
        return value, Leaf(value)

    def _match(self, operators: tuple[Operator, ...]) -> Optional[Operator]:
        """Consume the first of ``operators`` that comes next, if any."""
        for op in operators:
            if self._cursor.try_consume(op.value):
                return op
        return None

    @property
    def position(self) -> int:
        return self._cursor.position

    @property
    def depth(self) -> int:
        """Parentheses currently open."""
        return len(self._open_parens)


def parse_and_evaluate(text: str, max_depth: Optional[int] = None) -> ParseResult:
    """Parse ``text`` and return its value together with its expression tree.

    Args:
        text: One line containing digits, ``+ - * /``, parentheses and
            whitespace.
        max_depth: Bound on simultaneously open parentheses. Defaults to
            RDCALC_MAX_DEPTH (see rdcalc.config).

    Returns:
        ParseResult(value, tree, source).

    Raises:
        ExpressionSyntaxError: InvalidLiteral, UnmatchedParenthesis,
            TrailingInput or NestingTooDeep.
        DivisionByZero: a divisor evaluated to zero.
    """
    if max_depth is None:
        max_depth = max_depth_from_env()
    if max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {max_depth}")

    parser = Parser(text, max_depth)
    try:
        return parser.parse()
    except RecursionError:
        # max_depth set beyond what the interpreter stack can hold
        raise NestingTooDeep(
            parser.position, max_depth, reached=parser.depth, stack_exhausted=True,
        ) from None
