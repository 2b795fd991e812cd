"""Typed errors raised by the rdcalc parser.

Every failure aborts the whole parse. Syntax problems are ValueErrors,
division by zero is a ZeroDivisionError, and all of them share CalcError
so a host can catch one base class and read kind/position/char.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure classification."""

    INVALID_LITERAL = "invalid_literal"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    TRAILING_INPUT = "trailing_input"
    NESTING_TOO_DEEP = "nesting_too_deep"
    DIVISION_BY_ZERO = "division_by_zero"


def _describe(char: Optional[str]) -> str:
    if char is None:
        return "end of input"
    return repr(char)


class CalcError(Exception):
    """Base class for every parse/evaluation failure."""

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        char: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.position = position
        self.char = char

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "position": self.position,
            "char": self.char,
        }


class ExpressionSyntaxError(CalcError, ValueError):
    """Input does not match the grammar."""


class InvalidLiteral(ExpressionSyntaxError):
    kind = ErrorKind.INVALID_LITERAL

    def __init__(self, position: int, char: Optional[str]) -> None:
        if char is None:
            message = "invalid literal: expected a digit, got end of input"
        else:
            message = f"invalid literal: {_describe(char)} is not a digit"
        super().__init__(message, position, char)


class UnmatchedParenthesis(ExpressionSyntaxError):
    """A '(' was never closed.

    ``position`` is where the ')' was expected; ``open_position`` is the
    offending '('.
    """

    kind = ErrorKind.UNMATCHED_PARENTHESIS

    def __init__(self, position: int, char: Optional[str], open_position: int) -> None:
        super().__init__(
            f"unmatched parenthesis: '(' at position {open_position} "
            f"expects ')', got {_describe(char)}",
            position,
            char,
        )
        self.open_position = open_position


class TrailingInput(ExpressionSyntaxError):
    kind = ErrorKind.TRAILING_INPUT

    def __init__(self, position: int, char: str) -> None:
        super().__init__(
            f"trailing input: unexpected {_describe(char)} after a complete expression",
            position,
            char,
        )


class NestingTooDeep(ExpressionSyntaxError):
    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(
        self,
        position: int,
        max_depth: int,
        reached: Optional[int] = None,
        stack_exhausted: bool = False,
    ) -> None:
        if stack_exhausted:
            message = (
                f"nesting too deep: interpreter stack exhausted "
                f"with {reached} open parentheses"
            )
        else:
            message = f"nesting too deep: more than {max_depth} open parentheses"
        super().__init__(message, position, "(")
        self.max_depth = max_depth
        self.reached = max_depth if reached is None else reached
        self.stack_exhausted = stack_exhausted


class DivisionByZero(CalcError, ZeroDivisionError):
    """The divisor of a '/' evaluated to zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, position: Optional[int] = None) -> None:
        super().__init__("division by zero", position, "/" if position is not None else None)
