"""Data models for rdcalc.

Operator enum, the Leaf/BinaryOp expression tree and ParseResult, the typed
structures that flow from parser to tree utilities to CLI.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, NamedTuple, Optional, TypeVar, Union


class Operator(str, Enum):
    """Binary operators, grouped by precedence level."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    def apply(self, left: int, right: int) -> int:
        """Combine two operands.

        Division truncates toward zero. The caller checks for a zero divisor.
        """
        if self is Operator.ADD:
            return left + right
        if self is Operator.SUB:
            return left - right
        if self is Operator.MUL:
            return left * right
        quotient = abs(left) // abs(right)
        return quotient if (left < 0) == (right < 0) else -quotient


ADDITIVE = (Operator.ADD, Operator.SUB)
MULTIPLICATIVE = (Operator.MUL, Operator.DIV)

T = TypeVar("T")


@dataclass(frozen=True)
class Leaf:
    """A single-digit operand."""

    digit: int

    @property
    def token(self) -> str:
        return str(self.digit)

    @property
    def children(self) -> tuple:
        return ()

    def to_dict(self) -> dict:
        return {"digit": self.digit}


@dataclass(frozen=True, eq=False, repr=False)
class BinaryOp:
    """An operator applied to two owned subtrees.

    Equality, hashing, repr and to_dict walk the tree with an explicit stack;
    a chain like ``1+1+...+1`` is as deep as it is long.
    """

    operator: Operator
    left: ExpressionNode
    right: ExpressionNode

    @property
    def token(self) -> str:
        return self.operator.value

    @property
    def children(self) -> tuple[ExpressionNode, ExpressionNode]:
        return (self.left, self.right)

    def _postfix(self) -> tuple[str, ...]:
        # Postfix token order identifies a binary tree uniquely
        return tuple(node.token for node in postorder(self))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryOp):
            return NotImplemented
        return self is other or self._postfix() == other._postfix()

    def __hash__(self) -> int:
        return hash(self._postfix())

    def __repr__(self) -> str:
        return fold(
            self,
            repr,
            lambda op, left, right: f"BinaryOp(Operator.{op.operator.name}, {left}, {right})",
        )

    def to_dict(self) -> dict:
        return fold(
            self,
            lambda leaf: leaf.to_dict(),
            lambda op, left, right: {"operator": op.token, "left": left, "right": right},
        )


ExpressionNode = Union[Leaf, BinaryOp]


def postorder(node: Optional[ExpressionNode]) -> Iterator[ExpressionNode]:
    """Yield every node, children (left then right) before their parent."""
    if node is None:
        return
    stack: list[tuple[ExpressionNode, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded or isinstance(current, Leaf):
            yield current
            continue
        stack.append((current, True))
        stack.append((current.right, False))
        stack.append((current.left, False))


def fold(
    node: ExpressionNode,
    leaf: Callable[[Leaf], T],
    branch: Callable[[BinaryOp, T, T], T],
) -> T:
    """Combine child results bottom-up over a post-order walk."""
    results: list[T] = []
    for current in postorder(node):
        if isinstance(current, Leaf):
            results.append(leaf(current))
        else:
            right = results.pop()
            left = results.pop()
            results.append(branch(current, left, right))
    return results.pop()


class ParseResult(NamedTuple):
    """Value and tree of one successful parse."""

    value: int
    tree: ExpressionNode
    source: str = ""

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "source": self.source,
            "value": self.value,
            "tree": self.tree.to_dict(),
        }

    def to_json(self) -> str:
        """Encode as JSON text.

        Same document as ``json.dumps(self.to_dict())``, but the tree is
        encoded bottom-up, so long chains do not hit the encoder's
        recursion limit.
        """
        tree = fold(
            self.tree,
            lambda leaf: json.dumps(leaf.to_dict()),
            lambda op, left, right: (
                f'{{"operator": {json.dumps(op.token)}, "left": {left}, "right": {right}}}'
            ),
        )
        return f'{{"source": {json.dumps(self.source)}, "value": {self.value}, "tree": {tree}}}'
