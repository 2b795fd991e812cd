"""Expression tree utilities: height, renderings, walks and reconstruction.

Chains like ``1+1+1+...`` produce trees as deep as the input is long, so
every walk here uses an explicit stack instead of Python recursion.

There is no teardown routine. Nodes are garbage collected once the caller
drops the root; ``postorder`` yields them in release order (children before
parent) for callers that manage external resources per node.
"""

from __future__ import annotations

from typing import Iterator, Optional

from rdcalc.config import DEFAULT_INDENT
from rdcalc.errors import DivisionByZero
from rdcalc.models import BinaryOp, ExpressionNode, Operator, fold, postorder

# 2**10 - 1 columns is already wider than any terminal
MAX_MATRIX_HEIGHT = 10


def height(node: Optional[ExpressionNode]) -> int:
    """0 for an absent tree, otherwise 1 + the taller child's height."""
    if node is None:
        return 0
    return fold(node, lambda _: 1, lambda _, left, right: 1 + max(left, right))


def count_nodes(node: Optional[ExpressionNode]) -> int:
    if node is None:
        return 0
    return sum(1 for _ in postorder(node))


def _apply_checked(op: BinaryOp, left: int, right: int) -> int:
    if op.operator is Operator.DIV and right == 0:
        raise DivisionByZero()
    return op.operator.apply(left, right)


def evaluate(node: ExpressionNode) -> int:
    """Evaluate a tree in a separate post-order pass.

    Gives the same value the parser computed while building the tree.
    Raises DivisionByZero for a zero divisor (without a position, since a
    tree does not remember where it came from).
    """
    return fold(node, lambda leaf: leaf.digit, _apply_checked)


def to_infix(node: ExpressionNode) -> str:
    """Fully parenthesized text that re-parses to an identical tree."""
    return fold(
        node,
        lambda leaf: leaf.token,
        lambda op, left, right: f"({left} {op.token} {right})",
    )


def render_vertical(
    node: Optional[ExpressionNode], indent: int = DEFAULT_INDENT
) -> Iterator[str]:
    """Yield the tree rotated on its side, one node per line.

    Right subtree above, root in the middle, left subtree below; a node at
    depth d is indented by ``d * indent`` spaces. Read the output with your
    head tilted left.
    """
    stack: list[tuple[ExpressionNode, int]] = []
    current: Optional[tuple[ExpressionNode, int]] = (node, 0) if node is not None else None

    while stack or current is not None:
        while current is not None:
            stack.append(current)
            n, depth = current
            current = (n.right, depth + 1) if isinstance(n, BinaryOp) else None

        n, depth = stack.pop()
        yield " " * (depth * indent) + n.token
        current = (n.left, depth + 1) if isinstance(n, BinaryOp) else None


def render_matrix(node: Optional[ExpressionNode]) -> Iterator[str]:
    """Yield the tree top-down on a grid, root centred.

    The grid has ``height`` rows and ``2**height - 1`` columns; the children
    of a node on a level with ``h`` levels remaining sit ``2**(h-2)`` columns
    to either side. Cells are separated by one space and trailing blanks are
    stripped.

    Raises:
        ValueError: the tree is taller than MAX_MATRIX_HEIGHT.
    """
    total = height(node)
    if total == 0:
        return
    if total > MAX_MATRIX_HEIGHT:
        raise ValueError(
            f"tree height {total} exceeds {MAX_MATRIX_HEIGHT} for the matrix layout; "
            "use the vertical layout instead"
        )

    columns = 2 ** total - 1
    grid: list[list[Optional[str]]] = [[None] * columns for _ in range(total)]

    def place(n: ExpressionNode, row: int, column: int, levels: int) -> None:
        grid[row][column] = n.token
        if isinstance(n, BinaryOp):
            offset = 2 ** (levels - 2)
            place(n.left, row + 1, column - offset, levels - 1)
            place(n.right, row + 1, column + offset, levels - 1)

    place(node, 0, columns // 2, total)

    for row in grid:
        yield " ".join(cell or " " for cell in row).rstrip()
