"""Environment-driven defaults for rdcalc.

Read at call time so a CLI option or a test's monkeypatch always wins over
whatever was set when the module was imported.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class TreeLayout(str, Enum):
    """How the CLI draws the expression tree."""

    VERTICAL = "vertical"
    MATRIX = "matrix"
    NONE = "none"


DEFAULT_MAX_DEPTH = 200
DEFAULT_INDENT = 5


def _positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def max_depth_from_env() -> int:
    """Read RDCALC_MAX_DEPTH only, ignoring the display settings."""
    return _positive_int("RDCALC_MAX_DEPTH", DEFAULT_MAX_DEPTH)


def _layout(name: str, default: TreeLayout) -> TreeLayout:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return TreeLayout(raw.strip().lower())
    except ValueError:
        choices = ", ".join(layout.value for layout in TreeLayout)
        raise ValueError(f"{name} must be one of {choices}, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Resolved configuration."""

    max_depth: int = DEFAULT_MAX_DEPTH
    indent: int = DEFAULT_INDENT
    tree_layout: TreeLayout = TreeLayout.VERTICAL

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from RDCALC_* environment variables.

        RDCALC_MAX_DEPTH: parenthesis nesting bound (default 200).
        RDCALC_INDENT: indent unit of the vertical tree (default 5).
        RDCALC_TREE: vertical, matrix or none (default vertical).
        """
        return cls(
            max_depth=max_depth_from_env(),
            indent=_positive_int("RDCALC_INDENT", DEFAULT_INDENT),
            tree_layout=_layout("RDCALC_TREE", TreeLayout.VERTICAL),
        )
