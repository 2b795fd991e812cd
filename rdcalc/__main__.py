"""CLI for rdcalc.

Usage:
    python -m rdcalc eval "2 + 3 * 4"             # Result and vertical tree
    python -m rdcalc eval "(1+2)*3" --tree matrix # Grid layout
    python -m rdcalc eval "9-3-2" --tree none     # Result only
    python -m rdcalc eval "8/4/2" --json          # JSON on stdout
    python -m rdcalc eval -- "-1"                 # Input starting with "-"
    python -m rdcalc repl                         # Prompt until quit/EOF
    python -m rdcalc grammar                      # Show grammar rules

Results go to stdout; banners, prompts and errors go to stderr.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rdcalc.config import Settings, TreeLayout
from rdcalc.errors import CalcError
from rdcalc.models import ExpressionNode, ParseResult
from rdcalc.parser import GRAMMAR, parse_and_evaluate
from rdcalc.tree import count_nodes, height, render_matrix, render_vertical

app = typer.Typer(
    name="rdcalc",
    help="Recursive-descent evaluator for single-digit arithmetic",
    no_args_is_help=True,
)
console = Console(stderr=True)

_QUIT_WORDS = ("quit", "exit")


def _settings(
    tree: Optional[str] = None,
    indent: Optional[int] = None,
    max_depth: Optional[int] = None,
) -> Settings:
    """Environment defaults with CLI overrides applied. Exits 1 on bad values."""
    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    overrides: dict = {}
    if tree is not None:
        try:
            overrides["tree_layout"] = TreeLayout(tree.lower())
        except ValueError:
            console.print(f"[red]Invalid tree layout: {escape(tree)}[/red]. Choose: vertical, matrix, none")
            raise typer.Exit(1)
    if indent is not None:
        overrides["indent"] = indent
    if max_depth is not None:
        overrides["max_depth"] = max_depth
    return dataclasses.replace(settings, **overrides)


def _tree_lines(tree: ExpressionNode, settings: Settings) -> list[str]:
    if settings.tree_layout == TreeLayout.VERTICAL:
        return list(render_vertical(tree, settings.indent))
    if settings.tree_layout == TreeLayout.MATRIX:
        return list(render_matrix(tree))
    return []


def _render_grammar() -> None:
    table = Table(title="Grammar", show_header=True, header_style="bold")
    table.add_column("Rule", style="green", min_width=10)
    table.add_column("Definition", min_width=30)
    for rule, definition in GRAMMAR:
        table.add_row(rule, definition)
    console.print()
    console.print(table)
    console.print()


def _echo_result(result: ParseResult, lines: list[str], settings: Settings) -> None:
    typer.echo(f"Expression result: {result.source} = {result.value}")
    if settings.tree_layout != TreeLayout.NONE:
        typer.echo("")
        typer.echo("Expression tree:")
        for line in lines:
            typer.echo(line)


def _report_error(e: Exception) -> None:
    console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression to evaluate, e.g. '(2+3)*4'. Put -- before input that starts with '-'"),
    tree: Optional[str] = typer.Option(None, "--tree", "-t", help="Tree layout: vertical, matrix, none"),
    indent: Optional[int] = typer.Option(None, "--indent", min=1, help="Indent unit of the vertical tree"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1, help="Parenthesis nesting bound"),
    as_json: bool = typer.Option(False, "--json", help="Print the result (or error) as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tree statistics"),
) -> None:
    """Evaluate one expression and show its tree."""
    settings = _settings(tree, indent, max_depth)

    try:
        result = parse_and_evaluate(expression, max_depth=settings.max_depth)
    except CalcError as e:
        if as_json:
            typer.echo(json.dumps({"source": expression, "error": e.to_dict()}, indent=2))
        else:
            _report_error(e)
        raise typer.Exit(1)

    if verbose:
        console.print(
            f"[dim]height={height(result.tree)} nodes={count_nodes(result.tree)} "
            f"max_depth={settings.max_depth}[/dim]"
        )

    if as_json:
        typer.echo(result.to_json())
        return

    try:
        lines = _tree_lines(result.tree, settings)
    except ValueError as e:
        _report_error(e)
        raise typer.Exit(1)
    _echo_result(result, lines, settings)


@app.command("repl")
def cmd_repl(
    tree: Optional[str] = typer.Option(None, "--tree", "-t", help="Tree layout: vertical, matrix, none"),
    indent: Optional[int] = typer.Option(None, "--indent", min=1, help="Indent unit of the vertical tree"),
) -> None:
    """Prompt for expressions until a blank line, 'quit' or EOF."""
    settings = _settings(tree, indent)

    console.print("[bold]Welcome to the arithmetic expression evaluator[/bold]")
    console.print("Expressions must obey the following grammar:")
    _render_grammar()

    while True:
        try:
            line = console.input("Enter the arithmetic expression to evaluate: ")
        except EOFError:
            console.print()
            break
        if not line.strip() or line.strip().lower() in _QUIT_WORDS:
            break

        try:
            result = parse_and_evaluate(line, max_depth=settings.max_depth)
            lines = _tree_lines(result.tree, settings)
        except (CalcError, ValueError) as e:
            _report_error(e)
            continue
        _echo_result(result, lines, settings)
        typer.echo("")

    console.print("[dim]Bye.[/dim]")


@app.command("grammar")
def cmd_grammar() -> None:
    """Show the grammar accepted by the evaluator."""
    _render_grammar()


if __name__ == "__main__":
    app()
