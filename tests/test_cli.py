"""Tests for the typer CLI (eval, repl, grammar)."""

import json

import pytest
from typer.testing import CliRunner

from rdcalc.__main__ import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("RDCALC_MAX_DEPTH", "RDCALC_INDENT", "RDCALC_TREE"):
        monkeypatch.delenv(name, raising=False)


# --- eval ---

def test_eval_prints_result_and_tree():
    result = runner.invoke(app, ["eval", "1+2"])
    assert result.exit_code == 0
    assert "Expression result: 1+2 = 3" in result.output
    assert "Expression tree:" in result.output
    assert "     2\n+\n     1\n" in result.output


def test_eval_without_tree():
    result = runner.invoke(app, ["eval", "9-3-2", "--tree", "none"])
    assert result.exit_code == 0
    assert "Expression result: 9-3-2 = 4" in result.output
    assert "Expression tree:" not in result.output


def test_eval_matrix_tree():
    result = runner.invoke(app, ["eval", "1+2", "-t", "matrix"])
    assert result.exit_code == 0
    assert "  +\n1   2" in result.output


def test_eval_indent_option():
    result = runner.invoke(app, ["eval", "1*2", "--indent", "2"])
    assert result.exit_code == 0
    assert "  2\n*\n  1" in result.output


def test_eval_layout_from_environment(monkeypatch):
    monkeypatch.setenv("RDCALC_TREE", "none")
    result = runner.invoke(app, ["eval", "4"])
    assert result.exit_code == 0
    assert "Expression tree:" not in result.output


def test_eval_json():
    result = runner.invoke(app, ["eval", "2*3", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data == {
        "source": "2*3",
        "value": 6,
        "tree": {"operator": "*", "left": {"digit": 2}, "right": {"digit": 3}},
    }


def test_eval_json_error():
    result = runner.invoke(app, ["eval", "5/0", "--json"])
    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["error"]["kind"] == "division_by_zero"
    assert data["error"]["position"] == 1


def test_eval_syntax_error_exits_1():
    result = runner.invoke(app, ["eval", "1 2"])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "trailing input" in result.output


def test_eval_division_by_zero_exits_1():
    result = runner.invoke(app, ["eval", "(1+2)/(3-3)"])
    assert result.exit_code == 1
    assert "division by zero" in result.output
    assert "Expression result" not in result.output


def test_eval_invalid_layout():
    result = runner.invoke(app, ["eval", "1", "--tree", "sideways"])
    assert result.exit_code == 1
    assert "Invalid tree layout" in result.output


def test_eval_invalid_environment(monkeypatch):
    monkeypatch.setenv("RDCALC_MAX_DEPTH", "lots")
    result = runner.invoke(app, ["eval", "1"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_eval_max_depth_option():
    result = runner.invoke(app, ["eval", "((1))", "--max-depth", "1"])
    assert result.exit_code == 1
    assert "nesting too deep" in result.output


def test_eval_matrix_too_tall():
    text = "-".join(["1"] * 12)
    result = runner.invoke(app, ["eval", text, "--tree", "matrix"])
    assert result.exit_code == 1
    assert "Expression result" not in result.output


def test_eval_verbose():
    result = runner.invoke(app, ["eval", "(2+3)*4", "-v", "--tree", "none"])
    assert result.exit_code == 0
    assert "height=3 nodes=5" in result.output


# --- repl ---

def test_repl_evaluates_until_quit():
    result = runner.invoke(app, ["repl", "--tree", "none"], input="2+3*4\n(2+3)*4\nquit\n")
    assert result.exit_code == 0
    assert "Welcome to the arithmetic expression evaluator" in result.output
    assert "Expression result: 2+3*4 = 14" in result.output
    assert "Expression result: (2+3)*4 = 20" in result.output


def test_repl_reports_errors_and_continues():
    result = runner.invoke(app, ["repl", "-t", "none"], input="(\n1+1\n")
    assert result.exit_code == 0
    assert "unmatched parenthesis" in result.output
    assert "Expression result: 1+1 = 2" in result.output


def test_repl_stops_at_blank_line():
    result = runner.invoke(app, ["repl"], input="\n7\n")
    assert result.exit_code == 0
    assert "Expression result" not in result.output


# --- grammar ---

def test_grammar_lists_rules():
    result = runner.invoke(app, ["grammar"])
    assert result.exit_code == 0
    for rule in ("expression", "term", "factor", "digit"):
        assert rule in result.output


def test_eval_json_long_chain():
    text = "+".join(["1"] * 1500)
    result = runner.invoke(app, ["eval", text, "--json"])
    assert result.exit_code == 0
    assert '"value": 1500' in result.stdout


def test_eval_input_starting_with_minus():
    result = runner.invoke(app, ["eval", "--", "-1"])
    assert result.exit_code == 1
    assert "invalid literal" in result.output
