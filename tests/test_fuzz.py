"""Tests for the fuzz driver scripts."""

import shlex
import subprocess
import sys

import pytest
import simplejson as json

import driver
import main as fuzz
from exprgen import (
    BinaryExpr,
    BinOp,
    IntegerConstant,
    ParenthesizedExpr,
    VariableExpr,
)
from exprgen.parser import ExprParser


def python_cmd(code: str) -> str:
    return shlex.join([sys.executable, '-c', code])


ECHO = python_cmd('import sys; print(sys.stdin.read())')
FAIL = python_cmd('import sys; sys.exit(3)')


class TestDriver:
    def test_evaluate_pipes_expression(self):
        assert driver.evaluate('1 + 2', ECHO) == '1 + 2'

    def test_evaluate_accepts_argv(self):
        cmd = [sys.executable, '-c', 'import sys; print(len(sys.stdin.read()))']

        assert driver.evaluate('abc', cmd) == '3'

    def test_evaluate_failure(self):
        with pytest.raises(subprocess.CalledProcessError):
            driver.evaluate('1', FAIL)

    def test_round_trip(self):
        expr = BinaryExpr(
            ParenthesizedExpr(
                BinaryExpr(IntegerConstant(1), BinOp.ADD, IntegerConstant(2))
            ),
            BinOp.MUL,
            IntegerConstant(3),
        )

        assert driver.check_round_trip(expr, ExprParser())

    def test_round_trip_detects_missing_parentheses(self):
        """A tree the printer cannot express does not survive."""
        expr = BinaryExpr(
            BinaryExpr(IntegerConstant(1), BinOp.ADD, IntegerConstant(2)),
            BinOp.MUL,
            IntegerConstant(3),
        )

        assert not driver.check_round_trip(expr, ExprParser())

    def test_round_trip_unparseable_rendering(self):
        """Text outside the grammar is a mismatch, not an error."""
        assert not driver.check_round_trip(VariableExpr('$x'), ExprParser())
        assert not driver.check_round_trip(VariableExpr('1 +'), ExprParser())


class TestMain:
    def tap_lines(self, capsys):
        return capsys.readouterr().out.splitlines()

    def test_reports_tap(self, capsys):
        fuzz.main(['-n', '5', '-s', '1'])

        lines = self.tap_lines(capsys)

        assert lines[:2] == ['TAP version 14', '1..5']
        assert len(lines) == 7
        assert all(line.startswith('ok - ') for line in lines[2:])

    def test_seed_is_reproducible(self, capsys):
        fuzz.main(['-n', '10', '-s', '77'])
        first = self.tap_lines(capsys)

        fuzz.main(['-n', '10', '-s', '77'])

        assert self.tap_lines(capsys) == first

    def test_verbose(self, capsys):
        fuzz.main(['-n', '2', '-s', '1', '-v', '-e', ECHO])

        out = capsys.readouterr().out

        assert out.count('\nok\n') == 2
        assert 'round_trip: ok' in out
        assert 'result: ' in out

    def test_evaluator_failure(self, capsys):
        fuzz.main(['-n', '1', '-s', '1', '-e', FAIL])

        out = capsys.readouterr().out

        assert 'not ok' in out
        assert 'error: evaluator exited with status 3' in out

    def test_config_file(self, capsys, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(
            json.dumps(
                {
                    'bin_ops': ['+'],
                    'un_ops': ['-'],
                    'parenthesize_prob': 0,
                    'expr_kind_weights': {
                        'double_constant': {'initial_weight': 0},
                        'variable_expr': {'initial_weight': 0},
                    },
                }
            )
        )

        fuzz.main(['-n', '20', '-s', '5', '-c', str(path)])

        exprs = [line[len('ok - '):] for line in self.tap_lines(capsys)[2:]]

        assert len(exprs) == 20
        for text in exprs:
            assert set(text) <= set('0123456789+-() ')

    def test_unparseable_rendering_is_not_ok(self, capsys, monkeypatch):
        monkeypatch.setattr(fuzz, 'generate', lambda config, rng: VariableExpr('$x'))

        fuzz.main(['-n', '2', '-s', '1'])

        lines = self.tap_lines(capsys)

        assert lines.count('not ok') == 2
        assert '  round_trip: mismatch' in lines
        assert not any(line.startswith('Bail out!') for line in lines)

    def test_bad_config_bails_out(self, capsys, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'bin_ops': []}))

        fuzz.main(['-n', '1', '-c', str(path)])

        assert self.tap_lines(capsys)[-1].startswith('Bail out!')

    def test_format_diagnostic(self):
        text = fuzz.format_diagnostic(IntegerConstant(4), False, '4', 'boom')

        assert text.splitlines() == [
            '  ---',
            '  expr: 4',
            '  round_trip: mismatch',
            '  result: 4',
            '  error: boom',
            '  ...',
        ]
