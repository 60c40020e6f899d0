from __future__ import annotations

import unittest
from contextlib import redirect_stdout
from dataclasses import dataclass
from io import StringIO
from pathlib import Path

import quark_lang


ROOT = Path(__file__).resolve().parents[1]
FIXTURES = ROOT / "tests" / "fixtures"


@dataclass
class _ExecResult:
    stdout: str
    error: Exception | None
    interpreter: quark_lang.QuarkInterpreter

    @property
    def lines(self) -> list[str]:
        return self.stdout.splitlines()


def _execute_fixture(
    fixture_name: str,
    *,
    limits: quark_lang.ExecutionLimits | None = None,
) -> _ExecResult:
    fixture_path = FIXTURES / fixture_name
    if not fixture_path.exists():
        raise FileNotFoundError(f"Missing fixture: {fixture_path}")

    interpreter = quark_lang.QuarkInterpreter(
        io_handler=quark_lang.ConsoleIO(),
        limits=limits or quark_lang.ExecutionLimits.unbounded(),
    )

    buf = StringIO()
    err: Exception | None = None
    with redirect_stdout(buf):
        try:
            interpreter.execute(fixture_path.read_text(encoding="utf-8"))
        except Exception as e:
            err = e

    return _ExecResult(stdout=buf.getvalue(), error=err, interpreter=interpreter)


class CanonTests(unittest.TestCase):
    # I. Straight-line programs

    def test_sum_flushes_one_line(self) -> None:
        r = _execute_fixture("sum.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["8"])

    def test_string_literals_are_unquoted(self) -> None:
        r = _execute_fixture("strings.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["hello world and more"])

    def test_division_formats_like_numbers(self) -> None:
        r = _execute_fixture("division.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["2", "Infinity", "0.25"])

    # II. Jumps

    def test_countdown_loop_runs_three_times(self) -> None:
        r = _execute_fixture("countdown.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["3", "2", "1"])
        self.assertEqual(r.interpreter.context.variables["n"], 0)

    def test_forward_jump_skips_lines(self) -> None:
        r = _execute_fixture("forward_jump.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["2"])

    def test_loop_fills_heap(self) -> None:
        r = _execute_fixture("heap_squares.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["5", "16"])
        self.assertEqual(r.interpreter.context.heap, [0, 1, 4, 9, 16])

    def test_counter_ends_one_past_the_last_line(self) -> None:
        r = _execute_fixture("heap_squares.quark")
        program_length = len(
            (FIXTURES / "heap_squares.quark").read_text(encoding="utf-8").split("\n")
        )
        self.assertEqual(r.interpreter.context.counter, program_length + 1)

    # III. Heap

    def test_heap_grows_and_reads_softly(self) -> None:
        r = _execute_fixture("heap.quark")
        self.assertIsNone(r.error)
        self.assertEqual(r.lines, ["3", "6", "hi", "undefined"])

    # IV. Errors

    def test_undefined_method_aborts_before_running(self) -> None:
        r = _execute_fixture("undefined_method.quark")
        self.assertIsInstance(r.error, quark_lang.QuarkParseError)
        self.assertIn("foo", str(r.error))
        self.assertIn("line 2", str(r.error))
        self.assertEqual(r.interpreter.context.variables, {})

    def test_arity_errors_are_collected(self) -> None:
        r = _execute_fixture("arity_errors.quark")
        self.assertIsInstance(r.error, quark_lang.QuarkParseError)
        self.assertEqual([e.line for e in r.error.errors], [3, 4])
        self.assertIn("has: 2, expected: 3", str(r.error))
        self.assertIn("has: 4, expected: 3", str(r.error))

    def test_invalid_target_keeps_earlier_effects(self) -> None:
        r = _execute_fixture("invalid_target.quark")
        self.assertIsInstance(r.error, quark_lang.InvalidTargetError)
        self.assertEqual(r.lines, ["1"])
        self.assertEqual(r.interpreter.context.variables, {"a": 1})
        self.assertEqual(r.interpreter.context.counter, 4)

    def test_infinite_loop_stops_at_step_budget(self) -> None:
        r = _execute_fixture(
            "infinite_loop.quark", limits=quark_lang.ExecutionLimits(max_steps=100)
        )
        self.assertIsInstance(r.error, quark_lang.BudgetExceededError)
        self.assertGreater(r.interpreter.context.variables["n"], 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
