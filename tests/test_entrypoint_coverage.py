from __future__ import annotations
import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

# We import the entrypoint script specifically to test it
import quark
# We also import the lang package to inspect exceptions/classes
import quark_lang


class ScriptedIO(quark_lang.IOHandler):
    def __init__(self, lines):
        self.lines = list(lines)
        self.emitted: list[str] = []

    def emit(self, message: str) -> None:
        self.emitted.append(message)

    def read_input(self, prompt: str) -> str:
        return self.lines.pop(0) if self.lines else "exit"


class EntrypointCoverageTests(unittest.TestCase):
    def test_main_runs_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "test.quark")
            with open(path, "w") as f:
                f.write("set x 5\nset y 3\nadd x y z\nprint z\nflush\n")

            buf = io.StringIO()
            with patch.object(sys, "argv", ["quark.py", path]), redirect_stdout(buf):
                quark.main()
            self.assertEqual(buf.getvalue(), "8\n")

    def test_main_exits_on_parse_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "bad.quark")
            with open(path, "w") as f:
                f.write("foo 1 2\n")

            buf = io.StringIO()
            with (
                patch.object(quark.sys, "argv", ["quark.py", path]),
                patch.object(quark.sys, "exit", side_effect=SystemExit(1)),
                redirect_stdout(buf),
            ):
                with self.assertRaises(SystemExit) as ctx:
                    quark.main()
            self.assertEqual(ctx.exception.code, 1)
            self.assertIn("FATAL ERROR", buf.getvalue())
            self.assertIn("foo at line 1 is not defined", buf.getvalue())

    def test_main_exits_on_missing_file(self) -> None:
        missing_path = os.path.join(tempfile.gettempdir(), "no_such_file.quark")
        with (
            patch.object(quark.sys, "argv", ["quark.py", missing_path]),
            patch.object(quark.sys, "exit", side_effect=SystemExit(1)),
            redirect_stdout(io.StringIO()),
        ):
            with self.assertRaises(SystemExit) as ctx:
                quark.main()
            self.assertEqual(ctx.exception.code, 1)

    def test_main_step_budget_flag(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "loop.quark")
            with open(path, "w") as f:
                f.write("goto 1 1\n")

            buf = io.StringIO()
            with (
                patch.object(quark.sys, "argv", ["quark.py", "--max-steps", "10", path]),
                patch.object(quark.sys, "exit", side_effect=SystemExit(1)),
                redirect_stdout(buf),
            ):
                with self.assertRaises(SystemExit):
                    quark.main()
            self.assertIn("Step budget of 10 exhausted", buf.getvalue())

    def test_repl_keeps_going_after_errors(self) -> None:
        io_handler = ScriptedIO(["foo", "set result 2;add result 1 result", "", "set 1 1", "exit"])
        interpreter = quark.run_repl(quark_lang.ExecutionLimits.unbounded(), io_handler)
        self.assertIn("Error: foo at line 1 is not defined", io_handler.emitted)
        self.assertIn("=> 3", io_handler.emitted)
        self.assertEqual(io_handler.emitted[-1], "Goodbye!")
        self.assertEqual(interpreter.context.variables["result"], 3)

    def test_repl_doc_and_listmethods(self) -> None:
        io_handler = ScriptedIO(['doc "goto"', 'doc "nothing"', "listmethods"])
        quark.run_repl(quark_lang.ExecutionLimits.unbounded(), io_handler)
        self.assertTrue(any(m.startswith("goto cond line") for m in io_handler.emitted))
        self.assertIn("Method nothing not found!", io_handler.emitted)
        listing = next(m for m in io_handler.emitted if "heapsize varname: any" in m)
        self.assertIn("exit ", listing.splitlines())

    def test_repl_exits_on_end_of_input(self) -> None:
        io_handler = ScriptedIO([])
        quark.run_repl(quark_lang.ExecutionLimits.unbounded(), io_handler)
        self.assertEqual(io_handler.emitted[-1], "Goodbye!")

    def test_console_io_maps_eof_to_exit(self) -> None:
        with patch("builtins.input", side_effect=EOFError):
            self.assertEqual(quark_lang.ConsoleIO().read_input("> "), "exit")


if __name__ == "__main__":
    unittest.main(verbosity=2)
