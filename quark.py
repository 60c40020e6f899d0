"""Quark entrypoint module exposing the public API and CLI."""

import argparse
import logging
import os
import sys

from quark_lang import (
    ConsoleIO,
    Documentation,
    ExecutionLimits,
    IOHandler,
    MethodDefinition,
    Parameter,
    QuarkError,
    QuarkInterpreter,
    generate_docstring,
    list_methods,
)
from quark_lang.stdlib import format_value

__all__ = [
    "QuarkInterpreter",
    "build_repl_methods",
    "run_repl",
    "run_file",
    "main",
]

PROMPT = "quark> "
STATEMENT_SEPARATOR = ";"


class _ReplState:
    def __init__(self):
        self.running = True


def build_repl_methods(state: _ReplState):
    def _doc(ctx, args):
        (name,) = args
        key = str(ctx.resolve(name))
        method = ctx.methods.get(key)
        if method is None:
            ctx.io.emit(f"Method {key} not found!")
            return
        ctx.io.emit(generate_docstring(key, method))

    def _listmethods(ctx, args):
        ctx.io.emit(list_methods(ctx.methods))

    def _exit(ctx, args):
        ctx.io.emit("Goodbye!")
        state.running = False

    return {
        "doc": MethodDefinition(
            Documentation(
                "Prints out the documentation of the selected function",
                (Parameter("name", "The function name"),),
            ),
            _doc,
        ),
        "listmethods": MethodDefinition(
            Documentation("Lists all the available methods"), _listmethods
        ),
        "exit": MethodDefinition(Documentation("Exits the cli"), _exit),
    }


def run_repl(
    limits: ExecutionLimits, io_handler: IOHandler
) -> QuarkInterpreter:
    state = _ReplState()
    interpreter = QuarkInterpreter(
        build_repl_methods(state), io_handler=io_handler, limits=limits
    )
    io_handler.emit("Quark interactive shell. Type 'listmethods' for help, 'exit' to leave.")
    while state.running:
        code = io_handler.read_input(PROMPT)
        if not code.strip():
            continue
        try:
            interpreter.execute(code.replace(STATEMENT_SEPARATOR, "\n"))
        except (QuarkError, Exception) as e:
            io_handler.emit(f"Error: {e}")
            continue
        if not state.running:
            break
        result = interpreter.context.variables.get("result")
        if result is not None:
            io_handler.emit(f"=> {format_value(result)}")
    return interpreter


def run_file(path: str, limits: ExecutionLimits, io_handler: IOHandler) -> QuarkInterpreter:
    with open(path, "r", encoding="utf-8") as f:
        source = f.read()
    interpreter = QuarkInterpreter(io_handler=io_handler, limits=limits)
    interpreter.execute(source)
    return interpreter


def _build_limits(args) -> ExecutionLimits:
    limits = ExecutionLimits.from_env()
    if args.max_steps is not None:
        limits.max_steps = args.max_steps if args.max_steps > 0 else None
    if args.timeout is not None:
        limits.timeout = args.timeout if args.timeout > 0 else None
    return limits


def main():
    parser = argparse.ArgumentParser(description="Quark line interpreter")
    parser.add_argument("script", nargs="?", help="Path to the quark file")
    parser.add_argument(
        "--max-steps", type=int, default=None, help="Abort after this many steps"
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="Abort after this many seconds"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log parsing and execution"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    limits = _build_limits(args)
    io_handler = ConsoleIO()

    if not args.script:
        run_repl(limits, io_handler)
        return

    try:
        run_file(os.path.abspath(args.script), limits, io_handler)
    except (QuarkError, OSError) as e:
        print(f"FATAL ERROR\n{e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
