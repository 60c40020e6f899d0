import logging
import time
from typing import Mapping, Optional

from .context import ExecutionContext
from .exceptions import BudgetExceededError, QuarkParseError
from .interfaces import IOHandler
from .models import ExecutionLimits, MethodDefinition, Program
from .parser import parse
from .registry import MethodGroup, compose_registry, extend_registry
from .stdlib import STOCK_METHODS

logger = logging.getLogger(__name__)


class QuarkInterpreter:
    """Parses Quark source and runs it against one execution context.

    ``methods`` are merged over the stock library, so a caller-supplied
    entry replaces a stock instruction of the same name. Pass
    ``include_stock=False`` to start from an empty registry.
    """

    def __init__(
        self,
        *groups: MethodGroup,
        io_handler: Optional[IOHandler] = None,
        limits: Optional[ExecutionLimits] = None,
        include_stock: bool = True,
    ):
        base = (STOCK_METHODS,) if include_stock else ()
        self.limits = limits if limits is not None else ExecutionLimits.unbounded()
        self.context = ExecutionContext(
            compose_registry(*base, *groups), io_handler=io_handler
        )

    @property
    def methods(self) -> Mapping[str, MethodDefinition]:
        return self.context.methods

    @property
    def io(self) -> IOHandler:
        return self.context.io

    def extend(self, *groups: MethodGroup) -> "QuarkInterpreter":
        """Return a fresh interpreter whose registry adds ``groups`` to ours."""
        return QuarkInterpreter(
            extend_registry(self.methods, *groups),
            io_handler=self.context.io,
            limits=self.limits,
            include_stock=False,
        )

    def parse(self, source: str) -> Program:
        return parse(source, self.context.methods)

    def execute(self, source: str) -> None:
        program = self.parse(source)
        if not program.ok:
            logger.debug("refusing to run program with %d errors", len(program.errors))
            raise QuarkParseError(program.errors)
        self.run(program)

    def run(self, program: Program) -> None:
        ctx = self.context
        limits = self.limits
        deadline = (
            time.monotonic() + limits.timeout if limits.timeout is not None else None
        )
        steps = 0

        ctx.counter = 1
        logger.debug("running %d lines", len(program))
        bounded = limits.bounded
        while ctx.counter <= len(program):
            if bounded:
                self._check_budget(steps, deadline)

            # Jumps below line 1 walk forward through empty slots.
            instruction = program.lines[ctx.counter - 1] if ctx.counter >= 1 else None
            if instruction is not None:
                instruction.method.handler(ctx, instruction.args)
            ctx.counter += 1
            steps += 1

        logger.debug("finished after %d steps", steps)

    def _check_budget(self, steps: int, deadline: Optional[float]) -> None:
        limits = self.limits
        if limits.max_steps is not None and steps >= limits.max_steps:
            raise BudgetExceededError(
                f"Step budget of {limits.max_steps} exhausted at line {self.context.counter}"
            )
        if deadline is not None and time.monotonic() > deadline:
            raise BudgetExceededError(
                f"Time budget of {limits.timeout}s exhausted at line {self.context.counter}"
            )
