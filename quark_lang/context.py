import logging
from typing import Any, Dict, List, Mapping, Optional

from .exceptions import InvalidTargetError, QuarkRuntimeError
from .interfaces import ConsoleIO, IOHandler
from .models import MethodDefinition, NumberLiteral, StringLiteral, VariableReference
from .types import TokenCanon

logger = logging.getLogger(__name__)

MAX_HEAP_SIZE = 1 << 24


class ExecutionContext:
    """The mutable state handlers work against.

    Variables, heap and log buffer persist across ``execute`` calls; only
    ``counter`` is reset at the start of each run.
    """

    def __init__(
        self,
        methods: Mapping[str, MethodDefinition],
        io_handler: Optional[IOHandler] = None,
    ):
        self.methods = methods
        self.io = io_handler if io_handler is not None else ConsoleIO()
        self.variables: Dict[str, Any] = {}
        self.heap: List[Any] = []
        self.logs: str = ""
        self.counter: int = 1

    # --- Values ---

    def resolve(self, value: Any) -> Any:
        if isinstance(value, VariableReference):
            return self.variables.get(value.name)
        if isinstance(value, (NumberLiteral, StringLiteral)):
            return value.value
        return value

    def write_variable(self, target: Any, value: Any) -> None:
        if not isinstance(target, VariableReference):
            raise InvalidTargetError(
                f"{TokenCanon.kind_of(target)} {self._describe(target)} is not a valid variable name"
            )
        self.variables[target.name] = self.resolve(value)

    @staticmethod
    def _describe(target: Any) -> str:
        raw = getattr(target, "value", getattr(target, "text", target))
        return repr(raw)

    # --- Heap ---

    def read_heap(self, index: int) -> Any:
        if index < 0 or index >= len(self.heap):
            return None
        return self.heap[index]

    def write_heap(self, index: int, value: Any) -> None:
        if index < 0:
            raise InvalidTargetError(f"Heap address {index} is negative")
        if index >= MAX_HEAP_SIZE:
            raise QuarkRuntimeError(f"Heap address {index} exceeds the heap limit of {MAX_HEAP_SIZE}")
        if index >= len(self.heap):
            self.heap.extend([None] * (index + 1 - len(self.heap)))
        self.heap[index] = self.resolve(value)

    def heap_size(self) -> int:
        return len(self.heap)

    def grow(self, amount: int) -> None:
        if len(self.heap) + amount > MAX_HEAP_SIZE:
            raise QuarkRuntimeError(f"Allocating {amount} slots exceeds the heap limit of {MAX_HEAP_SIZE}")
        if amount > 0:
            self.heap.extend([None] * amount)

    # --- Log buffer ---

    def append(self, text: str) -> None:
        self.logs += text

    def flush(self) -> None:
        self.io.emit(self.logs)
        self.logs = ""

    # --- Jumps ---

    def jump(self, line: int) -> None:
        """Make ``line`` the next line to run.

        The engine adds one after every step, so the counter is parked on
        the line before the target.
        """
        logger.debug("jump from line %d to line %d", self.counter, line)
        self.counter = line - 1

    def snapshot(self) -> Dict[str, Any]:
        return {
            "variables": dict(self.variables),
            "heap": list(self.heap),
            "logs": self.logs,
            "counter": self.counter,
        }
