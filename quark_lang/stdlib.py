import math
import operator
from pprint import pformat
from typing import Any, Callable, Dict, Optional, Union

from .context import ExecutionContext
from .exceptions import QuarkRuntimeError
from .models import Documentation, MethodDefinition, Parameter
from .registry import compose_registry

Number = Union[int, float]


def to_number(value: Any) -> Number:
    """Numeric coercion used by arithmetic, comparison and jumps."""
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def heap_address(value: Any) -> Optional[int]:
    """Whole, non-negative address or None, for reads that must stay soft."""
    number = to_number(value)
    if isinstance(number, float):
        if not number.is_integer():
            return None
        number = int(number)
    return number if number >= 0 else None


def to_index(value: Any) -> int:
    number = to_number(value)
    if isinstance(number, float):
        if not number.is_integer():
            raise QuarkRuntimeError(f"{value!r} is not a valid heap address")
        number = int(number)
    return number


def format_value(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def _divide(lhs: Number, rhs: Number) -> Number:
    if rhs == 0:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1, rhs)
    return lhs / rhs


def _loose_equal(lhs: Any, rhs: Any) -> bool:
    if isinstance(lhs, str) != isinstance(rhs, str) and None not in (lhs, rhs):
        return to_number(lhs) == to_number(rhs)
    return lhs == rhs


# --- Memory ---


def _set(ctx: ExecutionContext, args):
    varname, value = args
    ctx.write_variable(varname, value)


def _alloc(ctx: ExecutionContext, args):
    (amount,) = args
    ctx.grow(to_index(ctx.resolve(amount)))


def _heapsize(ctx: ExecutionContext, args):
    (varname,) = args
    ctx.write_variable(varname, ctx.heap_size())


def _write(ctx: ExecutionContext, args):
    address, value = args
    ctx.write_heap(to_index(ctx.resolve(address)), value)


def _read(ctx: ExecutionContext, args):
    address, varname = args
    index = heap_address(ctx.resolve(address))
    ctx.write_variable(varname, None if index is None else ctx.read_heap(index))


MEMORY_METHODS: Dict[str, MethodDefinition] = {
    "set": MethodDefinition(
        Documentation(
            "Writes a value to a variable",
            (
                Parameter("varname", "The variable name to write the value to", "string"),
                Parameter("value", "The value of the variable"),
            ),
        ),
        _set,
    ),
    "alloc": MethodDefinition(
        Documentation(
            "Allocates space in the context's heap",
            (Parameter("amount", "The amount of space to allocate", "number"),),
        ),
        _alloc,
    ),
    "heapsize": MethodDefinition(
        Documentation(
            "Writes the heap's size to a variable",
            (Parameter("varname", "The variable to store the value"),),
        ),
        _heapsize,
    ),
    "write": MethodDefinition(
        Documentation(
            "Writes a value into the context's heap",
            (
                Parameter("address", "The address to write to", "number"),
                Parameter("value", "The value to write"),
            ),
        ),
        _write,
    ),
    "read": MethodDefinition(
        Documentation(
            "Reads a value from the context's heap",
            (
                Parameter("address", "The address to read from", "number"),
                Parameter("varname", "The variable to store the value"),
            ),
        ),
        _read,
    ),
}


# --- Arithmetic & comparison ---


def _operation_docs(verb: str, result_name: str) -> Documentation:
    return Documentation(
        f"{verb} two numbers and writes it to a variable",
        (
            Parameter("lhs", f"The left hand side of the {result_name}", "number"),
            Parameter("rhs", f"The right hand side of the {result_name}", "number"),
            Parameter("varname", "The variable to write the result to"),
        ),
    )


def _comparison_docs(verb: str) -> Documentation:
    return Documentation(
        f"Compares if the left hand side is {verb} the right hand side",
        (
            Parameter("lhs", "The left hand side of the comparison", "number"),
            Parameter("rhs", "The right hand side of the comparison", "number"),
            Parameter("varname", "The variable to write the comparison to (either 0 or 1)"),
        ),
    )


def _binary(op: Callable[[Number, Number], Any]):
    def handler(ctx: ExecutionContext, args):
        lhs, rhs, varname = args
        result = op(to_number(ctx.resolve(lhs)), to_number(ctx.resolve(rhs)))
        if isinstance(result, bool):
            result = 1 if result else 0
        ctx.write_variable(varname, result)

    return handler


def _eq(ctx: ExecutionContext, args):
    lhs, rhs, varname = args
    equal = _loose_equal(ctx.resolve(lhs), ctx.resolve(rhs))
    ctx.write_variable(varname, 1 if equal else 0)


MATH_METHODS: Dict[str, MethodDefinition] = {
    "add": MethodDefinition(_operation_docs("Adds", "addition"), _binary(operator.add)),
    "sub": MethodDefinition(_operation_docs("Subtracts", "result"), _binary(operator.sub)),
    "mul": MethodDefinition(_operation_docs("Multiplies", "product"), _binary(operator.mul)),
    "div": MethodDefinition(_operation_docs("Divides", "result"), _binary(_divide)),
    "les": MethodDefinition(_comparison_docs("lesser than"), _binary(operator.lt)),
    "gre": MethodDefinition(_comparison_docs("greater than"), _binary(operator.gt)),
    "lesoe": MethodDefinition(
        _comparison_docs("lesser than or equal to"), _binary(operator.le)
    ),
    "greoe": MethodDefinition(
        _comparison_docs("greater than or equal to"), _binary(operator.ge)
    ),
    "eq": MethodDefinition(_comparison_docs("equal to"), _eq),
}


# --- I/O ---


def _print(ctx: ExecutionContext, args):
    (value,) = args
    ctx.append(format_value(ctx.resolve(value)))


def _flush(ctx: ExecutionContext, args):
    ctx.flush()


def _dump(ctx: ExecutionContext, args):
    ctx.io.emit(pformat(ctx.snapshot(), sort_dicts=False))


IO_METHODS: Dict[str, MethodDefinition] = {
    "print": MethodDefinition(
        Documentation(
            "Prints its input. Execute `flush` to write to output",
            (Parameter("value", "Any value"),),
        ),
        _print,
    ),
    "flush": MethodDefinition(
        Documentation("Flushes out the previously called print statements"),
        _flush,
    ),
    "dump": MethodDefinition(Documentation("Dumps debug information"), _dump),
}


# --- Control flow ---


def _goto(ctx: ExecutionContext, args):
    cond, line = args
    if to_number(ctx.resolve(cond)) > 0:
        ctx.jump(to_index(ctx.resolve(line)))


CONTROL_METHODS: Dict[str, MethodDefinition] = {
    "goto": MethodDefinition(
        Documentation(
            "Jump to a different part of the code if the condition is met",
            (
                Parameter("cond", "The condition to check", "0 or 1"),
                Parameter("line", "The line to go to", "number"),
            ),
        ),
        _goto,
    ),
}

STOCK_GROUPS = {
    "memory": MEMORY_METHODS,
    "math": MATH_METHODS,
    "io": IO_METHODS,
    "control": CONTROL_METHODS,
}

STOCK_METHODS = compose_registry(*STOCK_GROUPS.values())
