import enum
import inspect
from typing import Any, Callable, List

from .exceptions import QuarkError
from .models import Documentation, MethodDefinition, Parameter


class ConversionType(enum.Enum):
    """How a wrapped host function hands back its result.

    VOID discards the return value. VALUE writes it into a trailing
    destination variable argument.
    """

    VOID = "void"
    VALUE = "value"


def host_arity(func: Callable[..., Any]) -> int:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise QuarkError(f"Cannot inspect host function {func!r}: {e}") from e
    return sum(
        1
        for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
        and p.default is p.empty
    )


def wrap_function(
    func: Callable[..., Any], conversion: ConversionType = ConversionType.VOID
) -> MethodDefinition:
    """Expose a host Python function as one instruction."""
    name = getattr(func, "__name__", type(func).__name__)
    params: List[Parameter] = [
        Parameter(f"argument{i + 1}") for i in range(host_arity(func))
    ]

    if conversion is ConversionType.VALUE:
        params.append(
            Parameter(
                "returnname",
                "The variable name for the function's return value",
            )
        )

        def handler(ctx, args):
            values = [ctx.resolve(a) for a in args[:-1]]
            ctx.write_variable(args[-1], func(*values))

    else:

        def handler(ctx, args):
            func(*[ctx.resolve(a) for a in args])

    return MethodDefinition(
        Documentation(f"Runs the Python function named {name}", tuple(params)),
        handler,
    )
