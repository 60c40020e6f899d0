from .grammar import QUARK_GRAMMAR, scan_line, split_lines
from .exceptions import (
    QuarkError,
    QuarkParseError,
    QuarkRuntimeError,
    InvalidTargetError,
    BudgetExceededError,
)
from .interfaces import IOHandler, ConsoleIO
from .models import (
    NumberLiteral,
    StringLiteral,
    VariableReference,
    Unparsable,
    Parameter,
    Documentation,
    MethodDefinition,
    Instruction,
    ParseError,
    Program,
    ExecutionLimits,
)
from .types import TokenCanon
from .context import ExecutionContext
from .parser import parse
from .registry import compose_registry, extend_registry
from .stdlib import (
    STOCK_METHODS,
    MEMORY_METHODS,
    MATH_METHODS,
    IO_METHODS,
    CONTROL_METHODS,
)
from .ffi import ConversionType, wrap_function
from .docs import generate_docstring, list_methods
from .interpreter import QuarkInterpreter

__all__ = [
    "QUARK_GRAMMAR",
    "scan_line",
    "split_lines",
    "QuarkError",
    "QuarkParseError",
    "QuarkRuntimeError",
    "InvalidTargetError",
    "BudgetExceededError",
    "IOHandler",
    "ConsoleIO",
    "NumberLiteral",
    "StringLiteral",
    "VariableReference",
    "Unparsable",
    "Parameter",
    "Documentation",
    "MethodDefinition",
    "Instruction",
    "ParseError",
    "Program",
    "ExecutionLimits",
    "TokenCanon",
    "ExecutionContext",
    "parse",
    "compose_registry",
    "extend_registry",
    "STOCK_METHODS",
    "MEMORY_METHODS",
    "MATH_METHODS",
    "IO_METHODS",
    "CONTROL_METHODS",
    "ConversionType",
    "wrap_function",
    "generate_docstring",
    "list_methods",
    "QuarkInterpreter",
]
