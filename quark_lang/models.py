import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import ExecutionContext


@dataclass(frozen=True)
class NumberLiteral:
    value: Union[int, float]


@dataclass(frozen=True)
class StringLiteral:
    value: str


@dataclass(frozen=True)
class VariableReference:
    name: str


@dataclass(frozen=True)
class Unparsable:
    """Placeholder for a token that fits none of the literal classes."""

    text: str


Argument = Union[NumberLiteral, StringLiteral, VariableReference, Unparsable]


@dataclass(frozen=True)
class Parameter:
    name: str
    description: str = ""
    type: Optional[str] = None


@dataclass(frozen=True)
class Documentation:
    summary: str
    params: Tuple[Parameter, ...] = ()


Handler = Callable[["ExecutionContext", Tuple[Argument, ...]], None]


@dataclass(frozen=True)
class MethodDefinition:
    documentation: Documentation
    handler: Handler

    @property
    def arity(self) -> int:
        return len(self.documentation.params)


@dataclass(frozen=True)
class Instruction:
    name: str
    method: MethodDefinition
    args: Tuple[Argument, ...]


@dataclass(frozen=True)
class ParseError:
    line: int
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Program:
    lines: Tuple[Optional[Instruction], ...]
    errors: Tuple[ParseError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.lines)


def _positive_or_none(raw: Optional[str], cast: Callable[[str], Any]) -> Any:
    if raw is None or not raw.strip():
        return None
    value = cast(raw)
    return value if value > 0 else None


@dataclass
class ExecutionLimits:
    max_steps: Optional[int] = None
    timeout: Optional[float] = None

    @classmethod
    def unbounded(cls) -> "ExecutionLimits":
        return cls()

    @classmethod
    def from_env(cls) -> "ExecutionLimits":
        return cls(
            max_steps=_positive_or_none(os.environ.get("QUARK_MAX_STEPS"), int),
            timeout=_positive_or_none(os.environ.get("QUARK_TIMEOUT"), float),
        )

    @property
    def bounded(self) -> bool:
        return self.max_steps is not None or self.timeout is not None
