from typing import Iterable, Tuple

from .models import ParseError


class QuarkError(Exception):
    """Base exception for the runtime."""

    pass


class QuarkParseError(QuarkError):
    """Raised by execute when the program text does not resolve."""

    def __init__(self, errors: Iterable[ParseError]):
        self.errors: Tuple[ParseError, ...] = tuple(errors)
        super().__init__("\n".join(e.message for e in self.errors))


class QuarkRuntimeError(QuarkError):
    """Fatal to the running execute call; earlier mutations are kept."""

    pass


class InvalidTargetError(QuarkRuntimeError):
    """Raised when an instruction writes into something other than a variable."""

    pass


class BudgetExceededError(QuarkRuntimeError):
    """Raised when an opt-in step or time budget runs out."""

    pass
