import sys
from abc import ABC, abstractmethod


def _resolve_print():
    quark_mod = sys.modules.get("quark")
    return getattr(quark_mod, "print", print)


class IOHandler(ABC):
    """Abstracts I/O so interpreters can be hosted in different frontends."""

    @abstractmethod
    def emit(self, message: str) -> None: ...

    @abstractmethod
    def read_input(self, prompt: str) -> str: ...


class ConsoleIO(IOHandler):
    """Console-backed I/O used by the CLI and REPL."""

    def emit(self, message: str) -> None:
        try:
            _resolve_print()(message)
        except UnicodeEncodeError:
            _resolve_print()(message.encode("ascii", errors="replace").decode("ascii"))

    def read_input(self, prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError:
            return "exit"
