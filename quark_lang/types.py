import re
from typing import Any, Optional, Tuple

from .models import (
    Argument,
    NumberLiteral,
    StringLiteral,
    Unparsable,
    VariableReference,
)


class TokenCanon:
    NUMBER = re.compile(r"[0-9]+\.[0-9]+|[0-9]+")
    STRING = re.compile(r'".+"')
    VARIABLE = re.compile(r"[a-zA-Z]+")

    @classmethod
    def classify(cls, token: str) -> Tuple[Argument, Optional[str]]:
        """Classify one raw token.

        Returns the classified argument and, when the token fits no class,
        a short reason. Unclassifiable tokens become ``Unparsable`` rather
        than a zero or empty string.
        """
        if cls.NUMBER.fullmatch(token):
            return NumberLiteral(float(token) if "." in token else int(token)), None
        if cls.STRING.fullmatch(token):
            return StringLiteral(token[1:-1]), None
        if cls.VARIABLE.fullmatch(token):
            return VariableReference(token), None
        return Unparsable(token), f"Token '{token}' cannot be parsed"

    @classmethod
    def kind_of(cls, value: Any) -> str:
        if isinstance(value, NumberLiteral):
            return "number"
        if isinstance(value, StringLiteral):
            return "string"
        if isinstance(value, VariableReference):
            return "variable"
        if isinstance(value, Unparsable):
            return "unparsable"
        return "value"
