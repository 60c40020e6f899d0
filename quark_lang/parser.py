import logging
from typing import List, Mapping, Optional, Tuple

from .grammar import is_noop_line, scan_line, split_lines
from .models import Argument, Instruction, MethodDefinition, ParseError, Program
from .types import TokenCanon

logger = logging.getLogger(__name__)


def resolve_line(
    line: str, line_num: int, methods: Mapping[str, MethodDefinition]
) -> Tuple[Optional[Instruction], List[ParseError]]:
    """Resolve one non-comment line into an instruction or a list of errors."""
    tokens = scan_line(line)
    name = tokens[0] if tokens else ""
    method = methods.get(name)

    if method is None:
        return None, [ParseError(line_num, f"{name} at line {line_num} is not defined")]

    given = len(tokens) - 1
    if given != method.arity:
        return None, [
            ParseError(
                line_num,
                f"{name} at line {line_num} has invalid argument length "
                f"(has: {given}, expected: {method.arity})",
            )
        ]

    args: List[Argument] = []
    errors: List[ParseError] = []
    for token in tokens[1:]:
        arg, reason = TokenCanon.classify(token)
        if reason is not None:
            errors.append(ParseError(line_num, f"{reason} at line {line_num}"))
        args.append(arg)

    if errors:
        return None, errors
    return Instruction(name, method, tuple(args)), []


def parse(source: str, methods: Mapping[str, MethodDefinition]) -> Program:
    """Resolve a whole program. Never raises; errors come back on the Program."""
    lines: List[Optional[Instruction]] = []
    errors: List[ParseError] = []

    for line_num, line in enumerate(split_lines(source), start=1):
        if is_noop_line(line):
            lines.append(None)
            continue
        instruction, line_errors = resolve_line(line, line_num, methods)
        lines.append(instruction)
        errors.extend(line_errors)

    logger.debug("parsed %d lines with %d errors", len(lines), len(errors))
    return Program(tuple(lines), tuple(errors))
