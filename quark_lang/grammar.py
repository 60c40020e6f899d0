from typing import List

from lark import Lark

QUARK_GRAMMAR = r"""
    start: _token*

    _token: STRING | DECIMAL | INTEGER | WORD

    // Priorities keep the scanner's alternation order: quoted text first,
    // then decimals before integers, then bare words.
    STRING.4: /".+"/
    DECIMAL.3: /[0-9]+\.[0-9]+/
    INTEGER.2: /[0-9]+/
    WORD.1: /[a-zA-Z]+/

    STRAY_QUOTE: "\""

    %ignore STRAY_QUOTE
    %ignore /[^"0-9a-zA-Z]+/
"""

COMMENT_PREFIX = "#"

_scanner = Lark(QUARK_GRAMMAR, parser="lalr", lexer="basic")


def split_lines(source: str) -> List[str]:
    return source.split("\n")


def is_noop_line(line: str) -> bool:
    return len(line) == 0 or line.startswith(COMMENT_PREFIX)


def scan_line(line: str) -> List[str]:
    """Extract the raw token strings of one line, left to right.

    Characters that start none of the token classes are skipped, so
    ``set x, 5`` and ``set x 5`` scan the same.
    """
    tree = _scanner.parse(line)
    return [str(tok) for tok in tree.children]
