"""Leaf recognizers shared by sample and comment lines.

Every recognizer takes the full text and an offset and returns the parsed
value with the offset just past it, or raises GrammarError without consuming
anything. Horizontal whitespace is a space or a tab.
"""
import math
import re
from typing import Tuple
from ..exceptions import GrammarError

TOKEN_RE = re.compile(r"[A-Za-z_:][A-Za-z0-9_:]*")
SPACE_RE = re.compile(r"[ \t]*")
LINE_ENDING_RE = re.compile(r"\r?\n")
REST_OF_LINE_RE = re.compile(r"[^\r\n]*")

# Values and timestamps run up to the next whitespace or line break
FIELD_RE = re.compile(r"[^ \t\r\n]+")
FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
TIMESTAMP_RE = re.compile(r"[+-]?[0-9]+")

SPECIAL_VALUES = (
    ("NaN", math.nan),
    ("+Inf", math.inf),
    ("-Inf", -math.inf),
)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_token(text: str, pos: int = 0) -> Tuple[str, int]:
    """Parse a metric or label name: ``[A-Za-z_:][A-Za-z0-9_:]*``"""
    match = TOKEN_RE.match(text, pos)
    if match is None:
        raise GrammarError("token", text, pos)
    return match.group(), match.end()


def skip_space(text: str, pos: int) -> int:
    """Consume zero or more horizontal whitespace characters"""
    return SPACE_RE.match(text, pos).end()


def expect_space(text: str, pos: int, rule: str) -> int:
    """Consume one or more horizontal whitespace characters"""
    end = skip_space(text, pos)
    if end == pos:
        raise GrammarError(rule, text, pos)
    return end


def expect_line_ending(text: str, pos: int, rule: str) -> int:
    match = LINE_ENDING_RE.match(text, pos)
    if match is None:
        raise GrammarError(rule, text, pos)
    return match.end()


def parse_value(text: str, pos: int = 0) -> Tuple[float, int]:
    """Parse a sample value.

    ``NaN``, ``+Inf`` and ``-Inf`` are checked first; anything else must be a
    float literal spanning the whole field.
    """
    for literal, value in SPECIAL_VALUES:
        if text.startswith(literal, pos):
            return value, pos + len(literal)

    match = FIELD_RE.match(text, pos)
    if match is None or FLOAT_RE.fullmatch(match.group()) is None:
        raise GrammarError("value", text, pos)
    return float(match.group()), match.end()


def parse_timestamp(text: str, pos: int = 0) -> Tuple[int, int]:
    """Parse a signed 64-bit millisecond timestamp"""
    match = FIELD_RE.match(text, pos)
    if match is None or TIMESTAMP_RE.fullmatch(match.group()) is None:
        raise GrammarError("timestamp", text, pos)

    timestamp = int(match.group())
    if not INT64_MIN <= timestamp <= INT64_MAX:
        raise GrammarError("timestamp", text, pos)
    return timestamp, match.end()
