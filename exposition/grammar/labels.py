"""Label set recognizer: ``{name="value",...}``"""
import re
from typing import Dict, Tuple
from ..exceptions import GrammarError
from .tokens import parse_token

ESCAPES = {
    "n": "\n",
    '"': '"',
    "\\": "\\",
}

# Everything except the characters with special meaning inside a label value
PLAIN_CHARS_RE = re.compile(r'[^"\\\n]+')


def parse_label_value(text: str, pos: int = 0) -> Tuple[str, int]:
    """Parse a double quoted label value, resolving ``\\n``, ``\\"`` and ``\\\\``"""
    if not text.startswith('"', pos):
        raise GrammarError("label_value", text, pos)

    chunks = []
    cursor = pos + 1
    while True:
        plain = PLAIN_CHARS_RE.match(text, cursor)
        if plain:
            chunks.append(plain.group())
            cursor = plain.end()

        char = text[cursor:cursor + 1]
        if char == '"':
            return "".join(chunks), cursor + 1
        if char == "\\":
            escaped = text[cursor + 1:cursor + 2]
            if escaped not in ESCAPES:
                raise GrammarError("label_value", text, cursor)
            chunks.append(ESCAPES[escaped])
            cursor += 2
            continue
        # Raw line break or end of input
        raise GrammarError("label_value", text, cursor)


def parse_label_pair(text: str, pos: int) -> Tuple[Tuple[str, str], int]:
    name, cursor = parse_token(text, pos)
    if not text.startswith("=", cursor):
        raise GrammarError("label_pair", text, cursor)
    value, cursor = parse_label_value(text, cursor + 1)
    return (name, value), cursor


def parse_labels(text: str, pos: int = 0) -> Tuple[Dict[str, str], int]:
    """Parse an optional label block.

    A missing block yields an empty mapping. Pairs are folded into a dict in
    order, so a repeated label name keeps the last value. One trailing comma
    is allowed before the closing brace.
    """
    labels: Dict[str, str] = {}
    if not text.startswith("{", pos):
        return labels, pos

    cursor = pos + 1
    if text.startswith("}", cursor):
        return labels, cursor + 1

    while True:
        (name, value), cursor = parse_label_pair(text, cursor)
        labels[name] = value

        if text.startswith(",", cursor):
            cursor += 1
            if text.startswith("}", cursor):
                return labels, cursor + 1
            continue
        if text.startswith("}", cursor):
            return labels, cursor + 1
        raise GrammarError("label_set", text, cursor)
