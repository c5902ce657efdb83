"""Line classification and the driver that walks a whole buffer"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple, Union
from .exceptions import GrammarError, ParseError
from .grammar import Comment, SampleLine, parse_comment, parse_sample
from .grammar.tokens import expect_line_ending, skip_space


class LineKind(Enum):
    COMMENT = "comment"
    SAMPLE = "sample"
    EMPTY = "empty"


@dataclass(frozen=True)
class Line:
    """A classified input line"""
    kind: LineKind
    number: int
    content: Union[Comment, SampleLine, None] = None


def parse_empty_line(text: str, pos: int = 0) -> Tuple[None, int]:
    """Parse a line holding nothing but horizontal whitespace"""
    return None, expect_line_ending(text, skip_space(text, pos), "empty_line")


# Order matters: comments first so that ``# TYPE`` lines are never read as
# anything else, then samples, then blank lines.
LINE_PARSERS: List[Tuple[LineKind, Callable]] = [
    (LineKind.COMMENT, parse_comment),
    (LineKind.SAMPLE, parse_sample),
    (LineKind.EMPTY, parse_empty_line),
]


def parse_line(text: str, pos: int = 0, number: int = 1) -> Tuple[Line, int]:
    """Classify the line starting at ``pos``.

    When every alternative fails, the failure that got furthest into the
    line is raised, the earliest alternative winning ties.
    """
    furthest: Optional[GrammarError] = None
    for kind, parser in LINE_PARSERS:
        try:
            content, end = parser(text, pos)
        except GrammarError as e:
            if furthest is None or e.position > furthest.position:
                furthest = e
            continue
        return Line(kind=kind, number=number, content=content), end
    raise furthest


def iter_lines(text: str) -> Iterator[Line]:
    """Yield classified lines until the input is exhausted.

    Raises ParseError on the first line that matches nothing; there is no
    recovery.
    """
    pos = 0
    number = 1
    while pos < len(text):
        try:
            line, pos = parse_line(text, pos, number)
        except GrammarError as e:
            raise ParseError.from_grammar_error(e, text) from e
        yield line
        number += 1
