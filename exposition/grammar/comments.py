"""Comment line recognizers: ``# TYPE``, ``# HELP`` and plain comments"""
import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union
from ..exceptions import GrammarError
from ..models import MetricType
from .tokens import (
    REST_OF_LINE_RE,
    TOKEN_RE,
    expect_line_ending,
    parse_token,
    skip_space,
)

TYPE_PREFIX_RE = re.compile(r"#[ \t]+TYPE[ \t]+")
HELP_PREFIX_RE = re.compile(r"#[ \t]+HELP[ \t]+")
TYPE_KEYWORD_RE = re.compile("|".join(t.value for t in MetricType))
HELP_NAME_RE = re.compile(TOKEN_RE.pattern + r"(?=[ \t]|$)")


@dataclass(frozen=True)
class TypeDeclaration:
    name: str
    data_type: MetricType = MetricType.UNTYPED


@dataclass(frozen=True)
class HelpDeclaration:
    """``# HELP`` line. ``text`` is the raw rest of line, ``name`` and
    ``doc`` are its leading metric name and the description after it."""
    text: str
    name: Optional[str] = None
    doc: str = ""


@dataclass(frozen=True)
class PlainComment:
    text: str


Comment = Union[TypeDeclaration, HelpDeclaration, PlainComment]


def parse_type_declaration(text: str, pos: int = 0) -> Tuple[TypeDeclaration, int]:
    """Parse ``# TYPE <name> [<type>]``.

    Once the ``# TYPE`` prefix matched, any further mismatch is an error:
    an unknown type keyword never falls back to ``untyped``.
    """
    prefix = TYPE_PREFIX_RE.match(text, pos)
    if prefix is None:
        raise GrammarError("type_declaration", text, pos)

    name, cursor = parse_token(text, prefix.end())

    data_type = MetricType.UNTYPED
    keyword_start = skip_space(text, cursor)
    if keyword_start > cursor:
        keyword = TYPE_KEYWORD_RE.match(text, keyword_start)
        if keyword:
            data_type = MetricType(keyword.group())
            keyword_start = keyword.end()
    cursor = skip_space(text, keyword_start)

    cursor = expect_line_ending(text, cursor, "type_declaration")
    return TypeDeclaration(name=name, data_type=data_type), cursor


def parse_help_declaration(text: str, pos: int = 0) -> Tuple[HelpDeclaration, int]:
    """Parse ``# HELP <text>``. The text is kept verbatim, no unescaping."""
    prefix = HELP_PREFIX_RE.match(text, pos)
    if prefix is None:
        raise GrammarError("help_declaration", text, pos)

    rest = REST_OF_LINE_RE.match(text, prefix.end())
    cursor = expect_line_ending(text, rest.end(), "help_declaration")

    body = rest.group()
    named = HELP_NAME_RE.match(body)
    if named is None:
        return HelpDeclaration(text=body), cursor
    doc = body[named.end():].lstrip(" \t")
    return HelpDeclaration(text=body, name=named.group(), doc=doc), cursor


def parse_plain_comment(text: str, pos: int = 0) -> Tuple[PlainComment, int]:
    if not text.startswith("#", pos):
        raise GrammarError("comment", text, pos)
    rest = REST_OF_LINE_RE.match(text, pos + 1)
    cursor = expect_line_ending(text, rest.end(), "comment")
    return PlainComment(text=rest.group()), cursor


def parse_comment(text: str, pos: int = 0) -> Tuple[Comment, int]:
    """Parse any comment line, trying TYPE, then HELP, then a plain comment"""
    if TYPE_PREFIX_RE.match(text, pos):
        return parse_type_declaration(text, pos)
    if HELP_PREFIX_RE.match(text, pos):
        return parse_help_declaration(text, pos)
    return parse_plain_comment(text, pos)
