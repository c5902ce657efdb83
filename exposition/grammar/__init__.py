"""Recognizers for the Prometheus text exposition format"""
from .comments import (
    Comment,
    HelpDeclaration,
    PlainComment,
    TypeDeclaration,
    parse_comment,
    parse_help_declaration,
    parse_plain_comment,
    parse_type_declaration,
)
from .labels import parse_label_value, parse_labels
from .samples import SampleLine, parse_sample
from .tokens import parse_timestamp, parse_token, parse_value

__all__ = [
    "Comment",
    "HelpDeclaration",
    "PlainComment",
    "SampleLine",
    "TypeDeclaration",
    "parse_comment",
    "parse_help_declaration",
    "parse_label_value",
    "parse_labels",
    "parse_plain_comment",
    "parse_sample",
    "parse_timestamp",
    "parse_token",
    "parse_type_declaration",
    "parse_value",
]
