"""Exceptions raised while reading exposition text"""


class ExpositionError(Exception):
    """Base class for every error raised by this package"""


class GrammarError(ExpositionError):
    """A single grammar rule rejected the input at a given offset"""

    def __init__(self, rule: str, text: str, position: int):
        self.rule = rule
        self.position = position
        self.remainder = text[position:]
        super().__init__(f"{rule} rejected input at offset {position}")


class ParseError(ExpositionError):
    """The exposition text could not be parsed.

    Carries the rule that failed and the unconsumed input starting at the
    point of failure. Nothing that was parsed before the failure is kept.
    """

    def __init__(self, rule: str, remainder: str, line: int, column: int):
        self.rule = rule
        self.remainder = remainder
        self.line = line
        self.column = column
        super().__init__(f"line {line}, column {column}: {rule} rejected {self.snippet()!r}")

    def snippet(self, limit: int = 40) -> str:
        """Return the start of the remainder, cut at the first line break"""
        head = self.remainder.split("\n", 1)[0]
        if len(head) > limit:
            return head[:limit] + "..."
        return head

    @classmethod
    def from_grammar_error(cls, error: GrammarError, text: str) -> "ParseError":
        line = text.count("\n", 0, error.position) + 1
        line_start = text.rfind("\n", 0, error.position) + 1
        return cls(error.rule, error.remainder, line, error.position - line_start + 1)
