# -------------------------------------
# annals errors
# -------------------------------------
"""
Error taxonomy for the annals engine.

Parse-time errors carry the half-open span (beg, end) of the offending
substring. Generation-time errors name the cognate or binding that failed.
InvalidRule wraps a parse error together with the literal it came from and
renders a caret diagnostic.
"""
from __future__ import annotations


class AnnalsError(Exception):
    pass


# ============================================================
# Parse-time errors
# ============================================================

class ParseError(AnnalsError, ValueError):
    """Base class for rule parse failures."""

    description = "parse error"

    def __init__(self, beg: int | None = None, end: int | None = None):
        self.beg = beg
        self.end = end
        if beg is None:
            super().__init__(self.description)
        else:
            super().__init__(f"{self.description} at {beg}..{end}")

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self.beg, self.end) == (other.beg, other.end)

    def __hash__(self):
        return hash((type(self).__name__, self.beg, self.end))

    @property
    def span(self) -> tuple[int, int] | None:
        if self.beg is None:
            return None
        return (self.beg, self.end)


class EmptyRule(ParseError):
    description = "empty rule"


class InternalError(ParseError):
    description = "internal parser error"


class InvalidExpression(ParseError):
    description = "invalid expression"


class InvalidName(ParseError):
    description = "invalid name"


class InvalidRange(ParseError):
    description = "invalid range"


class UnbalancedBrackets(ParseError):
    description = "unbalanced brackets"


class UnknownCommand(ParseError):
    description = "unknown command"


class ZeroLengthSubst(ParseError):
    description = "zero-length substitution"


# ============================================================
# Generation-time errors
# ============================================================

class UnknownCognate(AnnalsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown or unrecognised cognate: {name}")


class EmptyCognate(AnnalsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No rules in cognate: {name}")


class NoSuitableGroups(AnnalsError):
    def __init__(self, name: str, tags: dict[str, str]):
        self.name = name
        self.tags = dict(tags)
        super().__init__(f"No suitable groups for {name} in context: {self.tags!r}")


class UnboundVariable(AnnalsError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unbound variable: {name}")


class RecursionLimitExceeded(AnnalsError):
    def __init__(self, name: str, limit: int):
        self.name = name
        self.limit = limit
        super().__init__(f"Recursion limit of {limit} exceeded while expanding: {name}")


class InvalidRule(AnnalsError):
    """A rule literal that failed to parse."""

    def __init__(self, expr: str, error: ParseError):
        self.expr = expr
        self.error = error
        super().__init__(expr, error)

    def __str__(self) -> str:
        return describe(self.expr, self.error)


# ============================================================
# Document-format errors
# ============================================================

class GrammarFormatError(AnnalsError):
    pass


# ============================================================
# Diagnostics
# ============================================================

def caret_line(beg: int, end: int) -> str:
    """Return a line with carets under the half-open span [beg, end)."""
    return " " * beg + "^" * max(end - beg, 1)


def describe(expr: str, error: ParseError) -> str:
    """
    Render a parse error against its literal:

        invalid name at 1..14
        <@some binding>
         ^^^^^^^^^^^^^
    """
    lines = [str(error), expr]
    if error.span is not None:
        lines.append(caret_line(error.beg, error.end))
    return "\n".join(lines)
