#!/usr/bin/env python
# parse.py - rule scanner for the annals template language

"""
Turn one rule literal into a flat sequence of tokens.

Scanner output:
  - Literal(text)                   verbatim text, \\< and \\> already unescaped
  - NonTerminal(name)               <name>
  - StickyNonTerminal(name)         <!name>
  - Binding(name)                   <@name>
  - Range(lower, upper)             <#lower-upper>
  - VariableAssignment(name, rule)  <$name:rule>
  - Expression(command, inner)      <(cmd inner)>, inner is any of the forms above

Commands:
  cap | capitalize, low | lowercase, title | titlecase, a | an

Every error carries the half-open span (beg, end) of the offending substring
of the literal, so callers can point a caret at it.
"""
from __future__ import annotations

import re
import typing
from dataclasses import dataclass
from typing import Union

from .errors import (
    EmptyRule,
    InternalError,
    InvalidExpression,
    InvalidName,
    InvalidRange,
    UnbalancedBrackets,
    UnknownCommand,
    ZeroLengthSubst,
)

__all__ = [
    "Command",
    "KEYWORDS",
    "Literal",
    "NonTerminal",
    "StickyNonTerminal",
    "Binding",
    "Expression",
    "Range",
    "VariableAssignment",
    "Token",
    "parse",
    "literal_text",
]


# ============================================================
# Tokens
# ============================================================

Command = typing.Literal["capitalize", "lowercase", "titlecase", "article"]

KEYWORDS: dict[str, Command] = {
    "cap": "capitalize",
    "capitalize": "capitalize",
    "low": "lowercase",
    "lowercase": "lowercase",
    "title": "titlecase",
    "titlecase": "titlecase",
    "a": "article",
    "an": "article",
}


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class NonTerminal:
    name: str


@dataclass(frozen=True)
class StickyNonTerminal:
    name: str


@dataclass(frozen=True)
class Binding:
    name: str


@dataclass(frozen=True)
class Expression:
    command: Command
    inner: "Token"


@dataclass(frozen=True)
class Range:
    lower: int
    upper: int


@dataclass(frozen=True)
class VariableAssignment:
    name: str
    rule: str


Token = Union[Literal, NonTerminal, StickyNonTerminal, Binding, Expression, Range, VariableAssignment]


# ============================================================
# regexes
# ============================================================

_NAME_RE = re.compile(r"[@!#]?[\w-]+")
_ASSIGN_RE = re.compile(r"\$[\w-]+:[\w-]+")
_UINT_RE = re.compile(r"[0-9]+")


# ============================================================
# Substitution bodies
# ============================================================

def _count_unescaped(expr: str, ch: str) -> int:
    return expr.count(ch) - expr.count("\\" + ch)


def _make_literal(expr: str, beg: int, end: int) -> Literal:
    return Literal(expr[beg:end].replace("\\<", "<").replace("\\>", ">"))


def _parse_range(spec: str, beg: int, end: int) -> Range:
    parts = spec.split("-")
    if len(parts) != 2 or not all(_UINT_RE.fullmatch(p) for p in parts):
        raise InvalidRange(beg, end)
    lower, upper = int(parts[0]), int(parts[1])
    if upper <= lower:
        raise InvalidRange(beg, end)
    return Range(lower, upper)


def _parse_assignment(spec: str, beg: int, end: int) -> VariableAssignment:
    if ":" not in spec:
        raise InternalError(beg, end)
    name, rule = spec.split(":", 1)
    return VariableAssignment(name, rule)


def _parse_command(body: str, beg: int, end: int) -> Expression:
    """
    Parse "(cmd inner)" spanning [beg, end). The inner part is validated as
    a substitution body in its own right, so commands nest.
    """
    if len(body) == 2:
        raise ZeroLengthSubst(beg + 1, end)
    if not body.endswith(")"):
        raise InvalidExpression(beg, end)

    inner = body[1:-1]
    space = inner.find(" ")
    if space < 0:
        raise InvalidExpression(beg, end)

    word, rest = inner[:space], inner[space:]
    command = KEYWORDS.get(word)
    if command is None:
        raise UnknownCommand(beg + 1, beg + 1 + len(word))

    stripped = rest.strip()
    ibeg = beg + 1 + space + (len(rest) - len(rest.lstrip()))
    token = _validate_body(stripped, ibeg, ibeg + len(stripped))
    return Expression(command, token)


def _validate_body(body: str, beg: int, end: int) -> Token:
    """Classify the text between '<' and '>' (or inside a command)."""
    if not body:
        raise ZeroLengthSubst(beg, beg + 1)

    sigil = body[0]

    if sigil == "(":
        if body.count("(") != body.count(")"):
            raise InvalidExpression(beg, end)
        return _parse_command(body, beg, end)

    if sigil == "$":
        if not _ASSIGN_RE.fullmatch(body):
            raise InvalidName(beg, end)
        return _parse_assignment(body[1:], beg, end)

    if not _NAME_RE.fullmatch(body):
        raise InvalidName(beg, end)

    if sigil == "@":
        return Binding(body[1:])
    if sigil == "!":
        return StickyNonTerminal(body[1:])
    if sigil == "#":
        return _parse_range(body[1:], beg, end)
    return NonTerminal(body)


# ============================================================
# Scanner
# ============================================================

def parse(expr: str) -> list[Token]:
    """
    Scan a rule literal into tokens.

    Raises a ParseError subclass on malformed input; the literal itself is
    not attached (Rule does that via InvalidRule).
    """
    if not expr:
        raise EmptyRule()

    if _count_unescaped(expr, "<") != _count_unescaped(expr, ">"):
        raise UnbalancedBrackets()

    tokens: list[Token] = []
    in_subst = False
    cbeg = 0
    prev = ""

    for i, ch in enumerate(expr):
        if ch == "<" and prev != "\\" and not in_subst:
            if cbeg != i:
                tokens.append(_make_literal(expr, cbeg, i))
            cbeg = i + 1
            in_subst = True
        elif ch == ">" and prev != "\\":
            if not in_subst:
                raise UnbalancedBrackets(i, i + 1)
            tokens.append(_validate_body(expr[cbeg:i], cbeg, i))
            cbeg = i + 1
            in_subst = False
        prev = ch

    if cbeg < len(expr):
        tokens.append(_make_literal(expr, cbeg, len(expr)))
    return tokens


def literal_text(tokens: list[Token]) -> str | None:
    """Join a Literal-only token sequence back into text; None if any token is not a Literal."""
    if not all(isinstance(t, Literal) for t in tokens):
        return None
    return "".join(t.text for t in tokens)
