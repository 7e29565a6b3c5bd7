#!/usr/bin/env python
# scribe.py - rule selection + recursive token evaluation

"""
The expansion engine.

A Scribe owns a name -> Cognate map and turns a cognate name (or an ad-hoc
rule literal) into text:

  generate(name)              select a rule of `name`, evaluate it
  generate_with(name, ctx)    same, under a caller-supplied Context
  expand(text)                parse `text` as a rule and evaluate it
  expand_with(text, ctx)

Selection filters the cognate's groups by tag compatibility with the
context, then picks one rule uniformly across all surviving rules (so a
group's weight is its rule count) and merges that group's tags into the
context.

Evaluation of each token:
  Literal               its text
  NonTerminal           bound value of the name if any, else expand the cognate
  StickyNonTerminal     as NonTerminal, then bind the result in the enclosing frame
  Binding               bound value, UnboundVariable otherwise
  Expression            apply the command to the evaluated inner token
  Range                 random integer in [lower, upper)
  VariableAssignment    "" if already bound, else expand the rule, bind the
                        result in the current frame and emit it

Every cognate expansion runs in its own scope frame; names bound while it
runs are unbound when it returns. The grammar is never written during
generation, so one Scribe can serve concurrent calls that each use their
own Context.
"""
from __future__ import annotations

import logging
import random
import sys
from bisect import bisect_right
from collections.abc import Iterable, Iterator
from itertools import accumulate

from . import state
from . import text
from .context import Context
from .errors import (
    EmptyCognate,
    NoSuitableGroups,
    RecursionLimitExceeded,
    UnboundVariable,
    UnknownCognate,
)
from .grammar import Cognate, Rule
from .parse import (
    Binding,
    Expression,
    Literal,
    NonTerminal,
    Range,
    StickyNonTerminal,
    Token,
    VariableAssignment,
)

__all__ = ["Scribe"]

logger = logging.getLogger(__name__)

# interpreter frames used by one level of non-terminal nesting, and frames
# left free for whatever is already on the caller's stack
_FRAMES_PER_LEVEL = 6
_STACK_RESERVE = 200


def _depth_ceiling() -> int:
    """Deepest nesting the interpreter stack can hold at its current recursion limit."""
    return max(1, (sys.getrecursionlimit() - _STACK_RESERVE) // _FRAMES_PER_LEVEL)


class Scribe:
    def __init__(
        self,
        cognates: Iterable[Cognate] = (),
        *,
        rng: random.Random | None = None,
        max_depth: int = state.DEFAULT_MAX_DEPTH,
    ):
        self.cognates: dict[str, Cognate] = {}
        self.rng = rng
        max_depth = int(max_depth)
        ceiling = _depth_ceiling()
        if max_depth > ceiling:
            logger.warning("max_depth %d does not fit the interpreter stack, using %d", max_depth, ceiling)
            max_depth = ceiling
        self.max_depth = max_depth
        for cog in cognates:
            self.insert_cognate(cog)

    def __repr__(self) -> str:
        return f"Scribe({len(self.cognates)} cognates)"

    # ============================================================
    # Grammar access
    # ============================================================

    def insert_cognate(self, cognate: Cognate) -> None:
        """Insert a Cognate, replacing any existing one with the same name."""
        self.cognates[cognate.name] = cognate

    def cognate(self, name: str) -> Cognate:
        """Return the named Cognate, creating an empty one if needed."""
        if name not in self.cognates:
            self.cognates[name] = Cognate(name)
        return self.cognates[name]

    def get(self, name: str) -> Cognate | None:
        return self.cognates.get(name)

    def names(self) -> list[str]:
        return list(self.cognates)

    def __contains__(self, name: str) -> bool:
        return name in self.cognates

    def __len__(self) -> int:
        return len(self.cognates)

    def __iter__(self) -> Iterator[Cognate]:
        return iter(self.cognates.values())

    # ============================================================
    # Public generation API
    # ============================================================

    def generate(self, name: str) -> str:
        return self.generate_with(name, Context())

    def generate_with(self, name: str, context: Context) -> str:
        """
        Generate from `name` under `context`. Tags merged during the call stay
        on the context; bindings made during the call are unwound.
        """
        depth = context.depth
        try:
            return self._expand_rule(name, context)
        except RecursionError:
            raise self._stack_exhausted(name, context, depth) from None

    def expand(self, literal: str) -> str:
        return self.expand_with(literal, Context())

    def expand_with(self, literal: str, context: Context) -> str:
        """Parse `literal` as a rule (InvalidRule on failure) and evaluate it."""
        rule = Rule(literal)
        depth = context.depth
        context.descend()
        try:
            return self.evaluate(rule.tokens, context)
        except RecursionError:
            raise self._stack_exhausted(literal, context, depth + 1) from None
        finally:
            context.ascend()

    def _stack_exhausted(self, name: str, context: Context, depth: int) -> RecursionLimitExceeded:
        # the interpreter ran out of stack before max_depth was reached;
        # frames whose unwinding was cut short are closed here
        while context.depth > depth:
            context.ascend()
        logger.warning("interpreter stack exhausted below max_depth %d", self.max_depth)
        return RecursionLimitExceeded(name, self.max_depth)

    # ============================================================
    # Rule selection
    # ============================================================

    def _random(self) -> random.Random:
        return self.rng if self.rng is not None else state.get_rng()

    def select_rule(self, name: str, context: Context) -> Rule:
        cognate = self.cognates.get(name)
        if cognate is None:
            raise UnknownCognate(name)
        if cognate.is_empty():
            raise EmptyCognate(name)

        groups = [g for g in cognate.groups if context.accept(g)]
        if not groups:
            raise NoSuitableGroups(name, context.tags)

        # prefix sums over rule counts; empty groups add nothing
        bounds = list(accumulate(len(g.rules) for g in groups))
        total = bounds[-1]
        if total == 0:
            raise EmptyCognate(name)

        index = self._random().randrange(total)
        gi = bisect_right(bounds, index)
        group = groups[gi]
        rule = group.rules[index - (bounds[gi - 1] if gi else 0)]

        context.merge_from_group(group)
        logger.debug("%s: selected %r (%d of %d rules)", name, rule.literal, index + 1, total)
        return rule

    # ============================================================
    # Evaluation
    # ============================================================

    def evaluate(self, tokens: Iterable[Token], context: Context) -> str:
        return "".join([self._evaluate_token(tok, context) for tok in tokens])

    def _expand_rule(self, name: str, context: Context) -> str:
        """Select a rule of `name` and evaluate it inside a fresh scope frame."""
        if context.depth >= self.max_depth:
            raise RecursionLimitExceeded(name, self.max_depth)
        context.descend()
        try:
            rule = self.select_rule(name, context)
            return self.evaluate(rule.tokens, context)
        finally:
            context.ascend()

    def _expand_reference(self, name: str, context: Context) -> str:
        bound = context.get_binding(name)
        if bound is not None:
            return bound
        return self._expand_rule(name, context)

    def _evaluate_token(self, token: Token, context: Context) -> str:
        if isinstance(token, Literal):
            return token.text

        elif isinstance(token, NonTerminal):
            return self._expand_reference(token.name, context)

        elif isinstance(token, StickyNonTerminal):
            bound = context.get_binding(token.name)
            if bound is not None:
                return bound
            value = self._expand_rule(token.name, context)
            # the reference's own frame is closed here, so this lands in the caller's frame
            context.bind(token.name, value)
            logger.debug("sticky %s = %r", token.name, value)
            return value

        elif isinstance(token, Binding):
            bound = context.get_binding(token.name)
            if bound is None:
                raise UnboundVariable(token.name)
            return bound

        elif isinstance(token, Expression):
            inner = self._evaluate_token(token.inner, context)
            return text.apply(token.command, inner)

        elif isinstance(token, Range):
            return str(self._random().randrange(token.lower, token.upper))

        elif isinstance(token, VariableAssignment):
            if context.is_bound(token.name):
                return ""
            value = self._expand_rule(token.rule, context)
            context.bind(token.name, value)
            logger.debug("assign %s = %r", token.name, value)
            return self._evaluate_token(Binding(token.name), context)

        raise TypeError(f"not a token: {token!r}")
