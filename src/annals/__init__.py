# -------------------------------------
# annals: procedural text generation from tagged rule grammars
# -------------------------------------
"""
A grammar is a set of named cognates; each cognate holds tagged groups of
rule templates such as "<@speaker>: look at <(an animal)>!". A Scribe expands
a cognate into text, filtering groups by the tags accumulated so far.

    from annals import Scribe, Context, loader

    scribe = loader.loads(YAML_TEXT)
    ctx = Context()
    ctx.bind("speaker", "Bob")
    print(scribe.generate_with("expression", ctx))
"""

from .context import Context
from .errors import (
    AnnalsError,
    ParseError,
    EmptyRule,
    InternalError,
    InvalidExpression,
    InvalidName,
    InvalidRange,
    UnbalancedBrackets,
    UnknownCommand,
    ZeroLengthSubst,
    UnknownCognate,
    EmptyCognate,
    NoSuitableGroups,
    UnboundVariable,
    RecursionLimitExceeded,
    InvalidRule,
    GrammarFormatError,
)
from .grammar import Cognate, Group, Rule
from .parse import parse
from .scribe import Scribe
from .state import seed
from . import loader

__all__ = [
    "Context",
    "Cognate",
    "Group",
    "Rule",
    "Scribe",
    "parse",
    "seed",
    "loader",
    # errors
    "AnnalsError",
    "ParseError",
    "EmptyRule",
    "InternalError",
    "InvalidExpression",
    "InvalidName",
    "InvalidRange",
    "UnbalancedBrackets",
    "UnknownCommand",
    "ZeroLengthSubst",
    "UnknownCognate",
    "EmptyCognate",
    "NoSuitableGroups",
    "UnboundVariable",
    "RecursionLimitExceeded",
    "InvalidRule",
    "GrammarFormatError",
]
