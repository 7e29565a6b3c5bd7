# -------------------------------------
# grammar model: Rule, Group, Cognate
# -------------------------------------
"""
Containers built once at load time and only read during generation.

  Rule     one template literal plus its parsed tokens
  Group    a tagged list of Rules
  Cognate  a named list of Groups (one selectable grammar entry)
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .errors import InvalidRule, ParseError
from .parse import Token, parse

__all__ = ["Rule", "Group", "Cognate"]


# ============================================================
# Rule
# ============================================================

@dataclass(frozen=True, init=False)
class Rule:
    literal: str
    tokens: tuple[Token, ...]

    def __init__(self, literal: str):
        try:
            tokens = parse(literal)
        except ParseError as e:
            raise InvalidRule(literal, e) from e
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "tokens", tuple(tokens))

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __str__(self) -> str:
        return self.literal


def _make_rules(literals: Iterable[str]) -> list[Rule]:
    # first invalid literal aborts the whole batch
    return [Rule(lit) for lit in literals]


# ============================================================
# Group
# ============================================================

@dataclass
class Group:
    rules: list[Rule] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
    note: str = ""

    @classmethod
    def from_rules(
        cls,
        literals: Iterable[str],
        tags: dict[str, str] | None = None,
        note: str = "",
    ) -> "Group":
        """Build a Group from rule literals; raises InvalidRule on the first bad one."""
        return cls(_make_rules(literals), dict(tags or {}), note)

    def add_rule(self, literal: str) -> Rule:
        rule = Rule(literal)
        self.rules.append(rule)
        return rule

    def add_rules(self, literals: Iterable[str]) -> None:
        self.rules.extend(_make_rules(literals))

    def set_tag(self, key: str, value: str) -> None:
        self.tags[str(key)] = str(value)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)


# ============================================================
# Cognate
# ============================================================

@dataclass
class Cognate:
    name: str
    groups: list[Group] = field(default_factory=list)

    def add_group(self, tags: dict[str, str] | None = None, note: str = "") -> Group:
        """Append a new empty Group and return it for filling."""
        grp = Group(tags=dict(tags or {}), note=note)
        self.groups.append(grp)
        return grp

    def group_from_rules(
        self,
        literals: Iterable[str],
        tags: dict[str, str] | None = None,
        note: str = "",
    ) -> Group:
        grp = Group.from_rules(literals, tags, note)
        self.groups.append(grp)
        return grp

    def is_empty(self) -> bool:
        return not self.groups

    def rule_count(self) -> int:
        return sum(len(g.rules) for g in self.groups)

    def iter_rules(self) -> Iterator[tuple[Group, Rule]]:
        for grp in self.groups:
            for rule in grp.rules:
                yield grp, rule

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(self.groups)
