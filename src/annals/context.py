# -------------------------------------
# evaluation context
# -------------------------------------
"""
Mutable state threaded through one generation call.

  tags         accumulate for the whole call; every selected Group merges
               its tags in and they are never removed
  bindings     flat name -> text table
  scope_stack  one list of bound names per open non-terminal expansion;
               ascend() unbinds everything recorded in the top frame
"""
from __future__ import annotations

from .grammar import Group

__all__ = ["Context"]


class Context:
    def __init__(
        self,
        tags: dict[str, str] | None = None,
        bindings: dict[str, str] | None = None,
    ):
        self.tags: dict[str, str] = dict(tags or {})
        self.bindings: dict[str, str] = dict(bindings or {})
        self.scope_stack: list[list[str]] = []

    def __repr__(self) -> str:
        return f"Context(tags={self.tags!r}, bindings={self.bindings!r}, depth={self.depth})"

    # -------------------------------------
    # tags
    # -------------------------------------

    def set(self, tag: str, value: str) -> None:
        self.tags[str(tag)] = str(value)

    def merge_from_group(self, group: Group) -> None:
        for key, value in group.tags.items():
            self.tags[key] = value

    def accept(self, group: Group) -> bool:
        """
        True if every tag key present on both sides has the same value.
        Keys on one side only do not constrain, so an empty context or an
        untagged group always matches.
        """
        return all(
            group.tags[key] == value
            for key, value in self.tags.items()
            if key in group.tags
        )

    # -------------------------------------
    # bindings
    # -------------------------------------

    def bind(self, name: str, value: str) -> None:
        self.bindings[name] = value
        if self.scope_stack:
            self.scope_stack[-1].append(name)

    def unbind(self, name: str) -> None:
        self.bindings.pop(name, None)

    def get_binding(self, name: str) -> str | None:
        return self.bindings.get(name)

    def is_bound(self, name: str) -> bool:
        return name in self.bindings

    # -------------------------------------
    # scopes
    # -------------------------------------

    @property
    def depth(self) -> int:
        return len(self.scope_stack)

    def descend(self) -> None:
        self.scope_stack.append([])

    def ascend(self) -> None:
        if not self.scope_stack:
            return
        for name in self.scope_stack.pop():
            self.unbind(name)

    def copy(self) -> "Context":
        """Independent copy of tags and bindings, with no open frames."""
        return Context(self.tags, self.bindings)
