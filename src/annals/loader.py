# -------------------------------------
# grammar documents (YAML)
# -------------------------------------
"""
Load and save grammars as YAML.

A grammar document is a list of cognates:

    - name: animal
      groups:
      - tags: { size: big }
        note: optional free text
        rules: [elephant, whale]
      - tags: { size: small }
        rules: [mouse, milk snake]

A mapping with a "cognates" key (mapping of name -> cognate, or a list) is
also accepted, as is a single cognate mapping where a list is expected.

Scalars are read as plain text, never resolved to YAML booleans, numbers
or nulls, so a rule literal or tag value keeps exactly the characters
written in the document.

Rule literals are parsed while loading, so a bad literal surfaces as
InvalidRule. YAML syntax and structural problems raise GrammarFormatError
chained to the underlying error. File access errors propagate unchanged.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .errors import GrammarFormatError
from .grammar import Cognate, Group
from .scribe import Scribe

__all__ = [
    "cognate_from_dict",
    "cognate_to_dict",
    "loads_cognates",
    "load_cognates",
    "loads",
    "load",
    "dumps",
    "dump",
]

logger = logging.getLogger(__name__)


# ============================================================
# dict <-> model
# ============================================================

def _as_text(value: Any, what: str) -> str:
    if isinstance(value, (dict, list)):
        raise GrammarFormatError(f"{what} must be a scalar, got {type(value).__name__}")
    return str(value)


def _group_from_dict(data: Any, where: str) -> Group:
    if not isinstance(data, dict):
        raise GrammarFormatError(f"{where} must be a mapping")

    rules = data.get("rules")
    if not isinstance(rules, list):
        raise GrammarFormatError(f"{where} has no 'rules' list")

    tags = data.get("tags") or {}
    if not isinstance(tags, dict):
        raise GrammarFormatError(f"{where}: 'tags' must be a mapping")

    literals = [_as_text(r, f"{where} rule") for r in rules]
    return Group.from_rules(
        literals,
        {str(k): _as_text(v, f"{where} tag {k!r}") for k, v in tags.items()},
        str(data.get("note") or ""),
    )


def cognate_from_dict(data: Any) -> Cognate:
    """Build a Cognate from its parsed-YAML mapping."""
    if not isinstance(data, dict):
        raise GrammarFormatError(f"cognate must be a mapping, got {type(data).__name__}")
    if "name" not in data:
        raise GrammarFormatError("cognate has no 'name'")

    name = _as_text(data["name"], "cognate name")
    groups = data.get("groups") or []
    if not isinstance(groups, list):
        raise GrammarFormatError(f"cognate {name!r}: 'groups' must be a list")

    cog = Cognate(name)
    for i, grp in enumerate(groups):
        cog.groups.append(_group_from_dict(grp, f"group {i} of cognate {name!r}"))
    return cog


def cognate_to_dict(cognate: Cognate) -> dict[str, Any]:
    groups = []
    for grp in cognate.groups:
        d: dict[str, Any] = {}
        if grp.tags:
            d["tags"] = dict(grp.tags)
        if grp.note:
            d["note"] = grp.note
        d["rules"] = [rule.literal for rule in grp.rules]
        groups.append(d)
    return {"name": cognate.name, "groups": groups}


# ============================================================
# loading
# ============================================================

def _load_yaml(data: str) -> Any:
    try:
        return yaml.load(data, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise GrammarFormatError(f"invalid YAML: {e}") from e


def _cognate_entries(doc: Any) -> list[Any]:
    if doc is None:
        return []
    if isinstance(doc, list):
        return doc
    if isinstance(doc, dict):
        if "cognates" in doc:
            entries = doc["cognates"]
            if isinstance(entries, dict):
                return list(entries.values())
            if isinstance(entries, list):
                return entries
            raise GrammarFormatError("'cognates' must be a mapping or a list")
        return [doc]
    raise GrammarFormatError(f"grammar document must be a list or mapping, got {type(doc).__name__}")


def loads_cognates(data: str) -> list[Cognate]:
    """Parse a YAML string into a list of Cognates."""
    return [cognate_from_dict(entry) for entry in _cognate_entries(_load_yaml(data))]


def load_cognates(path: str | Path) -> list[Cognate]:
    """
    Load a YAML grammar file into a list of Cognates.

    Raises:
        FileNotFoundError: If the file doesn't exist
        GrammarFormatError: If the file is not a valid grammar document
        InvalidRule: If a rule literal does not parse
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        cognates = loads_cognates(f.read())
    logger.info("loaded %d cognates from %s", len(cognates), path)
    return cognates


def _insert_all(cognates: Iterable[Cognate], scribe: Scribe | None) -> Scribe:
    if scribe is None:
        scribe = Scribe()
    for cog in cognates:
        scribe.insert_cognate(cog)
    return scribe


def loads(data: str, scribe: Scribe | None = None) -> Scribe:
    """Parse a YAML string and insert its cognates into `scribe` (a new one by default)."""
    return _insert_all(loads_cognates(data), scribe)


def load(path: str | Path, scribe: Scribe | None = None) -> Scribe:
    """Load a YAML grammar file and insert its cognates into `scribe` (a new one by default)."""
    return _insert_all(load_cognates(path), scribe)


# ============================================================
# saving
# ============================================================

def dumps(source: Scribe | Iterable[Cognate]) -> str:
    """Serialize cognates (or every cognate of a Scribe) as a YAML list."""
    docs = [cognate_to_dict(cog) for cog in source]
    return yaml.safe_dump(docs, sort_keys=False, allow_unicode=True, default_flow_style=False)


def dump(source: Scribe | Iterable[Cognate], path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(dumps(source))
