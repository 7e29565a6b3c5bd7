# -------------------------------------
# text transforms for (cmd ...) expressions
# -------------------------------------
"""
Pure str -> str primitives applied by <(cmd ...)> expressions.
Every transform maps the empty string to the empty string.
"""
import re
from collections.abc import Callable

VOWELS = frozenset("aeiouAEIOU")

_WORD_RE = re.compile(r"\S+")


def capitalize(s: str) -> str:
    """Uppercase the first character only; the rest is left alone."""
    return s[:1].upper() + s[1:]


def lowercase(s: str) -> str:
    return s.lower()


def titlecase(s: str) -> str:
    """Capitalize the first character of every whitespace-separated word."""
    return _WORD_RE.sub(lambda m: capitalize(m.group(0)), s)


def indefinite_article(s: str) -> str:
    """Prefix with "an " before a vowel, "a " otherwise."""
    if not s:
        return s
    return ("an " if s[0] in VOWELS else "a ") + s


# ============================================================
# Command registry
# ============================================================

COMMANDS: dict[str, Callable[[str], str]] = {
    "capitalize":   capitalize,
    "lowercase":    lowercase,
    "titlecase":    titlecase,
    "article":      indefinite_article,
}


def apply(command: str, s: str) -> str:
    fn = COMMANDS[command]
    return fn(s)
