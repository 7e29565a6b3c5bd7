# -------------------------------------
# annals shared state
# -------------------------------------
"""
Shared state for the engine:
- RNG: default source of randomness for every Scribe without its own
- DEFAULT_MAX_DEPTH: nesting limit for non-terminal expansion
"""
import random
import secrets

DEFAULT_MAX_DEPTH = 100


# ============================================================
# Random number generator
# ============================================================

_ENTROPY_WORDS = ("auto", "rand", "random", "entropy")

_DEFAULT_SEED = secrets.randbits(128)
RNG = random.Random(_DEFAULT_SEED)


def seed(x: int | str | None = None) -> int:
    """
    Reseed the RNG shared by every Scribe built without `rng=`.

    A Scribe given its own `random.Random` never reads the shared RNG, so
    seeding here does not change its output. The CLI's --seed builds such a
    private generator rather than calling this.

    Args:
        x: an int (or a string holding one) for reproducible output;
           None or one of "auto", "rand", "random", "entropy" draws a fresh
           128-bit seed from the OS.

    Returns:
        The seed now in effect, so a run can be replayed.
    """
    if x is None or str(x).lower() in _ENTROPY_WORDS:
        x = secrets.randbits(128)
    s = int(x)
    RNG.seed(s)
    return s


def get_rng() -> random.Random:
    """The shared RNG; Scribe falls back to it on every draw when it has no rng of its own."""
    return RNG
