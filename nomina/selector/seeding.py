"""Seed helpers.

Seeds are strings. Every derived draw uses ``random.Random(seed)``, which
hashes string seeds with SHA-512, so the same seed string gives the same draw
in every process. Sub-seeds are formed by appending a label
(``"<seed>:b3"``, ``"<seed>:retry2"``) so each block and retry gets its own
independent but reproducible stream.
"""

import random


def sub_seed(seed: str | None, label: str | int) -> str | None:
    """Derive a child seed, or None when unseeded."""
    if seed is None:
        return None
    return f"{seed}:{label}"


def seeded_uniform(seed: str | None) -> float:
    """One uniform draw in [0, 1)."""
    if seed is None:
        return random.random()
    return random.Random(seed).random()


def seeded_index(seed: str | None, n: int) -> int:
    """Uniform index in [0, n); n must be positive."""
    if seed is None:
        return random.randrange(n)
    return random.Random(seed).randrange(n)
