"""Deterministic random number generation for Wasteland.

Two sources of randomness are used by the core, and both are passed around as
explicit values; nothing in the package keeps a module-level generator.

* :class:`LcgStream` drives world generation.  It is a 32-bit linear
  congruential generator, so a world seed maps to the same stream of draws on
  every platform and every run.  This is what makes world generation
  replayable for admin regeneration audits.
* :func:`make_rng` returns a :class:`random.Random` seeded from a seed string
  built with :func:`generate_seed`.  The AI engine receives one of these per
  faction per turn, so a turn can be replayed exactly.

Examples:
    >>> stream = LcgStream(42)
    >>> 0.0 <= stream.next_float() < 1.0
    True

    >>> rng = make_rng(generate_seed(42, 3, "ai-tribe-1"))
    >>> rng.random() == make_rng("42:3:ai-tribe-1").random()
    True
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

T = TypeVar("T")

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


class LcgStream:
    """Seeded linear-congruential stream of floats in ``[0, 1)``.

    The state update is ``state = (state * 1664525 + 1013904223) mod 2**32``
    and every draw returns ``state / 2**32`` after updating.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) % LCG_MODULUS

    @property
    def state(self) -> int:
        return self._state

    def next_float(self) -> float:
        """Advance the stream and return a float in ``[0, 1)``."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def next_int(self, n: int) -> int:
        """Return an integer uniformly drawn from ``[0, n)``.

        Raises:
            ValueError: If n is not positive
        """
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return int(self.next_float() * n)

    def choice(self, options: Sequence[T]) -> T:
        """Choose one element of ``options``.

        Raises:
            ValueError: If options is empty
        """
        if not options:
            raise ValueError("options cannot be empty")
        return options[self.next_int(len(options))]

    def weighted_choice(self, weighted: Sequence[tuple[T, float]]) -> T:
        """Choose an option with probability proportional to its weight.

        Exactly one draw is consumed.  Options with a zero weight are never
        chosen unless every weight is zero, in which case the choice is
        uniform.

        Raises:
            ValueError: If weighted is empty or contains a negative weight
        """
        if not weighted:
            raise ValueError("weighted options cannot be empty")
        if any(weight < 0 for _, weight in weighted):
            raise ValueError("weights must be non-negative")

        total = sum(weight for _, weight in weighted)
        roll = self.next_float()
        if total <= 0:
            return weighted[int(roll * len(weighted))][0]

        target = roll * total
        cumulative = 0.0
        for option, weight in weighted:
            cumulative += weight
            if target < cumulative:
                return option
        # Floating point rounding can leave target == total
        for option, weight in reversed(weighted):
            if weight > 0:
                return option
        return weighted[-1][0]  # pragma: no cover - unreachable with total > 0

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Shuffle ``items`` in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(i + 1)
            items[i], items[j] = items[j], items[i]


def generate_seed(*parts: object) -> str:
    """Generate a deterministic seed string from game state components.

    Format: the parts joined with ``":"``.

    Examples:
        >>> generate_seed(42, 7, "ai-tribe-1")
        '42:7:ai-tribe-1'

    Raises:
        ValueError: If no parts are given
    """
    if not parts:
        raise ValueError("at least one seed component is required")
    return ":".join(str(part) for part in parts)


def _seed_to_int(seed: str) -> int:
    """Convert a seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def make_rng(seed: str) -> random.Random:
    """Return a ``random.Random`` whose sequence depends only on ``seed``."""
    return random.Random(_seed_to_int(seed))
