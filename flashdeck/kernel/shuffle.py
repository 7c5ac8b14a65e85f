"""
Flashdeck Kernel — Shuffle

In-place Fisher–Yates. O(n) swaps, O(1) extra space.
"""

from __future__ import annotations

import random
from collections.abc import MutableSequence
from typing import TypeVar

T = TypeVar("T")


def shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """
    Uniformly permute `items` in place and return it.

    Pass `rng` for reproducible order; defaults to the module-level generator.
    Sequences of length 0 or 1 are returned untouched.
    """
    randrange = rng.randrange if rng is not None else random.randrange
    for i in range(len(items) - 1, 0, -1):
        j = randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items
