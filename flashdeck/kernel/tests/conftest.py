"""
Flashdeck kernel test configuration.

Shared fixtures: a seeded random source so shuffles are reproducible,
and a small tagged deck.
"""

import random

import pytest

from flashdeck.kernel.actions import add_question
from flashdeck.kernel.store import replay


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def tagged_state():
    return replay([
        add_question("1+1", "2", ["math"]),
        add_question("capital of France", "Paris", ["geo"]),
        add_question("2*3", "6", ["math", "easy"]),
    ])
