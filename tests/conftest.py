import random

import pytest


class SequenceRandom:
    """Stand-in RNG that replays fixed ``random()`` values in a loop."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value

    def choice(self, seq):
        return seq[int(self.random() * len(seq))]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sequence_random():
    return SequenceRandom
