import pytest


class ScriptedRandomizer:
    """Randomizer double returning pre-scripted draws; an exhausted queue falls back to a default."""

    def __init__(self, doubles=(), booleans=(), ints=(), default_double=0.99):
        self.doubles = list(doubles)
        self.booleans = list(booleans)
        self.ints = list(ints)
        self.default_double = default_double
        self.int_bounds = []

    def next_double(self):
        return self.doubles.pop(0) if self.doubles else self.default_double

    def next_boolean(self):
        return self.booleans.pop(0) if self.booleans else False

    def next_int(self, bound):
        self.int_bounds.append(bound)
        value = self.ints.pop(0) if self.ints else 0
        assert 0 <= value < bound
        return value


@pytest.fixture
def scripted_rng():
    return ScriptedRandomizer
