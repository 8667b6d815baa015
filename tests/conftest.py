# tests/conftest.py
import random

import pytest

from seasonchain.emissions.schedule import EmissionConfig

class FakeTime:
    """Controllable time source"""

    def __init__(self, start: float = 1_000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds

class ScriptedRandom(random.Random):
    """Random whose random() draws come from a script first"""

    def __init__(self, values, seed: int = 0):
        super().__init__(seed)
        self.values = list(values)

    def random(self):
        if self.values:
            return self.values.pop(0)
        return super().random()

    def getrandbits(self, k):
        # Keeps randint on getrandbits so it never eats scripted values
        return super().getrandbits(k)

@pytest.fixture
def fake_time():
    return FakeTime()

@pytest.fixture
def scripted_random():
    return ScriptedRandom

@pytest.fixture
def season_config():
    """The reference 7 day season"""
    return EmissionConfig(
        season_days=7,
        target_block_interval_seconds=10,
        total_emission=210_000_000,
        halving_epochs=4
    )

@pytest.fixture
def short_config():
    """864 blocks of one second, 216 per epoch"""
    return EmissionConfig(
        season_days=0.01,
        target_block_interval_seconds=1,
        total_emission=1_000,
        halving_epochs=4
    )
