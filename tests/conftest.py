"""Pytest configuration and shared fixtures for leaksim tests."""

import pytest

from leaksim.spec.constants import MAX_EFFECTIVE_BALANCE
from leaksim.spec.params import LeakParams
from leaksim.spec.types import State


class FixedRandom:
    """Stand-in for random.Random that replays a fixed sequence of draws."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


class NoDrawRandom:
    """Random source that fails the test if a draw is made."""

    def random(self) -> float:
        raise AssertionError("unexpected random draw")


@pytest.fixture
def fixed_random():
    """Factory for random sources replaying the given draws."""
    return FixedRandom


@pytest.fixture
def no_draw_random():
    return NoDrawRandom()


@pytest.fixture
def params():
    """Mainnet parameters."""
    return LeakParams()


@pytest.fixture
def deterministic_params():
    """Mainnet parameters with the attestation capacity draw disabled."""
    return LeakParams(model_attestation_capacity=False)


@pytest.fixture
def make_state(params):
    """Factory for states with a given number of online and offline validators."""

    def _make_state(
        participating: int = 0,
        offline: int = 0,
        balance: int = MAX_EFFECTIVE_BALANCE,
        params: LeakParams = params,
        seed: int = 0,
    ) -> State:
        state = State(params=params, seed=seed)
        for _ in range(participating):
            state.add_validator(True, balance)
        for _ in range(offline):
            state.add_validator(False, balance)
        return state

    return _make_state
