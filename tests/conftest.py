import pytest

from oracle import LocalCoordinator
from raffle import Ledger, Raffle

ENTRANCE_FEE = 100
INTERVAL = 30
GAS_LANE = "0xd89b2bf150e3b9e13446986e571fb9cab24b13cea0a43ea20a6049a85cc807cc"


class Clock:
    def __init__(self, now=1_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def coordinator():
    return LocalCoordinator()


@pytest.fixture
def ledger():
    return Ledger()


@pytest.fixture
def raffle(coordinator, clock, ledger):
    return Raffle(coordinator, ENTRANCE_FEE, GAS_LANE, 1, 500000, INTERVAL, clock=clock, payout=ledger.transfer)


@pytest.fixture
def players():
    return ["0x" + f"{n:040x}" for n in range(1, 4)]


@pytest.fixture
def ready_raffle(raffle, clock, players):
    """A raffle with three entrants whose interval has elapsed."""
    for player in players:
        raffle.enter(player, ENTRANCE_FEE)
    clock.advance(INTERVAL + 1)
    return raffle
