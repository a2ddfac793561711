from unittest.mock import MagicMock

from errors import UpkeepNotNeeded
from raffle import RaffleState
from upkeep import Keeper


def test_tick_does_nothing_when_not_needed(raffle):
    assert Keeper(raffle).tick() is None
    assert raffle.get_raffle_state() == RaffleState.OPEN


def test_tick_requests_draw(ready_raffle):
    assert Keeper(ready_raffle).tick() == 1
    assert ready_raffle.get_raffle_state() == RaffleState.CALCULATING


def test_tick_tolerates_lost_race():
    raffle = MagicMock()
    raffle.check_upkeep.return_value = True
    raffle.perform_upkeep.side_effect = UpkeepNotNeeded(0, 0, RaffleState.CALCULATING)
    assert Keeper(raffle).tick() is None


def test_run_polls_and_sleeps_between_ticks(ready_raffle):
    sleeps = []
    keeper = Keeper(ready_raffle, poll_interval=2.5, sleep=sleeps.append)
    assert keeper.run(3) == [1]
    assert sleeps == [2.5, 2.5]
