import pytest
from web3 import Web3

from errors import UnknownRequest
from oracle import LocalCoordinator, derive_words


def test_request_ids_are_sequential(coordinator):
    ids = [coordinator.request_random_words("0x00", 1, 3, 500000, 1) for _ in range(3)]
    assert ids == [1, 2, 3]
    assert coordinator.pending() == [1, 2, 3]


def test_nonexistent_request(coordinator):
    with pytest.raises(UnknownRequest, match="nonexistent request"):
        coordinator.fulfill_random_words(0)


def test_derived_words_match_abi_encoded_keccak():
    expected = int.from_bytes(Web3.keccak(b"\x00" * 31 + b"\x01" + b"\x00" * 32), "big")
    assert derive_words(1, 2)[0] == expected
    assert len(set(derive_words(1, 2))) == 2


def test_delivers_derived_words_to_consumer():
    delivered = []

    class Consumer:
        def fulfill_random_words(self, request_id, words):
            delivered.append((request_id, words))
            return "done"

    coordinator = LocalCoordinator()
    request_id = coordinator.request_random_words("0x00", 1, 3, 500000, 2, consumer=Consumer())
    assert coordinator.fulfill_random_words(request_id) == "done"
    assert delivered == [(request_id, derive_words(request_id, 2))]
    assert coordinator.pending() == []


def test_failed_delivery_keeps_request_pending(ready_raffle, coordinator):
    request_id = ready_raffle.perform_upkeep()
    with pytest.raises(ValueError):
        coordinator.fulfill_random_words(request_id, words=[])
    assert coordinator.pending() == [request_id]


def test_request_without_consumer_cannot_be_fulfilled(coordinator):
    request_id = coordinator.request_random_words("0x00", 1, 3, 500000, 1)
    with pytest.raises(ValueError):
        coordinator.fulfill_random_words(request_id)


def test_derived_word_selects_winner(ready_raffle, coordinator, players):
    request_id = ready_raffle.perform_upkeep()
    winner = coordinator.fulfill_random_words(request_id)
    assert winner == players[derive_words(request_id, 1)[0] % 3]


def test_failing_winner_subscriber_still_consumes_request(ready_raffle, coordinator, ledger, players):
    def broken(event):
        raise RuntimeError("listener crashed")

    ready_raffle.subscribe("WinnerPicked", broken)
    request_id = ready_raffle.perform_upkeep()

    assert coordinator.fulfill_random_words(request_id, words=[7]) == players[1]
    assert coordinator.pending() == []
    assert ready_raffle.requests == {}
    assert ledger.balance_of(players[1]) == 300
