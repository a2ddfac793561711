"""
Raffle lifecycle

An in-process model of the Raffle contract as its callers observe it:
players enter by paying the entrance fee, an upkeep agent asks whether a
draw is due and requests randomness, and the coordinator's callback picks
the winner, pays out the pot and reopens the raffle.
"""

import logging
import time
from collections import defaultdict, namedtuple
from enum import IntEnum
from threading import RLock

from errors import InsufficientFee, NotOpen, TransferFailed, UnknownRequest, UpkeepNotNeeded

logger = logging.getLogger(__name__)

REQUEST_CONFIRMATIONS = 3
NUM_WORDS = 1

RaffleEnter = namedtuple("RaffleEnter", "player")
RequestedRaffleWinner = namedtuple("RequestedRaffleWinner", "request_id")
WinnerPicked = namedtuple("WinnerPicked", "winner amount")
DrawRequest = namedtuple("DrawRequest", "request_id raffle")

EVENTS = ("RaffleEnter", "RequestedRaffleWinner", "WinnerPicked")


class RaffleState(IntEnum):
    OPEN = 0
    CALCULATING = 1


class Ledger:
    """Balances credited by raffle payouts."""

    def __init__(self):
        self.balances = defaultdict(int)

    def transfer(self, to, amount):
        self.balances[to] += amount
        return True

    def balance_of(self, address):
        return self.balances[address]


class Raffle:
    def __init__(
        self,
        coordinator,
        entrance_fee,
        gas_lane,
        subscription_id,
        callback_gas_limit,
        interval,
        clock=time.time,
        payout=None,
    ):
        self.coordinator = coordinator
        self.entrance_fee = entrance_fee
        self.gas_lane = gas_lane
        self.subscription_id = subscription_id
        self.callback_gas_limit = callback_gas_limit
        self.interval = interval
        self.clock = clock
        self.ledger = Ledger()
        self.payout = payout or self.ledger.transfer

        self.state = RaffleState.OPEN
        self.players = []
        self.balance = 0
        self.last_timestamp = clock()
        self.recent_winner = None
        self.requests = {}

        self._lock = RLock()
        self._subscribers = defaultdict(list)

    @classmethod
    def from_network(cls, coordinator, network, **kwargs):
        """Build a raffle from a ``config.NETWORKS`` entry."""
        return cls(
            coordinator,
            network["entrance_fee"],
            network["gas_lane"],
            network["subscription_id"],
            network["callback_gas_limit"],
            network["interval"],
            **kwargs,
        )

    # notifications

    def subscribe(self, event, callback):
        if event not in EVENTS:
            raise ValueError(f"unknown event {event!r}")
        self._subscribers[event].append(callback)

    def unsubscribe(self, event, callback):
        self._subscribers[event].remove(callback)

    def once(self, event, callback):
        def _once(payload):
            self.unsubscribe(event, _once)
            callback(payload)

        self.subscribe(event, _once)

    def _emit(self, event, payload):
        logger.debug("%s %s", event, payload)
        for callback in list(self._subscribers[event]):
            try:
                callback(payload)
            except Exception:
                logger.exception("%s subscriber %r failed", event, callback)

    # transactions

    def enter(self, player, payment):
        with self._lock:
            if self.state != RaffleState.OPEN:
                raise NotOpen()
            if payment < self.entrance_fee:
                raise InsufficientFee(payment, self.entrance_fee)
            self.players.append(player)
            self.balance += payment
            logger.info("%s entered the raffle (%d players)", player, len(self.players))
            self._emit("RaffleEnter", RaffleEnter(player))

    def check_upkeep(self):
        with self._lock:
            is_open = self.state == RaffleState.OPEN
            time_passed = (self.clock() - self.last_timestamp) > self.interval
            return is_open and time_passed and len(self.players) > 0 and self.balance > 0

    def perform_upkeep(self):
        with self._lock:
            if not self.check_upkeep():
                raise UpkeepNotNeeded(self.balance, len(self.players), self.state)
            request_id = self.coordinator.request_random_words(
                self.gas_lane,
                self.subscription_id,
                REQUEST_CONFIRMATIONS,
                self.callback_gas_limit,
                NUM_WORDS,
                consumer=self,
            )
            self.state = RaffleState.CALCULATING
            self.requests[request_id] = DrawRequest(request_id, self)
            logger.info("requested raffle winner, request id %s", request_id)
            self._emit("RequestedRaffleWinner", RequestedRaffleWinner(request_id))
            return request_id

    def fulfill_random_words(self, request_id, random_words):
        with self._lock:
            if request_id not in self.requests:
                raise UnknownRequest(request_id)
            if not random_words:
                raise ValueError("fulfillment carries no random words")

            winner = self.players[random_words[0] % len(self.players)]
            amount = self.balance
            try:
                sent = self.payout(winner, amount)
            except Exception as e:
                raise TransferFailed(winner, amount) from e
            if not sent:
                raise TransferFailed(winner, amount)

            del self.requests[request_id]
            self.recent_winner = winner
            self.players = []
            self.balance = 0
            self.last_timestamp = self.clock()
            self.state = RaffleState.OPEN
            logger.info("winner picked: %s won %s", winner, amount)
            self._emit("WinnerPicked", WinnerPicked(winner, amount))
            return winner

    # getters

    def get_player(self, index):
        if index < 0:
            raise IndexError(index)
        return self.players[index]

    def get_number_of_players(self):
        return len(self.players)

    def get_raffle_state(self):
        return self.state

    def get_recent_winner(self):
        return self.recent_winner

    def get_latest_timestamp(self):
        return self.last_timestamp

    def get_balance(self):
        return self.balance

    def get_entrance_fee(self):
        return self.entrance_fee

    def get_interval(self):
        return self.interval

    def get_request_confirmations(self):
        return REQUEST_CONFIRMATIONS

    def get_num_words(self):
        return NUM_WORDS
