"""
Local randomness coordinator

Issues request ids to consumers and later delivers random words to their
``fulfill_random_words`` callback, the two halves of the VRF round trip.
"""

import itertools
import logging
from collections import namedtuple

from web3 import Web3

from errors import UnknownRequest

logger = logging.getLogger(__name__)

RandomWordsRequest = namedtuple(
    "RandomWordsRequest",
    "request_id key_hash subscription_id confirmations callback_gas_limit num_words consumer",
)


def derive_words(request_id, num_words):
    return [
        int.from_bytes(Web3.solidity_keccak(["uint256", "uint256"], [request_id, i]), "big")
        for i in range(num_words)
    ]


class LocalCoordinator:
    def __init__(self):
        self.requests = {}
        self._ids = itertools.count(1)

    def request_random_words(
        self, key_hash, subscription_id, confirmations, callback_gas_limit, num_words, consumer=None
    ):
        request_id = next(self._ids)
        self.requests[request_id] = RandomWordsRequest(
            request_id, key_hash, subscription_id, confirmations, callback_gas_limit, num_words, consumer
        )
        logger.info("RandomWordsRequested id=%s sub=%s words=%s", request_id, subscription_id, num_words)
        return request_id

    def fulfill_random_words(self, request_id, consumer=None, words=None):
        request = self.requests.get(request_id)
        if request is None:
            raise UnknownRequest(request_id, "nonexistent request")

        consumer = consumer or request.consumer
        if consumer is None:
            raise ValueError(f"request {request_id} has no consumer to deliver to")
        if words is None:
            words = derive_words(request_id, request.num_words)

        result = consumer.fulfill_random_words(request_id, words)
        del self.requests[request_id]
        logger.info("RandomWordsFulfilled id=%s", request_id)
        return result

    def pending(self):
        return sorted(self.requests)
