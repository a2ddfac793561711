import logging
import time

from errors import UpkeepNotNeeded

logger = logging.getLogger(__name__)


class Keeper:
    """Polls a raffle and requests a draw whenever upkeep is needed."""

    def __init__(self, raffle, poll_interval=1.0, sleep=time.sleep):
        self.raffle = raffle
        self.poll_interval = poll_interval
        self.sleep = sleep

    def tick(self):
        if not self.raffle.check_upkeep():
            return None
        try:
            return self.raffle.perform_upkeep()
        except UpkeepNotNeeded as e:
            logger.warning("upkeep no longer needed: %s", e)
            return None

    def run(self, ticks):
        requests = []
        for n in range(ticks):
            request_id = self.tick()
            if request_id is not None:
                requests.append(request_id)
            if n < ticks - 1:
                self.sleep(self.poll_interval)
        return requests
