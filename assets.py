import json
import logging
import os

from config import RAFFLE_ABI

logger = logging.getLogger(__name__)


def _ensure_dir(path):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def update_abi(path, abi=RAFFLE_ABI):
    _ensure_dir(path)
    with open(path, "w") as f:
        json.dump(abi, f)
    logger.info("updated abi file %s", path)


def update_addresses(path, chain_id, address):
    """Add ``address`` under ``chain_id`` in the frontend address book."""
    addresses = {}
    if os.path.exists(path):
        with open(path, "r") as f:
            addresses = json.load(f)

    chain_id = str(chain_id)
    known = addresses.setdefault(chain_id, [])
    if address not in known:
        known.append(address)

    _ensure_dir(path)
    with open(path, "w") as f:
        json.dump(addresses, f)
    logger.info("updated contract addresses file %s", path)
    return addresses
