from time import monotonic, sleep, time
from functools import wraps
from pprint import pprint as pp

import click
from eth_abi import decode
from web3 import Web3
from web3.exceptions import ContractLogicError
from web3.middleware import ExtraDataToPOAMiddleware

from config import CHAIN_ID, CHAIN_RPC, PUBLIC_KEY, PRIVATE_KEY, RAFFLE_ABI
from errors import InsufficientFee, NotOpen, RaffleError, TransferFailed, UpkeepNotNeeded


def _selector(signature):
    return Web3.to_hex(Web3.keccak(text=signature)[:4])


CUSTOM_ERRORS = {
    "Raffle__NotEnoughEntranceFee": _selector("Raffle__NotEnoughEntranceFee()"),
    "Raffle__NotOpen": _selector("Raffle__NotOpen()"),
    "Raffle__UpkeepNotNeeded": _selector("Raffle__UpkeepNotNeeded(uint256,uint256,uint256)"),
    "Raffle__TransferFailed": _selector("Raffle__TransferFailed()"),
}


def connect(rpc=CHAIN_RPC):
    w3 = Web3(Web3.HTTPProvider(rpc, request_kwargs={"timeout": 60}))
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


def raffle_contract(w3, address):
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=RAFFLE_ABI)


def timeit(fn):
    @wraps(fn)
    def timed(contract, method, *args, **kwargs):
        click.echo(f"{fn.__name__}ing {method} {' '.join(str(a) for a in args)}".rstrip())
        ts = time()
        res = fn(contract, method, *args, **kwargs)
        tf = time()
        click.echo(f"took {'%2.4f sec' % (tf-ts)}\n")
        return res

    return timed


def translate_revert(error, value=0):
    """Map a contract revert onto the matching RaffleError, or None."""
    data = getattr(error, "data", None)
    if isinstance(data, dict):
        data = data.get("data")
    data = data if isinstance(data, str) else ""
    message = str(error)

    def raised(name):
        return data.startswith(CUSTOM_ERRORS[name]) or name in message

    if raised("Raffle__NotEnoughEntranceFee"):
        return InsufficientFee(value)
    if raised("Raffle__NotOpen"):
        return NotOpen()
    if raised("Raffle__TransferFailed"):
        return TransferFailed(None, None)
    if raised("Raffle__UpkeepNotNeeded"):
        if data.startswith(CUSTOM_ERRORS["Raffle__UpkeepNotNeeded"]) and len(data) > 10:
            balance, num_players, state = decode(["uint256", "uint256", "uint256"], bytes.fromhex(data[10:]))
            return UpkeepNotNeeded(balance, num_players, state)
        return UpkeepNotNeeded(None, None, None)
    return None


def _raise_translated(error, value=0):
    translated = translate_revert(error, value)
    if translated is not None:
        raise translated from error
    raise error


@timeit
def call(contract, method, *args):
    try:
        res = getattr(contract.functions, method)(*args).call()
    except ContractLogicError as e:
        _raise_translated(e)
    click.echo(f"returned value:\n{res}")
    return res


@timeit
def transact(contract, method, *args, w3=None, value=0, gas=int(3 * 1e6), max_fee=None, wait=True, verbose=False):
    w3 = w3 or contract.w3
    fn = getattr(contract.functions, method)(*args)

    # dry run first so reverts surface with their custom error data
    try:
        fn.call({"from": PUBLIC_KEY, "value": value})
    except ContractLogicError as e:
        _raise_translated(e, value)

    max_fee = max_fee or w3.eth.gas_price
    nonce = w3.eth.get_transaction_count(PUBLIC_KEY)
    tx = fn.build_transaction(
        {
            "chainId": CHAIN_ID,
            "from": PUBLIC_KEY,
            "nonce": nonce,
            "value": value,
            "gas": gas,
            "maxFeePerGas": max_fee * 2,
        }
    )

    signed_tx = w3.eth.account.sign_transaction(tx, private_key=PRIVATE_KEY)
    txsh = w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    res = dict(tx=Web3.to_hex(txsh))

    if wait:
        receipt = w3.eth.wait_for_transaction_receipt(txsh)
        res["receipt"] = receipt
        verbose and pp(dict(receipt))
        if receipt["status"] == 0:
            raise RaffleError(f"{method} reverted in transaction {res['tx']}")
    else:
        verbose and click.echo(f"tx created: {res['tx']}")

    return res


def enter_raffle(contract, value=None, **kwargs):
    if value is None:
        value = contract.functions.getEntranceFee().call()
    return transact(contract, "enterRaffle", value=value, **kwargs)


def check_upkeep(contract):
    upkeep_needed, _ = call(contract, "checkUpkeep", b"")
    return upkeep_needed


def perform_upkeep(contract, **kwargs):
    res = transact(contract, "performUpkeep", b"", **kwargs)
    receipt = res.get("receipt")
    if receipt is not None:
        events = contract.events.RequestedRaffleWinner().process_receipt(receipt)
        if events:
            res["request_id"] = events[0]["args"]["requestId"]
    return res


def snapshot(contract):
    """Read the public state of a deployed raffle in one go."""
    functions = contract.functions
    num_players = functions.getNumberOfPlayers().call()
    return dict(
        entrance_fee=functions.getEntranceFee().call(),
        interval=functions.getInterval().call(),
        state=functions.getRaffleState().call(),
        players=[functions.getPlayer(i).call() for i in range(num_players)],
        recent_winner=functions.getRecentWinner().call(),
        latest_timestamp=functions.getLatestTimestamp().call(),
    )


def wait_for_winner(contract, from_block="latest", timeout=300, poll=5, clock=monotonic, sleep=sleep):
    deadline = clock() + timeout
    while True:
        logs = contract.events.WinnerPicked.get_logs(from_block=from_block)
        if logs:
            return logs[-1]["args"]["winner"]
        if clock() >= deadline:
            raise TimeoutError(f"no WinnerPicked event within {timeout} seconds")
        sleep(poll)
