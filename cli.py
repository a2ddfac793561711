#! .env/bin/python

import logging

import click

from functools import wraps
from pprint import pprint as pp

import chain
from assets import update_abi, update_addresses
from config import (
    CHAIN_ID,
    CONTRACT_ADDR,
    FRONTEND_ABI_FILE,
    FRONTEND_ADDRESSES_FILE,
    UPDATE_FRONTEND,
    network_config,
)
from errors import RaffleError
from oracle import LocalCoordinator
from raffle import EVENTS, Ledger, Raffle
from upkeep import Keeper


def raffle_errors(fn):
    @wraps(fn)
    def wrapped(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except RaffleError as e:
            raise click.ClickException(str(e)) from e

    return wrapped


def address_for(n):
    return "0x" + f"{n:040x}"


def deployed_raffle():
    if not CONTRACT_ADDR:
        raise click.UsageError("Set CONTRACT_ADDR to the deployed raffle address")
    return chain.raffle_contract(chain.connect(), CONTRACT_ADDR)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log raffle internals")
def cli(verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    click.echo("raffling!")


@cli.command()
@click.option("--players", "-n", type=int, default=3, help="Number of entrants")
@click.option("--fee", type=int, default=None, help="Entrance fee, defaults to the network's")
@click.option("--interval", type=int, default=None, help="Draw interval in seconds, defaults to the network's")
@click.option("--word", type=int, default=None, help="Random word to fulfill with, derived from the request id if omitted")
@click.option("--chain-id", type=int, default=1337, help="Network whose settings seed the raffle")
@raffle_errors
def simulate(players, fee, interval, word, chain_id):
    """Run one full raffle cycle in memory."""
    try:
        network = dict(network_config(chain_id))
    except KeyError as e:
        raise click.BadParameter(e.args[0], param_hint="--chain-id") from e
    if fee is not None:
        network["entrance_fee"] = fee
    if interval is not None:
        network["interval"] = interval

    now = [0]
    coordinator = LocalCoordinator()
    ledger = Ledger()
    try:
        raffle = Raffle.from_network(coordinator, network, clock=lambda: now[0], payout=ledger.transfer)
    except KeyError as e:
        raise click.BadParameter(
            f"{network['name']} has no raffle setting {e.args[0]!r}",
            param_hint="--chain-id",
        ) from e
    for event in EVENTS:
        raffle.subscribe(event, lambda payload, name=event: click.echo(f"{name} {dict(payload._asdict())}"))

    entrants = [address_for(i) for i in range(1, players + 1)]
    for player in entrants:
        raffle.enter(player, raffle.get_entrance_fee())

    now[0] += raffle.get_interval() + 1
    request_id = Keeper(raffle).tick()
    if request_id is None:
        raise click.ClickException("upkeep not needed, nobody entered")

    winner = coordinator.fulfill_random_words(request_id, words=None if word is None else [word])
    click.echo(f"winner {winner} received {ledger.balance_of(winner)}")


@cli.command()
@click.option("--value", type=int, default=None, help="Amount to pay, defaults to the entrance fee")
@click.option("--verbose", "-v", type=bool, default=False, help="Show transactions details")
@raffle_errors
def enter(value, verbose):
    chain.enter_raffle(deployed_raffle(), value=value, verbose=verbose)


@cli.command()
@raffle_errors
def check_upkeep():
    chain.check_upkeep(deployed_raffle())


@cli.command()
@click.option("--verbose", "-v", type=bool, default=False, help="Show transactions details")
@raffle_errors
def perform_upkeep(verbose):
    res = chain.perform_upkeep(deployed_raffle(), verbose=verbose)
    if "request_id" in res:
        click.echo(f"request id: {res['request_id']}")


@cli.command()
def state():
    pp(chain.snapshot(deployed_raffle()))


@cli.command()
def players():
    for player in chain.snapshot(deployed_raffle())["players"]:
        click.echo(player)


@cli.command()
def winner():
    chain.call(deployed_raffle(), "getRecentWinner")


@cli.command()
@click.option("--timeout", type=int, default=300, help="Seconds to wait for WinnerPicked")
@click.option("--poll", type=int, default=5, help="Seconds between log queries")
def wait_winner(timeout, poll):
    contract = deployed_raffle()
    try:
        winner = chain.wait_for_winner(contract, from_block=contract.w3.eth.block_number, timeout=timeout, poll=poll)
    except TimeoutError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Winner picked!! {winner}")


@cli.command()
@click.option("--address", "-a", type=str, default=CONTRACT_ADDR, help="Deployed raffle address")
@click.option("--chain-id", type=int, default=CHAIN_ID, help="Chain the raffle is deployed on")
@click.option("--abi-path", type=click.Path(), default=FRONTEND_ABI_FILE)
@click.option("--addresses-path", type=click.Path(), default=FRONTEND_ADDRESSES_FILE)
@click.option("--force", "-f", is_flag=True, default=False, help="Export even when UPDATE_FRONTEND is not set")
def export_frontend(address, chain_id, abi_path, addresses_path, force):
    if not (UPDATE_FRONTEND or force):
        click.echo("UPDATE_FRONTEND is not set, skipping")
        return
    if not address:
        raise click.UsageError("Provide the raffle address")

    click.echo("Generating FE assets...")
    update_addresses(addresses_path, chain_id, address)
    update_abi(abi_path)
    click.echo("Updated current abi and contract addresses files")


if __name__ == "__main__":
    cli()
