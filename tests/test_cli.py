import json

import pytest
from click.testing import CliRunner

import cli
from errors import NotOpen


@pytest.fixture
def runner():
    return CliRunner()


def test_simulate_scenario(runner):
    result = runner.invoke(cli.cli, ["simulate", "--players", "3", "--fee", "100", "--interval", "30", "--word", "7"])
    assert result.exit_code == 0, result.output
    assert "RequestedRaffleWinner {'request_id': 1}" in result.output
    assert f"winner {cli.address_for(2)} received 300" in result.output


def test_simulate_with_derived_words(runner):
    result = runner.invoke(cli.cli, ["simulate", "-n", "2"])
    assert result.exit_code == 0, result.output
    assert "received 200000000000000000" in result.output


def test_simulate_without_players(runner):
    result = runner.invoke(cli.cli, ["simulate", "--players", "0"])
    assert result.exit_code != 0
    assert "upkeep not needed" in result.output


def test_chain_commands_need_an_address(runner, monkeypatch):
    monkeypatch.setattr(cli, "CONTRACT_ADDR", "")
    result = runner.invoke(cli.cli, ["state"])
    assert result.exit_code == 2
    assert "CONTRACT_ADDR" in result.output


def test_enter_reports_reverts(runner, monkeypatch):
    def enter_raffle(contract, value=None, verbose=False):
        raise NotOpen()

    monkeypatch.setattr(cli, "deployed_raffle", lambda: object())
    monkeypatch.setattr(cli.chain, "enter_raffle", enter_raffle)
    result = runner.invoke(cli.cli, ["enter"])
    assert result.exit_code == 1
    assert "raffle is not open" in result.output


def test_players(runner, monkeypatch):
    monkeypatch.setattr(cli, "deployed_raffle", lambda: object())
    monkeypatch.setattr(cli.chain, "snapshot", lambda contract: {"players": ["0xa", "0xb"]})
    result = runner.invoke(cli.cli, ["players"])
    assert result.exit_code == 0
    assert result.output.splitlines()[-2:] == ["0xa", "0xb"]


def test_export_frontend_skipped_without_flag(runner, monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "UPDATE_FRONTEND", False)
    abi_path = tmp_path / "abi.json"
    result = runner.invoke(cli.cli, ["export-frontend", "-a", "0xabc", "--abi-path", str(abi_path)])
    assert result.exit_code == 0
    assert "skipping" in result.output
    assert not abi_path.exists()


def test_export_frontend_forced(runner, tmp_path):
    abi_path = tmp_path / "abi.json"
    addresses_path = tmp_path / "contractAddresses.json"
    result = runner.invoke(
        cli.cli,
        [
            "export-frontend",
            "--force",
            "-a",
            "0xabc",
            "--chain-id",
            "4",
            "--abi-path",
            str(abi_path),
            "--addresses-path",
            str(addresses_path),
        ],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(addresses_path.read_text()) == {"4": ["0xabc"]}
    assert abi_path.exists()


def test_simulate_chain_without_raffle_settings(runner):
    result = runner.invoke(cli.cli, ["simulate", "--chain-id", "137"])
    assert result.exit_code == 2
    assert "--chain-id" in result.output
    assert "polygon has no raffle setting" in result.output


def test_simulate_unknown_chain(runner):
    result = runner.invoke(cli.cli, ["simulate", "--chain-id", "5"])
    assert result.exit_code == 2
    assert "no network configured for chain id 5" in result.output
