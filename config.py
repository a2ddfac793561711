import os


DEVELOPMENT_CHAINS = ["hardhat", "localhost"]

NETWORKS = {
	4: {
		"name": "rinkeby",
		"block_confirmations": 6,
		"vrf_coordinator": "0x6168499c0cFfCaCD319c818142124B7A15E857ab",
		"entrance_fee": 100000000000000000,
		"gas_lane": "0xd89b2bf150e3b9e13446986e571fb9cab24b13cea0a43ea20a6049a85cc807cc",
		"subscription_id": 21228,
		"callback_gas_limit": 500000,
		"interval": 30,
	},
	137: {
		"name": "polygon",
		"block_confirmations": 6,
	},
	1337: {
		"name": "hardhat",
		"block_confirmations": 0,
		"entrance_fee": 100000000000000000,
		"gas_lane": "0xd89b2bf150e3b9e13446986e571fb9cab24b13cea0a43ea20a6049a85cc807cc",
		"subscription_id": 1,
		"callback_gas_limit": 500000,
		"interval": 30,
	},
}

CHAIN_ID = int(os.environ.get("CHAIN_ID", "4"))
CHAIN_RPC = os.environ.get("CHAIN_RPC", "http://127.0.0.1:8545")

PUBLIC_KEY = os.environ.get("PUBLIC_KEY", "")
PRIVATE_KEY = os.environ.get("PRIVATE_KEY", "")

CONTRACT_ADDR = os.environ.get("CONTRACT_ADDR", "")

UPDATE_FRONTEND = os.environ.get("UPDATE_FRONTEND", "false").lower() == "true"
FRONTEND_ADDRESSES_FILE = "../raffle-nextjs/contracts/contractAddresses.json"
FRONTEND_ABI_FILE = "../raffle-nextjs/contracts/abi.json"

RAFFLE_ABI = [
	{
		"inputs": [],
		"name": "Raffle__NotEnoughEntranceFee",
		"type": "error"
	},
	{
		"inputs": [],
		"name": "Raffle__NotOpen",
		"type": "error"
	},
	{
		"inputs": [],
		"name": "Raffle__TransferFailed",
		"type": "error"
	},
	{
		"inputs": [
			{
				"internalType": "uint256",
				"name": "currentBalance",
				"type": "uint256"
			},
			{
				"internalType": "uint256",
				"name": "numPlayers",
				"type": "uint256"
			},
			{
				"internalType": "uint256",
				"name": "raffleState",
				"type": "uint256"
			}
		],
		"name": "Raffle__UpkeepNotNeeded",
		"type": "error"
	},
	{
		"anonymous": False,
		"inputs": [
			{
				"indexed": True,
				"internalType": "address",
				"name": "player",
				"type": "address"
			}
		],
		"name": "RaffleEnter",
		"type": "event"
	},
	{
		"anonymous": False,
		"inputs": [
			{
				"indexed": True,
				"internalType": "uint256",
				"name": "requestId",
				"type": "uint256"
			}
		],
		"name": "RequestedRaffleWinner",
		"type": "event"
	},
	{
		"anonymous": False,
		"inputs": [
			{
				"indexed": True,
				"internalType": "address",
				"name": "winner",
				"type": "address"
			}
		],
		"name": "WinnerPicked",
		"type": "event"
	},
	{
		"inputs": [
			{
				"internalType": "bytes",
				"name": "",
				"type": "bytes"
			}
		],
		"name": "checkUpkeep",
		"outputs": [
			{
				"internalType": "bool",
				"name": "upKeepNeeded",
				"type": "bool"
			},
			{
				"internalType": "bytes",
				"name": "",
				"type": "bytes"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "enterRaffle",
		"outputs": [],
		"stateMutability": "payable",
		"type": "function"
	},
	{
		"inputs": [
			{
				"internalType": "bytes",
				"name": "",
				"type": "bytes"
			}
		],
		"name": "performUpkeep",
		"outputs": [],
		"stateMutability": "nonpayable",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "getEntranceFee",
		"outputs": [
			{
				"internalType": "uint256",
				"name": "",
				"type": "uint256"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "getInterval",
		"outputs": [
			{
				"internalType": "uint256",
				"name": "",
				"type": "uint256"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "getLatestTimestamp",
		"outputs": [
			{
				"internalType": "uint256",
				"name": "",
				"type": "uint256"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "getNumberOfPlayers",
		"outputs": [
			{
				"internalType": "uint256",
				"name": "",
				"type": "uint256"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [
			{
				"internalType": "uint256",
				"name": "index",
				"type": "uint256"
			}
		],
		"name": "getPlayer",
		"outputs": [
			{
				"internalType": "address",
				"name": "",
				"type": "address"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "getRaffleState",
		"outputs": [
			{
				"internalType": "enum Raffle.RaffleState",
				"name": "",
				"type": "uint8"
			}
		],
		"stateMutability": "view",
		"type": "function"
	},
	{
		"inputs": [],
		"name": "getRecentWinner",
		"outputs": [
			{
				"internalType": "address",
				"name": "",
				"type": "address"
			}
		],
		"stateMutability": "view",
		"type": "function"
	}
]


def network_config(chain_id):
    try:
        return NETWORKS[chain_id]
    except KeyError:
        raise KeyError(f"no network configured for chain id {chain_id}") from None


try:
    from local_config import *  # noqa: F401,F403
except ImportError:
    pass
